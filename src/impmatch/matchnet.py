# -----------------------------------------------------------------------------
#
# This file is part of the ImpMatch package.
# Copyright (C) 2025-2026 ImpMatch contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License version 3 as
# published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# -----------------------------------------------------------------------------

"""
Matching network registry.
It maps topology names to matchers and provides a pure function per topology.
"""

from . import _matchlumpel as lumpel
from . import _matchtl as tl
from .matchdata import ImpedanceSpec, StubSpacing, Topology

__all__ = ['matchers', 'make_matcher', 'match', 'l_network', 'tee_network',
           'pi_network', 'single_stub', 'balanced_stub', 'double_stub']

matchers = {
    'lnet:le': lumpel.LNetLE,
    'teenet:le': lumpel.TeeNetLE,
    'pinet:le': lumpel.PiNetLE,
    'stub:single': tl.SingleStubTL,
    'stub:balanced': tl.BalancedStubTL,
    'stub:double': tl.DoubleStubTL
}


def make_matcher(name):
    """
    Make a matcher of a requested topology.

    Parameters
    ----------
    name : str or Topology
        The name of a topology. Available topologies:
        'lnet:le' - an L network with lumped elements.
        'teenet:le' - a Tee network with lumped elements.
        'pinet:le' - a Pi network with lumped elements.
        'stub:single' - a single shunt stub.
        'stub:balanced' - a balanced (double parallel) shunt stub.
        'stub:double' - two shunt stubs separated by a line.

    Returns
    -------
    matcher : Matcher
        A new matcher object with default options.
    """
    if isinstance(name, Topology):
        name = name.value
    if not isinstance(name, str):
        raise TypeError("Unexpected topology name type: {0}".format(type(name)))
    MatcherClass = matchers.get(name)
    if MatcherClass is None:
        raise ValueError("Unknown topology name: {0}".format(name))
    return MatcherClass()
    # The end of "make_matcher" function.


def match(spec, topology, **kwargs):
    """
    Solve a matching request with a certain topology.

    Parameters
    ----------
    spec : ImpedanceSpec
        A matching request.
    topology : str or Topology
        A topology name, see "make_matcher".
    kwargs : dict
        Options of the topology, e.g. "q" or "spacing".

    Returns
    -------
    result : MatchingResult

    Examples
    --------
    >>> spec = ImpedanceSpec(z_initial=10, z_target=50, z0=50, frequency=1e9)
    >>> match(spec, 'lnet:le').solutions[0].title
    'Solution 1: Series-First'
    """
    return make_matcher(topology).set_params(**kwargs).solve(spec)
    # The end of "match" function.


def l_network(spec):
    """
    Find up to four L networks. See "LNetLE".
    """
    return match(spec, Topology.L)


def tee_network(spec, q=None):
    """
    Find a Tee network with a loaded quality factor "q". See "TeeNetLE".
    """
    return match(spec, Topology.TEE, q=q)


def pi_network(spec, q=None):
    """
    Find a Pi network with a loaded quality factor "q". See "PiNetLE".
    """
    return match(spec, Topology.PI, q=q)


def single_stub(spec):
    return match(spec, Topology.SINGLE_STUB)


def balanced_stub(spec):
    return match(spec, Topology.BALANCED_STUB)


def double_stub(spec, spacing=StubSpacing.LAMBDA_OVER_8):
    """
    Find double stub networks with a stub spacing "spacing" (lambda/8 or
    3*lambda/8). See "DoubleStubTL".
    """
    return match(spec, Topology.DOUBLE_STUB, spacing=spacing)
