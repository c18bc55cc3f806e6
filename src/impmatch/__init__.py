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
ImpMatch - a library to design impedance matching networks.

It finds lossless matching networks that transform a source (initial)
impedance into a target impedance at a single frequency:
L, Tee and Pi networks of lumped elements; single, balanced and double shunt
stub networks of transmission lines.

Precaution to the users of this library.
Use only public interface. Do not use protected (names started with an
underscore "_") and private (names started with two underscores "__")
class members. There is no guarantee that they will not be changed in
the future in the same version branch of the library.
"""

import logging
from pathlib import Path

from .impalg import gamma_to_z, z_to_gamma, z_to_y, y_to_z
from .matchdata import (FilterType, ImpedanceSpec, InputError, MatchingResult,
                        PathKind, SmithPath, Solution, SolutionKind,
                        StubSpacing, StubType, Topology)
from .matchnet import (balanced_stub, double_stub, l_network, make_matcher,
                       match, matchers, pi_network, single_stub, tee_network)
from .paslincomp import Component, ComponentKind, Role
from .version import PKG_VERSION

__version__ = PKG_VERSION

__all__ = [
    '__version__', 'get_version', 'get_path',
    'ImpedanceSpec', 'InputError', 'MatchingResult', 'Solution', 'SmithPath',
    'Component', 'ComponentKind', 'Role', 'Topology', 'SolutionKind',
    'PathKind', 'FilterType', 'StubType', 'StubSpacing',
    'matchers', 'make_matcher', 'match', 'l_network', 'tee_network',
    'pi_network', 'single_stub', 'balanced_stub', 'double_stub',
    'z_to_gamma', 'gamma_to_z', 'z_to_y', 'y_to_z']

# A library does not configure logging by itself.
logging.getLogger(__name__).addHandler(logging.NullHandler())


def get_version():
    """
    Get the current version of the package.

    Returns
    -------
    version : str
        The current version of the package.
    """
    return __version__
    # The end of "get_version" function.


def get_path():
    """
    Get an absolute path to the parent directory where the "impmatch" regular
    package is located.

    Returns
    -------
    path : pathlib.PurePath
        An absolute path to the regular package.
    """
    return Path(__file__).parents[1]
    # The end of "get_path" function.
