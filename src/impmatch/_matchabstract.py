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
Abstract base class of matchers.

A matcher is a solver of one matching network topology. It takes a matching
request ("ImpedanceSpec"), normalizes it, enumerates the candidate networks
and returns a "MatchingResult".

The main types of the matchers:
1. Lumped element (LE) matchers: L, Tee and Pi networks.
2. Transmission line (TL) matchers: single, balanced and double stubs.

Matchers do not keep any state between calls. The only stored data are
options of a topology (a quality factor, a stub spacing) that are set with
"set_params" before a call. A "solve" call is a pure function of its input
and these options.

Physical infeasibility is not an error here. If no lossless network exists,
a lumped matcher returns a single solution of "SolutionKind.INFEASIBLE"
kind, and a stub matcher returns an empty list of solutions. In both cases
the reason is written into the derivation steps.
"""

from abc import ABCMeta, abstractmethod
from collections import namedtuple
import logging

from .impalg import DIRECT_TOL, RES_EPS
from .matchdata import (FilterType, ImpedanceSpec, MatchingResult, Solution,
                        SolutionKind, StubType, normalize)
from .trace import Trace
from .utils import format_num as fnum

__all__ = []

logger = logging.getLogger(__name__)


class Matcher(metaclass=ABCMeta):
    """
    The common abstract base class of matchers.

    Fields (attributes) that must be in the heirs:
    _topology : Topology
        The topology that a matcher solves.
    Params : namedtuple
        The type of the result of "get_params". It has a "name" field.

    Methods that must be written in the heirs:
    _solve(self, state, common)

    Methods that can be overriden in the heirs:
    _assign_params(self, **kwargs)
    _retrieve_params(self)
    """

    _topology = None
    Params = namedtuple('Params', 'name')

    def __copy__(self):
        """
        A "copy" operation is disabled.
        """
        raise TypeError("A 'copy' operation is not supported.")

    def get_name(self):
        """
        Get the name / alias of a matcher, e.g. "lnet:le".

        Returns
        -------
        name : str
        """
        return self._topology.value

    def get_topology(self):
        return self._topology

    def set_params(self, **kwargs):
        """
        Set options of a matcher.

        Parameters
        ----------
        kwargs : dict
            Options of a certain matcher. For example,
            q : float, optional
                A quality factor of a Tee or a Pi network.
            spacing : StubSpacing or str, optional
                A spacing between the stubs of a double-stub network.

        Returns
        -------
        "self" reference to the caller object.
        """
        self._assign_params(**kwargs)
        return self

    def get_params(self):
        """
        Get options of a matcher.

        Returns
        -------
        params : Params
            A "namedtuple" that contains the options.
        """
        return self._retrieve_params()

    def solve(self, spec):
        """
        Find matching networks for a request.

        Parameters
        ----------
        spec : ImpedanceSpec
            A matching request.

        Returns
        -------
        result : MatchingResult
            Candidate networks in their enumeration order and the steps that
            are common for all of them.
        """
        if not isinstance(spec, ImpedanceSpec):
            raise TypeError("An unexpected matching request type: {0}.".format(type(spec)))
        state = normalize(spec)
        common = Trace(self.get_name())
        if state.from_gamma:
            common.title("Step 0. Convert reflection coefficients to impedances")
            common.step("Z_init = Z0*(1 + Γ_init)/(1 - Γ_init) = {0} Ω", fnum(state.z_init))
            common.step("Z_tar = Z0*(1 + Γ_tar)/(1 - Γ_tar) = {0} Ω", fnum(state.z_tar))
        solutions = self._solve(state, common)
        result = MatchingResult(topology=self._topology,
                                solutions=tuple(solutions),
                                common_steps=common.get_steps())
        logger.info("%s: %d solution(s) for Z_init=%s, Z_tar=%s.",
                    self.get_name(), len(result.solutions),
                    state.z_init, state.z_tar)
        return result

    @abstractmethod
    def _solve(self, state, common):
        """
        Enumerate the candidate networks.

        Parameters
        ----------
        state : NormalizedState
            A normalized matching request.
        common : Trace
            A trace for the steps that are common for all the solutions.

        Returns
        -------
        solutions : list of Solution
        """
        raise NotImplementedError

    def _assign_params(self, **kwargs):
        """A protected method to set options of a matcher."""
        if kwargs:
            raise TypeError("Unexpected parameters of '{0}': {1}.".format(
                self.get_name(), ", ".join(sorted(kwargs))))

    def _retrieve_params(self):
        """A protected method to get options of a matcher."""
        return self.Params(name=self.get_name())

    # Special cases common for all the topologies.

    def _is_matched(self, state):
        """
        Check if a source impedance is already (almost) equal to a target one.
        """
        return abs(state.z_init - state.z_tar) < DIRECT_TOL

    def _is_pure_reactance(self, state):
        """
        Check if a purely reactive source has to be matched to a resistive
        target. No lossless network can do that.
        """
        return abs(state.z_init.real) < RES_EPS and state.z_tar.real > RES_EPS

    def _special_solution(self, title, kind, trace, *, lengths=None, filter_type=FilterType.NONE):
        """
        Make a solution without components: a direct connection, a line or an
        infeasible case.
        """
        return Solution(
            title=title, topology=self._topology, kind=kind,
            components=(), lengths=lengths, stub_type=StubType.NONE,
            filter_type=filter_type, residual=None,
            steps=trace.get_steps(), paths=())

    def _direct_connect(self, state, *, lengths=None):
        trace = Trace(self.get_name())
        trace.title("Status: already matched")
        trace.step("The source impedance is sufficiently close to the target impedance.")
        trace.step("|Z_init - Z_tar| = {0} Ω < {1} Ω", fnum(abs(state.z_init - state.z_tar)), DIRECT_TOL)
        trace.step("No matching network is required (direct connection).")
        return self._special_solution("No Match Needed", SolutionKind.DIRECT_CONNECT, trace,
                                      lengths=lengths)

    # Writes into "trace" if it is given, otherwise into a new one.
    def _pure_reactance_trace(self, trace=None):
        if trace is None:   trace = Trace(self.get_name())
        trace.title("Feasibility check failed")
        trace.step("Cannot match a pure reactance source (R = 0) to a resistive target (R > 0) "
                   "with a lossless network.")
        trace.step("A lossless network cannot create a real part from a purely reactive "
                   "driving-point impedance.")
        logger.info("%s: a purely reactive source cannot be matched.", self.get_name())
        return trace

    # The end of "Matcher" class.
