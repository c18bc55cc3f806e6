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
Matching data.
The input descriptor of a matching request, the normalized state that is
derived from it, and the plain data that a matcher returns: solutions with
their components, lengths, derivation steps and Smith chart path records.

All the objects here are immutable "namedtuple" heirs. A matcher creates
them anew on each call and never changes them afterwards.
"""

from collections import namedtuple
from enum import Enum

import numpy as np

from .impalg import gamma_to_z, z_to_gamma, z_to_y
from .paslincomp import ComponentKind

__all__ = [
    'InputError', 'Topology', 'SolutionKind', 'PathKind', 'FilterType',
    'StubType', 'StubSpacing', 'ImpedanceSpec', 'NormalizedState',
    'SmithPath', 'Lengths', 'Solution', 'MatchingResult', 'normalize']


class InputError(ValueError):
    """
    A malformed or incomplete matching request.
    It is a caller's error, not a physical infeasibility of a network.
    """


class Topology(Enum):
    """
    Matching network topologies. The values are the names of the matchers in
    the registry (see "matchnet.matchers").
    """
    L = 'lnet:le'
    TEE = 'teenet:le'
    PI = 'pinet:le'
    SINGLE_STUB = 'stub:single'
    BALANCED_STUB = 'stub:balanced'
    DOUBLE_STUB = 'stub:double'


class SolutionKind(Enum):
    # A regular network with components or stubs.
    NORMAL = 'normal'
    # The impedances are already matched, nothing to insert.
    DIRECT_CONNECT = 'direct-connect'
    # A plain piece of transmission line rotates one point onto the other.
    LINE_ONLY = 'line-only'
    # No lossless network of the topology exists. It carries explanatory
    # steps and no components.
    INFEASIBLE = 'infeasible'


class PathKind(Enum):
    SERIES = 'series'  # Along a constant resistance circle.
    SHUNT = 'shunt'  # Along a constant conductance circle.
    LINE = 'transmission-line'  # Along a constant |gamma| circle.


class FilterType(Enum):
    LOW_PASS = 'low-pass'
    HIGH_PASS = 'high-pass'
    BAND_STOP = 'band-stop'
    BAND_PASS = 'band-pass'
    OTHER = 'other'
    NONE = 'none'

    @classmethod
    def classify(cls, series, shunt):
        """
        Classify a pair of series and shunt components.

        Parameters
        ----------
        series, shunt : Component
            A series element and a shunt element of an L section.

        Returns
        -------
        filter_type : FilterType
            Low-pass (series L, shunt C), high-pass (series C, shunt L),
            band-stop (L, L), band-pass (C, C), or "OTHER" if one of the
            elements is omitted.
        """
        ind, cap = ComponentKind.INDUCTOR, ComponentKind.CAPACITOR
        kinds = (series.kind, shunt.kind)
        if kinds == (ind, cap):     return cls.LOW_PASS
        if kinds == (cap, ind):     return cls.HIGH_PASS
        if kinds == (ind, ind):     return cls.BAND_STOP
        if kinds == (cap, cap):     return cls.BAND_PASS
        return cls.OTHER


class StubType(Enum):
    SHORT = 'short'
    OPEN = 'open'
    NONE = 'none'


class StubSpacing(Enum):
    """
    Spacings between the stubs of a double-stub network.
    lambda/4 is excluded since tan(beta*s) is undefined there.
    """
    LAMBDA_OVER_8 = 'lambda/8'
    THREE_LAMBDA_OVER_8 = '3lambda/8'

    @property
    def lambda_factor(self):
        """Electrical length as a fraction of wavelength."""
        if self is StubSpacing.LAMBDA_OVER_8:
            return 1.0/8.0
        return 3.0/8.0

    @property
    def t(self):
        """tan(beta*s): +1 for lambda/8 and -1 for 3*lambda/8."""
        if self is StubSpacing.LAMBDA_OVER_8:
            return 1.0
        return -1.0

    @property
    def label(self):
        if self is StubSpacing.LAMBDA_OVER_8:
            return "λ/8"
        return "3λ/8"


def _opt_complex(val, name):
    if val is None:
        return None
    try:
        val = complex(val)
    except (TypeError, ValueError):
        raise InputError("'{0}' is not a complex number: {1!r}.".format(name, val)) from None
    if not np.isfinite(val):
        raise InputError("'{0}' is not finite: {1}.".format(name, val))
    return val


def _pos_float(val, name):
    if val is None:
        raise InputError("'{0}' is required.".format(name))
    try:
        val = float(val)
    except (TypeError, ValueError):
        raise InputError("'{0}' is not a real number: {1!r}.".format(name, val)) from None
    if not (np.isfinite(val) and val > 0):
        raise InputError("'{0}' must be a finite positive number: {1}.".format(name, val))
    return val


class ImpedanceSpec(namedtuple('ImpedanceSpec',
                               'z_initial z_target gamma_initial gamma_target z0 frequency')):
    """
    A matching request.

    Fields
    ------
    z_initial, z_target : complex or None
        Source (initial) and target impedances in ohms.
    gamma_initial, gamma_target : complex or None
        Source (initial) and target reflection coefficients relative to "z0".
    z0 : float
        A reference impedance in ohms, z0 > 0.
    frequency : float
        A design frequency in hertz, frequency > 0.

    Exactly one pair, (z_initial, z_target) or (gamma_initial, gamma_target),
    must be fully given. Anything else raises "InputError".
    """

    __slots__ = ()

    def __new__(cls, z_initial=None, z_target=None, gamma_initial=None,
                gamma_target=None, z0=None, frequency=None):
        z_initial = _opt_complex(z_initial, 'z_initial')
        z_target = _opt_complex(z_target, 'z_target')
        gamma_initial = _opt_complex(gamma_initial, 'gamma_initial')
        gamma_target = _opt_complex(gamma_target, 'gamma_target')
        z_given = (z_initial is not None, z_target is not None)
        gamma_given = (gamma_initial is not None, gamma_target is not None)
        if any(z_given) and any(gamma_given):
            raise InputError(
                "Both impedances and reflection coefficients are given.\n"
                "Provide either (z_initial, z_target) or (gamma_initial, gamma_target).")
        if not (all(z_given) or all(gamma_given)):
            raise InputError(
                "Input incomplete: provide (z_initial, z_target) or "
                "(gamma_initial, gamma_target).")
        z0 = _pos_float(z0, 'z0')
        frequency = _pos_float(frequency, 'frequency')
        return super().__new__(cls, z_initial, z_target, gamma_initial,
                               gamma_target, z0, frequency)

    @classmethod
    def _make(cls, iterable):
        return cls(*iterable)

    def _replace(self, **kwargs):
        """
        Get a new request with some fields replaced. The new request is
        validated in the same way as one made by the constructor.
        """
        return type(self)(**dict(self._asdict(), **kwargs))

    @classmethod
    def from_impedances(cls, z_initial, z_target, *, z0, frequency):
        return cls(z_initial=z_initial, z_target=z_target, z0=z0, frequency=frequency)

    @classmethod
    def from_gammas(cls, gamma_initial, gamma_target, *, z0, frequency):
        return cls(gamma_initial=gamma_initial, gamma_target=gamma_target,
                   z0=z0, frequency=frequency)

    def uses_gamma(self):
        return self.z_initial is None

    def resolve(self):
        """
        Get the source and target impedances in ohms.

        Returns
        -------
        z_init, z_tar : complex
        """
        if self.uses_gamma():
            return (gamma_to_z(self.gamma_initial, self.z0),
                    gamma_to_z(self.gamma_target, self.z0))
        return self.z_initial, self.z_target


NormalizedState = namedtuple(
    'NormalizedState',
    'z_init z_tar z0 frequency w z1 z2 y1 y2 gamma1 gamma2 from_gamma')
# The fields:
# z_init, z_tar : complex
#     Source and target impedances in ohms.
# z0 : float
#     A reference impedance.
# frequency : float
#     A design frequency.
# w : float
#     A design angular frequency.
# z1, z2 : complex
#     Normalized source and target impedances, z = Z/z0.
# y1, y2 : complex
#     Normalized source and target admittances, y = 1/z.
# gamma1, gamma2 : complex
#     Source and target reflection coefficients.
# from_gamma : bool
#     "True" if the request was given by reflection coefficients.


def normalize(spec):
    """
    Derive a normalized state from a matching request.

    Parameters
    ----------
    spec : ImpedanceSpec

    Returns
    -------
    state : NormalizedState
    """
    z_init, z_tar = spec.resolve()
    z1 = z_init/spec.z0
    z2 = z_tar/spec.z0
    return NormalizedState(
        z_init=z_init, z_tar=z_tar, z0=spec.z0, frequency=spec.frequency,
        w=2*np.pi*spec.frequency,
        z1=z1, z2=z2, y1=z_to_y(z1), y2=z_to_y(z2),
        gamma1=z_to_gamma(z_init, spec.z0), gamma2=z_to_gamma(z_tar, spec.z0),
        from_gamma=spec.uses_gamma())


SmithPath = namedtuple('SmithPath', 'start end kind label')
# The fields:
# start, end : complex
#     Reflection coefficients at the ends of a segment.
# kind : PathKind
#     The kind of a move on a Smith chart.
# label : str
#     A short label of the element that makes the move.


Lengths = namedtuple(
    'Lengths',
    'd_lambda d_mm stub_lambda stub_mm stub2_lambda stub2_mm spacing_lambda spacing_mm',
    defaults=(None, None, None, None))
# The fields:
# d_lambda, d_mm : float
#     The length of the line from the source to the (first) stub.
# stub_lambda, stub_mm : float
#     The length of the (first) stub. For a balanced network, it is the
#     length of each of the two identical stubs.
# stub2_lambda, stub2_mm : float or None
#     The length of the second stub of a double-stub network.
# spacing_lambda, spacing_mm : float or None
#     The spacing between the stubs of a double-stub network.
# The "*_lambda" lengths are fractions of a wavelength, "*_mm" are in
# millimeters.


class Solution(namedtuple('Solution',
                          'title topology kind components lengths stub_type '
                          'filter_type residual steps paths')):
    """
    One candidate matching network.

    Fields
    ------
    title : str
        A title, e.g. "Solution 1: Series-First".
    topology : Topology
        The topology of the network.
    kind : SolutionKind
        A category of the solution.
    components : tuple of Component
        Lumped elements in the order from the source to the target.
        It is empty for transmission line networks and for special cases.
    lengths : Lengths or None
        Line and stub lengths of a transmission line network.
    stub_type : StubType
        A stub termination, "StubType.NONE" for lumped networks.
    filter_type : FilterType
        A filter classification of a lumped network.
    residual : float or None
        A verification residual in ohms. The network is recomposed from its
        physical values and compared with the target. It is only reported,
        it is never used to reject a solution.
    steps : tuple of str
        Derivation steps of the solution.
    paths : tuple of SmithPath
        The trajectory on a Smith chart.
    """

    __slots__ = ()

    def is_feasible(self):
        return self.kind is not SolutionKind.INFEASIBLE

    def get_component(self, role):
        """
        Get a component by its role.

        Returns
        -------
        comp : Component or None
            "None" if the network has no element of that role.
        """
        for comp in self.components:
            if comp.role is role:
                return comp
        return None

    def get_present_components(self):
        return tuple(comp for comp in self.components if comp.is_present())


class MatchingResult(namedtuple('MatchingResult', 'topology solutions common_steps')):
    """
    The result of a matching request.

    Fields
    ------
    topology : Topology
    solutions : tuple of Solution
        Candidate networks in their enumeration order. An empty tuple is a
        valid outcome that means "no feasible network".
    common_steps : tuple of str
        Derivation steps shared by all the solutions.
    """

    __slots__ = ()

    def is_empty(self):
        return len(self.solutions) == 0

    def get_feasible(self):
        return tuple(sol for sol in self.solutions if sol.is_feasible())
