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
Matching networks based on transmission lines (shunt stubs).

Some abbreviations.
TL - transmission line.
VSWR circle - a circle of constant |gamma| centered at the origin of the
gamma plane. A lossless line moves a point along it clockwise with
increasing length, one revolution per half wavelength.
g-circle - a circle of constant normalized conductance "g". A shunt element
moves a point along it.

All the lines and stubs have the characteristic impedance "z0" of a request
and the free space phase velocity. Lengths are given both as fractions of a
wavelength and in millimeters.

Physical infeasibility of a stub network is reported by an empty list of
solutions. The reason is written into the common derivation steps.
"""

from collections import namedtuple
import logging

import numpy as np

from ._matchabstract import Matcher
from .impalg import (DISC_EPS, G_BOUND_TOL, GAMMA_TOL, STUB_B_EPS, Z_INF,
                     gamma_to_y, gamma_to_z, symmetric_roots, wrap_angle,
                     y_to_gamma, y_to_z, z_to_gamma)
from .matchdata import (FilterType, Lengths, PathKind, SmithPath, Solution,
                        SolutionKind, StubSpacing, StubType, Topology)
from .trace import Trace
from .utils import format_num as fnum
from .utils import lambda_to_mm, wavelength_mm

__all__ = [
    'SingleStubTL',
    'BalancedStubTL',
    'DoubleStubTL'
]

logger = logging.getLogger(__name__)

# Two intersection points closer than this make one (tangent) point.
TANGENT_EPS = 1e-9


def stub_length(b, stub_type):
    """
    Get the length of a stub that provides a normalized susceptance "b".

    Parameters
    ----------
    b : float
        A required normalized susceptance.
    stub_type : StubType
        A stub termination.

    Returns
    -------
    length : float
        A stub length as a fraction of a wavelength, in [0, 0.5).
        A short-circuited stub: tan(beta*l) = -1/b;
        an open-circuited stub: tan(beta*l) = b.
        If |b| < STUB_B_EPS, it is a quarter wave short stub or a zero length
        open stub.
    """
    if stub_type is StubType.SHORT:
        if abs(b) < STUB_B_EPS:
            return 0.25
        theta = float(np.arctan(-1.0/b))
    elif stub_type is StubType.OPEN:
        if abs(b) < STUB_B_EPS:
            return 0.0
        theta = float(np.arctan(b))
    else:
        raise ValueError("An unexpected stub type: {0}.".format(stub_type))
    if theta < 0:
        theta += np.pi
    return theta/(2*np.pi)


def stub_admittance(length, stub_type):
    """
    Get the normalized input admittance of a stub.

    Parameters
    ----------
    length : float
        A stub length as a fraction of a wavelength.
    stub_type : StubType
        A stub termination.

    Returns
    -------
    y : complex
        A short-circuited stub: -j*cot(beta*l);
        an open-circuited stub: j*tan(beta*l).
        A pole is replaced by the sentinel value Z_INF.
    """
    theta = 2*np.pi*length
    if stub_type is StubType.SHORT:
        sin = np.sin(theta)
        if abs(sin) < 1e-12:
            return complex(0.0, -Z_INF)
        return complex(0.0, -np.cos(theta)/sin)
    if stub_type is StubType.OPEN:
        cos = np.cos(theta)
        if abs(cos) < 1e-12:
            return complex(0.0, Z_INF)
        return complex(0.0, np.sin(theta)/cos)
    raise ValueError("An unexpected stub type: {0}.".format(stub_type))


def rotate(gamma, length):
    """
    Move a reflection coefficient along a lossless line toward the generator.

    Parameters
    ----------
    gamma : complex
        A reflection coefficient at the load side of the line.
    length : float
        A line length as a fraction of a wavelength.

    Returns
    -------
    gamma : complex
        gamma*exp(-j*4*pi*length).
    """
    return complex(gamma)*np.exp(-4j*np.pi*length)


def line_admittance(y, t):
    """
    Transform a normalized admittance through a line with tan(beta*s) = t.
    y_in = (y + j*t)/(1 + j*y*t).
    """
    den = 1.0 + 1j*y*t
    if abs(den) < 1e-12:
        return complex(Z_INF, 0.0)
    return (y + 1j*t)/den


_STUB_TYPES = (StubType.SHORT, StubType.OPEN)


def _stub_label(stub_type):
    return "Short" if stub_type is StubType.SHORT else "Open"


class _ShuntStubTL(Matcher):
    """
    The common base class of single and balanced stub networks.

    Equivalent circuit
    ------------------

    o----------o-----d-----o
               |
    Z_tar    stub(s)      Z_init
               |
    o----------o-----------o

    The source is moved along its VSWR circle (a line of length "d") onto the
    g-circle of the target. Then the stub(s) cancel the difference of
    susceptances. Heirs set "_n_stubs", the number of identical stubs
    connected in parallel at the same point.
    """

    _n_stubs = 1

    def _solve(self, state, common):
        lambda_mm = wavelength_mm(state.frequency)
        common.title("Step 1. Problem setup")
        common.step("λ = c/f = {0} mm", fnum(lambda_mm))
        common.step("Γ_init = {0}, Γ_tar = {1}",
                    fnum(state.gamma1, polar=True), fnum(state.gamma2, polar=True))

        if self._is_matched(state):
            common.step("The impedances are already matched.")
            return [self._direct_connect(state, lengths=Lengths(0.0, 0.0, 0.0, 0.0))]

        solutions = []
        r, r_tar = abs(state.gamma1), abs(state.gamma2)
        if abs(r - r_tar) <= GAMMA_TOL:
            solutions.append(self.__line_only(state))

        if self._is_pure_reactance(state):
            self._pure_reactance_trace(common)
            return solutions
        if r >= 1.0:
            common.step("|Γ_init| = {0} >= 1: the source is not passive.", fnum(r))
            logger.info("%s: |gamma_init| >= 1.", self.get_name())
            return solutions

        g_t = state.y2.real
        g_min, g_max = (1.0 - r)/(1.0 + r), (1.0 + r)/(1.0 - r)
        common.title("Step 2. Conductance bounds of the VSWR circle")
        common.step("g_min = (1 - r)/(1 + r) = {0}, g_max = (1 + r)/(1 - r) = {1}",
                    fnum(g_min), fnum(g_max))
        common.step("g_tar = {0}", fnum(g_t))
        if not (g_min - G_BOUND_TOL <= g_t <= g_max + G_BOUND_TOL):
            common.step("g_tar is out of [g_min, g_max]: the VSWR circle does not "
                        "cross the g-circle of the target. No solution.")
            logger.info("%s: g_tar=%g is out of [%g, %g].", self.get_name(), g_t, g_min, g_max)
            return solutions

        # An intersection of |gamma| = r with the g-circle:
        # center (cx, 0), radius rg.
        cx = -g_t/(1.0 + g_t)
        rg = 1.0/(1.0 + g_t)
        u = (r**2 - rg**2 + cx**2)/(2*cx) if abs(cx) > TANGENT_EPS else 0.0
        v = float(np.sqrt(max(0.0, r**2 - u**2)))
        common.title("Step 3. Intersection of the VSWR circle and the g-circle")
        common.step("center = {0}, radius = {1}", fnum(cx), fnum(rg))
        if v < TANGENT_EPS:
            points = [complex(u, 0.0)]
            common.step("The circles touch: Γ_mid = {0}", fnum(points[0]))
        else:
            points = [complex(u, v), complex(u, -v)]
            common.step("Γ_mid1 = {0}, Γ_mid2 = {1}", fnum(points[0]), fnum(points[1]))

        for gamma_mid in points:
            for stub_type in _STUB_TYPES:
                solutions.append(self.__stub_solution(
                    state, gamma_mid, stub_type, len(solutions) + 1))
        return solutions

    def __line_only(self, state):
        """
        A plain line rotates the source directly onto the target.
        """
        trace = Trace(self.get_name())
        trace.title("Line only")
        trace.step("|Γ_init| ≈ |Γ_tar|: a line alone rotates Γ_init onto Γ_tar.")
        d = wrap_angle(np.angle(state.gamma1) - np.angle(state.gamma2))/(4*np.pi)
        d_mm = lambda_to_mm(d, state.frequency)
        trace.step("d = (∠Γ_init - ∠Γ_tar)/(4π) = {0} λ = {1} mm", fnum(d), fnum(d_mm))
        gamma_out = rotate(state.gamma1, d)
        z_out = gamma_to_z(gamma_out, state.z0)
        residual = abs(z_out - state.z_tar)
        trace.step("Verification: |Z_out - Z_tar| = {0} Ω", fnum(residual))
        return Solution(
            title="Line Only", topology=self._topology, kind=SolutionKind.LINE_ONLY,
            components=(), lengths=Lengths(d, d_mm, 0.0, 0.0), stub_type=StubType.NONE,
            filter_type=FilterType.NONE, residual=residual, steps=trace.get_steps(),
            paths=(SmithPath(start=state.gamma1, end=gamma_out, kind=PathKind.LINE,
                             label="TL d"),))

    def __stub_solution(self, state, gamma_raw, stub_type, num):
        n = self._n_stubs
        title = "Sol {0} ({1})".format(num, _stub_label(stub_type))
        trace = Trace(self.get_name())
        trace.title(title)

        d = wrap_angle(np.angle(state.gamma1) - np.angle(gamma_raw))/(4*np.pi)
        # Pin the conductance exactly to the target one.
        y_mid = complex(state.y2.real, gamma_to_y(gamma_raw).imag)
        gamma_mid = y_to_gamma(y_mid)
        b_total = state.y2.imag - y_mid.imag
        b_each = b_total/n
        length = stub_length(b_each, stub_type)
        d_mm = lambda_to_mm(d, state.frequency)
        l_mm = lambda_to_mm(length, state.frequency)
        trace.step("d = (∠Γ_init - ∠Γ_mid)/(4π) = {0} λ = {1} mm", fnum(d), fnum(d_mm))
        trace.step("y_mid = {0}", fnum(y_mid))
        trace.step("b = b_tar - Im(y_mid) = {0}", fnum(b_total))
        if n > 1:
            trace.step("b_each = b/{0} = {1}", n, fnum(b_each))
        if stub_type is StubType.SHORT:
            trace.step("tan(βl) = -1/b_each -> l = {0} λ = {1} mm", fnum(length), fnum(l_mm))
        else:
            trace.step("tan(βl) = b_each -> l = {0} λ = {1} mm", fnum(length), fnum(l_mm))

        # Recompose from the physical lengths.
        y_out = gamma_to_y(rotate(state.gamma1, d)) + n*stub_admittance(length, stub_type)
        z_out = state.z0*y_to_z(y_out)
        residual = abs(z_out - state.z_tar)
        trace.step("Verification: Z_out = {0} Ω, |Z_out - Z_tar| = {1} Ω",
                   fnum(z_out), fnum(residual))
        paths = (
            SmithPath(start=state.gamma1, end=gamma_mid, kind=PathKind.LINE, label="TL d"),
            SmithPath(start=gamma_mid, end=z_to_gamma(z_out, state.z0), kind=PathKind.SHUNT,
                      label="Stub" if n == 1 else "Stubs"))
        return Solution(
            title=title, topology=self._topology, kind=SolutionKind.NORMAL,
            components=(), lengths=Lengths(d, d_mm, length, l_mm), stub_type=stub_type,
            filter_type=FilterType.NONE, residual=residual, steps=trace.get_steps(),
            paths=paths)

    # The end of "_ShuntStubTL" class.


class SingleStubTL(_ShuntStubTL):
    """
    A single shunt stub network.
    Up to four solutions: two intersection points, each with a short and an
    open stub.
    """

    _topology = Topology.SINGLE_STUB
    _n_stubs = 1


class BalancedStubTL(_ShuntStubTL):
    """
    A balanced shunt stub network: two identical stubs in parallel at the same
    point, each providing a half of the required susceptance. The reported
    stub length is the length of each stub.
    """

    _topology = Topology.BALANCED_STUB
    _n_stubs = 2


# -----------------------------------------------------------------------------


def _to_spacing(val):
    if isinstance(val, StubSpacing):
        return val
    for spacing in StubSpacing:
        if val in (spacing.value, spacing.label, spacing.name):
            return spacing
    raise ValueError("An unknown stub spacing: {0!r}.".format(val))


class DoubleStubTL(Matcher):
    """
    A double shunt stub network.

    Equivalent circuit
    ------------------

    o------o------s------o------o
           |             |
    Z_tar  stub2       stub1   Z_init
           |             |
    o------o-------------o------o

    The first stub is at the source plane (d = 0). The stubs are separated by
    a line of fixed length "s" (lambda/8 or 3*lambda/8), so tan(beta*s) = +-1.
    Up to four solutions: two roots, each with short and open stubs.
    """

    _topology = Topology.DOUBLE_STUB
    Params = namedtuple('Params', 'name spacing')

    def __init__(self):
        self.__spacing = StubSpacing.LAMBDA_OVER_8

    def _assign_params(self, *, spacing=None):
        if spacing is not None:     self.__spacing = _to_spacing(spacing)

    def _retrieve_params(self):
        return self.Params(name=self.get_name(), spacing=self.__spacing)

    def _solve(self, state, common):
        spacing = self.__spacing
        t = spacing.t
        freq = state.frequency
        s_mm = lambda_to_mm(spacing.lambda_factor, freq)
        common.title("Step 1. Problem setup")
        common.step("λ = c/f = {0} mm", fnum(wavelength_mm(freq)))
        common.step("s = {0} = {1} mm, t = tan(βs) = {2}", spacing.label, fnum(s_mm), t)

        if self._is_matched(state):
            common.step("The impedances are already matched.")
            return [self._direct_connect(
                state, lengths=Lengths(0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
                                       spacing.lambda_factor, s_mm))]
        if self._is_pure_reactance(state):
            self._pure_reactance_trace(common)
            return []

        g, b = state.y1.real, state.y1.imag
        g_t, b_t = state.y2.real, state.y2.imag
        common.title("Step 2. Normalized admittances")
        common.step("y_init = {0}, y_tar = {1}", fnum(state.y1), fnum(state.y2))
        if abs(g_t) < DISC_EPS:
            common.step("g_tar ≈ 0: a purely reactive target is not supported.")
            logger.info("%s: g_tar is zero.", self.get_name())
            return []

        delta = 2*g/g_t - g**2
        common.title("Step 3. Re(y2) = g_tar")
        common.step("(1 - t·B)^2 = 2g/g_tar - g^2 = Δ, Δ = {0}", fnum(delta))
        roots = symmetric_roots(delta)
        if not roots:
            common.step("Δ < 0: g_init = {0} is in the forbidden region of "
                        "this spacing. No solution.", fnum(g))
            logger.info("%s: negative discriminant %g.", self.get_name(), delta)
            return []

        solutions = []
        for root in roots:
            b_sum = t - root
            common.step("B = t - ({0}) = {1}", fnum(root), fnum(b_sum))
            for stub_type in _STUB_TYPES:
                solutions.append(self.__solution(
                    state, b_sum, stub_type, len(solutions) + 1, s_mm))
        return solutions

    def __solution(self, state, b_sum, stub_type, num, s_mm):
        spacing = self.__spacing
        t, freq = spacing.t, state.frequency
        title = "Sol {0} ({1})".format(num, _stub_label(stub_type))
        trace = Trace(self.get_name())
        trace.title(title)

        b1 = b_sum - state.y1.imag
        y1p = complex(state.y1.real, b_sum)
        y2m = line_admittance(y1p, t)
        b2 = state.y2.imag - y2m.imag
        l1 = stub_length(b1, stub_type)
        l2 = stub_length(b2, stub_type)
        l1_mm, l2_mm = lambda_to_mm(l1, freq), lambda_to_mm(l2, freq)
        trace.step("b1 = B - b_init = {0}", fnum(b1))
        trace.step("y1' = g_init + jB = {0}", fnum(y1p))
        trace.step("y2 = (y1' + jt)/(1 + j·y1'·t) = {0}", fnum(y2m))
        trace.step("b2 = b_tar - Im(y2) = {0}", fnum(b2))
        trace.step("Stub 1: l1 = {0} λ = {1} mm", fnum(l1), fnum(l1_mm))
        trace.step("Stub 2: l2 = {0} λ = {1} mm", fnum(l2), fnum(l2_mm))

        # Recompose from the physical lengths.
        y_a = state.y1 + stub_admittance(l1, stub_type)
        y_b = line_admittance(y_a, float(np.tan(2*np.pi*spacing.lambda_factor)))
        y_out = y_b + stub_admittance(l2, stub_type)
        z_out = state.z0*y_to_z(y_out)
        residual = abs(z_out - state.z_tar)
        trace.step("Verification: Z_out = {0} Ω, |Z_out - Z_tar| = {1} Ω",
                   fnum(z_out), fnum(residual))

        g_a, g_b = y_to_gamma(y_a), y_to_gamma(y_b)
        paths = (
            SmithPath(start=state.gamma1, end=g_a, kind=PathKind.SHUNT, label="Stub 1"),
            SmithPath(start=g_a, end=g_b, kind=PathKind.LINE, label="TL s"),
            SmithPath(start=g_b, end=z_to_gamma(z_out, state.z0), kind=PathKind.SHUNT,
                      label="Stub 2"))
        return Solution(
            title=title, topology=self._topology, kind=SolutionKind.NORMAL,
            components=(), stub_type=stub_type, filter_type=FilterType.NONE,
            lengths=Lengths(0.0, 0.0, l1, l1_mm, l2, l2_mm, spacing.lambda_factor, s_mm),
            residual=residual, steps=trace.get_steps(), paths=paths)

    # The end of "DoubleStubTL" class.
