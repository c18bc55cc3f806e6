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
Matching networks based on lumped elements.

Some abbreviations.
LE - lumped element.
Q - a loaded quality factor of a network.
R_v - a virtual resistance, an intermediate resistance between two L sections
of a Tee or a Pi network.

All the elements are ideal (lossless) capacitors and inductors. A network is
always described from its source side to its target side:
L network:   source -- [series] -- [shunt] -- target, or
             source -- [shunt] -- [series] -- target;
Tee network: source -- [series1] -- [shunt] -- [series2] -- target;
Pi network:  source -- [shunt1] -- [series] -- [shunt2] -- target.

The L network transforms a source impedance into a target impedance.
The Tee and Pi networks de-embed the reactive parts of both ports, so a
designed network presents the complex conjugate of the target impedance to
the source. Their verification residuals are measured against conj(Z_tar).
"""

from collections import namedtuple
import logging

import numpy as np

from ._matchabstract import Matcher
from .impalg import (RES_EPS, Z_INF, z_to_gamma, z_to_y, y_to_z,
                     symmetric_roots)
from .matchdata import (FilterType, PathKind, SmithPath, Solution,
                        SolutionKind, StubType, Topology)
from .paslincomp import (ComponentKind, Role, from_reactance,
                         from_susceptance)
from .trace import Trace
from .utils import format_num as fnum

__all__ = [
    'LNetLE',
    'TeeNetLE',
    'PiNetLE'
]

logger = logging.getLogger(__name__)

# A port resistance (Tee) or conductance (Pi) below this value makes a
# network infeasible.
PORT_EPS = 1e-12
# The virtual resistance of a Tee network is kept at least this factor above
# the higher port resistance.
TEE_RV_MARGIN = 1.05


def _label(comp, prefix):
    """
    Get a Smith chart label of an element, e.g. "L_ser" or "C_sh".
    """
    if comp.kind is ComponentKind.INDUCTOR:
        return "L_" + prefix
    if comp.kind is ComponentKind.CAPACITOR:
        return "C_" + prefix
    return "-"


def _describe(comp, trace, what):
    trace.step("{0}: {1}", what, comp.describe())


class LNetLE(Matcher):
    """
    An L network (a two-element network).

    Equivalent circuits
    -------------------
    Series-first:            Shunt-first:

    o---x_ser---o---o        o---o---x_ser---o
                |                |
    Z_init    b_sh  Z_tar    Z_init  b_sh      Z_tar
                |                |
    o-----------o---o        o---o-----------o

    Up to four solutions are enumerated: the series-first topology with the
    positive and the negative root of its discriminant, then the shunt-first
    topology in the same order. A double root gives one solution.
    """

    _topology = Topology.L

    def _solve(self, state, common):
        if self._is_matched(state):
            return [self._direct_connect(state)]
        if self._is_pure_reactance(state):
            trace = self._pure_reactance_trace()
            return [self._special_solution("Infeasible", SolutionKind.INFEASIBLE, trace)]

        z1, y1, z2, y2 = state.z1, state.y1, state.z2, state.y2
        common.title("Step 1. Normalize to Z0 = {0} Ω", fnum(state.z0))
        common.step("z_init = Z_init/Z0 = {0}", fnum(z1))
        common.step("z_tar = Z_tar/Z0 = {0}", fnum(z2))
        common.step("y_init = 1/z_init = {0}", fnum(y1))
        common.step("y_tar = 1/z_tar = {0}", fnum(y2))

        solutions = []
        # Series-first. The series element keeps r1, the shunt element has to
        # reach g2: r1/(r1^2 + x^2) = g2.
        r1, g2 = z1.real, y2.real
        disc = r1/g2 - r1**2 if g2 > 0 else float('-inf')
        common.title("Step 2. Series-first discriminant")
        common.step("Δs = r_init/g_tar - r_init^2 = {0}", fnum(disc))
        roots = symmetric_roots(disc)
        if not roots:
            common.step("Δs < 0: the series-first topology has no solution.")
        for x_mid in roots:
            solutions.append(self.__series_first(state, x_mid, len(solutions) + 1))

        # Shunt-first. The shunt element keeps g1, the series element has to
        # reach r2: g1/(g1^2 + b^2) = r2.
        g1, r2 = y1.real, z2.real
        disc = g1/r2 - g1**2 if r2 > 0 else float('-inf')
        common.title("Step 3. Shunt-first discriminant")
        common.step("Δp = g_init/r_tar - g_init^2 = {0}", fnum(disc))
        roots = symmetric_roots(disc)
        if not roots:
            common.step("Δp < 0: the shunt-first topology has no solution.")
        for b_mid in roots:
            solutions.append(self.__shunt_first(state, b_mid, len(solutions) + 1))

        if not solutions:
            trace = Trace(self.get_name())
            trace.title("No real solutions")
            trace.step("Both discriminants are negative. No L network with real "
                       "lossless elements exists for this pair of impedances.")
            logger.info("%s: no real solutions.", self.get_name())
            return [self._special_solution("Infeasible", SolutionKind.INFEASIBLE, trace)]
        return solutions

    def __series_first(self, state, x_mid, num):
        """
        Build a series-first solution from an intermediate normalized
        reactance "x_mid" (the point on the constant "r_init" circle).
        """
        z0, w = state.z0, state.w
        trace = Trace(self.get_name())
        trace.title("Solution {0}: Series-First", num)
        z_mid = complex(state.z1.real, x_mid)
        x_ser = (z_mid - state.z1).imag
        y_mid = z_to_y(z_mid)
        b_sh = (state.y2 - y_mid).imag
        trace.step("z_mid = r_init + j·x = {0}", fnum(z_mid))
        trace.step("x_ser = x - x_init = {0}", fnum(x_ser))
        trace.step("y_mid = 1/z_mid = {0}", fnum(y_mid))
        trace.step("b_sh = b_tar - Im(y_mid) = {0}", fnum(b_sh))
        trace.step("X_ser = x_ser·Z0 = {0} Ω, B_sh = b_sh/Z0 = {1} S",
                   fnum(x_ser*z0), fnum(b_sh/z0))

        series = from_reactance(Role.SERIES, x_ser*z0, w)
        shunt = from_susceptance(Role.SHUNT, b_sh/z0, w)
        _describe(series, trace, "Series element")
        _describe(shunt, trace, "Shunt element")

        # Recompose the network from the physical values.
        z_a = state.z_init + series.get_z(w)
        z_out = y_to_z(z_to_y(z_a) + shunt.get_y(w))
        residual = abs(z_out - state.z_tar)
        trace.step("Verification: Z_out = {0} Ω, |Z_out - Z_tar| = {1} Ω",
                   fnum(z_out), fnum(residual))

        gamma_mid = z_to_gamma(z_a, z0)
        paths = (
            SmithPath(start=state.gamma1, end=gamma_mid, kind=PathKind.SERIES,
                      label=_label(series, 'ser')),
            SmithPath(start=gamma_mid, end=z_to_gamma(z_out, z0), kind=PathKind.SHUNT,
                      label=_label(shunt, 'sh')))
        return Solution(
            title="Solution {0}: Series-First".format(num), topology=self._topology,
            kind=SolutionKind.NORMAL, components=(series, shunt), lengths=None,
            stub_type=StubType.NONE, filter_type=FilterType.classify(series, shunt),
            residual=residual, steps=trace.get_steps(), paths=paths)

    def __shunt_first(self, state, b_mid, num):
        """
        Build a shunt-first solution from an intermediate normalized
        susceptance "b_mid" (the point on the constant "g_init" circle).
        """
        z0, w = state.z0, state.w
        trace = Trace(self.get_name())
        trace.title("Solution {0}: Shunt-First", num)
        y_mid = complex(state.y1.real, b_mid)
        b_sh = (y_mid - state.y1).imag
        z_mid = y_to_z(y_mid)
        x_ser = (state.z2 - z_mid).imag
        trace.step("y_mid = g_init + j·b = {0}", fnum(y_mid))
        trace.step("b_sh = b - b_init = {0}", fnum(b_sh))
        trace.step("z_mid = 1/y_mid = {0}", fnum(z_mid))
        trace.step("x_ser = x_tar - Im(z_mid) = {0}", fnum(x_ser))
        trace.step("B_sh = b_sh/Z0 = {0} S, X_ser = x_ser·Z0 = {1} Ω",
                   fnum(b_sh/z0), fnum(x_ser*z0))

        shunt = from_susceptance(Role.SHUNT, b_sh/z0, w)
        series = from_reactance(Role.SERIES, x_ser*z0, w)
        _describe(shunt, trace, "Shunt element")
        _describe(series, trace, "Series element")

        z_a = y_to_z(z_to_y(state.z_init) + shunt.get_y(w))
        z_out = z_a + series.get_z(w)
        residual = abs(z_out - state.z_tar)
        trace.step("Verification: Z_out = {0} Ω, |Z_out - Z_tar| = {1} Ω",
                   fnum(z_out), fnum(residual))

        gamma_mid = z_to_gamma(z_a, z0)
        paths = (
            SmithPath(start=state.gamma1, end=gamma_mid, kind=PathKind.SHUNT,
                      label=_label(shunt, 'sh')),
            SmithPath(start=gamma_mid, end=z_to_gamma(z_out, z0), kind=PathKind.SERIES,
                      label=_label(series, 'ser')))
        return Solution(
            title="Solution {0}: Shunt-First".format(num), topology=self._topology,
            kind=SolutionKind.NORMAL, components=(shunt, series), lengths=None,
            stub_type=StubType.NONE, filter_type=FilterType.classify(series, shunt),
            residual=residual, steps=trace.get_steps(), paths=paths)

    # The end of "LNetLE" class.


# -----------------------------------------------------------------------------


def _choose_q(name, q_user, q_min, trace):
    """
    Choose a loaded quality factor of a Tee or a Pi network.

    Parameters
    ----------
    name : str
        A matcher name for log records.
    q_user : float or None
        A required quality factor. "None" means the default one.
    q_min : float
        The minimum quality factor, sqrt(R_high/R_low - 1).
    trace : Trace
        A trace for the derivation steps.

    Returns
    -------
    q : float
        The default value is max(2, q_min + 1). A required value below
        "q_min" is raised to (q_min + 0.1).
    """
    trace.step("Q_min = sqrt(R_high/R_low - 1) = {0}", fnum(q_min))
    if q_user is None:
        q = max(2.0, q_min + 1.0)
        trace.step("Q is not given, Q = max(2, Q_min + 1) = {0}", fnum(q))
        return q
    if q_user < q_min:
        q = q_min + 0.1
        trace.step("Warning: Q = {0} < Q_min, it is adjusted to Q = {1}",
                   fnum(q_user), fnum(q))
        logger.warning("%s: Q=%g is below Q_min=%g, Q=%g is used.",
                       name, q_user, q_min, q)
        return q
    trace.step("Q = {0}", fnum(q_user))
    return q_user


class _ThreeElementLE(Matcher):
    """
    The common base class of Tee and Pi networks. Both have a quality factor
    "q" option.
    """

    Params = namedtuple('Params', 'name q')

    def __init__(self):
        # Required loaded quality factor. "None" means the default one.
        self.__q = None

    def _assign_params(self, *, q=None):
        if q is not None:
            q = float(q)
            if not (np.isfinite(q) and q > 0):
                raise ValueError("Q must be a finite positive number: {0}.".format(q))
            self.__q = q

    def _retrieve_params(self):
        return self.Params(name=self.get_name(), q=self.__q)

    def _get_q(self):
        return self.__q

    def _infeasible(self, text):
        trace = Trace(self.get_name())
        trace.title("Infeasible")
        trace.step(text)
        logger.info("%s: infeasible, %s", self.get_name(), text)
        return [self._special_solution("Infeasible", SolutionKind.INFEASIBLE, trace)]

    def _make_solution(self, title, comps, filter_type, z_out, state, trace, paths):
        # The network de-embeds the port reactances, so it makes a conjugate
        # match.
        residual = abs(z_out - state.z_tar.conjugate())
        trace.step("Verification: Z_out = {0} Ω, |Z_out - conj(Z_tar)| = {1} Ω",
                   fnum(z_out), fnum(residual))
        return Solution(
            title=title, topology=self._topology, kind=SolutionKind.NORMAL,
            components=comps, lengths=None, stub_type=StubType.NONE,
            filter_type=filter_type, residual=residual,
            steps=trace.get_steps(), paths=paths)

    # The end of "_ThreeElementLE" class.


class TeeNetLE(_ThreeElementLE):
    """
    A Tee network: two back-to-back L sections with a shared shunt element.

    Equivalent circuit
    ------------------

    o---x1---o---x2---o
             |
    Z_init   b       Z_tar
             |
    o--------o--------o

    The virtual resistance R_v = R_low*(Q^2 + 1) is higher than both port
    resistances. One solution is returned.
    """

    _topology = Topology.TEE

    def _solve(self, state, common):
        z_init, z_tar = state.z_init, state.z_tar
        r_init, x_init = z_init.real, z_init.imag
        r_tar, x_tar = z_tar.real, z_tar.imag
        common.title("Step 1. Port impedances")
        common.step("Z_init = {0} Ω, Z_tar = {1} Ω", fnum(z_init), fnum(z_tar))
        if r_init <= PORT_EPS or r_tar <= PORT_EPS:
            return self._infeasible(
                "A Tee network requires positive resistances at both ports.")

        trace = Trace(self.get_name())
        trace.title("Solution 1: Tee network")
        r_high, r_low = max(r_init, r_tar), min(r_init, r_tar)
        q_min = float(np.sqrt(max(0.0, r_high/r_low - 1.0)))
        q = _choose_q(self.get_name(), self._get_q(), q_min, trace)
        r_v = r_low*(q**2 + 1.0)
        trace.step("R_v = R_low·(Q^2 + 1) = {0} Ω", fnum(r_v))
        if r_v <= TEE_RV_MARGIN*r_high:
            r_v = TEE_RV_MARGIN*r_high
            trace.step("R_v is raised to {0}·R_high = {1} Ω", TEE_RV_MARGIN, fnum(r_v))

        q_l = float(np.sqrt(max(0.0, r_v/r_init - 1.0)))
        q_r = float(np.sqrt(max(0.0, r_v/r_tar - 1.0)))
        x1 = q_l*r_init - x_init
        b = q_l/r_v + q_r/r_v
        x2 = q_r*r_tar - x_tar
        trace.step("Q_L = sqrt(R_v/R_init - 1) = {0}, Q_R = sqrt(R_v/R_tar - 1) = {1}",
                   fnum(q_l), fnum(q_r))
        trace.step("X1 = Q_L·R_init - X_init = {0} Ω", fnum(x1))
        trace.step("B = Q_L/R_v + Q_R/R_v = {0} S", fnum(b))
        trace.step("X2 = Q_R·R_tar - X_tar = {0} Ω", fnum(x2))

        w = state.w
        ser1 = from_reactance(Role.SERIES1, x1, w)
        shunt = from_susceptance(Role.SHUNT, b, w)
        ser2 = from_reactance(Role.SERIES2, x2, w)
        for comp, what in ((ser1, "Series element 1"), (shunt, "Shunt element"),
                           (ser2, "Series element 2")):
            _describe(comp, trace, what)

        z0 = state.z0
        z_a = z_init + ser1.get_z(w)
        z_b = y_to_z(z_to_y(z_a) + shunt.get_y(w))
        z_out = z_b + ser2.get_z(w)
        g_a, g_b = z_to_gamma(z_a, z0), z_to_gamma(z_b, z0)
        paths = (
            SmithPath(start=state.gamma1, end=g_a, kind=PathKind.SERIES, label=_label(ser1, 'ser1')),
            SmithPath(start=g_a, end=g_b, kind=PathKind.SHUNT, label=_label(shunt, 'sh')),
            SmithPath(start=g_b, end=z_to_gamma(z_out, z0), kind=PathKind.SERIES,
                      label=_label(ser2, 'ser2')))

        ind, cap = ComponentKind.INDUCTOR, ComponentKind.CAPACITOR
        kinds = (ser1.kind, shunt.kind, ser2.kind)
        filter_type = FilterType.LOW_PASS if kinds == (ind, cap, ind) else FilterType.OTHER
        return [self._make_solution("Solution 1: Tee network", (ser1, shunt, ser2), filter_type,
                                    z_out, state, trace, paths)]

    # The end of "TeeNetLE" class.


class PiNetLE(_ThreeElementLE):
    """
    A Pi network: two back-to-back L sections with a shared series element.

    Equivalent circuit
    ------------------

    o---o---x---o---o
        |       |
    Z_init b1   b2   Z_tar
        |       |
    o---o-------o---o

    The port admittances are represented by parallel resistances
    R_p = 1/Re(Y). The virtual resistance R_v = R_high/(Q^2 + 1) is lower than
    both of them. One solution is returned.
    """

    _topology = Topology.PI

    def _solve(self, state, common):
        z_init, z_tar = state.z_init, state.z_tar
        y_init, y_tar = z_to_y(z_init), z_to_y(z_tar)
        g_init, b_init = y_init.real, y_init.imag
        g_tar, b_tar = y_tar.real, y_tar.imag
        common.title("Step 1. Port admittances")
        common.step("Y_init = {0} S, Y_tar = {1} S", fnum(y_init), fnum(y_tar))
        # A short circuit port maps to the Z_INF admittance sentinel.
        shorted = (abs(z_init.real) < RES_EPS or abs(y_init) >= Z_INF
                   or abs(z_tar.real) < RES_EPS or abs(y_tar) >= Z_INF)
        if shorted or g_init <= PORT_EPS or g_tar <= PORT_EPS:
            return self._infeasible(
                "A Pi network requires positive conductances and no "
                "short circuit at both ports.")

        trace = Trace(self.get_name())
        trace.title("Solution 1: Pi network")
        rp_init, rp_tar = 1.0/g_init, 1.0/g_tar
        trace.step("R_p,init = 1/G_init = {0} Ω, R_p,tar = 1/G_tar = {1} Ω",
                   fnum(rp_init), fnum(rp_tar))
        r_high, r_low = max(rp_init, rp_tar), min(rp_init, rp_tar)
        q_min = float(np.sqrt(max(0.0, r_high/r_low - 1.0)))
        q = _choose_q(self.get_name(), self._get_q(), q_min, trace)
        r_v = r_high/(q**2 + 1.0)
        trace.step("R_v = R_high/(Q^2 + 1) = {0} Ω", fnum(r_v))

        q_l = float(np.sqrt(max(0.0, rp_init/r_v - 1.0)))
        q_r = float(np.sqrt(max(0.0, rp_tar/r_v - 1.0)))
        b1 = q_l/rp_init - b_init
        x = (q_l + q_r)*r_v
        b2 = q_r/rp_tar - b_tar
        trace.step("Q_L = sqrt(R_p,init/R_v - 1) = {0}, Q_R = sqrt(R_p,tar/R_v - 1) = {1}",
                   fnum(q_l), fnum(q_r))
        trace.step("B1 = Q_L/R_p,init - B_init = {0} S", fnum(b1))
        trace.step("X = (Q_L + Q_R)·R_v = {0} Ω", fnum(x))
        trace.step("B2 = Q_R/R_p,tar - B_tar = {0} S", fnum(b2))

        w = state.w
        sh1 = from_susceptance(Role.SHUNT1, b1, w)
        series = from_reactance(Role.SERIES, x, w)
        sh2 = from_susceptance(Role.SHUNT2, b2, w)
        for comp, what in ((sh1, "Shunt element 1"), (series, "Series element"),
                           (sh2, "Shunt element 2")):
            _describe(comp, trace, what)

        z0 = state.z0
        z_a = y_to_z(y_init + sh1.get_y(w))
        z_b = z_a + series.get_z(w)
        z_out = y_to_z(z_to_y(z_b) + sh2.get_y(w))
        g_a, g_b = z_to_gamma(z_a, z0), z_to_gamma(z_b, z0)
        paths = (
            SmithPath(start=state.gamma1, end=g_a, kind=PathKind.SHUNT, label=_label(sh1, 'sh1')),
            SmithPath(start=g_a, end=g_b, kind=PathKind.SERIES, label=_label(series, 'ser')),
            SmithPath(start=g_b, end=z_to_gamma(z_out, z0), kind=PathKind.SHUNT,
                      label=_label(sh2, 'sh2')))

        ind, cap = ComponentKind.INDUCTOR, ComponentKind.CAPACITOR
        kinds = (sh1.kind, series.kind, sh2.kind)
        filter_type = FilterType.LOW_PASS if kinds == (cap, ind, cap) else FilterType.OTHER
        return [self._make_solution("Solution 1: Pi network", (sh1, series, sh2), filter_type,
                                    z_out, state, trace, paths)]

    # The end of "PiNetLE" class.
