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

"""Tests for the Tee and Pi network matchers."""

import logging
import math

import pytest

import impmatch as im
from impmatch.paslincomp import ComponentKind

W = 2*math.pi*1e9


def make_spec(z_i, z_t):
    return im.ImpedanceSpec(z_initial=z_i, z_target=z_t, z0=50.0, frequency=1e9)


def test_tee_default_q():
    """10 -> 50 ohm: Q_min = 2, so Q = 3 and R_v = 100 ohm."""
    result = im.tee_network(make_spec(10, 50))
    assert len(result.solutions) == 1
    sol = result.solutions[0]
    assert sol.kind is im.SolutionKind.NORMAL
    roles = [c.role for c in sol.components]
    assert roles == [im.Role.SERIES1, im.Role.SHUNT, im.Role.SERIES2]
    ser1, shunt, ser2 = sol.components
    # X1 = 30 ohm, B = 0.04 S, X2 = 50 ohm.
    assert ser1.value == pytest.approx(30.0/W)
    assert shunt.kind is ComponentKind.CAPACITOR
    assert shunt.value == pytest.approx(0.04/W)
    assert ser2.value == pytest.approx(50.0/W)
    assert sol.filter_type is im.FilterType.LOW_PASS
    assert sol.residual < 1e-6
    assert len(sol.paths) == 3
    assert any("R_v = R_low·(Q^2 + 1) = 100 Ω" == step for step in sol.steps)


def test_pi_default_q():
    """50 -> 10 ohm: Q = 3 and R_v = 5 ohm."""
    result = im.pi_network(make_spec(50, 10))
    sol = result.solutions[0]
    roles = [c.role for c in sol.components]
    assert roles == [im.Role.SHUNT1, im.Role.SERIES, im.Role.SHUNT2]
    sh1, series, sh2 = sol.components
    # B1 = 0.06 S, X = 20 ohm, B2 = 0.1 S.
    assert sh1.value == pytest.approx(0.06/W)
    assert series.value == pytest.approx(20.0/W)
    assert sh2.value == pytest.approx(0.1/W)
    assert sol.filter_type is im.FilterType.LOW_PASS
    assert sol.residual < 1e-6


@pytest.mark.parametrize("solver", [im.tee_network, im.pi_network])
def test_reactive_ports_give_conjugate_match(solver):
    """The network presents conj(Z_tar) to the source."""
    result = solver(make_spec(10 + 5j, 50 - 20j), q=4)
    sol = result.solutions[0]
    assert sol.kind is im.SolutionKind.NORMAL
    assert sol.residual < 1e-6, f"Residual {sol.residual}"
    end = sol.paths[-1].end
    expected = im.z_to_gamma((50 + 20j)/50.0)
    assert abs(end - expected) < 1e-6


@pytest.mark.parametrize("solver", [im.tee_network, im.pi_network])
def test_low_q_is_adjusted(solver, caplog):
    """A Q below Q_min is raised to Q_min + 0.1 with a warning."""
    with caplog.at_level(logging.WARNING, logger="impmatch"):
        result = solver(make_spec(10, 50), q=1.0)
    sol = result.solutions[0]
    assert sol.kind is im.SolutionKind.NORMAL
    assert any("adjusted to Q = 2.1" in step for step in sol.steps)
    assert "below Q_min" in caplog.text
    assert sol.residual < 1e-6


def test_tee_virtual_resistance_floor():
    """Equal port resistances: Q_min = 0, R_v = 1.05*R_high if Q is tiny."""
    result = im.tee_network(make_spec(50, 50 + 10j), q=0.1)
    sol = result.solutions[0]
    assert any("R_v is raised to" in step for step in sol.steps)
    assert sol.residual < 1e-6


@pytest.mark.parametrize("solver", [im.tee_network, im.pi_network])
def test_pure_reactance_is_infeasible(solver):
    """A zero resistance port gives one infeasible solution."""
    result = solver(make_spec(5j, 50))
    assert len(result.solutions) == 1
    sol = result.solutions[0]
    assert sol.kind is im.SolutionKind.INFEASIBLE
    assert sol.components == ()
    assert sol.steps


def test_negative_q_is_rejected():
    """Q must be positive."""
    with pytest.raises(ValueError):
        im.tee_network(make_spec(10, 50), q=-1)


def test_params():
    """Q is an option of a matcher."""
    matcher = im.make_matcher('pinet:le')
    assert matcher.get_params().q is None
    assert matcher.set_params(q=5).get_params().q == 5.0
    assert matcher.get_params().name == 'pinet:le'


@pytest.mark.parametrize("solver", [im.tee_network, im.pi_network])
@pytest.mark.parametrize("spec", [
    make_spec(0, 50),
    im.ImpedanceSpec(gamma_initial=-1, gamma_target=0, z0=50.0, frequency=1e9),
])
def test_short_circuit_source_is_infeasible(solver, spec):
    """A short circuit source (Z = 0 or Γ = -1) gives one infeasible solution."""
    result = solver(spec)
    assert len(result.solutions) == 1
    sol = result.solutions[0]
    assert sol.kind is im.SolutionKind.INFEASIBLE, f"{solver.__name__}: {sol.kind}"
    assert sol.components == ()
