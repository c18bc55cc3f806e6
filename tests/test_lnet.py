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

"""Tests for the L network matcher and matching requests."""

import math

import pytest

import impmatch as im
from impmatch.matchdata import normalize
from impmatch.paslincomp import ComponentKind


def make_spec(z_i, z_t, z0=50.0, frequency=2.45e9):
    return im.ImpedanceSpec(z_initial=z_i, z_target=z_t, z0=z0, frequency=frequency)


def test_scenario_reactive_source_to_50_ohm():
    """30+40j -> 50 gives four networks, each verified below 1e-3 ohm."""
    result = im.l_network(make_spec(30 + 40j, 50))
    assert result.topology is im.Topology.L
    assert len(result.solutions) == 4
    titles = [sol.title for sol in result.solutions]
    assert titles == ["Solution 1: Series-First", "Solution 2: Series-First",
                      "Solution 3: Shunt-First", "Solution 4: Shunt-First"]
    for sol in result.solutions:
        assert sol.kind is im.SolutionKind.NORMAL
        assert sol.residual < 1e-3, f"{sol.title}: residual {sol.residual}"
        assert len(sol.paths) == 2
        assert sol.steps, "Derivation steps are missing"


def test_component_order_follows_topology():
    """Series-first lists (series, shunt), shunt-first lists (shunt, series)."""
    result = im.l_network(make_spec(30 + 40j, 50))
    first, last = result.solutions[0], result.solutions[-1]
    assert [c.role for c in first.components] == [im.Role.SERIES, im.Role.SHUNT]
    assert [c.role for c in last.components] == [im.Role.SHUNT, im.Role.SERIES]
    assert first.paths[0].kind is im.PathKind.SERIES
    assert last.paths[0].kind is im.PathKind.SHUNT


def test_resistive_step_up_values_and_filter_types():
    """10 -> 50 ohm: series L + shunt C (low-pass) and series C + shunt L (high-pass)."""
    w = 2*math.pi*1e9
    result = im.l_network(make_spec(10, 50, frequency=1e9))
    assert len(result.solutions) == 2
    low, high = result.solutions
    assert low.filter_type is im.FilterType.LOW_PASS
    assert high.filter_type is im.FilterType.HIGH_PASS
    series = low.get_component(im.Role.SERIES)
    shunt = low.get_component(im.Role.SHUNT)
    assert series.kind is ComponentKind.INDUCTOR
    assert series.value == pytest.approx(20.0/w)
    assert shunt.kind is ComponentKind.CAPACITOR
    assert shunt.value == pytest.approx(0.04/w)
    assert "Δp < 0: the shunt-first topology has no solution." in result.common_steps


def test_zero_discriminant_gives_one_root():
    """A double root of the series-first topology gives one solution."""
    # r_init = 0.5 and g_tar = 2 in normalized units.
    result = im.l_network(make_spec(25, 20 - 10j))
    titles = [sol.title for sol in result.solutions]
    assert titles == ["Solution 1: Series-First", "Solution 2: Shunt-First",
                      "Solution 3: Shunt-First"]
    for sol in result.solutions:
        assert sol.residual < 1e-3


def test_direct_connect():
    """Equal impedances need no network."""
    result = im.l_network(make_spec(10, 10))
    assert len(result.solutions) == 1
    sol = result.solutions[0]
    assert sol.kind is im.SolutionKind.DIRECT_CONNECT
    assert sol.components == ()
    assert sol.steps


@pytest.mark.parametrize("z0, frequency", [(50.0, 1e6), (75.0, 2.45e9), (1.0, 10.0)])
def test_direct_connect_threshold(z0, frequency):
    """|Z_init - Z_tar| below 0.05 ohm is a direct connection for any Z0 and frequency."""
    near = im.l_network(make_spec(50 + 0.049j, 50, z0=z0, frequency=frequency))
    assert [s.kind for s in near.solutions] == [im.SolutionKind.DIRECT_CONNECT]
    far = im.l_network(make_spec(50 + 0.051j, 50, z0=z0, frequency=frequency))
    assert all(s.kind is im.SolutionKind.NORMAL for s in far.solutions)


def test_pure_reactance_source_is_infeasible():
    """0+5j -> 50 cannot be matched by a lossless network."""
    result = im.l_network(make_spec(5j, 50))
    assert len(result.solutions) == 1
    sol = result.solutions[0]
    assert sol.kind is im.SolutionKind.INFEASIBLE
    assert not sol.is_feasible()
    assert sol.components == ()
    assert sol.steps


def test_pure_reactance_threshold():
    """Re(Z_init) below 1e-6 ohm is a pure reactance, above it is not."""
    below = im.l_network(make_spec(5e-7 + 5j, 50))
    assert below.solutions[0].kind is im.SolutionKind.INFEASIBLE
    above = im.l_network(make_spec(1e-5 + 5j, 50))
    assert above.get_feasible(), "A tiny positive resistance must still be matched"


def test_negative_resistance_target_has_no_real_solution():
    """Both discriminants are rejected for a negative resistance target."""
    result = im.l_network(make_spec(50, -10))
    assert [s.kind for s in result.solutions] == [im.SolutionKind.INFEASIBLE]


def test_idempotence():
    """Two calls with the same input give identical solutions."""
    spec = make_spec(30 + 40j, 50)
    assert im.l_network(spec) == im.l_network(spec)


def test_gamma_input():
    """A request by reflection coefficients is converted into impedances."""
    spec = im.ImpedanceSpec(gamma_initial=0.5, gamma_target=0, z0=50, frequency=1e9)
    assert spec.resolve() == pytest.approx((150.0, 50.0))
    result = im.l_network(spec)
    assert result.common_steps[0].startswith("Step 0.")
    assert result.get_feasible()
    for sol in result.solutions:
        assert sol.residual < 1e-3


def test_input_errors():
    """Malformed requests raise InputError, a ValueError."""
    with pytest.raises(im.InputError):
        im.ImpedanceSpec(z0=50, frequency=1e9)
    with pytest.raises(im.InputError):
        im.ImpedanceSpec(z_initial=10, z0=50, frequency=1e9)
    with pytest.raises(im.InputError):
        im.ImpedanceSpec(z_initial=10, z_target=50, gamma_initial=0.1,
                         gamma_target=0.2, z0=50, frequency=1e9)
    with pytest.raises(im.InputError):
        make_spec(10, 50, z0=0)
    with pytest.raises(im.InputError):
        make_spec(10, 50, frequency=-1)
    with pytest.raises(ValueError):
        make_spec("abc", 50)
    with pytest.raises(im.InputError):
        make_spec(complex(float('nan'), 0), 50)


def test_open_circuit_gamma_is_kept():
    """Γ = 1 goes through the open circuit sentinel and comes back as 1."""
    spec = im.ImpedanceSpec(gamma_initial=1, gamma_target=0, z0=50, frequency=1e9)
    state = normalize(spec)
    assert state.gamma1 == 1
    assert state.gamma2 == 0


def test_replace_and_make_are_validated():
    """Copies made by _replace and _make are checked like new requests."""
    spec = make_spec(10, 50)
    with pytest.raises(im.InputError):
        spec._replace(z0=0)
    with pytest.raises(im.InputError):
        im.ImpedanceSpec._make([10, 50, None, None, 0, 1e9])
    with pytest.raises(im.InputError):
        spec._replace(gamma_initial=0.1, gamma_target=0.2)
    other = spec._replace(frequency=2e9)
    assert isinstance(other, im.ImpedanceSpec)
    assert other.frequency == 2e9
    assert other.z_initial == 10
    assert im.ImpedanceSpec._make(spec) == spec
