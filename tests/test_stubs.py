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

"""Tests for the single, balanced and double stub matchers."""

import pytest

import impmatch as im
from impmatch._matchtl import line_admittance, rotate, stub_admittance, stub_length


def make_spec(z_i, z_t, z0=50.0, frequency=2.45e9):
    return im.ImpedanceSpec(z_initial=z_i, z_target=z_t, z0=z0, frequency=frequency)


def check_lengths(sol):
    lengths = sol.lengths
    assert 0.0 <= lengths.d_lambda < 0.5, f"d = {lengths.d_lambda}"
    assert 0.0 <= lengths.stub_lambda < 0.5, f"l = {lengths.stub_lambda}"
    lambda_mm = 299792458.0/2.45e9*1e3
    assert lengths.stub_mm == pytest.approx(lengths.stub_lambda*lambda_mm)


@pytest.mark.parametrize("b, stub_type, expected", [
    (0.0, im.StubType.SHORT, 0.25),
    (0.0, im.StubType.OPEN, 0.0),
    (5e-7, im.StubType.OPEN, 0.0),
    (1.0, im.StubType.OPEN, 0.125),
    (1.0, im.StubType.SHORT, 0.375),
    (-1.0, im.StubType.OPEN, 0.375),
    (-1.0, im.StubType.SHORT, 0.125),
])
def test_stub_length(b, stub_type, expected):
    """Short: tan(beta*l) = -1/b, open: tan(beta*l) = b, l in [0, 0.5)."""
    assert stub_length(b, stub_type) == pytest.approx(expected)


def test_stub_length_above_threshold():
    """A susceptance above 1e-6 gives a nonzero open stub."""
    assert stub_length(2e-6, im.StubType.OPEN) > 0.0


def test_stub_admittance_and_line():
    """Stub admittances and the line transformation."""
    assert stub_admittance(0.125, im.StubType.OPEN) == pytest.approx(1j)
    assert stub_admittance(0.125, im.StubType.SHORT) == pytest.approx(-1j)
    assert stub_admittance(0.25, im.StubType.SHORT) == pytest.approx(0j, abs=1e-12)
    assert abs(stub_admittance(0.0, im.StubType.SHORT)) >= 1e9
    assert rotate(0.5, 0.25) == pytest.approx(-0.5)
    # A matched line does not change the admittance.
    assert line_admittance(1.0, 1.0) == pytest.approx(1.0)


def test_single_stub_resistive_load():
    """100 -> 50 ohm: two intersections, each with a short and an open stub."""
    result = im.single_stub(make_spec(100, 50))
    assert result.topology is im.Topology.SINGLE_STUB
    assert len(result.solutions) == 4
    assert [s.stub_type for s in result.solutions] == [
        im.StubType.SHORT, im.StubType.OPEN, im.StubType.SHORT, im.StubType.OPEN]
    assert [s.title for s in result.solutions] == [
        "Sol 1 (Short)", "Sol 2 (Open)", "Sol 3 (Short)", "Sol 4 (Open)"]
    for sol in result.solutions:
        check_lengths(sol)
        assert sol.residual < 1e-6, f"{sol.title}: residual {sol.residual}"
        assert [p.kind for p in sol.paths] == [im.PathKind.LINE, im.PathKind.SHUNT]
    # Both terminations of one intersection share the line length.
    assert result.solutions[0].lengths.d_lambda == result.solutions[1].lengths.d_lambda


def test_conjugate_pair_single_stub():
    """20-30j -> 20+30j: a line alone and the stub solutions."""
    result = im.single_stub(make_spec(20 - 30j, 20 + 30j))
    assert result.solutions, "A conjugate pair must be matched"
    assert result.solutions[0].kind is im.SolutionKind.LINE_ONLY
    assert result.solutions[0].residual < 1e-3
    stubs = result.solutions[1:]
    types = {s.stub_type for s in stubs}
    assert types == {im.StubType.SHORT, im.StubType.OPEN}
    for sol in stubs:
        check_lengths(sol)
        assert sol.residual < 1e-6


def test_pure_reactance_gives_empty_result():
    """0+5j -> 50: no stub network exists."""
    for solver in (im.single_stub, im.balanced_stub, im.double_stub):
        result = solver(make_spec(5j, 50))
        assert result.is_empty(), f"{solver.__name__} must return no solutions"
        assert result.common_steps


def test_direct_connect():
    """Equal impedances need no stub."""
    for solver in (im.single_stub, im.balanced_stub, im.double_stub):
        result = solver(make_spec(75, 75.01))
        assert [s.kind for s in result.solutions] == [im.SolutionKind.DIRECT_CONNECT]
        assert result.solutions[0].lengths.stub_lambda == 0.0


def test_conductance_bounds():
    """g_tar just above g_max is accepted within 1e-4, further above it is not."""
    # |gamma_init| = 1/3 for 100 ohm, so g_max = 2 and a quarter wave line is
    # a line only solution for both cases.
    inside = im.single_stub(make_spec(100, 50/2.00005))
    assert [s.kind for s in inside.solutions] == [
        im.SolutionKind.LINE_ONLY, im.SolutionKind.NORMAL, im.SolutionKind.NORMAL]
    assert inside.solutions[0].lengths.d_lambda == pytest.approx(0.25)
    outside = im.single_stub(make_spec(100, 50/2.001))
    assert [s.kind for s in outside.solutions] == [im.SolutionKind.LINE_ONLY]


def test_out_of_range_conductance_is_empty():
    """100 -> 10 ohm: g_tar = 5 is out of [0.5, 2]."""
    result = im.single_stub(make_spec(100, 10))
    assert result.is_empty()
    assert any("out of [g_min, g_max]" in step for step in result.common_steps)


def test_balanced_stub_splits_susceptance():
    """Each of two stubs provides a half of the susceptance."""
    single = im.single_stub(make_spec(100, 50))
    balanced = im.balanced_stub(make_spec(100, 50))
    assert len(balanced.solutions) == 4
    for sol_s, sol_b in zip(single.solutions, balanced.solutions):
        assert sol_b.lengths.d_lambda == pytest.approx(sol_s.lengths.d_lambda)
        assert sol_b.lengths.stub_lambda != pytest.approx(sol_s.lengths.stub_lambda)
        assert sol_b.residual < 1e-6
        check_lengths(sol_b)
    assert any("b_each = b/2" in step for step in balanced.solutions[0].steps)


@pytest.mark.parametrize("spacing", [im.StubSpacing.LAMBDA_OVER_8,
                                     im.StubSpacing.THREE_LAMBDA_OVER_8])
def test_double_stub(spacing):
    """100 -> 50 ohm: two roots, each with short and open stubs."""
    result = im.double_stub(make_spec(100, 50), spacing=spacing)
    assert len(result.solutions) == 4
    for sol in result.solutions:
        assert sol.kind is im.SolutionKind.NORMAL
        assert sol.lengths.d_lambda == 0.0
        assert sol.lengths.spacing_lambda == spacing.lambda_factor
        assert 0.0 <= sol.lengths.stub_lambda < 0.5
        assert 0.0 <= sol.lengths.stub2_lambda < 0.5
        assert sol.residual < 1e-6, f"{sol.title}: residual {sol.residual}"
        assert [p.kind for p in sol.paths] == [
            im.PathKind.SHUNT, im.PathKind.LINE, im.PathKind.SHUNT]


def test_double_stub_forbidden_region():
    """g_init > 2/g_tar gives a negative discriminant and no solution."""
    result = im.double_stub(make_spec(10, 50), spacing=im.StubSpacing.LAMBDA_OVER_8)
    assert result.is_empty()
    assert any("No solution" in step for step in result.common_steps)


def test_double_stub_reactive_target_is_unsupported():
    """g_tar = 0 is not supported."""
    result = im.double_stub(make_spec(100, 50j))
    assert result.is_empty()
    assert any("purely reactive target" in step for step in result.common_steps)


def test_spacing_option():
    """A spacing can be given by its name or its value."""
    matcher = im.make_matcher('stub:double')
    assert matcher.get_params().spacing is im.StubSpacing.LAMBDA_OVER_8
    matcher.set_params(spacing='3lambda/8')
    assert matcher.get_params().spacing is im.StubSpacing.THREE_LAMBDA_OVER_8
    with pytest.raises(ValueError):
        matcher.set_params(spacing='lambda/4')


@pytest.mark.parametrize("solver", [im.single_stub, im.balanced_stub])
def test_line_only_threshold(solver):
    """|Γ| difference just below 1e-3 gives a line only solution, just above does not."""
    below = solver(im.ImpedanceSpec(gamma_initial=0.5, gamma_target=0.5009j,
                                    z0=50.0, frequency=2.45e9))
    assert below.solutions[0].kind is im.SolutionKind.LINE_ONLY
    above = solver(im.ImpedanceSpec(gamma_initial=0.5, gamma_target=0.5011j,
                                    z0=50.0, frequency=2.45e9))
    kinds = [s.kind for s in above.solutions]
    assert kinds, f"{solver.__name__} must find stub solutions"
    assert im.SolutionKind.LINE_ONLY not in kinds
