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

"""Tests for passive lossless components."""

import copy
import math
import logging

import pytest

from impmatch.paslincomp import (Component, ComponentKind, Role,
                                 from_reactance, from_susceptance)
from impmatch.trace import Trace

W = 2*math.pi*1e9


def test_positive_reactance_is_inductor():
    """x > 0 -> L = x/w."""
    comp = from_reactance(Role.SERIES, 50.0, W)
    assert comp.kind is ComponentKind.INDUCTOR
    assert comp.value == pytest.approx(50.0/W)
    assert comp.get_x(W) == pytest.approx(50.0)


def test_negative_reactance_is_capacitor():
    """x < 0 -> C = -1/(x*w)."""
    comp = from_reactance(Role.SERIES, -50.0, W)
    assert comp.kind is ComponentKind.CAPACITOR
    assert comp.value == pytest.approx(1.0/(50.0*W))
    assert comp.get_z(W) == pytest.approx(-50j)


def test_susceptance_sign_rule():
    """b > 0 -> capacitor, b < 0 -> inductor."""
    cap = from_susceptance(Role.SHUNT, 0.02, W)
    ind = from_susceptance(Role.SHUNT, -0.02, W)
    assert cap.kind is ComponentKind.CAPACITOR
    assert cap.value == pytest.approx(0.02/W)
    assert ind.kind is ComponentKind.INDUCTOR
    assert ind.value == pytest.approx(1.0/(0.02*W))
    assert ind.get_y(W) == pytest.approx(-0.02j)


def test_tiny_values_give_absent_components():
    """|x| or |b| below 1e-9 omits an element."""
    comp = from_reactance(Role.SERIES, 5e-10, W)
    assert comp.kind is ComponentKind.ABSENT
    assert comp.value is None
    assert not comp.is_present()
    assert comp.get_x(W) == 0.0
    assert from_susceptance(Role.SHUNT, -5e-10, W).kind is ComponentKind.ABSENT
    assert from_reactance(Role.SERIES, 2e-9, W).kind is ComponentKind.INDUCTOR


def test_describe_and_roles():
    """A description names the role and the value."""
    comp = Component(role=Role.SHUNT1, kind=ComponentKind.CAPACITOR, value=1e-12)
    assert comp.describe() == "shunt1: C = 1e-12 F"
    assert Role.SERIES2.is_series()
    assert not Role.SHUNT.is_series()


def test_trace_records_and_logs(caplog):
    """A trace keeps the steps and mirrors them to the log."""
    trace = Trace("lnet:le")
    with caplog.at_level(logging.DEBUG, logger="impmatch.trace"):
        trace.title("Step 1. Normalize")
        trace.step("z = {0}", 2)
    assert trace.get_steps() == ("Step 1. Normalize:", "z = 2")
    assert len(trace) == 2
    assert "[lnet:le] z = 2" in caplog.text
    with pytest.raises(TypeError):
        copy.copy(trace)
