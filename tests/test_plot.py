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

"""Smoke tests for Smith chart plotting."""

import numpy as np
import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

import impmatch as im  # noqa: E402
from impmatch.plot import arc_points, pretty_topology_name, smith_chart  # noqa: E402


def test_pretty_topology_name():
    assert pretty_topology_name("lnet:le") == "L network with lumped elements"
    assert pretty_topology_name("stub:double") == "double stub network"


@pytest.mark.parametrize("solver, z_t", [
    (im.l_network, 50),
    (im.pi_network, 50 - 20j),
    (im.single_stub, 50),
    (im.double_stub, 50),
])
def test_arcs_connect_path_ends(solver, z_t):
    """Each arc starts and ends at the path records."""
    spec = im.ImpedanceSpec(z_initial=100 + 30j, z_target=z_t, z0=50, frequency=1e9)
    sol = solver(spec).solutions[0]
    for path in sol.paths:
        pts = arc_points(path)
        assert abs(pts[0] - path.start) < 1e-6, f"{path.label}: bad start"
        assert abs(pts[-1] - path.end) < 1e-6, f"{path.label}: bad end"
        assert np.all(np.abs(pts) <= 1.0 + 1e-9)


def test_smith_chart_returns_figure():
    """A chart is drawn without showing it."""
    import matplotlib.pyplot as plt

    spec = im.ImpedanceSpec(z_initial=30 + 40j, z_target=50, z0=50, frequency=2.45e9)
    sol = im.l_network(spec).solutions[0]
    fig = smith_chart(sol, show=False)
    ax = fig.axes[0]
    assert len(ax.lines) > len(sol.paths)
    plt.close(fig)
