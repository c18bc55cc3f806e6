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
Plotting functions to display matching networks on a Smith chart.
"""

import matplotlib.pyplot as plt
import numpy as np

from .impalg import gamma_to_y, gamma_to_z, wrap_angle, y_to_gamma, z_to_gamma
from .matchdata import PathKind

__all__ = ['pretty_topology_name', 'arc_points', 'smith_chart']

# Reference circles of a chart.
GRID_VALUES = (0.2, 0.5, 1.0, 2.0, 5.0)

_PATH_COLORS = {
    PathKind.SERIES: 'tab:red',
    PathKind.SHUNT: 'tab:blue',
    PathKind.LINE: 'tab:green'
}


def pretty_topology_name(name):
    """
    Give a pretty topology name from a given one.

    Parameters
    ----------
    name : str
        A topology name, e.g. "lnet:le" or "stub:double".

    Returns
    -------
    pretty_name : str
        For example, "L network with lumped elements" or "double stub
        network".
    """
    kind, base = name.split(':')
    if kind == "stub":
        return " ".join([base, "stub network"])
    if base == "le":
        base = "lumped elements"
    else:
        raise ValueError("Unknown element base: {0}".format(name))
    kind = {"lnet": "L", "teenet": "Tee", "pinet": "Pi"}.get(kind, kind)
    return " ".join([kind, "network with", base])
    # The end of "pretty_topology_name" function.


def arc_points(path, num=101):
    """
    Get points of a Smith chart path segment.

    Parameters
    ----------
    path : SmithPath
        A path segment.
    num : int, optional
        The number of points.

    Returns
    -------
    points : numpy.ndarray of complex
        Reflection coefficients from "path.start" to "path.end".
        A series move follows a constant resistance circle, a shunt move
        follows a constant conductance circle, a line move follows a constant
        |gamma| circle clockwise.
    """
    if path.kind is PathKind.SERIES:
        z_a, z_b = gamma_to_z(path.start), gamma_to_z(path.end)
        xs = np.linspace(z_a.imag, z_b.imag, num)
        return np.array([z_to_gamma(complex(z_a.real, x)) for x in xs])
    if path.kind is PathKind.SHUNT:
        y_a, y_b = gamma_to_y(path.start), gamma_to_y(path.end)
        bs = np.linspace(y_a.imag, y_b.imag, num)
        return np.array([y_to_gamma(complex(y_a.real, b)) for b in bs])
    if path.kind is PathKind.LINE:
        mag = abs(path.start)
        ang_a = np.angle(path.start)
        sweep = wrap_angle(ang_a - np.angle(path.end))
        return mag*np.exp(1j*(ang_a - np.linspace(0.0, sweep, num)))
    raise ValueError("Unknown path kind: {0}".format(path.kind))
    # The end of "arc_points" function.


def _draw_grid(ax):
    ang = np.linspace(0.0, 2*np.pi, 361)
    ax.plot(np.cos(ang), np.sin(ang), color='black', linewidth=1.0)
    ax.axhline(0.0, color='grey', linewidth=0.5)
    for val in GRID_VALUES:
        rad = 1.0/(1.0 + val)
        # Constant resistance and constant conductance circles.
        ax.plot(val/(1.0 + val) + rad*np.cos(ang), rad*np.sin(ang),
                color='grey', linewidth=0.5)
        ax.plot(-val/(1.0 + val) + rad*np.cos(ang), rad*np.sin(ang),
                color='grey', linewidth=0.5, linestyle=':')


def smith_chart(solution, ax=None, show=True):
    """
    Plot the trajectory of a solution on a Smith chart.

    Parameters
    ----------
    solution : Solution
        A solution with Smith chart path records.
    ax : matplotlib.axes.Axes, optional
        Axes to draw on. New ones are created if it is not given.
    show : bool, optional
        Show the figure.

    Returns
    -------
    fig : matplotlib.figure.Figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 7), constrained_layout=True)
    else:
        fig = ax.figure
    _draw_grid(ax)
    for path in solution.paths:
        pts = arc_points(path)
        ax.plot(pts.real, pts.imag, color=_PATH_COLORS[path.kind], linewidth=2.0,
                label="{0} ({1})".format(path.label, path.kind.value))
        ax.plot(path.end.real, path.end.imag, marker='o', markersize=4,
                color=_PATH_COLORS[path.kind])
    if solution.paths:
        start = solution.paths[0].start
        ax.plot(start.real, start.imag, marker='s', color='black', label="Start")
        ax.legend(loc='upper right', fontsize='small')
    ax.set_title("{0}\n{1}".format(pretty_topology_name(solution.topology.value), solution.title))
    ax.set_xlim(-1.1, 1.1)
    ax.set_ylim(-1.1, 1.1)
    ax.set_aspect('equal')
    ax.set_axis_off()
    if show:
        fig.show()
    return fig
    # The end of "smith_chart" function.
