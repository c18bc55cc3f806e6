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
Complex impedance algebra.
The basic conversions between impedance "z", admittance "y" and reflection
coefficient "gamma" that are shared by all the matchers of this package.

All the conversions are guarded against the points where the Moebius
transform is singular:
z = inf <-> gamma = 1 (open circuit),
z = 0 <-> gamma = -1 (short circuit).
An infinite impedance is represented by a large sentinel value "Z_INF".
A matcher composes these conversions many times, so no division by (almost)
zero is allowed to produce "inf" or "nan" values here.
"""

import numpy as np

__all__ = [
    'Z_INF', 'DIRECT_TOL', 'RES_EPS', 'DISC_EPS', 'ROOT_EPS', 'COMP_EPS',
    'GAMMA_TOL', 'STUB_B_EPS', 'G_BOUND_TOL',
    'z_to_gamma', 'gamma_to_z', 'z_to_y', 'y_to_z', 'gamma_to_y',
    'y_to_gamma', 'symmetric_roots', 'wrap_angle']

# -- Tolerances ---------------------------------------------------------------
# These values are part of the behaviour of the matchers. Changing any of them
# changes which inputs are reported as feasible, degenerate or matched.

# A sentinel magnitude of an "infinite" impedance (or admittance).
Z_INF = 1e9
# Two impedances closer than this (in ohms) are considered as matched.
DIRECT_TOL = 0.05
# A resistance (in ohms) below this value is considered as zero.
RES_EPS = 1e-6
# A discriminant in [-DISC_EPS, 0) is treated as zero.
DISC_EPS = 1e-9
# A root magnitude below this value is a double root.
ROOT_EPS = 1e-9
# A reactance (ohms) or a susceptance (siemens) below this value means that
# a component is omitted.
COMP_EPS = 1e-9
# Equal reflection coefficient magnitudes (a line only solution).
GAMMA_TOL = 1e-3
# A normalized stub susceptance below this value means "no stub effect".
STUB_B_EPS = 1e-6
# Tolerance of the conductance bounds of a single-stub intersection.
G_BOUND_TOL = 1e-4


def z_to_gamma(z, z0=1.0):
    """
    Convert an impedance into a reflection coefficient.
    gamma = (z - z0)/(z + z0).

    Parameters
    ----------
    z : complex
        An impedance value. It is normalized if "z0" is 1.
    z0 : float, optional
        A reference impedance.

    Returns
    -------
    gamma : complex
        A reflection coefficient. It equals 1 (open circuit) for a
        non-finite impedance or an impedance with |z| >= Z_INF.
    """
    z = complex(z)
    if not np.isfinite(z) or abs(z) >= Z_INF:
        return 1.0 + 0.0j
    den = z + z0
    if den == 0:
        # A negative resistance equal to "-z0" reflects infinitely.
        return complex(Z_INF, 0.0)
    return (z - z0)/den


def gamma_to_z(gamma, z0=1.0):
    """
    Convert a reflection coefficient into an impedance.
    z = z0*(1 + gamma)/(1 - gamma).

    Parameters
    ----------
    gamma : complex
        A reflection coefficient.
    z0 : float, optional
        A reference impedance.

    Returns
    -------
    z : complex
        An impedance value. If |1 - gamma| < 1e-9, it is the sentinel value
        Z_INF (open circuit).
    """
    gamma = complex(gamma)
    if abs(1.0 - gamma) < 1e-9:
        return complex(Z_INF, 0.0)
    return z0*(1.0 + gamma)/(1.0 - gamma)


def z_to_y(z):
    """
    Invert an impedance into an admittance.
    A (nearly) zero impedance gives the sentinel admittance Z_INF.
    It works the same way for normalized values and for values in ohms.
    """
    z = complex(z)
    if abs(z) < 1.0/Z_INF:
        return complex(Z_INF, 0.0)
    return 1.0/z


# Inversion is symmetric.
y_to_z = z_to_y


def gamma_to_y(gamma):
    """
    Convert a reflection coefficient into a normalized admittance.
    y = (1 - gamma)/(1 + gamma).
    """
    gamma = complex(gamma)
    if abs(1.0 + gamma) < 1e-9:
        return complex(Z_INF, 0.0)
    return (1.0 - gamma)/(1.0 + gamma)


def y_to_gamma(y):
    """
    Convert a normalized admittance into a reflection coefficient.
    gamma = (1 - y)/(1 + y).
    """
    return z_to_gamma(z_to_y(y))


def symmetric_roots(disc):
    """
    Get the real roots of x^2 = disc.

    Parameters
    ----------
    disc : float
        A discriminant value.

    Returns
    -------
    roots : tuple of float
        () - if disc < -DISC_EPS (no real roots);
        (0.0,) - if the root magnitude is not greater than ROOT_EPS
            (a double root, including slightly negative discriminants);
        (+sqrt(disc), -sqrt(disc)) - otherwise. The positive root is first.
    """
    if not disc >= -DISC_EPS:  # It also rejects "nan".
        return ()
    root = float(np.sqrt(max(0.0, disc)))
    if root <= ROOT_EPS:
        return (0.0,)
    return (root, -root)


def wrap_angle(ang, period=2*np.pi):
    """
    Wrap an angle into [0, period).
    """
    ang = float(np.mod(ang, period))
    # "np.mod" can return "period" itself for tiny negative inputs.
    if ang >= period:
        ang -= period
    return ang
