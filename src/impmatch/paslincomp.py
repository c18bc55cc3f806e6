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
Passive lossless components.

A matching network element is described by a "Component" tagged value:
its role in a network (series, shunt, ...), its kind (an inductor, a
capacitor, or an absent element) and its value in henries or farads.

Sign conventions at an angular frequency "w":
series reactance x > 0 -> inductor, l = x/w;
series reactance x < 0 -> capacitor, c = -1/(x*w);
shunt susceptance b > 0 -> capacitor, c = b/w;
shunt susceptance b < 0 -> inductor, l = -1/(b*w).
|x| or |b| below "COMP_EPS" means that the element is omitted.
"""

from collections import namedtuple
from enum import Enum

from .impalg import COMP_EPS

__all__ = ['Role', 'ComponentKind', 'Component',
           'from_reactance', 'from_susceptance']


class Role(Enum):
    """
    A position of an element in a matching network.
    """
    SERIES = 'series'
    SHUNT = 'shunt'
    SERIES1 = 'series1'
    SERIES2 = 'series2'
    SHUNT1 = 'shunt1'
    SHUNT2 = 'shunt2'

    def is_series(self):
        return self in (Role.SERIES, Role.SERIES1, Role.SERIES2)


class ComponentKind(Enum):
    INDUCTOR = 'inductor'
    CAPACITOR = 'capacitor'
    ABSENT = 'absent'


class Component(namedtuple('Component', 'role kind value')):
    """
    A lossless lumped element of a matching network.

    Fields
    ------
    role : Role
        A position of the element in the network.
    kind : ComponentKind
        An inductor, a capacitor, or an absent (omitted) element.
    value : float or None
        An inductance in henries or a capacitance in farads.
        It is "None" for an absent element.
    """

    __slots__ = ()

    def is_present(self):
        return self.kind is not ComponentKind.ABSENT

    def get_x(self, w):
        """
        Get the reactance of the element at an angular frequency "w".
        An absent element has zero reactance, so it is correct for series
        elements only (an absent shunt element is an open circuit).
        """
        if self.kind is ComponentKind.INDUCTOR:
            return w*self.value
        if self.kind is ComponentKind.CAPACITOR:
            return -1.0/(w*self.value)
        return 0.0

    def get_b(self, w):
        """
        Get the susceptance of the element at an angular frequency "w".
        An absent element has zero susceptance (an open circuit).
        """
        if self.kind is ComponentKind.INDUCTOR:
            return -1.0/(w*self.value)
        if self.kind is ComponentKind.CAPACITOR:
            return w*self.value
        return 0.0

    def get_z(self, w):
        return 1j*self.get_x(w)

    def get_y(self, w):
        return 1j*self.get_b(w)

    def describe(self):
        """
        Get a short human readable description, e.g. "series: L = 2.6e-09 H".
        """
        if self.kind is ComponentKind.INDUCTOR:
            return "{0}: L = {1:.4g} H".format(self.role.value, self.value)
        if self.kind is ComponentKind.CAPACITOR:
            return "{0}: C = {1:.4g} F".format(self.role.value, self.value)
        return "{0}: omitted".format(self.role.value)


def from_reactance(role, x, w):
    """
    Make a component from a required series reactance.

    Parameters
    ----------
    role : Role
        A position of the element.
    x : float
        A reactance value in ohms.
    w : float
        An angular frequency.

    Returns
    -------
    comp : Component
    """
    if abs(x) < COMP_EPS:
        return Component(role=role, kind=ComponentKind.ABSENT, value=None)
    if x > 0:
        return Component(role=role, kind=ComponentKind.INDUCTOR, value=x/w)
    return Component(role=role, kind=ComponentKind.CAPACITOR, value=-1.0/(x*w))


def from_susceptance(role, b, w):
    """
    Make a component from a required shunt susceptance.

    Parameters
    ----------
    role : Role
        A position of the element.
    b : float
        A susceptance value in siemens.
    w : float
        An angular frequency.

    Returns
    -------
    comp : Component
    """
    if abs(b) < COMP_EPS:
        return Component(role=role, kind=ComponentKind.ABSENT, value=None)
    if b > 0:
        return Component(role=role, kind=ComponentKind.CAPACITOR, value=b/w)
    return Component(role=role, kind=ComponentKind.INDUCTOR, value=-1.0/(b*w))
