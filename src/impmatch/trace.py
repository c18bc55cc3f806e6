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
Derivation traces.

A matcher writes the steps of its derivation into a "Trace" object instead
of mixing text formatting into its algorithm. A trace keeps the steps in
order and mirrors each of them to the "logging" module at DEBUG level, so
the same derivation can be rendered by a caller or followed in a log.
"""

import logging

__all__ = ['Trace']

logger = logging.getLogger(__name__)


class Trace:
    """
    An ordered record of derivation steps.
    """

    def __init__(self, name=''):
        """
        Parameters
        ----------
        name : str, optional
            A name that prefixes the log records, e.g. a matcher name.
        """
        self.__name = name
        self.__steps = []

    def __copy__(self):
        """
        A "copy" operation is disabled.
        """
        raise TypeError("A 'copy' operation is not supported.")

    def __len__(self):
        return len(self.__steps)

    def step(self, text, *args):
        """
        Add a step.

        Parameters
        ----------
        text : str
            A step text. If "args" are given, it is a format string.
        args : tuple
            Arguments of "str.format".

        Returns
        -------
        "self" reference to the caller object.
        """
        if args:
            text = text.format(*args)
        self.__steps.append(text)
        logger.debug("[%s] %s", self.__name, text)
        return self

    def title(self, text, *args):
        """
        Add a heading step. A heading is a step that ends with a colon.
        """
        text = text.format(*args) if args else text
        return self.step(text if text.endswith(':') else text + ':')

    def get_steps(self):
        """
        Get the recorded steps.

        Returns
        -------
        steps : tuple of str
        """
        return tuple(self.__steps)
