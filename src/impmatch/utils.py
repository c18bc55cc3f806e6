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
Matching utilities.
A library of small tools around the matchers: parsing and printing of
complex numbers, polar/rectangular conversions, and electrical length
conversions.
"""

import re

import numpy as np
from scipy.constants import speed_of_light

__all__ = ['parse_complex', 'complex_to_input_string', 'rect_to_polar',
           'polar_to_rect', 'format_num', 'sci_notation_str',
           'wavelength_mm', 'lambda_to_mm']

# A number with an imaginary part written after "j": "30+j40", "-j5", "j2.5".
_JFIRST_RE = re.compile(
    r'^(?P<re>[+-]?\d+(?:\.\d*)?(?:e[+-]?\d+)?)?'
    r'(?P<sign>[+-])?j(?P<im>\d+(?:\.\d*)?(?:e[+-]?\d+)?)$')


def parse_complex(text):
    """
    Convert a string into a complex number.

    Parameters
    ----------
    text : str
        A complex number in one of the common notations:
        "30+j40", "30-j20", "j5", "-j5", "30", "30+40j", "30 - 40j".
        Spaces are ignored, "J" is the same as "j".

    Returns
    -------
    num : complex

    Raises
    ------
    ValueError
        If the text is not a complex number.
    """
    src = text
    text = text.replace(' ', '').lower()
    if not text:
        raise ValueError("An empty string is not a complex number.")
    match = _JFIRST_RE.match(text)
    if match is not None:
        real = match.group('re')
        sign = match.group('sign')
        if real is not None and sign is None:
            # "30j40" - an imaginary part without a sign after a real part.
            raise ValueError("Malformed complex number: {0!r} (expected 30+j40 or 30-j20).".format(src))
        imag = float(match.group('im'))
        if sign == '-':
            imag = -imag
        return complex(float(real) if real is not None else 0.0, imag)
    try:
        return complex(text)
    except ValueError:
        raise ValueError("Malformed complex number: {0!r} (expected 30+j40 or 30-j20).".format(src)) from None


def complex_to_input_string(num, digits=4):
    """
    Convert a complex number into the "30.0000+j40.0000" notation that is
    accepted back by "parse_complex".
    """
    sign = '+' if num.imag >= 0 else '-'
    return "{0:.{2}f}{1}j{3:.{2}f}".format(num.real, sign, digits, abs(num.imag))


def rect_to_polar(num, in_degree=True):
    """
    Convert a complex number into the polar form.

    Returns
    -------
    mag, ang : float
        A magnitude and an angle (in degrees by default).
    """
    mag = float(abs(num))
    ang = float(np.angle(num, deg=in_degree))
    return mag, ang


def polar_to_rect(mag, ang, in_degree=True):
    """
    Convert a magnitude and an angle (in degrees by default) into a complex
    number.
    """
    if in_degree:
        ang = np.deg2rad(ang)
    return complex(mag*np.cos(ang), mag*np.sin(ang))


def sci_notation_str(num_str):
    """
    Prettify an exponent notation: "1.23e+04" -> "1.23×10^4",
    "4.7e-09" -> "4.7×10^-9". Other strings are returned as is.
    """
    if 'e' not in num_str and 'E' not in num_str:
        return num_str
    mant, expo = re.split(r'[eE]', num_str)
    expo = int(expo)
    return "{0}×10^{1}".format(mant, expo)


def format_num(num, precision=4, polar=False, bracket=False):
    """
    Make a compact human readable string of a number for derivation steps.

    Parameters
    ----------
    num : float, complex or str
        A value to print. A complex number with a negligible imaginary part
        is printed as a real number. A string is printed as is.
    precision : int, optional
        A number of significant digits.
    polar : bool, optional
        Print complex numbers as "mag∠ang°".
    bracket : bool, optional
        Wrap negative real numbers, complex numbers and strings in brackets.

    Returns
    -------
    text : str
    """
    def real_str(val):
        if abs(val) < 1e-12:
            return '0'
        return sci_notation_str("{0:.{1}g}".format(val, precision))

    if isinstance(num, complex) and abs(num.imag) <= 1e-12:
        num = num.real
    if isinstance(num, complex):
        if polar:
            mag, ang = rect_to_polar(num)
            text = "{0}∠{1}°".format(real_str(mag), real_str(ang))
        else:
            text = ''
            if abs(num.real) > 1e-12:
                text = real_str(num.real)
                if num.imag > 0:
                    text += '+'
            text += real_str(num.imag) + 'j'
    elif isinstance(num, str):
        text = num
    else:
        text = real_str(float(num))
    if bracket and (isinstance(num, (complex, str)) or num < 0):
        text = '(' + text + ')'
    return text


def wavelength_mm(frequency, vf=1.0):
    """
    Get a guided wavelength in millimeters.
    lambda = c*vf/f, where
    c - the speed of light in vacuum, vf - a velocity factor, f - a frequency.

    Parameters
    ----------
    frequency : float
        A frequency in hertz.
    vf : float, optional
        A velocity factor of a line. The matchers always use 1.0.

    Returns
    -------
    lambda_mm : float
        A wavelength in millimeters.
    """
    return speed_of_light*vf/frequency*1e3


def lambda_to_mm(length_lambda, frequency, vf=1.0):
    """
    Convert an electrical length (a fraction of a wavelength) into
    millimeters.
    """
    return length_lambda*wavelength_mm(frequency, vf=vf)
