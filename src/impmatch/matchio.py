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
Matching data input and output.

INI format to describe a matching request and to store a summary of a
result. Python has a built-in parser for .ini files ("configparser" module).
An example of a request file:

    [request]
    z_initial = 10+j5
    z_target = 50
    z0 = 50
    frequency = 1e9
    topology = lnet:le

A request can use "gamma_initial" and "gamma_target" instead of the
impedances. Optional keys: "topology", "q" (Tee and Pi networks), "spacing"
(a double stub network, "lambda/8" or "3lambda/8").

Comma separated values (CSV) files to store the solutions of a result, one
row per solution. Python has a built-in parser for .csv files ("csv" module).
"""

from collections import namedtuple
import configparser
import csv
import logging
from pathlib import Path

from .matchdata import ImpedanceSpec, InputError, Topology
from .utils import complex_to_input_string, parse_complex

__all__ = ['Request', 'load_request', 'save_result']

logger = logging.getLogger(__name__)

Request = namedtuple('Request', 'spec topology options')
# The fields:
# spec : ImpedanceSpec
#     A matching request.
# topology : Topology or None
#     A requested topology, if it is given in a file.
# options : dict
#     Options of a matcher, e.g. {'q': 3.0}.

_COMPLEX_KEYS = ('z_initial', 'z_target', 'gamma_initial', 'gamma_target')


def _make_path(dirname):
    """
    Make a "pathlib.Path" object.

    Parameters
    ----------
    dirname : str or Path
        An absolute path or a relative path in the current working directory.

    Returns
    -------
    path : Path
    """
    if isinstance(dirname, str):
        path = Path(dirname)
    elif isinstance(dirname, Path):
        path = dirname
    else:
        raise TypeError("Unexpected 'dirname' type: {0}.".format(type(dirname)))
    if not path.is_absolute():
        path = Path.cwd().joinpath(path)
    return path


def load_request(filename, section='request'):
    """
    Load a matching request from an INI file.

    Parameters
    ----------
    filename : str or Path
        A path to a file.
    section : str, optional
        The name of a section that contains a request.

    Returns
    -------
    request : Request

    Raises
    ------
    InputError
        If a file has no required section, or a request is malformed.
    FileNotFoundError
        If a file does not exist.
    """
    path = _make_path(filename)
    cfg_parser = configparser.ConfigParser(interpolation=None)
    with path.open(mode='r', encoding='utf-8') as file_obj:
        cfg_parser.read_file(file_obj)
    if not cfg_parser.has_section(section):
        raise InputError("No [{0}] section in '{1}'.".format(section, path))
    data = cfg_parser[section]

    kwargs = dict()
    for key in _COMPLEX_KEYS:
        if key in data:
            try:
                kwargs[key] = parse_complex(data[key])
            except ValueError as exc:
                raise InputError("'{0}': {1}".format(key, exc)) from None
    for key in ('z0', 'frequency'):
        if key in data:
            try:
                kwargs[key] = data.getfloat(key)
            except ValueError:
                raise InputError("'{0}' is not a number: {1!r}.".format(key, data[key])) from None
    spec = ImpedanceSpec(**kwargs)

    topology = None
    if 'topology' in data:
        try:
            topology = Topology(data['topology'].strip())
        except ValueError:
            raise InputError("Unknown topology: {0!r}.".format(data['topology'])) from None

    options = dict()
    if 'q' in data:
        try:
            options['q'] = data.getfloat('q')
        except ValueError:
            raise InputError("'q' is not a number: {0!r}.".format(data['q'])) from None
    if 'spacing' in data:     options['spacing'] = data['spacing'].strip()
    logger.info("A request is loaded from '%s'.", path)
    return Request(spec=spec, topology=topology, options=options)
    # The end of "load_request" function.


def _lengths_str(lengths):
    if lengths is None:
        return ""
    return " ".join("{0}={1:.6g}".format(name, val)
                    for name, val in lengths._asdict().items() if val is not None)


def save_result(result, dirname="matchdata", spec=None):
    """
    Save a matching result into a memory storage device.
    It produces 2 files:
    "result.ini" which contains a request (if it is given), the topology,
        the common derivation steps and a section per solution;
    "solutions.csv" which contains one row per solution.
    If the files already exist in a required directory, then they will be
    rewritten.

    Parameters
    ----------
    result : MatchingResult
        A result to save.
    dirname : str or pathlib.Path
        A directory in which the data will be saved. It is created if it
        does not exist.
    spec : ImpedanceSpec, optional
        The request of the result.

    Returns
    -------
    path : Path
        The path of the directory.
    """
    cfg_parser = configparser.ConfigParser(interpolation=None)

    # Section: [request].
    if spec is not None:
        req = dict()
        for key in _COMPLEX_KEYS:
            val = getattr(spec, key)
            if val is not None:     req[key] = complex_to_input_string(val, digits=6)
        req['z0'] = repr(spec.z0)
        req['frequency'] = repr(spec.frequency)
        req['topology'] = result.topology.value
        cfg_parser['request'] = req

    # Section: [result].
    cfg_parser['result'] = {
        'topology': result.topology.value,
        'solutions': str(len(result.solutions))}

    # Section: [result.steps].
    cfg_parser['result.steps'] = {
        'step_{0:02d}'.format(idx): text for idx, text in enumerate(result.common_steps, 1)}

    # Sections: [solution.N].
    for idx, sol in enumerate(result.solutions, 1):
        sol_dict = {
            'title': sol.title,
            'kind': sol.kind.value,
            'filter_type': sol.filter_type.value,
            'stub_type': sol.stub_type.value,
            'residual': "" if sol.residual is None else repr(sol.residual)}
        for comp in sol.components:
            sol_dict[comp.role.value] = comp.describe()
        if sol.lengths is not None:
            for name, val in sol.lengths._asdict().items():
                if val is not None:     sol_dict[name] = repr(val)
        cfg_parser['solution.{0}'.format(idx)] = sol_dict

    path = _make_path(dirname)
    path.mkdir(parents=True, exist_ok=True)

    with path.joinpath("result.ini").open(mode='w', encoding='utf-8') as params_obj:
        cfg_parser.write(params_obj)

    with path.joinpath("solutions.csv").open(mode='w', newline='', encoding='utf-8') as csv_obj:
        csv_writer = csv.writer(csv_obj)
        csv_writer.writerow(["index", "title", "kind", "filter_type", "stub_type",
                             "components", "lengths", "residual"])
        for idx, sol in enumerate(result.solutions, 1):
            comps = "; ".join(comp.describe() for comp in sol.components)
            residual = "" if sol.residual is None else repr(sol.residual)
            csv_writer.writerow([idx, sol.title, sol.kind.value, sol.filter_type.value,
                                 sol.stub_type.value, comps, _lengths_str(sol.lengths),
                                 residual])
    logger.info("A result is saved into '%s'.", path)
    return path
    # The end of "save_result" function.
