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
This file is a script that is made to run it directly in an IDE.

Matching with transmission line shunt stubs: single, balanced and double.

This script contains an example of loading a matching request from an INI
file (if it exists), solving it with stub networks and printing the line and
stub lengths of the solutions.
"""

from pathlib import Path

import impmatch as im
import impmatch.matchio as imio  # To load requests.
import impmatch.plot as implot   # To draw Smith charts.


# -- Initial parameters -------------------------------------------------------

# A request file. If it does not exist, the parameters below are used.
request_file = Path("stub_request.ini")
# Reflection coefficients of the source and the target.
gamma_initial = 0.4 - 0.3j
gamma_target = 0.0
# A reference impedance, ohms.
z0 = 50.0
# A design frequency, Hz.
frequency = 1e9
# A spacing between the stubs of a double stub network.
spacing = im.StubSpacing.LAMBDA_OVER_8

show_chart = True  # Draw a Smith chart of the first single stub solution.

# -- Matching -----------------------------------------------------------------

if request_file.exists():
    request = imio.load_request(request_file)
    spec = request.spec
    spacing = request.options.get('spacing', spacing)
else:
    spec = im.ImpedanceSpec(gamma_initial=gamma_initial, gamma_target=gamma_target,
                            z0=z0, frequency=frequency)

results = [
    im.single_stub(spec),
    im.balanced_stub(spec),
    im.double_stub(spec, spacing=spacing)
]

# -- Results ------------------------------------------------------------------

for result in results:
    print("=== {0} ===".format(implot.pretty_topology_name(result.topology.value)))
    if result.is_empty():
        print("No solution.")
        for step in result.common_steps:
            print("  " + step)
    for sol in result.solutions:
        lengths = sol.lengths
        line = "{0}: d = {1:.4f} λ, stub = {2:.4f} λ ({3:.2f} mm)".format(
            sol.title, lengths.d_lambda, lengths.stub_lambda, lengths.stub_mm)
        if lengths.stub2_lambda is not None:
            line += ", stub 2 = {0:.4f} λ ({1:.2f} mm)".format(
                lengths.stub2_lambda, lengths.stub2_mm)
        print(line)

if show_chart and results[0].solutions:
    implot.smith_chart(results[0].solutions[0])
