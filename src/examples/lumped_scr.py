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

Matching of a complex source impedance to a resistive target with lumped
element networks: L, Tee and Pi.

This script contains an example of making a matching request, solving it with
different topologies, reading the components of the solutions, saving a
result into files and displaying a Smith chart of a solution.

You can try to change the impedances, the frequency, the quality factor, the
boolean flags below, etc. as you wish.
"""

import impmatch as im
import impmatch.matchio as imio  # To save results.
import impmatch.plot as implot   # To draw Smith charts.


# -- Initial parameters -------------------------------------------------------

# A source (initial) impedance, ohms.
z_initial = 30 + 40j
# A target impedance, ohms.
z_target = 50.0
# A reference impedance, ohms.
z0 = 50.0
# A design frequency, Hz.
frequency = 2.45e9
# A loaded quality factor of Tee and Pi networks. "None" means the default one.
q = None

# Flags.
show_steps = True   # Print derivation steps.
save_results = False  # Save the L network result into "matchdata" directory.
show_chart = True   # Draw a Smith chart of the first L network.

# -- Matching -----------------------------------------------------------------

spec = im.ImpedanceSpec(z_initial=z_initial, z_target=z_target, z0=z0, frequency=frequency)

results = [
    im.l_network(spec),
    im.tee_network(spec, q=q),
    im.pi_network(spec, q=q)
]

# -- Results ------------------------------------------------------------------

for result in results:
    print("=== {0} ===".format(implot.pretty_topology_name(result.topology.value)))
    if show_steps:
        for step in result.common_steps:
            print("  " + step)
    for sol in result.solutions:
        print("{0} [{1}, {2}]".format(sol.title, sol.kind.value, sol.filter_type.value))
        for comp in sol.get_present_components():
            print("  " + comp.describe())
        if sol.residual is not None:
            print("  residual: {0:.3g} ohm".format(sol.residual))
        if show_steps:
            for step in sol.steps:
                print("    " + step)

if save_results:    imio.save_result(results[0], "matchdata", spec=spec)
if show_chart and results[0].get_feasible():
    implot.smith_chart(results[0].get_feasible()[0])
