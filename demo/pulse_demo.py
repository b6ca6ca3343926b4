#!/usr/bin/python

#hsets: computer-assisted proofs of travelling waves in FitzHugh-Nagumo
#Copyright (C) 2013  John Wendell Hall
#
#This program is free software: you can redistribute it and/or modify
#it under the terms of the GNU General Public License as published by
#the Free Software Foundation, either version 3 of the License, or
#(at your option) any later version.
#
#This program is distributed in the hope that it will be useful,
#but WITHOUT ANY WARRANTY; without even the implied warranty of
#MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#GNU General Public License for more details.
#
#You should have received a copy of the GNU General Public License
#along with this program.  If not, see <http://www.gnu.org/licenses/>.
#
#The author may be reached at jackhall@utexas.edu.

import logging
import time
import numpy
import matplotlib.pyplot as plt
import hsets

logging.basicConfig(level=logging.INFO)


#First shoot the wave speed of the pulse with floating point numerics.
config = hsets.ProofConfig.defaults()
theta = hsets.approximate_theta(0.61, config.hom_gamma_ul)
print("approximate pulse wave speed", theta)

#The fast jump from the origin for that speed, without rigor.
field = hsets.fitzhugh_nagumo(theta, 0)
P = hsets.midpoint(hsets.coordinate_change(field, [0, 0, 0]))
start = 1e-6 * P[:, 1]
section = hsets.AffineSection([0.9, 0, 0], [1, 0, 0])
end, duration = hsets.integrate_to_section(field, start, section)
print("reached u = 0.9 at", end, "after", duration)

#Then the proof for the range theta +- theta_width.
eps = hsets.interval(0, '1e-8')
begin = time.perf_counter()
result = hsets.prove_homoclinic_orbit(repr(theta), eps, config)
print("time elapsed", time.perf_counter() - begin)
print(result.message)

plt.figure()
u = numpy.linspace(-0.3, 1.1, 200)
plt.plot(u, -u * (u - 1) * (u - 0.1), label="critical manifold")
plt.plot([0, end[0]], [0, end[2]], "o", label="jump ends")
plt.xlabel("u")
plt.ylabel("v")
plt.legend()
plt.show()
