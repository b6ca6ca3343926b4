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
import hsets

logging.basicConfig(level=logging.INFO)


#A wave train for theta = 0.61 and a small range of eps, with fewer
#subdivisions than the published proof. Expect a few minutes.
config = hsets.ProofConfig.defaults()._replace(corner_div=60, chain_div=30,
                                               chain_links=40)
eps = hsets.interval(0, '1e-8')
record = hsets.EnclosureRecorder()
print("Wave train: theta = 0.61, eps in", eps)
start = time.perf_counter()
result = hsets.prove_periodic_orbit('0.61', eps, config, recorder=record)
print("time elapsed", time.perf_counter() - start)
print(result.message)
for name, hulls in sorted(result.details.items()):
    print(name, hulls)

#the segments and chains drawn in the (u, v) plane
record.phase_portrait(0, 2)
