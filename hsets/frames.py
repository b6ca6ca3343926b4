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
import numpy
from .intervals import ivector, imatrix, midpoint, inverse


__all__ = ["coordinate_change", "frame_inverse"]

logger = logging.getLogger(__name__)


def coordinate_change(field, point):
    """
    Returns a local frame P at `point` as a 3x3 interval matrix. Its columns
    are, in order, the most contracting eigenvector of the Jacobian, the
    most expanding one and the neutral (slow) direction (0, 0, 1). Only the
    fast coordinates are rotated: the fast columns have their slow entries
    zeroed and the last row of P is (0, 0, 1). Each fast column is signed so
    that its first nonzero entry is positive.

    The frame is not rigorous and need not be; a poor frame simply makes
    later isolation or covering checks fail. Complex eigenvalues are
    replaced by their real parts and reported as a warning.

    Usage: P = coordinate_change(field, gamma)
    """
    J = midpoint(field.jacobian(ivector(point)))
    values, vectors = numpy.linalg.eig(J)
    if numpy.any(numpy.abs(values.imag) > 0):
        logger.warning("complex spectrum %s at %s, using real parts",
                       values, midpoint(ivector(point)))
    values, vectors = values.real, vectors.real
    neutral = int(numpy.argmin(numpy.abs(values)))
    fast = [i for i in range(len(values)) if i != neutral]
    stable = min(fast, key=lambda i: values[i])
    unstable = max(fast, key=lambda i: values[i])
    P = numpy.zeros((3, 3))
    for column, i in enumerate([stable, unstable]):
        vector = vectors[:, i].copy()
        vector[2] = 0.0
        vector /= numpy.linalg.norm(vector)
        lead = vector[numpy.argmax(numpy.abs(vector) > 1e-12)]
        if lead < 0:
            vector = -vector
        P[:, column] = vector
    P[2, 2] = 1.0
    logger.debug("frame at %s: eigenvalues %s", midpoint(ivector(point)),
                 values[[stable, unstable, neutral]])
    return imatrix(P)


def frame_inverse(P):
    """Enclosure of the inverse of a frame."""
    return inverse(imatrix(P))
