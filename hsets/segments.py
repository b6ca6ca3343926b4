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
from .intervals import (interval, ivector, imatrix, inverse, hull, split,
                        is_positive, is_negative, is_covering,
                        shrink_and_expand, certainly_less)
from .frames import coordinate_change
from .errors import GeometryPrecondition, IsolationFailure, CoveringFailure


__all__ = ["IsolatingSegment", "SegmentChain", "isolating_block",
           "monotone_slow", "slow_sign_crossing", "no_slow_check",
           "check_isolation", "interpolated_face"]

logger = logging.getLogger(__name__)


def _face3(face):
    #faces are (stable, unstable), stored with a zero neutral coordinate
    face = list(face)
    if len(face) == 2:
        face.append(0)
    return ivector(face)


def interpolated_face(left_face, right_face, t):
    """
    The face at parameter `t` (possibly an interval) of the path from
    `left_face` to `right_face`: each extent runs from the interpolated
    lower bounds to the interpolated upper bounds, widened outward.

    Usage: face = interpolated_face(face0, face1, interval(1) / 3)
    """
    face = ivector([0, 0, 0])
    for k in (0, 1):
        low = (right_face[k].a - left_face[k].a) * t + left_face[k].a
        high = (right_face[k].b - left_face[k].b) * t + left_face[k].b
        face[k] = interval(low.a, high.b)
    return face


#checks on the slow direction, run by the constructors

def monotone_slow(segment):
    """
    The slow coordinate must increase strictly from the left end to the
    right end, and the slow flow must not vanish anywhere on the segment.
    """
    if not certainly_less(segment.gamma_left[2], segment.gamma_right[2]):
        raise GeometryPrecondition(
            "slow coordinates of the segment ends are not increasing: "
            + str(segment.gamma_left[2]) + " vs " + str(segment.gamma_right[2]),
            left=segment.gamma_left[2], right=segment.gamma_right[2])
    slow = segment.field.slow(segment.enclosure)
    if not (is_positive(slow) or is_negative(slow)):
        raise GeometryPrecondition(
            "zero of the slow subsystem detected in a segment: " + str(slow),
            slow=slow)


def slow_sign_crossing(segment):
    """
    Block check: the slow flow points into the block at both ends, that
    is the slow factor is positive on the whole left end and negative on
    the whole right end.
    """
    left_end = segment.gamma_left + segment.P.dot(segment.left_face)
    right_end = segment.gamma_right + segment.P.dot(segment.right_face)
    left_slow = segment.field.slow(left_end)
    right_slow = segment.field.slow(right_end)
    if not (is_positive(left_slow) and is_negative(right_slow)):
        raise IsolationFailure("no isolation in the slow direction",
                               face="slow", hull=ivector([left_slow, right_slow]))


def no_slow_check(segment):
    pass


def check_isolation(entrance, exit, link=None, name=None):
    """
    Raises IsolationFailure unless both entrance products are strictly
    negative and both exit products strictly positive. `name` and `link`
    only go into the message.

    Usage: check_isolation(segment.entrance_verification(),
                           segment.exit_verification())
    """
    for face, value, sign in (("SL", entrance[0], is_negative),
                              ("SR", entrance[1], is_negative),
                              ("UL", exit[0], is_positive),
                              ("UR", exit[1], is_positive)):
        if not sign(value):
            where = "" if link is None else " of link " + str(link)
            if name is not None:
                where += " of " + name
            raise IsolationFailure("isolation error on face " + face + where,
                                   face=face, link=link, hull=value)


class IsolatingSegment(object):
    """
    An h-set swept along the straight path from `gamma_left` to
    `gamma_right` near the slow manifold.

    In the local frame P the segment is the set of points
    gamma(t) + P*(ys, yu, 0), with gamma(t) linear in t and (ys, yu) in
    the face interpolated between `left_face` and `right_face`. Faces are
    (stable, unstable) boxes centered at 0. The stable faces (ys at its
    bounds) are entrance faces and the unstable faces (yu at its bounds)
    exit faces.

    Construction already checks the slow direction through `kind`, one of
    `monotone_slow` (plain segments), `slow_sign_crossing` (blocks around
    an equilibrium) or `no_slow_check` (links of a SegmentChain, which
    checks the slow direction for the whole chain).

    `entrance_verification` and `exit_verification` return the interval
    hulls, over a subdivisions x subdivisions grid covering each face, of
    the products of the vector field with the outward normals. Isolation
    holds when both entrance hulls are negative and both exit hulls
    positive, which `verify` checks.
    """
    def __init__(self, field, gamma_left, gamma_right, P, left_face,
                 right_face, subdivisions, kind=monotone_slow, name=None):
        """
        Usage: segment = IsolatingSegment(field, gamma_left, gamma_right, P,
                                          face, face, 200)
               segment = IsolatingSegment(..., name="UL segment")
        """
        self.name = name
        self.field = field
        self.gamma_left, self.gamma_right = ivector(gamma_left), ivector(gamma_right)
        self.P = imatrix(P)
        self.P_inverse = inverse(self.P)
        self.left_face, self.right_face = _face3(left_face), _face3(right_face)
        self.subdivisions = subdivisions
        self.kind = kind
        self.enclosure = hull(self.gamma_left + self.P.dot(self.left_face),
                              self.gamma_right + self.P.dot(self.right_face))
        kind(self)

    def normals(self, coordinate):
        """
        Outward normals, in phase space coordinates, of the two faces where
        local `coordinate` (0 stable, 1 unstable) is at its lower and upper
        bound. In local coordinates such a face is the ruled surface
        (a + t*(b - a), s, v1 + t*(v2 - v1)), whose normal is
        (1, 0, -(b - a)/(v2 - v1)) up to sign; normals transform with the
        inverse transpose of P.
        """
        start = self.P_inverse.dot(self.gamma_left)[coordinate]
        end = self.P_inverse.dot(self.gamma_right)[coordinate]
        rise = self.gamma_right[2] - self.gamma_left[2]
        result = []
        for sign, bound in ((-1, lambda x: x.a), (1, lambda x: x.b)):
            drift = (end + bound(self.right_face[coordinate])
                     - (start + bound(self.left_face[coordinate]))) / rise
            normal = ivector([0, 0, 0])
            normal[coordinate] = interval(sign)
            normal[2] = -drift * sign
            result.append(self.P_inverse.T.dot(normal))
        return result

    def entrance_normals(self):
        return self.normals(0)

    def exit_normals(self):
        return self.normals(1)

    def cells(self, coordinate, side):
        """
        Yields (gamma_i, local_box) pairs covering one face: `coordinate`
        fixes the face direction (0 stable, 1 unstable) and `side` (0 lower,
        1 upper) its bound. The face coordinate follows the interpolated
        bound, the other one the hull of the interpolated extents. A
        degenerate extent is not subdivided.
        """
        other = 1 - coordinate
        bound = (lambda x: x.a) if side == 0 else (lambda x: x.b)
        left_face, right_face = self.left_face, self.right_face
        for t in split(interval(0, 1), self.subdivisions):
            gamma = (self.gamma_right - self.gamma_left) * t + self.gamma_left
            position = ((bound(right_face[coordinate])
                         - bound(left_face[coordinate])) * t
                        + bound(left_face[coordinate]))
            extent = interpolated_face(left_face, right_face, t)[other]
            for piece in split(extent, self.subdivisions):
                local = ivector([0, 0, 0])
                local[coordinate] = position
                local[other] = piece
                yield gamma, local

    def _face_products(self, coordinate):
        products = []
        for side, normal in enumerate(self.normals(coordinate)):
            product = None
            for gamma, local in self.cells(coordinate, side):
                value = numpy.dot(self.field.on_set(gamma, self.P, local), normal)
                product = value if product is None else hull(product, value)
            products.append(product)
        return ivector(products)

    def entrance_verification(self):
        """
        Returns the hulls of the field times the outward normals of the
        stable-left and stable-right faces. Both must be negative.

        Usage: SL, SR = segment.entrance_verification()
        """
        result = self._face_products(0)
        logger.debug("entrance products %s", result)
        return result

    def exit_verification(self):
        """
        Returns the hulls for the unstable-left and unstable-right faces.
        Both must be positive.

        Usage: UL, UR = segment.exit_verification()
        """
        result = self._face_products(1)
        logger.debug("exit products %s", result)
        return result

    def verify(self):
        """
        Runs both verifications and raises IsolationFailure on the first
        face whose product has the wrong sign. Returns the four hulls.
        """
        entrance = self.entrance_verification()
        exit = self.exit_verification()
        check_isolation(entrance, exit, name=self.name)
        return ivector(list(entrance) + list(exit))


def isolating_block(field, gamma_left, gamma_right, P, left_face, right_face,
                    subdivisions, name=None):
    """
    An IsolatingSegment around an equilibrium of the full system. Instead
    of a monotone slow flow it requires the slow flow to point into the
    block at both ends.

    Usage: block = isolating_block(field, left, right, P, face, face, 150)
    """
    return IsolatingSegment(field, gamma_left, gamma_right, P, left_face,
                            right_face, subdivisions, kind=slow_sign_crossing,
                            name=name)


class SegmentChain(object):
    """
    A long isolating segment made of short links, each in its own frame.

    One affine frame cannot follow a curved slow manifold, so the path from
    `gamma_left` to `gamma_right` is cut into links. Intermediate points are
    interpolated and, when `correct` is given, pulled back to the slow
    manifold by it (any non-rigorous map from a point to a point). Each
    link gets the frame computed at its right end; the last link ends in
    `end_P`. Faces are interpolated from `left_face` to `right_face`.

    Where two links meet, the exit face of one link must cover, under the
    change of frame, the entry face of the next, which is the same face
    shrunk and expanded by `link_factor`. A failure raises CoveringFailure
    naming the link.

    `kind` checks the slow direction once, on the hull of the chain's end
    boxes.
    """
    def __init__(self, field, gamma_left, gamma_right, P, end_P, left_face,
                 right_face, subdivisions, correct=None, link_factor='1.1',
                 kind=monotone_slow, name=None):
        """
        Usage: chain = SegmentChain(field, gamma0, gamma1, P0, P1, face0,
                                    face1, 80, correct=corrector)
        """
        self.field = field
        self.name = name
        self.gamma_left, self.gamma_right = ivector(gamma_left), ivector(gamma_right)
        self.P, self.end_P = imatrix(P), imatrix(end_P)
        self.left_face, self.right_face = _face3(left_face), _face3(right_face)
        self.subdivisions = subdivisions
        self.correct = correct
        self.link_factor = interval(link_factor)
        self.enclosure = hull(self.gamma_left + self.P.dot(self.left_face),
                              self.gamma_right + self.end_P.dot(self.right_face))
        kind(self)

    def links(self, count):
        """
        Yields (index, segment) for the `count` links, starting at 1.
        Coverings between consecutive links are checked as the links are
        built.
        """
        gamma0, face0, P0 = self.gamma_left, self.left_face, self.P
        for i in range(1, count + 1):
            if i < count:
                t = interval(i) / count
                gamma1 = (self.gamma_right - self.gamma_left) * t + self.gamma_left
                if self.correct is not None:
                    gamma1 = ivector(self.correct(gamma1))
                face1 = interpolated_face(self.left_face, self.right_face, t)
                P1 = coordinate_change(self.field, gamma1)
            else:
                gamma1, face1, P1 = self.gamma_right, self.right_face, self.end_P
            entry = shrink_and_expand(face0, self.link_factor)
            if not is_covering(face0, inverse(P1).dot(P0), entry):
                raise CoveringFailure("no covering between links " + str(i - 1)
                                      + " and " + str(i), link=i)
            yield i, IsolatingSegment(self.field, gamma0, gamma1, P1, entry,
                                      face1, self.subdivisions,
                                      kind=no_slow_check)
            gamma0, face0, P0 = gamma1, face1, P1

    def entrance_and_exit_verification(self, count, early_exit=False):
        """
        Returns the hulls over all links of the four face products, in the
        order SL, SR, UL, UR. With `early_exit` each link is checked as soon
        as it is built.

        Usage: hulls = chain.entrance_and_exit_verification(100)
        """
        result = None
        for i, segment in self.links(count):
            entrance = segment.entrance_verification()
            exit = segment.exit_verification()
            logger.debug("link %d of %d: %s %s", i, count, entrance, exit)
            if early_exit:
                check_isolation(entrance, exit, link=i, name=self.name)
            products = ivector(list(entrance) + list(exit))
            result = products if result is None else hull(result, products)
        return result

    def verify(self, count, early_exit=True):
        """
        Checks coverings between links and isolation of all of them; raises
        CoveringFailure or IsolationFailure. Returns the four hulls.
        """
        result = self.entrance_and_exit_verification(count, early_exit)
        check_isolation(result[:2], result[2:], name=self.name)
        return result
