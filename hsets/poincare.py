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
from .intervals import (interval, ivector, imatrix, inverse, hull, split,
                        midpoint, mid_vector, contains_zero, subset_interior,
                        left_u, right_u, left_s, right_s, shrink_and_expand,
                        is_positive, is_negative, certainly_less,
                        certainly_greater)
from .flow import AffineSection, C0Set, RigorousFlow, integrate_to_section
from .errors import IntegrationInconsistency


__all__ = ["PoincareMap", "MidPoincareMap"]

logger = logging.getLogger(__name__)


class PoincareMap(object):
    """
    The map between the sections near two branches of the slow manifold.

    Section 1 sits at distance `ru1` from `gamma1` along its unstable
    direction, section 2 at distance `rs2` from `gamma2` along its stable
    direction; `direction` (+1 or -1) says on which side. A 2-D h-set on
    section 1 is given in the local coordinates (ys, v) of the frame `P1`,
    centered at the section center, and its image is returned in the local
    coordinates (v, yu) of `P2` relative to `gamma2`.

    Sets are subdivided into subdivisions x subdivisions cells before they
    are integrated (one row only along a degenerate edge), and the images
    of the cells are hulled. Keyword arguments left over are passed to
    RigorousFlow.

    Usage: pm = PoincareMap(field, PDL, PUL, gamma_dl, gamma_ul, ru_dl,
                            rs_ul, direction=-1, subdivisions=20)
           v, yu = pm.map(ivector([ys_range, v_range]))
    """
    def __init__(self, field, P1, P2, gamma1, gamma2, ru1, rs2, direction=1,
                 subdivisions=1, **flow_options):
        self.field = field
        self.P1, self.P2 = imatrix(P1), imatrix(P2)
        self.P2_inverse = inverse(self.P2)
        self.gamma1, self.gamma2 = ivector(gamma1), ivector(gamma2)
        self.direction = interval(direction)
        self.subdivisions = subdivisions
        self.flow_options = flow_options
        self.section1_center = self.gamma1 + self.P1.dot(
            ivector([0, -self.direction * interval(ru1), 0]))
        self.section2_center = self.gamma2 + self.P2.dot(
            ivector([self.direction * interval(rs2), 0, 0]))
        #the normal is the stable row of P2^-1, so ys is constant on section 2
        self.section2 = AffineSection(self.section2_center, self.P2_inverse[0, :])
        self.flow = RigorousFlow(field, **flow_options)

    def cells(self, face):
        """Yields the subdivision cells of a 2-D set as pairs of intervals."""
        for x in split(face[0], self.subdivisions):
            for y in split(face[1], self.subdivisions):
                yield x, y

    def map(self, face):
        """
        Encloses the image on section 2 of the set (ys, v) on section 1.

        Usage: v, yu = pm.map(ivector([ys_range, v_range]))
        """
        result = None
        for ys, v in self.cells(ivector(face)):
            X = C0Set(self.section1_center, self.P1, ivector([ys, 0, v]))
            crossing = self.flow.poincare(X, self.section2)
            local = crossing.set.affine_image(self.P2_inverse, self.gamma2)
            image = ivector([local[2], local[1]])
            logger.debug("cell (%s, %s) -> %s at time %s", ys, v, image,
                         crossing.time)
            result = image if result is None else hull(result, image)
        return result


class MidPoincareMap(PoincareMap):
    """
    A PoincareMap that meets halfway. Sets on section 1 are integrated
    forward and sets on section 2 backward onto a mid-section, which avoids
    the nearly tangent crossings close to the slow manifold.

    The mid-section is placed without rigor: the center of section 1 is
    integrated with scipy to the plane u = weight*gamma1[0] +
    (1 - weight)*gamma2[0], and the mid-section goes through that point,
    orthogonal to the field there. Its frame is DP*P1, the derivative of
    the map from section 1 applied to P1, with the middle column replaced
    by the field. Coordinates on the mid-section are columns 0 and 2 of
    that frame: images of (ys, v) from section 1 stay close to diagonal in
    them.

    Usage: mid = MidPoincareMap(field, PUR, PDR, gamma_ur, gamma_dr, ru_ur,
                                rs_dr, direction=1, subdivisions=20)
           covered = mid.check_covering(set_ur, back_set_dr)
    """
    def __init__(self, field, P1, P2, gamma1, gamma2, ru1, rs2, direction=1,
                 subdivisions=1, weight=0.93, margin='1e-15', **flow_options):
        PoincareMap.__init__(self, field, P1, P2, gamma1, gamma2, ru1, rs2,
                             direction, subdivisions, **flow_options)
        self.margin = interval(margin)
        self.reversed_flow = RigorousFlow(field.reversed(), **flow_options)

        u = weight * midpoint(self.gamma1[0]) + (1 - weight) * midpoint(self.gamma2[0])
        temporary = AffineSection([u, 0, 0], [1, 0, 0])
        center, time = integrate_to_section(field, self.section1_center, temporary)
        self.mid_center = ivector(center)
        normal = mid_vector(field(self.mid_center))
        self.mid_section = AffineSection(self.mid_center, normal)
        logger.info("mid-section at %s, normal %s, reached after %.3f",
                    center, midpoint(normal), time)

        point, DP = self.flow.monodromy(self.section1_center, self.mid_section)
        mid_P = midpoint(DP.dot(self.P1))
        mid_P[:, 1] = midpoint(normal)
        self.mid_P = imatrix(mid_P)
        self.mid_P_inverse = inverse(self.mid_P)

    def integrate_to_mid_section(self, face, forward=True, flow=None):
        """
        Encloses the image of a 2-D set on the mid-section, in mid-section
        coordinates. Forward sets are (ys, v) on section 1; backward sets
        are (v, yu) on section 2 and are integrated with the reversed field.
        `flow` replaces the forward flow, for example by one with other
        parameters.

        Usage: image = mid.integrate_to_mid_section(set_ur)
               image = mid.integrate_to_mid_section(back_set_dr, False)
        """
        result = None
        for x, y in self.cells(ivector(face)):
            if forward:
                X = C0Set(self.section1_center, self.P1, ivector([x, 0, y]))
                crossing = (flow or self.flow).poincare(X, self.mid_section)
            else:
                X = C0Set(self.section2_center, self.P2, ivector([0, y, x]))
                crossing = self.reversed_flow.poincare(X, self.mid_section)
            local = crossing.set.affine_image(self.mid_P_inverse, self.mid_center)
            image = ivector([local[0], local[2]])
            result = image if result is None else hull(result, image)
        logger.debug("%s image of %s: %s", "forward" if forward else "backward",
                     face, result)
        return result

    def _backward_images(self, back_set):
        eps = self.margin
        image = self.integrate_to_mid_section(back_set, False)
        stable_left = self.integrate_to_mid_section(left_s(back_set), False)
        stable_right = self.integrate_to_mid_section(right_s(back_set), False)
        if not (is_negative(stable_left[0] + eps)
                and is_positive(stable_right[0] - eps)):
            raise IntegrationInconsistency(
                "stable edges of the backward image are not separated: "
                + str(stable_left[0]) + ", " + str(stable_right[0]),
                stable_left=stable_left, stable_right=stable_right)
        return image, stable_left, stable_right

    def check_covering(self, forward_set, back_set):
        """
        Integrates `forward_set` (ys, v) and its unstable edges forward, and
        `back_set` (v, yu) and its stable edges backward, to the
        mid-section. Returns True if the forward image covers the backward
        image, that is if the backward image fits between the images of the
        unstable edges while its stable edges lie outside the forward image.
        Enclosures without the sign pattern hyperbolicity requires raise
        IntegrationInconsistency.

        Usage: covered = mid.check_covering(set_ur, back_set_dr)
        """
        forward_set, back_set = ivector(forward_set), ivector(back_set)
        eps = self.margin
        image1 = self.integrate_to_mid_section(forward_set)
        unstable_left = self.integrate_to_mid_section(left_u(forward_set))
        unstable_right = self.integrate_to_mid_section(right_u(forward_set))
        if not (is_negative(unstable_left[1] + eps)
                and is_positive(unstable_right[1] - eps)):
            raise IntegrationInconsistency(
                "unstable edges of the forward image are not separated: "
                + str(unstable_left[1]) + ", " + str(unstable_right[1]),
                unstable_left=unstable_left, unstable_right=unstable_right)
        image2, stable_left, stable_right = self._backward_images(back_set)

        target = shrink_and_expand(image1, 1 + eps)
        target[1] = interval((unstable_left[1] + eps).b,
                             (unstable_right[1] - eps).a)
        if not (contains_zero(image1) and contains_zero(image2)
                and contains_zero(target)):
            raise IntegrationInconsistency(
                "images on the mid-section do not contain its center",
                forward=image1, backward=image2, target=target)

        logger.info("stable edges %s, %s around %s; %s inside %s",
                    stable_left[0], stable_right[0], target[0], image2[1],
                    target[1])
        return (certainly_less(stable_left[0], target[0])
                and certainly_greater(stable_right[0], target[0])
                and subset_interior(image2[1], target[1]))

    def shoot_with_theta(self, forward_set, back_set):
        """
        The covering check for a family of maps, one for each wave speed in
        the (interval) parameter theta of the field. The forward images at
        the two ends of the theta range must lie on opposite sides of the
        backward image of `back_set`, and the forward image for the whole
        range must lie between the images of its stable edges. By
        continuity some theta in the range then connects the two sets.

        Usage: connected = mid.shoot_with_theta(set_dl, back_set_ul)
        """
        forward_set, back_set = ivector(forward_set), ivector(back_set)
        theta = interval(self.field.parameters.theta)

        def image_at(value):
            flow = RigorousFlow(self.field.with_parameters(theta=value),
                                **self.flow_options)
            return self.integrate_to_mid_section(forward_set, True, flow)

        low, high, middle = image_at(theta.a), image_at(theta.b), image_at(theta.mid)
        whole = self.integrate_to_mid_section(forward_set)
        image2, stable_left, stable_right = self._backward_images(back_set)
        if not contains_zero(image2):
            raise IntegrationInconsistency(
                "backward image does not contain the mid-section center",
                backward=image2)

        below, above = (low, high) if certainly_less(low[1], middle[1]) else (high, low)
        if not (certainly_less(below[1], middle[1])
                and certainly_less(middle[1], above[1])):
            raise IntegrationInconsistency(
                "image at the central wave speed is not between the images at "
                "the ends: " + str(low[1]) + ", " + str(middle[1]) + ", "
                + str(high[1]), low=low, middle=middle, high=high)
        logger.info("theta ends land at %s and %s around %s", below[1],
                    above[1], image2[1])
        return (certainly_less(below[1], image2[1])
                and certainly_greater(above[1], image2[1])
                and certainly_less(stable_left[0], whole[0])
                and certainly_greater(stable_right[0], whole[0]))
