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

import collections
import logging
import numpy
from mpmath import iv
import scipy.integrate
from .intervals import (interval, ivector, imatrix, identity, upper,
                        midpoint, mid_vector, intersection,
                        intersection_is_empty, subset_interior, is_positive,
                        is_negative, certainly_less, certainly_greater)
from .taylor import taylor_coefficients
from .errors import IntegrationInconsistency


__all__ = ["AffineSection", "C0Set", "RigorousFlow", "SectionCrossing",
           "integrate_to_section"]

logger = logging.getLogger(__name__)


class AffineSection(object):
    """
    The plane of points x with normal.(x - center) = 0. Both may be interval
    vectors; the section is then any plane they allow, and every value is
    enclosed for all of them.

    Usage: section = AffineSection(gamma, normal)
           g = section(x)
    """
    def __init__(self, center, normal):
        self.center = ivector(center)
        self.normal = ivector(normal)

    def __call__(self, x):
        return numpy.dot(self.normal, ivector(x) - self.center)

    def value_on(self, X):
        """Encloses the section function over a C0Set, without wrapping."""
        return numpy.dot(self.normal, X.affine_image(identity(len(X.center)),
                                                     self.center))

    def float_value(self, x):
        return numpy.dot(midpoint(self.normal), x - midpoint(self.center))


class C0Set(object):
    """
    A set of the form center + matrix*box + error, in the way Lohner's
    method keeps it. `center` is a vector of degenerate intervals, `matrix`
    an interval matrix, `box` the interval vector of local coordinates and
    `error` an interval vector of accumulated remainders. Points of the set
    are reached by choosing a matrix from `matrix`, a vector from `box` and
    one from `error`.

    Integrating the set moves the center along a point trajectory and
    multiplies `matrix` by derivative enclosures, so the box itself never
    has to be wrapped into axis-aligned coordinates.

    Usage: X = C0Set(gamma, P, ivector([interval(-1e-3, 1e-3), 0, 0]))
    """
    def __init__(self, center, matrix=None, box=None, error=None):
        self.center = ivector(center)
        n = len(self.center)
        self.matrix = identity(n) if matrix is None else imatrix(matrix)
        self.box = ivector(numpy.zeros(n)) if box is None else ivector(box)
        self.error = ivector(numpy.zeros(n)) if error is None else ivector(error)

    @classmethod
    def from_box(cls, box):
        """The set equal to an interval vector, centered at its midpoint."""
        box = ivector(box)
        middle = mid_vector(box)
        return cls(middle, identity(len(box)), box - middle)

    def enclosure(self):
        return self.center + self.matrix.dot(self.box) + self.error

    def affine_image(self, M, origin):
        """
        Encloses M*(x - origin) over the set, multiplying M into the matrix
        part before applying it to the box.

        Usage: local = X.affine_image(P_inverse, gamma)
        """
        M = imatrix(M)
        return (M.dot(self.center - ivector(origin))
                + M.dot(self.matrix).dot(self.box) + M.dot(self.error))

    def __repr__(self):
        return "<C0Set " + str(self.enclosure()) + ">"


SectionCrossing = collections.namedtuple('SectionCrossing', 'set, time')


def _inflate(x, factor=0.1, absolute=1e-13):
    #widens each entry around its midpoint, rounding outward
    result = ivector(x)
    for i, y in enumerate(result):
        radius = (y.b - y.a) * (1 + factor) / 2 + absolute
        middle = y.mid
        result[i] = interval((middle - radius).a, (middle + radius).b)
    return result


def _norm_bound(M):
    #upper bound of the maximum row sum norm of an interval matrix
    return max(sum(upper(abs(entry)) for entry in row) for row in M)


class RigorousFlow(object):
    """
    A validated integrator for a VectorField, built on mpmath intervals.

    Each step first finds a rough enclosure W of all trajectories of the
    current set over [0, h] (Picard iteration: X + [0, h]*f(W) must lie in
    the interior of W), halving h when none is found. It then moves the
    center of the set with a Taylor polynomial of degree `order`, whose
    Lagrange remainder is evaluated on W, and moves the rest of the set with
    the mean value theorem, using an enclosure of the derivative of the
    flow computed from the variational equations in the same way. The
    result is again a C0Set.

    `poincare` integrates until the set crosses a section and returns the
    enclosure of the crossing together with the crossing time; `monodromy`
    does the same for a single point and returns the derivative of the
    Poincare map. The flow never extrapolates: whenever the crossing cannot
    be enclosed it raises IntegrationInconsistency.

    Usage: flow = RigorousFlow(field)
           crossing = flow.poincare(C0Set(x0), AffineSection(c, n))
    """
    def __init__(self, field, order=6, step=0.1, min_step=1e-7,
                 max_time=400.0, max_steps=200000):
        """
        Usage: flow = RigorousFlow(field, order=8, step=0.05)
        """
        self.field = field
        self.order = order
        self.step_size, self.min_step = step, min_step
        self.max_time, self.max_steps = max_time, max_steps

    def rough_enclosure(self, box, h):
        """
        Returns W with box + [0, h]*f(W) inside the interior of W, which
        contains every trajectory starting in `box` up to time h, or None
        if the iteration does not settle.

        Usage: W = flow.rough_enclosure(X.enclosure(), 0.1)
        """
        box = ivector(box)
        times = interval(0, upper(interval(h)))
        W = box + self.field(box) * times
        for attempt in range(10):
            W = _inflate(W)
            image = box + self.field(W) * times
            if subset_interior(image, W):
                return image
            W = image
        return None

    def advance(self, X, W, h):
        """
        Moves the C0Set `X` by time `h` (a float or an interval of times).
        `W` must be a rough enclosure of X valid up to the upper bound of h.

        Usage: X = flow.advance(X, W, 0.1)
        """
        h = interval(h)
        p = self.order
        powers = [h ** k for k in range(p + 2)]
        center = taylor_coefficients(self.field, X.center, p)
        rough, rough_V = taylor_coefficients(self.field, W, p + 1,
                                             variational=True)
        box, box_V = taylor_coefficients(self.field, X.enclosure(), p,
                                         variational=True)
        y = (sum((center[k] * powers[k] for k in range(p + 1)), 0)
             + rough[p + 1] * powers[p + 1])

        #||D phi(t)|| <= exp(L t) on W bounds the variational solution
        growth = iv.exp(interval(_norm_bound(rough_V[1]))
                        * interval(upper(h))).b
        n = len(X.center)
        V_rough = imatrix([[interval(-growth, growth)] * n] * n)
        J = (sum((box_V[k] * powers[k] for k in range(p + 1)), 0)
             + rough_V[p + 1].dot(V_rough) * powers[p + 1])

        new_center = mid_vector(y)
        return C0Set(new_center, J.dot(X.matrix), X.box,
                     (y - new_center) + J.dot(X.error))

    def _rough_step(self, X, h):
        #largest step not above h with a rough enclosure, and that enclosure
        while True:
            W = self.rough_enclosure(X.enclosure(), h)
            if W is not None:
                return W, h
            h /= 2
            if h < self.min_step:
                raise IntegrationInconsistency(
                    "step size underflow for " + repr(X))

    def narrow_crossing_time(self, X, W, section, speed, times, iterations=3):
        """
        Interval Newton steps on the crossing time. `times` must enclose the
        crossing times of all points of X within the step covered by W, and
        `speed` the normal component of the field on W. For a thin set the
        result is much tighter than the first estimate.

        Usage: times = flow.narrow_crossing_time(X, W, section, speed, times)
        """
        for i in range(iterations):
            middle = interval(times.mid)
            value = section.value_on(self.advance(X, W, middle))
            narrowed = middle - value / speed
            if intersection_is_empty(times, narrowed):
                raise IntegrationInconsistency(
                    "crossing time enclosures " + str(times) + " and "
                    + str(narrowed) + " are disjoint",
                    times=times, narrowed=narrowed)
            times = intersection(times, narrowed)
        return times

    def poincare(self, X, section):
        """
        Integrates the C0Set `X` to its first crossing of `section` and
        returns a SectionCrossing(set, time). The set is the C0Set at the
        (interval) crossing time, so `set.enclosure()` contains every
        crossing point.

        The set must start strictly on one side of the section. A step whose
        rough enclosure W meets the section is only accepted as the crossing
        step when the normal component of the field is sign-definite on W;
        the crossing times are then the interval -g(X)/(n.f(W)).

        Usage: crossing = flow.poincare(X, section)
        """
        start = section.value_on(X)
        if is_positive(start):
            side = 1
        elif is_negative(start):
            side = -1
        else:
            raise IntegrationInconsistency(
                "initial set touches the section: g = " + str(start), g=start)
        t = interval(0)
        h = self.step_size
        attempts = 0
        for count in range(self.max_steps):
            if upper(t) > self.max_time:
                raise IntegrationInconsistency(
                    "no section crossing before time " + str(self.max_time))
            W, h = self._rough_step(X, h)
            g = section(W)
            if (side > 0 and is_positive(g)) or (side < 0 and is_negative(g)):
                X = self.advance(X, W, h)
                t = t + h
                h = min(2 * h, self.step_size)
                attempts = 0
                continue

            attempts += 1
            if attempts > 50:
                raise IntegrationInconsistency(
                    "section crossing could not be enclosed at time " + str(t))
            speed = numpy.dot(section.normal, self.field(W))
            if not (is_negative(speed) if side > 0 else is_positive(speed)):
                h /= 2
                if h < self.min_step:
                    raise IntegrationInconsistency(
                        "flow is not transversal to the section: n.f = "
                        + str(speed), speed=speed)
                continue
            times = -section.value_on(X) / speed
            if is_negative(times):
                raise IntegrationInconsistency(
                    "set has crossed the section before time " + str(t),
                    times=times)
            if certainly_less(times.a, 0):
                #the set has not crossed yet, negative times are overestimates
                times = interval(0, times.b)
            if not certainly_greater(times.b, h):
                times = self.narrow_crossing_time(X, W, section, speed, times)
                final = self.advance(X, W, times)
                logger.debug("section crossed at time %s after %d steps",
                             t + times, count)
                return SectionCrossing(final, t + times)
            if certainly_greater(times.a, h):
                X = self.advance(X, W, h)
                t = t + h
                attempts = 0
                continue
            #the crossing starts inside this step and ends after it
            approach = 0.9 * float(times.a)
            if approach > self.min_step:
                X = self.advance(X, W, approach)
                t = t + approach
                h = 1.1 * (float(times.b) - approach)
            else:
                h = 1.1 * float(times.b)
        raise IntegrationInconsistency("too many integration steps")

    def monodromy(self, x, section):
        """
        Returns (point, DP): enclosures of the first crossing of `section`
        by the trajectory through the point `x`, and of the derivative of
        the Poincare map there, (I - f n^T/(n.f)) * D phi.

        Usage: point, DP = flow.monodromy(gamma, section)
        """
        crossing = self.poincare(C0Set(x), section)
        point = crossing.set.enclosure()
        f = self.field(point)
        n = len(point)
        projection = identity(n) - (numpy.outer(f, section.normal)
                                    / numpy.dot(section.normal, f))
        return point, projection.dot(crossing.set.matrix)


def integrate_to_section(field, x0, section, max_time=1000.0):
    """
    Non-rigorous: integrates the midpoint field from `x0` with scipy until
    the first zero of the section function and returns (point, time).
    Raises IntegrationInconsistency if there is none before `max_time`.

    Usage: x, t = integrate_to_section(field, gamma, section)
    """
    def event(t, x):
        return section.float_value(x)
    event.terminal = True

    solution = scipy.integrate.solve_ivp(
        field.float_function(), (0.0, max_time), midpoint(ivector(x0)),
        method='DOP853', events=event, rtol=1e-11, atol=1e-13)
    if not len(solution.t_events[0]):
        raise IntegrationInconsistency(
            "trajectory from " + str(midpoint(ivector(x0)))
            + " does not reach the section")
    return solution.y_events[0][0], solution.t_events[0][0]
