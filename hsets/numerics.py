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

"""
Floating point helpers that produce initial guesses for the proofs: points
on the slow manifold, the corner points where the fast subsystem has
heteroclinic connections, and the wave speed of a pulse. Nothing here is
rigorous and nothing has to be; bad guesses make the rigorous checks fail.
"""

import logging
import numpy
import scipy.integrate
import scipy.optimize
from .intervals import interval, ivector, midpoint
from .vector_field import fast_subsystem
from .errors import GeometryPrecondition


__all__ = ["correct_equilibrium", "corrector", "FastConnection",
           "correct_corners", "correct_homoclinic_corners",
           "approximate_theta"]

logger = logging.getLogger(__name__)


def correct_equilibrium(field, point, accuracy=1e-12):
    """
    Moves `point` onto the critical manifold of `field` along u: Newton's
    method on the second component of the field with w = 0 and v kept. The
    slow coordinate of the result is the (interval) slow coordinate of
    `point`.

    Usage: gamma = correct_equilibrium(field, [0.97, 0.0, 0.025])
    """
    point = ivector(point)
    v = midpoint(point[2])

    def f(u):
        return field(numpy.array([u, 0.0, v]))[1]

    def fprime(u):
        return field.jacobian(numpy.array([u, 0.0, v]))[1, 0]

    try:
        u = scipy.optimize.newton(f, midpoint(point[0]), fprime=fprime,
                                  tol=accuracy, maxiter=100)
    except RuntimeError as error:
        raise GeometryPrecondition("no slow manifold point near "
                                   + str(midpoint(point)) + ": " + str(error))
    return ivector([u, 0.0, point[2]])


def corrector(field, accuracy=1e-12):
    """
    Returns a one-argument function that corrects points with
    correct_equilibrium, as SegmentChain expects.

    Usage: chain = SegmentChain(..., correct=corrector(field))
    """
    def correct(point):
        return correct_equilibrium(field, point, accuracy)
    return correct


def _hit(fast, start, u_section, max_time):
    #integrates the planar field to the line u = u_section and returns w there
    def event(t, x):
        return x[0] - u_section
    event.terminal = True
    solution = scipy.integrate.solve_ivp(
        fast.float_function(), (0.0, max_time), start, method='DOP853',
        events=event, rtol=1e-11, atol=1e-13)
    if not len(solution.t_events[0]):
        raise GeometryPrecondition("shooting from " + str(start)
                                   + " does not reach u = " + str(u_section))
    return solution.y_events[0][0][1]


class FastConnection(object):
    """
    Shooting for a heteroclinic connection of the planar fast subsystem
    between two saddle equilibria at the same slow value v.

    `upper_u` and `lower_u` are guesses of the u coordinates of the two
    equilibria. With `downward` the connection runs from the upper to the
    lower one (the right side of a relaxation cycle), otherwise from the
    lower to the upper one. The unstable manifold of the source is
    integrated forward and the stable manifold of the target backward, both
    from points `displacement` away from the equilibrium, to the line
    u = `section_u`; `gap` is the difference of their w coordinates there.

    Usage: shooter = FastConnection(0.61, 0.84, -0.24, downward=True)
           v = shooter.correct(0.0988)
    """
    def __init__(self, theta, upper_u, lower_u, downward=True,
                 displacement=1e-12, section_u=0.2, accuracy=1e-12,
                 max_time=2000.0):
        self.theta = midpoint(interval(theta))
        self.upper_u, self.lower_u = upper_u, lower_u
        self.downward = downward
        self.displacement = displacement
        self.section_u = section_u
        self.accuracy = accuracy
        self.max_time = max_time

    def equilibrium(self, guess, v, theta=None):
        fast = fast_subsystem(self.theta if theta is None else theta, v)
        try:
            u = scipy.optimize.newton(
                lambda u: fast(numpy.array([u, 0.0]))[1], guess,
                fprime=lambda u: fast.jacobian(numpy.array([u, 0.0]))[1, 0],
                tol=self.accuracy, maxiter=100)
        except RuntimeError as error:
            raise GeometryPrecondition("fast equilibrium not found near u = "
                                       + str(guess) + ": " + str(error))
        return numpy.array([u, 0.0])

    def _direction(self, fast, point, toward, unstable):
        values, vectors = numpy.linalg.eig(fast.jacobian(point))
        if numpy.any(values.imag != 0) or values[0].real * values[1].real >= 0:
            raise GeometryPrecondition(
                "fast equilibrium at " + str(point) + " is not a saddle: "
                + str(values))
        values, vectors = values.real, vectors.real
        index = int(numpy.argmax(values) if unstable else numpy.argmin(values))
        vector = vectors[:, index]
        if (vector[0] * (toward[0] - point[0])) < 0:
            vector = -vector
        return vector

    def gap(self, v, theta=None):
        """
        Difference in w on the line u = section_u between the unstable
        manifold of the source and the stable manifold of the target.
        """
        theta = self.theta if theta is None else theta
        fast = fast_subsystem(theta, v)
        upper = self.equilibrium(self.upper_u, v, theta)
        lower = self.equilibrium(self.lower_u, v, theta)
        source, target = (upper, lower) if self.downward else (lower, upper)
        out = self._direction(fast, source, target, unstable=True)
        back = self._direction(fast, target, source, unstable=False)
        forward = _hit(fast, source + self.displacement * out,
                       self.section_u, self.max_time)
        backward = _hit(fast.reversed(), target + self.displacement * back,
                        self.section_u, self.max_time)
        return forward - backward

    def correct(self, v):
        """
        Secant iteration on v for a zero of `gap`. Afterwards `upper_u` and
        `lower_u` hold the equilibria at the returned v.

        Usage: v = shooter.correct(0.0988)
        """
        try:
            v = scipy.optimize.newton(self.gap, v, x1=v + 1e-4,
                                      tol=self.accuracy, maxiter=100)
        except RuntimeError as error:
            raise GeometryPrecondition("shooting for a heteroclinic connection "
                                       "did not converge: " + str(error))
        self.upper_u = self.equilibrium(self.upper_u, v)[0]
        self.lower_u = self.equilibrium(self.lower_u, v)[0]
        logger.info("heteroclinic connection at v = %.15g between u = %.15g "
                    "and u = %.15g", v, self.upper_u, self.lower_u)
        return float(v)


def correct_corners(theta, gamma_ul, gamma_dl, gamma_ur, gamma_dr,
                    displacement=1e-12, accuracy=1e-12):
    """
    Corrects guesses of the four corners of a relaxation cycle: for each
    side the slow value v is shot until the fast subsystem connects the two
    equilibria (upward on the left, downward on the right), and the corners
    are moved to those equilibria. Returns float arrays (ul, dl, ur, dr).

    Usage: ul, dl, ur, dr = correct_corners(0.61, ul, dl, ur, dr)
    """
    gamma_ul, gamma_dl = numpy.array(gamma_ul, float), numpy.array(gamma_dl, float)
    gamma_ur, gamma_dr = numpy.array(gamma_ur, float), numpy.array(gamma_dr, float)
    left = FastConnection(theta, gamma_ul[0], gamma_dl[0], downward=False,
                          displacement=displacement, accuracy=accuracy)
    right = FastConnection(theta, gamma_ur[0], gamma_dr[0], downward=True,
                           displacement=displacement, accuracy=accuracy)
    v_left, v_right = left.correct(gamma_ul[2]), right.correct(gamma_ur[2])
    return (numpy.array([left.upper_u, 0.0, v_left]),
            numpy.array([left.lower_u, 0.0, v_left]),
            numpy.array([right.upper_u, 0.0, v_right]),
            numpy.array([right.lower_u, 0.0, v_right]))


def correct_homoclinic_corners(theta, gamma_ul, gamma_dl, gamma_ur, gamma_dr,
                               displacement=1e-12, accuracy=1e-12):
    """
    Corner guesses for a pulse. The lower left corner is the equilibrium at
    the origin and the upper left corner the fast equilibrium at v = 0;
    the right corners are shot as in correct_corners.

    Usage: ul, dl, ur, dr = correct_homoclinic_corners(0.61, ul, dl, ur, dr)
    """
    gamma_ur, gamma_dr = numpy.array(gamma_ur, float), numpy.array(gamma_dr, float)
    right = FastConnection(theta, gamma_ur[0], gamma_dr[0], downward=True,
                           displacement=displacement, accuracy=accuracy)
    v_right = right.correct(gamma_ur[2])
    left = FastConnection(theta, gamma_ul[0], 0.0, downward=False,
                          accuracy=accuracy)
    upper = left.equilibrium(float(gamma_ul[0]), 0.0)
    return (numpy.array([upper[0], 0.0, 0.0]), numpy.zeros(3),
            numpy.array([right.upper_u, 0.0, v_right]),
            numpy.array([right.lower_u, 0.0, v_right]))


def approximate_theta(theta, gamma_ul, v=0.0, displacement=1e-12,
                      accuracy=1e-12):
    """
    Shoots the wave speed for which the unstable manifold of the origin
    reaches the upper left equilibrium of the fast subsystem at slow value
    `v`, starting from the guess `theta`.

    Usage: theta = approximate_theta(0.61, gamma_ul)
    """
    shooter = FastConnection(theta, float(gamma_ul[0]), 0.0, downward=False,
                             displacement=displacement, accuracy=accuracy)
    try:
        theta = scipy.optimize.newton(lambda s: shooter.gap(v, s),
                                      shooter.theta, x1=shooter.theta + 1e-4,
                                      tol=accuracy, maxiter=100)
    except RuntimeError as error:
        raise GeometryPrecondition("shooting for the wave speed did not "
                                   "converge: " + str(error))
    logger.info("pulse wave speed near theta = %.15g", theta)
    return float(theta)
