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
import numpy
from .intervals import (interval, is_interval, ivector, imatrix, midpoint,
                        mid_vector, intersection)
from .taylor import Series


__all__ = ["VectorField", "Parameters", "fitzhugh_nagumo", "fast_subsystem"]


Parameters = collections.namedtuple('Parameters', 'theta, eps, a, c')


class VectorField(object):
    """
    An autonomous vector field with a fixed parameter record.

    The field is built from two plain functions, `function(x, p)` and
    `jacobian(x, p)`, where `x` is a state sequence and `p` a namedtuple of
    parameters. Write them once using only arithmetic; VectorField calls
    them with floats for non-rigorous work and with mpmath intervals for
    rigorous enclosures. If any entry of `x` is an interval the parameters
    are passed as interval enclosures, otherwise as float midpoints.
    Parameters given as decimal strings (like '0.1') are therefore enclosed
    exactly.

    VectorField objects never change. `with_parameters` and `reversed`
    return new fields, so evaluations with different parameter values
    cannot interfere with each other.

    `slow` is an optional function whose sign is the sign of the slow
    component, with any positive factor (which may contain zero) removed.
    Segments use it to check that the slow flow moves in one direction.
    """
    def __init__(self, function, jacobian, parameters, dimension=3, slow=None,
                 sign=1):
        """
        Usage: field = VectorField(function, jacobian, parameters)
               field = VectorField(function, jacobian, parameters,
                                   dimension=2, slow=slow_function)
        """
        self.function, self._jacobian = function, jacobian
        self.parameters = parameters
        self.dimension = dimension
        self.slow_function = slow
        self.sign = sign
        self._rigorous = parameters._make(interval(p) for p in parameters)
        self._floats = parameters._make(midpoint(p) for p in parameters)
        self._series = parameters._make(Series.of(p) for p in self._rigorous)

    def _params(self, x):
        if any(is_interval(xi) for xi in x):
            return self._rigorous
        return self._floats

    def __call__(self, x):
        """
        Evaluates the field. Interval input gives an interval vector,
        float input a float vector.

        Usage: dx = field(x)
        """
        p = self._params(x)
        values = self.function(x, p)
        if p is self._rigorous:
            return ivector(values) * self.sign
        return numpy.array(values, dtype=float) * self.sign

    def jacobian(self, x):
        """
        Evaluates the derivative matrix of the field, rigorously for
        interval input.

        Usage: Df = field.jacobian(x)
        """
        p = self._params(x)
        values = self._jacobian(x, p)
        if p is self._rigorous:
            return imatrix(values) * self.sign
        return numpy.array(values, dtype=float) * self.sign

    def series(self, xs):
        """
        Evaluates the field on a list of time series (see taylor.Series),
        with the parameters as constant interval series.

        Usage: values = field.series([Series([u]), Series([w]), Series([v])])
        """
        return [Series.of(value) * self.sign
                for value in self.function(xs, self._series)]

    def series_jacobian(self, xs):
        return [[Series.of(value) * self.sign for value in row]
                for row in self._jacobian(xs, self._series)]

    def on_set(self, center, matrix, box):
        """
        Encloses the field over the affine set {center + matrix*r : r in
        box}. The mean value form around the middle of `box` is intersected
        with the direct evaluation, which keeps the enclosure tight for sets
        that are wide but nearly flat.

        Usage: values = field.on_set(gamma, P, face)
        """
        center, matrix, box = ivector(center), imatrix(matrix), ivector(box)
        middle = mid_vector(box)
        x_box = center + matrix.dot(box)
        mean_value = (self(center + matrix.dot(middle))
                      + self.jacobian(x_box).dot(matrix.dot(box - middle)))
        return intersection(mean_value, self(x_box))

    def slow(self, x):
        """Sign-carrying factor of the slow component (last coordinate)."""
        if self.slow_function is None:
            return self(x)[-1]
        value = self.slow_function(x, self._params(x))
        return value * self.sign

    def with_parameters(self, **changes):
        """
        Returns a copy of the field with some parameters replaced.

        Usage: field2 = field.with_parameters(theta=interval(0.6, 0.62))
        """
        return VectorField(self.function, self._jacobian,
                           self.parameters._replace(**changes),
                           self.dimension, self.slow_function, self.sign)

    def reversed(self):
        """Returns the time-reversed field, -f."""
        return VectorField(self.function, self._jacobian, self.parameters,
                           self.dimension, self.slow_function, -self.sign)

    def float_function(self):
        """
        Returns a plain f(t, x) callable on floats, as scipy's integrators
        expect. Parameters are fixed at their midpoints.
        """
        def f(t, x):
            return self(numpy.asarray(x, dtype=float))
        return f

    def __repr__(self):
        direction = "" if self.sign > 0 else "reversed "
        return ("<" + direction + "VectorField " + self.function.__name__
                + " " + repr(self.parameters) + ">")


def _fhn(x, p):
    u, w, v = x
    return [w,
            p.c * (p.theta * w + u * (u - 1) * (u - p.a) + v),
            p.eps / p.theta * (u - v)]


def _fhn_jacobian(x, p):
    u = x[0]
    return [[0, 1, 0],
            [p.c * (3 * u ** 2 - 2 * (1 + p.a) * u + p.a), p.c * p.theta, p.c],
            [p.eps / p.theta, 0, -p.eps / p.theta]]


def _fhn_slow(x, p):
    return x[0] - x[2]


def fitzhugh_nagumo(theta, eps, a='0.1', c='0.2'):
    """
    The FitzHugh-Nagumo travelling wave equations in the moving frame,

        u' = w
        w' = c*(theta*w + u*(u - 1)*(u - a) + v)
        v' = (eps/theta)*(u - v)

    with coordinates (u, w, v). `theta` is the wave speed and `eps` the
    singular perturbation parameter; either may be an interval. `a` and `c`
    default to the decimal strings '0.1' and '0.2' so that their
    enclosures are exact.

    Usage: field = fitzhugh_nagumo(0.61, interval(0, 1e-4))
    """
    return VectorField(_fhn, _fhn_jacobian, Parameters(theta, eps, a, c),
                       dimension=3, slow=_fhn_slow)


FastParameters = collections.namedtuple('FastParameters', 'theta, v, a, c')


def _fast(x, p):
    u, w = x
    return [w, p.c * (p.theta * w + u * (u - 1) * (u - p.a) + p.v)]


def _fast_jacobian(x, p):
    u = x[0]
    return [[0, 1],
            [p.c * (3 * u ** 2 - 2 * (1 + p.a) * u + p.a), p.c * p.theta]]


def fast_subsystem(theta, v, a='0.1', c='0.2'):
    """
    The planar fast subsystem of the FitzHugh-Nagumo equations, obtained by
    freezing the slow variable at `v` (the eps = 0 limit).

    Usage: fast = fast_subsystem(0.61, 0.025)
    """
    return VectorField(_fast, _fast_jacobian, FastParameters(theta, v, a, c),
                       dimension=2)
