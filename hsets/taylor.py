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

from mpmath import iv
from .intervals import interval, ivector, imatrix


__all__ = ["Series", "taylor_coefficients"]


_ZERO = iv.mpf(0)


class Series(object):
    """
    A truncated power series in time with interval coefficients.

    Series support the arithmetic a polynomial vector field needs: +, -, *,
    integer powers, and division by a constant. Plain numbers and intervals
    are promoted to constant series, which stand for infinitely many zero
    coefficients after the first, so they never shorten a product. Mixing
    two non-constant series truncates to the shorter one.

    mpmath intervals do not defer to other types in their own operators, so
    inside a vector field every interval constant must already be a Series.
    VectorField takes care of that for its parameters.

    Usage: t = Series([interval(0), interval(1)])
           s = 3 * t ** 2 - t + 1
    """
    __slots__ = ("coefficients", "constant")

    def __init__(self, coefficients, constant=False):
        self.coefficients = list(coefficients)
        self.constant = constant

    @classmethod
    def of(cls, value):
        """Promotes a number, string or interval to a constant series."""
        if isinstance(value, Series):
            return value
        return cls([interval(value)], constant=True)

    def coefficient(self, k):
        if k < len(self.coefficients):
            return self.coefficients[k]
        if self.constant:
            return _ZERO
        raise IndexError("coefficient " + str(k) + " of a series of length "
                         + str(len(self.coefficients)))

    def __len__(self):
        return len(self.coefficients)

    def _shape(self, other):
        if self.constant and other.constant:
            return 1, True
        if self.constant:
            return len(other), False
        if other.constant:
            return len(self), False
        return min(len(self), len(other)), False

    def __add__(self, other):
        other = Series.of(other)
        n, constant = self._shape(other)
        return Series([self.coefficient(k) + other.coefficient(k)
                       for k in range(n)], constant)

    __radd__ = __add__

    def __neg__(self):
        return Series([-c for c in self.coefficients], self.constant)

    def __sub__(self, other):
        return self + (-Series.of(other))

    def __rsub__(self, other):
        return Series.of(other) + (-self)

    def __mul__(self, other):
        other = Series.of(other)
        if other.constant:
            scale = other.coefficients[0]
            return Series([c * scale for c in self.coefficients], self.constant)
        if self.constant:
            return other * self
        n = min(len(self), len(other))
        return Series([product_coefficient(self, other, k) for k in range(n)])

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = Series.of(other)
        if not other.constant:
            raise NotImplementedError("division by a non-constant series")
        scale = other.coefficients[0]
        return Series([c / scale for c in self.coefficients], self.constant)

    def __rtruediv__(self, other):
        return Series.of(other) / self

    def __pow__(self, n):
        if n < 0 or int(n) != n:
            raise NotImplementedError("only natural powers of series")
        result = Series.of(1)
        for i in range(int(n)):
            result = result * self
        return result

    def __repr__(self):
        return ("Series(" + repr(self.coefficients)
                + (", constant=True)" if self.constant else ")"))


def product_coefficient(a, b, k):
    """The k-th coefficient of the product of two series or numbers."""
    a, b = Series.of(a), Series.of(b)
    total = _ZERO
    for i in range(k + 1):
        total = total + a.coefficient(i) * b.coefficient(k - i)
    return total


def taylor_coefficients(field, x, order, variational=False):
    """
    Computes the normalized Taylor coefficients x_0, ..., x_order of the
    solution of x' = field(x) through `x`, so that

        x(t) = x_0 + x_1*t + ... + x_order*t**order + ...

    Each x_k is an interval vector enclosing the coefficient for every
    initial point in the box `x`. The coefficients are found one order at a
    time: the k-th coefficient of field(x(t)) only depends on x_0, ..., x_k,
    and x_{k+1} is that coefficient divided by k + 1.

    With `variational` the function also returns the coefficients V_0 = I,
    V_1, ..., V_order (interval matrices) of the derivative of the solution
    with respect to its initial point, from V' = Df(x)*V.

    Usage: xs = taylor_coefficients(field, x, 6)
           xs, Vs = taylor_coefficients(field, box, 6, variational=True)
    """
    n = len(x)
    xs = [Series([interval(xi)]) for xi in x]
    Vs = [[Series([interval(1 if i == j else 0)]) for j in range(n)]
          for i in range(n)]
    for k in range(order):
        values = field.series(xs)
        new_x = [values[i].coefficient(k) / (k + 1) for i in range(n)]
        if variational:
            Df = field.series_jacobian(xs)
            new_V = [[sum((product_coefficient(Df[i][l], Vs[l][j], k)
                           for l in range(n)), _ZERO) / (k + 1)
                      for j in range(n)] for i in range(n)]
            for i in range(n):
                for j in range(n):
                    Vs[i][j].coefficients.append(new_V[i][j])
        for i in range(n):
            xs[i].coefficients.append(new_x[i])
    coefficients = [ivector([xs[i].coefficient(k) for i in range(n)])
                    for k in range(order + 1)]
    if not variational:
        return coefficients
    matrices = [imatrix([[Vs[i][j].coefficient(k) for j in range(n)]
                         for i in range(n)]) for k in range(order + 1)]
    return coefficients, matrices
