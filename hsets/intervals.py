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

import functools
import numpy
from mpmath import iv


__all__ = ["interval", "is_interval", "ivector", "imatrix", "identity",
           "left", "right", "lower", "upper", "midpoint", "width",
           "mid_vector", "mid_matrix", "hull", "hull_all", "intersection",
           "intersection_is_empty", "subset_interior", "contains_zero",
           "is_positive", "is_negative", "certainly_less",
           "certainly_greater", "inverse", "det3", "leading_minors",
           "split", "left_u", "right_u", "left_s", "right_s", "is_covering",
           "shrink_and_expand"]


def interval(lower, upper=None):
    """
    Returns an mpmath interval enclosing `lower` (or the range from `lower`
    to `upper`). Strings are converted with outward rounding, so
    interval('0.1') really contains one tenth while interval(0.1) only
    contains the nearest double. Intervals are returned unchanged.

    Usage: x = interval(0.5)
           x = interval('0.1')
           x = interval(-1, 1)
    """
    if upper is None:
        if is_interval(lower):
            return lower
        return iv.mpf(lower)
    return iv.mpf((lower, upper))


def is_interval(x):
    return isinstance(x, iv.mpf)


def _elementwise(f, *args):
    #applies f to each entry of equally shaped object arrays, or to scalars
    if isinstance(args[0], numpy.ndarray):
        result = numpy.empty(args[0].shape, dtype=object)
        for index in numpy.ndindex(args[0].shape):
            result[index] = f(*[arg[index] for arg in args])
        return result
    return f(*args)


def ivector(values):
    """
    Returns a one-dimensional numpy object array of intervals. Entries may
    be floats, strings, intervals or anything `interval` accepts.

    Usage: x = ivector([0.0, '0.1', interval(-1, 1)])
    """
    values = list(values)
    result = numpy.empty(len(values), dtype=object)
    for i, value in enumerate(values):
        result[i] = interval(float(value) if isinstance(value, numpy.number)
                             else value)
    return result


def imatrix(rows):
    """
    Returns a two-dimensional numpy object array of intervals built from a
    nested sequence (or a float numpy matrix).

    Usage: M = imatrix([[1, 0], [0, 1]])
           M = imatrix(numpy.eye(3))
    """
    rows = [list(row) for row in rows]
    result = numpy.empty((len(rows), len(rows[0])), dtype=object)
    for i, row in enumerate(rows):
        result[i, :] = ivector(row)
    return result


def identity(n):
    return imatrix(numpy.eye(n))


def left(x):
    """Degenerate interval(s) at the lower bound(s) of `x`."""
    return _elementwise(lambda y: interval(y).a, x)


def right(x):
    """Degenerate interval(s) at the upper bound(s) of `x`."""
    return _elementwise(lambda y: interval(y).b, x)


def lower(x):
    """Lower bound(s) as floats, rounded down."""
    if isinstance(x, numpy.ndarray):
        return numpy.array([lower(y) for y in x.flat]).reshape(x.shape)
    return float(interval(x).a)


def upper(x):
    if isinstance(x, numpy.ndarray):
        return numpy.array([upper(y) for y in x.flat]).reshape(x.shape)
    return float(interval(x).b)


def midpoint(x):
    """Midpoint(s) as floats. Not rigorous."""
    if isinstance(x, numpy.ndarray):
        return numpy.array([midpoint(y) for y in x.flat]).reshape(x.shape)
    if isinstance(x, str):
        return float(x)
    if is_interval(x):
        return float(x.mid)
    return float(x)


def width(x):
    if isinstance(x, numpy.ndarray):
        return numpy.array([width(y) for y in x.flat]).reshape(x.shape)
    return float(interval(x).delta)


def mid_vector(x):
    """Midpoint vector as a degenerate interval vector."""
    return ivector(midpoint(x))


def mid_matrix(M):
    return imatrix(midpoint(M))


def _hull(x, y):
    x, y = interval(x), interval(y)
    a = x.a if x.a <= y.a else y.a
    b = x.b if x.b >= y.b else y.b
    return iv.mpf((a, b))


def hull(x, y):
    """
    Interval hull of two intervals, or entrywise of two interval arrays.

    Usage: z = hull(x, y)
    """
    return _elementwise(_hull, x, y)


def hull_all(items):
    """Hull of a nonempty iterable of intervals or interval arrays."""
    return functools.reduce(hull, items)


def _intersection(x, y):
    x, y = interval(x), interval(y)
    a = x.a if x.a >= y.a else y.a
    b = x.b if x.b <= y.b else y.b
    if b < a:
        raise ValueError("empty intersection of " + str(x) + " and " + str(y))
    return iv.mpf((a, b))


def intersection(x, y):
    return _elementwise(_intersection, x, y)


def intersection_is_empty(x, y):
    """True if every pair of corresponding entries is strictly disjoint."""
    separated = _elementwise(lambda s, t: _below(s, t) or _below(t, s), x, y)
    return bool(numpy.all(separated))


def subset_interior(x, y):
    """
    True if `x` lies in the interior of `y`, entrywise for arrays. Both
    bounds are compared strictly.
    """
    inside = _elementwise(
        lambda s, t: interval(t).a < interval(s).a and interval(s).b < interval(t).b,
        x, y)
    return bool(numpy.all(inside))


def contains_zero(x):
    """True if zero belongs to `x`, or to every entry of an array."""
    return bool(numpy.all(_elementwise(lambda y: 0 in interval(y), x)))


#strict tests compare endpoints only; mpmath 1.4 raises ValueError when
#two overlapping intervals are compared

def _below(s, t):
    return interval(s).b < interval(t).a


def certainly_less(x, y):
    """
    True if every point of `x` lies strictly below every point of `y`,
    entrywise for arrays. Overlapping enclosures give False.

    Usage: if certainly_less(image[1], target[1].a): ...
    """
    if isinstance(x, numpy.ndarray) or isinstance(y, numpy.ndarray):
        x, y = numpy.broadcast_arrays(numpy.asarray(x, dtype=object),
                                      numpy.asarray(y, dtype=object))
    return bool(numpy.all(_elementwise(_below, x, y)))


def certainly_greater(x, y):
    return certainly_less(y, x)


def is_positive(x):
    return bool(numpy.all(_elementwise(lambda y: interval(y).a > 0, x)))


def is_negative(x):
    return bool(numpy.all(_elementwise(lambda y: interval(y).b < 0, x)))


def inverse(M):
    """
    Enclosure of the inverse of a small square interval matrix. The matrix
    is preconditioned by the floating point inverse of its midpoint and then
    reduced by interval Gauss-Jordan elimination. Raises ZeroDivisionError
    if a pivot contains zero, which happens for (nearly) singular input.

    Usage: Minv = inverse(M)
    """
    M = imatrix(M)
    n = M.shape[0]
    try:
        C = numpy.linalg.inv(midpoint(M))
    except numpy.linalg.LinAlgError:
        raise ZeroDivisionError("singular midpoint matrix")
    C = imatrix(C)
    A = C.dot(M)
    B = C.copy()
    for k in range(n):
        pivot = max(range(k, n), key=lambda i: abs(midpoint(A[i, k])))
        if pivot != k:
            A[[k, pivot]] = A[[pivot, k]]
            B[[k, pivot]] = B[[pivot, k]]
        if 0 in A[k, k]:
            raise ZeroDivisionError("pivot " + str(A[k, k]) + " contains zero")
        scale = A[k, k]
        A[k] = A[k] / scale
        B[k] = B[k] / scale
        for i in range(n):
            if i != k:
                factor = A[i, k]
                A[i] = A[i] - A[k] * factor
                B[i] = B[i] - B[k] * factor
    return B


def det3(M):
    return (M[0, 0] * (M[1, 1] * M[2, 2] - M[1, 2] * M[2, 1])
            - M[0, 1] * (M[1, 0] * M[2, 2] - M[1, 2] * M[2, 0])
            + M[0, 2] * (M[1, 0] * M[2, 1] - M[1, 1] * M[2, 0]))


def leading_minors(M):
    """Leading principal minors of a 3x3 interval matrix, smallest first."""
    return [M[0, 0], M[0, 0] * M[1, 1] - M[1, 0] * M[0, 1], det3(M)]


def split(x, n):
    """
    Returns a list of `n` intervals covering `x`: the k-th piece is
    (b - a)*[k, k+1]/n + a, so adjacent pieces overlap slightly and their
    union always contains `x`. A degenerate `x` is returned as one piece.

    Usage: pieces = split(interval(-1, 1), 10)
    """
    x = interval(x)
    if x.a == x.b:
        return [x]
    return [(x.b - x.a) * (iv.mpf((k, k + 1)) / n) + x.a for k in range(n)]


#covering relations: coordinate 0 is stable, coordinate 1 is unstable

def _with_entry(N, index, value):
    result = ivector(N)
    result[index] = value
    return result


def left_u(N):
    """The unstable-left edge of a box: coordinate 1 set to its lower bound."""
    return _with_entry(N, 1, interval(N[1]).a)


def right_u(N):
    return _with_entry(N, 1, interval(N[1]).b)


def left_s(N):
    """The stable-left edge of a box: coordinate 0 set to its lower bound."""
    return _with_entry(N, 0, interval(N[0]).a)


def right_s(N):
    return _with_entry(N, 0, interval(N[0]).b)


def is_covering(covering, coordinates, covered):
    """
    Checks that the box `covering`, mapped by the interval matrix
    `coordinates`, covers the box `covered`. Both boxes have the stable
    direction first and the unstable direction second; any further
    coordinates are carried along. The image of the unstable-left edge must
    lie strictly left of the unstable extent of `covered`, the image of the
    unstable-right edge strictly right of it, and the stable projection of
    the whole image must be inside the interior of the stable extent.

    Usage: covers = is_covering(N, M, T)
    """
    covering, covered = ivector(covering), ivector(covered)
    coordinates = imatrix(coordinates)
    left_edge = coordinates.dot(left_u(covering))[1]
    right_edge = coordinates.dot(right_u(covering))[1]
    stable = coordinates.dot(covering)[0]
    return (certainly_less(left_edge, covered[1])
            and certainly_greater(right_edge, covered[1])
            and subset_interior(stable, covered[0]))


def shrink_and_expand(N, factor):
    """
    Scales the stable extent of a box by `factor` and the unstable extent by
    its reciprocal. With factor > 1 the result is covered by the original
    box under the identity map.

    Usage: target = shrink_and_expand(face, '1.1')
    """
    factor = interval(factor)
    result = ivector(N)
    result[0] = result[0] * factor
    result[1] = result[1] / factor
    return result
