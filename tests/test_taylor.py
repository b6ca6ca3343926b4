import math
import pytest
from hsets import Series, taylor_coefficients, interval, ivector, lower, upper


def _values(series):
    return [(lower(c), upper(c)) for c in series.coefficients]


class TestSeries:
    def test_product_is_a_convolution(self):
        t = Series([interval(0), interval(1), interval(0), interval(0)])
        square = t * t
        assert _values(square) == [(0, 0), (0, 0), (1, 1), (0, 0)]

    def test_constants_do_not_shorten(self):
        t = Series([interval(0), interval(1), interval(0)])
        s = 3 * t ** 2 - t + 1
        assert _values(s) == [(1, 1), (-1, -1), (3, 3)]
        assert len(s) == 3

    def test_constant_coefficients_vanish(self):
        c = Series.of(2)
        assert c.constant
        assert upper(c.coefficient(0)) == 2
        assert upper(c.coefficient(5)) == 0

    def test_short_series_raises_past_the_end(self):
        with pytest.raises(IndexError):
            Series([interval(1)]).coefficient(1)

    def test_division(self):
        t = Series([interval(2), interval(4)])
        assert _values(t / 2) == [(1, 1), (2, 2)]
        assert (1 / Series.of(4)).constant
        with pytest.raises(NotImplementedError):
            Series.of(1) / t

    def test_negative_powers_are_refused(self):
        with pytest.raises(NotImplementedError):
            Series.of(2) ** -1


class TestTaylorCoefficients:
    def test_exponential(self, decay):
        xs = taylor_coefficients(decay, ivector([1]), 6)
        assert len(xs) == 7
        for k, x in enumerate(xs):
            exact = (-1) ** k / math.factorial(k)
            assert lower(x[0]) <= exact <= upper(x[0])
            assert upper(x[0]) - lower(x[0]) < 1e-15

    def test_variational_equations(self, decay):
        xs, Vs = taylor_coefficients(decay, ivector([interval(1, 2)]), 4,
                                     variational=True)
        assert len(Vs) == 5
        for k, V in enumerate(Vs):
            exact = (-1) ** k / math.factorial(k)
            assert lower(V[0, 0]) <= exact <= upper(V[0, 0])
        #the coefficients enclose those of every initial point
        assert lower(xs[1][0]) <= -2 and upper(xs[1][0]) >= -1

    def test_translation(self, drift):
        xs = taylor_coefficients(drift, ivector([0, 0, 0]), 3)
        assert upper(xs[1][0]) == 1
        assert upper(abs(xs[2][0])) == 0
