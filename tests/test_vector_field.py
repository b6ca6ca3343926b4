import numpy
from hsets import (fitzhugh_nagumo, fast_subsystem, coordinate_change,
                   frame_inverse, Series, interval, ivector, identity,
                   midpoint, contains_zero, is_positive, is_negative, upper)


class TestFitzHughNagumo:
    def test_origin_is_an_equilibrium(self):
        field = fitzhugh_nagumo('0.61', interval(0, 1e-4))
        assert contains_zero(field(ivector([0, 0, 0])))
        assert numpy.allclose(field(numpy.zeros(3)), 0.0)

    def test_interval_and_float_evaluations_agree(self):
        field = fitzhugh_nagumo('0.61', 1e-4)
        x = numpy.array([0.5, -0.1, 0.02])
        assert numpy.allclose(midpoint(field(ivector(x))), field(x),
                              rtol=1e-12, atol=1e-15)
        assert numpy.allclose(midpoint(field.jacobian(ivector(x))),
                              field.jacobian(x), rtol=1e-12, atol=1e-15)

    def test_series_evaluation_matches(self):
        field = fitzhugh_nagumo('0.61', 1e-4)
        x = [0.5, -0.1, 0.02]
        values = field.series([Series([interval(xi)]) for xi in x])
        for value, expected in zip(values, field(x)):
            assert abs(midpoint(value.coefficient(0)) - expected) < 1e-14

    def test_jacobian_structure(self):
        field = fitzhugh_nagumo('0.61', 0)
        J = field.jacobian(ivector([0.3, 0, 0.1]))
        assert list(midpoint(J[0])) == [0.0, 1.0, 0.0]
        assert contains_zero(J[2])

    def test_reversed_field(self):
        field = fitzhugh_nagumo('0.61', 1e-4)
        x = numpy.array([0.5, -0.1, 0.02])
        assert numpy.allclose(field.reversed()(x), -field(x))
        assert numpy.allclose(field.reversed().reversed()(x), field(x))

    def test_with_parameters_copies(self):
        field = fitzhugh_nagumo('0.61', 1e-4)
        other = field.with_parameters(theta=interval(0.6, 0.62))
        assert field.parameters.theta == '0.61'
        assert upper(other.parameters.theta) >= 0.62

    def test_slow_sign(self):
        field = fitzhugh_nagumo('0.61', interval(0, 1e-4))
        assert is_positive(field.slow(ivector([0.9, 0, interval(0, 0.1)])))
        assert is_negative(field.slow(ivector([-0.2, 0, interval(0, 0.1)])))
        assert is_negative(field.reversed().slow(ivector([0.9, 0, 0.05])))

    def test_float_function_for_scipy(self):
        field = fitzhugh_nagumo(0.61, 1e-4)
        f = field.float_function()
        assert numpy.allclose(f(0.0, [0.5, -0.1, 0.02]),
                              field(numpy.array([0.5, -0.1, 0.02])))


class TestFastSubsystem:
    def test_equilibria(self):
        fast = fast_subsystem(0.61, 0.0)
        for u in (0.0, 0.1, 1.0):
            assert numpy.allclose(fast(numpy.array([u, 0.0])), 0.0)


class TestFrames:
    def test_frame_at_the_origin(self):
        field = fitzhugh_nagumo('0.61', 0)
        P = midpoint(coordinate_change(field, [0, 0, 0]))
        assert list(P[2]) == [0.0, 0.0, 1.0]
        assert list(P[:, 2]) == [0.0, 0.0, 1.0]
        J = midpoint(field.jacobian(ivector([0, 0, 0])))[:2, :2]
        for column, sign in ((0, -1), (1, 1)):
            vector = P[:2, column]
            image = J.dot(vector)
            assert abs(numpy.linalg.norm(vector) - 1) < 1e-12
            assert abs(vector[0] * image[1] - vector[1] * image[0]) < 1e-12
            assert sign * vector.dot(image) > 0
            assert vector[0] > 0

    def test_frame_inverse(self):
        field = fitzhugh_nagumo('0.61', 0)
        P = coordinate_change(field, [0.97, 0, 0.025])
        assert contains_zero(frame_inverse(P).dot(P) - identity(3))
