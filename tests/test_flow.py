import math
import numpy
import pytest
from mpmath import iv
from hsets import (RigorousFlow, C0Set, AffineSection, integrate_to_section,
                   interval, ivector, identity, lower, upper, midpoint,
                   contains_zero, IntegrationInconsistency)


class TestC0Set:
    def test_from_box_encloses_the_box(self):
        box = ivector([interval(1, 3), interval(-1, 1), 0])
        X = C0Set.from_box(box)
        assert list(midpoint(X.center)) == [2.0, 0.0, 0.0]
        enclosure = X.enclosure()
        assert lower(enclosure[0]) <= 1 and upper(enclosure[0]) >= 3

    def test_affine_image(self):
        X = C0Set([1, 0, 0], identity(3), ivector([interval(-1, 1), 0, 0]))
        image = X.affine_image(2 * identity(3), [1, 0, 0])
        assert lower(image[0]) == -2 and upper(image[0]) == 2


class TestRigorousFlow:
    def test_rough_enclosure(self, decay):
        flow = RigorousFlow(decay)
        W = flow.rough_enclosure(ivector([1]), 0.1)
        assert lower(W[0]) <= math.exp(-0.1) and upper(W[0]) >= 1

    def test_advance_encloses_the_solution(self, decay):
        flow = RigorousFlow(decay, order=8)
        X = C0Set(ivector([1]))
        W = flow.rough_enclosure(X.enclosure(), 0.1)
        Y = flow.advance(X, W, 0.1)
        value = Y.enclosure()[0]
        assert lower(value) <= math.exp(-0.1) <= upper(value)
        assert upper(value) - lower(value) < 1e-12

    def test_crossing_time_of_exponential_decay(self, decay):
        flow = RigorousFlow(decay)
        section = AffineSection([iv.exp(-1)], [1])
        crossing = flow.poincare(C0Set(ivector([1])), section)
        assert lower(crossing.time) <= 1 <= upper(crossing.time)
        assert upper(crossing.time) - lower(crossing.time) < 1e-6
        assert contains_zero(section(crossing.set.enclosure()))

    def test_crossing_of_a_translated_box(self, drift):
        flow = RigorousFlow(drift)
        box = ivector([interval(-0.01, 0.01), interval(-1, 1), 5])
        section = AffineSection([1, 0, 0], [1, 0, 0])
        crossing = flow.poincare(C0Set.from_box(box), section)
        enclosure = crossing.set.enclosure()
        assert lower(crossing.time) <= 0.99 and upper(crossing.time) >= 1.01
        assert lower(enclosure[1]) <= -1 and upper(enclosure[1]) >= 1
        assert contains_zero(enclosure[2] - 5)

    def test_set_on_the_section(self, drift):
        flow = RigorousFlow(drift)
        section = AffineSection([0, 0, 0], [1, 0, 0])
        with pytest.raises(IntegrationInconsistency):
            flow.poincare(C0Set([0, 0, 0]), section)

    def test_no_crossing(self, drift):
        flow = RigorousFlow(drift, max_time=2.0)
        section = AffineSection([-1, 0, 0], [1, 0, 0])
        with pytest.raises(IntegrationInconsistency):
            flow.poincare(C0Set([0, 0, 0]), section)

    def test_monodromy_projects_out_the_flow(self, drift):
        flow = RigorousFlow(drift)
        section = AffineSection([1, 0, 0], [1, 0, 0])
        point, DP = flow.monodromy([0, 0, 0], section)
        assert lower(point[0]) <= 1 <= upper(point[0])
        assert contains_zero(DP - numpy.diag([0.0, 1.0, 1.0]))


class TestIntegrateToSection:
    def test_decay(self, decay):
        section = AffineSection([math.exp(-1)], [1])
        x, t = integrate_to_section(decay, [1.0], section)
        assert abs(t - 1) < 1e-8
        assert abs(x[0] - math.exp(-1)) < 1e-10

    def test_missed_section(self, decay):
        section = AffineSection([2.0], [1])
        with pytest.raises(IntegrationInconsistency):
            integrate_to_section(decay, [1.0], section, max_time=5.0)
