import os
import numpy
import pytest
from hsets import (correct_equilibrium, corrector, FastConnection,
                   correct_corners, fitzhugh_nagumo, fast_subsystem, interval,
                   ivector, lower, upper, midpoint, ProofConfig,
                   GeometryPrecondition)


slow = pytest.mark.skipif(not os.environ.get("HSETS_SLOW"),
                          reason="set HSETS_SLOW=1 to run shooting tests")


class TestSlowManifold:
    def test_correct_equilibrium(self):
        field = fitzhugh_nagumo('0.61', 0)
        point = correct_equilibrium(field, [0.97, 0.0, 0.025])
        x = midpoint(point)
        assert abs(field(x)[1]) < 1e-12
        assert abs(x[0] - 0.97) < 0.01
        assert x[1] == 0.0

    def test_slow_coordinate_is_kept(self):
        field = fitzhugh_nagumo('0.61', 0)
        point = correct_equilibrium(field, ivector([0.97, 0, interval(0.02, 0.03)]))
        assert lower(point[2]) == 0.02 and upper(point[2]) == 0.03

    def test_corrector(self):
        field = fitzhugh_nagumo('0.61', 0)
        correct = corrector(field)
        x = midpoint(correct(ivector([-0.1, 0, 0.025])))
        assert abs(field(x)[1]) < 1e-12


class TestFastConnection:
    def test_equilibria_of_the_fast_subsystem(self):
        shooter = FastConnection(0.61, 0.84, -0.24)
        for guess in (0.84, -0.24):
            point = shooter.equilibrium(guess, 0.0988)
            fast = fast_subsystem(0.61, 0.0988)
            assert abs(fast(point)[1]) < 1e-12

    def test_middle_equilibrium_is_not_a_saddle(self):
        shooter = FastConnection(0.61, 0.84, -0.24)
        fast = fast_subsystem(0.61, 0.0)
        point = shooter.equilibrium(0.1, 0.0)
        with pytest.raises(GeometryPrecondition):
            shooter._direction(fast, point, numpy.array([1.0, 0.0]), True)

    @slow
    def test_corner_correction(self):
        config = ProofConfig.defaults()
        ul, dl, ur, dr = correct_corners(0.61, config.gamma_ul, config.gamma_dl,
                                         config.gamma_ur, config.gamma_dr)
        assert ul[2] == dl[2] and ur[2] == dr[2]
        assert abs(ul[2] - config.gamma_ul[2]) < 1e-3
        assert abs(ur[2] - config.gamma_ur[2]) < 1e-3
