import collections
import matplotlib
matplotlib.use("Agg")

import pytest
from hsets import VectorField


Rates = collections.namedtuple('Rates', 'rate')


def _saddle(x, p):
    return [-p.rate * x[0], p.rate * x[1], p.rate]


def _saddle_jacobian(x, p):
    return [[-p.rate, 0, 0], [0, p.rate, 0], [0, 0, 0]]


def _offset_saddle(x, p):
    return [p.rate - p.rate * x[0], p.rate * x[1], p.rate]


def _attracting(x, p):
    return [-p.rate * x[0], p.rate * x[1], -p.rate * x[2]]


def _attracting_jacobian(x, p):
    return [[-p.rate, 0, 0], [0, p.rate, 0], [0, 0, -p.rate]]


def _decay(x, p):
    return [-p.rate * x[0]]


def _decay_jacobian(x, p):
    return [[-p.rate]]


def _drift(x, p):
    return [p.rate, 0, 0]


def _drift_jacobian(x, p):
    return [[0, 0, 0], [0, 0, 0], [0, 0, 0]]


@pytest.fixture
def saddle():
    """u' = -u, w' = w, v' = 1: a saddle moving along v."""
    return VectorField(_saddle, _saddle_jacobian, Rates(1))


@pytest.fixture
def offset_saddle():
    """u' = 1 - u, w' = w, v' = 1: the saddle with its stable plane moved to u = 1."""
    return VectorField(_offset_saddle, _saddle_jacobian, Rates(1))


@pytest.fixture
def attracting():
    """u' = -u, w' = w, v' = -v: a hyperbolic equilibrium at the origin."""
    return VectorField(_attracting, _attracting_jacobian, Rates(1))


@pytest.fixture
def decay():
    """x' = -x in one dimension."""
    return VectorField(_decay, _decay_jacobian, Rates(1), dimension=1)


@pytest.fixture
def drift():
    """u' = 1: translation along u."""
    return VectorField(_drift, _drift_jacobian, Rates(1))
