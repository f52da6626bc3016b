"""Shared test fixtures for fastcheb tests."""

import cmath
import math

import numpy as np
import pytest

from fastcheb import ChebyshevInterpolant, chebyshev_points


# ---------------------------------------------------------------------------
# Test functions
# ---------------------------------------------------------------------------

def runge_exp_1d(x):
    """exp(x) / (1 + 2x^2)"""
    return math.exp(x) / (1 + 2 * x ** 2)


def runge_exp_1d_deriv(x):
    return runge_exp_1d(x) * (1 - 4 * x / (1 + 2 * x ** 2))


def runge_exp_2d(x):
    """exp(x + 2y) / (1 + 2x^2 + y^2)"""
    return math.exp(x[0] + 2 * x[1]) / (1 + 2 * x[0] ** 2 + x[1] ** 2)


def runge_exp_2d_grad(x):
    denom = 1 + 2 * x[0] ** 2 + x[1] ** 2
    f = runge_exp_2d(x)
    return np.array([f * (1 - 4 * x[0] / denom), f * (2 - 2 * x[1] / denom)])


def vector_2d(x):
    """[exp(x + 2y) / (1 + 2x^2 + y^2), exp(i(xy + 2y))]"""
    return [runge_exp_2d(x), cmath.exp(1j * (x[0] * x[1] + 2 * x[1]))]


def vector_2d_jac(x):
    phase = cmath.exp(1j * (x[0] * x[1] + 2 * x[1]))
    return np.array([
        runge_exp_2d_grad(x),
        [1j * x[1] * phase, 1j * (x[0] + 2) * phase],
    ])


def sample(func, points, ndim):
    """Apply *func* to every coordinate tuple of a chebyshev_points() grid."""
    if ndim == 1:
        return np.array([func(p) for p in points])
    shape = points.shape[:ndim]
    return np.array([func(points[idx]) for idx in np.ndindex(*shape)]).reshape(
        shape + np.shape(func(points[(0,) * ndim]))
    )


LB_1D, UB_1D = -0.3, 0.9
LB_2D, UB_2D = [-0.3, 0.1], [0.9, 1.2]
ORDER_2D = (48, 39)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="module")
def interp_1d():
    """Order-48 interpolant of exp(x)/(1+2x^2) on [-0.3, 0.9]."""
    x = chebyshev_points(48, LB_1D, UB_1D)
    return ChebyshevInterpolant.from_values(sample(runge_exp_1d, x, 1), LB_1D, UB_1D)


@pytest.fixture(scope="module")
def grid_2d():
    return chebyshev_points(ORDER_2D, LB_2D, UB_2D)


@pytest.fixture(scope="module")
def interp_2d(grid_2d):
    """Trimmed (default tol) 2D interpolant of runge_exp_2d."""
    return ChebyshevInterpolant.from_values(sample(runge_exp_2d, grid_2d, 2), LB_2D, UB_2D)


@pytest.fixture(scope="module")
def interp_2d_full(grid_2d):
    """Untrimmed (tol=0) 2D interpolant of runge_exp_2d."""
    return ChebyshevInterpolant.from_values(
        sample(runge_exp_2d, grid_2d, 2), LB_2D, UB_2D, tol=0
    )


@pytest.fixture(scope="module")
def interp_vector_2d(grid_2d):
    """Complex 2-component interpolant of vector_2d."""
    return ChebyshevInterpolant.from_values(sample(vector_2d, grid_2d, 2), LB_2D, UB_2D)
