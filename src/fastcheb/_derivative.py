"""Gradients and Jacobians through differentiated Chebyshev series."""

from __future__ import annotations

import numpy as np
from numpy.polynomial.chebyshev import chebder

from fastcheb._clenshaw import evaluate_reference
from fastcheb._domain import scale_factor, to_reference


def derivative_coefficients(coefs: np.ndarray, axis: int, scale: float = 1.0) -> np.ndarray:
    """Coefficients of the partial derivative along *axis*.

    Uses the backward recurrence ``d[k-1] = d[k+1] + 2k c[k]`` with the
    ``d[0]`` term halved, applied along *axis* only. *scale* multiplies the
    result (the chain-rule factor of an affine change of variable).

    The derivative series has one coefficient fewer along *axis*; a series
    that is already constant along *axis* gives a single zero coefficient.
    """
    return chebder(coefs, m=1, scl=scale, axis=axis)


def jacobian(coefs: np.ndarray, lb: np.ndarray, ub: np.ndarray, x) -> tuple:
    """Value and Jacobian of the series *coefs* on ``[lb, ub]`` at *x*.

    Returns
    -------
    (value, jac) : tuple
        *value* is the series value. *jac* has one row per output
        component and one column per input axis, shape ``(K, N)``; a
        scalar-valued series gives shape ``(1, N)``.
    """
    ndim = len(lb)
    x0 = to_reference(x, lb, ub)
    scale = scale_factor(lb, ub)

    value = evaluate_reference(coefs, x0, ndim)
    n_out = int(np.prod(coefs.shape[ndim:]))
    jac = np.empty((n_out, ndim), dtype=np.result_type(coefs.dtype, x0.dtype))
    for k in range(ndim):
        dcoefs = derivative_coefficients(coefs, k, scale[k])
        jac[:, k] = evaluate_reference(dcoefs, x0, ndim)
    return value, jac


def gradient(coefs: np.ndarray, lb: np.ndarray, ub: np.ndarray, x) -> tuple:
    """Value and gradient (shape ``(N,)``) of a scalar-valued series."""
    value, jac = jacobian(coefs, lb, ub, x)
    return value, jac[0]
