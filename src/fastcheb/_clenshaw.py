"""Multi-dimensional Clenshaw recurrence over a flat coefficient buffer.

An N-D Chebyshev series is evaluated as nested 1-D series: along axis
``dim`` the "coefficients" are themselves the values of the (N-dim-1)-D
series obtained by fixing the index on that axis. The recursion walks from
axis 0 down to the last axis, which is contiguous in C order, so the
innermost sums stream through memory sequentially.

Sub-series are addressed by ``(start, stride)`` into a flat view of the
buffer; no slice of the coefficient array is ever copied.

References
----------
- Clenshaw (1955), "A note on the summation of Chebyshev series",
  Mathematical Tables and Other Aids to Computation 9(51):118-120.
"""

from __future__ import annotations

import numpy as np


def _term(x0, flat, shape, dim, offset, stride):
    """Coefficient ``offset`` along axis *dim*, resolved over all later axes."""
    if dim == len(shape) - 1:
        return flat[offset]
    return clenshaw(x0, flat, shape, dim + 1, offset, stride)


def clenshaw(x0, flat: np.ndarray, shape: tuple, dim: int, start: int, length: int):
    """Evaluate the sub-series of *flat* rooted at axis *dim*.

    Parameters
    ----------
    x0 : ndarray
        Point in the reference cube ``[-1, 1]^N``.
    flat : ndarray
        Coefficients reshaped to ``(prod(shape),) + value_shape``.
    shape : tuple of int
        Grid extents of the coefficient array.
    dim : int
        Axis handled by this call.
    start : int
        Flat index of the first coefficient of the sub-series.
    length : int
        ``prod(shape[dim:])``, the number of flat entries the sub-series spans.

    Returns
    -------
    scalar or ndarray
        Series value; an ndarray of shape ``value_shape`` for vector-valued
        coefficients.
    """
    n = shape[dim]
    t = x0[dim]
    stride = length // n  # C-order stride of the current axis

    c0 = _term(x0, flat, shape, dim, start, stride)
    if n == 1:
        return c0 + t * np.zeros_like(c0)
    if n == 2:
        return c0 + t * _term(x0, flat, shape, dim, start + stride, stride)

    c_last = _term(x0, flat, shape, dim, start + (n - 1) * stride, stride)
    b_k = _term(x0, flat, shape, dim, start + (n - 2) * stride, stride) + 2 * t * c_last
    b_k1 = c_last
    for j in range(n - 3, 0, -1):
        b_j = _term(x0, flat, shape, dim, start + j * stride, stride) + 2 * t * b_k - b_k1
        b_k, b_k1 = b_j, b_k
    return c0 + t * b_k - b_k1


def evaluate_reference(coefs: np.ndarray, x0: np.ndarray, ndim: int):
    """Evaluate the Chebyshev series *coefs* at reference point *x0*.

    The first *ndim* axes of *coefs* are grid axes; a trailing axis, if
    present, holds vector components.
    """
    shape = coefs.shape[:ndim]
    flat = np.ascontiguousarray(coefs).reshape((-1,) + coefs.shape[ndim:])
    return clenshaw(x0, flat, shape, 0, 0, flat.shape[0])
