"""Tensor-product Chebyshev-Lobatto sample grids."""

from __future__ import annotations

import numpy as np

from fastcheb._domain import normalize_bounds
from fastcheb.errors import DimensionMismatchError


def _lobatto_nodes(order: int, lo: float, hi: float) -> np.ndarray:
    """Chebyshev-Lobatto nodes on [lo, hi], in descending order.

    Node ``i`` is ``lo + (1 + cos(i*pi/order)) * (hi - lo) / 2``, so index 0
    is exactly *hi* and index *order* is exactly *lo*.
    """
    if order == 0:
        return np.array([hi])
    theta = np.arange(order + 1) * np.pi / order
    nodes = lo + (1 + np.cos(theta)) * (hi - lo) * 0.5
    # the affine map can be off by one ulp at the ends
    nodes[0] = hi
    nodes[-1] = lo
    return nodes


def chebyshev_points(order, lb, ub) -> np.ndarray:
    """Return the Chebyshev grid on which to sample a function.

    Evaluate your function at these points, then pass the results to
    :meth:`ChebyshevInterpolant.from_values`.

    Parameters
    ----------
    order : int or sequence of int
        Polynomial degree per dimension. Dimension ``k`` gets
        ``order[k] + 1`` points.
    lb, ub : float or sequence of float
        Lower and upper bounds of the hypercube.

    Returns
    -------
    ndarray
        If *order*, *lb* and *ub* are all scalars, a 1-D array of
        ``order + 1`` numbers. Otherwise an array of shape
        ``(order[0]+1, ..., order[N-1]+1, N)`` holding one coordinate tuple
        per multi-index (``indexing="ij"``), so that
        ``values[i0, i1, ...] = f(points[i0, i1, ...])`` lays out samples
        the way :meth:`ChebyshevInterpolant.from_values` expects.

    Raises
    ------
    DimensionMismatchError
        If *order*, *lb* and *ub* have different lengths.
    ValueError
        If an order is negative or a lower bound is not below its upper bound.

    Examples
    --------
    >>> chebyshev_points(2, 0.0, 2.0)
    array([2., 1., 0.])
    >>> chebyshev_points([3, 4], [0, 0], [1, 2]).shape
    (4, 5, 2)
    """
    scalar = np.ndim(order) == 0 and np.ndim(lb) == 0 and np.ndim(ub) == 0
    order = np.atleast_1d(np.asarray(order))
    if order.ndim != 1 or not np.issubdtype(order.dtype, np.integer):
        raise TypeError(f"order must be an int or a sequence of ints, got {order!r}")
    lb, ub = normalize_bounds(lb, ub)
    if len(order) != len(lb):
        raise DimensionMismatchError(
            f"len(order)={len(order)} must equal len(lb)=len(ub)={len(lb)}"
        )
    if np.any(order < 0):
        raise ValueError(f"order must be non-negative, got {order.tolist()}")

    nodes_per_dim = [
        _lobatto_nodes(int(order[d]), lb[d], ub[d]) for d in range(len(order))
    ]
    if scalar:
        return nodes_per_dim[0]
    grids = np.meshgrid(*nodes_per_dim, indexing="ij")
    return np.stack(grids, axis=-1)
