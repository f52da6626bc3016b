"""Affine map between the hypercube [lb, ub] and the reference cube [-1, 1]^N."""

from __future__ import annotations

import numpy as np

from fastcheb.errors import DimensionMismatchError, OutOfDomainError

# Points within this distance of the reference-cube boundary are clipped
# onto it instead of rejected.
DOMAIN_TOL = 1e-14


def normalize_bounds(lb, ub) -> tuple:
    """Promote *lb* and *ub* to 1-D float arrays of one common dtype.

    Parameters
    ----------
    lb, ub : float or sequence of float
        Lower and upper bounds of the hypercube.

    Returns
    -------
    (lb, ub) : (ndarray, ndarray)

    Raises
    ------
    DimensionMismatchError
        If the bounds have different lengths.
    ValueError
        If ``lb[i] >= ub[i]`` for some axis.
    """
    lb = np.atleast_1d(np.asarray(lb))
    ub = np.atleast_1d(np.asarray(ub))
    if lb.ndim != 1 or ub.ndim != 1 or lb.shape != ub.shape:
        raise DimensionMismatchError(
            f"lb and ub must be 1-D of equal length, got shapes "
            f"{lb.shape} and {ub.shape}"
        )
    dtype = np.result_type(lb, ub, float)
    lb = lb.astype(dtype)
    ub = ub.astype(dtype)
    for d in range(len(lb)):
        if not lb[d] < ub[d]:
            raise ValueError(
                f"domain[{d}]: lo={lb[d]} must be strictly less than hi={ub[d]}"
            )
    return lb, ub


def to_reference(x, lb: np.ndarray, ub: np.ndarray) -> np.ndarray:
    """Map a physical point *x* into the reference cube.

    Raises
    ------
    DimensionMismatchError
        If *x* does not have one coordinate per axis.
    OutOfDomainError
        If any coordinate falls outside ``[lb, ub]`` by more than
        :data:`DOMAIN_TOL` in reference units.
    """
    x = np.atleast_1d(np.asarray(x, dtype=lb.dtype))
    if x.shape != lb.shape:
        raise DimensionMismatchError(
            f"point has {x.size} coordinates, interpolant has {lb.size} dimensions"
        )
    x0 = 2 * (x - lb) / (ub - lb) - 1
    if not np.all(np.abs(x0) <= 1 + DOMAIN_TOL):
        raise OutOfDomainError(f"{x.tolist()} not in domain")
    return np.clip(x0, -1.0, 1.0)


def scale_factor(lb: np.ndarray, ub: np.ndarray) -> np.ndarray:
    """Per-axis derivative of the reference coordinate w.r.t. the physical one."""
    return 2 / (ub - lb)
