"""Multi-dimensional Chebyshev interpolants on a hypercube.

Samples taken on a tensor-product Chebyshev-Lobatto grid (see
:func:`fastcheb.chebyshev_points`) are turned into a Chebyshev series by a
type-I DCT. The series is evaluated with a nested Clenshaw recurrence, and
gradients / Jacobians come from differentiated coefficient series.

References
----------
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapters 3 and 8.
- Clenshaw (1955), "A note on the summation of Chebyshev series",
  Mathematical Tables and Other Aids to Computation 9(51):118-120.
"""

from __future__ import annotations

import os
import pickle
import time
import warnings
from typing import List, Tuple

import numpy as np

from fastcheb import _derivative
from fastcheb._clenshaw import evaluate_reference
from fastcheb._domain import normalize_bounds, to_reference
from fastcheb._transform import (
    chebyshev_coefficients,
    coefficient_magnitudes,
    default_tolerance,
    trim_coefficients,
)
from fastcheb.errors import DimensionMismatchError, ShapeMismatchError


def _readonly(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


class ChebyshevInterpolant:
    """Multi-dimensional Chebyshev-polynomial interpolant.

    Holds a Chebyshev coefficient array and the bounds of the hypercube it
    lives on. Instances are immutable: the arrays are read-only, so one
    interpolant can be shared freely between threads.

    Build one from grid samples with :meth:`from_values`; the constructor
    wraps an existing coefficient array (e.g. one restored from storage).

    Parameters
    ----------
    coefficients : array_like
        Coefficient array. The first ``len(lb)`` axes are grid axes, axis
        ``k`` of length ``order[k] + 1``; an optional trailing axis holds the
        components of a vector-valued function.
    lb, ub : float or sequence of float
        Lower and upper bounds of the domain, ``lb[i] < ub[i]``.

    Examples
    --------
    >>> import numpy as np
    >>> from fastcheb import ChebyshevInterpolant, chebyshev_points
    >>> x = chebyshev_points(20, 0.0, 3.0)
    >>> interp = ChebyshevInterpolant.from_values(np.sin(x), 0.0, 3.0)
    >>> bool(abs(interp(1.0) - np.sin(1.0)) < 1e-12)
    True
    """

    def __init__(self, coefficients, lb, ub):
        lb, ub = normalize_bounds(lb, ub)
        coefficients = np.array(coefficients)
        ndim = len(lb)
        if coefficients.ndim not in (ndim, ndim + 1):
            raise DimensionMismatchError(
                f"coefficient array has {coefficients.ndim} dimensions, "
                f"bounds have {ndim}"
            )
        if not np.issubdtype(coefficients.dtype, np.number):
            raise TypeError(
                f"coefficients must be numeric, got dtype {coefficients.dtype}"
            )
        if coefficients.size == 0:
            raise ValueError("coefficient array must not be empty")
        coefficients = coefficients.astype(
            np.result_type(coefficients.dtype, np.float64), copy=False
        )
        self._coefficients = _readonly(coefficients)
        self._lb = _readonly(lb)
        self._ub = _readonly(ub)

    # ------------------------------------------------------------------
    # Construction from samples
    # ------------------------------------------------------------------

    @classmethod
    def from_values(cls, values, lb, ub, tol: float | None = None,
                    verbose: bool = False,
                    vector_valued: bool | None = None) -> "ChebyshevInterpolant":
        """Create an interpolant from function values on the Chebyshev grid.

        Parameters
        ----------
        values : array_like
            Samples at the points returned by
            :func:`fastcheb.chebyshev_points` for the same bounds, with
            ``values[i0, i1, ...] = f(points[i0, i1, ...])``. Elements may
            be real or complex numbers, or equal-length vectors (as a
            trailing array axis or as sequence elements) to interpolate
            several functions at once.
        lb, ub : float or sequence of float
            Domain bounds, one per grid dimension of *values*.
        tol : float, optional
            Relative tolerance for dropping trailing coefficients along each
            axis. Defaults to two machine epsilons of the sample precision;
            ``0`` keeps the full tensor-product coefficient array.
        verbose : bool, optional
            If True, print build time and order reduction. Default is False.
        vector_valued : bool, optional
            Declare whether *values* has a trailing component axis. By
            default this is inferred from the rank (see Notes); pass False
            to have extra sample axes rejected instead.

        Returns
        -------
        ChebyshevInterpolant

        Raises
        ------
        DimensionMismatchError
            If ``len(lb)``, ``len(ub)`` and the grid rank of *values* differ.
        ShapeMismatchError
            If vector-valued samples have inconsistent lengths, or
            *vector_valued* is True and the samples have no component axis.
        ValueError
            If *values* contains NaN or Inf, or the bounds are invalid.

        Notes
        -----
        A numeric *values* array with one axis more than ``len(lb)`` is read
        as vector-valued, the trailing axis holding the components. Samples
        of a 2-D grid passed with 1-D bounds therefore build a 1-D
        interpolant of ``values.shape[1]`` functions unless
        ``vector_valued=False`` is given.
        """
        start = time.time()
        lb, ub = normalize_bounds(lb, ub)
        ndim = len(lb)

        full = chebyshev_coefficients(values, ndim, vector_valued)
        if not np.isfinite(full).all():
            raise ValueError("values contains NaN or Inf")
        if tol is None:
            tol = default_tolerance(full)
        coefs = trim_coefficients(full, ndim, tol)

        obj = cls(coefs, lb, ub)
        if verbose:
            full_order = tuple(n - 1 for n in full.shape[:ndim])
            print(f"Built {ndim}D Chebyshev interpolant in "
                  f"{time.time() - start:.3f}s")
            print(f"  Order: {list(full_order)} -> {list(obj.order)} "
                  f"(tol={tol:.1e})")
        return obj

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def coefficients(self) -> np.ndarray:
        """Read-only Chebyshev coefficient array."""
        return self._coefficients

    @property
    def lb(self) -> np.ndarray:
        return self._lb

    @property
    def ub(self) -> np.ndarray:
        return self._ub

    @property
    def num_dimensions(self) -> int:
        return len(self._lb)

    @property
    def order(self) -> Tuple[int, ...]:
        """Polynomial degree along each axis (after any trimming)."""
        return tuple(n - 1 for n in self._coefficients.shape[:self.num_dimensions])

    @property
    def value_shape(self) -> Tuple[int, ...]:
        """``()`` for scalar-valued interpolants, ``(K,)`` for K components."""
        return self._coefficients.shape[self.num_dimensions:]

    @property
    def is_scalar_valued(self) -> bool:
        return self.value_shape == ()

    @property
    def domain(self) -> List[List[float]]:
        return [[float(lo), float(hi)] for lo, hi in zip(self._lb, self._ub)]

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(self, x):
        """Evaluate the interpolant at a single point.

        Parameters
        ----------
        x : float or sequence of float
            Query point, one coordinate per dimension; a bare number is
            accepted for 1-D interpolants.

        Returns
        -------
        scalar or ndarray
            A real or complex scalar, or an ndarray of shape ``(K,)`` for
            vector-valued interpolants.

        Raises
        ------
        DimensionMismatchError
            If *x* has the wrong number of coordinates.
        OutOfDomainError
            If *x* lies outside ``[lb, ub]``.
        """
        x0 = to_reference(x, self._lb, self._ub)
        return evaluate_reference(self._coefficients, x0, self.num_dimensions)

    __call__ = evaluate

    def evaluate_batch(self, points) -> np.ndarray:
        """Evaluate at multiple points.

        Parameters
        ----------
        points : array_like
            Points of shape ``(M, num_dimensions)``; shape ``(M,)`` is
            accepted for 1-D interpolants.

        Returns
        -------
        ndarray
            Results of shape ``(M,)`` or ``(M, K)``.
        """
        points = np.asarray(points, dtype=self._lb.dtype)
        if points.ndim == 1 and self.num_dimensions == 1:
            points = points[:, np.newaxis]
        if points.ndim != 2 or points.shape[1] != self.num_dimensions:
            raise DimensionMismatchError(
                f"points must have shape (M, {self.num_dimensions}), "
                f"got {points.shape}"
            )
        return np.array([self.evaluate(p) for p in points])

    def gradient(self, x) -> tuple:
        """Value and gradient of a scalar-valued interpolant at *x*.

        Returns
        -------
        (value, grad) : (scalar, ndarray of shape (num_dimensions,))

        Raises
        ------
        ShapeMismatchError
            If the interpolant is vector-valued; use :meth:`jacobian`.
        """
        if not self.is_scalar_valued:
            raise ShapeMismatchError(
                "gradient() requires a scalar-valued interpolant; use jacobian()"
            )
        return _derivative.gradient(self._coefficients, self._lb, self._ub, x)

    def jacobian(self, x) -> tuple:
        """Value and Jacobian matrix at *x*.

        Row ``i`` of the Jacobian is the gradient of output component ``i``,
        so its shape is ``(K, num_dimensions)``. Scalar-valued interpolants
        give a single row.

        Returns
        -------
        (value, jac) : (scalar or ndarray, ndarray)
        """
        return _derivative.jacobian(self._coefficients, self._lb, self._ub, x)

    # ------------------------------------------------------------------
    # Error estimation
    # ------------------------------------------------------------------

    def error_estimate(self) -> float:
        """Estimate the supremum-norm interpolation error.

        Sums, over the axes, the largest magnitude among the highest-order
        coefficients along that axis:

        .. math::

            \\hat{E} = \\sum_{d=1}^{D}
                \\max_{\\text{slices along } d} |c_{n_d - 1}|

        Axes of extent 1 (constant directions) contribute nothing.

        References
        ----------
        Ruiz & Zeron (2021), "Machine Learning for Risk Calculations",
        Section 3.4.
        """
        ndim = self.num_dimensions
        mags = coefficient_magnitudes(self._coefficients, ndim)
        total_error = 0.0
        for d in range(ndim):
            n = mags.shape[d]
            if n > 1:
                total_error += float(np.take(mags, n - 1, axis=d).max())
        return total_error

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def __getstate__(self) -> dict:
        from fastcheb._version import __version__

        return {
            "coefficients": np.array(self._coefficients),
            "lb": np.array(self._lb),
            "ub": np.array(self._ub),
            "_fastcheb_version": __version__,
        }

    def __setstate__(self, state: dict) -> None:
        from fastcheb._version import __version__

        saved_version = state.get("_fastcheb_version")
        if saved_version is not None and saved_version != __version__:
            warnings.warn(
                f"This object was saved with fastcheb {saved_version}, "
                f"but you are loading it with {__version__}.",
                UserWarning,
                stacklevel=2,
            )
        self._coefficients = _readonly(state["coefficients"])
        self._lb = _readonly(state["lb"])
        self._ub = _readonly(state["ub"])

    def save(self, path: str | os.PathLike) -> None:
        """Save the interpolant (coefficients and bounds) to a file."""
        with open(os.fspath(path), "wb") as f:
            pickle.dump(self, f, protocol=pickle.HIGHEST_PROTOCOL)

    @classmethod
    def load(cls, path: str | os.PathLike) -> "ChebyshevInterpolant":
        """Load an interpolant previously written by :meth:`save`.

        Warns
        -----
        UserWarning
            If the file was saved with a different fastcheb version.

        .. warning::

            This method uses :mod:`pickle` internally. Pickle can execute
            arbitrary code during deserialization. **Only load files you
            trust.**
        """
        with open(os.fspath(path), "rb") as f:
            obj = pickle.load(f)  # noqa: S301
        if not isinstance(obj, cls):
            raise TypeError(
                f"Expected a {cls.__name__} instance, got {type(obj).__name__}"
            )
        return obj

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"ChebyshevInterpolant("
            f"dims={self.num_dimensions}, "
            f"order={list(self.order)}, "
            f"value_shape={self.value_shape})"
        )

    def __str__(self) -> str:
        domain_str = " x ".join(f"[{lo}, {hi}]" for lo, hi in self.domain)
        kind = "scalar" if self.is_scalar_valued else f"{self.value_shape[0]}-vector"
        return "\n".join([
            f"ChebyshevInterpolant ({self.num_dimensions}D, {kind}, "
            f"{self._coefficients.dtype})",
            f"  Order:       {list(self.order)}",
            f"  Domain:      {domain_str}",
            f"  Error est:   {self.error_estimate():.2e}",
        ])
