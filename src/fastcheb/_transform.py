"""Chebyshev coefficients from samples on a Chebyshev-Lobatto grid.

The coefficients are obtained with an O(n log n) type-I discrete cosine
transform along every grid axis, followed by the renormalization that turns
the raw DCT-I output into the conventional Chebyshev-series coefficients.
Trailing coefficients that are negligible relative to the largest one can
then be dropped axis by axis.

References
----------
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapter 3.
- Mason & Handscomb (2003), "Chebyshev Polynomials", Chapman & Hall/CRC,
  Section 6.3.
"""

from __future__ import annotations

import numpy as np
from scipy.fft import dctn

from fastcheb.errors import DimensionMismatchError, ShapeMismatchError


def _stack_sequences(values: np.ndarray) -> np.ndarray:
    """Turn an object array of sequences into a numeric array with a trailing component axis."""
    items = [np.asarray(v) for v in values.flat]
    if all(item.ndim == 0 for item in items):
        return np.array(items).reshape(values.shape)
    if any(item.ndim != 1 for item in items):
        raise ShapeMismatchError(
            "array elements must all be numbers or all be 1-D sequences"
        )
    lengths = {len(item) for item in items}
    if len(lengths) != 1:
        raise ShapeMismatchError(
            f"array elements must all be of the same length, got lengths {sorted(lengths)}"
        )
    return np.stack(items).reshape(values.shape + (lengths.pop(),))


def as_sample_array(values, ndim: int,
                    vector_valued: bool | None = None) -> np.ndarray:
    """Validate sampled values and return them as a float or complex array.

    Parameters
    ----------
    values : array_like
        Samples on the grid. Either a numeric array of rank *ndim*
        (scalar-valued), a numeric array of rank ``ndim + 1`` whose trailing
        axis holds the components of a vector-valued function, or an array
        of rank *ndim* whose elements are equal-length sequences.
    ndim : int
        Number of grid dimensions.
    vector_valued : bool, optional
        Whether the samples carry a trailing component axis. ``None``
        (default) infers it from the rank: a numeric array of rank
        ``ndim + 1`` is read as vector-valued.

    Returns
    -------
    ndarray
        Array of shape ``grid_shape`` or ``grid_shape + (K,)``.

    Raises
    ------
    ShapeMismatchError
        If vector-valued samples have inconsistent lengths, elements have
        more than one component axis, or *vector_valued* is True and there
        is no component axis.
    DimensionMismatchError
        If the samples have fewer than *ndim* axes, or more than *ndim*
        axes when *vector_valued* is False.
    """
    if not isinstance(values, np.ndarray):
        try:
            values = np.asarray(values)
        except ValueError as exc:
            raise ShapeMismatchError(
                "array elements must all be of the same length"
            ) from exc
    if values.ndim < ndim:
        raise DimensionMismatchError(
            f"samples have {values.ndim} dimensions, expected {ndim}"
        )
    if values.dtype == object:
        if values.ndim != ndim:
            raise ShapeMismatchError(
                f"object-valued samples must have exactly {ndim} dimensions"
            )
        values = _stack_sequences(values)
    if values.ndim > ndim + 1:
        raise ShapeMismatchError(
            f"sample elements must be numbers or 1-D vectors, got element shape "
            f"{values.shape[ndim:]}"
        )
    if vector_valued is not None and (values.ndim > ndim) != vector_valued:
        if vector_valued:
            raise ShapeMismatchError(
                f"vector-valued samples need a component axis after the {ndim} grid axes"
            )
        raise DimensionMismatchError(
            f"samples have {values.ndim} dimensions, expected {ndim}"
        )
    if not (np.issubdtype(values.dtype, np.number) or values.dtype == bool):
        raise TypeError(f"samples must be numeric, got dtype {values.dtype}")
    return values.astype(np.result_type(values.dtype, np.float64), copy=False)


def _dct1(values: np.ndarray, axes: list) -> np.ndarray:
    """Unnormalized DCT-I over *axes*; complex data is transformed part by part."""
    if not axes:
        return values.copy()
    if np.iscomplexobj(values):
        return (dctn(values.real, type=1, axes=axes)
                + 1j * dctn(values.imag, type=1, axes=axes))
    return dctn(values, type=1, axes=axes)


def chebyshev_coefficients(values, ndim: int,
                           vector_valued: bool | None = None) -> np.ndarray:
    """Compute Chebyshev coefficients from samples at Chebyshev-Lobatto points.

    Parameters
    ----------
    values : array_like
        Samples laid out as returned by :func:`fastcheb.chebyshev_points`
        (see :func:`as_sample_array` for accepted element kinds).
    ndim : int
        Number of grid dimensions.
    vector_valued : bool, optional
        Passed to :func:`as_sample_array`.

    Returns
    -------
    ndarray
        Coefficient array of the same shape as the validated samples.
        ``coefs[k0, k1, ...]`` multiplies ``T_k0(x0) * T_k1(x1) * ...``.
    """
    values = as_sample_array(values, ndim, vector_valued)
    shape = values.shape[:ndim]

    # DCT-I is undefined for a single point; an axis of extent 1 is
    # already its own (constant) coefficient.
    axes = [d for d in range(ndim) if shape[d] > 1]
    coefs = _dct1(values, axes)

    coefs /= float(np.prod([2 * (shape[d] - 1) for d in axes]))
    for d in axes:
        interior = [slice(None)] * coefs.ndim
        interior[d] = slice(1, shape[d] - 1)
        coefs[tuple(interior)] *= 2
    return coefs


def default_tolerance(coefs: np.ndarray) -> float:
    """Two ulps of the coefficient precision."""
    return 2 * float(np.finfo(coefs.dtype).eps)


def coefficient_magnitudes(coefs: np.ndarray, ndim: int) -> np.ndarray:
    """Per-element magnitude: ``abs`` for scalars, Euclidean norm for vectors."""
    if coefs.ndim > ndim:
        return np.linalg.norm(coefs, axis=-1)
    return np.abs(coefs)


def trim_coefficients(coefs: np.ndarray, ndim: int, tol: float) -> np.ndarray:
    """Drop negligible trailing coefficients along each grid axis.

    Along axis ``d`` the extent shrinks while it is above 1 and every
    coefficient in the last slice has magnitude ``<= tol * max|c|``, the
    maximum being taken over the whole array. Only a trailing run can go,
    so low-order terms are never touched. An axis along which the function
    is constant collapses to extent 1.

    Parameters
    ----------
    coefs : ndarray
        Coefficients from :func:`chebyshev_coefficients`.
    ndim : int
        Number of grid dimensions.
    tol : float
        Relative tolerance. ``0`` returns *coefs* unchanged.

    Returns
    -------
    ndarray
        The leading sub-block of *coefs* that survives trimming.
    """
    if tol < 0:
        raise ValueError(f"tol must be non-negative, got {tol}")
    if tol == 0:
        return coefs

    mags = coefficient_magnitudes(coefs, ndim)
    threshold = tol * mags.max()

    new_shape = []
    for d in range(ndim):
        n = mags.shape[d]
        while n > 1 and np.all(np.take(mags, n - 1, axis=d) <= threshold):
            n -= 1
        new_shape.append(n)

    block = tuple(slice(0, n) for n in new_shape)
    return coefs[block].copy()
