"""fastcheb: Fast multi-dimensional Chebyshev interpolation on a hypercube.

Provides :func:`chebyshev_points` for generating the tensor-product
Chebyshev-Lobatto grid on which to sample a function, and the
:class:`ChebyshevInterpolant` class that turns those samples into a
Chebyshev series (via a type-I DCT) and evaluates it, its gradient, or its
Jacobian with a nested Clenshaw recurrence. Scalar, complex, and
vector-valued functions are supported.

Example
-------
>>> import numpy as np
>>> from fastcheb import ChebyshevInterpolant, chebyshev_points
>>> x = chebyshev_points([20, 20], [-1, -1], [1, 1])
>>> vals = np.sin(x[..., 0]) + np.sin(x[..., 1])
>>> cheb = ChebyshevInterpolant.from_values(vals, [-1, -1], [1, 1])
>>> round(float(cheb([0.5, 0.3])), 4)
0.7749
"""

from fastcheb._version import __version__
from fastcheb.errors import DimensionMismatchError, OutOfDomainError, ShapeMismatchError
from fastcheb.grid import chebyshev_points
from fastcheb.interpolant import ChebyshevInterpolant

__all__ = [
    "ChebyshevInterpolant",
    "DimensionMismatchError",
    "OutOfDomainError",
    "ShapeMismatchError",
    "chebyshev_points",
    "__version__",
]
