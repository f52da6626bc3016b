"""Quick start example: interpolate a 2D function and compute its gradient."""

import math

import numpy as np

from fastcheb import ChebyshevInterpolant, chebyshev_points


def f(x):
    """A smooth 2D function: sin(x) * exp(-y)."""
    return math.sin(x[0]) * math.exp(-x[1])


lb, ub = [-3, 0], [3, 2]

# Sample on the Chebyshev grid
points = chebyshev_points([30, 20], lb, ub)
values = np.array([[f(p) for p in row] for row in points])

# Build interpolant (trailing negligible coefficients are dropped)
cheb = ChebyshevInterpolant.from_values(values, lb, ub, verbose=True)
print(cheb)

# Evaluate at a test point
point = [1.0, 0.5]
exact = f(point)
approx = cheb(point)

print(f"\nExact:  {exact:.10f}")
print(f"Approx: {approx:.10f}")
print(f"Error:  {abs(approx - exact):.2e}")

# Gradient
_, grad = cheb.gradient(point)
dfdx_exact = math.cos(point[0]) * math.exp(-point[1])
dfdy_exact = -exact
print(f"\ndf/dx exact:  {dfdx_exact:.10f}   approx: {grad[0]:.10f}")
print(f"df/dy exact:  {dfdy_exact:.10f}   approx: {grad[1]:.10f}")

# Vector-valued, complex: [f, exp(i*x*y)] and its Jacobian
values2 = np.array([[[f(p), np.exp(1j * p[0] * p[1])] for p in row] for row in points])
cheb2 = ChebyshevInterpolant.from_values(values2, lb, ub)
value, jac = cheb2.jacobian(point)
print(f"\nvector value: {value}")
print(f"Jacobian (rows = components):\n{jac}")
