"""
polyspline is a python library for fitting constrained piecewise polynomial trajectories.

Available subpackages
---------------------
`polyspline.spline_problem` : Provides the `SplineProblem` class that builds a linear system from knot value, 
    derivative, and continuity constraints, fits one polynomial per segment with a single QR solve, and 
    evaluates the fitted curve and its derivatives.

`polyspline.polynomial` : Provides the `Polynomial` class that represents a fitted segment, centered at 
    any point, for downstream trajectory assembly.

`polyspline.error` : Provides the exceptions raised for invalid input, lifecycle misuse, and singular systems.
"""
from polyspline.error import SplineProblemError, InvalidInputError, InternalInvariantViolationError, \
    UnderdeterminedError, OverdeterminedError, NotFittedError, SingularSystemError
from polyspline.polynomial import Polynomial
from polyspline.spline_problem import SplineProblem
