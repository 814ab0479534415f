import numpy as np

class SplineProblemError(Exception):
    """Base class for errors raised while building, fitting, or evaluating a spline problem."""
    def __init__(self, message):
        self.message = message
        super().__init__(self.message)

class InvalidInputError(SplineProblemError, ValueError):
    """Exception raised for malformed knot times, dimensions, indices, or constraint values."""
    pass

class InternalInvariantViolationError(SplineProblemError, RuntimeError):
    """Exception raised when the calling code breaks the build-then-fit lifecycle."""
    pass

class UnderdeterminedError(InternalInvariantViolationError):
    """Exception raised for fitting a system with fewer rows than unknowns."""
    def __init__(self, rows, unknowns,
                 message = "Not enough constraints to fit the spline"):
        self.rows = rows
        self.unknowns = unknowns
        super().__init__(f"{message}: {rows} rows for {unknowns} unknowns")

class OverdeterminedError(InternalInvariantViolationError):
    """Exception raised for registering more rows than the system has unknowns."""
    def __init__(self, rows, unknowns,
                 message = "Too many constraints for the spline"):
        self.rows = rows
        self.unknowns = unknowns
        super().__init__(f"{message}: {rows} rows for {unknowns} unknowns")

class NotFittedError(InternalInvariantViolationError):
    """Exception raised for evaluating a spline problem before it has been fit."""
    def __init__(self, message = "Spline problem has not been fit"):
        super().__init__(message)

class SingularSystemError(SplineProblemError, np.linalg.LinAlgError):
    """Exception raised when the constraint rows do not determine a unique spline."""
    def __init__(self, rank, unknowns,
                 message = "Constraint system is singular"):
        self.rank = rank
        self.unknowns = unknowns
        super().__init__(f"{message}: rank {rank} for {unknowns} unknowns")
