import numpy as np
import scipy as sp
import scipy.linalg
from polyspline.error import InvalidInputError, InternalInvariantViolationError, NotFittedError, UnderdeterminedError, OverdeterminedError, SingularSystemError
from polyspline.polynomial import Polynomial
import polyspline._problem_building

def fit(self):
    self.diagnostics(f"fit: {self.rowIndex} rows for {self.dimension} unknowns")
    if self.A is None:
        raise InternalInvariantViolationError("Spline problem was loaded without a linear system and can't be refit")
    if self.rowIndex < self.dimension:
        raise UnderdeterminedError(self.rowIndex, self.dimension)
    if self.rowIndex > self.dimension:
        raise OverdeterminedError(self.rowIndex, self.dimension)

    # Factor A once (column-pivoted Householder QR), so |diag(R)| is non-increasing and reveals rank.
    Q, R, pivots = sp.linalg.qr(self.A, pivoting = True)
    diagonal = np.abs(np.diag(R))
    tolerance = self.rankTolerance
    if tolerance is None:
        tolerance = self.dimension * np.finfo(R.dtype).eps * diagonal[0]
    rank = int(np.count_nonzero(diagonal > tolerance))
    if rank < self.dimension:
        raise SingularSystemError(rank, self.dimension)

    # Solve every output column against the same factorization.
    x = np.empty((self.dimension, self.nDep), float)
    if self.nDep > 0:
        x[pivots] = sp.linalg.solve_triangular(R, Q.T @ self.B)

    # x is laid out in segment blocks of nCoef rows; each block becomes an owned (nDep, nCoef) array.
    self.solution = [np.array(x[i * self.nCoef : (i + 1) * self.nCoef].T) for i in range(self.nSegments)]
    self.fitted = True
    return self

def segment_index(self, t):
    if np.isnan(t):
        raise InvalidInputError("Can't locate the segment of a NaN time")
    if t <= self.times[0]:
        return 0
    if t >= self.times[-1]:
        return self.nSegments - 1
    return int(np.searchsorted(self.times, t, side = 'right')) - 1

def _check_fitted(self):
    if not self.fitted:
        raise NotFittedError()

def _check_derivative(derivative):
    if not(isinstance(derivative, (int, np.integer)) and derivative >= 0):
        raise InvalidInputError(f"Derivative order {derivative} must be a non-negative integer")

def interpolate(self, t, derivative):
    _check_fitted(self)
    _check_derivative(derivative)
    evaluationVector = polyspline._problem_building.evaluation_vector(self, t, derivative)
    return self.solution[segment_index(self, t)] @ evaluationVector

def sample(self, ts, derivative):
    _check_fitted(self)
    _check_derivative(derivative)
    ts = np.atleast_1d(np.asarray(ts, float))
    if ts.ndim != 1:
        raise InvalidInputError(f"Sample times must be one-dimensional, got shape {ts.shape}")
    values = np.empty((len(ts), self.nDep), float)
    for i, t in enumerate(ts):
        values[i] = interpolate(self, t, derivative)
    return values

def segment_polynomials(self, relative):
    _check_fitted(self)
    polynomials = []
    for segment, coefs in enumerate(self.solution):
        polynomial = Polynomial(self.nCoef, coefs.T)
        if relative:
            polynomial.shift(self.times[segment])
        polynomials.append(polynomial)
    return polynomials
