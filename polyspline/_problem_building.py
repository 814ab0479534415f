import numpy as np
from polyspline.error import InvalidInputError, InternalInvariantViolationError, OverdeterminedError

def coefficient_matrix(nCoef):
    # Row d holds the falling factorial j * (j - 1) * ... * (j - d + 1) for column j >= d.
    coefficients = np.zeros((nCoef, nCoef), float)
    if nCoef > 0:
        coefficients[0] = 1.0
    for i in range(1, nCoef):
        for j in range(i, nCoef):
            coefficients[i, j] = (j - i + 1) * coefficients[i - 1, j]
    return coefficients

def time_vector(nCoef, t, derivative):
    exponents = np.zeros(nCoef, float)
    for j in range(derivative, nCoef):
        exponents[j] = 1.0 if j == derivative else t ** (j - derivative)
    return exponents

def evaluation_vector(self, t, derivative):
    if derivative >= self.nCoef:
        return np.zeros(self.nCoef, float)
    return self.coefficientMatrix[derivative] * time_vector(self.nCoef, t, derivative)

def _check_building(self):
    if self.fitted:
        raise InternalInvariantViolationError("Can't add constraints to a spline problem that has been fit")

def _check_knot(self, knot):
    if not(isinstance(knot, (int, np.integer)) and 0 <= knot < self.nKnots):
        raise InvalidInputError(f"Knot index {knot} outside [0, {self.nKnots})")

def _check_derivative(self, derivative):
    if not(isinstance(derivative, (int, np.integer)) and 0 <= derivative < self.nCoef):
        raise InvalidInputError(f"Derivative order {derivative} outside [0, {self.nCoef})")

def _check_rows(self, nRows):
    if self.rowIndex + nRows > self.dimension:
        raise OverdeterminedError(self.rowIndex + nRows, self.dimension)

def add_constant_constraint(self, knot, derivative, value):
    _check_building(self)
    _check_knot(self, knot)
    _check_derivative(self, derivative)
    value = np.atleast_1d(np.asarray(value, float))
    if value.shape != (self.nDep,):
        raise InvalidInputError(f"Constraint value has shape {value.shape}, expected ({self.nDep},)")

    # Interior knots constrain both the segment ending and the segment starting there.
    segments = []
    if knot > 0:
        segments.append(knot - 1)
    if knot + 1 < self.nKnots:
        segments.append(knot)
    _check_rows(self, len(segments))

    coefVector = evaluation_vector(self, self.times[knot], derivative)
    for segment in segments:
        start = segment * self.nCoef
        self.A[self.rowIndex, start : start + self.nCoef] = coefVector
        self.B[self.rowIndex] = value
        self.rowIndex += 1

def add_continuity_constraint(self, knot, derivative):
    _check_building(self)
    _check_knot(self, knot)
    if knot == 0 or knot + 1 == self.nKnots:
        raise InvalidInputError(f"Continuity constraint requires an interior knot, got {knot}")
    _check_derivative(self, derivative)
    _check_rows(self, 1)

    coefVector = evaluation_vector(self, self.times[knot], derivative)
    before = (knot - 1) * self.nCoef
    after = knot * self.nCoef
    self.A[self.rowIndex, before : before + self.nCoef] = coefVector
    self.A[self.rowIndex, after : after + self.nCoef] = -coefVector
    self.B[self.rowIndex] = 0.0
    self.rowIndex += 1
