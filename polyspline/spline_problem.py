import logging
import json
import numpy as np
from polyspline.error import InvalidInputError, NotFittedError
import polyspline._problem_building
import polyspline._problem_solving

class SplineProblem:
    """
    A class to fit piecewise polynomial curves (one polynomial per segment between consecutive knots)
    to value, derivative, and continuity constraints at the knots. The constraints build a square linear
    system that is solved once by `fit`; afterwards the curve and its derivatives can be evaluated anywhere.

    Each segment is the polynomial sum j=0..nCoef-1 of cj * t ^ j in absolute time t (not time relative
    to the segment start). Use `segment_polynomials` to get segments re-centered at their start times.

    Parameters
    ----------
    times : array-like
        The knot times, at least two of them, strictly increasing. Segment i spans [times[i], times[i+1]).

    nCoef : `int`
        The number of coefficients per segment (one higher than the polynomial degree).

    nDep : `int`
        The number of dependent variables (output dimension) of the curve.

    diagnostics : callable, optional
        A function taking a message string, called with a summary of the problem on construction and
        with the row count on `fit`. Default is `logging.debug`.

    metadata : `dict`, optional
        A dictionary of ancillary data to store with the problem. Default is {}.

    Notes
    -----
    Register exactly `dimension` = (len(times) - 1) * nCoef rows of constraints before calling `fit`.
    A constant constraint at an interior knot adds two rows (one for each adjoining segment), at the first
    or last knot it adds one. A continuity constraint adds one row.
    """

    rankTolerance = None
    """Diagonal entries of R at or below this are treated as zero when fitting. None means dimension * eps * max |R[i, i]|."""

    def __init__(self, times, nCoef, nDep, diagnostics = None, metadata = {}):
        times = np.array(times, float)
        if not(times.ndim == 1): raise InvalidInputError("Times must be a one-dimensional sequence")
        if not(len(times) >= 2): raise InvalidInputError("There must be at least 2 knot times")
        if not(np.all(np.isfinite(times))): raise InvalidInputError("Times must be finite")
        if not(np.all(np.diff(times) > 0.0)): raise InvalidInputError("Times are not monotonically increasing")
        if not(isinstance(nCoef, (int, np.integer)) and nCoef >= 1): raise InvalidInputError("nCoef < 1")
        if not(isinstance(nDep, (int, np.integer)) and nDep >= 0): raise InvalidInputError("nDep < 0")

        self.times = times
        self.nKnots = len(times)
        self.nSegments = self.nKnots - 1
        self.nCoef = int(nCoef)
        self.nDep = int(nDep)
        self.dimension = self.nSegments * self.nCoef
        self.coefficientMatrix = polyspline._problem_building.coefficient_matrix(self.nCoef)
        self.rowIndex = 0
        self.A = np.zeros((self.dimension, self.dimension), float)
        self.B = np.zeros((self.dimension, self.nDep), float)
        self.solution = None
        self.fitted = False
        self.diagnostics = logging.debug if diagnostics is None else diagnostics
        self.metadata = dict(metadata)

        self.diagnostics(f"SplineProblem: nKnots = {self.nKnots}, nSegments = {self.nSegments}, " + \
            f"nCoef = {self.nCoef}, nDep = {self.nDep}, dimension = {self.dimension}")

    def __call__(self, t, derivative = 0):
        return self.interpolate(t, derivative)

    def __repr__(self):
        return f"SplineProblem({self.times}, {self.nCoef}, {self.nDep}, " + \
               f"rows={self.rowIndex}/{self.dimension}, fitted={self.fitted})"

    def add_constant_constraint(self, knot, derivative, value):
        """
        Constrain a derivative of the curve to a constant value at a knot.

        Parameters
        ----------
        knot : `int`
            The index of the knot, in [0, nKnots).

        derivative : `int`
            The derivative order to constrain, in [0, nCoef). Zero constrains the value itself.

        value : array-like
            The required value, of length nDep (a scalar is accepted when nDep is 1).

        Notes
        -----
        Adds one row for the segment ending at the knot (if any) and one row for the segment starting
        at the knot (if any). Both rows use the absolute knot time, so an interior constant constraint
        also makes that derivative continuous across the knot.

        Arguments are checked before the system changes, so a call that raises leaves the problem untouched.

        Raises
        ------
        InvalidInputError
            If the knot or derivative is out of range, or the value has the wrong length.

        OverdeterminedError
            If the rows would exceed `dimension`.

        InternalInvariantViolationError
            If the problem has already been fit.
        """
        polyspline._problem_building.add_constant_constraint(self, knot, derivative, value)

    def add_continuity_constraint(self, knot, derivative):
        """
        Require a derivative of the curve to match on both sides of an interior knot.

        Parameters
        ----------
        knot : `int`
            The index of the knot, in (0, nKnots - 1).

        derivative : `int`
            The derivative order to make continuous, in [0, nCoef).

        Raises
        ------
        InvalidInputError
            If the knot isn't interior or the derivative is out of range.

        OverdeterminedError
            If the row would exceed `dimension`.

        InternalInvariantViolationError
            If the problem has already been fit.
        """
        polyspline._problem_building.add_continuity_constraint(self, knot, derivative)

    @property
    def coefficients(self):
        """
        Copies of the fitted segment coefficients, a list of nSegments arrays of shape (nDep, nCoef).
        Row i of each array holds the coefficients of dependent variable i in increasing powers of absolute time.
        """
        polyspline._problem_solving._check_fitted(self)
        return [np.array(coefs) for coefs in self.solution]

    def durations(self):
        """
        Return the duration of each segment.

        Returns
        -------
        durations : `numpy.array`
            An array of length nSegments with times[i+1] - times[i].
        """
        return np.diff(self.times)

    def evaluation_vector(self, t, derivative = 0):
        """
        Return the row that maps segment coefficients to a derivative of the curve at a given time.

        Parameters
        ----------
        t : `float`
            The absolute time.

        derivative : `int`, optional
            The derivative order (default is 0).

        Returns
        -------
        vector : `numpy.array`
            An array of length nCoef whose dot product with a segment's coefficients gives the derivative
            of that segment at t. Derivative orders at or above nCoef give zeros.
        """
        if not(isinstance(derivative, (int, np.integer)) and derivative >= 0):
            raise InvalidInputError(f"Derivative order {derivative} must be a non-negative integer")
        return polyspline._problem_building.evaluation_vector(self, t, derivative)

    def fit(self):
        """
        Solve the constraint system for the segment coefficients.

        Returns
        -------
        problem : `SplineProblem`
            Self, now fit, so calls can be chained.

        Raises
        ------
        UnderdeterminedError
            If fewer than `dimension` rows have been registered.

        OverdeterminedError
            If more than `dimension` rows have been registered.

        SingularSystemError
            If the rows don't determine a unique solution (see `rankTolerance`).

        Notes
        -----
        Uses a single column-pivoted Householder QR factorization of the system, shared by all
        dependent variables. Fitting again without new constraints gives the same coefficients.
        """
        return polyspline._problem_solving.fit(self)

    @staticmethod
    def from_dict(dictionary):
        """
        Create a fitted `SplineProblem` from data in a `dict`.

        Parameters
        ----------
        dictionary : `dict`
            The `dict` containing `SplineProblem` data.

        Returns
        -------
        problem : `SplineProblem`
            A problem in the fitted state. It answers evaluation queries but holds no linear system,
            so it can't take new constraints or be refit.

        See Also
        --------
        `to_dict` : Return a `dict` with `SplineProblem` data.
        """
        problem = SplineProblem(dictionary["times"], dictionary["nCoef"], dictionary["nDep"],
            metadata = dictionary.get("metadata", {}))
        solution = np.array(dictionary["solution"], float).reshape((problem.nSegments, problem.nDep, problem.nCoef))
        problem.solution = [np.array(coefs) for coefs in solution]
        problem.A = None
        problem.B = None
        problem.rowIndex = problem.dimension
        problem.fitted = True
        return problem

    def interpolate(self, t, derivative = 0):
        """
        Evaluate the fitted curve, or one of its derivatives, at a given time.

        Parameters
        ----------
        t : `float`
            The absolute time. Times outside the knots are extrapolated from the first or last segment.

        derivative : `int`, optional
            The derivative order (default is 0). Orders at or above nCoef evaluate to zero.

        Returns
        -------
        value : `numpy.array`
            A new array of length nDep.

        Raises
        ------
        NotFittedError
            If the problem hasn't been fit.
        """
        return polyspline._problem_solving.interpolate(self, t, derivative)

    @staticmethod
    def load(fileName):
        """
        Load a fitted spline problem in json format from the specified filename (full path).

        Parameters
        ----------
        fileName : `string`
            The full path to the file containing the spline problem. Can be a relative path.

        Returns
        -------
        problem : `SplineProblem`
            The loaded problem, in the fitted state.

        See Also
        --------
        `save` : Save a fitted spline problem in json format to the specified filename (full path).
        """
        with open(fileName, 'r', encoding='utf-8') as file:
            problemData = json.load(file)
        if problemData.get("type") != "SplineProblem":
            raise InvalidInputError(f"{fileName} doesn't contain a SplineProblem")
        return SplineProblem.from_dict(problemData)

    def sample(self, ts, derivative = 0):
        """
        Evaluate the fitted curve, or one of its derivatives, at many times.

        Parameters
        ----------
        ts : array-like
            A one-dimensional sequence of absolute times.

        derivative : `int`, optional
            The derivative order (default is 0).

        Returns
        -------
        values : `numpy.array`
            An array of shape (len(ts), nDep), row i being `interpolate(ts[i], derivative)`.
        """
        return polyspline._problem_solving.sample(self, ts, derivative)

    def save(self, fileName):
        """
        Save a fitted spline problem in json format to the specified filename (full path).

        Parameters
        ----------
        fileName : `string`
            The full path to the file to write. Can be a relative path.

        See Also
        --------
        `load` : Load a fitted spline problem in json format from the specified filename (full path).
        """
        class SplineProblemEncoder(json.JSONEncoder):
            def default(self, obj):
                if isinstance(obj, np.ndarray):
                    return obj.tolist()
                if isinstance(obj, SplineProblem):
                    return obj.to_dict()
                return super().default(obj)

        with open(fileName, 'w', encoding='utf-8') as file:
            json.dump(self, file, indent=4, cls=SplineProblemEncoder)

    def segment_index(self, t):
        """
        Return the index of the segment that owns a given time.

        Parameters
        ----------
        t : `float`
            The absolute time.

        Returns
        -------
        index : `int`
            0 for t at or before the first knot, nSegments - 1 for t at or after the last knot,
            otherwise the index of the last knot at or before t.
        """
        return polyspline._problem_solving.segment_index(self, t)

    def segment_polynomials(self, relative = True):
        """
        Return the fitted segments as polynomials.

        Parameters
        ----------
        relative : `bool`, optional
            If True (the default), each polynomial is centered at its segment's start time, so it is
            evaluated with the time since the segment began. Otherwise it is centered at zero (absolute time).

        Returns
        -------
        polynomials : list of `Polynomial`
            One polynomial per segment, with coefficients of shape (nCoef, nDep).

        See Also
        --------
        `durations` : Return the duration of each segment.
        """
        return polyspline._problem_solving.segment_polynomials(self, relative)

    def to_dict(self):
        """
        Return a `dict` with the fitted `SplineProblem` data.

        Returns
        -------
        dictionary : `dict`

        See Also
        --------
        `from_dict` : Create a fitted `SplineProblem` from data in a `dict`.
        """
        if not self.fitted:
            raise NotFittedError("Can't serialize a spline problem that hasn't been fit")
        return {"type" : "SplineProblem", "times" : self.times, "nCoef" : self.nCoef, "nDep" : self.nDep,
            "solution" : np.array(self.solution), "metadata" : self.metadata}
