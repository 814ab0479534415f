import numpy as np

class Polynomial:
    """
    A class to represent, evaluate, and re-center 1-D polynomials: sum i=0..degree of ci * (x - x0) ^ i.
    This class acts as a helper class for the spline problem, exporting each fitted segment in
    a form that downstream trajectory code can pair with a segment duration.

    Parameters
    ----------
    order : `int`
        The order of polynomial (one higher than the degree)
    
    c : array-like
        The polynomial coefficients. The first axis runs over powers, any remaining axes
        are dependent variables (for example, shape (order, nDep)).

    x0 : `float`, optional
        The center point of the polynomial (default is 0)
    """
    def __init__(self, order, c, x0 = 0.0):
        if not(order > 0): raise ValueError("order <= 0")
        if not(len(c) == order): raise ValueError("len(c) != order")

        self.order = order
        self.c = np.array(c, float)
        self.x0 = x0

    def __call__(self, x):
        return self.evaluate(x)

    def __repr__(self):
        return f"Polynomial({self.order}, {self.c}, {self.x0})"

    def evaluate(self, x):
        """
        Compute the value of a polynomial at given parameter value.

        Parameters
        ----------
        x : `float`
            The value of the parameter
        
        Returns
        -------
        value : `numpy.array`
            The value of the polynomial, sum i=0..degree of ci * (x - x0) ^ i
        """
        delta = x - self.x0
        degree = self.order - 1
        value = np.array(self.c[degree])
        for i in range(1, self.order):
            value = self.c[degree-i] + value * delta
        return value

    def derivative(self, n = 1):
        """
        Differentiate the polynomial.

        Parameters
        ----------
        n : `int`, optional
            The number of derivatives to take (default is 1)
        
        Returns
        -------
        polynomial : `Polynomial`
            The nth derivative, with the same center as self. Its order never drops below one,
            so differentiating past the degree gives a zero polynomial.
        """
        if not(n >= 0): raise ValueError("n < 0")
        c = np.array(self.c)
        for _ in range(n):
            if len(c) == 1:
                c = np.zeros_like(c)
                break
            c = c[1:] * np.arange(1, len(c)).reshape((-1,) + (1,) * (c.ndim - 1))
        return Polynomial(len(c), c, self.x0)

    def shift(self, x0 = 0.0):
        """
        Shift the center point of the polynomial to a new x0.

        Parameters
        ----------
        x0 : `float`, optional
            The new center point of the polynomial (default is 0)

        Notes
        -----
        There is no return value, the polynomial is changed in place.
        Taken from Lee, E. T. Y. "Computing a chain of blossoms, with application to products of splines." 
        Computer Aided Geometric Design 11, no. 6 (1994): 597-620.
        """
        delta = x0 - self.x0
        if abs(delta) > np.finfo(float).eps:
            for j in range(self.order):
                for i in range(self.order - 1, j, -1):
                    self.c[i - 1] += delta * self.c[i]
        self.x0 = x0
