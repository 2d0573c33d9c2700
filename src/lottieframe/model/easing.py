import numpy as np


class LinearInterpolator:
    def get_interpolation(self, fraction):
        return fraction

    def __repr__(self):
        return "<LinearInterpolator>"


class CubicBezierInterpolator:
    """
    Easing curve through (0, 0), (x1, y1), (x2, y2), (1, 1).

    Maps a linear fraction ``x`` to the curve ``y`` by solving for the curve
    parameter with Newton iterations, falling back to bisection.
    """
    sample_count = 11
    newton_iterations = 8
    newton_min_slope = 1e-3
    precision = 1e-7
    bisect_iterations = 40

    def __init__(self, x1, y1, x2, y2):
        self.x1 = float(x1)
        self.y1 = float(y1)
        self.x2 = float(x2)
        self.y2 = float(y2)
        self._samples = self._curve_x(np.linspace(0., 1., self.sample_count))

    def __repr__(self):
        return "<CubicBezierInterpolator (%g, %g) (%g, %g)>" % (self.x1, self.y1, self.x2, self.y2)

    @staticmethod
    def _coefficients(p1, p2):
        c = 3 * p1
        b = 3 * (p2 - p1) - c
        a = 1 - c - b
        return a, b, c

    def _curve_x(self, t):
        a, b, c = self._coefficients(self.x1, self.x2)
        return ((a * t + b) * t + c) * t

    def _curve_y(self, t):
        a, b, c = self._coefficients(self.y1, self.y2)
        return ((a * t + b) * t + c) * t

    def _slope_x(self, t):
        a, b, c = self._coefficients(self.x1, self.x2)
        return (3 * a * t + 2 * b) * t + c

    def _solve_t(self, x):
        step = 1. / (self.sample_count - 1)
        index = int(np.searchsorted(self._samples, x, side="right")) - 1
        index = min(max(index, 0), self.sample_count - 2)
        lo_sample = self._samples[index]
        hi_sample = self._samples[index + 1]
        span = hi_sample - lo_sample
        guess = index * step
        if span > 0:
            guess += (x - lo_sample) / span * step

        t = guess
        for _ in range(self.newton_iterations):
            slope = self._slope_x(t)
            if abs(slope) < self.newton_min_slope:
                break
            error = self._curve_x(t) - x
            if abs(error) < self.precision:
                return t
            t -= error / slope
        else:
            if 0 <= t <= 1 and abs(self._curve_x(t) - x) < self.precision:
                return t

        lo, hi = 0., 1.
        t = guess
        for _ in range(self.bisect_iterations):
            value = self._curve_x(t)
            if abs(value - x) < self.precision:
                break
            if value < x:
                lo = t
            else:
                hi = t
            t = (lo + hi) / 2
        return t

    def get_interpolation(self, fraction):
        if fraction <= 0:
            return 0.
        if fraction >= 1:
            return 1.
        if self.x1 == self.y1 and self.x2 == self.y2:
            return fraction
        return float(self._curve_y(self._solve_t(fraction)))


LINEAR = LinearInterpolator()
