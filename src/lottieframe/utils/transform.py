import math

import numpy as np

from .vector import NVector


class TransformMatrix:
    """
    2D affine matrix laid out as

        | a  b  0 |
        | c  d  0 |
        | tx ty 1 |

    Points are row vectors, so ``m1 * m2`` applies m1 first.
    """
    scalar = float

    def __init__(self):
        self.to_identity()

    def __getitem__(self, key):
        row, col = key
        return self._mat[row * 4 + col]

    def __setitem__(self, key, value):
        row, col = key
        self._mat[row * 4 + col] = self.scalar(value)

    @property
    def a(self):
        return self[0, 0]

    @a.setter
    def a(self, v):
        self[0, 0] = v

    @property
    def b(self):
        return self[0, 1]

    @b.setter
    def b(self, v):
        self[0, 1] = v

    @property
    def c(self):
        return self[1, 0]

    @c.setter
    def c(self, v):
        self[1, 0] = v

    @property
    def d(self):
        return self[1, 1]

    @d.setter
    def d(self, v):
        self[1, 1] = v

    @property
    def tx(self):
        return self[3, 0]

    @tx.setter
    def tx(self, v):
        self[3, 0] = v

    @property
    def ty(self):
        return self[3, 1]

    @ty.setter
    def ty(self, v):
        self[3, 1] = v

    def __str__(self):
        return str(self.to_array().tolist())

    def __repr__(self):
        return "<TransformMatrix a=%g b=%g c=%g d=%g tx=%g ty=%g>" % (
            self.a, self.b, self.c, self.d, self.tx, self.ty
        )

    def __eq__(self, other):
        if not isinstance(other, TransformMatrix):
            return NotImplemented
        return self._mat == other._mat

    __hash__ = None

    def to_identity(self):
        self._mat = [
            1., 0., 0., 0.,
            0., 1., 0., 0.,
            0., 0., 1., 0.,
            0., 0., 0., 1.,
        ]

    def is_identity(self):
        return self == TransformMatrix()

    def to_array(self):
        """3x3 numpy array in row-vector convention."""
        return np.array([
            [self.a, self.b, 0.],
            [self.c, self.d, 0.],
            [self.tx, self.ty, 1.],
        ])

    def apply(self, vector):
        vector = NVector(vector) if not isinstance(vector, NVector) else vector
        return NVector(
            vector.x * self.a + vector.y * self.c + self.tx,
            vector.x * self.b + vector.y * self.d + self.ty,
        )

    def apply_many(self, points):
        """Applies the matrix to an (n, 2) numpy array of points."""
        points = np.asarray(points, dtype=float)
        if points.size == 0:
            return points.reshape(0, 2)
        homogeneous = np.hstack([points, np.ones((len(points), 1))])
        return (homogeneous @ self.to_array())[:, :2]

    def __mul__(self, other):
        m = TransformMatrix()
        for row in range(4):
            for col in range(4):
                m[row, col] = sum(self[row, k] * other[k, col] for k in range(4))
        return m

    def __imul__(self, other):
        m = self * other
        self._mat = m._mat
        return self

    def translate(self, x, y=None):
        if y is None:
            x, y = x
        translation = TransformMatrix()
        translation.tx = x
        translation.ty = y
        self *= translation
        return self

    def scale(self, x, y=None):
        if y is None:
            y = x
        m = TransformMatrix()
        m.a = x
        m.d = y
        self *= m
        return self

    def rotate(self, radians):
        m = TransformMatrix()
        m.a = math.cos(radians)
        m.b = math.sin(radians)
        m.c = -math.sin(radians)
        m.d = math.cos(radians)
        self *= m
        return self

    def skew_from_axis(self, skew, axis):
        self.rotate(axis)
        m = TransformMatrix()
        m.c = math.tan(skew)
        self *= m
        self.rotate(-axis)
        return self

    def mean_scale(self):
        """Length of the unit diagonal after the linear part of the matrix is applied."""
        half_sqrt2 = math.sqrt(2) / 2
        return math.hypot(
            half_sqrt2 * self.a + half_sqrt2 * self.c,
            half_sqrt2 * self.b + half_sqrt2 * self.d,
        )
