import numpy as np


class NVector:
    """
    Small n-dimensional vector backed by a numpy array.

    Used for points, sizes, scales and bezier tangents.
    """
    __slots__ = ("components",)

    def __init__(self, *components):
        if len(components) == 1 and isinstance(components[0], (list, tuple, np.ndarray)):
            components = components[0]
        self.components = np.array(components, dtype=float)

    @classmethod
    def from_array(cls, array):
        vec = cls.__new__(cls)
        vec.components = np.asarray(array, dtype=float)
        return vec

    def __len__(self):
        return len(self.components)

    def __iter__(self):
        return iter(self.components.tolist())

    def __getitem__(self, key):
        return float(self.components[key])

    def __setitem__(self, key, value):
        self.components[key] = value

    def __repr__(self):
        return "<NVector %s>" % ", ".join("%g" % c for c in self.components)

    def __eq__(self, other):
        if not isinstance(other, NVector):
            return NotImplemented
        return self.components.shape == other.components.shape and \
            bool(np.array_equal(self.components, other.components))

    def __ne__(self, other):
        eq = self.__eq__(other)
        if eq is NotImplemented:
            return eq
        return not eq

    __hash__ = None

    def _other(self, other):
        if isinstance(other, NVector):
            return other.components
        return other

    def __add__(self, other):
        return NVector.from_array(self.components + self._other(other))

    def __sub__(self, other):
        return NVector.from_array(self.components - self._other(other))

    def __mul__(self, other):
        return NVector.from_array(self.components * self._other(other))

    __rmul__ = __mul__

    def __truediv__(self, other):
        return NVector.from_array(self.components / self._other(other))

    def __neg__(self):
        return NVector.from_array(-self.components)

    def length(self):
        return float(np.linalg.norm(self.components))

    def lerp(self, other, fraction):
        return NVector.from_array(self.components + (other.components - self.components) * fraction)

    def is_close(self, other, tolerance=1e-6):
        return bool(np.allclose(self.components, other.components, atol=tolerance))

    @property
    def x(self):
        return float(self.components[0])

    @x.setter
    def x(self, value):
        self.components[0] = value

    @property
    def y(self):
        return float(self.components[1])

    @y.setter
    def y(self, value):
        self.components[1] = value
