"""Semantic value types and the value parsers used by keyframe construction.

Every parser has the signature ``parser(raw, scale) -> value`` where ``raw``
is the decoded json fragment of a keyframe value (number, list or dict).
"""
import logging
import numbers

import numpy as np

from ..utils.vector import NVector

logger = logging.getLogger(__name__)


def lerp(start, end, fraction):
    return start + (end - start) * fraction


def _first_number(raw):
    while isinstance(raw, (list, tuple)):
        if not raw:
            return 0.
        raw = raw[0]
    if isinstance(raw, numbers.Number):
        return float(raw)
    raise ValueError("Expected a number, got %r" % (raw,))


class Color:
    """RGBA color with channels in [0, 1]."""
    __slots__ = ("r", "g", "b", "a")

    def __init__(self, r, g, b, a=1.):
        self.r = float(r)
        self.g = float(g)
        self.b = float(b)
        self.a = float(a)

    def __iter__(self):
        return iter((self.r, self.g, self.b, self.a))

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return tuple(self) == tuple(other)

    __hash__ = None

    def __repr__(self):
        return "<Color %g %g %g %g>" % tuple(self)

    def lerp(self, other, fraction):
        return Color(*(lerp(a, b, fraction) for a, b in zip(self, other)))

    def with_alpha(self, alpha):
        return Color(self.r, self.g, self.b, alpha)

    def to_argb(self):
        """Packs the color as a 32 bit 0xAARRGGBB integer."""
        a, r, g, b = (int(round(min(max(c, 0.), 1.) * 255)) for c in (self.a, self.r, self.g, self.b))
        return (a << 24) | (r << 16) | (g << 8) | b

    @classmethod
    def from_json(cls, raw, scale=1.):
        components = [float(c) for c in raw]
        if len(components) < 3:
            raise ValueError("Color needs at least 3 components, got %r" % (raw,))
        # Some exporters write channels as 0-255
        if any(c > 1 for c in components):
            components = [c / 255 for c in components]
        if len(components) == 3:
            components.append(1.)
        return cls(*components[:4])


class GradientColor:
    """Gradient stops: positions in [0, 1] and one color per position."""

    def __init__(self, positions, colors):
        self.positions = list(positions)
        self.colors = list(colors)

    @property
    def size(self):
        return len(self.colors)

    def __eq__(self, other):
        if not isinstance(other, GradientColor):
            return NotImplemented
        return self.positions == other.positions and self.colors == other.colors

    __hash__ = None

    def __repr__(self):
        return "<GradientColor %s>" % list(zip(self.positions, self.colors))

    def lerp(self, other, fraction):
        if self.size != other.size:
            raise ValueError(
                "Cannot interpolate between gradients. Lengths vary (%s vs %s)" % (self.size, other.size)
            )
        return GradientColor(
            [lerp(a, b, fraction) for a, b in zip(self.positions, other.positions)],
            [a.lerp(b, fraction) for a, b in zip(self.colors, other.colors)],
        )

    @classmethod
    def parser(cls, color_points):
        """
        Returns a value parser for a gradient with ``color_points`` stops.

        The raw array holds ``[offset, r, g, b] * color_points`` optionally
        followed by ``[offset, alpha] * n`` opacity stops.
        """
        def parse(raw, scale=1.):
            values = [float(v) for v in raw]
            points = color_points if color_points >= 0 else len(values) // 4
            positions = []
            colors = []
            for i in range(points):
                offset, r, g, b = values[i * 4:i * 4 + 4]
                positions.append(offset)
                colors.append(Color(r, g, b, 1.))

            opacity = values[points * 4:]
            if len(opacity) >= 2:
                stops = np.array(opacity[:len(opacity) // 2 * 2]).reshape(-1, 2)
                for i, position in enumerate(positions):
                    alpha = float(np.interp(position, stops[:, 0], stops[:, 1]))
                    colors[i] = colors[i].with_alpha(alpha)
            return cls(positions, colors)
        return parse


class CubicCurveData:
    """One cubic segment: two control points and the end vertex."""
    __slots__ = ("control1", "control2", "vertex")

    def __init__(self, control1, control2, vertex):
        self.control1 = control1
        self.control2 = control2
        self.vertex = vertex

    def __eq__(self, other):
        if not isinstance(other, CubicCurveData):
            return NotImplemented
        return (self.control1, self.control2, self.vertex) == (other.control1, other.control2, other.vertex)

    __hash__ = None

    def __repr__(self):
        return "<CubicCurveData %r %r %r>" % (self.control1, self.control2, self.vertex)


class ShapeData:
    """
    Free-form bezier outline.

    Stored as an initial point followed by cubic curves, each ending in a
    vertex. Closed shapes include the curve back to the initial point.
    """

    def __init__(self, initial_point=None, curves=None, closed=False):
        self.initial_point = initial_point if initial_point is not None else NVector(0, 0)
        self.curves = list(curves or [])
        self.closed = closed

    def __eq__(self, other):
        if not isinstance(other, ShapeData):
            return NotImplemented
        return self.closed == other.closed and self.initial_point == other.initial_point \
            and self.curves == other.curves

    __hash__ = None

    def __repr__(self):
        return "<ShapeData %s curves%s>" % (len(self.curves), " closed" if self.closed else "")

    def lerp(self, other, fraction):
        """Interpolates point-wise by index."""
        closed = self.closed or other.closed
        count = len(self.curves)
        if count != len(other.curves):
            logger.warning(
                "Curves must have the same number of control points. Shape 1: %s\tShape 2: %s",
                count, len(other.curves)
            )
            count = min(count, len(other.curves))

        curves = []
        for a, b in zip(self.curves[:count], other.curves[:count]):
            curves.append(CubicCurveData(
                a.control1.lerp(b.control1, fraction),
                a.control2.lerp(b.control2, fraction),
                a.vertex.lerp(b.vertex, fraction),
            ))
        return ShapeData(self.initial_point.lerp(other.initial_point, fraction), curves, closed)

    @classmethod
    def from_json(cls, raw, scale=1.):
        if isinstance(raw, list):
            if not raw:
                return cls()
            raw = raw[0]
        if not isinstance(raw, dict):
            raise ValueError("Unable to process shape data %r" % (raw,))

        closed = bool(raw.get("c", False))
        vertices = raw.get("v") or []
        in_tangents = raw.get("i") or []
        out_tangents = raw.get("o") or []
        if len(vertices) != len(in_tangents) or len(vertices) != len(out_tangents):
            raise ValueError("Shape data has mismatched vertex and tangent counts")
        if not vertices:
            return cls(NVector(0, 0), [], closed)

        def point(values):
            return NVector(float(values[0]) * scale, float(values[1]) * scale)

        verts = [point(v) for v in vertices]
        ins = [point(v) for v in in_tangents]
        outs = [point(v) for v in out_tangents]

        curves = []
        for i in range(1, len(verts)):
            curves.append(CubicCurveData(verts[i - 1] + outs[i - 1], verts[i] + ins[i], verts[i]))

        if closed:
            last = len(verts) - 1
            curves.append(CubicCurveData(verts[last] + outs[last], verts[0] + ins[0], verts[0]))

        return cls(verts[0], curves, closed)


def parse_float(raw, scale=1.):
    return _first_number(raw) * scale


def parse_integer(raw, scale=1.):
    return int(round(_first_number(raw) * scale))


def parse_point(raw, scale=1.):
    if isinstance(raw, dict):
        return NVector(_first_number(raw.get("x", 0)) * scale, _first_number(raw.get("y", 0)) * scale)
    if isinstance(raw, numbers.Number):
        return NVector(float(raw) * scale, float(raw) * scale)
    if len(raw) < 2:
        raise ValueError("Unable to parse point %r" % (raw,))
    return NVector(float(raw[0]) * scale, float(raw[1]) * scale)


def parse_scale(raw, scale=1.):
    """Scale values are stored as percentages."""
    if isinstance(raw, numbers.Number):
        raw = [raw, raw]
    return NVector(float(raw[0]) / 100 * scale, float(raw[1]) / 100 * scale)


def parse_color(raw, scale=1.):
    return Color.from_json(raw, scale)


def parse_shape(raw, scale=1.):
    return ShapeData.from_json(raw, scale)


def interpolate(start, end, fraction):
    """Type-directed interpolation between two values of the same kind."""
    if isinstance(start, numbers.Integral) and not isinstance(start, bool):
        return int(start + fraction * (end - start))
    if isinstance(start, numbers.Number):
        return lerp(start, end, fraction)
    return start.lerp(end, fraction)


def values_equal(a, b):
    if a is b:
        return True
    if a is None or b is None:
        return False
    return bool(a == b)
