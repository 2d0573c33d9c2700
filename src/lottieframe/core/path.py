"""Resolved path geometry.

A ``Path`` is an ordered list of contours; each contour has a start point
and a list of line or cubic segments. Arcs are emitted as cubic
approximations. Paths are what the renderer receives, and what trim paths
and merge paths operate on.
"""
import logging
import math
from enum import Enum

import numpy as np
from shapely.geometry import MultiPolygon, Polygon
from shapely.ops import unary_union

from ..config import settings
from ..model.shapes import FillType
from ..utils.transform import TransformMatrix

logger = logging.getLogger(__name__)


class PathOp(Enum):
    UNION = "union"
    DIFFERENCE = "difference"
    REVERSE_DIFFERENCE = "reverse_difference"
    INTERSECT = "intersect"
    XOR = "xor"


def _point(x, y=None):
    if y is None:
        return np.array([float(x[0]), float(x[1])])
    return np.array([float(x), float(y)])


class LineSegment:
    kind = "line"

    def __init__(self, start, end):
        self.points = np.array([start, end], dtype=float)

    @property
    def start(self):
        return self.points[0]

    @property
    def end(self):
        return self.points[-1]

    def transformed(self, matrix):
        seg = LineSegment.__new__(LineSegment)
        seg.points = matrix.apply_many(self.points)
        return seg

    def point_at(self, t):
        return self.points[0] + (self.points[1] - self.points[0]) * t

    def sample(self, count):
        t = np.linspace(0., 1., 2)
        return self.points[0] + np.outer(t, self.points[1] - self.points[0])

    def length(self):
        return float(np.linalg.norm(self.points[1] - self.points[0]))

    def t_at_length(self, distance):
        length = self.length()
        if length == 0:
            return 0.
        return min(max(distance / length, 0.), 1.)

    def split(self, t0, t1):
        return LineSegment(self.point_at(t0), self.point_at(t1))

    def __repr__(self):
        return "<LineSegment %s -> %s>" % (self.points[0].tolist(), self.points[1].tolist())


class CubicSegment:
    kind = "cubic"

    def __init__(self, start, control1, control2, end):
        self.points = np.array([start, control1, control2, end], dtype=float)
        self._lengths = None

    @property
    def start(self):
        return self.points[0]

    @property
    def end(self):
        return self.points[-1]

    @property
    def control1(self):
        return self.points[1]

    @property
    def control2(self):
        return self.points[2]

    def transformed(self, matrix):
        seg = CubicSegment.__new__(CubicSegment)
        seg.points = matrix.apply_many(self.points)
        seg._lengths = None
        return seg

    def point_at(self, t):
        p0, p1, p2, p3 = self.points
        mt = 1 - t
        return mt ** 3 * p0 + 3 * mt ** 2 * t * p1 + 3 * mt * t ** 2 * p2 + t ** 3 * p3

    def sample(self, count):
        t = np.linspace(0., 1., count + 1)[:, None]
        p0, p1, p2, p3 = self.points
        mt = 1 - t
        return mt ** 3 * p0 + 3 * mt ** 2 * t * p1 + 3 * mt * t ** 2 * p2 + t ** 3 * p3

    def _length_table(self):
        if self._lengths is None:
            samples = self.sample(settings.curve_samples)
            steps = np.linalg.norm(np.diff(samples, axis=0), axis=1)
            self._lengths = np.concatenate([[0.], np.cumsum(steps)])
        return self._lengths

    def length(self):
        return float(self._length_table()[-1])

    def t_at_length(self, distance):
        table = self._length_table()
        if table[-1] == 0:
            return 0.
        ts = np.linspace(0., 1., len(table))
        return float(np.interp(distance, table, ts))

    def split(self, t0, t1):
        """Sub-curve between parameters t0 and t1 (de Casteljau)."""
        def split_at(points, t):
            p0, p1, p2, p3 = points
            p01 = p0 + (p1 - p0) * t
            p12 = p1 + (p2 - p1) * t
            p23 = p2 + (p3 - p2) * t
            p012 = p01 + (p12 - p01) * t
            p123 = p12 + (p23 - p12) * t
            mid = p012 + (p123 - p012) * t
            return np.array([p0, p01, p012, mid]), np.array([mid, p123, p23, p3])

        points = self.points
        if t1 < 1:
            points = split_at(points, t1)[0]
        if t0 > 0:
            local = t0 / t1 if t1 > 0 else 0.
            points = split_at(points, local)[1]
        return CubicSegment(*points)

    def __repr__(self):
        return "<CubicSegment %s>" % self.points.tolist()


class Contour:
    def __init__(self, start):
        self.start = _point(start)
        self.segments = []
        self.closed = False

    @property
    def current_point(self):
        if self.segments:
            return self.segments[-1].end
        return self.start

    def copy(self):
        contour = Contour(self.start)
        contour.segments = list(self.segments)
        contour.closed = self.closed
        return contour

    def transformed(self, matrix):
        contour = Contour(matrix.apply_many([self.start])[0])
        contour.segments = [seg.transformed(matrix) for seg in self.segments]
        contour.closed = self.closed
        return contour

    def measured_segments(self):
        """Segments including the implicit closing line of a closed contour."""
        segments = list(self.segments)
        if self.closed and not np.allclose(self.current_point, self.start):
            segments.append(LineSegment(self.current_point, self.start))
        return segments

    def flatten(self, samples=None):
        samples = samples or settings.curve_samples
        points = [self.start[None, :]]
        for seg in self.segments:
            points.append(seg.sample(samples)[1:])
        return np.concatenate(points)

    def __repr__(self):
        return "<Contour %s segments%s>" % (len(self.segments), " closed" if self.closed else "")


class Path:
    def __init__(self, fill_type=FillType.WINDING):
        self.contours = []
        self.fill_type = fill_type

    def __repr__(self):
        return "<Path %s contours %s>" % (len(self.contours), self.fill_type.value)

    def reset(self):
        self.contours = []

    def is_empty(self):
        return not any(c.segments for c in self.contours)

    def copy(self):
        path = Path(self.fill_type)
        path.contours = [c.copy() for c in self.contours]
        return path

    def set(self, other):
        self.contours = [c.copy() for c in other.contours]
        self.fill_type = other.fill_type

    def _current(self):
        if not self.contours or self.contours[-1].closed:
            start = self.contours[-1].start if self.contours else (0, 0)
            self.contours.append(Contour(start))
        return self.contours[-1]

    @property
    def current_point(self):
        if not self.contours:
            return None
        return self.contours[-1].current_point

    def move_to(self, x, y):
        if self.contours and not self.contours[-1].segments and not self.contours[-1].closed:
            self.contours[-1].start = _point(x, y)
        else:
            self.contours.append(Contour((x, y)))

    def line_to(self, x, y):
        contour = self._current()
        contour.segments.append(LineSegment(contour.current_point, _point(x, y)))

    def cubic_to(self, x1, y1, x2, y2, x3, y3):
        contour = self._current()
        contour.segments.append(CubicSegment(contour.current_point, _point(x1, y1), _point(x2, y2), _point(x3, y3)))

    def arc_to(self, left, top, right, bottom, start_angle, sweep_angle):
        """
        Appends an elliptical arc inscribed in the given rect.

        Angles are in degrees, clockwise from the positive x axis. When the
        current point is not the start of the arc a line is drawn to it.
        """
        cx = (left + right) / 2
        cy = (top + bottom) / 2
        rx = (right - left) / 2
        ry = (bottom - top) / 2
        start = math.radians(start_angle)
        sweep = math.radians(sweep_angle)

        arc_start = (cx + rx * math.cos(start), cy + ry * math.sin(start))
        current = self.current_point
        if current is None or (self.contours and self.contours[-1].closed):
            self.move_to(*arc_start)
        elif not np.allclose(current, arc_start):
            self.line_to(*arc_start)

        pieces = max(1, int(math.ceil(abs(sweep) / (math.pi / 2) - 1e-9)))
        step = sweep / pieces
        k = 4 / 3 * math.tan(step / 4)
        angle = start
        for _ in range(pieces):
            end = angle + step
            cos_a, sin_a = math.cos(angle), math.sin(angle)
            cos_b, sin_b = math.cos(end), math.sin(end)
            self.cubic_to(
                cx + rx * (cos_a - k * sin_a), cy + ry * (sin_a + k * cos_a),
                cx + rx * (cos_b + k * sin_b), cy + ry * (sin_b - k * cos_b),
                cx + rx * cos_b, cy + ry * sin_b,
            )
            angle = end

    def close(self):
        if self.contours and not self.contours[-1].closed:
            self.contours[-1].closed = True

    def add_path(self, other, matrix=None):
        for contour in other.contours:
            self.contours.append(contour.transformed(matrix) if matrix is not None else contour.copy())

    def transform(self, matrix):
        path = Path(self.fill_type)
        path.contours = [c.transformed(matrix) for c in self.contours]
        return path

    def offset(self, dx, dy):
        matrix = TransformMatrix().translate(dx, dy)
        self.contours = [c.transformed(matrix) for c in self.contours]

    def bounds(self):
        """(left, top, right, bottom) of the flattened outline."""
        points = [c.flatten() for c in self.contours]
        if not points:
            return (0., 0., 0., 0.)
        points = np.concatenate(points)
        return tuple(float(v) for v in (*points.min(axis=0), *points.max(axis=0)))

    def to_svg_d(self, precision=3):
        def fmt(point):
            return " ".join(("%.*f" % (precision, v)).rstrip("0").rstrip(".") for v in point)

        parts = []
        for contour in self.contours:
            parts.append("M " + fmt(contour.start))
            for seg in contour.segments:
                if seg.kind == "line":
                    parts.append("L " + fmt(seg.end))
                else:
                    parts.append("C " + ", ".join(fmt(p) for p in seg.points[1:]))
            if contour.closed:
                parts.append("Z")
        return " ".join(parts)

    def op(self, other, op):
        """Boolean operation on the flattened outlines of two paths."""
        first = _to_geometry(self)
        second = _to_geometry(other)
        if op == PathOp.UNION:
            result = first.union(second)
        elif op == PathOp.DIFFERENCE:
            result = first.difference(second)
        elif op == PathOp.REVERSE_DIFFERENCE:
            result = second.difference(first)
        elif op == PathOp.INTERSECT:
            result = first.intersection(second)
        else:
            result = first.symmetric_difference(second)
        return _from_geometry(result, self.fill_type)


def path_from_shape_data(shape_data, path=None):
    """Traces a ``ShapeData`` outline; curves with degenerate handles become lines."""
    path = path if path is not None else Path()
    current = shape_data.initial_point
    path.move_to(current.x, current.y)
    for curve in shape_data.curves:
        vertex = curve.vertex
        if curve.control1 == current and curve.control2 == vertex:
            path.line_to(vertex.x, vertex.y)
        else:
            path.cubic_to(
                curve.control1.x, curve.control1.y,
                curve.control2.x, curve.control2.y,
                vertex.x, vertex.y,
            )
        current = vertex
    if shape_data.closed:
        path.close()
    return path


def _to_geometry(path):
    polygons = []
    for contour in path.contours:
        points = contour.flatten()
        if len(points) < 3:
            continue
        polygon = Polygon(points)
        if not polygon.is_valid:
            polygon = polygon.buffer(0)
        polygons.append(polygon)
    if not polygons:
        return Polygon()
    if path.fill_type == FillType.EVEN_ODD:
        geometry = polygons[0]
        for polygon in polygons[1:]:
            geometry = geometry.symmetric_difference(polygon)
        return geometry
    return unary_union(polygons)


def _from_geometry(geometry, fill_type):
    path = Path(fill_type)
    if isinstance(geometry, Polygon):
        polygons = [geometry]
    elif isinstance(geometry, MultiPolygon):
        polygons = list(geometry.geoms)
    else:
        polygons = [g for g in getattr(geometry, "geoms", []) if isinstance(g, Polygon)]

    for polygon in polygons:
        if polygon.is_empty:
            continue
        for ring in [polygon.exterior, *polygon.interiors]:
            coords = list(ring.coords)[:-1]
            if len(coords) < 3:
                continue
            path.move_to(*coords[0])
            for x, y in coords[1:]:
                path.line_to(x, y)
            path.close()
    return path


class PathMeasure:
    """Arc length parametrization of every contour of a path, end to end."""

    def __init__(self, path):
        self._entries = []
        total = 0.
        for index, contour in enumerate(path.contours):
            for seg in contour.measured_segments():
                length = seg.length()
                self._entries.append((total, length, index, seg))
                total += length
        self.length = total

    def get_segment(self, start_d, stop_d, dst, start_with_move_to=True):
        """
        Appends the part of the path between two distances to ``dst``.

        Distances are clamped to [0, length]. Returns False if nothing was
        appended.
        """
        start_d = max(start_d, 0.)
        stop_d = min(stop_d, self.length)
        if start_d >= stop_d:
            return False

        last_contour = None
        move = start_with_move_to
        for offset, length, contour_index, seg in self._entries:
            seg_end = offset + length
            if seg_end < start_d or length == 0:
                continue
            if offset > stop_d:
                break
            t0 = seg.t_at_length(start_d - offset) if start_d > offset else 0.
            t1 = seg.t_at_length(stop_d - offset) if stop_d < seg_end else 1.
            if t1 <= t0:
                continue
            piece = seg.split(t0, t1)
            if move or contour_index != last_contour:
                dst.move_to(*piece.start)
                move = False
            elif not np.allclose(dst.current_point, piece.start):
                dst.line_to(*piece.start)
            dst.contours[-1].segments.append(piece)
            last_contour = contour_index
        return True


def _floor_mod(x, y):
    return x - y * math.floor(x / y)


def apply_trim_path(path, start_value, end_value, offset_value):
    """
    Trims ``path`` in place.

    ``start_value`` and ``end_value`` are fractions of the total length,
    ``offset_value`` is a fraction of a full turn.
    """
    measure = PathMeasure(path)
    length = measure.length
    if start_value == 1 and end_value == 0:
        return
    if length < 1 or abs(end_value - start_value - 1) < .01:
        return

    start = length * start_value
    end = length * end_value
    new_start = min(start, end)
    new_end = max(start, end)

    offset = offset_value * length
    new_start += offset
    new_end += offset

    # Shift back when the offset pushed the window all the way around
    if new_start >= length and new_end >= length:
        new_start = _floor_mod(new_start, length)
        new_end = _floor_mod(new_end, length)

    if new_start < 0:
        new_start = _floor_mod(new_start, length)
    if new_end < 0:
        new_end = _floor_mod(new_end, length)

    if new_start == new_end:
        path.reset()
        return

    if new_start >= new_end:
        new_start -= length

    trimmed = Path(path.fill_type)
    measure.get_segment(new_start, new_end, trimmed, True)
    if new_end > length:
        measure.get_segment(0, new_end % length, trimmed, True)
    elif new_start < 0:
        measure.get_segment(length + new_start, length, trimmed, True)
    path.set(trimmed)
