"""Parsed shape content.

Shape items are plain immutable descriptions of animated parameters; the
live geometry lives in ``lottieframe.core.content``. ``ShapeParser``
dispatches on the ``ty`` field of each item.
"""
import logging
from enum import Enum

from .animatable import (
    AnimatableColorValue,
    AnimatableFloatValue,
    AnimatableGradientColorValue,
    AnimatableIntegerValue,
    AnimatablePointValue,
    AnimatableShapeValue,
    AnimatableTransform,
    position_from_json,
)
from ..utils.vector import NVector

logger = logging.getLogger(__name__)


class FillType(Enum):
    WINDING = "nonzero"
    EVEN_ODD = "evenodd"


class LineCap(Enum):
    Butt = 1
    Round = 2
    Square = 3


class LineJoin(Enum):
    Miter = 1
    Round = 2
    Bevel = 3


class GradientType(Enum):
    Linear = 1
    Radial = 2


class MergePathsMode(Enum):
    Merge = 1
    Add = 2
    Subtract = 3
    Intersect = 4
    ExcludeIntersections = 5


class TrimPathType(Enum):
    Simultaneously = 1
    Individually = 2


class ShapeItem:
    type = None

    def __init__(self, name=None, hidden=False):
        self.name = name
        self.hidden = hidden

    def __repr__(self):
        return "<%s %r>" % (type(self).__name__, self.name)


class ShapeGroup(ShapeItem):
    type = "gr"

    def __init__(self, name, items, hidden=False):
        super().__init__(name, hidden)
        self.items = tuple(items)


class ShapeTransform(ShapeItem):
    type = "tr"

    def __init__(self, name, transform):
        super().__init__(name)
        self.transform = transform


class RectangleShape(ShapeItem):
    type = "rc"

    def __init__(self, name, position, size, corner_radius, hidden=False):
        super().__init__(name, hidden)
        self.position = position
        self.size = size
        self.corner_radius = corner_radius


class CircleShape(ShapeItem):
    type = "el"

    def __init__(self, name, position, size, is_reversed=False, hidden=False):
        super().__init__(name, hidden)
        self.position = position
        self.size = size
        self.is_reversed = is_reversed


class ShapePath(ShapeItem):
    type = "sh"

    def __init__(self, name, index, shape, hidden=False):
        super().__init__(name, hidden)
        self.index = index
        self.shape = shape


class MergePaths(ShapeItem):
    type = "mm"

    def __init__(self, name, mode, hidden=False):
        super().__init__(name, hidden)
        self.mode = mode


class ShapeTrimPath(ShapeItem):
    type = "tm"

    def __init__(self, name, trim_type, start, end, offset, hidden=False):
        super().__init__(name, hidden)
        self.trim_type = trim_type
        self.start = start
        self.end = end
        self.offset = offset


class RepeaterTransform:
    def __init__(self, transform, start_opacity, end_opacity):
        self.transform = transform
        self.start_opacity = start_opacity
        self.end_opacity = end_opacity


class Repeater(ShapeItem):
    type = "rp"

    def __init__(self, name, copies, offset, transform, hidden=False):
        super().__init__(name, hidden)
        self.copies = copies
        self.offset = offset
        self.transform = transform


class ShapeFill(ShapeItem):
    type = "fl"

    def __init__(self, name, fill_rule, color, opacity, hidden=False):
        super().__init__(name, hidden)
        self.fill_rule = fill_rule
        self.color = color
        self.opacity = opacity


class ShapeStroke(ShapeItem):
    type = "st"

    def __init__(self, name, color, opacity, width, line_cap, line_join, miter_limit,
                 dashes=(), dash_offset=None, hidden=False):
        super().__init__(name, hidden)
        self.color = color
        self.opacity = opacity
        self.width = width
        self.line_cap = line_cap
        self.line_join = line_join
        self.miter_limit = miter_limit
        self.dashes = tuple(dashes)
        self.dash_offset = dash_offset


class GradientFill(ShapeItem):
    type = "gf"

    def __init__(self, name, gradient_type, fill_rule, colors, opacity, start_point, end_point, hidden=False):
        super().__init__(name, hidden)
        self.gradient_type = gradient_type
        self.fill_rule = fill_rule
        self.colors = colors
        self.opacity = opacity
        self.start_point = start_point
        self.end_point = end_point


class GradientStroke(ShapeItem):
    type = "gs"

    def __init__(self, name, gradient_type, colors, opacity, start_point, end_point, width,
                 line_cap, line_join, miter_limit, dashes=(), dash_offset=None, hidden=False):
        super().__init__(name, hidden)
        self.gradient_type = gradient_type
        self.colors = colors
        self.opacity = opacity
        self.start_point = start_point
        self.end_point = end_point
        self.width = width
        self.line_cap = line_cap
        self.line_join = line_join
        self.miter_limit = miter_limit
        self.dashes = tuple(dashes)
        self.dash_offset = dash_offset


class ShapeParser:
    def __init__(self, composition):
        self.composition = composition

    @property
    def scale(self):
        return self.composition.scale

    def parse_items(self, items):
        shapes = []
        for raw in items or []:
            shape = self.parse_shape(raw)
            if shape is not None:
                shapes.append(shape)
        return shapes

    def parse_shape(self, raw):
        ty = raw.get("ty")
        handler = getattr(self, "_parseshape_" + str(ty), None)
        if handler is None:
            self.composition.add_warning("Unknown shape type %s" % ty)
            return None
        return handler(raw)

    def _name(self, raw):
        return raw.get("nm")

    def _hidden(self, raw):
        return bool(raw.get("hd", False))

    def _float(self, raw, default=0., scaled=False):
        return AnimatableFloatValue.optional(raw, self.composition, self.scale if scaled else 1., default)

    def _parseshape_gr(self, raw):
        return ShapeGroup(self._name(raw), self.parse_items(raw.get("it")), self._hidden(raw))

    def _parseshape_tr(self, raw):
        return ShapeTransform(self._name(raw), AnimatableTransform.from_json(raw, self.composition))

    def _parseshape_rc(self, raw):
        return RectangleShape(
            self._name(raw),
            position_from_json(raw.get("p", {"k": [0, 0]}), self.composition, self.scale),
            AnimatablePointValue.optional(raw.get("s"), self.composition, self.scale, NVector(0, 0)),
            self._float(raw.get("r"), 0., scaled=True),
            self._hidden(raw),
        )

    def _parseshape_el(self, raw):
        return CircleShape(
            self._name(raw),
            position_from_json(raw.get("p", {"k": [0, 0]}), self.composition, self.scale),
            AnimatablePointValue.optional(raw.get("s"), self.composition, self.scale, NVector(0, 0)),
            raw.get("d", 1) == 3,
            self._hidden(raw),
        )

    def _parseshape_sh(self, raw):
        return ShapePath(
            self._name(raw),
            raw.get("ind", 0),
            AnimatableShapeValue.from_json(raw.get("ks", {"k": {}}), self.composition, self.scale),
            self._hidden(raw),
        )

    def _parseshape_mm(self, raw):
        return MergePaths(self._name(raw), MergePathsMode(int(raw.get("mm", 1))), self._hidden(raw))

    def _parseshape_tm(self, raw):
        return ShapeTrimPath(
            self._name(raw),
            TrimPathType(int(raw.get("m", 1))),
            self._float(raw.get("s"), 0.),
            self._float(raw.get("e"), 100.),
            self._float(raw.get("o"), 0.),
            self._hidden(raw),
        )

    def _parseshape_rp(self, raw):
        tr = raw.get("tr") or {}
        transform = RepeaterTransform(
            AnimatableTransform.from_json(tr, self.composition),
            self._float(tr.get("so"), 100.),
            self._float(tr.get("eo"), 100.),
        )
        return Repeater(
            self._name(raw),
            self._float(raw.get("c"), 1.),
            self._float(raw.get("o"), 0.),
            transform,
            self._hidden(raw),
        )

    def _fill_rule(self, raw):
        return FillType.EVEN_ODD if raw.get("r", 1) == 2 else FillType.WINDING

    def _dashes(self, raw):
        dashes = []
        offset = None
        for dash in raw.get("d") or []:
            value = self._float(dash.get("v"), 0., scaled=True)
            if dash.get("n") == "o":
                offset = value
            else:
                dashes.append((dash.get("n"), value))
        return dashes, offset

    def _stroke_style(self, raw):
        return (
            LineCap(int(raw.get("lc", 1))),
            LineJoin(int(raw.get("lj", 1))),
            float(raw.get("ml", 4)),
        )

    def _parseshape_fl(self, raw):
        return ShapeFill(
            self._name(raw),
            self._fill_rule(raw),
            AnimatableColorValue.optional(raw.get("c"), self.composition, 1., None),
            AnimatableIntegerValue.optional(raw.get("o"), self.composition, 1., 100),
            self._hidden(raw),
        )

    def _parseshape_st(self, raw):
        cap, join, miter = self._stroke_style(raw)
        dashes, dash_offset = self._dashes(raw)
        return ShapeStroke(
            self._name(raw),
            AnimatableColorValue.optional(raw.get("c"), self.composition, 1., None),
            AnimatableIntegerValue.optional(raw.get("o"), self.composition, 1., 100),
            self._float(raw.get("w"), 1., scaled=True),
            cap, join, miter, dashes, dash_offset,
            self._hidden(raw),
        )

    def _gradient(self, raw):
        return (
            GradientType(int(raw.get("t", 1))),
            AnimatableGradientColorValue.from_json(raw.get("g") or {"p": 0, "k": {"k": []}}, self.composition),
            AnimatableIntegerValue.optional(raw.get("o"), self.composition, 1., 100),
            AnimatablePointValue.optional(raw.get("s"), self.composition, self.scale, NVector(0, 0)),
            AnimatablePointValue.optional(raw.get("e"), self.composition, self.scale, NVector(0, 0)),
        )

    def _parseshape_gf(self, raw):
        gradient_type, colors, opacity, start, end = self._gradient(raw)
        return GradientFill(
            self._name(raw), gradient_type, self._fill_rule(raw), colors, opacity, start, end, self._hidden(raw)
        )

    def _parseshape_gs(self, raw):
        gradient_type, colors, opacity, start, end = self._gradient(raw)
        cap, join, miter = self._stroke_style(raw)
        dashes, dash_offset = self._dashes(raw)
        return GradientStroke(
            self._name(raw), gradient_type, colors, opacity, start, end,
            self._float(raw.get("w"), 1., scaled=True),
            cap, join, miter, dashes, dash_offset,
            self._hidden(raw),
        )
