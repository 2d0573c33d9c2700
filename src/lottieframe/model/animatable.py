"""Parsed animated properties.

An animated property in the document looks like ``{"a": 1, "k": [...]}``
with a keyframe array, or ``{"a": 0, "k": value}`` with a constant. The
distinction is resolved once here: an ``AnimatableValue`` is either a
constant or a keyframe track, never re-inspected at evaluation time.
"""
from . import values
from .keyframe import parse_keyframes
from ..utils.vector import NVector


def _is_keyframe_array(raw):
    return isinstance(raw, list) and len(raw) > 0 and isinstance(raw[0], dict) and "t" in raw[0]


class AnimatableValue:
    value_parser = staticmethod(values.parse_float)

    def __init__(self, keyframes=None, constant=None):
        self.keyframes = tuple(keyframes or ())
        self.constant = constant

    @property
    def is_animated(self):
        return len(self.keyframes) > 0

    @property
    def initial_value(self):
        if self.is_animated:
            return self.keyframes[0].start_value
        return self.constant

    def __repr__(self):
        if self.is_animated:
            return "<%s %s keyframes>" % (type(self).__name__, len(self.keyframes))
        return "<%s %r>" % (type(self).__name__, self.constant)

    @classmethod
    def from_json(cls, raw, composition, scale=1., value_parser=None):
        parser = value_parser or cls.value_parser
        if isinstance(raw, dict) and "k" in raw:
            raw = raw["k"]
        if _is_keyframe_array(raw):
            keyframes = parse_keyframes(raw, composition, scale, parser)
            if keyframes:
                return cls(keyframes=keyframes)
            return cls(constant=None)
        return cls(constant=parser(raw, scale))

    @classmethod
    def optional(cls, raw, composition, scale=1., default=None, **kwargs):
        """Parses ``raw`` or falls back to a constant ``default`` when absent."""
        if raw is None:
            return cls(constant=default)
        return cls.from_json(raw, composition, scale, **kwargs)


class AnimatableFloatValue(AnimatableValue):
    value_parser = staticmethod(values.parse_float)


class AnimatableIntegerValue(AnimatableValue):
    value_parser = staticmethod(values.parse_integer)


class AnimatablePointValue(AnimatableValue):
    value_parser = staticmethod(values.parse_point)


class AnimatableScaleValue(AnimatableValue):
    value_parser = staticmethod(values.parse_scale)


class AnimatableColorValue(AnimatableValue):
    value_parser = staticmethod(values.parse_color)


class AnimatableShapeValue(AnimatableValue):
    value_parser = staticmethod(values.parse_shape)


class AnimatableGradientColorValue(AnimatableValue):
    @classmethod
    def from_json(cls, raw, composition, scale=1., value_parser=None):
        # {"p": number of color stops, "k": {"k": [...]}}
        color_points = int(raw.get("p", -1))
        return super().from_json(
            raw.get("k", {}), composition, scale, value_parser or values.GradientColor.parser(color_points)
        )


class AnimatablePathValue(AnimatablePointValue):
    """Position whose keyframes may carry spatial tangents (``to``/``ti``)."""


class AnimatableSplitDimensionPathValue:
    """Position animated as two independent scalar tracks."""

    def __init__(self, x, y):
        self.x = x
        self.y = y

    @property
    def is_animated(self):
        return self.x.is_animated or self.y.is_animated

    def __repr__(self):
        return "<AnimatableSplitDimensionPathValue x=%r y=%r>" % (self.x, self.y)


def position_from_json(raw, composition, scale):
    if isinstance(raw, dict) and raw.get("s"):
        return AnimatableSplitDimensionPathValue(
            AnimatableFloatValue.from_json(raw.get("x", {"k": 0}), composition, scale),
            AnimatableFloatValue.from_json(raw.get("y", {"k": 0}), composition, scale),
        )
    return AnimatablePathValue.from_json(raw, composition, scale)


class AnimatableTransform:
    """Anchor, position, scale, rotation, opacity and skew of a layer or group."""

    def __init__(self, anchor_point, position, scale, rotation, opacity, skew=None, skew_angle=None):
        self.anchor_point = anchor_point
        self.position = position
        self.scale = scale
        self.rotation = rotation
        self.opacity = opacity
        self.skew = skew
        self.skew_angle = skew_angle

    @classmethod
    def default(cls):
        return cls(
            AnimatablePointValue(constant=NVector(0, 0)),
            AnimatablePathValue(constant=NVector(0, 0)),
            AnimatableScaleValue(constant=NVector(1, 1)),
            AnimatableFloatValue(constant=0.),
            AnimatableIntegerValue(constant=100),
        )

    @classmethod
    def from_json(cls, raw, composition):
        if not raw:
            return cls.default()
        scale = composition.scale

        anchor = AnimatablePointValue.optional(raw.get("a"), composition, scale, NVector(0, 0))
        if raw.get("p") is not None:
            position = position_from_json(raw["p"], composition, scale)
        else:
            position = AnimatablePathValue(constant=NVector(0, 0))
        scale_value = AnimatableScaleValue.optional(raw.get("s"), composition, 1., NVector(1, 1))
        # 3d layers store the z rotation as "rz"
        rotation = AnimatableFloatValue.optional(raw.get("r", raw.get("rz")), composition, 1., 0.)
        opacity = AnimatableIntegerValue.optional(raw.get("o"), composition, 1., 100)
        skew = skew_angle = None
        if raw.get("sk") is not None:
            skew = AnimatableFloatValue.from_json(raw["sk"], composition)
            skew_angle = AnimatableFloatValue.optional(raw.get("sa"), composition, 1., 0.)
        return cls(anchor, position, scale_value, rotation, opacity, skew, skew_angle)
