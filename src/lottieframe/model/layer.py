import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .animatable import AnimatableFloatValue, AnimatableTransform, AnimatableValue
from .shapes import ShapeParser
from .values import Color

logger = logging.getLogger(__name__)


class LayerType(Enum):
    PreComp = 0
    Solid = 1
    Image = 2
    Null = 3
    Shape = 4
    Text = 5
    Unknown = -1

    @classmethod
    def from_json(cls, value):
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.Unknown


class Justification(Enum):
    LeftAlign = 0
    RightAlign = 1
    Center = 2


class DocumentData(BaseModel):
    """One text document state of a text layer."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    text: str = Field(default="", alias="t")
    font_name: str = Field(default="", alias="f")
    size: float = Field(default=0, alias="s")
    justification: Justification = Field(default=Justification.LeftAlign, alias="j")
    tracking: float = Field(default=0, alias="tr")
    line_height: float = Field(default=0, alias="lh")
    baseline_shift: float = Field(default=0, alias="ls")
    fill_color: Optional[List[float]] = Field(default=None, alias="fc")
    stroke_color: Optional[List[float]] = Field(default=None, alias="sc")
    stroke_width: float = Field(default=0, alias="sw")
    stroke_over_fill: bool = Field(default=False, alias="of")

    @property
    def fill(self):
        return Color.from_json(self.fill_color) if self.fill_color else None

    @property
    def stroke(self):
        return Color.from_json(self.stroke_color) if self.stroke_color else None


def parse_document(raw, scale=1.):
    return DocumentData.model_validate(raw)


class AnimatableTextValue(AnimatableValue):
    value_parser = staticmethod(parse_document)


def _parse_solid_color(value):
    """``#rrggbb`` hex strings as written by the exporter."""
    value = (value or "#000000").lstrip("#")
    if len(value) != 6:
        raise ValueError("Invalid solid color %r" % value)
    return Color(*(int(value[i:i + 2], 16) / 255 for i in (0, 2, 4)))


class Layer:
    """
    Parsed layer. Parent layers are referenced by id only and looked up
    through the composition (or precomposition) that contains this layer.
    """

    def __init__(self, composition, name, layer_id, layer_type, parent_id, in_frame, out_frame,
                 transform, shapes=(), ref_id=None, start_frame=0., time_stretch=1., time_remapping=None,
                 solid_color=None, solid_width=0., solid_height=0., precomp_width=0., precomp_height=0.,
                 text=None, hidden=False):
        self.composition = composition
        self.name = name
        self.id = layer_id
        self.layer_type = layer_type
        self.parent_id = parent_id
        self.in_frame = in_frame
        self.out_frame = out_frame
        self.transform = transform
        self.shapes = tuple(shapes)
        self.ref_id = ref_id
        self.start_frame = start_frame
        self.time_stretch = time_stretch
        self.time_remapping = time_remapping
        self.solid_color = solid_color
        self.solid_width = solid_width
        self.solid_height = solid_height
        self.precomp_width = precomp_width
        self.precomp_height = precomp_height
        self.text = text
        self.hidden = hidden

    def __repr__(self):
        return "<Layer %r id=%s %s>" % (self.name, self.id, self.layer_type.name)

    @property
    def start_progress(self):
        duration_frames = self.composition.duration_frames
        if duration_frames <= 0:
            return 0.
        return self.start_frame / duration_frames

    def is_visible_at(self, frame):
        return not self.hidden and self.in_frame <= frame < self.out_frame

    def describe(self, prefix=""):
        lines = ["%s%s" % (prefix, self.name)]
        parent = self.composition.layer_for_id(self.parent_id) if self.parent_id is not None else None
        while parent is not None:
            lines[0] += "->" + str(parent.name)
            parent = self.composition.layer_for_id(parent.parent_id) if parent.parent_id is not None else None
        if self.shapes:
            lines.append("%s\tShapes:" % prefix)
            for shape in self.shapes:
                lines.append("%s\t\t%r" % (prefix, shape))
        return "\n".join(lines)

    @classmethod
    def from_json(cls, raw, composition):
        scale = composition.scale
        layer_type = LayerType.from_json(raw.get("ty", -1))
        name = raw.get("nm", "")
        if layer_type == LayerType.Unknown:
            composition.add_warning("Unknown layer type %s" % raw.get("ty"))

        shapes = ()
        if raw.get("shapes"):
            shapes = ShapeParser(composition).parse_items(raw["shapes"])

        solid_color = None
        solid_width = solid_height = 0.
        if layer_type == LayerType.Solid:
            solid_color = _parse_solid_color(raw.get("sc"))
            solid_width = float(raw.get("sw", 0)) * scale
            solid_height = float(raw.get("sh", 0)) * scale

        time_remapping = None
        if raw.get("tm") is not None:
            time_remapping = AnimatableFloatValue.from_json(raw["tm"], composition)

        text = None
        if layer_type == LayerType.Text:
            document = (raw.get("t") or {}).get("d") or {"k": [{"s": {}, "t": 0}]}
            text = AnimatableTextValue.from_json(document, composition)

        time_stretch = float(raw.get("sr", 1) or 1)
        return cls(
            composition,
            name,
            raw.get("ind", -1),
            layer_type,
            raw.get("parent"),
            float(raw.get("ip", 0)),
            float(raw.get("op", 0)),
            AnimatableTransform.from_json(raw.get("ks"), composition),
            shapes,
            raw.get("refId"),
            float(raw.get("st", 0)),
            time_stretch,
            time_remapping,
            solid_color,
            solid_width,
            solid_height,
            float(raw.get("w", 0)) * scale,
            float(raw.get("h", 0)) * scale,
            text,
            bool(raw.get("hd", False)),
        )
