"""Per-frame output handed to a rasterizer.

Paths in a ``Drawable`` are already in composition coordinates; stroke
widths and dash lengths are scaled by the same matrix.
"""
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from ..model.composition import ImageAsset
from ..model.layer import DocumentData, LayerType
from ..model.shapes import FillType, GradientType, LineCap, LineJoin
from ..model.values import Color, GradientColor
from ..utils.transform import TransformMatrix
from .path import Path


class _Output(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)


class StrokeStyle(_Output):
    width: float
    line_cap: LineCap = LineCap.Butt
    line_join: LineJoin = LineJoin.Miter
    miter_limit: float = 4
    dashes: Tuple[float, ...] = ()
    dash_offset: float = 0


class FillPaint(_Output):
    color: Color
    alpha: int
    fill_type: FillType = FillType.WINDING


class StrokePaint(_Output):
    color: Color
    alpha: int
    style: StrokeStyle


class GradientPaint(_Output):
    gradient_type: GradientType
    gradient: GradientColor
    start_point: Tuple[float, float]
    end_point: Tuple[float, float]
    alpha: int
    fill_type: FillType = FillType.WINDING
    # Set for gradient strokes only
    style: Optional[StrokeStyle] = None


class Drawable(_Output):
    path: Path
    paint: Union[FillPaint, StrokePaint, GradientPaint]


class ResolvedLayer(_Output):
    name: str
    layer_id: int
    layer_type: LayerType
    matrix: TransformMatrix
    alpha: int
    drawables: List[Drawable] = []
    image: Optional[ImageAsset] = None
    text: Optional[DocumentData] = None
    children: List["ResolvedLayer"] = []


ResolvedLayer.model_rebuild()


class FrameSnapshot(_Output):
    """Visible layers of one frame, in paint order (bottom layer first)."""
    frame: float
    progress: float
    layers: List[ResolvedLayer] = []

    def iter_drawables(self):
        def walk(layers):
            for layer in layers:
                yield from layer.drawables
                yield from walk(layer.children)
        return walk(self.layers)
