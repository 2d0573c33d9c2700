import logging

from ...model import shapes
from .base import Content, DrawingContent, GreedyContent, PathContent
from .ellipse import EllipseContent
from .group import ContentGroup
from .merge import MergePathsContent
from .paint import FillContent, GradientFillContent, GradientStrokeContent, StrokeContent
from .rectangle import RectangleContent
from .repeater import RepeaterContent
from .shape import ShapeContent
from .trim import TrimPathContent

logger = logging.getLogger(__name__)

_content_types = {
    shapes.RectangleShape: RectangleContent,
    shapes.CircleShape: EllipseContent,
    shapes.ShapePath: ShapeContent,
    shapes.ShapeTrimPath: TrimPathContent,
    shapes.MergePaths: MergePathsContent,
    shapes.Repeater: RepeaterContent,
    shapes.ShapeFill: FillContent,
    shapes.ShapeStroke: StrokeContent,
    shapes.GradientFill: GradientFillContent,
    shapes.GradientStroke: GradientStrokeContent,
}


def content_for_shape(layer, shape):
    """Live content for one shape model, or None for items that draw nothing by themselves."""
    if isinstance(shape, shapes.ShapeGroup):
        return group_for_shapes(layer, shape.name, shape.items, shape.hidden)
    factory = _content_types.get(type(shape))
    if factory is None:
        # Group transforms are consumed by group_for_shapes
        if not isinstance(shape, shapes.ShapeTransform):
            logger.debug("No content for %r", shape)
        return None
    return factory(layer, shape)


def group_for_shapes(layer, name, items, hidden=False):
    transform = None
    contents = []
    for item in items:
        if isinstance(item, shapes.ShapeTransform):
            transform = item.transform
            continue
        content = content_for_shape(layer, item)
        if content is not None:
            contents.append(content)
    return ContentGroup(layer, name, contents, transform, hidden)


__all__ = [
    "Content", "DrawingContent", "GreedyContent", "PathContent",
    "ContentGroup", "RectangleContent", "EllipseContent", "ShapeContent",
    "TrimPathContent", "MergePathsContent", "RepeaterContent",
    "FillContent", "StrokeContent", "GradientFillContent", "GradientStrokeContent",
    "content_for_shape", "group_for_shapes",
]
