"""Fill, stroke and gradient contents: turn the paths above them into drawables."""
from ...model.shapes import FillType, TrimPathType
from ..frame import Drawable, FillPaint, GradientPaint, StrokePaint, StrokeStyle
from ..path import Path
from .base import DrawingContent, PathContent, alpha_for
from .trim import TrimPathContent, find_individual_trim


def _point(matrix, vector):
    point = matrix.apply(vector)
    return (point.x, point.y)


class BaseFillContent(DrawingContent):
    def __init__(self, layer, shape):
        super().__init__(layer, shape.name)
        self.hidden = shape.hidden
        self.fill_type = shape.fill_rule
        self.opacity = self.animate(shape.opacity)
        self.paths = []

    def set_contents(self, contents_before, contents_after):
        for content in contents_after:
            if isinstance(content, PathContent):
                self.paths.append(content)

    def combined_path(self, parent_matrix):
        path = Path(self.fill_type)
        for content in self.paths:
            path.add_path(content.path, parent_matrix)
        return path

    def paint(self, parent_matrix, alpha):
        raise NotImplementedError

    def draw(self, parent_matrix, parent_alpha):
        if self.hidden:
            return []
        paint = self.paint(parent_matrix, alpha_for(parent_alpha, self.opacity.value))
        if paint is None:
            return []
        path = self.combined_path(parent_matrix)
        if path.is_empty():
            return []
        return [Drawable(path=path, paint=paint)]


class FillContent(BaseFillContent):
    def __init__(self, layer, shape):
        super().__init__(layer, shape)
        self.color = self.animate(shape.color)

    def paint(self, parent_matrix, alpha):
        color = self.color.value
        if color is None:
            return None
        return FillPaint(color=color, alpha=alpha, fill_type=self.fill_type)


class GradientFillContent(BaseFillContent):
    def __init__(self, layer, shape):
        super().__init__(layer, shape)
        self.gradient_type = shape.gradient_type
        self.colors = self.animate(shape.colors)
        self.start_point = self.animate(shape.start_point)
        self.end_point = self.animate(shape.end_point)

    def paint(self, parent_matrix, alpha):
        gradient = self.colors.value
        if gradient is None:
            return None
        return GradientPaint(
            gradient_type=self.gradient_type,
            gradient=gradient,
            start_point=_point(parent_matrix, self.start_point.value),
            end_point=_point(parent_matrix, self.end_point.value),
            alpha=alpha,
            fill_type=self.fill_type,
        )


class _PathGroup:
    """Paths stroked together, trimmed as one when an individual trim applies."""

    def __init__(self, trim_path):
        self.trim_path = trim_path
        self.paths = []


class BaseStrokeContent(DrawingContent):
    def __init__(self, layer, shape):
        super().__init__(layer, shape.name)
        self.hidden = shape.hidden
        self.line_cap = shape.line_cap
        self.line_join = shape.line_join
        self.miter_limit = shape.miter_limit
        self.opacity = self.animate(shape.opacity)
        self.width = self.animate(shape.width)
        self.dash_pattern = [self.animate(value) for _, value in shape.dashes]
        self.dash_offset = self.animate(shape.dash_offset) if shape.dash_offset is not None else None
        self.path_groups = []

    def set_contents(self, contents_before, contents_after):
        trim_before = find_individual_trim(contents_before)
        if trim_before is not None:
            self.subscribe(trim_before)

        current = None
        for content in reversed(contents_after):
            if isinstance(content, TrimPathContent) and content.trim_type == TrimPathType.Individually:
                if current is not None:
                    self.path_groups.append(current)
                current = _PathGroup(content)
                self.subscribe(content)
            elif isinstance(content, PathContent):
                if current is None:
                    current = _PathGroup(trim_before)
                current.paths.append(content)
        if current is not None:
            self.path_groups.append(current)

    def dashes(self, scale):
        values = []
        for i, animation in enumerate(self.dash_pattern):
            value = animation.value or 0.
            # Tiny dashes or gaps would split the stroke into countless pieces
            if i % 2 == 0:
                value = max(value, 1.)
            else:
                value = max(value, .1)
            values.append(value * scale)
        return tuple(values)

    def style(self, parent_matrix):
        scale = parent_matrix.mean_scale()
        dashes = self.dashes(scale)
        return StrokeStyle(
            width=(self.width.value or 0.) * scale,
            line_cap=self.line_cap,
            line_join=self.line_join,
            miter_limit=self.miter_limit,
            dashes=dashes,
            dash_offset=(self.dash_offset.value or 0.) * scale if self.dash_offset is not None and dashes else 0.,
        )

    def paint(self, parent_matrix, alpha, style):
        raise NotImplementedError

    def draw(self, parent_matrix, parent_alpha):
        if self.hidden:
            return []
        style = self.style(parent_matrix)
        if style.width <= 0:
            return []
        paint = self.paint(parent_matrix, alpha_for(parent_alpha, self.opacity.value), style)
        if paint is None:
            return []

        drawables = []
        for group in self.path_groups:
            path = Path()
            for content in reversed(group.paths):
                path.add_path(content.path, parent_matrix)
            if group.trim_path is not None:
                group.trim_path.apply(path)
            if not path.is_empty():
                drawables.append(Drawable(path=path, paint=paint))
        return drawables


class StrokeContent(BaseStrokeContent):
    def __init__(self, layer, shape):
        super().__init__(layer, shape)
        self.color = self.animate(shape.color)

    def paint(self, parent_matrix, alpha, style):
        color = self.color.value
        if color is None:
            return None
        return StrokePaint(color=color, alpha=alpha, style=style)


class GradientStrokeContent(BaseStrokeContent):
    def __init__(self, layer, shape):
        super().__init__(layer, shape)
        self.gradient_type = shape.gradient_type
        self.colors = self.animate(shape.colors)
        self.start_point = self.animate(shape.start_point)
        self.end_point = self.animate(shape.end_point)

    def paint(self, parent_matrix, alpha, style):
        gradient = self.colors.value
        if gradient is None:
            return None
        return GradientPaint(
            gradient_type=self.gradient_type,
            gradient=gradient,
            start_point=_point(parent_matrix, self.start_point.value),
            end_point=_point(parent_matrix, self.end_point.value),
            alpha=alpha,
            fill_type=FillType.WINDING,
            style=style,
        )
