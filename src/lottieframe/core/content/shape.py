from ...model.shapes import FillType
from ..path import Path, path_from_shape_data
from .base import PathContent
from .trim import find_simultaneous_trim


class GeneratorContent(PathContent):
    """Path content generated from animated parameters, optionally trimmed."""

    def __init__(self, layer, shape):
        super().__init__(layer, shape.name)
        self.hidden = shape.hidden
        self.trim_path = None

    def set_contents(self, contents_before, contents_after):
        trim = find_simultaneous_trim(contents_before)
        if trim is not None:
            self.trim_path = trim
            self.subscribe(trim)

    def build_path(self):
        path = Path()
        if self.hidden:
            return path
        self.trace(path)
        if self.trim_path is not None:
            self.trim_path.apply(path)
        return path

    def trace(self, path):
        raise NotImplementedError


class ShapeContent(GeneratorContent):
    """Free-form bezier path (``sh``)."""

    def __init__(self, layer, shape):
        super().__init__(layer, shape)
        self.shape = self.animate(shape.shape)

    def trace(self, path):
        shape_data = self.shape.value
        if shape_data is None:
            return
        path.fill_type = FillType.EVEN_ODD
        path_from_shape_data(shape_data, path)
