from ...model.shapes import TrimPathType
from ..path import apply_trim_path
from .base import Content


class TrimPathContent(Content):
    """
    Start, end and offset of a trim path.

    Holds no geometry. Path contents using a simultaneous trim, and strokes
    using an individual one, subscribe to it and apply it themselves.
    """

    def __init__(self, layer, shape):
        super().__init__(layer, shape.name)
        self.hidden = shape.hidden
        self.trim_type = shape.trim_type
        self._listeners = []
        self.start = self.animate(shape.start)
        self.end = self.animate(shape.end)
        self.offset = self.animate(shape.offset)

    def add_listener(self, callback):
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def on_value_changed(self):
        super().on_value_changed()
        for callback in list(self._listeners):
            callback()

    def apply(self, path):
        """Trims ``path`` in place with the current values."""
        if self.hidden:
            return path
        apply_trim_path(path, self.start.value / 100, self.end.value / 100, self.offset.value / 360)
        return path


def find_simultaneous_trim(contents_before):
    trim = None
    for content in contents_before:
        if isinstance(content, TrimPathContent) and content.trim_type == TrimPathType.Simultaneously:
            trim = content
    return trim


def find_individual_trim(contents_before):
    trim = None
    for content in contents_before:
        if isinstance(content, TrimPathContent) and content.trim_type == TrimPathType.Individually:
            trim = content
    return trim
