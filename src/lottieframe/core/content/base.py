"""
Live shape content.

A ``Content`` is created per animation instance from an immutable shape
model. It owns the keyframe animations of that model, registers them with
the owning layer so they receive progress updates, and listens to them so
a change marks its cached output dirty and asks the layer for a redraw.

Contents of a group are evaluated from the last document item to the
first. ``set_contents`` receives the siblings evaluated before a content
(``contents_before``, later in the document) and the ones evaluated after
it (``contents_after``, earlier in the document, in document order).
"""
import logging

from ..animation import create_animation

logger = logging.getLogger(__name__)


class Content:
    def __init__(self, layer, name=None):
        self.layer = layer
        self.name = name
        self._subscriptions = []

    def __repr__(self):
        return "<%s %r>" % (type(self).__name__, self.name)

    def animate(self, value):
        """Creates the live animation of ``value`` and subscribes to it."""
        animation = create_animation(value)
        self.layer.add_animation(animation)
        self.subscribe(animation)
        return animation

    def subscribe(self, source):
        source.add_listener(self.on_value_changed)
        self._subscriptions.append(source)

    def on_value_changed(self):
        self.invalidate()

    def invalidate(self):
        self.layer.invalidate()

    def set_contents(self, contents_before, contents_after):
        pass

    def teardown(self):
        for source in self._subscriptions:
            source.remove_listener(self.on_value_changed)
        self._subscriptions = []


class PathContent(Content):
    """Content that produces a path in the coordinate space of its group."""

    def __init__(self, layer, name=None):
        super().__init__(layer, name)
        self._is_path_valid = False
        self._path = None

    def invalidate(self):
        self._is_path_valid = False
        super().invalidate()

    @property
    def path(self):
        if not self._is_path_valid:
            self._path = self.build_path()
            self._is_path_valid = True
        return self._path

    def build_path(self):
        raise NotImplementedError


class DrawingContent(Content):
    """Content that turns paths into ``Drawable`` outputs."""

    def draw(self, parent_matrix, parent_alpha):
        raise NotImplementedError


class GreedyContent:
    """Mixin for content that takes ownership of the path contents preceding it in its group."""

    def absorb_content(self, contents):
        raise NotImplementedError


def alpha_for(parent_alpha, opacity):
    """Combines a 0-255 parent alpha with a 0-100 opacity."""
    alpha = int(parent_alpha * (opacity or 0) / 100)
    return min(max(alpha, 0), 255)

