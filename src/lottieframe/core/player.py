"""Per-instance animation driver."""
import logging

from ..utils.transform import TransformMatrix
from .frame import Drawable, FillPaint, FrameSnapshot, GradientPaint, ResolvedLayer, StrokePaint, StrokeStyle
from .layers import build_layers

logger = logging.getLogger(__name__)


class AnimationPlayer:
    """
    Live state of one playing composition.

    Several players may share a sealed ``Composition``; each one owns its
    own animations, caches and listeners. ``on_invalidate`` is called
    whenever a resolved value changes and the frame needs to be redrawn.
    """

    def __init__(self, composition, on_invalidate=None):
        self.composition = composition
        self.on_invalidate = on_invalidate
        self.progress = 0.
        self.invalidations = 0
        self.layers, self.layer_scope = build_layers(composition.layers, self.invalidate)
        self.set_progress(0.)

    def __repr__(self):
        return "<AnimationPlayer %r progress=%g>" % (self.composition, self.progress)

    def invalidate(self):
        self.invalidations += 1
        if self.on_invalidate is not None:
            self.on_invalidate()

    def layer_for_id(self, layer_id):
        return self.layer_scope.get(layer_id)

    def set_progress(self, progress):
        progress = min(max(progress, 0.), 1.)
        self.progress = progress
        for layer in self.layers:
            layer.set_progress(progress)

    def set_frame(self, frame):
        self.set_progress(self.composition.progress_for_frame(frame))

    @property
    def frame(self):
        return self.composition.frame_for_progress(self.progress)

    def snapshot(self):
        """Resolves every visible layer for the current progress."""
        matrix = TransformMatrix()
        layers = []
        # The first layer of the document is on top
        for layer in reversed(self.layers):
            resolved = layer.resolve(matrix, 255)
            if resolved is not None:
                layers.append(resolved)
        return FrameSnapshot(frame=self.frame, progress=self.progress, layers=layers)

    def render_frame(self, frame):
        self.set_frame(frame)
        return self.snapshot()

    def teardown(self):
        for layer in self.layers:
            layer.teardown()
        self.on_invalidate = None


__all__ = [
    "AnimationPlayer", "FrameSnapshot", "ResolvedLayer", "Drawable",
    "FillPaint", "StrokePaint", "GradientPaint", "StrokeStyle",
]
