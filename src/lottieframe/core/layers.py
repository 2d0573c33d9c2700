"""
Live layers.

Each ``BaseLayer`` wraps one parsed ``Layer`` for one player. It owns the
layer transform, every animation its contents registered, and resolves
to a ``ResolvedLayer`` for the current frame. Parents are looked up by id
in the layer scope of the composition or precomposition holding the layer.
"""
import logging

from ..model.layer import LayerType
from ..utils.transform import TransformMatrix
from .animation import TransformKeyframeAnimation, create_animation
from .content import group_for_shapes
from .content.base import alpha_for
from .frame import Drawable, FillPaint, ResolvedLayer
from .path import Path

logger = logging.getLogger(__name__)


class BaseLayer:
    def __init__(self, model, scope, invalidate=None):
        self.model = model
        self.scope = scope
        self._invalidate = invalidate
        self.progress = 0.
        self.animations = []
        self.transform = TransformKeyframeAnimation(model.transform)
        self.transform.add_listener(self.invalidate)

    def __repr__(self):
        return "<%s %r id=%s>" % (type(self).__name__, self.model.name, self.model.id)

    @property
    def name(self):
        return self.model.name

    @property
    def composition(self):
        return self.model.composition

    def add_animation(self, animation):
        self.animations.append(animation)

    def invalidate(self):
        if self._invalidate is not None:
            self._invalidate()

    def set_progress(self, progress):
        """
        Updates every animation of the layer.

        The layer transform follows the progress it is given; contents run
        on the time stretched progress.
        """
        self.progress = progress
        self.transform.set_progress(progress)
        stretch = self.model.time_stretch
        if stretch:
            progress /= stretch
        for animation in self.animations:
            animation.set_progress(progress)

    @property
    def frame(self):
        return self.composition.frame_for_progress(self.progress)

    def is_visible(self):
        return self.model.is_visible_at(self.frame)

    @property
    def parent(self):
        if self.model.parent_id is None:
            return None
        return self.scope.get(self.model.parent_id)

    def parent_chain(self):
        """Parents from the direct one upwards; cycles are cut and reported."""
        chain = []
        seen = {id(self)}
        parent = self.parent
        while parent is not None:
            if id(parent) in seen:
                logger.warning("Layer %r has a cyclic parent chain", self.name)
                break
            seen.add(id(parent))
            chain.append(parent)
            parent = parent.parent
        return chain

    def matrix(self, parent_matrix=None):
        """Layer transform followed by every parent transform and ``parent_matrix``."""
        matrix = self.transform.matrix
        for parent in self.parent_chain():
            matrix = matrix * parent.transform.matrix
        if parent_matrix is not None:
            matrix = matrix * parent_matrix
        return matrix

    def resolve(self, parent_matrix, parent_alpha):
        if not self.is_visible():
            return None
        matrix = self.matrix(parent_matrix)
        alpha = alpha_for(parent_alpha, self.transform.opacity.value)
        return self.resolve_layer(matrix, alpha)

    def resolve_layer(self, matrix, alpha):
        return ResolvedLayer(
            name=self.name,
            layer_id=self.model.id,
            layer_type=self.model.layer_type,
            matrix=matrix,
            alpha=alpha,
        )

    def teardown(self):
        self.transform.remove_listener(self.invalidate)


class NullLayer(BaseLayer):
    """Transform only; used as a parent."""

    def resolve(self, parent_matrix, parent_alpha):
        return None


class ShapeLayer(BaseLayer):
    def __init__(self, model, scope, invalidate=None):
        super().__init__(model, scope, invalidate)
        self.content_group = group_for_shapes(self, model.name, model.shapes)
        self.content_group.set_contents([], [])

    @property
    def path(self):
        return self.content_group.path

    def resolve_layer(self, matrix, alpha):
        return ResolvedLayer(
            name=self.name,
            layer_id=self.model.id,
            layer_type=self.model.layer_type,
            matrix=matrix,
            alpha=alpha,
            drawables=self.content_group.draw(matrix, alpha),
        )

    def teardown(self):
        self.content_group.teardown()
        super().teardown()


class SolidLayer(BaseLayer):
    def resolve_layer(self, matrix, alpha):
        color = self.model.solid_color
        alpha = alpha_for(alpha, color.a * 100)
        drawables = []
        if alpha > 0:
            path = Path()
            path.move_to(0, 0)
            path.line_to(self.model.solid_width, 0)
            path.line_to(self.model.solid_width, self.model.solid_height)
            path.line_to(0, self.model.solid_height)
            path.close()
            paint = FillPaint(color=color.with_alpha(1.), alpha=alpha)
            drawables.append(Drawable(path=path.transform(matrix), paint=paint))
        return ResolvedLayer(
            name=self.name,
            layer_id=self.model.id,
            layer_type=self.model.layer_type,
            matrix=matrix,
            alpha=alpha,
            drawables=drawables,
        )


class ImageLayer(BaseLayer):
    """Resolves to the image asset; decoding and drawing belong to the renderer."""

    @property
    def image(self):
        return self.composition.images.get(self.model.ref_id)

    def resolve_layer(self, matrix, alpha):
        image = self.image
        if image is None:
            logger.debug("Layer %r references missing image %r", self.name, self.model.ref_id)
        return ResolvedLayer(
            name=self.name,
            layer_id=self.model.id,
            layer_type=self.model.layer_type,
            matrix=matrix,
            alpha=alpha,
            image=image,
        )


class TextLayer(BaseLayer):
    """Resolves the current text document; glyph layout is left to the renderer."""

    def __init__(self, model, scope, invalidate=None):
        super().__init__(model, scope, invalidate)
        self.text = create_animation(model.text)
        self.add_animation(self.text)
        self.text.add_listener(self.invalidate)

    def resolve_layer(self, matrix, alpha):
        return ResolvedLayer(
            name=self.name,
            layer_id=self.model.id,
            layer_type=self.model.layer_type,
            matrix=matrix,
            alpha=alpha,
            text=self.text.value,
        )

    def teardown(self):
        self.text.remove_listener(self.invalidate)
        super().teardown()


class CompositionLayer(BaseLayer):
    """
    Precomposition layer.

    Children get the layer progress, remapped through ``tm`` when present,
    divided by the time stretch and shifted by the layer start frame.
    """

    def __init__(self, model, scope, invalidate=None):
        super().__init__(model, scope, invalidate)
        self.time_remapping = None
        if model.time_remapping is not None:
            self.time_remapping = create_animation(model.time_remapping)
            self.add_animation(self.time_remapping)
            self.time_remapping.add_listener(self.invalidate)
        self.layers, self.layer_scope = build_layers(
            self.composition.precomp_layers(model.ref_id), invalidate
        )
        if model.ref_id not in self.composition.precomps:
            logger.debug("Layer %r references missing precomp %r", self.name, model.ref_id)

    def set_progress(self, progress):
        super().set_progress(progress)
        if self.time_remapping is not None:
            # Remapped time is in seconds; progress counts from the composition start frame
            composition = self.composition
            if composition.duration_frames > 0:
                frame = self.time_remapping.value * composition.frame_rate
                progress = (frame - composition.start_frame) / composition.duration_frames
            else:
                progress = 0.
        stretch = self.model.time_stretch
        if stretch:
            progress /= stretch
        progress -= self.model.start_progress
        for layer in self.layers:
            layer.set_progress(progress)

    def resolve_layer(self, matrix, alpha):
        children = []
        for layer in reversed(self.layers):
            resolved = layer.resolve(matrix, alpha)
            if resolved is not None:
                children.append(resolved)
        return ResolvedLayer(
            name=self.name,
            layer_id=self.model.id,
            layer_type=self.model.layer_type,
            matrix=matrix,
            alpha=alpha,
            children=children,
        )

    def teardown(self):
        if self.time_remapping is not None:
            self.time_remapping.remove_listener(self.invalidate)
        for layer in self.layers:
            layer.teardown()
        super().teardown()


_layer_types = {
    LayerType.PreComp: CompositionLayer,
    LayerType.Solid: SolidLayer,
    LayerType.Image: ImageLayer,
    LayerType.Null: NullLayer,
    LayerType.Shape: ShapeLayer,
    LayerType.Text: TextLayer,
}


def layer_for_model(model, scope, invalidate=None):
    layer_class = _layer_types.get(model.layer_type)
    if layer_class is None:
        logger.warning("Unknown layer type for %r, treating it as a null layer", model.name)
        layer_class = NullLayer
    return layer_class(model, scope, invalidate)


def build_layers(models, invalidate=None):
    """Live layers for ``models`` in document order, plus their id scope."""
    scope = {}
    layers = []
    for model in models:
        layer = layer_for_model(model, scope, invalidate)
        layers.append(layer)
        scope[model.id] = layer
    return layers, scope
