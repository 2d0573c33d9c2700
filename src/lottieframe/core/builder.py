"""Builds a sealed ``Composition`` from a decoded document."""
import logging
import threading

from pydantic import ValidationError

from ..config import settings
from ..errors import CompositionParseError, LoadCancelledError
from ..model.composition import Composition, DocumentHeader, Font, FontCharacter, ImageAsset, Rect
from ..model.layer import Layer, LayerType
from ..model.shapes import ShapeParser

logger = logging.getLogger(__name__)


class CancellationToken:
    """Cooperative cancellation flag, checked between parse phases."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self):
        return self._event.is_set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise LoadCancelledError("Composition loading was cancelled")


class CompositionBuilder:
    def __init__(self, scale=None, cancellation=None, image_warning_threshold=None):
        self.scale = float(scale if scale is not None else settings.resolution_scale)
        self.cancellation = cancellation
        self.image_warning_threshold = image_warning_threshold \
            if image_warning_threshold is not None else settings.image_warning_threshold

    def _checkpoint(self):
        if self.cancellation is not None:
            self.cancellation.raise_if_cancelled()

    def build(self, document):
        if not isinstance(document, dict):
            raise CompositionParseError("Expected a json object, got %s" % type(document).__name__)
        try:
            composition = self._build(document)
        except (LoadCancelledError, CompositionParseError):
            raise
        except ValidationError as e:
            raise CompositionParseError("Invalid composition: %s" % e) from e
        except (KeyError, TypeError, ValueError, AttributeError, IndexError, ArithmeticError) as e:
            raise CompositionParseError("Unable to parse composition: %s" % e) from e
        return composition

    def _build(self, document):
        self._checkpoint()
        composition = self.parse_header(document)
        assets = document.get("assets") or []

        self._checkpoint()
        self.parse_images(assets, composition)
        self._checkpoint()
        self.parse_precomps(assets, composition)
        self._checkpoint()
        self.parse_fonts(document.get("fonts"), composition)
        self._checkpoint()
        self.parse_chars(document.get("chars"), composition)
        self._checkpoint()
        self.parse_layers(document.get("layers"), composition)
        self._checkpoint()
        return composition.seal()

    def parse_header(self, document):
        header = DocumentHeader.model_validate(document)
        bounds = None
        if header.width is not None and header.height is not None:
            bounds = Rect(
                right=int(header.width * self.scale),
                bottom=int(header.height * self.scale),
            )
        return Composition(
            bounds,
            header.start_frame,
            header.end_frame,
            header.frame_rate,
            self.scale,
            header.name,
            header.version,
        )

    def parse_images(self, assets, composition):
        for asset in assets:
            if "p" not in asset:
                continue
            composition.add_image(ImageAsset.model_validate(asset))

    def parse_precomps(self, assets, composition):
        for asset in assets:
            layers = asset.get("layers")
            if layers is None:
                continue
            composition.add_precomp(asset["id"], [Layer.from_json(raw, composition) for raw in layers])

    def parse_fonts(self, fonts, composition):
        for raw in (fonts or {}).get("list") or []:
            composition.add_font(Font.model_validate(raw))

    def parse_chars(self, chars, composition):
        parser = ShapeParser(composition)
        for raw in chars or []:
            shapes = parser.parse_items(((raw.get("data") or {}).get("shapes")) or [])
            character = FontCharacter.model_validate(raw).model_copy(update={"shapes": tuple(shapes)})
            composition.add_character(character)

    def parse_layers(self, layers, composition):
        image_count = 0
        # Should never be missing, but some json marshalling drops empty arrays
        for raw in layers or []:
            layer = Layer.from_json(raw, composition)
            if layer.layer_type == LayerType.Image:
                image_count += 1
            composition.add_layer(layer)

        image_count = max(image_count, len(composition.images))
        if image_count > self.image_warning_threshold:
            composition.add_warning(
                "You have %s images. Lottie should primarily be used with shapes. If you are using "
                "Adobe Illustrator, convert the Illustrator layers to shape layers." % image_count
            )
