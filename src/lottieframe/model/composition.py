"""Composition model: the parsed, read-only representation of one document."""
import logging
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class Rect(BaseModel):
    model_config = ConfigDict(frozen=True)

    left: float = 0
    top: float = 0
    right: float = 0
    bottom: float = 0

    @property
    def width(self):
        return self.right - self.left

    @property
    def height(self):
        return self.bottom - self.top

    def is_empty(self):
        return self.width <= 0 or self.height <= 0


class DocumentHeader(BaseModel):
    """Top level numeric fields of a document."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    width: Optional[float] = Field(default=None, alias="w")
    height: Optional[float] = Field(default=None, alias="h")
    start_frame: float = Field(default=0, alias="ip")
    end_frame: float = Field(default=0, alias="op")
    frame_rate: float = Field(default=0, alias="fr")
    version: Optional[str] = Field(default=None, alias="v")
    name: Optional[str] = Field(default=None, alias="nm")


class ImageAsset(BaseModel):
    """Image metadata; pixel data is resolved by the renderer."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    id: str
    width: int = Field(default=0, alias="w")
    height: int = Field(default=0, alias="h")
    file_name: str = Field(alias="p")
    dir_name: str = Field(default="", alias="u")
    embedded: int = Field(default=0, alias="e")

    @property
    def is_embedded(self):
        return self.embedded == 1 or self.file_name.startswith("data:")


class Font(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    name: str = Field(alias="fName")
    family: str = Field(default="", alias="fFamily")
    style: str = Field(default="", alias="fStyle")
    ascent: float = 0


class FontCharacter(BaseModel):
    """Glyph metadata. ``shapes`` holds parsed shape groups of the outline."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True,
                              arbitrary_types_allowed=True)

    character: str = Field(alias="ch")
    size: float = 0
    width: float = Field(default=0, alias="w")
    style: str = ""
    font_family: str = Field(default="", alias="fFamily")
    shapes: tuple = ()

    @staticmethod
    def key_for(character, font_family, style):
        return (character, font_family, style)

    @property
    def key(self):
        return self.key_for(self.character, self.font_family, self.style)


class Composition:
    """
    After Effects/Bodymovin composition.

    Populated once by ``CompositionBuilder`` and sealed afterwards: the
    collections are exposed read-only and no more warnings can be added.
    Layers and keyframes keep a reference to it for frame/progress
    conversions.
    """

    def __init__(self, bounds, start_frame, end_frame, frame_rate, scale=1., name=None, version=None):
        self.bounds = bounds
        self.start_frame = float(start_frame)
        self.end_frame = float(end_frame)
        self.frame_rate = float(frame_rate)
        self.scale = float(scale)
        self.name = name
        self.version = version
        self._layers = []
        self._layer_map = {}
        self._precomps = {}
        self._images = {}
        self._fonts = {}
        self._characters = {}
        # Ordered set
        self._warnings = {}
        self._sealed = False

    def __repr__(self):
        return "<Composition %sx%s frames %g-%g @%gfps, %s layers>" % (
            self.bounds.width if self.bounds else "?",
            self.bounds.height if self.bounds else "?",
            self.start_frame, self.end_frame, self.frame_rate, len(self._layers),
        )

    @property
    def sealed(self):
        return self._sealed

    def _check_open(self):
        if self._sealed:
            raise RuntimeError("Composition is sealed")

    def add_warning(self, warning):
        self._check_open()
        if warning not in self._warnings:
            logger.warning(warning)
        self._warnings[warning] = None

    def add_layer(self, layer):
        self._check_open()
        self._layers.append(layer)
        self._layer_map[layer.id] = layer

    def add_precomp(self, precomp_id, layers):
        self._check_open()
        self._precomps[precomp_id] = tuple(layers)

    def add_image(self, image):
        self._check_open()
        self._images[image.id] = image

    def add_font(self, font):
        self._check_open()
        self._fonts[font.name] = font

    def add_character(self, character):
        self._check_open()
        self._characters[character.key] = character

    def seal(self):
        self._layers = tuple(self._layers)
        self._layer_map = MappingProxyType(self._layer_map)
        self._precomps = MappingProxyType(self._precomps)
        self._images = MappingProxyType(self._images)
        self._fonts = MappingProxyType(self._fonts)
        self._characters = MappingProxyType(self._characters)
        self._sealed = True
        return self

    @property
    def warnings(self):
        return list(self._warnings)

    @property
    def layers(self):
        return tuple(self._layers)

    @property
    def precomps(self):
        return self._precomps

    @property
    def images(self):
        return self._images

    @property
    def fonts(self):
        return self._fonts

    @property
    def characters(self):
        return self._characters

    def has_images(self):
        return len(self._images) > 0

    def layer_for_id(self, layer_id):
        return self._layer_map.get(layer_id)

    def precomp_layers(self, precomp_id):
        return self._precomps.get(precomp_id, ())

    @property
    def duration(self):
        """Duration in milliseconds."""
        if self.frame_rate <= 0:
            return 0.
        return (self.end_frame - self.start_frame) / self.frame_rate * 1000

    @property
    def duration_frames(self):
        return self.duration * self.frame_rate / 1000

    def progress_for_frame(self, frame):
        duration_frames = self.duration_frames
        if duration_frames <= 0:
            return 0.
        return (frame - self.start_frame) / duration_frames

    def frame_for_progress(self, progress):
        return self.start_frame + progress * self.duration_frames

    def describe(self):
        lines = ["Composition:"]
        for layer in self._layers:
            lines.append(layer.describe("\t"))
        return "\n".join(lines)
