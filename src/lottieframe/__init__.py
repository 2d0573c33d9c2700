"""Lottie/Bodymovin animation interpreter: parses documents and resolves frames for a renderer."""
from .config import Settings, settings
from .core.builder import CancellationToken, CompositionBuilder
from .core.frame import Drawable, FillPaint, FrameSnapshot, GradientPaint, ResolvedLayer, StrokePaint, StrokeStyle
from .core.loader import (
    LoadResult,
    composition_from_json,
    fetch_composition,
    load_composition_async,
    load_composition_sync,
)
from .core.path import Path
from .core.player import AnimationPlayer
from .errors import CompositionLoadError, CompositionParseError, ErrorKind, LoadCancelledError, LottieError
from .model.composition import Composition

__version__ = "0.1.0"

__all__ = [
    "AnimationPlayer", "CancellationToken", "Composition", "CompositionBuilder",
    "CompositionLoadError", "CompositionParseError", "Drawable", "ErrorKind", "FillPaint",
    "FrameSnapshot", "GradientPaint", "LoadCancelledError", "LoadResult", "LottieError",
    "Path", "ResolvedLayer", "Settings", "StrokePaint", "StrokeStyle",
    "composition_from_json", "fetch_composition", "load_composition_async",
    "load_composition_sync", "settings",
]
