from .animation import KeyframeAnimation, TransformKeyframeAnimation, create_animation
from .builder import CancellationToken, CompositionBuilder
from .loader import LoadResult, composition_from_json, fetch_composition, load_composition_async, load_composition_sync
from .player import AnimationPlayer
