from .composition import Composition, DocumentHeader, Font, FontCharacter, ImageAsset, Rect
from .keyframe import Keyframe, parse_keyframes
from .layer import DocumentData, Layer, LayerType
