import logging

from ..config import settings
from .easing import LINEAR, CubicBezierInterpolator
from .values import parse_point

logger = logging.getLogger(__name__)


def _clamp(value, lo, hi):
    return max(lo, min(value, hi))


class Keyframe:
    """
    One interpolation segment of an animated property.

    ``interpolator`` is None for static keyframes, which always resolve to
    their start value. ``end_frame`` is None until the backfill pass runs,
    and stays None for the last segment of a track.
    """

    def __init__(self, composition, start_value, end_value, interpolator, start_frame, end_frame=None,
                 path_out=None, path_in=None):
        self.composition = composition
        self.start_value = start_value
        self.end_value = end_value
        self.interpolator = interpolator
        self.start_frame = start_frame
        self.end_frame = end_frame
        # Spatial tangents for position keyframes, relative to start/end values
        self.path_out = path_out
        self.path_in = path_in

    @property
    def start_progress(self):
        return self.composition.progress_for_frame(self.start_frame)

    @property
    def end_progress(self):
        if self.end_frame is None:
            return 1.
        return self.composition.progress_for_frame(self.end_frame)

    @property
    def is_static(self):
        return self.interpolator is None

    def contains_progress(self, progress):
        return self.start_progress <= progress <= self.end_progress

    def __repr__(self):
        return "<Keyframe start_value=%r end_value=%r start_frame=%r end_frame=%r interpolator=%r>" % (
            self.start_value, self.end_value, self.start_frame, self.end_frame, self.interpolator
        )


def _control_point(raw, scale):
    def component(value):
        if isinstance(value, list):
            value = value[0] if value else 0
        return float(value) * scale
    return component(raw.get("x", 0)), component(raw.get("y", 0))


def keyframe_from_json(raw, composition, scale, value_parser):
    """Builds a single keyframe from one entry of a keyframe array."""
    if not isinstance(raw, dict) or "t" not in raw:
        # No time: a constant spanning the whole timeline
        value = value_parser(raw, scale)
        return Keyframe(composition, value, value, None, 0., None)

    start_frame = float(raw.get("t", 0))
    start_value = None
    end_value = None
    if raw.get("s") is not None:
        start_value = value_parser(raw["s"], scale)
    if raw.get("e") is not None:
        end_value = value_parser(raw["e"], scale)

    cp1 = cp2 = None
    if isinstance(raw.get("o"), dict) and isinstance(raw.get("i"), dict):
        cp1 = _control_point(raw["o"], scale)
        cp2 = _control_point(raw["i"], scale)

    if int(raw.get("h", 0)) == 1:
        end_value = start_value
        interpolator = LINEAR
    elif cp1 is not None:
        cap = settings.max_control_point
        cp1 = (_clamp(cp1[0], -scale, scale), _clamp(cp1[1], -cap, cap))
        cp2 = (_clamp(cp2[0], -scale, scale), _clamp(cp2[1], -cap, cap))
        interpolator = CubicBezierInterpolator(cp1[0] / scale, cp1[1] / scale, cp2[0] / scale, cp2[1] / scale)
    else:
        interpolator = LINEAR

    path_out = path_in = None
    if raw.get("to") is not None and raw.get("ti") is not None:
        path_out = parse_point(raw["to"], scale)
        path_in = parse_point(raw["ti"], scale)

    return Keyframe(composition, start_value, end_value, interpolator, start_frame, None, path_out, path_in)


def set_end_frames(keyframes):
    """
    Assigns each keyframe the start frame of the next one.

    The json only stores start frames; a trailing keyframe without a start
    value only exists to donate its frame and is dropped.
    """
    for current, following in zip(keyframes, keyframes[1:]):
        current.end_frame = following.start_frame
        if current.end_value is None and following.start_value is not None:
            current.end_value = following.start_value

    if keyframes and keyframes[-1].start_value is None:
        keyframes.pop()
    return keyframes


def parse_keyframes(raw, composition, scale, value_parser):
    if not raw:
        return []
    keyframes = [keyframe_from_json(item, composition, scale, value_parser) for item in raw]
    return set_end_frames(keyframes)
