"""Live keyframe interpolation.

A ``KeyframeAnimation`` is the per-instance evaluation state of one parsed
``AnimatableValue``: the current progress, the last segment that was
resolved and the listeners to notify when the resolved value changes.
Parsed keyframes are shared and never mutated here.
"""
import logging
import math

import numpy as np

from ..model import animatable
from ..model.layer import AnimatableTextValue
from ..model.values import interpolate, values_equal
from ..utils.transform import TransformMatrix
from ..utils.vector import NVector
from .path import CubicSegment

logger = logging.getLogger(__name__)


class BaseKeyframeAnimation:
    def __init__(self):
        self.progress = 0.
        self._listeners = []
        self._value = None
        self._resolved = False

    def add_listener(self, callback):
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    @property
    def listener_count(self):
        return len(self._listeners)

    def notify_listeners(self):
        for callback in list(self._listeners):
            callback()

    def clamp_progress(self, progress):
        return min(max(progress, 0.), 1.)

    def set_progress(self, progress):
        progress = self.clamp_progress(progress)
        if self._resolved and progress == self.progress:
            return
        self.progress = progress
        previous = self._value
        self._value = self.compute_value()
        self._resolved = True
        if not values_equal(previous, self._value):
            self.notify_listeners()

    @property
    def value(self):
        if not self._resolved:
            self._value = self.compute_value()
            self._resolved = True
        return self._value

    def resolve(self, progress):
        self.set_progress(progress)
        return self.value

    def compute_value(self):
        raise NotImplementedError


class StaticKeyframeAnimation(BaseKeyframeAnimation):
    """A constant: never changes, never notifies."""

    def __init__(self, value):
        super().__init__()
        self._value = value
        self._resolved = True

    def set_progress(self, progress):
        self.progress = self.clamp_progress(progress)

    def compute_value(self):
        return self._value


class KeyframeAnimation(BaseKeyframeAnimation):
    def __init__(self, keyframes):
        super().__init__()
        if not keyframes:
            raise ValueError("A keyframe animation needs at least one keyframe")
        self.keyframes = list(keyframes)
        self._cached_keyframe = None

    @property
    def start_delay_progress(self):
        return self.keyframes[0].start_progress

    @property
    def end_progress(self):
        return self.keyframes[-1].end_progress

    def clamp_progress(self, progress):
        start = self.start_delay_progress
        end = self.end_progress
        if progress < start:
            return start
        if progress > end:
            return end
        return progress

    @property
    def current_keyframe(self):
        cached = self._cached_keyframe
        if cached is not None and cached.contains_progress(self.progress):
            return cached

        keyframe = self.keyframes[0]
        if self.progress < keyframe.start_progress:
            self._cached_keyframe = keyframe
            return keyframe

        for keyframe in self.keyframes:
            if keyframe.contains_progress(self.progress):
                break
        else:
            keyframe = self.keyframes[-1]
        self._cached_keyframe = keyframe
        return keyframe

    def interpolated_fraction(self, keyframe):
        if keyframe.is_static:
            return 0.
        span = keyframe.end_progress - keyframe.start_progress
        if span <= 0:
            return 0.
        linear = (self.progress - keyframe.start_progress) / span
        linear = min(max(linear, 0.), 1.)
        return keyframe.interpolator.get_interpolation(linear)

    def compute_value(self):
        keyframe = self.current_keyframe
        return self.get_value(keyframe, self.interpolated_fraction(keyframe))

    def get_value(self, keyframe, fraction):
        if keyframe.is_static or keyframe.end_value is None:
            return keyframe.start_value
        return interpolate(keyframe.start_value, keyframe.end_value, fraction)


class PathKeyframeAnimation(KeyframeAnimation):
    """Position keyframes that travel along a bezier between their values."""

    def __init__(self, keyframes):
        super().__init__(keyframes)
        self._paths = {}

    def _spatial_curve(self, keyframe):
        key = id(keyframe)
        if key not in self._paths:
            curve = None
            start, end = keyframe.start_value, keyframe.end_value
            if keyframe.path_out is not None and keyframe.path_in is not None and end is not None \
                    and not start.is_close(end) \
                    and (keyframe.path_out.length() > 0 or keyframe.path_in.length() > 0):
                curve = CubicSegment(
                    start.components,
                    (start + keyframe.path_out).components,
                    (end + keyframe.path_in).components,
                    end.components,
                )
            self._paths[key] = curve
        return self._paths[key]

    def get_value(self, keyframe, fraction):
        curve = None if keyframe.is_static else self._spatial_curve(keyframe)
        if curve is None:
            return super().get_value(keyframe, fraction)
        length = curve.length()
        point = curve.point_at(curve.t_at_length(fraction * length))
        return NVector.from_array(np.array(point))


class TextKeyframeAnimation(KeyframeAnimation):
    """Text documents snap between keyframes."""

    def get_value(self, keyframe, fraction):
        return keyframe.start_value


class SplitDimensionPathKeyframeAnimation(BaseKeyframeAnimation):
    def __init__(self, x_animation, y_animation):
        super().__init__()
        self.x_animation = x_animation
        self.y_animation = y_animation

    def set_progress(self, progress):
        self.x_animation.set_progress(progress)
        self.y_animation.set_progress(progress)
        super().set_progress(progress)

    def compute_value(self):
        return NVector(self.x_animation.value, self.y_animation.value)


def create_animation(value):
    """Materializes a parsed animatable value into live interpolation state."""
    if isinstance(value, animatable.AnimatableSplitDimensionPathValue):
        return SplitDimensionPathKeyframeAnimation(create_animation(value.x), create_animation(value.y))
    if not value.is_animated:
        return StaticKeyframeAnimation(value.constant)
    if isinstance(value, AnimatableTextValue):
        return TextKeyframeAnimation(value.keyframes)
    if isinstance(value, animatable.AnimatablePathValue):
        return PathKeyframeAnimation(value.keyframes)
    return KeyframeAnimation(value.keyframes)


class TransformKeyframeAnimation:
    """Live counterpart of ``AnimatableTransform``; produces matrices and opacity."""

    def __init__(self, transform):
        self.anchor_point = create_animation(transform.anchor_point)
        self.position = create_animation(transform.position)
        self.scale = create_animation(transform.scale)
        self.rotation = create_animation(transform.rotation)
        self.opacity = create_animation(transform.opacity)
        self.skew = create_animation(transform.skew) if transform.skew is not None else None
        self.skew_angle = create_animation(transform.skew_angle) if transform.skew_angle is not None else None

    @property
    def animations(self):
        return [
            anim for anim in (
                self.anchor_point, self.position, self.scale, self.rotation,
                self.opacity, self.skew, self.skew_angle,
            )
            if anim is not None
        ]

    def add_animations_to(self, owner):
        for anim in self.animations:
            owner.add_animation(anim)

    def add_listener(self, callback):
        for anim in self.animations:
            anim.add_listener(callback)

    def remove_listener(self, callback):
        for anim in self.animations:
            anim.remove_listener(callback)

    def set_progress(self, progress):
        for anim in self.animations:
            anim.set_progress(progress)

    @property
    def matrix(self):
        matrix = TransformMatrix()
        anchor = self.anchor_point.value
        if anchor.x != 0 or anchor.y != 0:
            matrix.translate(-anchor.x, -anchor.y)
        scale = self.scale.value
        if scale.x != 1 or scale.y != 1:
            matrix.scale(scale.x, scale.y)
        if self.skew is not None and self.skew.value:
            matrix.skew_from_axis(-math.radians(self.skew.value), math.radians(self.skew_angle.value or 0))
        rotation = self.rotation.value
        if rotation:
            matrix.rotate(math.radians(rotation))
        position = self.position.value
        if position.x != 0 or position.y != 0:
            matrix.translate(position.x, position.y)
        return matrix

    def matrix_for_repeater(self, amount):
        position = self.position.value
        anchor = self.anchor_point.value
        scale = self.scale.value
        rotation = self.rotation.value

        matrix = TransformMatrix()
        matrix.translate(-anchor.x, -anchor.y)
        matrix.rotate(math.radians(rotation * amount))
        matrix.translate(anchor.x, anchor.y)
        matrix.scale(math.pow(scale.x, amount), math.pow(scale.y, amount))
        matrix.translate(position.x * amount, position.y * amount)
        return matrix
