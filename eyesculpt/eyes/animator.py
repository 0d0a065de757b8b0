import math

from eyesculpt.config import AnimationConfig
from eyesculpt.eyes.animation import BlinkAnimation
from eyesculpt.eyes.eye_side import EyeSide, GlobalSettings
from eyesculpt.eyes.eye_state import EyeFrame
from eyesculpt.utils.math_helpers import lerp, clamp


def build_blink(config: AnimationConfig) -> BlinkAnimation:
    """Blink from configured keyframes, or the built-in sample loop."""
    if config.keyframes:
        return BlinkAnimation.from_list(config.keyframes, config.blink_period)
    return BlinkAnimation.sample()


class EyeAnimator:
    """Produces animated EyeFrame pairs each frame from time and gaze input."""

    def __init__(self, config: AnimationConfig, blink: BlinkAnimation = None):
        self._cfg = config
        self._blink = blink if blink is not None else build_blink(config)

        self._left = EyeFrame(is_left=True)
        self._right = EyeFrame(is_left=False)

        # Smoothed shared gaze, -1..1 per axis
        self._current_gaze = (0.0, 0.0)

    @property
    def blink(self) -> BlinkAnimation:
        return self._blink

    def squash_stretch(self, velocity: float) -> tuple:
        """(scale_x, scale_y) for an eyelid moving at `velocity` closure/sec.

        Closing squashes the eye vertically, opening stretches it; the
        horizontal scale compensates so the area stays constant.
        """
        s = clamp(velocity * self._cfg.squash_gain,
                  -self._cfg.squash_max, self._cfg.squash_max)
        scale_y = 1.0 - s
        return (1.0 / scale_y, scale_y)

    def update(self, t: float, left: EyeSide, right: EyeSide,
               settings: GlobalSettings, gaze_target: tuple | None) -> tuple[EyeFrame, EyeFrame]:
        """Update animation. gaze_target is (x, y) in -1..1 or None."""
        if settings.follow_mouse and gaze_target is not None:
            target = gaze_target
        else:
            target = (0.0, 0.0)

        # Smooth pursuit toward target
        smoothing = self._cfg.pursuit_smoothing
        self._current_gaze = (
            lerp(self._current_gaze[0], target[0], smoothing),
            lerp(self._current_gaze[1], target[1], smoothing),
        )

        if settings.auto_blink:
            blink_close = self._blink.evaluate(t)
            scale_x, scale_y = self.squash_stretch(self._blink.velocity(t))
        else:
            blink_close = None
            scale_x, scale_y = 1.0, 1.0

        vergence = self._vergence(settings)

        for frame, side, sign in ((self._left, left, 1.0), (self._right, right, -1.0)):
            close = blink_close if blink_close is not None else side.eyelid_close
            frame.eyelid_close = clamp(close, 0.0, 1.0)
            frame.look_x = clamp(self._current_gaze[0] + side.look_x + sign * vergence, -1.0, 1.0)
            frame.look_y = clamp(self._current_gaze[1] + side.look_y, -1.0, 1.0)
            brow = side.eyebrow_shape
            frame.eyebrow_y = brow.base_y - frame.eyelid_close * brow.follow
            frame.scale_x = scale_x
            frame.scale_y = scale_y

        return (self._left, self._right)

    def _vergence(self, settings: GlobalSettings) -> float:
        """Inward gaze offset so both eyes converge on the focus distance."""
        if settings.focus_distance <= 0 or settings.max_angle <= 0:
            return 0.0
        angle = math.atan2(settings.eye_separation * 0.5, settings.focus_distance)
        return clamp(angle / settings.max_angle, 0.0, 1.0)
