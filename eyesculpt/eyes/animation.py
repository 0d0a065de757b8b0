"""Looping keyframe animation for eyelid closure."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, TypeAdapter

# Segments shorter than this snap to the destination value
SEGMENT_EPSILON = 1e-7

# Step for the central-difference velocity estimate (seconds)
VELOCITY_STEP = 1.0 / 240.0


class Easing(Enum):
    LINEAR = "linear"
    EASE_IN = "ease_in"
    EASE_OUT = "ease_out"
    EASE_IN_OUT = "ease_in_out"

    def apply(self, t: float) -> float:
        if self is Easing.EASE_IN:
            return t * t
        if self is Easing.EASE_OUT:
            return 1.0 - (1.0 - t) * (1.0 - t)
        if self is Easing.EASE_IN_OUT:
            if t < 0.5:
                return 2.0 * t * t
            return 1.0 - (-2.0 * t + 2.0) ** 2 / 2.0
        return t


@dataclass(frozen=True)
class Keyframe:
    time: float
    value: float
    # Easing of the segment that arrives at this keyframe
    easing: Easing = Easing.LINEAR


class KeyframeRecord(BaseModel):
    """One keyframe as written in config files."""
    model_config = ConfigDict(extra="forbid")

    time: float
    value: float
    easing: Easing = Easing.LINEAR


_KEYFRAME_RECORDS = TypeAdapter(list[KeyframeRecord])


class BlinkAnimation:
    """Keyframe table sampled periodically with per-segment easing."""

    def __init__(self, keyframes, period: float):
        keyframes = list(keyframes)
        if not keyframes:
            raise ValueError("BlinkAnimation needs at least one keyframe")
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        for prev, nxt in zip(keyframes, keyframes[1:]):
            if nxt.time < prev.time:
                raise ValueError(f"keyframe times must not decrease ({prev.time} > {nxt.time})")
        if keyframes[-1].time > period:
            raise ValueError(f"last keyframe at {keyframes[-1].time}s is past period {period}s")
        self.keyframes = keyframes
        self.period = period

    @classmethod
    def sample(cls) -> "BlinkAnimation":
        """Default 3 s loop: rest, double blink, rest, lazy half squint, rest."""
        return cls([
            Keyframe(0.00, 0.20),
            Keyframe(1.00, 0.20),
            Keyframe(1.12, 1.00, Easing.EASE_IN),
            Keyframe(1.22, 0.45, Easing.EASE_OUT),
            Keyframe(1.32, 1.00, Easing.EASE_IN),
            Keyframe(1.57, 0.20, Easing.EASE_IN_OUT),
            Keyframe(2.10, 0.20),
            Keyframe(2.20, 0.50, Easing.EASE_IN),
            Keyframe(2.40, 0.50),
            Keyframe(2.55, 0.20, Easing.EASE_OUT),
            Keyframe(3.00, 0.20),
        ], period=3.0)

    @classmethod
    def from_list(cls, records: list, period: float) -> "BlinkAnimation":
        """Build from [{"time": .., "value": .., "easing": "ease_in"}, ...].

        Raises pydantic.ValidationError (a ValueError) on malformed records.
        """
        keyframes = [
            Keyframe(r.time, r.value, r.easing)
            for r in _KEYFRAME_RECORDS.validate_python(records)
        ]
        return cls(keyframes, period)

    def evaluate(self, t: float) -> float:
        """Eyelid closure at absolute time t (seconds), looping every period."""
        loop_t = t % self.period
        if loop_t >= self.period:
            # float modulo of a tiny negative t can round up to period
            loop_t = 0.0

        next_idx = None
        for i, kf in enumerate(self.keyframes):
            if kf.time > loop_t:
                next_idx = i
                break

        if next_idx is None:
            # Hold the final value until wraparound
            return self.keyframes[-1].value
        if next_idx == 0:
            return self.keyframes[0].value

        prev = self.keyframes[next_idx - 1]
        nxt = self.keyframes[next_idx]
        duration = nxt.time - prev.time
        if duration < SEGMENT_EPSILON:
            return nxt.value

        raw_t = (loop_t - prev.time) / duration
        eased = nxt.easing.apply(raw_t)
        return prev.value + (nxt.value - prev.value) * eased

    def velocity(self, t: float, step: float = VELOCITY_STEP) -> float:
        """Rate of change of closure (units per second) around t."""
        return (self.evaluate(t + step) - self.evaluate(t - step)) / (2.0 * step)
