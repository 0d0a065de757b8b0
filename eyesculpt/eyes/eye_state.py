from dataclasses import dataclass


@dataclass
class EyeFrame:
    """Animated values of one eye for a single frame."""

    # Eyelid closure: 0.0 = open outline, 1.0 = closed outline
    eyelid_close: float = 0.0

    # Gaze: 0.0 = center, -1.0..1.0 range (+y up)
    look_x: float = 0.0
    look_y: float = 0.0

    # Eyebrow vertical offset above the eye center
    eyebrow_y: float = 0.0

    # Squash/stretch applied to the whole eye (1.0 = none)
    scale_x: float = 1.0
    scale_y: float = 1.0

    is_left: bool = True
