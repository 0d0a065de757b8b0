"""Shape aggregates: outlines bundled with their shape-specific parameters.

Units are eye space: the eye is centered at the origin, +Y up. Iris and
pupil outlines are unit-sized and scaled by the side's radius at render time.
"""

from dataclasses import dataclass, field

from eyesculpt.eyes.eyebrow import EyebrowGuide, EyebrowOutline
from eyesculpt.eyes.outline import BezierOutline

# Closed-slit geometry shared by every EyeShape
CLOSED_HALF_WIDTH = 0.20
CLOSED_Y = -0.20

BROW_COLOR = (0.0090, 0.0090, 0.0350)


def _default_open() -> BezierOutline:
    return BezierOutline.ellipse(0.28, 0.35)


@dataclass
class EyeShape:
    """Open and closed sclera outlines; the renderer blends by eyelid_close.

    close_arch < 0 dips the closed lids below the corners (reverse arch),
    close_arch > 0 curves them above (smile arch).
    """
    open: BezierOutline = field(default_factory=_default_open)
    closed: BezierOutline = None
    close_arch: float = -0.015

    def __post_init__(self):
        if self.closed is None:
            self.update_closed()

    def update_closed(self):
        """Regenerate the closed outline from close_arch."""
        self.closed = BezierOutline.closed_slit_asymmetric(
            CLOSED_HALF_WIDTH, CLOSED_Y, self.close_arch)


def _default_brow() -> EyebrowOutline:
    return EyebrowOutline.eyebrow_arc(0.27, 0.016, tip_thickness=0.004, arch=0.065)


@dataclass
class EyebrowShape:
    outline: EyebrowOutline = field(default_factory=_default_brow)
    # Stroke half-thickness at the left tip, center and right tip
    thickness: tuple = (0.004, 0.031, 0.004)
    tip_round: tuple = (True, True)
    # Y offset above the eye center; effective y = base_y - eyelid_close * follow
    base_y: float = 0.48
    follow: float = 0.15
    color: tuple = BROW_COLOR

    @property
    def guide(self) -> EyebrowGuide:
        """Editing spine, always derived from the current outline."""
        return EyebrowGuide.from_outline(self.outline)


@dataclass
class IrisShape:
    outline: BezierOutline = field(default_factory=lambda: BezierOutline.circle(1.0))


@dataclass
class PupilShape:
    outline: BezierOutline = field(default_factory=lambda: BezierOutline.circle(1.0))


@dataclass
class EyelashShape:
    """Stroke along the upper edge of the eye outline."""
    color: tuple = BROW_COLOR
    thickness: float = 0.020
