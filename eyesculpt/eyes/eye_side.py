"""Per-eye sculpt state, global display settings and left/right section links."""

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum

from eyesculpt.eyes.eye_state import EyeFrame
from eyesculpt.eyes.shapes import (
    EyeShape, EyebrowShape, EyelashShape, IrisShape, PupilShape,
)

log = logging.getLogger("eyesculpt")


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass
class EyeSide:
    """Everything the user sculpts for one eye. Colors are linear RGB 0..1."""

    sclera_color: tuple = (0.95, 0.93, 0.90)
    iris_color: tuple = (0.25, 0.45, 0.75)
    pupil_color: tuple = (0.02, 0.02, 0.02)

    eyelid_close: float = 0.2
    iris_radius: float = 0.16
    iris_follow: float = 0.12
    pupil_radius: float = 0.07
    highlight_offset: tuple = (-0.04, 0.05)
    highlight_radius: float = 0.03
    highlight_intensity: float = 0.9
    look_x: float = 0.0
    look_y: float = 0.0

    eye_shape: EyeShape = field(default_factory=EyeShape)
    eyebrow_shape: EyebrowShape = field(default_factory=EyebrowShape)
    eyelash_shape: EyelashShape = field(default_factory=EyelashShape)
    iris_shape: IrisShape = field(default_factory=IrisShape)
    pupil_shape: PupilShape = field(default_factory=PupilShape)

    def uniforms(self, frame: EyeFrame) -> dict:
        """Values the renderer copies into its uniform buffer this frame."""
        return {
            "eye_open": self.eye_shape.open.to_uniform_array(),
            "eye_closed": self.eye_shape.closed.to_uniform_array(),
            "iris": self.iris_shape.outline.to_uniform_array(),
            "pupil": self.pupil_shape.outline.to_uniform_array(),
            "eyebrow": self.eyebrow_shape.outline.to_uniform_array(),
            "eyebrow_thickness": tuple(self.eyebrow_shape.thickness),
            "eyebrow_color": tuple(self.eyebrow_shape.color),
            "eyebrow_y": frame.eyebrow_y,
            "eyelash_color": tuple(self.eyelash_shape.color),
            "eyelash_thickness": self.eyelash_shape.thickness,
            "sclera_color": tuple(self.sclera_color),
            "iris_color": tuple(self.iris_color),
            "pupil_color": tuple(self.pupil_color),
            "iris_radius": self.iris_radius,
            "iris_follow": self.iris_follow,
            "pupil_radius": self.pupil_radius,
            "highlight_offset": tuple(self.highlight_offset),
            "highlight_radius": self.highlight_radius,
            "highlight_intensity": self.highlight_intensity,
            "eyelid_close": frame.eyelid_close,
            "look": (frame.look_x, frame.look_y),
            "scale": (frame.scale_x, frame.scale_y),
        }


@dataclass
class GlobalSettings:
    bg_color: tuple = (0.02, 0.02, 0.03)
    eye_separation: float = 0.7
    max_angle: float = 0.6         # radians of full-deflection gaze
    eye_angle: float = 0.0
    focus_distance: float = 4.0
    auto_blink: bool = True
    follow_mouse: bool = True
    show_highlight: bool = True
    show_eyebrow: bool = True
    show_eyelash: bool = True


@dataclass
class SectionLink:
    """When linked, the active side's section is copied onto the other side."""
    linked: bool = True
    active: Side = Side.LEFT


# Section name -> EyeSide fields it covers
SECTION_FIELDS = {
    "shape": ("eye_shape",),
    "iris": ("iris_shape", "pupil_shape", "iris_color", "pupil_color",
             "iris_radius", "iris_follow", "pupil_radius"),
    "eyebrow": ("eyebrow_shape",),
    "eyelash": ("eyelash_shape",),
}


def apply_links(left: EyeSide, right: EyeSide, links: dict):
    """Copy each linked section from its active side onto the other side."""
    for section, link in links.items():
        if not link.linked:
            continue
        if link.active is Side.LEFT:
            source, target = left, right
        else:
            source, target = right, left
        for name in SECTION_FIELDS[section]:
            setattr(target, name, copy.deepcopy(getattr(source, name)))
        log.debug(f"Linked section '{section}' copied from {link.active.value}")


def default_links() -> dict:
    return {name: SectionLink() for name in SECTION_FIELDS}
