"""Persist the sculpted eye pair (shapes, colors, settings, links) as JSON.

The file layout is described by pydantic record models. A malformed record
is rejected as a whole with PresetFormatError naming the first offending
field; nothing is partially applied.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

from pydantic import (
    BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, StrictInt,
    ValidationError, field_validator,
)

from eyesculpt.eyes.anchor import BezierAnchor
from eyesculpt.eyes.eye_side import (
    EyeSide, GlobalSettings, SectionLink, Side, default_links,
)
from eyesculpt.eyes.eyebrow import EyebrowOutline
from eyesculpt.eyes.outline import BezierOutline
from eyesculpt.eyes.shapes import (
    EyeShape, EyebrowShape, EyelashShape, IrisShape, PupilShape,
)

log = logging.getLogger("eyesculpt")

CURRENT_VERSION = 1

# Optional eyebrow fields, filled in when older presets lack them
DEFAULT_BROW_THICKNESS = (0.004, 0.031, 0.004)
DEFAULT_TIP_ROUND = (True, True)


class PresetError(Exception):
    """A preset file could not be read or written."""


class PresetFormatError(PresetError):
    """A preset record has a missing field or a field of the wrong shape."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


@dataclass
class EyePreset:
    left: EyeSide = field(default_factory=EyeSide)
    right: EyeSide = field(default_factory=EyeSide)
    settings: GlobalSettings = field(default_factory=GlobalSettings)
    links: dict = field(default_factory=default_links)
    version: int = CURRENT_VERSION


# --- Record models ---

def _reject_bool(v):
    # JSON true/false would otherwise pass as 1.0/0.0
    if isinstance(v, bool):
        raise ValueError(f"expected a number, got {v!r}")
    return v


Number = Annotated[float, BeforeValidator(_reject_bool)]
Vec2 = tuple[Number, Number]
Vec3 = tuple[Number, Number, Number]


class AnchorRecord(BaseModel):
    position: Vec2
    handle_in: Vec2
    handle_out: Vec2


class OutlineRecord(BaseModel):
    anchors: list[AnchorRecord] = Field(min_length=BezierOutline.ANCHOR_COUNT,
                                        max_length=BezierOutline.ANCHOR_COUNT)


class EyebrowOutlineRecord(BaseModel):
    anchors: list[AnchorRecord] = Field(min_length=EyebrowOutline.ANCHOR_COUNT,
                                        max_length=EyebrowOutline.ANCHOR_COUNT)


class EyeShapeRecord(BaseModel):
    open: OutlineRecord
    closed: OutlineRecord
    close_arch: Number


class EyebrowShapeRecord(BaseModel):
    outline: EyebrowOutlineRecord
    thickness: Vec3 = DEFAULT_BROW_THICKNESS
    tip_round: tuple[StrictBool, StrictBool] = DEFAULT_TIP_ROUND
    base_y: Number
    follow: Number
    color: Vec3


class EyelashShapeRecord(BaseModel):
    color: Vec3
    thickness: Number


class EyeSideRecord(BaseModel):
    sclera_color: Vec3
    iris_color: Vec3
    pupil_color: Vec3
    eyelid_close: Number
    iris_radius: Number
    iris_follow: Number
    pupil_radius: Number
    highlight_offset: Vec2
    highlight_radius: Number
    highlight_intensity: Number
    look_x: Number
    look_y: Number
    eye_shape: EyeShapeRecord
    eyebrow_shape: EyebrowShapeRecord
    eyelash_shape: EyelashShapeRecord
    iris_shape: OutlineRecord
    pupil_shape: OutlineRecord


class GlobalRecord(BaseModel):
    bg_color: Vec3
    eye_separation: Number
    max_angle: Number
    eye_angle: Number
    focus_distance: Number
    auto_blink: StrictBool
    follow_mouse: StrictBool
    show_highlight: StrictBool
    show_eyebrow: StrictBool
    show_eyelash: StrictBool


class LinkRecord(BaseModel):
    linked: StrictBool
    # "left" or "right"; anything else falls back to the left side
    active: str


class LinksRecord(BaseModel):
    shape: LinkRecord
    iris: LinkRecord
    eyebrow: LinkRecord
    eyelash: LinkRecord


class PresetRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: StrictInt
    left: EyeSideRecord
    right: EyeSideRecord
    settings: GlobalRecord = Field(alias="global")
    links: LinksRecord

    @field_validator("version")
    @classmethod
    def check_version(cls, v: int) -> int:
        if v != CURRENT_VERSION:
            raise ValueError(f"unsupported version {v}")
        return v


# --- Runtime -> record ---

def _anchor_record(a: BezierAnchor) -> AnchorRecord:
    return AnchorRecord(position=a.position, handle_in=a.handle_in, handle_out=a.handle_out)


def _outline_record(outline, model=OutlineRecord):
    return model(anchors=[_anchor_record(a) for a in outline.anchors])


def _side_record(s: EyeSide) -> EyeSideRecord:
    brow = s.eyebrow_shape
    return EyeSideRecord(
        sclera_color=s.sclera_color,
        iris_color=s.iris_color,
        pupil_color=s.pupil_color,
        eyelid_close=s.eyelid_close,
        iris_radius=s.iris_radius,
        iris_follow=s.iris_follow,
        pupil_radius=s.pupil_radius,
        highlight_offset=s.highlight_offset,
        highlight_radius=s.highlight_radius,
        highlight_intensity=s.highlight_intensity,
        look_x=s.look_x,
        look_y=s.look_y,
        eye_shape=EyeShapeRecord(
            open=_outline_record(s.eye_shape.open),
            closed=_outline_record(s.eye_shape.closed),
            close_arch=s.eye_shape.close_arch,
        ),
        eyebrow_shape=EyebrowShapeRecord(
            outline=_outline_record(brow.outline, EyebrowOutlineRecord),
            thickness=brow.thickness,
            tip_round=brow.tip_round,
            base_y=brow.base_y,
            follow=brow.follow,
            color=brow.color,
        ),
        eyelash_shape=EyelashShapeRecord(
            color=s.eyelash_shape.color,
            thickness=s.eyelash_shape.thickness,
        ),
        iris_shape=_outline_record(s.iris_shape.outline),
        pupil_shape=_outline_record(s.pupil_shape.outline),
    )


def to_dict(preset: EyePreset) -> dict:
    g = preset.settings
    record = PresetRecord(
        version=preset.version,
        left=_side_record(preset.left),
        right=_side_record(preset.right),
        settings=GlobalRecord(
            bg_color=g.bg_color,
            eye_separation=g.eye_separation,
            max_angle=g.max_angle,
            eye_angle=g.eye_angle,
            focus_distance=g.focus_distance,
            auto_blink=g.auto_blink,
            follow_mouse=g.follow_mouse,
            show_highlight=g.show_highlight,
            show_eyebrow=g.show_eyebrow,
            show_eyelash=g.show_eyelash,
        ),
        links=LinksRecord(**{
            name: LinkRecord(linked=link.linked, active=link.active.value)
            for name, link in preset.links.items()
        }),
    )
    return record.model_dump(mode="json", by_alias=True)


# --- Record -> runtime ---

def _outline(record, cls):
    return cls([BezierAnchor(a.position, a.handle_in, a.handle_out) for a in record.anchors])


def _side(r: EyeSideRecord) -> EyeSide:
    brow = r.eyebrow_shape
    return EyeSide(
        sclera_color=r.sclera_color,
        iris_color=r.iris_color,
        pupil_color=r.pupil_color,
        eyelid_close=r.eyelid_close,
        iris_radius=r.iris_radius,
        iris_follow=r.iris_follow,
        pupil_radius=r.pupil_radius,
        highlight_offset=r.highlight_offset,
        highlight_radius=r.highlight_radius,
        highlight_intensity=r.highlight_intensity,
        look_x=r.look_x,
        look_y=r.look_y,
        eye_shape=EyeShape(
            open=_outline(r.eye_shape.open, BezierOutline),
            closed=_outline(r.eye_shape.closed, BezierOutline),
            close_arch=r.eye_shape.close_arch,
        ),
        eyebrow_shape=EyebrowShape(
            outline=_outline(brow.outline, EyebrowOutline),
            thickness=brow.thickness,
            tip_round=brow.tip_round,
            base_y=brow.base_y,
            follow=brow.follow,
            color=brow.color,
        ),
        eyelash_shape=EyelashShape(
            color=r.eyelash_shape.color,
            thickness=r.eyelash_shape.thickness,
        ),
        iris_shape=IrisShape(_outline(r.iris_shape, BezierOutline)),
        pupil_shape=PupilShape(_outline(r.pupil_shape, BezierOutline)),
    )


def _settings(r: GlobalRecord) -> GlobalSettings:
    return GlobalSettings(**r.model_dump())


def _links(r: LinksRecord) -> dict:
    return {
        name: SectionLink(
            linked=link.linked,
            active=Side.RIGHT if link.active == "right" else Side.LEFT,
        )
        for name, link in r
    }


def _error_path(loc: tuple) -> str:
    """("left", "iris_shape", "anchors", 2) -> "preset.left.iris_shape.anchors[2]"."""
    path = "preset"
    for part in loc:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


def from_dict(data) -> EyePreset:
    """Build an EyePreset from a record. Raises PresetFormatError."""
    try:
        record = PresetRecord.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        raise PresetFormatError(_error_path(first["loc"]), first["msg"]) from e
    return EyePreset(
        left=_side(record.left),
        right=_side(record.right),
        settings=_settings(record.settings),
        links=_links(record.links),
        version=record.version,
    )


# --- Files ---

def load_preset(path) -> EyePreset:
    """Read a preset file. Raises PresetError (or PresetFormatError)."""
    try:
        with open(Path(path)) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise PresetError(f"Could not read preset {path}: {e}") from e
    preset = from_dict(data)
    log.info(f"Loaded preset from {path}")
    return preset


def save_preset(path, preset: EyePreset) -> bool:
    """Write a preset file. Returns False (and logs) if it cannot be written."""
    try:
        with open(Path(path), "w") as f:
            json.dump(to_dict(preset), f, indent=2)
    except OSError as e:
        log.warning(f"Could not save preset file: {e}")
        return False
    log.info(f"Saved preset to {path}")
    return True
