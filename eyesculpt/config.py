from dataclasses import dataclass, field
from pathlib import Path
import yaml

from eyesculpt.eyes.animation import BlinkAnimation


class ConfigError(Exception):
    """Config file could not be parsed or holds invalid values."""


@dataclass
class EditorConfig:
    pick_radius_px: float = 10.0
    drag_threshold_px: float = 4.0
    smart_handles: bool = True


@dataclass
class KeyBindings:
    grab: str = "g"
    scale: str = "s"
    rotate: str = "r"
    axis_x: str = "x"
    axis_y: str = "y"
    cancel: str = "escape"
    select_all: str = "a"


@dataclass
class AnimationConfig:
    pursuit_smoothing: float = 0.15
    squash_gain: float = 0.04
    squash_max: float = 0.12
    blink_period: float = 3.0
    # None = built-in sample blink; otherwise a list of {time, value, easing}
    keyframes: list = None


@dataclass
class ViewConfig:
    pixels_per_unit: float = 400.0


@dataclass
class Config:
    editor: EditorConfig = field(default_factory=EditorConfig)
    keys: KeyBindings = field(default_factory=KeyBindings)
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    view: ViewConfig = field(default_factory=ViewConfig)
    preset_path: str = "eye_preset.json"
    log_level: str = "INFO"


def load_config(path: str = "config.yaml") -> Config:
    """Load config from YAML file, falling back to defaults for missing keys.

    Raises ConfigError if the file is not valid YAML or the blink keyframes
    are malformed.
    """
    config = Config()
    config_path = Path(path)

    if not config_path.exists():
        return config

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e

    if "editor" in data:
        e = data["editor"]
        config.editor = EditorConfig(
            pick_radius_px=e.get("pick_radius_px", config.editor.pick_radius_px),
            drag_threshold_px=e.get("drag_threshold_px", config.editor.drag_threshold_px),
            smart_handles=e.get("smart_handles", config.editor.smart_handles),
        )

    if "keys" in data:
        k = data["keys"]
        config.keys = KeyBindings(
            grab=k.get("grab", config.keys.grab),
            scale=k.get("scale", config.keys.scale),
            rotate=k.get("rotate", config.keys.rotate),
            axis_x=k.get("axis_x", config.keys.axis_x),
            axis_y=k.get("axis_y", config.keys.axis_y),
            cancel=k.get("cancel", config.keys.cancel),
            select_all=k.get("select_all", config.keys.select_all),
        )

    if "animation" in data:
        a = data["animation"]
        config.animation = AnimationConfig(
            pursuit_smoothing=a.get("pursuit_smoothing", config.animation.pursuit_smoothing),
            squash_gain=a.get("squash_gain", config.animation.squash_gain),
            squash_max=a.get("squash_max", config.animation.squash_max),
            blink_period=a.get("blink_period", config.animation.blink_period),
            keyframes=a.get("keyframes", config.animation.keyframes),
        )
        if config.animation.keyframes:
            try:
                BlinkAnimation.from_list(config.animation.keyframes,
                                         config.animation.blink_period)
            except (ValueError, TypeError) as e:
                raise ConfigError(f"{path}: animation.keyframes: {e}") from e

    if "view" in data:
        config.view = ViewConfig(
            pixels_per_unit=data["view"].get("pixels_per_unit", config.view.pixels_per_unit),
        )

    if "preset" in data:
        config.preset_path = data["preset"].get("path", config.preset_path)

    if "logging" in data:
        config.log_level = data["logging"].get("level", config.log_level)

    return config
