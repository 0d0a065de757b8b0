"""Per-frame orchestration of editing, linking and animation for an eye pair."""

import logging

from eyesculpt.config import Config
from eyesculpt.editor.input import FrameInput
from eyesculpt.editor.layers import GuideLayer, OutlineLayer
from eyesculpt.editor.modal import ModalEditor
from eyesculpt.editor.state import EditorStates
from eyesculpt.editor.view import ScreenView
from eyesculpt.eyes.animator import EyeAnimator
from eyesculpt.eyes.eye_side import Side, apply_links
from eyesculpt.preset import EyePreset

log = logging.getLogger("eyesculpt")

# Editable layer name -> linked section it belongs to
LAYER_SECTIONS = {
    "eye_open": "shape",
    "eye_closed": "shape",
    "iris": "iris",
    "pupil": "iris",
    "eyebrow": "eyebrow",
    "eyebrow_guide": "eyebrow",
}


class Session:
    """Owns the eye pair, one EditorState per (side, layer) and the animator."""

    def __init__(self, config: Config = None, preset: EyePreset = None):
        self.config = config or Config()
        self.preset = preset or EyePreset()
        self.editors = EditorStates()
        self._modal = ModalEditor(self.config.editor, self.config.keys)
        self._animator = EyeAnimator(self.config.animation)

    @property
    def animator(self) -> EyeAnimator:
        return self._animator

    def side(self, side: Side):
        return self.preset.left if side is Side.LEFT else self.preset.right

    def layer(self, side: Side, name: str):
        """Edit target for one of the LAYER_SECTIONS layers of a side."""
        s = self.side(side)
        if name == "eye_open":
            return OutlineLayer(s.eye_shape.open)
        if name == "eye_closed":
            return OutlineLayer(s.eye_shape.closed)
        if name == "iris":
            return OutlineLayer(s.iris_shape.outline)
        if name == "pupil":
            return OutlineLayer(s.pupil_shape.outline)
        if name == "eyebrow":
            return OutlineLayer(s.eyebrow_shape.outline)
        if name == "eyebrow_guide":
            return GuideLayer(s.eyebrow_shape)
        raise KeyError(f"unknown layer: {name}")

    def edit(self, side: Side, name: str, frame: FrameInput, view: ScreenView) -> bool:
        """Feed one frame of input to the editor widget for (side, layer)."""
        state = self.editors.get((side, name))
        changed = self._modal.update(state, self.layer(side, name), frame, view)
        if changed:
            self._sync_section(side, LAYER_SECTIONS[name])
        return changed

    def _sync_section(self, side: Side, section: str):
        """Make `side` the source of a linked section and copy it across."""
        link = self.preset.links[section]
        if link.linked:
            link.active = side
            apply_links(self.preset.left, self.preset.right, {section: link})

    def close_editor(self, side: Side, name: str):
        self.editors.discard((side, name))

    def set_close_arch(self, side: Side, arch: float):
        """Change the closed-lid arch and regenerate the closed outline."""
        shape = self.side(side).eye_shape
        shape.close_arch = arch
        shape.update_closed()
        self._sync_section(side, "shape")
        log.debug(f"close_arch={arch} on {side.value}")

    def frame(self, t: float, gaze_target: tuple | None = None) -> dict:
        """Advance animation to time t and return per-side renderer payloads."""
        left_frame, right_frame = self._animator.update(
            t, self.preset.left, self.preset.right, self.preset.settings, gaze_target)
        return {
            "left": self.preset.left.uniforms(left_frame),
            "right": self.preset.right.uniforms(right_frame),
            "bg_color": tuple(self.preset.settings.bg_color),
        }
