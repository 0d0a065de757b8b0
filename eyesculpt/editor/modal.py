"""Blender-style modal transform engine.

State machine per editor:

    Idle ──(grab key)───> Grab   ─┐
         ──(scale key)──> Scale  ─┼─(click)──> Idle   keep result
         ──(rotate key)─> Rotate ─┘─(escape)─> Idle   restore snapshot

Entering a transform requires a non-empty selection and snapshots every
anchor of the layer. While a transform is active, each frame recomputes the
result from that snapshot and the current pointer only.

In Idle, the primary button drives selection: click picks the nearest anchor
or handle, shift-click toggles, dragging from empty space box-selects,
dragging an anchor moves it and dragging a handle re-aims it.
"""

import logging
import math
from dataclasses import replace

from eyesculpt.config import EditorConfig, KeyBindings
from eyesculpt.editor.input import FrameInput
from eyesculpt.editor.selection import ANCHOR, anchors_in_rect, pick
from eyesculpt.editor.state import (
    AnchorDrag, BoxSelect, EditorState, Grab, HandleDrag, Idle, PendingPress,
    Rotate, Scale,
)
from eyesculpt.editor.transform import (
    Axis, rotate_about_centroid, scale_about_centroid, scale_factors,
    selection_centroid, translate,
)
from eyesculpt.editor.view import ScreenView
from eyesculpt.utils.math_helpers import distance, sub

log = logging.getLogger("eyesculpt")

# Pivot distances are clamped to at least this many pixels
MIN_PIVOT_DIST = 1.0


class ModalEditor:
    """Stateless frame processor; all persistent state lives in EditorState."""

    def __init__(self, config: EditorConfig = None, keys: KeyBindings = None):
        self._cfg = config or EditorConfig()
        self._keys = keys or KeyBindings()

    def update(self, state: EditorState, layer, frame: FrameInput,
               view: ScreenView) -> bool:
        """Process one frame of input. Returns True if anchors changed."""
        if state.transforming:
            return self._update_transform(state, layer, frame, view)
        return self._update_idle(state, layer, frame, view)

    # --- Transform modes ---

    def begin(self, state: EditorState, layer, kind, pointer: tuple,
              view: ScreenView) -> bool:
        """Enter Grab, Scale or Rotate (pass the class). False if not allowed."""
        if state.transforming or not state.selection:
            return False
        selected = frozenset(state.selection)
        snapshot = layer.snapshot()

        if kind is Grab:
            state.mode = Grab(selected, snapshot, pointer)
        else:
            editable = layer.editable_from(snapshot)
            pivot = view.to_screen(selection_centroid(editable, selected))
            if kind is Scale:
                dist = max(distance(pointer, pivot), MIN_PIVOT_DIST)
                state.mode = Scale(selected, snapshot, pivot, dist)
            elif kind is Rotate:
                angle = math.atan2(pointer[1] - pivot[1], pointer[0] - pivot[0])
                state.mode = Rotate(selected, snapshot, pivot, angle)
            else:
                raise ValueError(f"not a transform mode: {kind!r}")

        state.action = None
        log.info(f"{kind.__name__} started on {len(selected)} anchor(s)")
        return True

    def cancel(self, state: EditorState, layer):
        """Restore every anchor from the snapshot and return to Idle."""
        if not state.transforming:
            return
        layer.restore(state.mode.snapshot)
        log.info(f"{type(state.mode).__name__} cancelled")
        state.mode = Idle()

    def _update_transform(self, state, layer, frame, view) -> bool:
        keys = self._keys
        if frame.key(keys.cancel):
            self.cancel(state, layer)
            return True

        mode = state.mode
        if isinstance(mode, Scale):
            if frame.key(keys.axis_x):
                mode = replace(mode, axis=Axis.NONE if mode.axis is Axis.X else Axis.X)
            if frame.key(keys.axis_y):
                mode = replace(mode, axis=Axis.NONE if mode.axis is Axis.Y else Axis.Y)
            if mode is not state.mode:
                log.debug(f"Scale axis: {mode.axis.value}")
                state.mode = mode

        self._apply(mode, layer, frame.pointer, view)

        if frame.primary_pressed:
            state.mode = Idle()
            # The confirming click's release must not reach click-to-select
            state.suppress_click = not frame.primary_released
            log.info(f"{type(mode).__name__} confirmed")
        return True

    def _apply(self, mode, layer, pointer: tuple, view: ScreenView):
        editable = layer.editable_from(mode.snapshot)
        if isinstance(mode, Grab):
            delta = sub(view.to_outline(pointer), view.to_outline(mode.origin))
            updates = translate(editable, mode.selected, delta)
        elif isinstance(mode, Scale):
            dist = max(distance(pointer, mode.pivot), MIN_PIVOT_DIST)
            sx, sy = scale_factors(dist / mode.initial_dist, mode.axis)
            updates = scale_about_centroid(editable, mode.selected, sx, sy)
        else:
            current = math.atan2(pointer[1] - mode.pivot[1], pointer[0] - mode.pivot[0])
            # Screen Y points down, outline Y points up
            angle = -(current - mode.initial_angle)
            updates = rotate_about_centroid(editable, mode.selected, angle)
        layer.write(mode.snapshot, updates)

    # --- Idle: commands and selection ---

    def _update_idle(self, state, layer, frame, view) -> bool:
        keys = self._keys
        if state.action is None:
            if frame.key(keys.select_all):
                self._toggle_select_all(state, layer)
            for key, kind in ((keys.grab, Grab), (keys.scale, Scale), (keys.rotate, Rotate)):
                if frame.key(key) and self.begin(state, layer, kind, frame.pointer, view):
                    return False

        changed = False
        if frame.primary_pressed:
            hit = pick(layer, view, frame.pointer, self._cfg.pick_radius_px)
            state.action = PendingPress(frame.pointer, hit, frame.shift)
        if state.action is not None and (frame.primary_down or frame.primary_released):
            changed = self._drag(state, layer, frame.pointer, view)
        if frame.primary_released:
            self._release(state, layer, view)
        return changed

    def _toggle_select_all(self, state, layer):
        if len(state.selection) == len(layer):
            state.selection.clear()
        else:
            state.selection = set(range(len(layer)))
        log.debug(f"Select all toggled: {len(state.selection)} selected")

    def _drag(self, state, layer, pointer, view) -> bool:
        action = state.action
        if isinstance(action, PendingPress):
            if distance(pointer, action.start) < self._cfg.drag_threshold_px:
                return False
            action = self._start_drag(state, layer, action, view)
            state.action = action

        if isinstance(action, BoxSelect):
            state.action = replace(action, current=pointer)
            return False
        if isinstance(action, AnchorDrag):
            target = view.to_outline(pointer)
            position = (target[0] + action.offset[0], target[1] + action.offset[1])
            layer.move_anchor(action.index, position, self._cfg.smart_handles)
            return True
        if isinstance(action, HandleDrag):
            anchor = layer.anchors()[action.index]
            layer.set_handle(action.index, action.which,
                             sub(view.to_outline(pointer), anchor.position))
            return True
        return False

    def _start_drag(self, state, layer, press: PendingPress, view):
        hit = press.hit
        if hit is None:
            return BoxSelect(press.start, press.start)
        if hit.index not in state.selection:
            if press.shift:
                state.selection.add(hit.index)
            else:
                state.selection = {hit.index}
        if hit.part == ANCHOR:
            anchor = layer.anchors()[hit.index]
            offset = sub(anchor.position, view.to_outline(press.start))
            return AnchorDrag(hit.index, offset)
        return HandleDrag(hit.index, hit.part)

    def _release(self, state, layer, view):
        action = state.action
        state.action = None
        if state.suppress_click:
            state.suppress_click = False
            return

        if isinstance(action, PendingPress):
            self._click(state, action)
        elif isinstance(action, BoxSelect):
            state.selection = anchors_in_rect(layer, view, action.start, action.current)
            log.debug(f"Box select: {sorted(state.selection)}")

    def _click(self, state, press: PendingPress):
        hit = press.hit
        if hit is None:
            if not press.shift:
                state.selection.clear()
            return
        if press.shift:
            state.selection ^= {hit.index}
        else:
            state.selection = {hit.index}
