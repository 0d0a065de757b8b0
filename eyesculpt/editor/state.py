"""Per-editor interaction state.

Modes are frozen variants; a transition replaces the whole variant so no
field from a previous mode can leak into the next one.
"""

from dataclasses import dataclass, field

from eyesculpt.editor.selection import Hit
from eyesculpt.editor.transform import Axis


# --- Modes ---

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Grab:
    selected: frozenset
    snapshot: tuple
    origin: tuple           # pointer at entry, screen pixels


@dataclass(frozen=True)
class Scale:
    selected: frozenset
    snapshot: tuple
    pivot: tuple            # screen-space selection centroid
    initial_dist: float
    axis: Axis = Axis.NONE


@dataclass(frozen=True)
class Rotate:
    selected: frozenset
    snapshot: tuple
    pivot: tuple
    initial_angle: float


TRANSFORM_MODES = (Grab, Scale, Rotate)


# --- Idle pointer actions (primary button held) ---

@dataclass(frozen=True)
class PendingPress:
    """Button went down; not yet a click or a drag."""
    start: tuple
    hit: Hit | None
    shift: bool


@dataclass(frozen=True)
class AnchorDrag:
    index: int
    offset: tuple           # anchor minus pointer at drag start, outline space


@dataclass(frozen=True)
class HandleDrag:
    index: int
    which: str


@dataclass(frozen=True)
class BoxSelect:
    start: tuple
    current: tuple


@dataclass
class EditorState:
    """Owned by one editor widget and kept across frames."""
    selection: set = field(default_factory=set)
    mode: object = field(default_factory=Idle)
    action: object = None
    # Set when a click confirmed a transform so its release does not re-select
    suppress_click: bool = False

    @property
    def transforming(self) -> bool:
        return isinstance(self.mode, TRANSFORM_MODES)


class EditorStates:
    """Explicit map from a stable editor key to its EditorState.

    The host owns one of these and passes the looked-up state to the editor
    every frame; keys are typically (side, layer name).
    """

    def __init__(self):
        self._states: dict = {}

    def __contains__(self, key):
        return key in self._states

    def __len__(self):
        return len(self._states)

    def get(self, key) -> EditorState:
        state = self._states.get(key)
        if state is None:
            state = EditorState()
            self._states[key] = state
        return state

    def discard(self, key):
        """Forget the state of a widget that no longer exists."""
        self._states.pop(key, None)
