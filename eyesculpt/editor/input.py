from dataclasses import dataclass, field


@dataclass(frozen=True)
class FrameInput:
    """Input polled by the host once per frame. Positions are screen pixels."""

    pointer: tuple = (0.0, 0.0)
    primary_pressed: bool = False    # went down this frame
    primary_down: bool = False       # held
    primary_released: bool = False   # went up this frame
    keys_pressed: frozenset = field(default_factory=frozenset)
    shift: bool = False

    def key(self, name: str) -> bool:
        return name in self.keys_pressed
