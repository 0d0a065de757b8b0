"""Edit targets for the modal editor.

A layer exposes a fixed set of editable anchors and owns how edits reach the
authoritative outline. Snapshots always hold the full authoritative anchor
array so a cancel restores the outline verbatim.
"""

from eyesculpt.eyes.eyebrow import EyebrowGuide, EyebrowOutline
from eyesculpt.eyes.outline import ClosedOutline
from eyesculpt.eyes.shapes import EyebrowShape
from eyesculpt.utils.math_helpers import sub

HANDLE_IN = "in"
HANDLE_OUT = "out"


class OutlineLayer:
    """Edits the anchors of an outline directly."""

    supports_handles = True

    def __init__(self, outline: ClosedOutline):
        self.outline = outline

    def __len__(self):
        return len(self.outline.anchors)

    def anchors(self) -> list:
        return self.outline.anchors

    def snapshot(self) -> tuple:
        return tuple(a.copy() for a in self.outline.anchors)

    def restore(self, snapshot: tuple):
        self.outline.anchors = [a.copy() for a in snapshot]

    def editable_from(self, snapshot: tuple) -> list:
        """Editable anchors as they were when `snapshot` was taken."""
        return list(snapshot)

    def write(self, snapshot: tuple, updates: dict):
        """Reset to `snapshot`, then replace the anchors named in `updates`."""
        self.restore(snapshot)
        for i, anchor in updates.items():
            self.outline.anchors[i] = anchor

    def move_anchor(self, i: int, position: tuple, smart_handles: bool):
        self.outline.anchors[i].position = position
        if smart_handles:
            self.outline.auto_adjust_handle_at(i)

    def set_handle(self, i: int, which: str, offset: tuple):
        anchor = self.outline.anchors[i]
        if which == HANDLE_IN:
            anchor.set_handle_in(offset)
        else:
            anchor.set_handle_out(offset)


class GuideLayer:
    """Edits an eyebrow through its three-point guide.

    Every guide position change becomes a propagate_delta on the paired
    outline anchors; the guide itself is re-derived from the outline on read.
    """

    supports_handles = False

    def __init__(self, shape: EyebrowShape):
        self.shape = shape

    def __len__(self):
        return len(self.shape.guide.anchors)

    def anchors(self) -> list:
        return self.shape.guide.anchors

    def snapshot(self) -> tuple:
        return tuple(a.copy() for a in self.shape.outline.anchors)

    def restore(self, snapshot: tuple):
        self.shape.outline = EyebrowOutline([a.copy() for a in snapshot])

    def editable_from(self, snapshot: tuple) -> list:
        outline = EyebrowOutline([a.copy() for a in snapshot])
        return EyebrowGuide.from_outline(outline).anchors

    def write(self, snapshot: tuple, updates: dict):
        self.restore(snapshot)
        base = self.editable_from(snapshot)
        for gi, anchor in updates.items():
            delta = sub(anchor.position, base[gi].position)
            EyebrowGuide.propagate_delta(gi, delta, self.shape.outline)

    def move_anchor(self, gi: int, position: tuple, smart_handles: bool):
        current = self.shape.guide.anchors[gi].position
        EyebrowGuide.propagate_delta(gi, sub(position, current), self.shape.outline)

    def set_handle(self, gi: int, which: str, offset: tuple):
        raise TypeError("guide handles are derived and cannot be edited")

