"""Screen-space hit testing and box selection."""

from dataclasses import dataclass

from eyesculpt.editor.layers import HANDLE_IN, HANDLE_OUT
from eyesculpt.editor.view import ScreenView
from eyesculpt.utils.math_helpers import add, distance

ANCHOR = "anchor"


@dataclass(frozen=True)
class Hit:
    index: int
    part: str   # ANCHOR, HANDLE_IN or HANDLE_OUT


def pick(layer, view: ScreenView, pointer: tuple, radius: float) -> Hit | None:
    """Nearest anchor or handle within `radius` pixels of pointer, else None.

    Anchors win ties against handles.
    """
    best = None
    best_dist = radius
    for i, anchor in enumerate(layer.anchors()):
        base = view.to_screen(anchor.position)
        candidates = [(ANCHOR, base)]
        if layer.supports_handles:
            candidates.append((HANDLE_IN, add(base, view.offset_to_screen(anchor.handle_in))))
            candidates.append((HANDLE_OUT, add(base, view.offset_to_screen(anchor.handle_out))))
        for part, point in candidates:
            d = distance(point, pointer)
            if d < best_dist or (d <= best_dist and best is None):
                best = Hit(i, part)
                best_dist = d
    return best


def anchors_in_rect(layer, view: ScreenView, corner_a: tuple, corner_b: tuple) -> set:
    """Indices of anchors whose screen position lies inside the rectangle."""
    x0, x1 = sorted((corner_a[0], corner_b[0]))
    y0, y1 = sorted((corner_a[1], corner_b[1]))
    inside = set()
    for i, anchor in enumerate(layer.anchors()):
        sx, sy = view.to_screen(anchor.position)
        if x0 <= sx <= x1 and y0 <= sy <= y1:
            inside.add(i)
    return inside
