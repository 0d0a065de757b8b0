"""Pure grab/scale/rotate operations on a snapshot of anchors.

Each function reads the immutable snapshot and returns fresh anchors for the
selected indices only, so the live result is always an exact function of
(snapshot, pointer) regardless of how many frames have passed.
"""

from dataclasses import replace
from enum import Enum

from eyesculpt.utils.math_helpers import add, centroid, rotate


class Axis(Enum):
    NONE = "none"
    X = "x"
    Y = "y"


def selection_centroid(anchors, selected) -> tuple:
    return centroid(anchors[i].position for i in sorted(selected))


def scale_factors(factor: float, axis: Axis) -> tuple:
    if axis is Axis.X:
        return (factor, 1.0)
    if axis is Axis.Y:
        return (1.0, factor)
    return (factor, factor)


def translate(anchors, selected, delta: tuple) -> dict:
    """Move selected anchors by delta; handles translate rigidly."""
    return {i: replace(anchors[i], position=add(anchors[i].position, delta))
            for i in selected}


def _scale_coord(v: float, c: float, s: float) -> float:
    if s == 1.0:
        # Keep the unconstrained axis bit-exact
        return v
    return c + (v - c) * s


def scale_about_centroid(anchors, selected, sx: float, sy: float) -> dict:
    """Scale positions about the selection centroid and handles as free vectors."""
    cx, cy = selection_centroid(anchors, selected)
    result = {}
    for i in selected:
        a = anchors[i]
        result[i] = replace(
            a,
            position=(_scale_coord(a.position[0], cx, sx), _scale_coord(a.position[1], cy, sy)),
            handle_in=(a.handle_in[0] * sx, a.handle_in[1] * sy),
            handle_out=(a.handle_out[0] * sx, a.handle_out[1] * sy),
        )
    return result


def rotate_about_centroid(anchors, selected, angle: float) -> dict:
    """Rotate positions about the selection centroid; handles rotate in place."""
    c = selection_centroid(anchors, selected)
    result = {}
    for i in selected:
        a = anchors[i]
        rel = (a.position[0] - c[0], a.position[1] - c[1])
        result[i] = replace(
            a,
            position=add(c, rotate(rel, angle)),
            handle_in=rotate(a.handle_in, angle),
            handle_out=rotate(a.handle_out, angle),
        )
    return result
