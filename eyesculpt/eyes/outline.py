"""Closed cubic Bezier outlines for eye, iris and pupil shapes.

An outline is a fixed ring of anchors. Segment i runs from anchor i to
anchor (i + 1) % n, with control points::

    P0 = anchor[i].position
    P1 = anchor[i].position + anchor[i].handle_out
    P2 = anchor[i+1].position + anchor[i+1].handle_in
    P3 = anchor[i+1].position
"""

import numpy as np

from eyesculpt.eyes.anchor import BezierAnchor, KAPPA, DEGENERATE_LEN
from eyesculpt.utils.math_helpers import length, sub

# Vertical gap between Top and Bottom of a closed slit.
SLIT_TINY = 0.005

# Index names for 4-anchor outlines.
LEFT, TOP, RIGHT, BOTTOM = 0, 1, 2, 3


class ClosedOutline:
    """Fixed-size ring of Bezier anchors. Subclasses set ANCHOR_COUNT."""

    ANCHOR_COUNT = 0

    def __init__(self, anchors):
        anchors = list(anchors)
        if len(anchors) != self.ANCHOR_COUNT:
            raise ValueError(
                f"{type(self).__name__} needs {self.ANCHOR_COUNT} anchors, "
                f"got {len(anchors)}"
            )
        self.anchors = anchors

    def __eq__(self, other):
        return type(self) is type(other) and self.anchors == other.anchors

    def __repr__(self):
        return f"{type(self).__name__}({self.anchors!r})"

    def copy(self):
        return type(self)([a.copy() for a in self.anchors])

    def segment(self, i: int) -> tuple:
        """Control points (P0, P1, P2, P3) of segment i."""
        a = self.anchors[i]
        b = self.anchors[(i + 1) % len(self.anchors)]
        return (a.position, a.handle_out_point(), b.handle_in_point(), b.position)

    def point_at(self, i: int, t: float) -> tuple:
        """Evaluate segment i at parameter t in 0..1."""
        p0, p1, p2, p3 = self.segment(i)
        u = 1.0 - t
        w0 = u * u * u
        w1 = 3.0 * u * u * t
        w2 = 3.0 * u * t * t
        w3 = t * t * t
        return (
            w0 * p0[0] + w1 * p1[0] + w2 * p2[0] + w3 * p3[0],
            w0 * p0[1] + w1 * p1[1] + w2 * p2[1] + w3 * p3[1],
        )

    def to_uniform_array(self) -> np.ndarray:
        """Pack all segments as float32 rows for GPU uniform upload.

        Row 2i   = [P0.x, P0.y, P1.x, P1.y]
        Row 2i+1 = [P2.x, P2.y, P3.x, P3.y]
        """
        n = len(self.anchors)
        result = np.zeros((n * 2, 4), dtype=np.float32)
        for seg in range(n):
            p0, p1, p2, p3 = self.segment(seg)
            result[seg * 2] = (p0[0], p0[1], p1[0], p1[1])
            result[seg * 2 + 1] = (p2[0], p2[1], p3[0], p3[1])
        return result

    def auto_adjust_handle_at(self, i: int):
        """Recompute anchor i's handles from its two neighbors only."""
        n = len(self.anchors)
        anchor = self.anchors[i]
        prev_pos = self.anchors[(i + n - 1) % n].position
        next_pos = self.anchors[(i + 1) % n].position

        to_prev = sub(prev_pos, anchor.position)
        to_next = sub(next_pos, anchor.position)
        len_prev = length(to_prev)
        len_next = length(to_next)
        if len_prev < DEGENERATE_LEN or len_next < DEGENERATE_LEN:
            return

        # Bisect the angle between the two neighbors
        direction = (
            to_next[0] / len_next - to_prev[0] / len_prev,
            to_next[1] / len_next - to_prev[1] / len_prev,
        )
        dir_len = length(direction)
        if dir_len < DEGENERATE_LEN:
            # Neighbors are symmetric about i: fall back to the perpendicular
            unit = (-to_next[1] / len_next, to_next[0] / len_next)
        else:
            unit = (direction[0] / dir_len, direction[1] / dir_len)

        out_len = len_next * KAPPA
        in_len = len_prev * KAPPA
        anchor.handle_out = (unit[0] * out_len, unit[1] * out_len)
        anchor.handle_in = (-unit[0] * in_len, -unit[1] * in_len)

    def auto_adjust_handles(self):
        for i in range(len(self.anchors)):
            self.auto_adjust_handle_at(i)


class BezierOutline(ClosedOutline):
    """4-anchor closed outline ordered [Left, Top, Right, Bottom]."""

    ANCHOR_COUNT = 4

    @classmethod
    def circle(cls, radius: float) -> "BezierOutline":
        return cls.ellipse(radius, radius)

    @classmethod
    def ellipse(cls, rx: float, ry: float) -> "BezierOutline":
        hx = rx * KAPPA
        hy = ry * KAPPA
        return cls([
            BezierAnchor((-rx, 0.0), (0.0, -hy), (0.0, hy)),
            BezierAnchor((0.0, ry), (-hx, 0.0), (hx, 0.0)),
            BezierAnchor((rx, 0.0), (0.0, hy), (0.0, -hy)),
            BezierAnchor((0.0, -ry), (hx, 0.0), (-hx, 0.0)),
        ])

    @classmethod
    def eyebrow_arc(cls, half_width: float, thickness: float) -> "BezierOutline":
        """Thin 4-anchor arc centered at the origin with pointed tips."""
        hw = half_width * KAPPA
        tip = thickness * KAPPA * 0.3
        return cls([
            BezierAnchor((-half_width, 0.0), (0.0, -tip), (0.0, tip)),
            BezierAnchor((0.0, thickness), (-hw, 0.0), (hw, 0.0)),
            BezierAnchor((half_width, 0.0), (0.0, tip), (0.0, -tip)),
            BezierAnchor((0.0, -thickness), (hw, 0.0), (-hw, 0.0)),
        ])

    @classmethod
    def closed_slit(cls, half_width: float, y_pos: float) -> "BezierOutline":
        """Nearly flat horizontal slit at height y_pos."""
        hw = half_width * KAPPA
        return cls([
            BezierAnchor((-half_width, y_pos), (0.0, -SLIT_TINY), (0.0, SLIT_TINY)),
            BezierAnchor((0.0, y_pos + SLIT_TINY), (-hw, 0.0), (hw, 0.0)),
            BezierAnchor((half_width, y_pos), (0.0, SLIT_TINY), (0.0, -SLIT_TINY)),
            BezierAnchor((0.0, y_pos - SLIT_TINY), (hw, 0.0), (-hw, 0.0)),
        ])

    @classmethod
    def closed_slit_asymmetric(cls, half_width: float, y_slit: float,
                               arch: float) -> "BezierOutline":
        """Closed-eye slit whose lid center sits ``arch`` away from the corners.

        Negative arch dips the lids below the corners, positive arches them
        above. Bottom always sits SLIT_TINY below Top so the lids never cross.
        """
        hw = half_width * KAPPA
        top_y = y_slit + arch
        return cls([
            BezierAnchor((-half_width, y_slit), (0.0, -SLIT_TINY), (0.0, SLIT_TINY)),
            BezierAnchor((0.0, top_y), (-hw, 0.0), (hw, 0.0)),
            BezierAnchor((half_width, y_slit), (0.0, SLIT_TINY), (0.0, -SLIT_TINY)),
            BezierAnchor((0.0, top_y - SLIT_TINY), (hw, 0.0), (-hw, 0.0)),
        ])
