"""Six-anchor eyebrow outline and its three-point editing guide.

Outline anchor layout::

    0 ---- 1 ---- 2        top edge:    left tip, top center, right tip
    5 ---- 4 ---- 3        bottom edge: left tip, bottom center, right tip

The closed path runs 0 -> 1 -> 2 -> 3 -> 4 -> 5 -> 0, so the bottom edge is
traversed right to left. Guide point g pairs top anchor g with bottom anchor
5 - g and sits at their midpoint, forming the brow's spine.
"""

from eyesculpt.eyes.anchor import BezierAnchor, KAPPA
from eyesculpt.eyes.outline import ClosedOutline

GUIDE_COUNT = 3


class EyebrowOutline(ClosedOutline):
    """6-anchor closed outline: [0,1,2] top edge, [3,4,5] bottom edge."""

    ANCHOR_COUNT = 6

    @classmethod
    def eyebrow_arc(cls, half_width: float, thickness: float,
                    tip_thickness: float = 0.004, arch: float = 0.0) -> "EyebrowOutline":
        """Brow centered at the origin, ``thickness`` half-height at the middle.

        ``arch`` lifts the center pair above the tips. Tip handles point
        outward and are tapered to a fraction of the tip thickness so the
        ends read as points.
        """
        edge = half_width * KAPPA * 0.5
        tip = tip_thickness * KAPPA * 0.3
        return cls([
            BezierAnchor((-half_width, tip_thickness), (-tip, 0.0), (edge, 0.0)),
            BezierAnchor((0.0, arch + thickness), (-edge, 0.0), (edge, 0.0)),
            BezierAnchor((half_width, tip_thickness), (-edge, 0.0), (tip, 0.0)),
            BezierAnchor((half_width, -tip_thickness), (tip, 0.0), (-edge, 0.0)),
            BezierAnchor((0.0, arch - thickness), (edge, 0.0), (-edge, 0.0)),
            BezierAnchor((-half_width, -tip_thickness), (edge, 0.0), (-tip, 0.0)),
        ])


def paired_indices(gi: int) -> tuple:
    """Outline indices (top, bottom) driven by guide point gi."""
    if not 0 <= gi < GUIDE_COUNT:
        raise IndexError(f"guide index out of range: {gi}")
    return (gi, 5 - gi)


def _mid(a: tuple, b: tuple) -> tuple:
    return ((a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5)


class EyebrowGuide:
    """Three-point open spine derived from an EyebrowOutline.

    The outline is authoritative. The guide is recomputed with
    ``from_outline`` after every edit made through it.
    """

    def __init__(self, anchors):
        anchors = list(anchors)
        if len(anchors) != GUIDE_COUNT:
            raise ValueError(f"EyebrowGuide needs {GUIDE_COUNT} anchors, got {len(anchors)}")
        self.anchors = anchors

    def __eq__(self, other):
        return isinstance(other, EyebrowGuide) and self.anchors == other.anchors

    def __repr__(self):
        return f"EyebrowGuide({self.anchors!r})"

    @classmethod
    def from_outline(cls, outline: EyebrowOutline) -> "EyebrowGuide":
        anchors = []
        for gi in range(GUIDE_COUNT):
            ti, bi = paired_indices(gi)
            top = outline.anchors[ti]
            bottom = outline.anchors[bi]
            # Bottom edge runs backwards, so its in/out swap roles
            anchors.append(BezierAnchor(
                position=_mid(top.position, bottom.position),
                handle_in=_mid(top.handle_in, bottom.handle_out),
                handle_out=_mid(top.handle_out, bottom.handle_in),
            ))
        return cls(anchors)

    @staticmethod
    def propagate_delta(gi: int, delta: tuple, outline: EyebrowOutline):
        """Translate both outline anchors paired with guide point gi."""
        for idx in paired_indices(gi):
            anchor = outline.anchors[idx]
            anchor.position = (anchor.position[0] + delta[0],
                               anchor.position[1] + delta[1])
