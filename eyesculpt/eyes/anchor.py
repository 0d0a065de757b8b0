"""Bezier anchor point with collinear in/out handles."""

from dataclasses import dataclass, replace

from eyesculpt.utils.math_helpers import length

# Handle length fraction that makes 4 cubic arcs approximate a circle.
KAPPA = 0.5522847498

# Handles shorter than this carry no usable direction.
DEGENERATE_LEN = 1e-8


@dataclass
class BezierAnchor:
    """One point on a closed outline.

    Handles are offsets relative to ``position``: ``handle_in`` points toward
    the previous anchor, ``handle_out`` toward the next one.
    """

    position: tuple = (0.0, 0.0)
    handle_in: tuple = (0.0, 0.0)
    handle_out: tuple = (0.0, 0.0)

    def copy(self) -> "BezierAnchor":
        return replace(self)

    def enforce_collinear_from_out(self):
        """Point handle_in opposite to handle_out, keeping handle_in's length."""
        out_len = length(self.handle_out)
        if out_len < DEGENERATE_LEN:
            return
        in_len = length(self.handle_in)
        self.handle_in = (
            -self.handle_out[0] / out_len * in_len,
            -self.handle_out[1] / out_len * in_len,
        )

    def enforce_collinear_from_in(self):
        """Point handle_out opposite to handle_in, keeping handle_out's length."""
        in_len = length(self.handle_in)
        if in_len < DEGENERATE_LEN:
            return
        out_len = length(self.handle_out)
        self.handle_out = (
            -self.handle_in[0] / in_len * out_len,
            -self.handle_in[1] / in_len * out_len,
        )

    def set_handle_in(self, offset: tuple):
        self.handle_in = (float(offset[0]), float(offset[1]))
        self.enforce_collinear_from_in()

    def set_handle_out(self, offset: tuple):
        self.handle_out = (float(offset[0]), float(offset[1]))
        self.enforce_collinear_from_out()

    def handle_in_point(self) -> tuple:
        """Absolute position of the incoming control point."""
        return (self.position[0] + self.handle_in[0],
                self.position[1] + self.handle_in[1])

    def handle_out_point(self) -> tuple:
        """Absolute position of the outgoing control point."""
        return (self.position[0] + self.handle_out[0],
                self.position[1] + self.handle_out[1])
