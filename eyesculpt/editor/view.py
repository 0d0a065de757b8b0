"""Mapping between widget screen pixels and outline space."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScreenView:
    """Uniform scale, vertical flip and center offset.

    Screen Y grows downward, outline Y grows upward.
    """
    center: tuple = (0.0, 0.0)
    pixels_per_unit: float = 400.0

    def to_screen(self, p: tuple) -> tuple:
        return (self.center[0] + p[0] * self.pixels_per_unit,
                self.center[1] - p[1] * self.pixels_per_unit)

    def to_outline(self, s: tuple) -> tuple:
        return ((s[0] - self.center[0]) / self.pixels_per_unit,
                (self.center[1] - s[1]) / self.pixels_per_unit)

    def offset_to_screen(self, v: tuple) -> tuple:
        """Map a free vector (e.g. a handle offset) to screen space."""
        return (v[0] * self.pixels_per_unit, -v[1] * self.pixels_per_unit)
