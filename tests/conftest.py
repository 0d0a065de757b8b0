"""Shared pytest fixtures for the eyesculpt test suite.

Fixtures:
    view: ScreenView centered at (400, 300) with 100 px per outline unit
    circle: unit-radius BezierOutline
    editor: ModalEditor with default settings
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from eyesculpt.editor.input import FrameInput
from eyesculpt.editor.modal import ModalEditor
from eyesculpt.editor.view import ScreenView
from eyesculpt.eyes.outline import BezierOutline


@pytest.fixture
def view():
    return ScreenView(center=(400.0, 300.0), pixels_per_unit=100.0)


@pytest.fixture
def circle():
    return BezierOutline.circle(1.0)


@pytest.fixture
def editor():
    return ModalEditor()


def frame(pointer=(0.0, 0.0), pressed=False, down=None, released=False,
          keys=(), shift=False) -> FrameInput:
    """FrameInput shorthand; `down` defaults to `pressed`."""
    return FrameInput(
        pointer=pointer,
        primary_pressed=pressed,
        primary_down=pressed if down is None else down,
        primary_released=released,
        keys_pressed=frozenset(keys),
        shift=shift,
    )


def anchors_close(a, b, tol=1e-9) -> bool:
    """Compare two anchor sequences field by field within tol."""
    if len(a) != len(b):
        return False
    for x, y in zip(a, b):
        for fa, fb in ((x.position, y.position), (x.handle_in, y.handle_in),
                       (x.handle_out, y.handle_out)):
            if abs(fa[0] - fb[0]) > tol or abs(fa[1] - fb[1]) > tol:
                return False
    return True
