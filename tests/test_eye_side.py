"""Unit tests for EyeSide payloads and left/right section linking."""

import numpy as np
import pytest

from eyesculpt.eyes.eye_side import (
    EyeSide, SECTION_FIELDS, SectionLink, Side, apply_links, default_links,
)
from eyesculpt.eyes.eye_state import EyeFrame
from eyesculpt.eyes.outline import BezierOutline


@pytest.fixture
def pair():
    left, right = EyeSide(), EyeSide()
    left.iris_color = (0.1, 0.8, 0.2)
    left.iris_radius = 0.2
    left.eye_shape.open = BezierOutline.ellipse(0.3, 0.2)
    right.eyelid_close = 0.7
    return left, right


class TestLinks:

    def test_default_links_cover_every_section(self):
        links = default_links()
        assert set(links) == set(SECTION_FIELDS)
        assert all(link.linked and link.active is Side.LEFT for link in links.values())

    def test_linked_section_copied_from_active(self, pair):
        left, right = pair
        apply_links(left, right, {"iris": SectionLink(), "shape": SectionLink()})
        assert right.iris_color == (0.1, 0.8, 0.2)
        assert right.iris_radius == 0.2
        assert right.eye_shape.open == left.eye_shape.open

    def test_copy_is_independent(self, pair):
        left, right = pair
        apply_links(left, right, {"shape": SectionLink()})
        right.eye_shape.open.anchors[0].position = (-9.0, 0.0)
        assert left.eye_shape.open.anchors[0].position == (-0.3, 0.0)

    def test_right_active_copies_leftward(self, pair):
        left, right = pair
        apply_links(left, right, {"iris": SectionLink(active=Side.RIGHT)})
        assert left.iris_color == right.iris_color
        assert left.iris_radius == EyeSide().iris_radius

    def test_unlinked_section_untouched(self, pair):
        left, right = pair
        apply_links(left, right, {"iris": SectionLink(linked=False)})
        assert right.iris_color != left.iris_color

    def test_fields_outside_sections_stay_per_side(self, pair):
        left, right = pair
        apply_links(left, right, default_links())
        assert right.eyelid_close == 0.7
        assert left.eyelid_close == EyeSide().eyelid_close


class TestUniforms:

    def test_payload_outlines_and_frame_values(self):
        side = EyeSide()
        frame = EyeFrame(eyelid_close=0.4, look_x=0.25, look_y=-0.1,
                         eyebrow_y=0.42, scale_x=1.05, scale_y=0.95)
        u = side.uniforms(frame)
        assert u["eye_open"].shape == (8, 4)
        assert u["eye_closed"].shape == (8, 4)
        assert u["eyebrow"].shape == (12, 4)
        assert u["iris"].dtype == np.float32
        assert u["eyelid_close"] == 0.4
        assert u["look"] == (0.25, -0.1)
        assert u["scale"] == (1.05, 0.95)
        assert u["eyebrow_y"] == 0.42
        assert len(u["eyebrow_thickness"]) == 3
