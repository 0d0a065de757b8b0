"""Unit tests for the pure grab/scale/rotate operations."""

import math

import pytest

from eyesculpt.editor.transform import (
    Axis, rotate_about_centroid, scale_about_centroid, scale_factors,
    selection_centroid, translate,
)
from eyesculpt.eyes.outline import BezierOutline
from eyesculpt.utils.math_helpers import distance


@pytest.fixture
def anchors():
    return tuple(BezierOutline.ellipse(2.0, 1.0).anchors)


class TestTranslate:

    def test_moves_selected_only_with_rigid_handles(self, anchors):
        result = translate(anchors, {0, 2}, (0.5, -0.25))
        assert set(result) == {0, 2}
        assert result[0].position == (-1.5, -0.25)
        assert result[0].handle_in == anchors[0].handle_in
        assert result[2].handle_out == anchors[2].handle_out

    def test_zero_delta_is_identity(self, anchors):
        result = translate(anchors, {1, 3}, (0.0, 0.0))
        assert result[1] == anchors[1]
        assert result[3] == anchors[3]

    def test_snapshot_untouched(self, anchors):
        before = [a.copy() for a in anchors]
        translate(anchors, {0}, (1.0, 1.0))
        assert list(anchors) == before


class TestScale:

    def test_scale_factors_by_axis(self):
        assert scale_factors(2.0, Axis.NONE) == (2.0, 2.0)
        assert scale_factors(2.0, Axis.X) == (2.0, 1.0)
        assert scale_factors(2.0, Axis.Y) == (1.0, 2.0)

    def test_factor_two_doubles_distance_to_centroid(self, anchors):
        selected = {0, 1}
        c = selection_centroid(anchors, selected)
        result = scale_about_centroid(anchors, selected, 2.0, 2.0)
        for i in selected:
            assert distance(result[i].position, c) == pytest.approx(
                2.0 * distance(anchors[i].position, c))
        assert selection_centroid(result, selected) == pytest.approx(c)

    def test_handles_scale_as_free_vectors(self, anchors):
        result = scale_about_centroid(anchors, {1}, 3.0, 0.5)
        hx, hy = anchors[1].handle_out
        assert result[1].handle_out == pytest.approx((hx * 3.0, hy * 0.5))

    def test_axis_x_leaves_y_untouched(self, anchors):
        sx, sy = scale_factors(3.7, Axis.X)
        result = scale_about_centroid(anchors, {0, 1, 2}, sx, sy)
        for i in (0, 1, 2):
            assert result[i].position[1] == anchors[i].position[1]
            assert result[i].handle_in[1] == anchors[i].handle_in[1]
            assert result[i].handle_out[1] == anchors[i].handle_out[1]


class TestRotate:

    def test_quarter_turn_about_centroid(self, anchors):
        # Left (-2, 0) and Right (2, 0): centroid at the origin
        result = rotate_about_centroid(anchors, {0, 2}, math.pi / 2)
        assert result[0].position == pytest.approx((0.0, -2.0), abs=1e-12)
        assert result[2].position == pytest.approx((0.0, 2.0), abs=1e-12)

    def test_handles_rotate_in_place(self, anchors):
        result = rotate_about_centroid(anchors, {1}, math.pi)
        hx, hy = anchors[1].handle_out
        assert result[1].handle_out == pytest.approx((-hx, -hy), abs=1e-12)
        # Single anchor rotates about itself
        assert result[1].position == pytest.approx(anchors[1].position)
