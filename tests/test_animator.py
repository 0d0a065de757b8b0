"""Unit tests for EyeAnimator gaze, blink and squash/stretch output."""

import math

import pytest

from eyesculpt.config import AnimationConfig
from eyesculpt.eyes.animation import BlinkAnimation, Keyframe
from eyesculpt.eyes.animator import EyeAnimator, build_blink
from eyesculpt.eyes.eye_side import EyeSide, GlobalSettings


@pytest.fixture
def animator():
    return EyeAnimator(AnimationConfig())


@pytest.fixture
def sides():
    return EyeSide(), EyeSide()


class TestBlinkSource:

    def test_default_is_sample(self):
        blink = build_blink(AnimationConfig())
        assert blink.period == 3.0
        assert len(blink.keyframes) == 11

    def test_configured_keyframes(self):
        cfg = AnimationConfig(blink_period=2.0, keyframes=[
            {"time": 0.0, "value": 0.0}, {"time": 1.0, "value": 1.0},
        ])
        blink = build_blink(cfg)
        assert blink.period == 2.0
        assert blink.evaluate(0.5) == pytest.approx(0.5)


class TestEyelid:

    def test_auto_blink_drives_both_eyes(self, animator, sides):
        left, right = animator.update(1.12, *sides, GlobalSettings(), None)
        assert left.eyelid_close == pytest.approx(1.0)
        assert right.eyelid_close == pytest.approx(1.0)

    def test_manual_eyelid_when_auto_blink_off(self, animator, sides):
        sides[0].eyelid_close = 0.3
        sides[1].eyelid_close = 0.6
        settings = GlobalSettings(auto_blink=False)
        left, right = animator.update(1.12, *sides, settings, None)
        assert left.eyelid_close == 0.3
        assert right.eyelid_close == 0.6
        assert (left.scale_x, left.scale_y) == (1.0, 1.0)

    def test_eyebrow_follows_eyelid(self, animator, sides):
        sides[0].eyelid_close = 0.5
        left, _ = animator.update(0.0, *sides, GlobalSettings(auto_blink=False), None)
        brow = sides[0].eyebrow_shape
        assert left.eyebrow_y == pytest.approx(brow.base_y - 0.5 * brow.follow)


class TestSquashStretch:

    def test_closing_squashes(self, animator):
        sx, sy = animator.squash_stretch(2.0)
        assert sy < 1.0 < sx

    def test_opening_stretches(self, animator):
        sx, sy = animator.squash_stretch(-2.0)
        assert sx < 1.0 < sy

    def test_clamped_and_area_preserving(self, animator):
        sx, sy = animator.squash_stretch(1000.0)
        assert sy == pytest.approx(1.0 - 0.12)
        assert sx * sy == pytest.approx(1.0)

    def test_still_lid_is_unscaled(self, animator):
        assert animator.squash_stretch(0.0) == (1.0, 1.0)

    def test_applied_from_blink_velocity(self, sides):
        blink = BlinkAnimation([Keyframe(0.0, 0.0), Keyframe(1.0, 1.0)], period=2.0)
        animator = EyeAnimator(AnimationConfig(), blink=blink)
        left, _ = animator.update(0.5, *sides, GlobalSettings(), None)
        assert left.scale_y < 1.0


class TestGaze:

    def test_pursuit_lerps_toward_target(self, animator, sides):
        settings = GlobalSettings(focus_distance=0.0)
        left, _ = animator.update(0.0, *sides, settings, (1.0, -1.0))
        assert left.look_x == pytest.approx(0.15)
        assert left.look_y == pytest.approx(-0.15)
        left, _ = animator.update(0.0, *sides, settings, (1.0, -1.0))
        assert left.look_x == pytest.approx(0.15 + 0.85 * 0.15)

    def test_target_ignored_without_follow_mouse(self, animator, sides):
        settings = GlobalSettings(follow_mouse=False, focus_distance=0.0)
        left, _ = animator.update(0.0, *sides, settings, (1.0, 1.0))
        assert left.look_x == 0.0

    def test_vergence_turns_eyes_inward(self, animator, sides):
        settings = GlobalSettings(eye_separation=0.7, focus_distance=4.0, max_angle=0.6)
        left, right = animator.update(0.0, *sides, settings, None)
        expected = math.atan2(0.35, 4.0) / 0.6
        assert left.look_x == pytest.approx(expected)
        assert right.look_x == pytest.approx(-expected)

    def test_look_clamped(self, animator, sides):
        sides[0].look_x = 5.0
        left, _ = animator.update(0.0, *sides, GlobalSettings(), None)
        assert left.look_x == 1.0
