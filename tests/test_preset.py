"""Unit tests for preset JSON persistence."""

import json

import pytest

from eyesculpt.eyes.eye_side import Side
from eyesculpt.eyes.outline import BezierOutline
from eyesculpt.preset import (
    DEFAULT_BROW_THICKNESS, EyePreset, PresetError, PresetFormatError,
    from_dict, load_preset, save_preset, to_dict,
)


@pytest.fixture
def record():
    return to_dict(EyePreset())


class TestRoundTrip:

    def test_save_then_load(self, tmp_path):
        preset = EyePreset()
        preset.left.iris_radius = 0.21
        preset.right.eye_shape.open = BezierOutline.ellipse(0.31, 0.22)
        preset.settings.auto_blink = False
        preset.links["eyebrow"].linked = False
        preset.links["iris"].active = Side.RIGHT

        path = tmp_path / "preset.json"
        assert save_preset(path, preset)
        loaded = load_preset(path)

        assert to_dict(loaded) == to_dict(preset)
        assert loaded.right.eye_shape.open == preset.right.eye_shape.open
        assert loaded.links["iris"].active is Side.RIGHT

    def test_save_to_unwritable_path(self, tmp_path):
        assert save_preset(tmp_path, EyePreset()) is False


class TestValidation:

    def test_missing_field_names_path(self, record):
        del record["left"]["iris_radius"]
        with pytest.raises(PresetFormatError) as exc:
            from_dict(record)
        assert exc.value.path == "preset.left.iris_radius"

    def test_wrong_anchor_count(self, record):
        record["right"]["iris_shape"]["anchors"].pop()
        with pytest.raises(PresetFormatError) as exc:
            from_dict(record)
        assert exc.value.path == "preset.right.iris_shape.anchors"

    def test_bad_vector(self, record):
        record["left"]["eyebrow_shape"]["outline"]["anchors"][2]["position"] = [1.0]
        with pytest.raises(PresetFormatError) as exc:
            from_dict(record)
        assert exc.value.path.startswith("preset.left.eyebrow_shape.outline.anchors[2].position")

    def test_bool_is_not_a_number(self, record):
        record["global"]["eye_separation"] = True
        with pytest.raises(PresetFormatError):
            from_dict(record)

    def test_unsupported_version(self, record):
        record["version"] = 2
        with pytest.raises(PresetFormatError) as exc:
            from_dict(record)
        assert exc.value.path == "preset.version"

    @pytest.mark.parametrize("version", [True, 1.0, "1"])
    def test_version_must_be_integer(self, record, version):
        record["version"] = version
        with pytest.raises(PresetFormatError) as exc:
            from_dict(record)
        assert exc.value.path == "preset.version"

    def test_flag_must_be_boolean(self, record):
        record["global"]["auto_blink"] = 1
        with pytest.raises(PresetFormatError) as exc:
            from_dict(record)
        assert exc.value.path == "preset.global.auto_blink"

    def test_not_an_object(self):
        with pytest.raises(PresetFormatError) as exc:
            from_dict([1, 2, 3])
        assert exc.value.path == "preset"

    def test_optional_eyebrow_fields_default(self, record):
        del record["left"]["eyebrow_shape"]["thickness"]
        del record["left"]["eyebrow_shape"]["tip_round"]
        preset = from_dict(record)
        assert tuple(preset.left.eyebrow_shape.thickness) == DEFAULT_BROW_THICKNESS
        assert tuple(preset.left.eyebrow_shape.tip_round) == (True, True)

    def test_unknown_active_side_falls_back_left(self, record):
        record["links"]["shape"]["active"] = "middle"
        assert from_dict(record).links["shape"].active is Side.LEFT


class TestFiles:

    def test_bad_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(PresetError):
            load_preset(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(PresetError):
            load_preset(tmp_path / "nope.json")

    def test_malformed_record_is_format_error(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"version": 1}))
        with pytest.raises(PresetFormatError) as exc:
            load_preset(path)
        assert exc.value.path == "preset.left"
