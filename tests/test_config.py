"""
Smoke tests for configuration loading and validation.
"""

import pytest

from main import build_presenter, load_config, validate_config
from web.services.config_service import ConfigService


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config_passes(self, valid_config):
        """A complete valid config passes validation."""
        is_valid, error = validate_config(valid_config)

        assert is_valid is True
        assert error is None

    @pytest.mark.parametrize("section", ["camera", "detection", "display", "storage", "log_path", "log_level"])
    def test_missing_section(self, valid_config, section):
        """Each required section is reported by name when missing."""
        del valid_config[section]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert section in error

    def test_invalid_device_id_type(self, valid_config):
        """device_id with invalid type fails."""
        valid_config["camera"]["backend"] = "opencv"
        valid_config["camera"]["device_id"] = [1, 2, 3]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "device_id" in error

    def test_negative_device_id(self, valid_config):
        """Negative integer device_id fails."""
        valid_config["camera"]["backend"] = "opencv"
        valid_config["camera"]["device_id"] = -1

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "device_id" in error

    def test_string_device_id_valid(self, valid_config):
        """String device_id (RTSP URL) is valid."""
        valid_config["camera"]["backend"] = "opencv"
        valid_config["camera"]["device_id"] = "rtsp://192.168.1.1/stream"

        is_valid, _ = validate_config(valid_config)

        assert is_valid is True

    def test_invalid_resolution_length(self, valid_config):
        """Resolution with wrong length fails."""
        valid_config["camera"]["resolution"] = [1920]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "resolution" in error

    def test_invalid_fps(self, valid_config):
        """Non-positive fps fails."""
        valid_config["camera"]["fps"] = 0

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "fps" in error

    def test_invalid_rotate(self, valid_config):
        valid_config["camera"]["rotate"] = 45

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "rotate" in error

    def test_invalid_camera_backend(self, valid_config):
        """Unknown camera backend fails."""
        valid_config["camera"]["backend"] = "unknown_backend"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "backend" in error

    def test_invalid_detection_backend(self, valid_config):
        """Unknown detection backend fails."""
        valid_config["detection"]["backend"] = "magic"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "backend" in error

    def test_yolo_backend_requires_model(self, valid_config):
        """YOLO backend without model fails."""
        valid_config["detection"]["backend"] = "yolo"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "model" in error

    def test_yolo_backend_with_model(self, valid_config):
        """YOLO backend with model passes."""
        valid_config["detection"]["backend"] = "yolo"
        valid_config["detection"]["yolo"] = {"model": "yolov8n.pt"}

        is_valid, _ = validate_config(valid_config)

        assert is_valid is True

    def test_fixture_rect_shape(self, valid_config):
        valid_config["detection"]["fixture"] = [{"label": "dog", "rect": [0.1, 0.2]}]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "fixture[0].rect" in error

    def test_display_ratio_bounds(self, valid_config):
        valid_config["display"]["image_area_ratio"] = 1.5

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "image_area_ratio" in error

    def test_display_width_positive(self, valid_config):
        valid_config["display"]["width"] = 0

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "display.width" in error

    def test_overlay_color(self, valid_config):
        valid_config["overlay"]["color"] = [255, 0]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "overlay.color" in error

    def test_overlay_stroke_width(self, valid_config):
        valid_config["overlay"]["stroke_width"] = 0

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "stroke_width" in error

    def test_missing_debug_image_path(self, valid_config):
        valid_config["storage"] = {}

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "debug_image_path" in error

    def test_invalid_log_level(self, valid_config):
        """Invalid log level fails."""
        valid_config["log_level"] = "VERBOSE"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "log_level" in error


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_default_yaml(self, temp_config_dir):
        """Config loads from default.yaml when only it exists."""
        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["camera"]["backend"] == "fixture"
        assert config["camera"]["resolution"] == [640, 480]
        assert config["display"]["width"] == 390

    def test_local_overrides_merge(self, temp_config_dir):
        """Local config.yaml overrides default.yaml."""
        config_yaml = temp_config_dir / "config.yaml"
        config_yaml.write_text("""
camera:
  resolution: [1920, 1080]
  fps: 60
""")

        config = load_config(str(config_yaml))

        assert config["camera"]["resolution"] == [1920, 1080]
        assert config["camera"]["fps"] == 60
        # Original values preserved
        assert config["camera"]["backend"] == "fixture"
        assert config["camera"]["device_id"] == 0

    def test_explicit_path_applied_last(self, temp_config_dir, tmp_path):
        (temp_config_dir / "config.yaml").write_text("log_level: WARNING\n")
        explicit = tmp_path / "other.yaml"
        explicit.write_text("log_level: DEBUG\n")

        config = ConfigService.load_effective_config(str(temp_config_dir), str(explicit))

        assert config["log_level"] == "DEBUG"
        assert config["detection"]["fixture"][0]["label"] == "cat"

    def test_deep_merge_preserves_nested(self):
        base = {"detection": {"backend": "fixture", "yolo": {"model": "a.pt", "conf_threshold": 0.3}}}
        ConfigService.deep_merge(base, {"detection": {"yolo": {"model": "b.pt"}}})

        assert base["detection"]["yolo"] == {"model": "b.pt", "conf_threshold": 0.3}
        assert base["detection"]["backend"] == "fixture"

    def test_save_overrides_roundtrip(self, tmp_path):
        ConfigService.save_overrides({"display": {"width": 500}}, config_dir=str(tmp_path))

        assert ConfigService.read_yaml(str(tmp_path / "config.yaml")) == {"display": {"width": 500}}

    def test_loaded_default_config_is_valid(self, temp_config_dir):
        config = load_config(str(temp_config_dir / "config.yaml"))

        is_valid, error = validate_config(config)

        assert is_valid is True, error


class TestBuildPresenter:
    def test_wires_fixture_backends(self, valid_config):
        presenter = build_presenter(valid_config)
        try:
            assert presenter.inference.backend_name == "FixtureBackend"
            assert presenter.frame.display_size == (390.0, 300.0)
            assert str(presenter.debug_store.path) == valid_config["storage"]["debug_image_path"]
            assert presenter.style.stroke_width == 2
        finally:
            presenter.inference.shutdown()
