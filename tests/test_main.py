"""Tests for building the controller at startup."""

import json

from config_manager import ConfigManager
from main import build_controller


class TestBuildController:
    """Tests for build_controller."""

    def test_fixtures_from_config(self, tmp_path):
        """Test that the default rig is attached in order."""
        manager = ConfigManager(tmp_path / "config.json")
        with build_controller(manager, test=True) as controller:
            assert [f.label for f in controller.fixtures] == ["Scanner L", "Scanner R", "Wash"]
            assert [f.start_address for f in controller.fixtures] == [1, 5, 9]

    def test_test_flag_leaves_config_alone(self, tmp_path):
        """Test that --test does not leak into the loaded or saved config."""
        path = tmp_path / "config.json"
        manager = ConfigManager(path)
        with build_controller(manager, test=True) as controller:
            assert controller.test is True
            assert controller.do_not_sleep is True
        assert manager.config.controller.test is False
        manager.save()
        assert json.loads(path.read_text())["controller"]["test"] is False

    def test_test_flag_from_config(self, tmp_path, sample_config_dict):
        """Test that test mode can also come from the file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps(sample_config_dict))
        with build_controller(ConfigManager(path)) as controller:
            assert controller.test is True
            assert controller.universe == 2
