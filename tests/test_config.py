"""Tests for configuration loading."""

import json
import logging

from magic_guard.config import MagicConfig


class TestMagicConfig:
    """Test configuration sources."""

    def test_defaults(self) -> None:
        """Test default settings."""
        config = MagicConfig()

        assert config.command_threshold == 0.70
        assert config.auto_apply_threshold == 0.80
        assert config.path_max_suggestions == 16
        assert config.report_max_items == 8
        assert config.large_size_bytes == 10 * 1024 * 1024
        assert config.exact_token_overlap is False

    def test_from_dict(self) -> None:
        """Test building from a mapping."""
        config = MagicConfig.from_dict({"command_threshold": 0.5, "path_scan_limit": "64"})

        assert config.command_threshold == 0.5
        assert config.path_scan_limit == 64

    def test_load_file(self, tmp_path) -> None:
        """Test loading a JSON file."""
        path = tmp_path / "magic.json"
        path.write_text(json.dumps({"exact_token_overlap": True, "size_walk_max_depth": 4}))

        config = MagicConfig.load(path, environ={})

        assert config.exact_token_overlap is True
        assert config.size_walk_max_depth == 4

    def test_environment_overrides_file(self, tmp_path) -> None:
        """Test environment variables win over the file."""
        path = tmp_path / "magic.json"
        path.write_text(json.dumps({"command_threshold": 0.6}))

        config = MagicConfig.load(
            environ={
                "MAGIC_GUARD_CONFIG": str(path),
                "MAGIC_GUARD_COMMAND_THRESHOLD": "0.9",
                "MAGIC_GUARD_EXACT_TOKEN_OVERLAP": "yes",
            },
        )

        assert config.command_threshold == 0.9
        assert config.exact_token_overlap is True

    def test_bad_file_uses_defaults(self, tmp_path, caplog) -> None:
        """Test a malformed file is logged and ignored."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with caplog.at_level(logging.WARNING, logger="magic_guard.config"):
            config = MagicConfig.load(path, environ={})

        assert config == MagicConfig()
        assert "Failed to load config file" in caplog.text

    def test_missing_file_uses_defaults(self, tmp_path) -> None:
        """Test a missing file leaves defaults."""
        assert MagicConfig.load(tmp_path / "nope.json", environ={}) == MagicConfig()

    def test_invalid_values_ignored(self, caplog) -> None:
        """Test unknown keys and bad values are skipped."""
        with caplog.at_level(logging.WARNING, logger="magic_guard.config"):
            config = MagicConfig.from_dict({"colour": "blue", "path_scan_limit": "many", "exact_token_overlap": "maybe"})

        assert config == MagicConfig()
        assert "unknown config key: colour" in caplog.text

    def test_null_value_in_file_ignored(self, tmp_path, caplog) -> None:
        """Test a null value in the file is logged and the default kept."""
        path = tmp_path / "magic.json"
        path.write_text(json.dumps({"path_scan_limit": None, "command_threshold": 0.9}))

        with caplog.at_level(logging.WARNING, logger="magic_guard.config"):
            config = MagicConfig.load(path, environ={})

        assert config.path_scan_limit == 32
        assert config.command_threshold == 0.9
        assert "Invalid value for path_scan_limit" in caplog.text

    def test_wrong_type_value_ignored(self, caplog) -> None:
        """Test a value of the wrong JSON type keeps the default."""
        with caplog.at_level(logging.WARNING, logger="magic_guard.config"):
            config = MagicConfig.from_dict({"command_threshold": [0.5]})

        assert config.command_threshold == 0.70
        assert "Invalid value for command_threshold" in caplog.text

    def test_to_dict_round_trip(self) -> None:
        """Test the dict form rebuilds the same config."""
        config = MagicConfig(command_threshold=0.75, exact_token_overlap=True)

        assert MagicConfig.from_dict(config.to_dict()) == config
