"""Tests for comparison settings."""

from pathlib import Path

import pytest

from fhirdiff.core.config import DEFAULT_BUNDLE_NAME, CompareConfig, load_config


class TestLoadConfig:
    """Tests for loading settings from YAML."""

    def test_defaults(self) -> None:
        """Test settings without a config file."""
        config = load_config()
        assert config == CompareConfig()
        assert config.bundle_name == DEFAULT_BUNDLE_NAME == "profiles-types.json"
        assert config.indent == "  "
        assert config.not_applicable == "N/A"
        assert config.include_header is False
        assert config.include_field is False

    def test_partial_override(self, tmp_path: Path) -> None:
        """Test a file overriding some settings keeps the other defaults."""
        config_file = tmp_path / "fhirdiff.yaml"
        config_file.write_text('indent: "    "\ninclude_header: true\n')
        config = load_config(config_file)
        assert config.indent == "    "
        assert config.include_header is True
        assert config.not_applicable == "N/A"

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty config file means defaults."""
        config_file = tmp_path / "fhirdiff.yaml"
        config_file.write_text("")
        assert load_config(config_file) == CompareConfig()

    def test_unknown_property(self, tmp_path: Path) -> None:
        """Test unknown settings are rejected."""
        config_file = tmp_path / "fhirdiff.yaml"
        config_file.write_text("delimiter: ;\n")
        with pytest.raises(ValueError, match="Invalid config properties"):
            load_config(config_file)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """Test a config file must hold a mapping."""
        config_file = tmp_path / "fhirdiff.yaml"
        config_file.write_text("- indent\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(config_file)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing config file."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    @pytest.mark.parametrize(
        "content",
        ["indent: 2\n", 'include_header: "no"\n', "not_applicable: null\n", "include_field: 1\n"],
    )
    def test_wrong_value_type(self, tmp_path: Path, content: str) -> None:
        """Test settings of the wrong type are rejected."""
        config_file = tmp_path / "fhirdiff.yaml"
        config_file.write_text(content)
        with pytest.raises(ValueError, match="Invalid value for config property"):
            load_config(config_file)

    def test_yaml_booleans(self, tmp_path: Path) -> None:
        """Test unquoted YAML booleans are accepted for flags."""
        config_file = tmp_path / "fhirdiff.yaml"
        config_file.write_text("include_header: no\ninclude_field: yes\n")
        config = load_config(config_file)
        assert config.include_header is False
        assert config.include_field is True
