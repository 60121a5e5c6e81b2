"""Tests for configuration loading."""

import tempfile
from pathlib import Path

import pytest

from config import Config, ConfigError, find_config, load_config, parse_config_file
from scanner.engine import DEFAULT_GC_INTERVAL
from scanner.resolver import DEFAULT_CANDIDATES


class TestLoadConfig:
    """Tests for reading config files."""

    def test_defaults(self):
        """Test that no file means default settings."""
        config = load_config()

        assert config.extensions == [".js", ".ts"]
        assert config.candidates == list(DEFAULT_CANDIDATES)
        assert config.gc_interval == DEFAULT_GC_INTERVAL
        assert config.format == "text"

    def test_yaml(self):
        """Test loading a YAML config file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".deadexports.yaml"
            path.write_text("extensions: [.js, .mjs]\ngc_interval: 0\nformat: json\n")

            config = load_config(path)

        assert config.extensions == [".js", ".mjs"]
        assert config.gc_interval == 0
        assert config.format == "json"

    def test_toml(self):
        """Test loading a TOML config file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".deadexports.toml"
            path.write_text('candidates = [".js", "/index.js"]\n')

            config = load_config(path)

        assert config.candidates == [".js", "/index.js"]

    def test_json(self):
        """Test loading a JSON config file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".deadexports.json"
            path.write_text('{"gc_interval": 500}')

            config = load_config(path)

        assert config.gc_interval == 500

    def test_empty_yaml(self):
        """Test that an empty file gives defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".deadexports.yml"
            path.write_text("")

            assert load_config(path) == Config()

    def test_search_dir(self):
        """Test finding a config file next to the entry."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / ".deadexports.json").write_text('{"format": "json"}')
            (root / ".deadexports.yaml").write_text("format: text\n")

            assert find_config(root) == root / ".deadexports.yaml"
            assert load_config(search_dir=root).format == "text"

    def test_search_dir_without_config(self):
        """Test that a directory without config files gives defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            assert find_config(Path(tmpdir)) is None
            assert load_config(search_dir=Path(tmpdir)) == Config()


class TestInvalidConfig:
    """Tests for rejected configuration."""

    def _load(self, name, content):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / name
            path.write_text(content)
            return load_config(path)

    def test_unknown_key(self):
        """Test that misspelled keys are rejected."""
        with pytest.raises(ConfigError, match="unknown config keys"):
            self._load("c.yaml", "extension: [.js]\n")

    def test_bad_format(self):
        """Test that only known output formats are accepted."""
        with pytest.raises(ConfigError, match="format"):
            self._load("c.yaml", "format: xml\n")

    def test_bad_extensions(self):
        """Test that extensions must be a list of strings."""
        with pytest.raises(ConfigError, match="extensions"):
            self._load("c.yaml", "extensions: .js\n")

    @pytest.mark.parametrize("value", ["-1", "true", "ten"])
    def test_bad_gc_interval(self, value):
        """Test that the interval must be a non-negative integer."""
        with pytest.raises(ConfigError, match="gc_interval"):
            self._load("c.yaml", f"gc_interval: {value}\n")

    def test_not_a_mapping(self):
        """Test that the top level must be a mapping."""
        with pytest.raises(ConfigError, match="mapping"):
            self._load("c.yaml", "- .js\n- .ts\n")

    def test_syntax_error(self):
        """Test that parse errors become config errors."""
        with pytest.raises(ConfigError, match="invalid config file"):
            self._load("c.json", "{not json")

    def test_unsupported_suffix(self):
        """Test that unknown file types are rejected."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "c.ini"
            path.write_text("[x]\n")
            with pytest.raises(ConfigError, match="unsupported"):
                parse_config_file(path)

    def test_missing_file(self):
        """Test that an explicit missing file is an error."""
        with pytest.raises(ConfigError, match="unable to read"):
            load_config(Path("/nonexistent/.deadexports.yaml"))


class TestMerged:
    """Tests for command line overrides."""

    def test_none_keeps_value(self):
        """Test that unset overrides keep file values."""
        config = Config(format="json").merged(format=None, gc_interval=None)
        assert config.format == "json"

    def test_override(self):
        """Test that overrides replace file values."""
        config = Config().merged(format="json", gc_interval=5)
        assert config.format == "json"
        assert config.gc_interval == 5

    def test_override_is_validated(self):
        """Test that overrides are validated too."""
        with pytest.raises(ConfigError):
            Config().merged(gc_interval=-3)
