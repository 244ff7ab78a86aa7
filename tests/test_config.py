"""Tests for CodecConfig."""

import json
from datetime import datetime, timezone

import pytest

from superjson import CodecConfig, ConfigurationError
from superjson.config import parse_handler_names


class TestCodecConfig:
    """Tests for configuration construction and validation."""

    def test_defaults(self):
        config = CodecConfig()
        assert config.marker == "#!"
        assert config.handlers == ["Date", "RegExp"]
        assert config.indent is None

    def test_handlers_from_string(self):
        config = CodecConfig(handlers="Date, Symbol")
        assert config.handlers == ["Date", "Symbol"]

    def test_unknown_handler(self):
        with pytest.raises(ConfigurationError, match="Unknown handler"):
            CodecConfig(handlers=["Date", "Decimal"])

    def test_duplicate_handler(self):
        with pytest.raises(ConfigurationError, match="Duplicate"):
            CodecConfig(handlers=["Date", "Date"])

    def test_handlers_wrong_type(self):
        with pytest.raises(ConfigurationError, match="list of names"):
            CodecConfig(handlers=5)

    def test_invalid_marker(self):
        with pytest.raises(ConfigurationError):
            CodecConfig(marker="##")

    @pytest.mark.parametrize("indent", [-1, "2", 1.5, True])
    def test_invalid_indent(self, indent):
        with pytest.raises(ConfigurationError, match="Indent"):
            CodecConfig(indent=indent)

    def test_create_codec(self):
        config = CodecConfig(marker="@", handlers=["Symbol", "Date"])
        codec = config.create_codec()
        assert codec.marker == "@"
        assert codec.registry.list_names() == ["Symbol", "Date"]

        epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert codec.stringify(epoch) == '"@Date[0]"'

    def test_create_codec_fresh_handlers(self):
        config = CodecConfig()
        first = list(config.create_codec().registry)
        second = list(config.create_codec().registry)
        assert first[0] is not second[0]


class TestConfigFile:
    """Tests for loading and saving config files."""

    def test_load_missing_file(self, tmp_path):
        config = CodecConfig.load(tmp_path / "missing.json")
        assert config == CodecConfig()

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "superjson.json"
        config = CodecConfig(marker="~>", handlers=["Date", "Function"], indent=4)
        config.save(path)

        with open(path) as f:
            assert json.load(f) == {
                "marker": "~>",
                "handlers": ["Date", "Function"],
                "indent": 4,
            }

        assert CodecConfig.load(path) == config

    def test_load_string_path(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"handlers": ["RegExp"]}')
        assert CodecConfig.load(str(path)).handlers == ["RegExp"]

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{oops")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            CodecConfig.load(path)

    def test_load_non_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigurationError, match="JSON object"):
            CodecConfig.load(path)

    def test_load_unknown_keys(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"magic": "#!"}')
        with pytest.raises(ConfigurationError, match="Unknown config keys"):
            CodecConfig.load(path)


class TestConfigFromEnv:
    """Tests for environment-based configuration."""

    def test_no_variables(self, monkeypatch):
        for name in ("SUPERJSON_MARKER", "SUPERJSON_HANDLERS", "SUPERJSON_INDENT"):
            monkeypatch.delenv(name, raising=False)
        assert CodecConfig.from_env() == CodecConfig()

    def test_all_variables(self, monkeypatch):
        monkeypatch.setenv("SUPERJSON_MARKER", "@")
        monkeypatch.setenv("SUPERJSON_HANDLERS", "Date,Symbol")
        monkeypatch.setenv("SUPERJSON_INDENT", "2")

        config = CodecConfig.from_env()
        assert config == CodecConfig(marker="@", handlers=["Date", "Symbol"], indent=2)

    def test_invalid_indent(self, monkeypatch):
        monkeypatch.setenv("SUPERJSON_INDENT", "wide")
        with pytest.raises(ConfigurationError, match="SUPERJSON_INDENT"):
            CodecConfig.from_env()

    def test_invalid_marker(self, monkeypatch):
        monkeypatch.setenv("SUPERJSON_MARKER", "abc")
        with pytest.raises(ConfigurationError):
            CodecConfig.from_env()


class TestParseHandlerNames:
    def test_parse(self):
        assert parse_handler_names("Date, RegExp,,Symbol ") == [
            "Date",
            "RegExp",
            "Symbol",
        ]

    def test_empty(self):
        assert parse_handler_names("") == []
