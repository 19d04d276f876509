from __future__ import annotations

import logging
from pathlib import Path

import pytest

from protojson.core.config import CodecSettings
from protojson.core.decoder import DecodeOptions
from protojson.core.errors import ConfigError

_ENV_KEYS = [
    "PROTOJSON_STRICT_UNKNOWN_FIELDS",
    "PROTOJSON_MAX_DEPTH",
    "PROTOJSON_LOG_LEVEL",
]


def _clear_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write(tmp: Path, name: str, content: str) -> Path:
    p = tmp / name
    p.write_text(content)
    return p


def test_codec_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    # Arrange TOML
    _write(
        tmp_path,
        "protojson.toml",
        """
        [codec]
        strict_unknown_fields = false
        max_depth = 20
        log_level = "info"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    # Arrange ENV that should override TOML
    _clear_env(monkeypatch)
    monkeypatch.setenv("PROTOJSON_STRICT_UNKNOWN_FIELDS", "yes")
    monkeypatch.setenv("PROTOJSON_MAX_DEPTH", "40")

    # Act
    s = CodecSettings.load()

    # Assert precedence: env > TOML
    assert s.strict_unknown_fields is True
    assert s.max_depth == 40
    assert s.log_level == "INFO"  # TOML only


def test_codec_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    _write(
        tmp_path,
        "pyproject.toml",
        """
        [project]
        name = "consumer"

        [tool.protojson.codec]
        strict_unknown_fields = true
        max_depth = 12
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = CodecSettings.load()

    assert s.strict_unknown_fields is True
    assert s.max_depth == 12
    assert s.to_decode_options() == DecodeOptions(strict_unknown_fields=True, max_depth=12)


def test_codec_settings_top_level_keys_and_explicit_path(tmp_path: Path, monkeypatch) -> None:
    cfg = _write(tmp_path, "custom.toml", "max_depth = 7\n")
    _clear_env(monkeypatch)

    s = CodecSettings.from_toml(cfg)

    assert s.max_depth == 7
    assert s.strict_unknown_fields is False


def test_codec_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    # No TOML, no env
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = CodecSettings.load()

    assert s == CodecSettings()
    assert s.max_depth == 100
    assert s.log_level is None


def test_unparseable_values_are_skipped_with_warning(tmp_path: Path, monkeypatch, caplog) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("PROTOJSON_STRICT_UNKNOWN_FIELDS", "sometimes")
    monkeypatch.setenv("PROTOJSON_MAX_DEPTH", "deep")
    monkeypatch.setenv("PROTOJSON_LOG_LEVEL", "loud")

    with caplog.at_level(logging.WARNING, logger="protojson"):
        s = CodecSettings.load()

    assert s == CodecSettings()
    messages = [r.getMessage() for r in caplog.records]
    assert any("strict_unknown_fields" in m for m in messages)
    assert any("max_depth" in m for m in messages)
    assert any("log_level" in m for m in messages)


def test_unreadable_toml_is_skipped(tmp_path: Path, monkeypatch, caplog) -> None:
    _write(tmp_path, "protojson.toml", "[codec\nmax_depth = ")
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    with caplog.at_level(logging.WARNING, logger="protojson"):
        s = CodecSettings.load()

    assert s.max_depth == 100
    assert any("unreadable" in r.getMessage() for r in caplog.records)


def test_non_positive_max_depth_is_a_config_error(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("PROTOJSON_MAX_DEPTH", "0")

    with pytest.raises(ConfigError):
        CodecSettings.load()
    with pytest.raises(ConfigError):
        CodecSettings(max_depth=-3)
