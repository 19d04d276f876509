"""
Settings for the protojson codec.

Defines CodecSettings, a frozen dataclass carrying the decode policy and the
log level. Defaults are sourced from protojson.core.constants.

Precedence
- environment (``PROTOJSON_*``) > TOML > defaults.
- TOML search order: ``./protojson.toml`` (a ``[codec]`` table or top-level
  keys), then ``./pyproject.toml`` under ``[tool.protojson.codec]``.

Notes
- Unparseable values are skipped with a WARNING and the lower-precedence value
  is kept. A parseable but invalid ``max_depth`` (< 1) raises ConfigError.
- Settings are read explicitly; the codec itself never consults the
  environment. Pass ``settings.to_decode_options()`` to ``decode``.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .constants import DEFAULT_MAX_DEPTH, ENV_PREFIX
from .decoder import DecodeOptions
from .errors import ConfigError
from .logging import parse_log_level

__all__ = ["CodecSettings"]

logger = logging.getLogger(__name__)

_TRUE = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE = frozenset({"0", "false", "f", "no", "n", "off"})


def _parse_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    if isinstance(value, str):
        lo = value.strip().lower()
        if lo in _TRUE:
            return True
        if lo in _FALSE:
            return False
    return None


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class CodecSettings:
    """
    Runtime settings for decoding and logging.

    Attributes:
        strict_unknown_fields (bool): Reject JSON keys that name no field.
        max_depth (int): Maximum message nesting accepted by the decoder (>= 1).
        log_level (str | None): Level name for ``protojson.core.logging.setup_logging``.

    Raises:
        ConfigError: If max_depth is below 1.

    Examples:
        >>> CodecSettings(strict_unknown_fields=True).to_decode_options()
        DecodeOptions(strict_unknown_fields=True, max_depth=100)
    """

    strict_unknown_fields: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    log_level: str | None = None

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ConfigError(f"max_depth must be >= 1, got {self.max_depth}")

    def to_decode_options(self) -> DecodeOptions:
        """Return the DecodeOptions these settings describe."""
        return DecodeOptions(
            strict_unknown_fields=self.strict_unknown_fields,
            max_depth=self.max_depth,
        )

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(
        cls, base: CodecSettings, cfg: dict[str, Any] | None, source: str = "mapping"
    ) -> CodecSettings:
        """Apply a loose config mapping onto CodecSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "strict_unknown_fields" in cfg:
            flag = _parse_bool(cfg["strict_unknown_fields"])
            if flag is None:
                logger.warning(
                    "%s: ignoring strict_unknown_fields=%r (expected a boolean)",
                    source,
                    cfg["strict_unknown_fields"],
                )
            else:
                s = replace(s, strict_unknown_fields=flag)

        if "max_depth" in cfg:
            depth = _parse_int(cfg["max_depth"])
            if depth is None:
                logger.warning(
                    "%s: ignoring max_depth=%r (expected an integer)", source, cfg["max_depth"]
                )
            else:
                s = replace(s, max_depth=depth)

        if "log_level" in cfg:
            level = cfg["log_level"]
            if isinstance(level, str) and parse_log_level(level) is not None:
                s = replace(s, log_level=level.strip().upper())
            else:
                logger.warning("%s: ignoring log_level=%r (expected a level name)", source, level)

        return s

    @classmethod
    def from_env(cls, base: CodecSettings | None = None, prefix: str = ENV_PREFIX) -> CodecSettings:
        """
        Build CodecSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - PROTOJSON_STRICT_UNKNOWN_FIELDS (1/0/true/false/yes/no/on/off)
            - PROTOJSON_MAX_DEPTH
            - PROTOJSON_LOG_LEVEL
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("strict_unknown_fields", "max_depth", "log_level"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping, source="environment")

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> CodecSettings:
        """
        Build CodecSettings from a TOML file.

        Search order when `path` is None:
            1) ./protojson.toml (with either a [codec] table or direct keys)
            2) ./pyproject.toml under [tool.protojson.codec]

        Returns defaults if no file is present. Unreadable files are logged
        and skipped.
        """
        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "protojson.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        source = "toml"
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logger.warning("skipping unreadable settings file %s: %s", p, exc)
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool")
                section = tool.get("protojson") if isinstance(tool, dict) else None
                cfg = section.get("codec") if isinstance(section, dict) else None
            elif isinstance(data.get("codec"), dict):
                cfg = data["codec"]
            else:
                cfg = data
            if cfg:
                source = str(p)
                logger.debug("loaded codec settings from %s", p)
                break

        return cls._apply_mapping(cls(), cfg, source=source)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> CodecSettings:
        """
        Load CodecSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (protojson.toml, pyproject.toml).

        Returns:
            CodecSettings
        """
        s = cls.from_toml(path)
        return cls.from_env(base=s)
