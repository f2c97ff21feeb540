"""Render configuration — display mode, null placeholder, surface width.

Values are resolved from, lowest to highest precedence: defaults, the
``[display]`` table of ``~/.tabfit/config.toml``, ``TABFIT_*`` environment
variables (``.env`` files are loaded first), and explicit overrides passed
by the CLI.
"""

from __future__ import annotations

import enum
import os
import shutil
import tomllib
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from tabfit.exceptions import ConfigError

_CONFIG_DIR = Path.home() / ".tabfit"
CONFIG_PATH = _CONFIG_DIR / "config.toml"

# Default .env search paths (tried in order)
_ENV_PATHS = [
    _CONFIG_DIR / ".env",
    Path.cwd() / ".env",
]

DEFAULT_NULL_VALUE = "NULL"
FALLBACK_SURFACE_WIDTH = 80


class DisplayMode(enum.Enum):
    FIXED = "fixed"
    COLUMNS = "columns"
    ROW = "row"
    CLASSIC = "classic"

    @classmethod
    def parse(cls, value: str | DisplayMode) -> DisplayMode:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ConfigError(f"Unknown display mode '{value}'. Valid: {valid}") from None


@dataclass(frozen=True)
class RenderConfig:
    mode: DisplayMode = DisplayMode.FIXED
    null_value: str = DEFAULT_NULL_VALUE
    width: int | None = None

    def surface_width(self) -> int:
        """Configured width, or the terminal width at the time of the call."""
        if self.width is not None:
            return self.width
        return shutil.get_terminal_size((FALLBACK_SURFACE_WIDTH, 24)).columns

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["mode"] = self.mode.value
        return data


def _load_env() -> None:
    for env_path in _ENV_PATHS:
        if env_path.exists():
            load_dotenv(env_path)


def _parse_width(raw: Any, source: str) -> int:
    try:
        width = int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{source}: width must be an integer, got {raw!r}") from None
    if width < 1:
        raise ConfigError(f"{source}: width must be positive, got {width}")
    return width


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e
    display = data.get("display", {})
    if not isinstance(display, dict):
        raise ConfigError(f"{path}: [display] must be a table")
    return display


def load_config(
    path: Path | None = None,
    *,
    mode: str | DisplayMode | None = None,
    null_value: str | None = None,
    width: int | None = None,
) -> RenderConfig:
    """Resolve the render configuration; keyword overrides win."""
    _load_env()
    cfg = RenderConfig()

    toml_path = path or CONFIG_PATH
    display = _read_toml(toml_path)
    if "mode" in display:
        cfg = replace(cfg, mode=DisplayMode.parse(display["mode"]))
    if "null_value" in display:
        cfg = replace(cfg, null_value=str(display["null_value"]))
    if "width" in display:
        cfg = replace(cfg, width=_parse_width(display["width"], str(toml_path)))

    env_mode = os.environ.get("TABFIT_MODE")
    if env_mode:
        cfg = replace(cfg, mode=DisplayMode.parse(env_mode))
    env_null = os.environ.get("TABFIT_NULL_VALUE")
    if env_null is not None:
        cfg = replace(cfg, null_value=env_null)
    env_width = os.environ.get("TABFIT_WIDTH")
    if env_width:
        cfg = replace(cfg, width=_parse_width(env_width, "TABFIT_WIDTH"))

    if mode is not None:
        cfg = replace(cfg, mode=DisplayMode.parse(mode))
    if null_value is not None:
        cfg = replace(cfg, null_value=null_value)
    if width is not None:
        cfg = replace(cfg, width=_parse_width(width, "--width"))
    return cfg
