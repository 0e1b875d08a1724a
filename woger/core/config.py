"""Typed configuration loading and access.

Configuration comes from two places:
- the environment (`EDITOR`), which names the editor used to write the
  release notes
- an optional `woger.toml` in the project directory, holding project-wide
  variable defaults and tuning for the GNU availability poll
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_str, get_str_map, get_table

__all__ = [
    "CONFIG_FILE",
    "DEFAULT_NOTES_FILE",
    "EDITOR_ENV",
    "GNU_POLL_ATTEMPTS",
    "GNU_POLL_DELAY_SECONDS",
    "Config",
    "ConfigError",
    "GnuConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE = "woger.toml"
DEFAULT_NOTES_FILE = "release-notes"
EDITOR_ENV = "EDITOR"

# A fresh upload to ftp.gnu.org usually shows up within a few minutes.
GNU_POLL_ATTEMPTS = 10
GNU_POLL_DELAY_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GnuConfig:
    """Polling parameters for the `gnu` method."""

    poll_attempts: int = GNU_POLL_ATTEMPTS
    poll_delay: float = GNU_POLL_DELAY_SECONDS


def _empty_variables() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    notes_file: str = DEFAULT_NOTES_FILE
    editor: str | None = None
    variables: dict[str, str] = field(default_factory=_empty_variables)
    gnu: GnuConfig = field(default_factory=GnuConfig)

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, object],
        environ: Mapping[str, str] | None = None,
    ) -> Config:
        """Create Config from a mapping (parsed TOML) and the environment.

        Raises:
            ValueError: If a table has the wrong shape.
        """
        env = os.environ if environ is None else environ

        variables = get_str_map(data, "variables")
        if variables is None and "variables" in data:
            raise ValueError("[variables] must map names to strings")

        gnu: StrDict = get_table(data, "gnu") or {}
        attempts = get_int(gnu, "poll_attempts")
        if attempts is not None and attempts < 1:
            raise ValueError("gnu.poll_attempts must be at least 1")
        delay = get_float(gnu, "poll_delay")
        if delay is not None and delay < 0:
            raise ValueError("gnu.poll_delay cannot be negative")

        return cls(
            notes_file=get_str(data, "notes_file") or DEFAULT_NOTES_FILE,
            editor=get_str(data, "editor") or (env.get(EDITOR_ENV, "").strip() or None),
            variables=variables or {},
            gnu=GnuConfig(
                poll_attempts=attempts if attempts is not None else GNU_POLL_ATTEMPTS,
                poll_delay=delay if delay is not None else GNU_POLL_DELAY_SECONDS,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(
    path: Path,
    environ: Mapping[str, str] | None = None,
) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to woger.toml
        environ: Environment to read EDITOR from (defaults to os.environ)

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value, environ))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(
    path: Path,
    environ: Mapping[str, str] | None = None,
) -> Result[Config, ConfigError]:
    """Load config from file, or build the default config if there is none.

    Unlike a missing file, a file that exists but cannot be parsed is an error.
    """
    if not path.exists():
        return Ok(Config.from_dict({}, environ))
    return load_config(path, environ)
