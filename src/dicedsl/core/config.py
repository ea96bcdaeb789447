"""
Configuration loading for dicedsl.

Settings come from an optional ``dicedsl.toml``:

    [roll]
    seed = 42
    repeat = 1

    [output]
    expression_prefix = "> "
    result_prefix = "Result: "

    [session]
    on_error = "report"   # or "exit"

Every key is optional; missing sections fall back to the defaults below.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from dicedsl.core.errors import ConfigError

CONFIG_FILENAME = "dicedsl.toml"

ON_ERROR_REPORT = "report"
ON_ERROR_EXIT = "exit"
_ON_ERROR_CHOICES = (ON_ERROR_REPORT, ON_ERROR_EXIT)


@dataclass
class RollConfig:
    """How expressions are evaluated."""

    seed: int | None = None  # None: seeded by the system
    repeat: int = 1  # evaluations per parsed expression


@dataclass
class OutputConfig:
    """How results are printed."""

    expression_prefix: str = "> "
    result_prefix: str = "Result: "


@dataclass
class SessionConfig:
    """Interactive session behaviour."""

    on_error: str = ON_ERROR_REPORT  # "report" | "exit"

    @property
    def stop_on_error(self) -> bool:
        return self.on_error == ON_ERROR_EXIT


@dataclass
class DiceConfig:
    """Top-level configuration."""

    roll: RollConfig = field(default_factory=RollConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    path: Path | None = None  # file the values came from, if any

    def with_overrides(
        self,
        seed: int | None = None,
        repeat: int | None = None,
        on_error: str | None = None,
    ) -> "DiceConfig":
        """Return a copy with command-line values applied over file values.

        Raises:
            ConfigError: If an override is out of range.
        """
        roll = replace(
            self.roll,
            seed=self.roll.seed if seed is None else seed,
            repeat=self.roll.repeat if repeat is None else repeat,
        )
        session = self.session
        if on_error is not None:
            _check_on_error(on_error)
            session = SessionConfig(on_error=on_error)
        _check_repeat(roll.repeat)
        return replace(self, roll=roll, session=session)


def load_config(path: Path) -> DiceConfig:
    """Load configuration from a TOML file.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or holds
            invalid values.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    roll_data = _section(data, "roll", path)
    output_data = _section(data, "output", path)
    session_data = _section(data, "session", path)

    seed = roll_data.get("seed")
    if seed is not None and not _is_int(seed):
        raise ConfigError(f"{path}: roll.seed must be an integer, got {seed!r}")

    repeat = roll_data.get("repeat", 1)
    if not _is_int(repeat):
        raise ConfigError(f"{path}: roll.repeat must be an integer, got {repeat!r}")
    _check_repeat(repeat)

    on_error = session_data.get("on_error", ON_ERROR_REPORT)
    _check_on_error(on_error)

    return DiceConfig(
        roll=RollConfig(seed=seed, repeat=repeat),
        output=OutputConfig(
            expression_prefix=str(output_data.get("expression_prefix", "> ")),
            result_prefix=str(output_data.get("result_prefix", "Result: ")),
        ),
        session=SessionConfig(on_error=on_error),
        path=path,
    )


def find_config(explicit: Path | None = None, cwd: Path | None = None) -> DiceConfig:
    """Load ``explicit`` if given, else ``./dicedsl.toml`` if present, else defaults.

    Raises:
        ConfigError: If an explicitly requested file does not exist.
    """
    if explicit is not None:
        if not explicit.is_file():
            raise ConfigError(f"Config file not found: {explicit}")
        return load_config(explicit)

    candidate = (cwd or Path.cwd()) / CONFIG_FILENAME
    if candidate.is_file():
        return load_config(candidate)
    return DiceConfig()


def _section(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: [{name}] must be a table")
    return section


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_repeat(repeat: int) -> None:
    if repeat < 0:
        raise ConfigError(f"roll.repeat cannot be negative, got {repeat}")


def _check_on_error(on_error: Any) -> None:
    if on_error not in _ON_ERROR_CHOICES:
        raise ConfigError(
            f"session.on_error must be one of {', '.join(_ON_ERROR_CHOICES)}, got {on_error!r}"
        )
