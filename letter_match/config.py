"""settings.ini parsing for the letter match board."""

from __future__ import annotations

import configparser
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from letter_match.model.round import ARABIC_LETTERS, DEFAULT_LETTERS_COUNT

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LETTER_MATCH_CONFIG"
DEFAULT_CONFIG_NAME = "settings.ini"


class ConfigError(ValueError):
    """Raised when settings.ini carries an unusable value."""


@dataclass(frozen=True)
class MatchConfig:
    letters_count: int = DEFAULT_LETTERS_COUNT
    alphabet: tuple[str, ...] = field(default=ARABIC_LETTERS)
    connector_color: str = "#3498db"
    connector_width: int = 4
    indicator_opacity: float = 0.8
    refresh_delay_ms: int = 100
    initial_refresh_delay_ms: int = 300
    delete_hit_tolerance: float = 8.0
    show_instructions: bool = True
    instructions_delay_ms: int = 500


class ConfigBackend:
    """Discovery and parsing of settings.ini."""

    def __init__(self, ini_path: Optional[str] = None) -> None:
        if ini_path is None:
            ini_path = os.getenv(CONFIG_ENV_VAR) or None
        if ini_path is None:
            base_dir = os.path.dirname(sys.argv[0])
            ini_path = str(Path(base_dir) / DEFAULT_CONFIG_NAME)
        self._path = Path(ini_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Dict[str, Dict[str, str]]:
        parser = configparser.ConfigParser(inline_comment_prefixes=(";", "#"))
        parser.read(self._path, encoding="utf-8")
        data: Dict[str, Dict[str, str]] = {}
        for section in parser.sections():
            data[section] = dict(parser.items(section))
        return data


def get_option(
    data: Mapping[str, Mapping[str, str]],
    section: str,
    option: str,
    fallback: str = "",
) -> str:
    section_map = data.get(section)
    if section_map is None:
        return fallback
    return section_map.get(option, fallback)


def _int_option(raw: str, name: str, fallback: int, minimum: int = 0) -> int:
    if not raw.strip():
        return fallback
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {value}")
    return value


def _float_option(raw: str, name: str, fallback: float, minimum: float = 0.0) -> float:
    if not raw.strip():
        return fallback
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
    if value < minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {value}")
    return value


def _bool_option(raw: str, name: str, fallback: bool) -> bool:
    text = raw.strip().lower()
    if not text:
        return fallback
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be true or false, got {raw!r}")


def _alphabet_option(raw: str) -> tuple[str, ...]:
    text = raw.strip()
    if not text:
        return ARABIC_LETTERS
    symbols = tuple(part for part in text.replace(",", " ").split() if part)
    if len(set(symbols)) != len(symbols):
        raise ConfigError("alphabet must not repeat symbols")
    return symbols


def parse_config(data: Mapping[str, Mapping[str, str]]) -> MatchConfig:
    """Build a :class:`MatchConfig` from parsed INI sections."""

    defaults = MatchConfig()

    def get(section: str, option: str) -> str:
        return get_option(data, section, option)

    alphabet = _alphabet_option(get("round", "alphabet"))
    letters_count = _int_option(
        get("round", "letters_count"), "letters_count", defaults.letters_count, minimum=1
    )
    if letters_count > len(alphabet):
        raise ConfigError(
            f"letters_count {letters_count} exceeds alphabet size {len(alphabet)}"
        )

    opacity = _float_option(
        get("display", "indicator_opacity"), "indicator_opacity", defaults.indicator_opacity
    )
    if opacity > 1.0:
        raise ConfigError(f"indicator_opacity must be between 0 and 1, got {opacity}")

    return MatchConfig(
        letters_count=letters_count,
        alphabet=alphabet,
        connector_color=get("display", "connector_color").strip() or defaults.connector_color,
        connector_width=_int_option(
            get("display", "connector_width"), "connector_width", defaults.connector_width, minimum=1
        ),
        indicator_opacity=opacity,
        refresh_delay_ms=_int_option(
            get("display", "refresh_delay_ms"), "refresh_delay_ms", defaults.refresh_delay_ms
        ),
        initial_refresh_delay_ms=_int_option(
            get("display", "initial_refresh_delay_ms"),
            "initial_refresh_delay_ms",
            defaults.initial_refresh_delay_ms,
        ),
        delete_hit_tolerance=_float_option(
            get("display", "delete_hit_tolerance"),
            "delete_hit_tolerance",
            defaults.delete_hit_tolerance,
        ),
        show_instructions=_bool_option(
            get("ui", "show_instructions"), "show_instructions", defaults.show_instructions
        ),
        instructions_delay_ms=_int_option(
            get("ui", "instructions_delay_ms"),
            "instructions_delay_ms",
            defaults.instructions_delay_ms,
        ),
    )


def load_config(ini_path: Optional[str] = None) -> MatchConfig:
    backend = ConfigBackend(ini_path)
    if not backend.path.exists():
        logger.info("No settings file at %s; using defaults", backend.path)
        return MatchConfig()
    config = parse_config(backend.load())
    logger.info("Loaded settings from %s", backend.path)
    return config
