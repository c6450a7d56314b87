"""Generator settings resolution.

Settings are pass-through configuration for the scanner code generator: the
default column-name casing, whether scans must follow column order, and the
all-types extraction policy. Values come from (highest first) explicit
overrides, ``EASYSCAN_*`` environment variables, an optional YAML settings
file, and built-in defaults. Environment variables are loaded from a .env
file at module import time via python-dotenv.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Idempotent; does nothing if already loaded or missing
load_dotenv()

DEFAULT_CONFIG_PATH: str = ".easyscan.yml"
CONFIG_PATH_ENV: str = "EASYSCAN_CONFIG"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigValidationError(RuntimeError):
    """Raised when strict settings validation fails."""


class CaseStyle(str, enum.Enum):
    """Default casing applied to field names when no tag names a column."""

    LOWER = "lower"
    CAMEL = "camel"
    KEBAB = "kebab"
    SNAKE = "snake"
    PASCAL = "pascal"


@dataclass(frozen=True)
class GeneratorSettings:
    """Settings handed to the generator alongside the ParseResult."""

    default_case: CaseStyle = CaseStyle.LOWER
    any_order: bool = False
    all_types: bool = False
    output_filename: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["default_case"] = self.default_case.value
        return payload


# Environment variable -> settings key
_ENV_KEYS: dict[str, str] = {
    "EASYSCAN_ALL_TYPES": "all_types",
    "EASYSCAN_ANY_ORDER": "any_order",
    "EASYSCAN_DEFAULT_CASE": "default_case",
    "EASYSCAN_OUTPUT_FILENAME": "output_filename",
}

_SETTING_KEYS = {"default_case", "any_order", "all_types", "output_filename"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def _fail(msg: str, strict: bool) -> None:
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; continuing with defaults", msg)


def load_settings_file(config_path: str, strict: bool = False) -> dict[str, Any]:
    """Load and parse a YAML settings file.

    In non-strict mode this returns an empty dict on parse/read failures.
    In strict mode this raises ``ConfigValidationError``.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Settings file not found: {config_path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse settings YAML at {config_path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        return {}

    if not isinstance(payload, dict):
        _fail(f"Unexpected settings payload type: {type(payload).__name__}", strict)
        return {}

    unknown = sorted(set(payload) - _SETTING_KEYS)
    if unknown:
        _fail(f"Unknown settings keys in {config_path}: {', '.join(unknown)}", strict)
        payload = {k: v for k, v in payload.items() if k in _SETTING_KEYS}

    return payload


def resolve_case_style(raw: Any, strict: bool = False) -> CaseStyle:
    """Map a case name onto ``CaseStyle``, defaulting to lower case."""
    if isinstance(raw, CaseStyle):
        return raw
    try:
        return CaseStyle(str(raw).strip().lower())
    except ValueError:
        choices = ", ".join(style.value for style in CaseStyle)
        _fail(f"Invalid default_case '{raw}' (expected one of: {choices})", strict)
        return CaseStyle.LOWER


def _coerce_bool(key: str, raw: Any, strict: bool = False) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    _fail(f"Setting '{key}' must be a boolean, got '{raw}'", strict)
    return False


def _env_settings() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for env_name, key in _ENV_KEYS.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip():
            values[key] = raw.strip()
    return values


def load_generator_settings(
    config_path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    strict: Optional[bool] = None,
) -> GeneratorSettings:
    """Resolve generator settings from overrides, environment and YAML.

    Args:
        config_path: YAML settings file. Defaults to ``$EASYSCAN_CONFIG`` or
            ``.easyscan.yml``; a missing default file is not an error.
        overrides: Explicit values (e.g. CLI flags). ``None`` entries are
            treated as unset.
        strict: Raise on invalid settings instead of falling back. Defaults
            to ``STRICT_CONFIG_VALIDATION``.

    Returns:
        The resolved GeneratorSettings.

    Raises:
        ConfigValidationError: In strict mode, on any invalid setting.
    """
    if strict is None:
        strict = resolve_strict_config_validation(default=False)

    if config_path is None:
        config_path = os.getenv(CONFIG_PATH_ENV)
    if config_path is None:
        file_values = (
            load_settings_file(DEFAULT_CONFIG_PATH, strict=strict)
            if os.path.isfile(DEFAULT_CONFIG_PATH)
            else {}
        )
    else:
        file_values = load_settings_file(config_path, strict=strict)

    merged: dict[str, Any] = dict(file_values)
    merged.update(_env_settings())
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    output_filename = merged.get("output_filename")
    settings = GeneratorSettings(
        default_case=resolve_case_style(merged.get("default_case", CaseStyle.LOWER), strict),
        any_order=_coerce_bool("any_order", merged.get("any_order", False), strict),
        all_types=_coerce_bool("all_types", merged.get("all_types", False), strict),
        output_filename=str(output_filename) if output_filename else None,
    )
    logger.debug("Resolved generator settings: %s", settings.to_dict())
    return settings
