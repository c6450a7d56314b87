"""Shared settings, logging and artifact utilities for easyscan runs."""

from scancore.structured_logging import (
    configure_structured_logging,
    get_run_id,
    phase_scope,
    set_run_id,
)
from scancore.startup_config import (
    CaseStyle,
    ConfigValidationError,
    GeneratorSettings,
    load_generator_settings,
    load_settings_file,
    resolve_case_style,
    resolve_strict_config_validation,
)
from scancore.run_artifacts import (
    build_manifest,
    resolve_output_path,
    write_manifest,
)

__all__ = [
    "configure_structured_logging",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "CaseStyle",
    "ConfigValidationError",
    "GeneratorSettings",
    "load_generator_settings",
    "load_settings_file",
    "resolve_case_style",
    "resolve_strict_config_validation",
    "build_manifest",
    "resolve_output_path",
    "write_manifest",
]
