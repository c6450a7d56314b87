"""Run artifact helpers: the JSON manifest handed to the scanner generator."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Optional

from declextract.config import GO_EXTENSION
from declextract.models import ParseResult
from scancore.startup_config import GeneratorSettings

OUTPUT_SUFFIX = "_easyscan"
MANIFEST_EXTENSION = ".json"
MANIFEST_VERSION = "1"


def resolve_output_path(
    source: str,
    package_name: str,
    output_filename: Optional[str] = None,
    extension: str = MANIFEST_EXTENSION,
) -> str:
    """Pick the output path for one input.

    An explicit ``output_filename`` wins. Otherwise a directory input writes
    ``<dir>/<package>_easyscan<ext>`` and a file input writes
    ``<stem>_easyscan<ext>`` next to the file.
    """
    if output_filename:
        return output_filename
    if os.path.isdir(source):
        return os.path.join(source, f"{package_name}{OUTPUT_SUFFIX}{extension}")
    stem = source[: -len(GO_EXTENSION)] if source.endswith(GO_EXTENSION) else source
    return f"{stem}{OUTPUT_SUFFIX}{extension}"


def build_manifest(
    result: ParseResult,
    settings: GeneratorSettings,
    run_id: str,
) -> dict[str, Any]:
    """Combine a ParseResult and generator settings into one payload."""
    payload = result.to_dict()
    payload["settings"] = settings.to_dict()
    payload["manifest_version"] = MANIFEST_VERSION
    payload["run_id"] = run_id
    payload["timestamp_utc"] = datetime.now(timezone.utc).isoformat()
    return payload


def write_manifest(manifest: dict[str, Any], path: str) -> str:
    """Write a manifest as JSON and return its path."""
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
        f.write("\n")
    return path
