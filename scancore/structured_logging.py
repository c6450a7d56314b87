"""Logging setup for easyscan runs.

Every record carries the run id, the current phase (``extract`` or
``write``) and the Go file or package directory being processed.
"""

from __future__ import annotations

import contextvars
import logging
import uuid
from contextlib import contextmanager
from typing import Iterator

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | run_id=%(run_id)s | phase=%(phase)s | "
    "source=%(source)s | %(name)s | %(message)s"
)

_RUN_ID_VAR: contextvars.ContextVar[str] = contextvars.ContextVar("run_id", default="-")
_PHASE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar("phase", default="-")
_SOURCE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar("source", default="-")


class RunContextFilter(logging.Filter):
    """Stamp run id, phase and source path onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID_VAR.get()
        record.phase = _PHASE_VAR.get()
        record.source = _SOURCE_VAR.get()
        return True


def configure_structured_logging(verbose: bool = False) -> None:
    """Configure root logging for the driver.

    Repeated calls reuse the existing root handlers.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not root_logger.handlers:
        root_logger.addHandler(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in root_logger.handlers:
        handler.setFormatter(formatter)
        if not any(isinstance(f, RunContextFilter) for f in handler.filters):
            handler.addFilter(RunContextFilter())


def set_run_id(run_id: str | None = None) -> str:
    """Set or generate the id recorded in logs and manifests."""
    value = run_id or uuid.uuid4().hex[:12]
    _RUN_ID_VAR.set(value)
    return value


def get_run_id() -> str:
    return _RUN_ID_VAR.get()


@contextmanager
def phase_scope(phase: str, source: str | None = None) -> Iterator[None]:
    """Tag logs emitted inside the block with a phase and optional input path."""
    phase_token = _PHASE_VAR.set(phase)
    source_token = _SOURCE_VAR.set(source) if source is not None else None
    try:
        yield
    finally:
        if source_token is not None:
            _SOURCE_VAR.reset(source_token)
        _PHASE_VAR.reset(phase_token)
