from __future__ import annotations

import logging
import time
from typing import Any

logger = logging.getLogger("speaking_report.telemetry")


class Span:
    """Times a block of work and records whether it raised.

    Exceptions leaving the block are never touched, so frozen exception
    types propagate unchanged.
    """

    def __init__(self, name: str, attributes: dict[str, Any] | None = None) -> None:
        self.name = name
        self.attributes = dict(attributes or {})
        self.status: str | None = None
        self.duration_ms: float | None = None
        self._started = 0.0

    def __enter__(self) -> Span:
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.status = "ok" if exc_type is None else "error"
        self.duration_ms = round((time.perf_counter() - self._started) * 1000, 3)
        logger.debug("span %s finished (%s, %.3f ms)", self.name, self.status, self.duration_ms)
        return False


def start_span(name: str, attributes: dict[str, Any] | None = None) -> Span:
    return Span(name, attributes)
