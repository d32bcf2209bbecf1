from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from speaking_report.clients.report_api import ReportApiClient, ReportApiError
from speaking_report.models.assessment import AssessmentRecord, record_from_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetrievalError(Exception):
    message: str
    source: str | None = None

    def __str__(self) -> str:
        return self.message


class RecordNotFoundError(RetrievalError):
    pass


class InvalidRecordError(RetrievalError):
    pass


class AssessmentSource(Protocol):
    @property
    def description(self) -> str: ...

    async def get_current(self) -> AssessmentRecord: ...


def _build_record(payload: Any, source: str) -> AssessmentRecord:
    try:
        return record_from_payload(payload)
    except ValueError as exc:
        raise InvalidRecordError(f"Invalid assessment record: {exc}", source=source) from exc


class FileAssessmentSource:
    """Reads the current assessment record from a JSON file on disk."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def description(self) -> str:
        return str(self._path)

    def _read(self) -> str:
        return self._path.read_text(encoding="utf-8")

    async def get_current(self) -> AssessmentRecord:
        source = self.description
        try:
            raw = await asyncio.to_thread(self._read)
        except FileNotFoundError as exc:
            raise RecordNotFoundError(
                f"Assessment data file not found: {source}", source=source
            ) from exc
        except OSError as exc:
            raise RetrievalError(
                f"Failed to read assessment data from {source}: {exc}", source=source
            ) from exc
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidRecordError(f"Invalid JSON in {source}: {exc}", source=source) from exc
        record = _build_record(payload, source)
        logger.debug("Loaded assessment record %s from %s", record.student_id, source)
        return record


class RemoteAssessmentSource:
    """Fetches the current assessment record from a remote report service."""

    def __init__(self, client: ReportApiClient, *, base_url: str = "") -> None:
        self._client = client
        self._base_url = base_url

    @property
    def description(self) -> str:
        return self._base_url or "remote report service"

    async def get_current(self) -> AssessmentRecord:
        source = self.description
        try:
            payload = await self._client.get_student_report()
        except ReportApiError as exc:
            raise RetrievalError(
                f"Failed to fetch assessment record: {exc}", source=source
            ) from exc
        return _build_record(payload, source)

    async def close(self) -> None:
        await self._client.close()
