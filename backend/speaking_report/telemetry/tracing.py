from __future__ import annotations

import json
import logging
from typing import Any

from speaking_report.models.assessment import AssessmentRecord
from speaking_report.models.report import ViewModel

logger = logging.getLogger("speaking_report.telemetry")


def _emit(kind: str, name: str, student_id: str | None, **fields: Any) -> dict[str, Any]:
    payload = {"type": kind, "name": name, "studentId": student_id, **fields}
    logger.info(json.dumps(payload, sort_keys=True))
    return payload


def emit_report_loaded(record: AssessmentRecord, source: str) -> dict[str, Any]:
    return _emit(
        "event",
        "report.loaded",
        record.student_id,
        source=source,
        testDate=record.test_date,
    )


def emit_report_load_failed(source: str, error: Exception) -> dict[str, Any]:
    return _emit(
        "event",
        "report.load_failed",
        None,
        source=source,
        error=type(error).__name__,
        message=str(error),
    )


def emit_score_metrics(view: ViewModel) -> list[dict[str, Any]]:
    """One metric per displayed score, tagged with the tier it is colored by."""
    return [
        _emit(
            "metric",
            f"report.score.{metric.key}",
            view.student_id,
            value=metric.score,
            styleTier=metric.style_tier.value,
        )
        for metric in (view.overall, *view.skills)
    ]
