from __future__ import annotations

import logging

from speaking_report.models.assessment import (
    MAX_SCORE,
    SKILL_LABELS,
    SKILL_NAMES,
    AssessmentRecord,
)
from speaking_report.models.report import ChartPoint, ChartSpec, MetricView, ViewModel
from speaking_report.repositories.assessment_repository import AssessmentSource, RetrievalError
from speaking_report.services.classifier import feedback_for, style_tier_of
from speaking_report.telemetry.otel import start_span
from speaking_report.telemetry.tracing import (
    emit_report_load_failed,
    emit_report_loaded,
    emit_score_metrics,
)

logger = logging.getLogger(__name__)

CHART_STEP = 1.0


def format_score(score: float) -> str:
    return f"{score:.1f}"


def progress_fraction(score: float) -> float:
    return min(max(score / MAX_SCORE, 0.0), 1.0)


def _metric(key: str, label: str, score: float) -> MetricView:
    return MetricView(
        key=key,
        label=label,
        score=score,
        formatted_score=format_score(score),
        style_tier=style_tier_of(score),
        feedback=feedback_for(score, key),
        progress_fraction=progress_fraction(score),
    )


def chart_series(record: AssessmentRecord) -> tuple[ChartPoint, ...]:
    return tuple(
        ChartPoint(label=SKILL_LABELS[name], value=record.skills[name]) for name in SKILL_NAMES
    )


def build_view_model(record: AssessmentRecord) -> ViewModel:
    series = chart_series(record)
    charts = (
        ChartSpec(
            kind="radar",
            title="Skills Assessment",
            points=series,
            scale_max=MAX_SCORE,
            step=CHART_STEP,
        ),
        ChartSpec(
            kind="bar",
            title="Score",
            points=series,
            scale_max=MAX_SCORE,
            step=CHART_STEP,
        ),
    )
    return ViewModel(
        student_id=record.student_id,
        student_name=record.student_name,
        test_date=record.test_date,
        overall=_metric("overall", "Overall", record.overall_score),
        skills=tuple(
            _metric(name, SKILL_LABELS[name], record.skills[name]) for name in SKILL_NAMES
        ),
        chart_series=series,
        charts=charts,
    )


async def load_record(source: AssessmentSource) -> AssessmentRecord:
    try:
        with start_span("report.fetch", {"source": source.description}):
            record = await source.get_current()
    except RetrievalError as exc:
        logger.error("Failed to load assessment record from %s: %s", source.description, exc)
        emit_report_load_failed(source.description, exc)
        raise
    emit_report_loaded(record, source.description)
    return record


async def load_view_model(source: AssessmentSource) -> ViewModel:
    """Fetch the current record from ``source`` and adapt it for display.

    A ``RetrievalError`` from the source propagates unchanged; nothing is
    adapted or rendered in that case.
    """
    record = await load_record(source)
    with start_span("report.build_view", {"studentId": record.student_id}):
        view = build_view_model(record)
    emit_score_metrics(view)
    return view
