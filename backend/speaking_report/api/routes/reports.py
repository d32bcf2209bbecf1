from __future__ import annotations

from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from speaking_report.clients.report_api import ReportApiClient
from speaking_report.config import SettingsError, load_settings
from speaking_report.models.assessment import AssessmentRecord
from speaking_report.models.report import ChartPoint, ChartSpec, MetricView, ViewModel
from speaking_report.repositories.assessment_repository import (
    AssessmentSource,
    FileAssessmentSource,
    RemoteAssessmentSource,
    RetrievalError,
)
from speaking_report.services.report_service import load_record, load_view_model

router = APIRouter()

LOAD_FAILED_MESSAGE = "Failed to load student data"


class _MisconfiguredSource:
    """Stands in for a real source when the server settings cannot be loaded."""

    description = "server configuration"

    def __init__(self, error: SettingsError) -> None:
        self._error = error

    async def get_current(self) -> AssessmentRecord:
        raise RetrievalError(
            f"Invalid server configuration: {self._error}", source=self.description
        ) from self._error


async def _source() -> AsyncIterator[AssessmentSource]:
    try:
        settings = load_settings()
    except SettingsError as exc:
        yield _MisconfiguredSource(exc)
        return
    if settings.source_url is None:
        yield FileAssessmentSource(settings.data_path)
        return
    source = RemoteAssessmentSource(
        ReportApiClient(base_url=settings.source_url, timeout=settings.source_timeout),
        base_url=settings.source_url,
    )
    try:
        yield source
    finally:
        await source.close()


def _failure_response(exc: RetrievalError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": LOAD_FAILED_MESSAGE, "message": str(exc)},
    )


def _metric_response(metric: MetricView) -> dict[str, Any]:
    return {
        "key": metric.key,
        "label": metric.label,
        "score": metric.score,
        "formattedScore": metric.formatted_score,
        "styleTier": metric.style_tier.value,
        "cssClass": metric.style_tier.css_class,
        "feedback": metric.feedback,
        "progressFraction": metric.progress_fraction,
        "progressPercent": metric.progress_percent,
    }


def _point_response(point: ChartPoint) -> dict[str, Any]:
    return {"label": point.label, "value": point.value}


def _chart_response(chart: ChartSpec) -> dict[str, Any]:
    return {
        "type": chart.kind,
        "title": chart.title,
        "labels": [point.label for point in chart.points],
        "values": [point.value for point in chart.points],
        "scaleMax": chart.scale_max,
        "step": chart.step,
    }


def _view_response(view: ViewModel) -> dict[str, Any]:
    return {
        "student": {
            "studentId": view.student_id,
            "studentName": view.student_name,
            "testDate": view.test_date,
        },
        "overall": _metric_response(view.overall),
        "skills": [_metric_response(metric) for metric in view.skills],
        "chartSeries": [_point_response(point) for point in view.chart_series],
        "charts": [_chart_response(chart) for chart in view.charts],
    }


@router.get("/student-report")
async def get_student_report(source: AssessmentSource = Depends(_source)):
    try:
        record = await load_record(source)
    except RetrievalError as exc:
        return _failure_response(exc)
    return record.to_payload()


@router.get("/student-report/view")
async def get_student_report_view(source: AssessmentSource = Depends(_source)):
    try:
        view = await load_view_model(source)
    except RetrievalError as exc:
        return _failure_response(exc)
    return _view_response(view)
