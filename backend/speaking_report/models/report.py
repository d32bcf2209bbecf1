from __future__ import annotations

from dataclasses import dataclass

from speaking_report.models.assessment import StyleTier


@dataclass(frozen=True)
class MetricView:
    key: str
    label: str
    score: float
    formatted_score: str
    style_tier: StyleTier
    feedback: str
    progress_fraction: float

    @property
    def progress_percent(self) -> float:
        return self.progress_fraction * 100


@dataclass(frozen=True)
class ChartPoint:
    label: str
    value: float


@dataclass(frozen=True)
class ChartSpec:
    kind: str
    title: str
    points: tuple[ChartPoint, ...]
    scale_max: float
    step: float


@dataclass(frozen=True)
class ViewModel:
    student_id: str
    student_name: str
    test_date: str
    overall: MetricView
    skills: tuple[MetricView, ...]
    chart_series: tuple[ChartPoint, ...]
    charts: tuple[ChartSpec, ...]
