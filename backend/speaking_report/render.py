from __future__ import annotations

from speaking_report.models.report import ChartSpec, MetricView, ViewModel

BAR_WIDTH = 30

_BADGES = {
    "excellent": "[EXCELLENT]",
    "good": "[GOOD]",
    "fair": "[FAIR]",
    "poor": "[POOR]",
}


def progress_bar(fraction: float, width: int = BAR_WIDTH) -> str:
    filled = round(min(max(fraction, 0.0), 1.0) * width)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def _metric_lines(metric: MetricView) -> list[str]:
    badge = _BADGES[metric.style_tier.value]
    return [
        f"{metric.label:<14} {metric.formatted_score:>4} {badge:<11} "
        f"{progress_bar(metric.progress_fraction)} {metric.progress_percent:5.1f}%",
        f"    {metric.feedback}",
    ]


def _chart_lines(chart: ChartSpec, width: int = BAR_WIDTH) -> list[str]:
    lines = [f"{chart.title} (0-{chart.scale_max:g})"]
    for point in chart.points:
        filled = round(min(max(point.value / chart.scale_max, 0.0), 1.0) * width)
        lines.append(f"  {point.label:<14} |{'=' * filled:<{width}}| {point.value:.1f}")
    return lines


def render_report(view: ViewModel) -> str:
    """Render a view model as a plain-text report for terminals and logs."""
    lines = [
        "Student Speaking Assessment Report",
        "=" * 50,
        f"Student: {view.student_name} ({view.student_id})",
        f"Test date: {view.test_date}",
        "",
        f"Overall score: {view.overall.formatted_score} "
        f"{_BADGES[view.overall.style_tier.value]}",
        f"    {view.overall.feedback}",
        "",
        "Skills",
        "-" * 50,
    ]
    for metric in view.skills:
        lines.extend(_metric_lines(metric))
    bar_charts = [chart for chart in view.charts if chart.kind == "bar"]
    for chart in bar_charts:
        lines.append("")
        lines.extend(_chart_lines(chart))
    return "\n".join(lines) + "\n"
