"""
Service module for summarizing health monitoring series.

Each metric kind (contractions, temperature, heart rate, SpO2) is kept as an
ordered list of readings, oldest first. The summarizer picks the latest
reading, formats it for the chart header and returns the fixed range used
to scale the chart axis.

Typical usage:
    series = load_metric_series(user_id)
    summaries = summarize_health_data(series)
    print(summaries[MetricKind.HEART_RATE].latest_display)
"""
import math
from typing import Dict, Mapping, Optional, Sequence, Tuple

from src.models.metric import MetricKind, MetricPoint, MetricSummary
from src.services.constants import METRIC_VALID_RANGES, METRIC_ORDER, NO_DATA

def get_valid_range(kind: MetricKind) -> Tuple[float, float]:
    """Chart display range for a metric kind."""
    return METRIC_VALID_RANGES[MetricKind(kind)]

def format_metric_value(kind: MetricKind, value: float) -> str:
    """
    Format a reading for display.

    Whole-number kinds truncate rather than round, so 82.7 bpm shows as
    "82 bpm".

    Args:
        kind: Metric kind of the reading
        value: Numeric reading

    Returns:
        Display string with the unit of the kind
    """
    kind = MetricKind(kind)
    if kind == MetricKind.CONTRACTION:
        return f"{int(value)} intensity"
    if kind == MetricKind.TEMPERATURE:
        return f"{value:.1f}°C"
    if kind == MetricKind.HEART_RATE:
        return f"{int(value)} bpm"
    return f"{int(value)}%"

def summarize_series(kind: MetricKind, series: Sequence[MetricPoint]) -> MetricSummary:
    """
    Summarize the latest reading of a metric series.

    Args:
        kind: Metric kind of the series
        series: Readings in chronological order

    Returns:
        MetricSummary with the latest value, its display string (or
        "No data" for an empty series) and the display range

    Example:
        >>> summary = summarize_series(MetricKind.HEART_RATE, [MetricPoint(time_label="08:00", value=82.7)])
        >>> summary.latest_display
        '82 bpm'
    """
    kind = MetricKind(kind)
    latest: Optional[MetricPoint] = series[-1] if series else None
    if latest is not None and not math.isfinite(latest.value):
        # Only reachable for points built without validation
        latest = None

    return MetricSummary(
        kind=kind,
        latest_value=latest.value if latest else None,
        latest_display=format_metric_value(kind, latest.value) if latest else NO_DATA,
        valid_range=get_valid_range(kind)
    )

def summarize_health_data(
    series_by_kind: Mapping[MetricKind, Sequence[MetricPoint]]
) -> Dict[MetricKind, MetricSummary]:
    """
    Summarize every metric kind, in chart order.

    Kinds without a series are summarized as empty.
    """
    return {
        kind: summarize_series(kind, series_by_kind.get(kind, []))
        for kind in METRIC_ORDER
    }

def has_health_data(series_by_kind: Mapping[MetricKind, Sequence[MetricPoint]]) -> bool:
    """Check if any metric series holds at least one reading."""
    return any(series for series in series_by_kind.values())
