"""
Metric model definitions for health monitoring series.
"""
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict

class MetricKind(str, Enum):
    """
    Health metrics shown on the pregnancy monitoring chart.
    """
    CONTRACTION = "contraction"
    TEMPERATURE = "temperature"
    HEART_RATE = "heart_rate"
    SPO2 = "spo2"

class MetricPoint(BaseModel):
    """
    A single reading in a metric series.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    time_label: str
    value: float

class MetricSummary(BaseModel):
    """
    Display summary for the latest reading of a metric series.
    """
    kind: MetricKind
    latest_value: Optional[float] = None
    latest_display: str
    valid_range: Tuple[float, float]
