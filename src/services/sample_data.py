"""
Demo health data for the monitoring chart.

Used only when no device feed is connected. Every generator produces one
reading per hour for a day, labelled "00:00" to "23:00", and stays inside
the display range of its metric kind.
"""
import math
import random
from typing import Dict, List, Optional

from src.models.metric import MetricKind, MetricPoint
from src.services.constants import METRIC_ORDER, SAMPLE_HOURS

def _hour_label(hour: int) -> str:
    return f"{hour % 24:02d}:00"

def generate_contraction_sample_data(rng: Optional[random.Random] = None) -> List[MetricPoint]:
    """Contraction intensity with a peak every 6 hours."""
    rng = rng or random.Random()
    data = []
    for i in range(SAMPLE_HOURS):
        if i % 6 == 0:
            value = rng.uniform(10, 15)
        elif i % 6 == 1:
            # Falling after peak
            value = rng.uniform(5, 7)
        else:
            value = rng.uniform(0, 3)
        data.append(MetricPoint(time_label=_hour_label(i), value=value))
    return data

def generate_temperature_sample_data(rng: Optional[random.Random] = None) -> List[MetricPoint]:
    """Body temperature around 37.2°C with a small diurnal swing."""
    rng = rng or random.Random()
    base_temp = 37.2
    data = []
    for i in range(SAMPLE_HOURS):
        time_variation = math.sin(i * math.pi / 12) * 0.2
        value = base_temp + time_variation + rng.uniform(-0.2, 0.2)
        data.append(MetricPoint(time_label=_hour_label(i), value=value))
    return data

def generate_heart_rate_sample_data(rng: Optional[random.Random] = None) -> List[MetricPoint]:
    """Heart rate around 80 bpm, higher during the day."""
    rng = rng or random.Random()
    base_rate = 80.0
    data = []
    for i in range(SAMPLE_HOURS):
        if 8 <= i <= 20:
            activity_variation = rng.uniform(0, 10)
        else:
            activity_variation = rng.uniform(-10, 0)
        value = base_rate + activity_variation + rng.uniform(-5, 5)
        data.append(MetricPoint(time_label=_hour_label(i), value=value))
    return data

def generate_spo2_sample_data(rng: Optional[random.Random] = None) -> List[MetricPoint]:
    """Oxygen saturation between 95% and 99%."""
    rng = rng or random.Random()
    return [
        MetricPoint(time_label=_hour_label(i), value=rng.uniform(95, 99))
        for i in range(SAMPLE_HOURS)
    ]

SAMPLE_GENERATORS = {
    MetricKind.CONTRACTION: generate_contraction_sample_data,
    MetricKind.TEMPERATURE: generate_temperature_sample_data,
    MetricKind.HEART_RATE: generate_heart_rate_sample_data,
    MetricKind.SPO2: generate_spo2_sample_data
}

def generate_sample_health_data(rng: Optional[random.Random] = None) -> Dict[MetricKind, List[MetricPoint]]:
    """
    Generate a demo series for every metric kind.

    Args:
        rng: Optional random generator, pass a seeded one for repeatable data

    Returns:
        Dictionary mapping each metric kind to 24 hourly readings
    """
    rng = rng or random.Random()
    return {kind: SAMPLE_GENERATORS[kind](rng) for kind in METRIC_ORDER}
