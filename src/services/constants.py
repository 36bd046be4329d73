"""
Constants and shared data for pregnancy and health monitoring services.
"""
from typing import Dict, Tuple
from src.models.metric import MetricKind
from src.models.pregnancy import Trimester

# Full term, counted from the first day of the last menstrual period
GESTATION_DAYS = 280
FULL_TERM_WEEKS = 40

# Last week (inclusive) of each trimester; the third has no upper bound
TRIMESTER_LAST_WEEKS = (
    (13, Trimester.FIRST),
    (26, Trimester.SECOND),
)

TRIMESTER_LABELS = {
    Trimester.FIRST: "First",
    Trimester.SECOND: "Second",
    Trimester.THIRD: "Third"
}

NO_DATA = "No data"

# Fixed chart ranges; used for display scaling only
METRIC_VALID_RANGES: Dict[MetricKind, Tuple[float, float]] = {
    MetricKind.CONTRACTION: (0.0, 15.0),
    MetricKind.TEMPERATURE: (36.5, 38.0),
    MetricKind.HEART_RATE: (60.0, 100.0),
    MetricKind.SPO2: (90.0, 100.0)
}

METRIC_DISPLAY_NAMES = {
    MetricKind.CONTRACTION: "Contractions",
    MetricKind.TEMPERATURE: "Temperature",
    MetricKind.HEART_RATE: "Heart Rate",
    MetricKind.SPO2: "SpO2"
}

# Display order on the monitoring chart
METRIC_ORDER = (
    MetricKind.CONTRACTION,
    MetricKind.TEMPERATURE,
    MetricKind.HEART_RATE,
    MetricKind.SPO2
)

SAMPLE_HOURS = 24

# Pre-pregnancy cycle tracking
DEFAULT_CYCLE_LENGTH = 28
LUTEAL_PHASE_DAYS = 14
FERTILE_DAYS_BEFORE_OVULATION = 5
FERTILE_DAYS_AFTER_OVULATION = 1
# Period days further apart than this start a new cycle
CYCLE_START_GAP_DAYS = 2

# Newborn care
UPCOMING_VACCINATIONS_SHOWN = 2
FEEDING_HISTORY_LIMIT = 10
