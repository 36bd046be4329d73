"""
Service module for pre-pregnancy cycle insights.

This module works on the calendar markings a user makes while trying to
conceive. It finds where cycles start, predicts the next period from the
user's cycle length and marks the fertile window around ovulation.

Typical usage:
    events = get_user_events(user_id)
    next_period = predict_next_period(events, profile.cycle_length_days)
    window = calculate_fertile_window(get_period_dates(events)[-1], profile.cycle_length_days)
"""
from typing import List, Optional
from datetime import date, timedelta

from src.models.event import CycleEvent, CycleDayType
from src.services.constants import (
    DEFAULT_CYCLE_LENGTH,
    LUTEAL_PHASE_DAYS,
    FERTILE_DAYS_BEFORE_OVULATION,
    FERTILE_DAYS_AFTER_OVULATION,
    CYCLE_START_GAP_DAYS
)

def get_period_dates(events: List[CycleEvent]) -> List[date]:
    """
    Get the distinct period days in chronological order.

    Args:
        events: Marked calendar days

    Returns:
        Sorted list of dates marked as period
    """
    return sorted({e.date for e in events if e.day_type == CycleDayType.PERIOD})

def calculate_ovulation_day(cycle_length: int = DEFAULT_CYCLE_LENGTH) -> int:
    """Ovulation offset in days from the start of the period."""
    return cycle_length - LUTEAL_PHASE_DAYS

def calculate_fertile_window(last_period: date, cycle_length: int = DEFAULT_CYCLE_LENGTH) -> List[date]:
    """
    Calculate the fertile window following a period.

    The window covers the five days before ovulation, ovulation day and the
    day after.

    Args:
        last_period: Most recent period day
        cycle_length: Cycle length in days

    Returns:
        List of dates in the fertile window

    Example:
        >>> window = calculate_fertile_window(date(2024, 1, 1), 28)
        >>> window[0], window[-1]
        (datetime.date(2024, 1, 10), datetime.date(2024, 1, 16))
    """
    ovulation_day = calculate_ovulation_day(cycle_length)
    return [
        last_period + timedelta(days=offset)
        for offset in range(
            ovulation_day - FERTILE_DAYS_BEFORE_OVULATION,
            ovulation_day + FERTILE_DAYS_AFTER_OVULATION + 1
        )
    ]

def predict_next_period(events: List[CycleEvent], cycle_length: int = DEFAULT_CYCLE_LENGTH) -> Optional[date]:
    """
    Predict the next period from the latest period day.

    Args:
        events: Marked calendar days
        cycle_length: Cycle length in days

    Returns:
        Predicted date, or None when no period has been marked
    """
    period_dates = get_period_dates(events)
    if not period_dates:
        return None
    return period_dates[-1] + timedelta(days=cycle_length)

def find_cycle_starts(events: List[CycleEvent]) -> List[date]:
    """
    Find the first day of every marked period.

    A period day starts a new cycle when it is the first one recorded or
    comes more than two days after the previous period day.
    """
    starts = []
    previous = None
    for day in get_period_dates(events):
        if previous is None or (day - previous).days > CYCLE_START_GAP_DAYS:
            starts.append(day)
        previous = day
    return starts

def is_cycle_start(events: List[CycleEvent], target_date: date) -> bool:
    """Check if a date is the start of a menstrual cycle."""
    return target_date in find_cycle_starts(events)

def format_next_period(events: List[CycleEvent], cycle_length: int = DEFAULT_CYCLE_LENGTH) -> str:
    """Next period prediction as shown in the cycle insights card."""
    next_period = predict_next_period(events, cycle_length)
    if next_period is None:
        return "Not enough data"
    return next_period.strftime("%b %d").replace(" 0", " ")
