"""
Service module for the trying-to-conceive logs.

Conception attempts are checked against the marked cycle to tell whether
they fell in the fertile window or on ovulation day. Pregnancy tests are
summarized for the pre-pregnancy screen.
"""
from typing import List, Optional, Sequence
from datetime import date, timedelta

from src.models.conception import ConceptionAttempt, PregnancyTest
from src.models.event import CycleEvent
from src.services.constants import CYCLE_START_GAP_DAYS, DEFAULT_CYCLE_LENGTH
from src.services.cycle import (
    calculate_fertile_window,
    calculate_ovulation_day,
    get_period_dates
)

def latest_period_start(events: List[CycleEvent], on_or_before: date) -> Optional[date]:
    """
    Find the first day of the latest period starting on or before a date.

    Args:
        events: Marked calendar days
        on_or_before: Latest date to consider

    Returns:
        First day of the period, None if no period was marked before
    """
    start = None
    previous = None
    for day in get_period_dates(events):
        if day > on_or_before:
            break
        if previous is None or (day - previous).days > CYCLE_START_GAP_DAYS:
            start = day
        previous = day
    return start

def classify_attempt(
    attempt: ConceptionAttempt,
    events: List[CycleEvent],
    cycle_length: int = DEFAULT_CYCLE_LENGTH
) -> ConceptionAttempt:
    """
    Fill in the fertile window and ovulation flags of an attempt.

    Without a period marked before the attempt the flags entered by the
    user are kept.

    Args:
        attempt: Logged conception attempt
        events: Marked calendar days
        cycle_length: Cycle length in days

    Returns:
        Copy of the attempt with the flags set from the cycle
    """
    period_start = latest_period_start(events, attempt.date)
    if period_start is None:
        return attempt

    ovulation = period_start + timedelta(days=calculate_ovulation_day(cycle_length))
    return attempt.model_copy(update={
        "in_fertile_window": attempt.date in calculate_fertile_window(period_start, cycle_length),
        "ovulation_day": attempt.date == ovulation
    })

def count_fertile_attempts(attempts: Sequence[ConceptionAttempt]) -> int:
    """Count attempts made inside the fertile window."""
    return sum(1 for attempt in attempts if attempt.in_fertile_window)

def latest_pregnancy_test(tests: Sequence[PregnancyTest]) -> Optional[PregnancyTest]:
    """Most recent pregnancy test, None if no test was logged."""
    return max(tests, key=lambda test: test.date, default=None)

def count_positive_tests(tests: Sequence[PregnancyTest]) -> int:
    """Count positive pregnancy tests."""
    return sum(1 for test in tests if test.result)
