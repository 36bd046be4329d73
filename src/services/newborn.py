"""
Service module for the newborn care card.

Summarizes the records kept after the birth: how many feedings happened
today and how long ago the last one was, which vaccinations are coming up
and the latest growth measurement.

Typical usage:
    baby = load_baby_profile(user_id)
    summary = summarize_newborn_care(
        baby,
        load_feeding_records(user_id),
        load_vaccination_records(user_id),
        load_growth_records(user_id)
    )
"""
from typing import List, Optional, Sequence
from datetime import date, datetime

from src.models.baby import (
    BabyProfile,
    FeedingRecord,
    GrowthRecord,
    NewbornSummary,
    VaccinationRecord,
    VaccinationStatus
)
from src.services.constants import UPCOMING_VACCINATIONS_SHOWN
from src.services.pregnancy import calculate_age_in_months, describe_baby_age

def count_feedings_on(records: Sequence[FeedingRecord], day: date) -> int:
    """Count the feedings logged on a calendar day."""
    return sum(1 for record in records if record.timestamp.date() == day)

def latest_feeding(records: Sequence[FeedingRecord]) -> Optional[FeedingRecord]:
    """Most recent feeding, None if nothing was logged."""
    return max(records, key=lambda record: record.timestamp, default=None)

def format_time_since(timestamp: datetime, now: datetime) -> str:
    """
    Format the time elapsed since a feeding.

    Args:
        timestamp: Time of the feeding
        now: Reference time

    Returns:
        "3h ago", "12m ago" or "just now" for less than a minute
    """
    minutes = int((now - timestamp).total_seconds() // 60)
    if minutes >= 60:
        return f"{minutes // 60}h ago"
    if minutes > 0:
        return f"{minutes}m ago"
    return "just now"

def filter_vaccinations(
    records: Sequence[VaccinationRecord],
    status: Optional[VaccinationStatus] = None
) -> List[VaccinationRecord]:
    """Vaccinations with a given status, all of them when no status is given."""
    if status is None:
        return list(records)
    return [record for record in records if record.status == VaccinationStatus(status)]

def upcoming_vaccinations(
    records: Sequence[VaccinationRecord],
    today: date,
    limit: int = UPCOMING_VACCINATIONS_SHOWN
) -> List[VaccinationRecord]:
    """
    Next scheduled vaccinations, soonest first.

    Args:
        records: Vaccination records in any order
        today: Reference date, vaccinations scheduled for today are included
        limit: Maximum number of vaccinations returned

    Returns:
        Scheduled vaccinations on or after today
    """
    scheduled = [
        record for record in filter_vaccinations(records, VaccinationStatus.SCHEDULED)
        if record.scheduled_date >= today
    ]
    return sorted(scheduled, key=lambda record: record.scheduled_date)[:limit]

def latest_growth(records: Sequence[GrowthRecord]) -> Optional[GrowthRecord]:
    """Most recent growth measurement, None if nothing was measured."""
    return max(records, key=lambda record: record.date, default=None)

def summarize_newborn_care(
    baby: BabyProfile,
    feedings: Sequence[FeedingRecord],
    vaccinations: Sequence[VaccinationRecord],
    growth: Sequence[GrowthRecord],
    now: Optional[datetime] = None
) -> NewbornSummary:
    """
    Build the newborn care card.

    Args:
        baby: Baby profile
        feedings: Logged feedings
        vaccinations: Vaccination schedule
        growth: Growth measurements
        now: Reference time, defaults to now

    Returns:
        NewbornSummary for the reference time
    """
    now = now or datetime.now()
    today = now.date()
    last = latest_feeding(feedings)

    return NewbornSummary(
        age_months=calculate_age_in_months(baby.birth_date, today),
        age_description=describe_baby_age(baby.birth_date, today),
        feedings_today=count_feedings_on(feedings, today),
        last_feeding=format_time_since(last.timestamp, now) if last else None,
        upcoming_vaccinations=upcoming_vaccinations(vaccinations, today),
        latest_growth=latest_growth(growth)
    )
