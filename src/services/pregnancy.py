"""
Service module for pregnancy stage calculations.

This module turns a last menstrual period (LMP) date into the gestational
status shown on the pregnancy dashboard: current week, trimester, estimated
due date and progress towards the 40 week term. All functions are pure and
take the reference date explicitly so they can be evaluated for any day.
After the birth the same module gives the age of the baby.

Typical usage:
    profile = load_user_profile(user_id)
    status = compute_status_for_profile(profile)
    print(f"Week {status.current_week}, {status.trimester.value} trimester")
"""
import calendar
from typing import Any, Optional
from datetime import date, timedelta

from aws_lambda_powertools import Logger

from src.models.pregnancy import GestationalStatus, Trimester
from src.models.profile import UserProfile, parse_stored_date
from src.services.constants import (
    GESTATION_DAYS,
    FULL_TERM_WEEKS,
    TRIMESTER_LAST_WEEKS,
    TRIMESTER_LABELS
)

logger = Logger()

def calculate_due_date(last_period_date: date) -> date:
    """Estimated due date, 280 days after the LMP."""
    return last_period_date + timedelta(days=GESTATION_DAYS)

def calculate_current_week(last_period_date: date, now: date) -> int:
    """
    Calculate completed gestational weeks.

    Args:
        last_period_date: First day of the last menstrual period
        now: Reference date

    Returns:
        Whole weeks since the LMP, never negative
    """
    days_since = (now - last_period_date).days
    return max(0, days_since // 7)

def determine_trimester(week: int) -> Trimester:
    """
    Map a gestational week to its trimester.

    Upper bounds are inclusive: week 13 is still the first trimester and
    week 26 still the second.
    """
    for last_week, trimester in TRIMESTER_LAST_WEEKS:
        if week <= last_week:
            return trimester
    return Trimester.THIRD

def calculate_progress_percent(week: int) -> int:
    """Progress towards full term, rounded half up and clamped to [0, 100]."""
    percent = int(max(0, week) * 100 / FULL_TERM_WEEKS + 0.5)
    return min(100, percent)

def compute_gestational_status(last_period_date: Any, now: Optional[date] = None) -> GestationalStatus:
    """
    Compute the gestational status for a given LMP.

    Invalid or missing dates return the default status (week 0, first
    trimester, no due date) instead of raising, matching the "no data yet"
    state of the dashboard. So does an LMP whose due date falls past the
    last representable date. An LMP after the reference date is clamped to
    week 0.

    Args:
        last_period_date: LMP as date, datetime or ISO string
        now: Reference date, defaults to today

    Returns:
        GestationalStatus for the reference date

    Example:
        >>> status = compute_gestational_status(date(2024, 1, 1), date(2024, 4, 10))
        >>> status.current_week, status.trimester, status.progress_percent
        (14, <Trimester.SECOND: 'second'>, 35)
    """
    lmp = parse_stored_date(last_period_date)
    if lmp is None:
        if last_period_date is not None:
            logger.warning("Invalid last period date, using default status", extra={
                "last_period_date": str(last_period_date)
            })
        return GestationalStatus()

    reference = parse_stored_date(now) if now is not None else date.today()
    if reference is None:
        logger.warning("Invalid reference date, using default status", extra={
            "now": str(now)
        })
        return GestationalStatus()

    if lmp > reference:
        logger.debug("Last period date is after reference date, clamping to week 0", extra={
            "last_period_date": lmp.isoformat(),
            "now": reference.isoformat()
        })

    try:
        due_date = calculate_due_date(lmp)
    except OverflowError:
        logger.warning("Due date out of range, using default status", extra={
            "last_period_date": lmp.isoformat()
        })
        return GestationalStatus()

    week = calculate_current_week(lmp, reference)
    return GestationalStatus(
        current_week=week,
        trimester=determine_trimester(week),
        due_date=due_date,
        progress_percent=calculate_progress_percent(week)
    )

def calculate_age_in_months(birth_date: date, now: date) -> int:
    """
    Calculate completed calendar months since birth.

    A month is complete on the same day of the month, or on the last day of
    a shorter month (Jan 31 to Feb 29 is one month). Birth dates after the
    reference date give 0.

    Args:
        birth_date: Date of birth
        now: Reference date

    Returns:
        Whole months since birth, never negative
    """
    months = (now.year - birth_date.year) * 12 + now.month - birth_date.month
    last_day_of_month = calendar.monthrange(now.year, now.month)[1]
    if now.day < birth_date.day and now.day != last_day_of_month:
        months -= 1
    return max(0, months)

def describe_baby_age(birth_date: date, now: Optional[date] = None) -> str:
    """
    Describe the age of a baby for the newborn care card.

    Babies under one month are described in completed weeks.

    Example:
        >>> describe_baby_age(date(2024, 5, 20), date(2024, 6, 1))
        '1 week old'
    """
    now = now or date.today()
    months = calculate_age_in_months(birth_date, now)
    if months == 0:
        weeks = max(0, (now - birth_date).days // 7)
        return "1 week old" if weeks == 1 else f"{weeks} weeks old"
    return "1 month old" if months == 1 else f"{months} months old"

def compute_status_for_profile(profile: UserProfile, now: Optional[date] = None) -> GestationalStatus:
    """Compute the gestational status from a profile snapshot."""
    return compute_gestational_status(profile.last_period_date, now)

def generate_pregnancy_report(status: GestationalStatus, profile: Optional[UserProfile] = None) -> str:
    """
    Generate the summary card text for the pregnancy dashboard.

    Args:
        status: Computed gestational status
        profile: Optional profile used for the greeting

    Returns:
        Formatted report string
    """
    report = []
    if profile and profile.first_name:
        report.extend([f"👋 Hello, {profile.first_name}", ""])

    report.extend([
        "🤰 Pregnancy Summary",
        f"Week {status.current_week}",
        f"Trimester: {TRIMESTER_LABELS[status.trimester]}",
        f"Progress: {status.progress_percent}%",
    ])

    if status.due_date:
        report.append(f"Due date: {status.due_date.strftime('%b %d, %Y')}")
    else:
        report.append("Due date: add your last period date to see it")

    if status.is_overdue:
        report.extend(["", "⚠️ Past 40 weeks, please stay in touch with your doctor"])
    elif status.due_date:
        report.append(f"Weeks remaining: {status.weeks_remaining}")

    return "\n".join(report)
