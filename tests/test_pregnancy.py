"""
Tests for pregnancy stage calculations.
"""
import pytest
from datetime import date, datetime, timedelta

from src.models.pregnancy import GestationalStatus, Trimester
from src.models.profile import UserProfile
from src.services.pregnancy import (
    calculate_due_date,
    calculate_current_week,
    calculate_progress_percent,
    compute_gestational_status,
    compute_status_for_profile,
    determine_trimester,
    generate_pregnancy_report
)

def test_status_100_days_after_last_period(reference_date):
    """Test the dashboard scenario of an LMP 100 days ago."""
    status = compute_gestational_status(reference_date - timedelta(days=100), reference_date)

    assert status.current_week == 14
    assert status.trimester == Trimester.SECOND
    assert status.progress_percent == 35
    assert status.due_date == reference_date + timedelta(days=180)

@pytest.mark.parametrize("days_ago", [0, 1, 6, 7, 90, 279, 280, 301, 1000])
def test_due_date_is_280_days_after_last_period(reference_date, days_ago):
    """Test the due date invariant and non-negative week for past LMPs."""
    lmp = reference_date - timedelta(days=days_ago)
    status = compute_gestational_status(lmp, reference_date)

    assert status.current_week >= 0
    assert status.current_week == days_ago // 7
    assert (status.due_date - lmp).days == 280

def test_future_last_period_clamps_to_week_zero(reference_date):
    """Test that an LMP after the reference date gives week 0."""
    lmp = reference_date + timedelta(days=20)
    status = compute_gestational_status(lmp, reference_date)

    assert status.current_week == 0
    assert status.trimester == Trimester.FIRST
    assert status.progress_percent == 0
    assert status.due_date == lmp + timedelta(days=280)

def test_due_date_round_trip(reference_date):
    """Test that feeding the due date back as LMP yields week 0."""
    status = compute_gestational_status(reference_date - timedelta(days=100), reference_date)
    round_trip = compute_gestational_status(status.due_date, reference_date)

    assert round_trip.current_week == 0

@pytest.mark.parametrize("value", [None, "not a date", 12345, "2024-13-45"])
def test_invalid_last_period_returns_default_status(reference_date, value):
    """Test that missing or invalid dates give the 'no data yet' status."""
    status = compute_gestational_status(value, reference_date)

    assert status == GestationalStatus()
    assert status.current_week == 0
    assert status.trimester == Trimester.FIRST
    assert status.progress_percent == 0
    assert status.due_date is None

def test_datetime_and_iso_string_inputs(reference_date):
    """Test that datetimes and ISO strings are reduced to dates."""
    lmp = reference_date - timedelta(days=100)
    expected = compute_gestational_status(lmp, reference_date)

    from_datetime = compute_gestational_status(
        datetime(lmp.year, lmp.month, lmp.day, 23, 30),
        datetime(reference_date.year, reference_date.month, reference_date.day, 1, 0)
    )
    from_string = compute_gestational_status(lmp.isoformat(), reference_date)

    assert from_datetime == expected
    assert from_string == expected

def test_utc_designator_in_iso_string(reference_date):
    """Test that ISO timestamps ending in Z are accepted."""
    lmp = reference_date - timedelta(days=100)
    status = compute_gestational_status(f"{lmp.isoformat()}T00:00:00Z", reference_date)

    assert status.current_week == 14
    assert status.due_date == lmp + timedelta(days=280)

def test_due_date_past_max_date_returns_default_status():
    """Test that an LMP too close to the end of the calendar does not raise."""
    status = compute_gestational_status(date(9999, 6, 1), date(9999, 12, 31))

    assert status == GestationalStatus()
    assert status.due_date is None

def test_due_date_at_max_date_boundary():
    """Test the last LMP whose due date is still representable."""
    lmp = date.max - timedelta(days=280)
    status = compute_gestational_status(lmp, date.max)

    assert status.due_date == date.max
    assert status.current_week == 40

def test_trimester_boundaries():
    """Test that trimester upper weeks are inclusive."""
    assert determine_trimester(0) == Trimester.FIRST
    assert determine_trimester(13) == Trimester.FIRST
    assert determine_trimester(14) == Trimester.SECOND
    assert determine_trimester(26) == Trimester.SECOND
    assert determine_trimester(27) == Trimester.THIRD
    assert determine_trimester(45) == Trimester.THIRD

def test_trimester_is_monotonic():
    """Test that the trimester never goes back as weeks increase."""
    order = [Trimester.FIRST, Trimester.SECOND, Trimester.THIRD]
    trimesters = [order.index(determine_trimester(week)) for week in range(0, 60)]

    assert trimesters == sorted(trimesters)

def test_progress_percent_is_clamped():
    """Test progress stays within [0, 100] for weeks 0 to 1000."""
    for week in range(0, 1001):
        assert 0 <= calculate_progress_percent(week) <= 100

    assert calculate_progress_percent(0) == 0
    assert calculate_progress_percent(20) == 50
    assert calculate_progress_percent(40) == 100
    assert calculate_progress_percent(52) == 100

def test_progress_percent_rounds_half_up():
    """Test progress rounding on odd weeks."""
    assert calculate_progress_percent(1) == 3
    assert calculate_progress_percent(3) == 8
    assert calculate_progress_percent(14) == 35

def test_overdue_pregnancy(reference_date):
    """Test weeks past 40 are allowed and flagged."""
    status = compute_gestational_status(reference_date - timedelta(days=43 * 7), reference_date)

    assert status.current_week == 43
    assert status.trimester == Trimester.THIRD
    assert status.progress_percent == 100
    assert status.is_overdue
    assert status.weeks_remaining == 0

def test_week_and_due_date_helpers():
    """Test the individual date helpers."""
    lmp = date(2024, 1, 1)

    assert calculate_due_date(lmp) == date(2024, 10, 7)
    assert calculate_current_week(lmp, date(2024, 1, 7)) == 0
    assert calculate_current_week(lmp, date(2024, 1, 8)) == 1
    assert calculate_current_week(lmp, date(2023, 12, 1)) == 0

def test_compute_status_for_profile(sample_profile, reference_date):
    """Test status from a profile snapshot."""
    status = compute_status_for_profile(sample_profile, reference_date)
    assert status.current_week == 14

    empty = compute_status_for_profile(UserProfile(), reference_date)
    assert empty == GestationalStatus()

def test_report_generation(sample_profile, reference_date):
    """Test pregnancy summary report."""
    status = compute_status_for_profile(sample_profile, reference_date)
    report = generate_pregnancy_report(status, sample_profile)

    assert "Hello, Asha" in report
    assert "Week 14" in report
    assert "Trimester: Second" in report
    assert "Progress: 35%" in report
    assert "Due date: Nov 28, 2024" in report
    assert "Weeks remaining: 26" in report

def test_report_without_last_period():
    """Test report for a profile without pregnancy data."""
    report = generate_pregnancy_report(GestationalStatus())

    assert "Week 0" in report
    assert "Trimester: First" in report
    assert "add your last period date" in report
    assert "Hello" not in report

def test_report_for_overdue_pregnancy(reference_date):
    """Test report warns past 40 weeks."""
    status = compute_gestational_status(reference_date - timedelta(days=290), reference_date)
    report = generate_pregnancy_report(status)

    assert "Past 40 weeks" in report
    assert "Weeks remaining" not in report
