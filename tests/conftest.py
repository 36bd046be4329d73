"""
Pytest configuration and shared fixtures.
"""
import pytest
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List
from unittest.mock import MagicMock

from src.models.event import CycleEvent, CycleDayType
from src.models.metric import MetricKind, MetricPoint
from src.models.profile import UserProfile

@dataclass
class FakeLambdaContext:
    """Minimal Lambda context accepted by the powertools decorators."""
    function_name: str = "test-function"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:test-function"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"

@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Create a fake Lambda context."""
    return FakeLambdaContext()

@pytest.fixture
def reference_date() -> date:
    """Fixed 'today' used across pregnancy tests."""
    return date(2024, 6, 1)

@pytest.fixture
def sample_profile(reference_date) -> UserProfile:
    """Create a profile 100 days into the pregnancy."""
    return UserProfile(
        full_name="Asha Verma",
        email="asha@example.com",
        age=29,
        phone_number="+91 98765 43210",
        partner_name="Ravi Verma",
        last_period_date=reference_date - timedelta(days=100),
        cycle_length_days=28,
        is_profile_complete=True
    )

@pytest.fixture
def sample_series() -> Dict[MetricKind, List[MetricPoint]]:
    """Create a short series for every metric kind."""
    return {
        MetricKind.CONTRACTION: [
            MetricPoint(time_label="08:00", value=2.0),
            MetricPoint(time_label="09:00", value=12.6)
        ],
        MetricKind.TEMPERATURE: [
            MetricPoint(time_label="08:00", value=37.04),
            MetricPoint(time_label="09:00", value=37.28)
        ],
        MetricKind.HEART_RATE: [
            MetricPoint(time_label="08:00", value=75.0),
            MetricPoint(time_label="09:00", value=82.7)
        ],
        MetricKind.SPO2: [
            MetricPoint(time_label="08:00", value=97.9)
        ]
    }

@pytest.fixture
def period_events() -> List[CycleEvent]:
    """Two marked periods, 28 days apart, plus an ovulation marking."""
    events = [
        CycleEvent(user_id="123", date=date(2024, 1, 1) + timedelta(days=i), day_type=CycleDayType.PERIOD)
        for i in range(4)
    ]
    events += [
        CycleEvent(user_id="123", date=date(2024, 1, 29) + timedelta(days=i), day_type=CycleDayType.PERIOD)
        for i in range(3)
    ]
    events.append(
        CycleEvent(user_id="123", date=date(2024, 1, 15), day_type=CycleDayType.OVULATION, notes="Positive test")
    )
    return events

@pytest.fixture
def mock_dynamo(monkeypatch) -> MagicMock:
    """Replace the DynamoDB client used by the storage services."""
    dynamo = MagicMock()
    dynamo.get_item.return_value = None
    dynamo.query_prefix.return_value = []
    monkeypatch.setattr("src.services.profile.get_dynamo", lambda: dynamo)
    monkeypatch.setattr("src.services.records.get_dynamo", lambda: dynamo)
    return dynamo

@pytest.fixture
def stored_profile_item() -> dict:
    """Create a stored profile document as written by the mobile app."""
    return {
        "PK": "USER#123",
        "SK": "PROFILE",
        "fullName": "Asha Verma",
        "email": "asha@example.com",
        "age": 29,
        "phoneNumber": "+91 98765 43210",
        "partnerName": "Ravi Verma",
        "lastPeriodDate": "2024-02-22",
        "cycleLengthInDays": 28,
        "isProfileComplete": True
    }
