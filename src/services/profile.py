"""
Service module for loading and saving user snapshots.

This is the persistence boundary of the tracker: it reads the stored profile
and metric readings for a user and hands immutable snapshots to the pure
pregnancy and metric services.

Typical usage:
    profile = load_user_profile(user_id)
    series = load_metric_series(user_id)
"""
from typing import Dict, List, Sequence
from decimal import Decimal

from aws_lambda_powertools import Logger

from src.models.event import CycleEvent
from src.models.metric import MetricKind, MetricPoint
from src.models.profile import UserProfile
from src.services.exceptions import ProfileNotFoundError
from src.utils.dynamo import (
    MAX_READINGS_PER_SERIES,
    get_dynamo,
    create_pk,
    create_profile_sk,
    create_reading_prefix,
    create_reading_sk,
    create_cycle_event_sk
)

logger = Logger()

def load_user_profile(user_id: str) -> UserProfile:
    """
    Load the stored profile of a user.

    Args:
        user_id: User identifier

    Returns:
        UserProfile snapshot

    Raises:
        ProfileNotFoundError: If the user has no stored profile
    """
    item = get_dynamo().get_item({"PK": create_pk(user_id), "SK": create_profile_sk()})
    if not item:
        raise ProfileNotFoundError(f"No profile found for user {user_id}")

    logger.debug("Loaded user profile", extra={"user_id": user_id})
    return UserProfile.from_item(item)

def save_user_profile(user_id: str, profile: UserProfile) -> None:
    """Store the profile of a user, replacing any previous one."""
    item = {
        "PK": create_pk(user_id),
        "SK": create_profile_sk(),
        **{key: value for key, value in profile.to_item().items() if value is not None}
    }
    get_dynamo().put_item(item)
    logger.info("Saved user profile", extra={"user_id": user_id})

def load_metric_series(user_id: str) -> Dict[MetricKind, List[MetricPoint]]:
    """
    Load every stored metric series of a user.

    Readings come back ordered by sort key, which preserves the order they
    were saved in. Readings with an unknown kind are skipped.

    Args:
        user_id: User identifier

    Returns:
        Dictionary mapping metric kinds to their readings, oldest first
    """
    items = get_dynamo().query_prefix(create_pk(user_id), create_reading_prefix())
    series: Dict[MetricKind, List[MetricPoint]] = {}
    for item in items:
        try:
            kind = MetricKind(item["kind"])
        except (KeyError, ValueError):
            logger.warning("Skipping reading with unknown kind", extra={
                "user_id": user_id,
                "sort_key": item.get("SK")
            })
            continue
        try:
            point = MetricPoint(time_label=item["time_label"], value=float(item["value"]))
        except (KeyError, ValueError):
            logger.warning("Skipping malformed reading", extra={
                "user_id": user_id,
                "sort_key": item.get("SK")
            })
            continue
        series.setdefault(kind, []).append(point)

    logger.debug("Loaded metric series", extra={
        "user_id": user_id,
        "kinds": [kind.value for kind in series]
    })
    return series

def save_metric_series(user_id: str, kind: MetricKind, series: Sequence[MetricPoint]) -> None:
    """
    Replace the stored series of one metric kind.

    Args:
        user_id: User identifier
        kind: Metric kind of the series
        series: Readings in chronological order

    Raises:
        ValueError: If the series is longer than the sort keys can order
    """
    kind = MetricKind(kind)
    if len(series) > MAX_READINGS_PER_SERIES:
        raise ValueError(f"Series of {len(series)} readings exceeds {MAX_READINGS_PER_SERIES}")

    dynamo = get_dynamo()
    pk = create_pk(user_id)

    existing = dynamo.query_prefix(pk, create_reading_prefix(kind.value))
    if existing:
        dynamo.delete_items([{"PK": item["PK"], "SK": item["SK"]} for item in existing])

    dynamo.put_items([
        {
            "PK": pk,
            "SK": create_reading_sk(kind.value, index),
            "kind": kind.value,
            "time_label": point.time_label,
            # DynamoDB does not accept floats
            "value": Decimal(str(point.value))
        }
        for index, point in enumerate(series)
    ])
    logger.info("Saved metric series", extra={
        "user_id": user_id,
        "kind": kind.value,
        "count": len(series)
    })

def load_cycle_events(user_id: str) -> List[CycleEvent]:
    """Load the marked cycle days of a user, oldest first."""
    items = get_dynamo().query_prefix(create_pk(user_id), "CYCLE#")
    return [
        CycleEvent(
            user_id=user_id,
            date=item["date"],
            day_type=item["day_type"],
            notes=item.get("notes")
        )
        for item in items
    ]

def save_cycle_event(event: CycleEvent) -> None:
    """Store a marked cycle day, replacing any marking on the same date."""
    item = {
        "PK": create_pk(event.user_id),
        "SK": create_cycle_event_sk(event.date.isoformat()),
        "date": event.date.isoformat(),
        "day_type": event.day_type.value
    }
    if event.notes:
        item["notes"] = event.notes
    get_dynamo().put_item(item)
