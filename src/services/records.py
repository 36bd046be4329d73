"""
Service module for storing newborn care and trying-to-conceive records.

Every record lives in the user's partition under a sort key built from its
type, the date it is ordered by and its id, so a prefix query returns the
records of a type in date order.

Typical usage:
    save_feeding_record(user_id, FeedingRecord(timestamp=now, type=FeedingType.FORMULA, amount_ml=90))
    feedings = load_feeding_records(user_id)
"""
from typing import Any, Dict, List, Optional, Type, TypeVar
from decimal import Decimal

from aws_lambda_powertools import Logger
from pydantic import BaseModel

from src.models.baby import BabyProfile, FeedingRecord, GrowthRecord, VaccinationRecord
from src.models.conception import ConceptionAttempt, PregnancyTest
from src.services.constants import FEEDING_HISTORY_LIMIT
from src.utils.dynamo import (
    get_dynamo,
    create_pk,
    create_baby_profile_sk,
    create_record_prefix,
    create_record_sk
)

logger = Logger()

FEEDING = "FEEDING"
VACCINATION = "VACCINE"
GROWTH = "GROWTH"
CONCEPTION = "CONCEPTION"
PREGNANCY_TEST = "PREGTEST"

RecordT = TypeVar("RecordT", bound=BaseModel)

def _to_item(record: BaseModel) -> Dict[str, Any]:
    item = {}
    for key, value in record.model_dump(mode="json").items():
        if value is None:
            continue
        # DynamoDB does not accept floats
        item[key] = Decimal(str(value)) if isinstance(value, float) else value
    return item

def _from_item(item: Dict[str, Any]) -> Dict[str, Any]:
    values = {}
    for key, value in item.items():
        if key in ("PK", "SK"):
            continue
        if isinstance(value, Decimal):
            value = int(value) if value.is_finite() and value == value.to_integral_value() else float(value)
        values[key] = value
    return values

def _save_record(user_id: str, record_type: str, sort_value: str, record: BaseModel) -> None:
    item = {
        "PK": create_pk(user_id),
        "SK": create_record_sk(record_type, sort_value, record.id),
        **_to_item(record)
    }
    get_dynamo().put_item(item)
    logger.info("Saved record", extra={
        "user_id": user_id,
        "record_type": record_type,
        "record_id": record.id
    })

def _load_records(user_id: str, record_type: str, model: Type[RecordT]) -> List[RecordT]:
    items = get_dynamo().query_prefix(create_pk(user_id), create_record_prefix(record_type))
    records = []
    for item in items:
        try:
            records.append(model(**_from_item(item)))
        except ValueError:
            logger.warning("Skipping malformed record", extra={
                "user_id": user_id,
                "sort_key": item.get("SK")
            })
    return records

def _delete_record(user_id: str, record_type: str, sort_value: str, record_id: str) -> None:
    get_dynamo().delete_items([{
        "PK": create_pk(user_id),
        "SK": create_record_sk(record_type, sort_value, record_id)
    }])
    logger.info("Deleted record", extra={
        "user_id": user_id,
        "record_type": record_type,
        "record_id": record_id
    })

def load_baby_profile(user_id: str) -> Optional[BabyProfile]:
    """
    Load the baby profile of a user.

    Returns:
        BabyProfile, None if the profile was not set up yet
    """
    item = get_dynamo().get_item({"PK": create_pk(user_id), "SK": create_baby_profile_sk()})
    if not item:
        return None
    return BabyProfile(**_from_item(item))

def save_baby_profile(user_id: str, baby: BabyProfile) -> None:
    """Store the baby profile of a user, replacing any previous one."""
    get_dynamo().put_item({
        "PK": create_pk(user_id),
        "SK": create_baby_profile_sk(),
        **_to_item(baby)
    })
    logger.info("Saved baby profile", extra={"user_id": user_id})

def save_feeding_record(user_id: str, record: FeedingRecord) -> None:
    """Store a feeding."""
    _save_record(user_id, FEEDING, record.timestamp.isoformat(), record)

def load_feeding_records(user_id: str, limit: Optional[int] = FEEDING_HISTORY_LIMIT) -> List[FeedingRecord]:
    """
    Load the latest feedings of a user, newest first.

    Args:
        user_id: User identifier
        limit: Maximum number of feedings, None for all of them
    """
    records = _load_records(user_id, FEEDING, FeedingRecord)[::-1]
    return records[:limit] if limit is not None else records

def delete_feeding_record(user_id: str, record: FeedingRecord) -> None:
    """Delete a feeding."""
    _delete_record(user_id, FEEDING, record.timestamp.isoformat(), record.id)

def save_vaccination_record(user_id: str, record: VaccinationRecord) -> None:
    """Store a vaccination."""
    _save_record(user_id, VACCINATION, record.scheduled_date.isoformat(), record)

def update_vaccination_record(user_id: str, old: VaccinationRecord, new: VaccinationRecord) -> VaccinationRecord:
    """
    Replace a vaccination, keeping its id.

    A rescheduled vaccination moves to a new sort key, so the old item is
    deleted.

    Returns:
        The stored vaccination
    """
    updated = new.model_copy(update={"id": old.id})
    if updated.scheduled_date != old.scheduled_date:
        delete_vaccination_record(user_id, old)
    save_vaccination_record(user_id, updated)
    return updated

def load_vaccination_records(user_id: str) -> List[VaccinationRecord]:
    """Load the vaccination schedule of a user, soonest first."""
    return _load_records(user_id, VACCINATION, VaccinationRecord)

def delete_vaccination_record(user_id: str, record: VaccinationRecord) -> None:
    """Delete a vaccination."""
    _delete_record(user_id, VACCINATION, record.scheduled_date.isoformat(), record.id)

def save_growth_record(user_id: str, record: GrowthRecord) -> None:
    """Store a growth measurement."""
    _save_record(user_id, GROWTH, record.date.isoformat(), record)

def load_growth_records(user_id: str) -> List[GrowthRecord]:
    """Load the growth measurements of a user, newest first."""
    return _load_records(user_id, GROWTH, GrowthRecord)[::-1]

def delete_growth_record(user_id: str, record: GrowthRecord) -> None:
    """Delete a growth measurement."""
    _delete_record(user_id, GROWTH, record.date.isoformat(), record.id)

def save_conception_attempt(user_id: str, attempt: ConceptionAttempt) -> None:
    """Store a conception attempt."""
    _save_record(user_id, CONCEPTION, attempt.date.isoformat(), attempt)

def load_conception_attempts(user_id: str) -> List[ConceptionAttempt]:
    """Load the conception attempts of a user, newest first."""
    return _load_records(user_id, CONCEPTION, ConceptionAttempt)[::-1]

def delete_conception_attempt(user_id: str, attempt: ConceptionAttempt) -> None:
    """Delete a conception attempt."""
    _delete_record(user_id, CONCEPTION, attempt.date.isoformat(), attempt.id)

def save_pregnancy_test(user_id: str, test: PregnancyTest) -> None:
    """Store a pregnancy test."""
    _save_record(user_id, PREGNANCY_TEST, test.date.isoformat(), test)

def load_pregnancy_tests(user_id: str) -> List[PregnancyTest]:
    """Load the pregnancy tests of a user, newest first."""
    return _load_records(user_id, PREGNANCY_TEST, PregnancyTest)[::-1]

def delete_pregnancy_test(user_id: str, test: PregnancyTest) -> None:
    """Delete a pregnancy test."""
    _delete_record(user_id, PREGNANCY_TEST, test.date.isoformat(), test.id)
