"""
User profile model definition for the maternal tracker.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from aws_lambda_powertools import Logger

logger = Logger()

# Stored document keys, as written by the mobile app
PROFILE_FIELD_KEYS = {
    "full_name": "fullName",
    "email": "email",
    "age": "age",
    "phone_number": "phoneNumber",
    "partner_name": "partnerName",
    "last_period_date": "lastPeriodDate",
    "cycle_length_days": "cycleLengthInDays",
    "due_date": "estimatedDueDate",
    "is_profile_complete": "isProfileComplete",
}

DATE_FIELDS = ("last_period_date", "due_date")

class UserProfile(BaseModel):
    """
    Snapshot of the pregnancy-relevant attributes of a user.
    """
    full_name: str = ""
    email: str = ""
    age: Optional[int] = Field(None, ge=0, le=120)
    phone_number: str = ""
    partner_name: str = ""
    last_period_date: Optional[date] = None
    cycle_length_days: int = Field(28, ge=1)
    due_date: Optional[date] = None
    is_profile_complete: bool = False

    @property
    def first_name(self) -> str:
        """First word of the full name, used for greetings."""
        parts = self.full_name.split()
        return parts[0] if parts else self.full_name

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "UserProfile":
        """
        Build a profile from a stored document.

        Missing or malformed values are skipped so the field default is used.

        Args:
            item: Stored profile document

        Returns:
            UserProfile snapshot
        """
        values = {}
        for field_name, key in PROFILE_FIELD_KEYS.items():
            if item.get(key) is None:
                continue
            value = item[key]
            if field_name in DATE_FIELDS:
                value = parse_stored_date(value)
                if value is None:
                    logger.warning("Ignoring malformed profile date", extra={
                        "field": key,
                        "value": str(item[key])
                    })
                    continue
            elif isinstance(value, Decimal):
                value = int(value)
            values[field_name] = value

        try:
            return cls(**values)
        except ValueError:
            logger.warning("Profile document failed validation, checking fields one by one")

        # Keep the valid fields only
        valid = {}
        for field_name, value in values.items():
            try:
                cls(**{field_name: value})
            except ValueError:
                logger.warning("Ignoring invalid profile field", extra={"field": field_name})
                continue
            valid[field_name] = value
        return cls(**valid)

    def to_item(self) -> Dict[str, Any]:
        """Convert to the stored document form."""
        data = self.model_dump()
        item = {}
        for field_name, key in PROFILE_FIELD_KEYS.items():
            value = data[field_name]
            if field_name in DATE_FIELDS and value is not None:
                value = value.isoformat()
            item[key] = value
        return item

def parse_stored_date(value: Any) -> Optional[date]:
    """Reduce a date, datetime or ISO string to a date, None if impossible."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if value.endswith("Z"):
            # fromisoformat only accepts the UTC designator from Python 3.11
            value = value[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            return None
    return None
