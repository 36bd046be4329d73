"""
Event model definition for marked cycle days before pregnancy.
"""
from enum import Enum
from datetime import date
from typing import Optional
from pydantic import BaseModel

class CycleDayType(str, Enum):
    """
    Marking a user can put on a calendar day.
    """
    PERIOD = "period"
    OVULATION = "ovulation"
    FERTILE = "fertile"
    NONE = "none"

class CycleEvent(BaseModel):
    """
    Represents a marked calendar day with an optional note.
    """
    user_id: str
    date: date
    day_type: CycleDayType
    notes: Optional[str] = None
