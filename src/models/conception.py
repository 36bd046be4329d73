"""
Models for the trying-to-conceive logs: conception attempts and pregnancy tests.
"""
from enum import Enum
from datetime import date
from pydantic import BaseModel, Field

from src.models.baby import new_record_id

class ConceptionMethod(str, Enum):
    """
    How conception was attempted.
    """
    INTERCOURSE = "intercourse"
    ARTIFICIAL_INSEMINATION = "artificial_insemination"
    IVF = "ivf"
    OTHER = "other"

class PregnancyTestType(str, Enum):
    """
    Kind of pregnancy test taken.
    """
    URINE = "urine"
    BLOOD = "blood"
    DIGITAL = "digital"
    OTHER = "other"

class ConceptionAttempt(BaseModel):
    """
    A logged conception attempt.

    The fertile window and ovulation flags are entered by the user and can
    be filled in from the cycle with classify_attempt.
    """
    id: str = Field(default_factory=new_record_id)
    date: date
    method: ConceptionMethod = ConceptionMethod.INTERCOURSE
    in_fertile_window: bool = False
    ovulation_day: bool = False
    notes: str = ""

class PregnancyTest(BaseModel):
    """
    A logged pregnancy test and its result.
    """
    id: str = Field(default_factory=new_record_id)
    date: date
    result: bool = False
    brand: str = ""
    test_type: PregnancyTestType = PregnancyTestType.URINE
    notes: str = ""

    @property
    def result_label(self) -> str:
        """Display label of the result."""
        return "Positive" if self.result else "Negative"
