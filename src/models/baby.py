"""
Newborn care model definitions: baby profile, feedings, vaccinations and growth.
"""
from enum import Enum
from uuid import uuid4
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

def new_record_id() -> str:
    """Generate an identifier for a new record."""
    return str(uuid4())

class BabyProfile(BaseModel):
    """
    Birth details and latest measurements of the baby.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    name: str = ""
    birth_date: date
    weight_kg: float = Field(0.0, ge=0)
    height_cm: float = Field(0.0, ge=0)
    head_circumference_cm: float = Field(0.0, ge=0)

class FeedingType(str, Enum):
    """
    Kind of feeding, each with its own measurement.
    """
    BREAST_MILK = "breast_milk"        # Duration in minutes
    FORMULA = "formula"                # Amount in ml
    EXPRESSED_MILK = "expressed_milk"  # Amount in ml
    SOLID_FOOD = "solid_food"          # Food type

class FeedingRecord(BaseModel):
    """
    A single feeding.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    id: str = Field(default_factory=new_record_id)
    timestamp: datetime
    type: FeedingType = FeedingType.BREAST_MILK
    amount_ml: Optional[float] = Field(None, ge=0)
    duration_minutes: Optional[int] = Field(None, ge=0)
    notes: str = ""
    food_type: str = ""

class VaccinationStatus(str, Enum):
    """
    Status of a vaccination in the schedule.
    """
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    MISSED = "missed"

class VaccinationRecord(BaseModel):
    """
    A scheduled or given vaccination.
    """
    id: str = Field(default_factory=new_record_id)
    name: str
    scheduled_date: date
    status: VaccinationStatus = VaccinationStatus.SCHEDULED
    notes: str = ""
    location: str = ""

class GrowthRecord(BaseModel):
    """
    A growth measurement. Any of the measurements may be missing.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    id: str = Field(default_factory=new_record_id)
    date: date
    weight_kg: Optional[float] = Field(None, ge=0)
    height_cm: Optional[float] = Field(None, ge=0)
    head_circumference_cm: Optional[float] = Field(None, ge=0)
    notes: str = ""

class NewbornSummary(BaseModel):
    """
    Newborn care card for a given moment.
    """
    age_months: int = Field(0, ge=0)
    age_description: str
    feedings_today: int = Field(0, ge=0)
    last_feeding: Optional[str] = None
    upcoming_vaccinations: List[VaccinationRecord] = []
    latest_growth: Optional[GrowthRecord] = None
