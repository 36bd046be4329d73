"""
Pregnancy model definitions for gestational stage tracking.
"""
from enum import Enum
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

class Trimester(str, Enum):
    """
    Pregnancy trimesters, roughly 13 weeks each.
    """
    FIRST = "first"      # Weeks 0-13
    SECOND = "second"    # Weeks 14-26
    THIRD = "third"      # Week 27 onwards

class GestationalStatus(BaseModel):
    """
    Derived pregnancy stage for a given last menstrual period and date.
    """
    current_week: int = Field(0, ge=0)
    trimester: Trimester = Trimester.FIRST
    due_date: Optional[date] = None
    progress_percent: int = Field(0, ge=0, le=100)

    @property
    def weeks_remaining(self) -> int:
        """Weeks left until the 40 week term."""
        return max(0, 40 - self.current_week)

    @property
    def is_overdue(self) -> bool:
        """Check if the pregnancy has gone past 40 weeks."""
        return self.current_week > 40
