"""
Cycle record model definition.
"""
from datetime import date
from typing import Optional, Set
from pydantic import BaseModel, ConfigDict, model_validator

class CycleRecord(BaseModel):
    """
    One recorded cycle, anchored on the first day of menstruation.
    """
    model_config = ConfigDict(frozen=True)

    user_id: str
    start_date: date
    end_date: Optional[date] = None  # None while ongoing
    symptoms: Set[str] = set()
    notes: str = ""
    created_at: Optional[str] = None

    @model_validator(mode="after")
    def check_end_date(self) -> "CycleRecord":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    @property
    def is_ongoing(self) -> bool:
        """Check if the period has no recorded end."""
        return self.end_date is None
