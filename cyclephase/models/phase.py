"""
Phase span and cycle status models.
"""
from datetime import date
from pydantic import BaseModel

class PhaseSpan(BaseModel):
    """
    Date range covered by one phase of a cycle (both ends inclusive).
    """
    name: str
    start_date: date
    end_date: date
    length_days: int

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

class CycleStatus(BaseModel):
    """
    Snapshot of where a user is in their cycle on a given date.
    """
    reference_start: date
    query_date: date
    cycle_day: int  # 1-based
    phase: str
    days_remaining_in_phase: int
    predicted_next_start: date
    days_until_next_start: int
    cycle_length: int
