"""
Cycle template model definitions.
"""
from enum import Enum
from typing import List
from pydantic import BaseModel

class TraditionalPhaseType(str, Enum):
    """
    Phase names used by the default cycle template.
    """
    MENSTRUAL = "Menstrual"
    FOLLICULAR = "Follicular"
    OVULATION = "Ovulation"
    LUTEAL = "Luteal"

class CyclePhaseDefinition(BaseModel):
    """
    A named phase and its length in days.

    Lengths are not constrained here so that a broken template can still be
    represented and rejected by the engine.
    """
    name: str
    length_days: int

class CycleTemplate(BaseModel):
    """
    Ordered phase definitions making up one cycle.
    """
    phases: List[CyclePhaseDefinition] = []

    @property
    def cycle_length(self) -> int:
        """Sum of all phase lengths."""
        return sum(phase.length_days for phase in self.phases)

    @property
    def names(self) -> List[str]:
        return [phase.name for phase in self.phases]
