"""
Constants and shared data for cycle-related services.
"""
from typing import List, Tuple
from cyclephase.models.template import TraditionalPhaseType

DEFAULT_PHASE_LENGTHS: List[Tuple[str, int]] = [
    (TraditionalPhaseType.MENSTRUAL.value, 5),
    (TraditionalPhaseType.FOLLICULAR.value, 9),
    (TraditionalPhaseType.OVULATION.value, 5),
    (TraditionalPhaseType.LUTEAL.value, 9)
]

# Reminder lead time when PERIOD_REMINDER_DAYS is not set
DEFAULT_REMINDER_DAYS = 3

PERIOD_NOTIFICATION_MESSAGE = "Your cycle starts in {days} days 📅"
