"""
Lambda handlers package for AWS Lambda functions.
"""
from .status import handler as status_handler
from .prediction import handler as prediction_handler
from .phase_calendar import handler as calendar_handler
from .records import handler as records_handler
from .reminders import handler as reminders_handler

__all__ = [
    "status_handler",
    "prediction_handler",
    "calendar_handler",
    "records_handler",
    "reminders_handler"
]
