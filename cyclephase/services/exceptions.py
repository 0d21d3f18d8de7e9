"""
Service-level exceptions.

This module contains exceptions that can be raised by the cycle engine
and the services built on top of it.
"""

class CycleEngineError(Exception):
    """Base exception for cycle phase calculation errors."""
    pass

class InvalidTemplateError(CycleEngineError):
    """Raised when a cycle template is empty or has a non-positive phase length."""
    pass

class InvalidRangeError(CycleEngineError):
    """Raised when a query date precedes the reference start date."""
    pass

class NoCycleRecordsError(Exception):
    """Raised when a user has no cycle records to anchor calculations on."""
    pass

class CycleRecordError(Exception):
    """Base exception for cycle record persistence errors."""
    pass

class DuplicateCycleRecordError(CycleRecordError):
    """Raised when a record with the same start date already exists."""
    pass

class CycleRecordStorageError(CycleRecordError):
    """Raised when the record store cannot be read or written."""
    pass
