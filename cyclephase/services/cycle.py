"""
Service module for cycle status based on recorded cycles.

Only the most recent record anchors the calculations; older records are
kept for history but never change the current phase or prediction.

Typical usage:
    records = repository.list_cycle_records(user_id)
    status = get_cycle_status(records, get_configured_template(), date.today())
    print(f"Day {status.cycle_day}: {status.phase}")
"""
from typing import List
from datetime import date

from aws_lambda_powertools import Logger
from cyclephase.models.record import CycleRecord
from cyclephase.models.template import CycleTemplate
from cyclephase.models.phase import CycleStatus
from cyclephase.services.exceptions import NoCycleRecordsError
from cyclephase.services.engine import (
    cycle_length,
    cycle_day,
    current_phase,
    days_remaining_in_phase,
    days_until_next_start,
    predict_next_start
)

logger = Logger()

def sort_records(records: List[CycleRecord]) -> List[CycleRecord]:
    """Order records most recent first."""
    return sorted(records, key=lambda x: x.start_date, reverse=True)

def get_reference_start(records: List[CycleRecord]) -> date:
    """
    Start date of the most recent recorded cycle.

    Raises:
        NoCycleRecordsError: If no records are provided
    """
    if not records:
        raise NoCycleRecordsError("No cycle records found")
    return max(record.start_date for record in records)

def get_cycle_status(
    records: List[CycleRecord],
    template: CycleTemplate,
    query_date: date
) -> CycleStatus:
    """
    Combine the latest record, template and query date into a status snapshot.

    Args:
        records: User's cycle records in any order
        template: Cycle template
        query_date: Date to report on

    Returns:
        CycleStatus for query_date

    Raises:
        NoCycleRecordsError: If records is empty
        InvalidTemplateError: If the template is invalid
        InvalidRangeError: If query_date is before the latest record's start

    Example:
        >>> status = get_cycle_status(records, default_template(), date(2024, 1, 6))
        >>> status.phase, status.cycle_day
        ('Follicular', 6)
    """
    reference_start = get_reference_start(records)

    status = CycleStatus(
        reference_start=reference_start,
        query_date=query_date,
        cycle_day=cycle_day(reference_start, template, query_date) + 1,
        phase=current_phase(reference_start, template, query_date),
        days_remaining_in_phase=days_remaining_in_phase(reference_start, template, query_date),
        predicted_next_start=predict_next_start(reference_start, template),
        days_until_next_start=days_until_next_start(reference_start, template, query_date),
        cycle_length=cycle_length(template)
    )

    logger.info("Cycle status calculated", extra={
        "reference_start": str(reference_start),
        "query_date": str(query_date),
        "phase": status.phase,
        "cycle_day": status.cycle_day
    })
    return status
