"""
Lambda handler for calendar phase highlighting.
"""
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from cyclephase.handlers.common import (
    handle_errors,
    ok_response,
    get_query_params,
    require_param,
    resolve_template
)
from cyclephase.services.cycle import get_reference_start
from cyclephase.services.engine import phase_calendar_marks, phase_ranges
from cyclephase.services.records import CycleRecordRepository
from cyclephase.utils.logging import logger

tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@handle_errors
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Return per-day phase marks and phase date ranges for the current cycle.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response with "marks" and "phases"
    """
    params = get_query_params(event)
    user_id = require_param(params, "user_id")
    template = resolve_template(params.get("template"))

    records = CycleRecordRepository().list_cycle_records(user_id)
    reference_start = get_reference_start(records)

    marks = [
        {"date": day.isoformat(), "phase": name}
        for day, name in phase_calendar_marks(reference_start, template)
    ]
    phases = [span.model_dump(mode="json") for span in phase_ranges(reference_start, template)]

    return ok_response({
        "reference_start": reference_start.isoformat(),
        "marks": marks,
        "phases": phases
    })
