"""
Lambda handler for the current cycle status display.

GET /status?user_id=...&date=YYYY-MM-DD&template=Name:days,...
"""
from typing import Dict
from datetime import date

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from cyclephase.handlers.common import (
    handle_errors,
    ok_response,
    get_query_params,
    require_param,
    parse_date,
    resolve_template
)
from cyclephase.services.cycle import get_cycle_status
from cyclephase.services.records import CycleRecordRepository
from cyclephase.utils.logging import logger

tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@handle_errors
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Report the phase active on the requested date (today by default).

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response with a CycleStatus result
    """
    params = get_query_params(event)
    user_id = require_param(params, "user_id")
    query_date = parse_date(params.get("date")) or date.today()
    template = resolve_template(params.get("template"))

    records = CycleRecordRepository().list_cycle_records(user_id)
    status = get_cycle_status(records, template, query_date)

    return ok_response(status.model_dump(mode="json"))
