"""
Lambda handler for period reminders.

Runs on a schedule (or on demand) with {"user_id": ..., "date": ...} and
stores a "Your cycle starts in N days" notification when one is due.
"""
from typing import Dict
from datetime import date

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from cyclephase.handlers.common import (
    handle_errors,
    ok_response,
    get_json_body,
    require_param,
    parse_date,
    resolve_template
)
from cyclephase.services.notifications import create_period_reminder
from cyclephase.services.records import CycleRecordRepository
from cyclephase.utils.logging import logger

tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@handle_errors
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Create a period reminder for the user if their next cycle is near.

    Accepts either a direct invocation payload or an API Gateway event
    carrying the same fields in its body.
    """
    payload = get_json_body(event) if "body" in event else event
    user_id = require_param(payload, "user_id")
    query_date = parse_date(payload.get("date")) or date.today()
    template = resolve_template(payload.get("template"))

    records = CycleRecordRepository().list_cycle_records(user_id)
    notification = create_period_reminder(user_id, records, template, query_date)

    return ok_response({
        "created": notification is not None,
        "notification": notification.model_dump() if notification else None
    })
