"""
Lambda handler for the next period prediction display.
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
from cyclephase.services.engine import cycle_length, predict_next_start
from cyclephase.services.records import CycleRecordRepository
from cyclephase.utils.logging import logger

tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@handle_errors
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Predict the start of the user's next cycle.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    params = get_query_params(event)
    user_id = require_param(params, "user_id")
    template = resolve_template(params.get("template"))

    records = CycleRecordRepository().list_cycle_records(user_id)
    reference_start = get_reference_start(records)
    next_start = predict_next_start(reference_start, template)

    logger.info("Next cycle predicted", extra={
        "user_id": user_id,
        "next_start": next_start.isoformat()
    })

    return ok_response({
        "reference_start": reference_start.isoformat(),
        "predicted_next_start": next_start.isoformat(),
        "cycle_length": cycle_length(template)
    })
