"""
Lambda handler for listing and adding cycle records.
"""
from typing import Dict, List, Optional
from datetime import date

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel

from cyclephase.handlers.common import (
    BadRequestError,
    handle_errors,
    ok_response,
    json_response,
    get_query_params,
    get_json_body,
    require_param
)
from cyclephase.models.record import CycleRecord
from cyclephase.services.records import CycleRecordRepository
from cyclephase.utils.logging import logger

tracer = Tracer()

class CreateCycleRecordRequest(BaseModel):
    """Add period request model."""
    user_id: str
    start_date: date
    end_date: Optional[date] = None
    symptoms: List[str] = []
    notes: str = ""

def serialize_record(record: CycleRecord) -> Dict:
    data = record.model_dump(mode="json")
    data["symptoms"] = sorted(record.symptoms)
    return data

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@handle_errors
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    GET lists a user's records (most recent first), POST adds one.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    method = (event.get("httpMethod") or "GET").upper()
    repository = CycleRecordRepository()

    if method == "GET":
        user_id = require_param(get_query_params(event), "user_id")
        records = repository.list_cycle_records(user_id)
        return ok_response({
            "records": [serialize_record(record) for record in records],
            "total_count": len(records)
        })

    if method == "POST":
        request = CreateCycleRecordRequest(**get_json_body(event))
        record = repository.create_cycle_record(
            user_id=request.user_id,
            start_date=request.start_date,
            symptoms=request.symptoms,
            notes=request.notes,
            end_date=request.end_date
        )
        return json_response(201, {"ok": True, "result": serialize_record(record)})

    raise BadRequestError(f"Unsupported method {method}")
