"""
Request parsing and response helpers shared by the API handlers.
"""
import json
from datetime import date, datetime
from functools import wraps
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from cyclephase.models.template import CycleTemplate
from cyclephase.services.exceptions import (
    CycleEngineError,
    NoCycleRecordsError,
    DuplicateCycleRecordError
)
from cyclephase.services.template import parse_template, get_configured_template
from cyclephase.services.engine import validate_template
from cyclephase.utils.logging import logger

class BadRequestError(ValueError):
    """Raised when a request is missing parameters or has malformed values."""
    pass

def json_response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    """Build an API Gateway proxy response."""
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json"
        },
        "body": json.dumps(body, default=str),
        "isBase64Encoded": False
    }

def ok_response(result: Any) -> Dict[str, Any]:
    return json_response(200, {"ok": True, "result": result})

def error_response(status_code: int, description: str) -> Dict[str, Any]:
    return json_response(status_code, {
        "ok": False,
        "error_code": status_code,
        "description": description
    })

def get_query_params(event: Dict[str, Any]) -> Dict[str, str]:
    return event.get("queryStringParameters") or {}

def get_json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """Decode the request body, which API Gateway passes as a string."""
    body = event.get("body") or {}
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            raise BadRequestError("Request body is not valid JSON")
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    return body

def require_param(params: Dict[str, Any], name: str) -> str:
    value = params.get(name)
    if not value:
        raise BadRequestError(f"Missing {name}")
    return value

def parse_date(value: Any) -> Optional[date]:
    """
    Parse an ISO YYYY-MM-DD date.

    Returns:
        The date, or None if value is empty

    Raises:
        BadRequestError: If the value is not a valid date
    """
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (ValueError, TypeError):
        raise BadRequestError(f"Invalid date '{value}'. Use YYYY-MM-DD format")

def resolve_template(value: Any) -> CycleTemplate:
    """
    Template from a request, or the configured default.

    Args:
        value: Compact "Name:days,..." text, a list of
            {"name", "length_days"} objects, or None

    Raises:
        BadRequestError: If value is neither text nor a list
        InvalidTemplateError: If the template fails validation
    """
    if value is None or value == "":
        return get_configured_template()
    if isinstance(value, str):
        return parse_template(value)
    if isinstance(value, list):
        template = CycleTemplate(phases=value)
        validate_template(template)
        return template
    raise BadRequestError("template must be a 'Name:days,...' string or a list of phases")

def handle_errors(f: Callable) -> Callable:
    """
    Decorator translating service errors into API responses.

    Args:
        f: Handler function to wrap

    Returns:
        Wrapped handler function
    """
    @wraps(f)
    def wrapped(event: Dict[str, Any], *args: Any, **kwargs: Any) -> Dict[str, Any]:
        try:
            return f(event, *args, **kwargs)
        except (BadRequestError, CycleEngineError) as e:
            logger.warning("Rejected request", extra={
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            return error_response(400, str(e))
        except ValidationError as e:
            logger.warning("Request validation failed", extra={"error": str(e)})
            return error_response(400, str(e))
        except NoCycleRecordsError as e:
            return error_response(404, str(e))
        except DuplicateCycleRecordError as e:
            return error_response(409, str(e))
        except Exception as e:
            logger.exception("Unhandled error processing request", extra={
                "error_type": e.__class__.__name__
            })
            return error_response(500, "Internal server error")
    return wrapped
