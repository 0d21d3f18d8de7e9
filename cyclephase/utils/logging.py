"""
Structured logging for the cycle phase service.

Handlers log through the module level ``logger``. Tracebacks are folded onto
one line so an error stays a single CloudWatch event.
"""
import os
import sys
import json
import traceback
from typing import Any, Dict, Optional

from aws_lambda_powertools import Logger

SERVICE_NAME = "cycle_phase"
TRACE_SEPARATOR = " | "

def format_exception(exc_info) -> Optional[str]:
    """
    Render exception info as a single line.

    Args:
        exc_info: An (type, value, traceback) tuple, or True for the
            exception currently being handled

    Returns:
        The traceback lines joined with " | ", or None if there is no exception
    """
    if exc_info is True:
        exc_info = sys.exc_info()
    if not (isinstance(exc_info, tuple) and len(exc_info) == 3 and exc_info[0] is not None):
        return None

    chunks = traceback.format_exception(*exc_info)
    return TRACE_SEPARATOR.join(
        line.rstrip()
        for chunk in chunks
        for line in chunk.splitlines()
        if line.strip()
    )

def _with_trace(extra: Optional[Dict[str, Any]], exc_info) -> Dict[str, Any]:
    fields = dict(extra or {})
    fields["exception"] = format_exception(exc_info)
    return fields

class SingleLineLogger(Logger):
    """Powertools logger whose exception() entries never span several lines."""

    def exception(self, message, *args, **kwargs):
        exc_info = kwargs.pop("exc_info", True)
        kwargs["extra"] = _with_trace(kwargs.pop("extra", None), exc_info)
        super().exception(message, *args, exc_info=False, **kwargs)

def create_logger(service: str = SERVICE_NAME) -> SingleLineLogger:
    """Build a service logger tagged with the Lambda runtime details."""
    service_logger = SingleLineLogger(
        service=service,
        level=os.environ.get("LOG_LEVEL", "INFO"),
        json_serializer=json.dumps,
        use_rfc3339=True
    )
    service_logger.append_keys(
        region=os.environ.get("AWS_REGION"),
        function=os.environ.get("AWS_LAMBDA_FUNCTION_NAME"),
        version=os.environ.get("AWS_LAMBDA_FUNCTION_VERSION")
    )
    return service_logger

logger = create_logger()

def log_exception(target, message, exc_info=None, **kwargs):
    """
    Log an exception on any logger as a single-line error entry.

    Uses the exception currently being handled unless exc_info is given.
    The caller's extra dict is copied, not modified.
    """
    extra = _with_trace(kwargs.pop("extra", None), exc_info or sys.exc_info())
    target.error(message, extra=extra, **kwargs)
