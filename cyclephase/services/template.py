"""
Cycle template construction and configuration.

Templates come from three places: the built-in default, a compact text form
("Menstrual:5,Follicular:9,...") used in environment variables and query
strings, and explicit (name, length) pairs.
"""
import os
from typing import Iterable, Tuple

from aws_lambda_powertools import Logger
from cyclephase.models.template import CycleTemplate, CyclePhaseDefinition
from cyclephase.services.constants import DEFAULT_PHASE_LENGTHS
from cyclephase.services.exceptions import InvalidTemplateError
from cyclephase.services.engine import validate_template

logger = Logger()

def build_template(pairs: Iterable[Tuple[str, int]]) -> CycleTemplate:
    """
    Build a template from (name, length) pairs.

    Example:
        >>> build_template([("Bleed", 4), ("Rest", 24)]).cycle_length
        28
    """
    return CycleTemplate(phases=[
        CyclePhaseDefinition(name=name, length_days=length)
        for name, length in pairs
    ])

def default_template() -> CycleTemplate:
    """Four-phase 28 day template (5/9/5/9)."""
    return build_template(DEFAULT_PHASE_LENGTHS)

def parse_template(text: str) -> CycleTemplate:
    """
    Parse the compact template form.

    Args:
        text: Comma separated "Name:days" entries, e.g. "Menstrual:5,Luteal:23"

    Returns:
        Validated cycle template

    Raises:
        InvalidTemplateError: If an entry is malformed or the resulting
            template fails validation
    """
    pairs = []
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, length = entry.partition(":")
        name = name.strip()
        if not sep or not name:
            raise InvalidTemplateError(f"Malformed template entry '{entry}', expected Name:days")
        try:
            pairs.append((name, int(length.strip())))
        except ValueError:
            raise InvalidTemplateError(f"Phase '{name}' has a non-numeric length '{length.strip()}'")

    template = build_template(pairs)
    validate_template(template)
    return template

def format_template(template: CycleTemplate) -> str:
    """Inverse of parse_template."""
    return ",".join(f"{phase.name}:{phase.length_days}" for phase in template.phases)

def get_configured_template() -> CycleTemplate:
    """
    Template configured through the CYCLE_TEMPLATE environment variable.

    Falls back to the default template when the variable is unset. A set but
    invalid value raises rather than silently using the default.
    """
    configured = os.environ.get("CYCLE_TEMPLATE")
    if not configured:
        return default_template()

    template = parse_template(configured)
    logger.debug("Using configured cycle template", extra={
        "template": configured,
        "cycle_length": template.cycle_length
    })
    return template
