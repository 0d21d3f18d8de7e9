"""
Cycle phase engine.

Pure date arithmetic for mapping a cycle's reference start date and a cycle
template onto phases, phase date ranges and next-cycle predictions. Nothing
here reads the clock; every function takes the dates it works with.

Typical usage:
    template = default_template()
    phase = current_phase(last_start, template, date.today())
    next_start = predict_next_start(last_start, template)
    for day, name in phase_calendar_marks(last_start, template):
        highlight(day, name)
"""
from typing import Iterator, List, Tuple
from datetime import date, timedelta

from cyclephase.models.template import CycleTemplate
from cyclephase.models.phase import PhaseSpan
from cyclephase.services.exceptions import InvalidTemplateError, InvalidRangeError

def validate_template(template: CycleTemplate) -> None:
    """
    Check a template can be used for calculations.

    Args:
        template: Cycle template to check

    Raises:
        InvalidTemplateError: If the template has no phases or a phase
            length is zero or negative
    """
    if not template.phases:
        raise InvalidTemplateError("Cycle template must contain at least one phase")

    for phase in template.phases:
        if phase.length_days <= 0:
            raise InvalidTemplateError(
                f"Phase '{phase.name}' has invalid length {phase.length_days}; "
                "lengths must be positive"
            )

def cycle_length(template: CycleTemplate) -> int:
    """Validate the template and return its total length in days."""
    validate_template(template)
    return template.cycle_length

def days_between(reference_start: date, query_date: date) -> int:
    """
    Count whole days from the reference start to the query date.

    Raises:
        InvalidRangeError: If query_date is before reference_start
    """
    if query_date < reference_start:
        raise InvalidRangeError(
            f"Query date {query_date} is before reference start {reference_start}"
        )
    return (query_date - reference_start).days

def cycle_day(reference_start: date, template: CycleTemplate, query_date: date) -> int:
    """
    Position of the query date within its cycle.

    Args:
        reference_start: First day of the most recent recorded cycle
        template: Cycle template
        query_date: Date to locate

    Returns:
        Zero-based day in the cycle, always in [0, cycle length)

    Example:
        >>> cycle_day(date(2024, 1, 1), default_template(), date(2024, 1, 30))
        1
    """
    length = cycle_length(template)
    return days_between(reference_start, query_date) % length

def _locate(template: CycleTemplate, day: int) -> Tuple[int, int]:
    """Return (phase index, phase start offset) for a zero-based cycle day."""
    offset = 0
    for index, phase in enumerate(template.phases):
        # Closed-open interval: a boundary day belongs to the next phase
        if offset <= day < offset + phase.length_days:
            return index, offset
        offset += phase.length_days
    raise InvalidRangeError(f"Cycle day {day} is outside the template")

def current_phase(reference_start: date, template: CycleTemplate, query_date: date) -> str:
    """
    Determine the phase active on a given date.

    Cycles repeat, so dates more than one cycle length after the reference
    start wrap around to the beginning of the template.

    Args:
        reference_start: First day of the most recent recorded cycle
        template: Cycle template
        query_date: Date to look up, not before reference_start

    Returns:
        Name of the active phase

    Raises:
        InvalidTemplateError: If the template is empty or has a non-positive length
        InvalidRangeError: If query_date is before reference_start

    Example:
        >>> current_phase(date(2024, 1, 1), default_template(), date(2024, 1, 6))
        'Follicular'
    """
    day = cycle_day(reference_start, template, query_date)
    index, _ = _locate(template, day)
    return template.phases[index].name

def days_remaining_in_phase(reference_start: date, template: CycleTemplate, query_date: date) -> int:
    """Days left in the active phase, counting the query date itself."""
    day = cycle_day(reference_start, template, query_date)
    index, offset = _locate(template, day)
    return offset + template.phases[index].length_days - day

def predict_next_start(reference_start: date, template: CycleTemplate) -> date:
    """
    Predict when the next cycle starts.

    Args:
        reference_start: First day of the most recent recorded cycle
        template: Cycle template

    Returns:
        reference_start plus one cycle length

    Example:
        >>> predict_next_start(date(2024, 1, 1), default_template())
        datetime.date(2024, 1, 29)
    """
    return reference_start + timedelta(days=cycle_length(template))

def days_until_next_start(reference_start: date, template: CycleTemplate, query_date: date) -> int:
    """
    Days from the query date until the next cycle day zero.

    Returns a value in [1, cycle length]; on the first day of a cycle the
    following cycle is a full cycle length away.
    """
    return cycle_length(template) - cycle_day(reference_start, template, query_date)

def phase_ranges(reference_start: date, template: CycleTemplate) -> List[PhaseSpan]:
    """
    Date ranges spanned by each phase of the cycle starting at reference_start.

    Args:
        reference_start: First day of the cycle
        template: Cycle template

    Returns:
        One PhaseSpan per template phase, in order, contiguous and covering
        exactly one cycle length
    """
    validate_template(template)

    spans = []
    start = reference_start
    for phase in template.phases:
        end = start + timedelta(days=phase.length_days - 1)
        spans.append(PhaseSpan(
            name=phase.name,
            start_date=start,
            end_date=end,
            length_days=phase.length_days
        ))
        start = end + timedelta(days=1)
    return spans

class PhaseCalendar:
    """
    Day-by-day phase marks for one cycle.

    Iterating yields (date, phase name) pairs in date order, one per day of
    the cycle. Each iteration starts again from the reference start.

    The phases are copied when the calendar is built, so later changes to
    the template do not affect it.
    """

    def __init__(self, reference_start: date, template: CycleTemplate):
        validate_template(template)
        self.reference_start = reference_start
        self.phases: Tuple[Tuple[str, int], ...] = tuple(
            (phase.name, phase.length_days) for phase in template.phases
        )

    def __len__(self) -> int:
        return sum(length for _, length in self.phases)

    def __iter__(self) -> Iterator[Tuple[date, str]]:
        day = self.reference_start
        for name, length in self.phases:
            for _ in range(length):
                yield day, name
                day += timedelta(days=1)

def phase_calendar_marks(reference_start: date, template: CycleTemplate) -> PhaseCalendar:
    """
    Build calendar highlight data for one full cycle.

    The template is validated immediately; the marks themselves are produced
    lazily while iterating.

    Raises:
        InvalidTemplateError: If the template is empty or has a non-positive length
    """
    return PhaseCalendar(reference_start, template)
