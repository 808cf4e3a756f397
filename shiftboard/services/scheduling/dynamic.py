"""
Generic (non-lead) assignment.
Picks the most senior eligible worker, spreading hours among equals.
"""

import logging

from .eligibility import find_eligible_workers, top_tied
from .state import ScheduleGenerationState, build_shift_records
from .time_utils import DEFAULT_TIMEZONE, shift_duration_hours
from .types import (
    AssignmentType,
    DayOfWeek,
    LocationOperatingHours,
    TemplateInstance,
    Worker,
)


logger = logging.getLogger(__name__)


def assign_dynamic(
    instance: TemplateInstance,
    workers: list[Worker],
    state: ScheduleGenerationState,
    hours_by_day: dict[DayOfWeek, LocationOperatingHours],
    tz_name: str = DEFAULT_TIMEZONE,
) -> list[str]:
    """
    Assign a regular worker to one unfilled non-lead instance.

    Ranked by job level descending then assigned hours ascending; a tie
    on both leaves the instance open.
    """
    template = instance.template
    if template.lead_type is not None:
        return []

    shift_date = instance.shift_date
    if state.is_slot_filled(template.id, shift_date):
        return []

    hours_for_day = hours_by_day.get(instance.day_of_week)
    if hours_for_day is None:
        return [
            f"Missing operating hours for {instance.day_of_week.value} at location {template.location_id}. "
            f"Cannot assign dynamic shift for template {template.id}."
        ]

    try:
        duration = shift_duration_hours(template.start_time, template.end_time, tz_name)
        candidates = find_eligible_workers(workers, template, shift_date, state, hours_for_day, tz_name=tz_name)
    except ValueError as e:
        return [f"Error calculating duration for dynamic assignment (Template {template.id}): {e}. Skipping assignment."]

    if not candidates:
        return [f"No eligible worker found for template {template.id} on {shift_date.isoformat()}."]

    tied = top_tied(candidates, state)
    if len(tied) > 1:
        tied_ids = ", ".join(w.id for w in tied)
        return [
            f"Tie detected for template {template.id} on {shift_date.isoformat()} "
            f"between workers: {tied_ids}. Leaving unassigned."
        ]

    winner = tied[0]
    shift, assignment = build_shift_records(template, shift_date, winner.id, AssignmentType.REGULAR)
    state.record_assignment(shift, assignment, template.id, duration)
    logger.debug(f"Template {template.id} on {shift_date} assigned to {winner.id}")
    return []
