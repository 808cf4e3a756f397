"""
Lead assignment.
Fills opening/closing lead slots, at most one of each per day.
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


def assign_lead(
    instance: TemplateInstance,
    workers: list[Worker],
    state: ScheduleGenerationState,
    hours_by_day: dict[DayOfWeek, LocationOperatingHours],
    tz_name: str = DEFAULT_TIMEZONE,
) -> list[str]:
    """
    Assign the single highest-level eligible lead to a lead instance.

    A tie at the top job level leaves the slot open; there is no hours
    tie-break for leads.
    """
    template = instance.template
    if template.lead_type is None:
        return []

    shift_date = instance.shift_date
    if state.has_lead(shift_date, template.lead_type):
        return []

    lead_label = template.lead_type.value
    try:
        duration = shift_duration_hours(template.start_time, template.end_time, tz_name)
        candidates = find_eligible_workers(
            workers,
            template,
            shift_date,
            state,
            hours_by_day.get(instance.day_of_week),
            lead_only=True,
            tz_name=tz_name,
        )
    except ValueError as e:
        return [f"Error calculating duration for lead assignment (Template {template.id}): {e}. Skipping assignment."]

    if not candidates:
        return [f"No eligible lead worker found for template {template.id} ({lead_label}) on {shift_date.isoformat()}."]

    tied = top_tied(candidates, state, by_hours=False)
    if len(tied) > 1:
        tied_ids = ", ".join(w.id for w in tied)
        return [
            f"Tie detected for lead assignment for template {template.id} ({lead_label}) on "
            f"{shift_date.isoformat()} between workers: {tied_ids}. Leaving unassigned."
        ]

    winner = tied[0]
    shift, assignment = build_shift_records(template, shift_date, winner.id, AssignmentType.LEAD)
    state.record_assignment(shift, assignment, template.id, duration)
    logger.debug(f"{lead_label} lead on {shift_date} assigned to {winner.id}")
    return []
