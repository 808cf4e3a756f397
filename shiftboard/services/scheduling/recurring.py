"""
Recurring assignment processing.

Standing weekly commitments are applied before any allocation. They are
trusted overrides: no eligibility check runs here, only the same-day
conflict check and a match against the location's templates.
"""

import logging
from datetime import date
from typing import Optional

from .state import ScheduleGenerationState, build_shift_records
from .time_utils import DEFAULT_TIMEZONE, date_for_weekday, format_civil_time, shift_duration_hours
from .types import AssignmentType, RecurringShiftAssignment, ShiftTemplate


logger = logging.getLogger(__name__)


def find_matching_template(
    recurring: RecurringShiftAssignment,
    templates: list[ShiftTemplate],
) -> Optional[ShiftTemplate]:
    """The template with the same location, position, weekday and exact times."""
    for template in templates:
        if (
            template.location_id == recurring.location_id
            and template.position_id == recurring.position_id
            and recurring.day_of_week in template.days_of_week
            and template.start_time == recurring.start_time
            and template.end_time == recurring.end_time
        ):
            return template
    return None


def process_recurring_assignments(
    recurring_assignments: list[RecurringShiftAssignment],
    week_dates: list[date],
    templates: list[ShiftTemplate],
    state: ScheduleGenerationState,
    tz_name: str = DEFAULT_TIMEZONE,
) -> list[str]:
    """
    Apply recurring assignments in input order; the first one wins a conflict.

    Returns:
        Warning messages for every skipped assignment
    """
    warnings = []

    for recurring in recurring_assignments:
        try:
            shift_date = date_for_weekday(recurring.day_of_week, week_dates)
        except ValueError as e:
            warnings.append(f"Error determining date for recurring assignment ID {recurring.id}: {e}")
            continue

        if state.is_committed_elsewhere(recurring.worker_id, shift_date):
            warnings.append(
                f"Worker {recurring.worker_id} is already scheduled at another location on "
                f"{shift_date.isoformat()}. Skipping assignment ID {recurring.id}."
            )
            continue

        if state.is_worker_busy(recurring.worker_id, shift_date):
            warnings.append(
                f"Worker {recurring.worker_id} has conflicting recurring assignments on "
                f"{shift_date.isoformat()}. Skipping assignment ID {recurring.id}."
            )
            continue

        template = find_matching_template(recurring, templates)
        if template is None:
            warnings.append(
                f"Recurring assignment for worker {recurring.worker_id} on {recurring.day_of_week.value} "
                f"({format_civil_time(recurring.start_time)}-{format_civil_time(recurring.end_time)}) "
                f"does not match any required shift template at location {recurring.location_id}. "
                f"Skipping assignment ID {recurring.id}."
            )
            continue

        if state.is_slot_filled(template.id, shift_date):
            warnings.append(
                f"Template {template.id} on {shift_date.isoformat()} is already covered by another "
                f"recurring assignment. Skipping assignment ID {recurring.id}."
            )
            continue

        try:
            duration = shift_duration_hours(recurring.start_time, recurring.end_time, tz_name)
        except ValueError as e:
            warnings.append(f"Error calculating duration for assignment ID {recurring.id}: {e}. Skipping.")
            continue

        shift, assignment = build_shift_records(
            template,
            shift_date,
            recurring.worker_id,
            recurring.assignment_type or AssignmentType.REGULAR,
            is_recurring_generated=True,
        )
        state.record_assignment(shift, assignment, template.id, duration)
        logger.debug(f"Recurring assignment {recurring.id} placed {recurring.worker_id} on {shift_date}")

    return warnings
