"""
Schedule generator - main orchestration layer.

This module provides the high-level API for generating schedules: it fetches
the prerequisites, runs the allocation phases in a fixed order against a
fresh generation state and hands the result to the persistence step.
"""

import logging
from datetime import date
from functools import partial
from typing import Callable, Optional

from sqlalchemy.orm import Session

from shiftboard.core.config import settings

from .data_loader import load_scheduling_prerequisites
from .data_saver import save_schedule
from .dynamic import assign_dynamic
from .leads import assign_lead
from .paired import PairedShiftProcessor
from .recurring import process_recurring_assignments
from .state import ScheduleGenerationState
from .time_utils import DEFAULT_TIMEZONE, week_range
from .types import (
    DayOfWeek,
    GenerationResult,
    LocationOperatingHours,
    PairedShiftConfig,
    ScheduledShift,
    SchedulingPrerequisites,
    ShiftAssignment,
)


logger = logging.getLogger(__name__)

FetchPrerequisites = Callable[[str, list[date]], SchedulingPrerequisites]
SaveSchedule = Callable[[list[ScheduledShift], list[ShiftAssignment], str, list[date]], None]


def _add_warnings(warnings: list[str], new: list[str]) -> None:
    for message in new:
        logger.warning(message)
    warnings.extend(new)


def _hours_by_day(operating_hours: list[LocationOperatingHours]) -> dict[DayOfWeek, LocationOperatingHours]:
    return {hours.day_of_week: hours for hours in operating_hours}


def generate_weekly_schedule(
    location_id: str,
    start_date: date,
    fetch_prerequisites: FetchPrerequisites,
    save: SaveSchedule,
    paired_config: Optional[PairedShiftConfig] = None,
    tz_name: str = DEFAULT_TIMEZONE,
) -> GenerationResult:
    """
    Generate and persist one week of shifts for a location.

    Phases run once each, in order: recurring, paired (only at the configured
    location), leads, then generic allocation. Any exception is reported as a
    warning with success=False and nothing is saved.

    Args:
        location_id: Location to generate for
        start_date: Any date in the target week
        fetch_prerequisites: Called with (location_id, week_dates)
        save: Called with (shifts, assignments, location_id, week_dates)
        paired_config: Split-shift pairing to enforce, if any
        tz_name: Business timezone for time-of-day arithmetic

    Returns:
        GenerationResult with warnings and templates left entirely unfilled
    """
    warnings: list[str] = []

    try:
        week_dates = week_range(start_date)
        logger.info(f"Starting schedule generation for location {location_id}, week of {week_dates[0]}")

        prerequisites = fetch_prerequisites(location_id, week_dates)
        templates = prerequisites.templates
        hours_by_day = _hours_by_day(prerequisites.operating_hours)

        workers_for_location = [w for w in prerequisites.workers if location_id in w.location_ids]
        active_workers = [w for w in workers_for_location if not w.inactive]
        logger.info(
            f"{len(prerequisites.workers)} workers fetched, {len(workers_for_location)} linked to "
            f"location {location_id}, {len(active_workers)} active"
        )

        if not active_workers:
            _add_warnings(warnings, [
                f"No active workers found for location {location_id}. Schedule generation might be incomplete."
            ])
        if not templates:
            _add_warnings(warnings, ["No shift templates found for this location. Cannot generate schedule."])
            return GenerationResult(success=False, warnings=warnings)
        if not hours_by_day:
            _add_warnings(warnings, ["No operating hours found for this location. Availability checks might fail."])

        state = ScheduleGenerationState(
            templates,
            active_workers,
            external_commitments=prerequisites.other_location_commitments,
        )

        _add_warnings(warnings, process_recurring_assignments(
            prerequisites.recurring_assignments, week_dates, templates, state, tz_name
        ))
        logger.info(f"Recurring assignments processed. Current state: {len(state.scheduled_shifts)} shifts")

        if paired_config is not None:
            processor = PairedShiftProcessor(paired_config, tz_name)
            if processor.applies_to(location_id):
                _add_warnings(warnings, processor.process(templates, active_workers, state, week_dates, hours_by_day))
                logger.info(f"Paired shifts processed. Current state: {len(state.scheduled_shifts)} shifts")

        lead_instances = [i for i in state.unfilled_instances(week_dates) if i.template.lead_type is not None]
        shifts_before = len(state.scheduled_shifts)
        for instance in lead_instances:
            _add_warnings(warnings, assign_lead(instance, active_workers, state, hours_by_day, tz_name))
        logger.info(
            f"Lead assignment processed for {len(lead_instances)} instances. "
            f"Shifts before: {shifts_before}, after: {len(state.scheduled_shifts)}"
        )

        dynamic_instances = [i for i in state.unfilled_instances(week_dates) if i.template.lead_type is None]
        shifts_before = len(state.scheduled_shifts)
        for instance in dynamic_instances:
            _add_warnings(warnings, assign_dynamic(instance, active_workers, state, hours_by_day, tz_name))
        logger.info(
            f"Dynamic assignment processed for {len(dynamic_instances)} instances. "
            f"Shifts before: {shifts_before}, after: {len(state.scheduled_shifts)}"
        )

        shifts = state.scheduled_shifts
        assignments = state.shift_assignments
        unassigned = state.unfilled_templates()

        if not shifts:
            _add_warnings(warnings, ["No shifts were generated in any phase."])

        save(shifts, assignments, location_id, week_dates)
        logger.info(f"Schedule saved: {len(shifts)} shifts, {len(unassigned)} templates unassigned")

    except Exception as e:
        logger.exception(f"Error during schedule generation for location {location_id}")
        warnings.append(f"Critical error during generation: {e}")
        return GenerationResult(success=False, warnings=warnings)

    return GenerationResult(
        success=True,
        warnings=warnings,
        unassigned_slots=unassigned,
        shifts=shifts,
        assignments=assignments,
    )


def generate_schedule(
    db: Session,
    location_id: str,
    start_date: date,
    paired_config: Optional[PairedShiftConfig] = None,
) -> GenerationResult:
    """
    Generate a schedule for a location using the database collaborators.

    Example:
        from datetime import date
        from shiftboard.services.scheduling import generate_schedule

        result = generate_schedule(db, location_id, date(2025, 1, 20), settings.paired_shift_config())
        if not result.success:
            print(f"Warnings: {result.warnings}")
    """
    return generate_weekly_schedule(
        location_id,
        start_date,
        fetch_prerequisites=partial(load_scheduling_prerequisites, db),
        save=partial(save_schedule, db, retention_days=settings.RETENTION_DAYS),
        paired_config=paired_config,
        tz_name=settings.APP_TIMEZONE,
    )


def generate_schedule_from_prerequisites(
    location_id: str,
    start_date: date,
    prerequisites: SchedulingPrerequisites,
    paired_config: Optional[PairedShiftConfig] = None,
    tz_name: str = DEFAULT_TIMEZONE,
) -> GenerationResult:
    """
    Run generation over pre-loaded prerequisites without saving.

    Useful for testing or for previewing a week before committing it.
    """
    return generate_weekly_schedule(
        location_id,
        start_date,
        fetch_prerequisites=lambda _location_id, _week_dates: prerequisites,
        save=lambda *_: None,
        paired_config=paired_config,
        tz_name=tz_name,
    )
