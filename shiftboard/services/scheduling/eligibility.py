"""
Eligibility checks.
Determines if a worker can take a template instance given the current state.
"""

import logging
import math
from datetime import date, time
from functools import cmp_to_key
from typing import Optional

from .state import ScheduleGenerationState
from .time_utils import DEFAULT_TIMEZONE, shift_duration_hours, weekday_of
from .types import (
    AvailabilityLabel,
    DayOfWeek,
    LocationOperatingHours,
    ShiftTemplate,
    Worker,
    compare_job_levels,
)


logger = logging.getLogger(__name__)


def is_shift_within_availability(
    start: time,
    end: time,
    shift_date: date,
    availability: dict[DayOfWeek, list[AvailabilityLabel]],
    hours_for_day: LocationOperatingHours,
) -> bool:
    """
    Check a time range against the worker's labels for that weekday.

    all_day fits anything; morning fits ranges ending at or before the
    morning cutoff; afternoon fits ranges starting at or after it.
    """
    labels = availability.get(weekday_of(shift_date)) or []
    cutoff = hours_for_day.morning_cutoff

    for label in labels:
        if label == AvailabilityLabel.ALL_DAY:
            return True
        if label == AvailabilityLabel.MORNING and end <= cutoff:
            return True
        if label == AvailabilityLabel.AFTERNOON and start >= cutoff:
            return True

    return False


def would_exceed_preferred_hours(worker: Worker, state: ScheduleGenerationState, additional_hours: float) -> bool:
    if worker.preferred_hours_per_week is None:
        return False
    return state.hours_of(worker.id) + additional_hours > worker.preferred_hours_per_week


def is_eligible(
    worker: Worker,
    template: ShiftTemplate,
    shift_date: date,
    state: ScheduleGenerationState,
    hours_for_day: Optional[LocationOperatingHours],
    duration_hours: Optional[float] = None,
    tz_name: str = DEFAULT_TIMEZONE,
) -> bool:
    """
    Check if a worker can take this template instance right now.

    Does not look at is_lead; lead callers filter on that themselves.
    """
    if hours_for_day is None:
        logger.debug(f"No operating hours for {shift_date}; {worker.id} not eligible")
        return False

    if state.is_worker_busy(worker.id, shift_date):
        logger.debug(f"Worker {worker.id} already working on {shift_date}")
        return False

    if duration_hours is None:
        duration_hours = shift_duration_hours(template.start_time, template.end_time, tz_name)
    if would_exceed_preferred_hours(worker, state, duration_hours):
        logger.debug(f"Worker {worker.id} would exceed preferred hours with template {template.id}")
        return False

    if template.position_id not in worker.position_ids:
        return False

    if template.location_id not in worker.location_ids:
        return False

    if not is_shift_within_availability(
        template.start_time, template.end_time, shift_date, worker.availability, hours_for_day
    ):
        logger.debug(f"Worker {worker.id} not available for template {template.id} on {shift_date}")
        return False

    return True


def rank_candidates(
    candidates: list[Worker],
    state: ScheduleGenerationState,
    by_hours: bool = True,
) -> list[Worker]:
    """Job level descending, then (optionally) assigned hours ascending."""
    def compare(a: Worker, b: Worker) -> int:
        by_level = compare_job_levels(b.job_level, a.job_level)
        if by_level or not by_hours:
            return by_level
        a_hours, b_hours = state.hours_of(a.id), state.hours_of(b.id)
        return (a_hours > b_hours) - (a_hours < b_hours)

    return sorted(candidates, key=cmp_to_key(compare))


def top_tied(
    ranked: list[Worker],
    state: ScheduleGenerationState,
    by_hours: bool = True,
) -> list[Worker]:
    """Workers sharing the first-ranked position; more than one means a tie."""
    if not ranked:
        return []

    best = ranked[0]
    tied = []
    for worker in ranked:
        if worker.job_level != best.job_level:
            break
        if by_hours and not math.isclose(state.hours_of(worker.id), state.hours_of(best.id)):
            break
        tied.append(worker)
    return tied


def find_eligible_workers(
    workers: list[Worker],
    template: ShiftTemplate,
    shift_date: date,
    state: ScheduleGenerationState,
    hours_for_day: Optional[LocationOperatingHours],
    lead_only: bool = False,
    tz_name: str = DEFAULT_TIMEZONE,
) -> list[Worker]:
    """
    All workers who could take the instance, best candidate first.

    Lead lookups rank by job level only; others also spread hours.
    """
    duration = shift_duration_hours(template.start_time, template.end_time, tz_name)
    eligible = [
        w for w in workers
        if (not lead_only or w.is_lead)
        and is_eligible(w, template, shift_date, state, hours_for_day, duration, tz_name)
    ]
    return rank_candidates(eligible, state, by_hours=not lead_only)
