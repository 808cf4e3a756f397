"""
Paired split-shift processing.

At one configured location, one position is covered by two consecutive
templates that must go to the same worker on a given day. The pair is
assigned as a unit or not at all.
"""

import logging
from datetime import date
from typing import Optional

from .eligibility import (
    is_shift_within_availability,
    rank_candidates,
    top_tied,
    would_exceed_preferred_hours,
)
from .state import ScheduleGenerationState, build_shift_records
from .time_utils import DEFAULT_TIMEZONE, date_for_weekday, shift_duration_hours
from .types import (
    AssignmentType,
    DayOfWeek,
    LocationOperatingHours,
    PairedShiftConfig,
    ShiftTemplate,
    Worker,
)


logger = logging.getLogger(__name__)


class PairedShiftProcessor:
    """Assigns the configured template pair to a single worker per day."""

    def __init__(self, config: PairedShiftConfig, tz_name: str = DEFAULT_TIMEZONE):
        self.config = config
        self.tz_name = tz_name

    def applies_to(self, location_id: str) -> bool:
        return location_id == self.config.location_id

    def _find_templates(
        self, templates: list[ShiftTemplate]
    ) -> tuple[Optional[ShiftTemplate], Optional[ShiftTemplate]]:
        by_id = {t.id: t for t in templates}

        def matches(template_id: str) -> Optional[ShiftTemplate]:
            template = by_id.get(template_id)
            if template is None:
                return None
            if template.location_id != self.config.location_id or template.position_id != self.config.position_id:
                return None
            return template

        return matches(self.config.first_template_id), matches(self.config.second_template_id)

    def process(
        self,
        templates: list[ShiftTemplate],
        workers: list[Worker],
        state: ScheduleGenerationState,
        week_dates: list[date],
        hours_by_day: dict[DayOfWeek, LocationOperatingHours],
    ) -> list[str]:
        """
        Run the pair assignment for each applicable weekday.

        Returns:
            Warning messages (missing templates, partial fills, no candidate, ties)
        """
        warnings = []

        first, second = self._find_templates(templates)
        if first is None or second is None or first is second:
            warnings.append(
                f"Could not find one or both paired shift templates for location "
                f"{self.config.location_id}. Skipping pair assignment."
            )
            return warnings

        first_duration = shift_duration_hours(first.start_time, first.end_time, self.tz_name)
        second_duration = shift_duration_hours(second.start_time, second.end_time, self.tz_name)
        combined_duration = first_duration + second_duration

        for day_of_week in first.days_of_week:
            shift_date = date_for_weekday(day_of_week, week_dates)
            day_label = shift_date.isoformat()

            if day_of_week not in second.days_of_week:
                warnings.append(
                    f"Paired template {second.id} does not run on {day_of_week.value}. "
                    f"Cannot assign pair on {day_label}."
                )
                continue

            first_filled = state.is_slot_filled(first.id, shift_date)
            second_filled = state.is_slot_filled(second.id, shift_date)
            if first_filled or second_filled:
                if first_filled != second_filled:
                    warnings.append(
                        f"Inconsistent state for paired shift on {day_label}. "
                        f"One template filled, the other not. Cannot assign pair."
                    )
                continue

            hours_for_day = hours_by_day.get(day_of_week)
            if hours_for_day is None:
                warnings.append(f"Missing operating hours for {day_of_week.value}. Cannot assign paired shift.")
                continue

            candidates = [
                w for w in workers
                if self._is_candidate(w, first, second, shift_date, state, hours_for_day, combined_duration)
            ]
            if not candidates:
                warnings.append(f"No eligible worker found for the paired shift on {day_label}.")
                continue

            ranked = rank_candidates(candidates, state)
            tied = top_tied(ranked, state)
            if len(tied) > 1:
                tied_ids = ", ".join(w.id for w in tied)
                warnings.append(
                    f"Tie detected for paired shift on {day_label} between workers {tied_ids}. Leaving unassigned."
                )
                continue

            winner = tied[0]
            first_shift, first_assignment = build_shift_records(first, shift_date, winner.id, AssignmentType.REGULAR)
            second_shift, second_assignment = build_shift_records(second, shift_date, winner.id, AssignmentType.REGULAR)
            state.record_assignments([
                (first_shift, first_assignment, first.id, first_duration),
                (second_shift, second_assignment, second.id, second_duration),
            ])
            logger.info(f"Paired shift on {day_label} assigned to {winner.id}")

        return warnings

    def _is_candidate(
        self,
        worker: Worker,
        first: ShiftTemplate,
        second: ShiftTemplate,
        shift_date: date,
        state: ScheduleGenerationState,
        hours_for_day: LocationOperatingHours,
        combined_duration: float,
    ) -> bool:
        if self.config.position_id not in worker.position_ids:
            return False
        if self.config.location_id not in worker.location_ids:
            return False
        if state.is_worker_busy(worker.id, shift_date):
            return False
        if would_exceed_preferred_hours(worker, state, combined_duration):
            logger.debug(f"Worker {worker.id} would exceed preferred hours with the paired shift")
            return False
        # one check over the whole window, start of first half to end of second
        return is_shift_within_availability(
            first.start_time, second.end_time, shift_date, worker.availability, hours_for_day
        )
