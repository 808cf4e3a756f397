"""
In-memory ledger for one generation run.

Tracks generated shifts/assignments, hours per worker, which workers are
committed on which dates, which template instances are filled and which
lead slots are taken per day. Phases mutate it only through its methods.
"""

import uuid
from collections import defaultdict
from datetime import date, time
from typing import Iterable, Optional

from .time_utils import date_for_weekday
from .types import (
    AssignmentType,
    LeadType,
    ScheduledShift,
    ShiftAssignment,
    ShiftTemplate,
    TemplateInstance,
    Worker,
)


def build_shift_records(
    template: ShiftTemplate,
    shift_date: date,
    worker_id: str,
    assignment_type: AssignmentType,
    is_recurring_generated: bool = False,
    assigned_start: Optional[time] = None,
    assigned_end: Optional[time] = None,
) -> tuple[ScheduledShift, ShiftAssignment]:
    """Create a shift for a template instance and its primary assignment."""
    shift = ScheduledShift(
        id=str(uuid.uuid4()),
        shift_date=shift_date,
        template_id=template.id,
        worker_id=worker_id,
        location_id=template.location_id,
        position_id=template.position_id,
        start_time=template.start_time,
        end_time=template.end_time,
        is_recurring_generated=is_recurring_generated,
    )
    assignment = ShiftAssignment(
        id=str(uuid.uuid4()),
        scheduled_shift_id=shift.id,
        worker_id=worker_id,
        assignment_type=assignment_type,
        is_manual_override=False,
        assigned_start=assigned_start or template.start_time,
        assigned_end=assigned_end or template.end_time,
    )
    return shift, assignment


class ScheduleGenerationState:
    """
    Mutable state of the week being built.

    Owned by a single generation run; never shared between runs.
    """

    def __init__(
        self,
        templates: list[ShiftTemplate],
        workers: list[Worker],
        external_commitments: Optional[Iterable[tuple[str, date]]] = None,
        initial_hours: Optional[dict[str, float]] = None,
    ):
        self._templates: list[ShiftTemplate] = list(templates)
        self._templates_by_id: dict[str, ShiftTemplate] = {t.id: t for t in self._templates}

        self._shifts: list[ScheduledShift] = []
        self._assignments: list[ShiftAssignment] = []

        self._worker_hours: dict[str, float] = {w.id: 0.0 for w in workers}
        for worker_id, hours in (initial_hours or {}).items():
            self._worker_hours[worker_id] = self._worker_hours.get(worker_id, 0.0) + hours

        self._committed: set[tuple[str, date]] = set()  # (worker_id, date) within this run
        self._external: set[tuple[str, date]] = set(external_commitments or [])
        self._filled: dict[str, set[date]] = defaultdict(set)  # template_id -> dates
        self._leads_by_day: dict[date, set[LeadType]] = defaultdict(set)

    @property
    def scheduled_shifts(self) -> list[ScheduledShift]:
        return list(self._shifts)

    @property
    def shift_assignments(self) -> list[ShiftAssignment]:
        return list(self._assignments)

    def record_assignment(
        self,
        shift: ScheduledShift,
        assignment: ShiftAssignment,
        template_id: str,
        duration_hours: float,
    ) -> None:
        """Record a filled template instance."""
        self.record_assignments([(shift, assignment, template_id, duration_hours)])

    def record_assignments(
        self,
        entries: list[tuple[ScheduledShift, ShiftAssignment, str, float]],
    ) -> None:
        """
        Record several filled instances as one step.

        Every entry is checked before any is applied, so either all are
        recorded or none are.

        Raises:
            ValueError: a template instance is already filled, or appears twice
        """
        seen: set[tuple[str, date]] = set()
        for shift, _, template_id, _ in entries:
            key = (template_id, shift.shift_date)
            if key in seen or self.is_slot_filled(template_id, shift.shift_date):
                raise ValueError(
                    f"Template {template_id} is already filled on {shift.shift_date.isoformat()}"
                )
            seen.add(key)

        for shift, assignment, template_id, duration_hours in entries:
            self._apply(shift, assignment, template_id, duration_hours)

    def _apply(
        self,
        shift: ScheduledShift,
        assignment: ShiftAssignment,
        template_id: str,
        duration_hours: float,
    ) -> None:
        self._shifts.append(shift)
        self._assignments.append(assignment)

        self._worker_hours[assignment.worker_id] = self.hours_of(assignment.worker_id) + duration_hours
        self._filled[template_id].add(shift.shift_date)
        self._committed.add((assignment.worker_id, shift.shift_date))

        # the template's lead_type decides which lead slot this fills
        template = self._templates_by_id.get(template_id)
        if template and template.lead_type and assignment.assignment_type == AssignmentType.LEAD:
            self._leads_by_day[shift.shift_date].add(template.lead_type)

    def hours_of(self, worker_id: str) -> float:
        return self._worker_hours.get(worker_id, 0.0)

    def is_slot_filled(self, template_id: str, on: Optional[date] = None) -> bool:
        """With no date: whether any date is filled for the template."""
        filled = self._filled.get(template_id)
        if not filled:
            return False
        if on is None:
            return True
        return on in filled

    def has_lead(self, on: date, lead_type: LeadType) -> bool:
        return lead_type in self._leads_by_day.get(on, set())

    def has_opening_lead(self, on: date) -> bool:
        return self.has_lead(on, LeadType.OPENING)

    def has_closing_lead(self, on: date) -> bool:
        return self.has_lead(on, LeadType.CLOSING)

    def is_worker_busy(self, worker_id: str, on: date) -> bool:
        """Committed that date in this run, or already working at another location."""
        key = (worker_id, on)
        return key in self._committed or key in self._external

    def is_committed_elsewhere(self, worker_id: str, on: date) -> bool:
        """Already working at another location that date, per the existing schedule."""
        return (worker_id, on) in self._external

    def unfilled_instances(self, week_dates: list[date]) -> list[TemplateInstance]:
        """Every template x applicable weekday of the week that is still open."""
        instances = []
        for template in self._templates:
            for day_of_week in template.days_of_week:
                shift_date = date_for_weekday(day_of_week, week_dates)
                if not self.is_slot_filled(template.id, shift_date):
                    instances.append(TemplateInstance(template, shift_date, day_of_week))
        return instances

    def unfilled_templates(self) -> list[ShiftTemplate]:
        """Templates with no filled instance anywhere in the week."""
        return [t for t in self._templates if not self.is_slot_filled(t.id)]
