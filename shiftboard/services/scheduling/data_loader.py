"""
Data loader for scheduling service.
Fetches all relevant data from the database and converts to internal types.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Optional

from sqlalchemy import select, and_
from sqlalchemy.orm import Session

from shiftboard.db.models.workers import Workers
from shiftboard.db.models.worker_locations import WorkerLocations
from shiftboard.db.models.worker_positions import WorkerPositions
from shiftboard.db.models.location_hours import LocationHours
from shiftboard.db.models.shift_templates import ShiftTemplates
from shiftboard.db.models.recurring_shift_assignments import RecurringShiftAssignments
from shiftboard.db.models.scheduled_shifts import ScheduledShifts
from shiftboard.db.models.shift_assignments import ShiftAssignments

from .time_utils import to_time
from .types import (
    AssignmentType,
    AvailabilityLabel,
    DayOfWeek,
    JobLevel,
    LeadType,
    LocationOperatingHours,
    RecurringShiftAssignment,
    SchedulingPrerequisites,
    ShiftTemplate,
    Worker,
)


logger = logging.getLogger(__name__)


def _parse_availability(worker_id: str, raw: Optional[dict]) -> dict[DayOfWeek, list[AvailabilityLabel]]:
    availability = {}
    for day, labels in (raw or {}).items():
        try:
            day_of_week = DayOfWeek(day)
        except ValueError:
            logger.warning(f"Worker {worker_id} has availability for unknown day {day!r}; ignoring")
            continue

        parsed = []
        for label in labels or []:
            try:
                parsed.append(AvailabilityLabel(label))
            except ValueError:
                logger.warning(f"Worker {worker_id} has unknown availability label {label!r} on {day}; ignoring")
        availability[day_of_week] = parsed
    return availability


def load_workers(db: Session) -> list[Worker]:
    """Load the full roster with position and location links."""

    worker_rows = db.execute(select(Workers)).scalars().all()

    positions_by_worker: dict[str, set[str]] = defaultdict(set)
    for link in db.execute(select(WorkerPositions)).scalars().all():
        positions_by_worker[link.worker_id].add(link.position_id)

    locations_by_worker: dict[str, set[str]] = defaultdict(set)
    for link in db.execute(select(WorkerLocations)).scalars().all():
        locations_by_worker[link.worker_id].add(link.location_id)

    return [
        Worker(
            id=w.id,
            first_name=w.first_name,
            last_name=w.last_name,
            preferred_name=w.preferred_name,
            job_level=JobLevel(w.job_level.value),
            is_lead=w.is_lead,
            availability=_parse_availability(w.id, w.availability),
            preferred_hours_per_week=w.preferred_hours_per_week,
            position_ids=positions_by_worker.get(w.id, set()),
            location_ids=locations_by_worker.get(w.id, set()),
            inactive=w.inactive,
        )
        for w in worker_rows
    ]


def load_shift_templates(db: Session, location_id: str) -> list[ShiftTemplate]:
    """Load all shift templates for a location."""

    stmt = (
        select(ShiftTemplates)
        .where(ShiftTemplates.location_id == location_id)
        .order_by(ShiftTemplates.id)
    )
    rows = db.execute(stmt).scalars().all()

    return [
        ShiftTemplate(
            id=t.id,
            location_id=t.location_id,
            position_id=t.position_id,
            days_of_week=[DayOfWeek(d) for d in t.days_of_week],
            start_time=to_time(t.start_time),
            end_time=to_time(t.end_time),
            lead_type=LeadType(t.lead_type.value) if t.lead_type else None,
        )
        for t in rows
    ]


def load_recurring_assignments(db: Session, location_id: str) -> list[RecurringShiftAssignment]:
    """Load recurring assignments for a location, in a stable order."""

    stmt = (
        select(RecurringShiftAssignments)
        .where(RecurringShiftAssignments.location_id == location_id)
        .order_by(RecurringShiftAssignments.id)
    )
    rows = db.execute(stmt).scalars().all()

    return [
        RecurringShiftAssignment(
            id=r.id,
            worker_id=r.worker_id,
            location_id=r.location_id,
            position_id=r.position_id,
            day_of_week=DayOfWeek(r.day_of_week),
            start_time=to_time(r.start_time),
            end_time=to_time(r.end_time),
            assignment_type=AssignmentType(r.assignment_type.value) if r.assignment_type else AssignmentType.REGULAR,
        )
        for r in rows
    ]


def load_operating_hours(db: Session, location_id: str) -> list[LocationOperatingHours]:
    """Load per-weekday operating hours for a location."""

    stmt = select(LocationHours).where(LocationHours.location_id == location_id)
    rows = db.execute(stmt).scalars().all()

    return [
        LocationOperatingHours(
            location_id=h.location_id,
            day_of_week=DayOfWeek(h.day_of_week),
            day_start=to_time(h.day_start),
            day_end=to_time(h.day_end),
            morning_cutoff=to_time(h.morning_cutoff),
        )
        for h in rows
    ]


def load_other_location_commitments(
    db: Session,
    location_id: str,
    week_dates: list[date],
) -> list[tuple[str, date]]:
    """(worker_id, date) pairs already assigned at other locations during the week."""

    stmt = (
        select(ShiftAssignments.worker_id, ScheduledShifts.shift_date)
        .join(ScheduledShifts, ShiftAssignments.scheduled_shift_id == ScheduledShifts.id)
        .where(
            and_(
                ScheduledShifts.location_id != location_id,
                ScheduledShifts.shift_date >= week_dates[0],
                ScheduledShifts.shift_date <= week_dates[-1],
            )
        )
        .distinct()
    )
    return [(worker_id, shift_date) for worker_id, shift_date in db.execute(stmt).all()]


def load_scheduling_prerequisites(
    db: Session,
    location_id: str,
    week_dates: Optional[list[date]] = None,
) -> SchedulingPrerequisites:
    """
    Load everything needed to generate a schedule for a location.

    Other-location commitments are only loaded when the target week is known.
    """
    return SchedulingPrerequisites(
        workers=load_workers(db),
        templates=load_shift_templates(db, location_id),
        recurring_assignments=load_recurring_assignments(db, location_id),
        operating_hours=load_operating_hours(db, location_id),
        other_location_commitments=(
            load_other_location_commitments(db, location_id, week_dates) if week_dates else []
        ),
    )
