"""
Persists a generated week.

Rolling deletion: shifts older than the retention window and shifts already
stored for the target week are removed for the location, then the new
shifts and assignments are inserted. One commit at the end.
"""

import logging
from datetime import date, timedelta

from sqlalchemy import delete, select, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shiftboard.db.models.scheduled_shifts import ScheduledShifts
from shiftboard.db.models.shift_assignments import ShiftAssignments, AssignmentType as AssignmentTypeDB
from shiftboard.db.models.shift_templates import ShiftTemplates

from .time_utils import InvalidWeekArgument
from .types import ScheduledShift, ShiftAssignment


logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 28


class ScheduleSaveError(Exception):
    pass


def _delete_shifts(db: Session, *criteria) -> int:
    """Delete shifts matching criteria along with their assignments."""
    shift_ids = select(ScheduledShifts.id).where(and_(*criteria))
    db.execute(delete(ShiftAssignments).where(ShiftAssignments.scheduled_shift_id.in_(shift_ids)))
    result = db.execute(delete(ScheduledShifts).where(and_(*criteria)))
    return result.rowcount or 0


def save_schedule(
    db: Session,
    shifts: list[ScheduledShift],
    assignments: list[ShiftAssignment],
    location_id: str,
    week_dates: list[date],
    retention_days: int = DEFAULT_RETENTION_DAYS,
) -> None:
    """
    Replace the stored week for a location with the generated one.

    Raises:
        InvalidWeekArgument: week_dates is not exactly 7 dates
        ScheduleSaveError: any database failure; the session is rolled back
    """
    if len(week_dates) != 7:
        raise InvalidWeekArgument("save_schedule requires week_dates with exactly 7 days.")

    week_start, week_end = week_dates[0], week_dates[-1]
    cutoff = week_start - timedelta(days=retention_days)
    logger.info(f"Saving schedule for location {location_id}, week {week_start} to {week_end}")

    try:
        has_templates = db.execute(
            select(ShiftTemplates.id).where(ShiftTemplates.location_id == location_id).limit(1)
        ).first() is not None

        if has_templates:
            pruned = _delete_shifts(
                db,
                ScheduledShifts.location_id == location_id,
                ScheduledShifts.shift_date < cutoff,
            )
            cleared = _delete_shifts(
                db,
                ScheduledShifts.location_id == location_id,
                ScheduledShifts.shift_date >= week_start,
                ScheduledShifts.shift_date <= week_end,
            )
            logger.info(f"Deleted {pruned} shifts older than {cutoff} and {cleared} shifts in the target week")
        else:
            logger.warning(f"No shift templates found for location {location_id}. Skipping deletion.")

        db.add_all([
            ScheduledShifts(
                id=s.id,
                shift_date=s.shift_date,
                template_id=s.template_id,
                worker_id=s.worker_id,
                location_id=s.location_id,
                position_id=s.position_id,
                start_time=s.start_time,
                end_time=s.end_time,
                is_recurring_generated=s.is_recurring_generated,
            )
            for s in shifts
        ])
        db.flush()

        db.add_all([
            ShiftAssignments(
                id=a.id,
                scheduled_shift_id=a.scheduled_shift_id,
                worker_id=a.worker_id,
                assignment_type=AssignmentTypeDB(a.assignment_type.value),
                is_manual_override=a.is_manual_override,
                assigned_start=a.assigned_start,
                assigned_end=a.assigned_end,
            )
            for a in assignments
        ])
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save schedule for location {location_id}: {e}")
        raise ScheduleSaveError(f"Failed to save schedule for location {location_id}: {e}") from e

    logger.info(f"Inserted {len(shifts)} shifts and {len(assignments)} assignments")
