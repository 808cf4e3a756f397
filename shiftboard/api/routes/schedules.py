from collections import defaultdict
from datetime import date, datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, and_
from sqlalchemy.orm import Session

from shiftboard.api.deps import get_db
from shiftboard.core.config import settings
from shiftboard.db.models.locations import Locations
from shiftboard.db.models.scheduled_shifts import ScheduledShifts
from shiftboard.db.models.shift_assignments import ShiftAssignments
from shiftboard.db.models.shift_templates import ShiftTemplates
from shiftboard.schemas.schedules import (
    EligibleWorkerResponse,
    GenerateScheduleRequest,
    GenerationResponse,
    ScheduledShiftResponse,
    ShiftAssignmentResponse,
    TemplateSummary,
    WeekScheduleResponse,
)
from shiftboard.services.scheduling import (
    AssignmentType,
    ScheduleGenerationState,
    ShiftAssignment,
    determine_primary_worker,
    find_eligible_workers,
    generate_schedule,
    load_scheduling_prerequisites,
    validate_shift_composition,
)
from shiftboard.services.scheduling.time_utils import shift_duration_hours, week_range, weekday_of

router = APIRouter(prefix="/schedules", tags=["schedules"])


def _today() -> date:
    return datetime.now(ZoneInfo(settings.APP_TIMEZONE)).date()


def _require_location(db: Session, location_id: str) -> Locations:
    location = db.get(Locations, location_id)
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")
    return location


def _to_assignment(row: ShiftAssignments) -> ShiftAssignment:
    return ShiftAssignment(
        id=row.id,
        scheduled_shift_id=row.scheduled_shift_id,
        worker_id=row.worker_id,
        assignment_type=AssignmentType(row.assignment_type.value),
        is_manual_override=row.is_manual_override,
        assigned_start=row.assigned_start,
        assigned_end=row.assigned_end,
    )


@router.post("/generate", response_model=GenerationResponse)
def generate_week(
    payload: GenerateScheduleRequest,
    db: Session = Depends(get_db),
):
    _require_location(db, payload.location_id)

    result = generate_schedule(
        db,
        payload.location_id,
        payload.week_start or _today(),
        settings.paired_shift_config(),
    )

    return GenerationResponse(
        success=result.success,
        warnings=result.warnings,
        unassigned_slots=[
            TemplateSummary(
                id=t.id,
                position_id=t.position_id,
                days_of_week=[d.value for d in t.days_of_week],
                start_time=t.start_time,
                end_time=t.end_time,
                lead_type=t.lead_type.value if t.lead_type else None,
            )
            for t in result.unassigned_slots
        ],
        shift_count=len(result.shifts),
        assignment_count=len(result.assignments),
    )


@router.get("/{location_id}", response_model=WeekScheduleResponse)
def get_week(
    location_id: str,
    week_start: Optional[date] = None,
    db: Session = Depends(get_db),
):
    _require_location(db, location_id)
    week_dates = week_range(week_start or _today())

    shifts = db.execute(
        select(ScheduledShifts)
        .where(
            and_(
                ScheduledShifts.location_id == location_id,
                ScheduledShifts.shift_date >= week_dates[0],
                ScheduledShifts.shift_date <= week_dates[-1],
            )
        )
        .order_by(ScheduledShifts.shift_date, ScheduledShifts.start_time)
    ).scalars().all()

    assignments_by_shift: dict[str, list[ShiftAssignments]] = defaultdict(list)
    lead_types: dict[str, Optional[str]] = {}
    if shifts:
        rows = db.execute(
            select(ShiftAssignments).where(ShiftAssignments.scheduled_shift_id.in_([s.id for s in shifts]))
        ).scalars().all()
        for row in rows:
            assignments_by_shift[row.scheduled_shift_id].append(row)

        template_ids = {s.template_id for s in shifts if s.template_id}
        for template in db.execute(select(ShiftTemplates).where(ShiftTemplates.id.in_(template_ids))).scalars().all():
            lead_types[template.id] = template.lead_type.value if template.lead_type else None

    response = []
    for shift in shifts:
        rows = assignments_by_shift.get(shift.id, [])
        domain_assignments = [_to_assignment(r) for r in rows]
        lead_type = lead_types.get(shift.template_id)
        is_lead_shift = lead_type is not None

        response.append(ScheduledShiftResponse(
            id=shift.id,
            shift_date=shift.shift_date,
            template_id=shift.template_id,
            worker_id=shift.worker_id,
            location_id=shift.location_id,
            position_id=shift.position_id,
            start_time=shift.start_time,
            end_time=shift.end_time,
            is_recurring_generated=shift.is_recurring_generated,
            lead_type=lead_type,
            assignments=[ShiftAssignmentResponse.model_validate(r) for r in rows],
            primary_worker_id=determine_primary_worker(is_lead_shift, domain_assignments),
            composition_valid=validate_shift_composition(is_lead_shift, domain_assignments),
        ))

    return WeekScheduleResponse(
        location_id=location_id,
        week_start=week_dates[0],
        week_end=week_dates[-1],
        shifts=response,
    )


@router.get("/shifts/{shift_id}/eligible-workers", response_model=List[EligibleWorkerResponse])
def get_eligible_workers(
    shift_id: str,
    lead_only: bool = False,
    db: Session = Depends(get_db),
):
    shift = db.get(ScheduledShifts, shift_id)
    if not shift:
        raise HTTPException(status_code=404, detail="Shift not found")

    week_dates = week_range(shift.shift_date)
    prerequisites = load_scheduling_prerequisites(db, shift.location_id, week_dates)

    template = next((t for t in prerequisites.templates if t.id == shift.template_id), None)
    if template is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Shift is not linked to a template at its location",
        )

    # everything else already stored for this location/week counts as committed
    rows = db.execute(
        select(
            ShiftAssignments.worker_id,
            ScheduledShifts.shift_date,
            ShiftAssignments.assigned_start,
            ShiftAssignments.assigned_end,
            ScheduledShifts.start_time,
            ScheduledShifts.end_time,
        )
        .join(ScheduledShifts, ShiftAssignments.scheduled_shift_id == ScheduledShifts.id)
        .where(
            and_(
                ScheduledShifts.location_id == shift.location_id,
                ScheduledShifts.shift_date >= week_dates[0],
                ScheduledShifts.shift_date <= week_dates[-1],
                ScheduledShifts.id != shift.id,
            )
        )
    ).all()

    commitments = list(prerequisites.other_location_commitments)
    hours: dict[str, float] = defaultdict(float)
    for worker_id, shift_date, assigned_start, assigned_end, start_time, end_time in rows:
        commitments.append((worker_id, shift_date))
        hours[worker_id] += shift_duration_hours(
            assigned_start or start_time, assigned_end or end_time, settings.APP_TIMEZONE
        )

    workers = [w for w in prerequisites.workers if shift.location_id in w.location_ids and not w.inactive]
    state = ScheduleGenerationState(
        prerequisites.templates, workers, external_commitments=commitments, initial_hours=hours
    )
    hours_for_day = next(
        (h for h in prerequisites.operating_hours if h.day_of_week == weekday_of(shift.shift_date)), None
    )

    eligible = find_eligible_workers(
        workers, template, shift.shift_date, state, hours_for_day,
        lead_only=lead_only, tz_name=settings.APP_TIMEZONE,
    )
    return [
        EligibleWorkerResponse(
            id=w.id,
            name=w.display_name,
            job_level=w.job_level.value,
            is_lead=w.is_lead,
            assigned_hours=state.hours_of(w.id),
        )
        for w in eligible
    ]
