from pydantic import BaseModel
from datetime import date, time
from typing import List, Optional
from shiftboard.db.models.shift_assignments import AssignmentType
from shiftboard.db.models.workers import JobLevel


class GenerateScheduleRequest(BaseModel):
    location_id: str
    week_start: Optional[date] = None  # any date in the week; defaults to today


class TemplateSummary(BaseModel):
    id: str
    position_id: str
    days_of_week: List[str]
    start_time: time
    end_time: time
    lead_type: Optional[str] = None


class GenerationResponse(BaseModel):
    success: bool
    warnings: List[str]
    unassigned_slots: List[TemplateSummary]
    shift_count: int
    assignment_count: int


class ShiftAssignmentResponse(BaseModel):
    id: str
    worker_id: str
    assignment_type: AssignmentType
    is_manual_override: bool
    assigned_start: Optional[time]
    assigned_end: Optional[time]

    class Config:
        from_attributes = True


class ScheduledShiftResponse(BaseModel):
    id: str
    shift_date: date
    template_id: Optional[str]
    worker_id: Optional[str]
    location_id: str
    position_id: str
    start_time: time
    end_time: time
    is_recurring_generated: bool
    lead_type: Optional[str] = None
    assignments: List[ShiftAssignmentResponse]
    primary_worker_id: Optional[str] = None
    composition_valid: bool


class WeekScheduleResponse(BaseModel):
    location_id: str
    week_start: date
    week_end: date
    shifts: List[ScheduledShiftResponse]


class EligibleWorkerResponse(BaseModel):
    id: str
    name: str
    job_level: JobLevel
    is_lead: bool
    assigned_hours: float
