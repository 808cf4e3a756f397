from shiftboard.db.database import Base

# Import models
from shiftboard.db.models.locations import Locations
from shiftboard.db.models.positions import Positions
from shiftboard.db.models.workers import Workers, JobLevel
from shiftboard.db.models.worker_locations import WorkerLocations
from shiftboard.db.models.worker_positions import WorkerPositions
from shiftboard.db.models.location_hours import LocationHours
from shiftboard.db.models.shift_templates import ShiftTemplates, LeadType
from shiftboard.db.models.shift_assignments import ShiftAssignments, AssignmentType
from shiftboard.db.models.recurring_shift_assignments import RecurringShiftAssignments
from shiftboard.db.models.scheduled_shifts import ScheduledShifts

__all__ = [
    "Base",
    # Models
    "Locations",
    "Positions",
    "Workers",
    "WorkerLocations",
    "WorkerPositions",
    "LocationHours",
    "ShiftTemplates",
    "RecurringShiftAssignments",
    "ScheduledShifts",
    "ShiftAssignments",
    # Enums
    "JobLevel",
    "LeadType",
    "AssignmentType",
]
