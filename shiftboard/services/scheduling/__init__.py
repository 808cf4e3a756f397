"""
Scheduling service package.

Usage:
    from datetime import date
    from shiftboard.services.scheduling import generate_schedule

    # Simple usage - load, generate and save in one call
    result = generate_schedule(db, location_id, date(2025, 1, 20))

    # Or load prerequisites separately for inspection/testing (nothing is saved)
    from shiftboard.services.scheduling import load_scheduling_prerequisites, generate_schedule_from_prerequisites

    prerequisites = load_scheduling_prerequisites(db, location_id)
    result = generate_schedule_from_prerequisites(location_id, date(2025, 1, 20), prerequisites)
"""

from .types import (
    DayOfWeek,
    AvailabilityLabel,
    JobLevel,
    AssignmentType,
    LeadType,
    ShiftTemplate,
    Worker,
    LocationOperatingHours,
    RecurringShiftAssignment,
    ScheduledShift,
    ShiftAssignment,
    TemplateInstance,
    PairedShiftConfig,
    SchedulingPrerequisites,
    GenerationResult,
    compare_job_levels,
)
from .time_utils import InvalidTimeFormat, InvalidWeekArgument
from .state import ScheduleGenerationState
from .eligibility import is_eligible, find_eligible_workers
from .composition import validate_shift_composition, determine_primary_worker
from .data_loader import load_scheduling_prerequisites
from .data_saver import save_schedule, ScheduleSaveError
from .generator import generate_schedule, generate_weekly_schedule, generate_schedule_from_prerequisites

__all__ = [
    # Types
    "DayOfWeek",
    "AvailabilityLabel",
    "JobLevel",
    "AssignmentType",
    "LeadType",
    "ShiftTemplate",
    "Worker",
    "LocationOperatingHours",
    "RecurringShiftAssignment",
    "ScheduledShift",
    "ShiftAssignment",
    "TemplateInstance",
    "PairedShiftConfig",
    "SchedulingPrerequisites",
    "GenerationResult",
    "compare_job_levels",
    # Errors
    "InvalidTimeFormat",
    "InvalidWeekArgument",
    "ScheduleSaveError",
    # Main entry points
    "generate_schedule",
    "generate_weekly_schedule",
    "generate_schedule_from_prerequisites",
    # Lower-level functions
    "ScheduleGenerationState",
    "is_eligible",
    "find_eligible_workers",
    "validate_shift_composition",
    "determine_primary_worker",
    "load_scheduling_prerequisites",
    "save_schedule",
]
