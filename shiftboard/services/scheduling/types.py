"""
Internal data types for schedule generation.
decoupled from SQLAlchemy models for cleaner logic.
"""

from dataclasses import dataclass, field
from datetime import date, time, datetime, timezone
from enum import Enum
from typing import Optional


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def weekday_index(self) -> int:
        """0 = Monday ... 6 = Sunday (ISO order, same as date.weekday())."""
        return DAYS_OF_WEEK.index(self)


DAYS_OF_WEEK: tuple[DayOfWeek, ...] = tuple(DayOfWeek)


class AvailabilityLabel(str, Enum):
    NONE = "none"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    ALL_DAY = "all_day"


class JobLevel(str, Enum):
    L1 = "L1"
    L2 = "L2"
    L3 = "L3"
    L4 = "L4"
    L5 = "L5"
    L6 = "L6"
    L7 = "L7"

    @property
    def rank(self) -> int:
        return int(self.value[1:])


def compare_job_levels(a: JobLevel, b: JobLevel) -> int:
    """Negative if a is junior to b, 0 if equal, positive if senior."""
    return a.rank - b.rank


class AssignmentType(str, Enum):
    LEAD = "lead"
    REGULAR = "regular"
    TRAINING = "training"


class LeadType(str, Enum):
    OPENING = "opening"
    CLOSING = "closing"


@dataclass
class ShiftTemplate:
    """A recurring staffing requirement; yields one instance per applicable weekday."""
    id: str
    location_id: str
    position_id: str
    days_of_week: list[DayOfWeek]
    start_time: time
    end_time: time
    lead_type: Optional[LeadType] = None


@dataclass
class Worker:
    id: str
    first_name: str
    last_name: str
    job_level: JobLevel
    is_lead: bool = False
    availability: dict[DayOfWeek, list[AvailabilityLabel]] = field(default_factory=dict)
    preferred_hours_per_week: Optional[float] = None  # None = no cap
    position_ids: set[str] = field(default_factory=set)
    location_ids: set[str] = field(default_factory=set)
    preferred_name: Optional[str] = None
    inactive: bool = False

    @property
    def display_name(self) -> str:
        first = self.preferred_name or self.first_name
        return f"{first} {self.last_name}".strip()


@dataclass
class LocationOperatingHours:
    location_id: str
    day_of_week: DayOfWeek
    day_start: time
    day_end: time
    morning_cutoff: time


@dataclass
class RecurringShiftAssignment:
    """A standing weekly commitment, applied before any allocation."""
    id: str
    worker_id: str
    location_id: str
    position_id: str
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    assignment_type: Optional[AssignmentType] = AssignmentType.REGULAR


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ScheduledShift:
    """One concrete occurrence of a template on a calendar date."""
    id: str
    shift_date: date
    template_id: str
    worker_id: Optional[str]
    location_id: str
    position_id: str
    start_time: time
    end_time: time
    is_recurring_generated: bool = False
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class ShiftAssignment:
    id: str
    scheduled_shift_id: str
    worker_id: str
    assignment_type: AssignmentType
    is_manual_override: bool = False
    assigned_start: Optional[time] = None
    assigned_end: Optional[time] = None
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class TemplateInstance:
    """One (template, date) pair of the target week."""
    template: ShiftTemplate
    shift_date: date
    day_of_week: DayOfWeek


@dataclass(frozen=True)
class PairedShiftConfig:
    """Identifies the split shift that must go to a single worker."""
    location_id: str
    position_id: str
    first_template_id: str
    second_template_id: str


@dataclass
class SchedulingPrerequisites:
    """Everything the generator needs for one location."""
    workers: list[Worker]
    templates: list[ShiftTemplate]
    recurring_assignments: list[RecurringShiftAssignment]
    operating_hours: list[LocationOperatingHours]
    # (worker_id, date) pairs already worked at other locations that week
    other_location_commitments: list[tuple[str, date]] = field(default_factory=list)


@dataclass
class GenerationResult:
    """Output of one generation run."""
    success: bool
    warnings: list[str] = field(default_factory=list)
    unassigned_slots: list[ShiftTemplate] = field(default_factory=list)
    shifts: list[ScheduledShift] = field(default_factory=list)
    assignments: list[ShiftAssignment] = field(default_factory=list)
