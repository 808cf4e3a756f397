import pytest
from datetime import date, time
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import shiftboard.db.models  # noqa: F401  registers every table on Base.metadata
from shiftboard.db.database import Base
from shiftboard.services.scheduling.state import ScheduleGenerationState
from shiftboard.services.scheduling.time_utils import week_range
from shiftboard.services.scheduling.types import (
    AvailabilityLabel,
    DAYS_OF_WEEK,
    DayOfWeek,
    JobLevel,
    LeadType,
    LocationOperatingHours,
    ShiftTemplate,
    Worker,
)

LOCATION_ID = "loc-1"
OTHER_LOCATION_ID = "loc-2"
POSITION_ID = "pos-1"


def get_test_monday() -> date:
    # returns a fixed Monday for deterministic tests
    return date(2025, 1, 20)


def get_week_dates() -> list[date]:
    return week_range(get_test_monday())


def make_template(
    template_id: str,
    days: Optional[list[DayOfWeek]] = None,
    start: time = time(9, 0),
    end: time = time(17, 0),
    lead_type: Optional[LeadType] = None,
    location_id: str = LOCATION_ID,
    position_id: str = POSITION_ID,
) -> ShiftTemplate:
    return ShiftTemplate(
        id=template_id,
        location_id=location_id,
        position_id=position_id,
        days_of_week=days if days is not None else [DayOfWeek.MONDAY],
        start_time=start,
        end_time=end,
        lead_type=lead_type,
    )


def make_worker(
    worker_id: str,
    level: JobLevel = JobLevel.L3,
    is_lead: bool = False,
    cap: Optional[float] = None,
    availability: Optional[dict] = None,
    positions: Optional[set] = None,
    locations: Optional[set] = None,
    inactive: bool = False,
) -> Worker:
    # available all day, every day, unless told otherwise
    return Worker(
        id=worker_id,
        first_name=worker_id.title(),
        last_name="Test",
        job_level=level,
        is_lead=is_lead,
        availability=availability if availability is not None else {
            day: [AvailabilityLabel.ALL_DAY] for day in DAYS_OF_WEEK
        },
        preferred_hours_per_week=cap,
        position_ids=positions if positions is not None else {POSITION_ID},
        location_ids=locations if locations is not None else {LOCATION_ID},
        inactive=inactive,
    )


def make_operating_hours(
    location_id: str = LOCATION_ID,
    cutoff: time = time(12, 0),
) -> list[LocationOperatingHours]:
    return [
        LocationOperatingHours(
            location_id=location_id,
            day_of_week=day,
            day_start=time(6, 0),
            day_end=time(22, 0),
            morning_cutoff=cutoff,
        )
        for day in DAYS_OF_WEEK
    ]


def make_hours_by_day(cutoff: time = time(12, 0)) -> dict[DayOfWeek, LocationOperatingHours]:
    return {h.day_of_week: h for h in make_operating_hours(cutoff=cutoff)}


def make_state(templates, workers, commitments=None, hours=None) -> ScheduleGenerationState:
    return ScheduleGenerationState(templates, workers, external_commitments=commitments, initial_hours=hours)


@pytest.fixture
def week_dates() -> list[date]:
    return get_week_dates()


@pytest.fixture
def hours_by_day() -> dict[DayOfWeek, LocationOperatingHours]:
    return make_hours_by_day()


@pytest.fixture
def monday_template() -> ShiftTemplate:
    # regular Monday 09:00-17:00 (8h)
    return make_template("tmpl-mon")


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def seeded_db(db_session):
    from scripts.seed_demo import seed

    seed(db_session)
    return db_session
