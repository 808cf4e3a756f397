"""
Seed script for the Shiftboard development database.

Two locations:
- Downtown: opening/closing lead templates, barista templates Mon-Fri and
  the paired prep-barista split shift (09:30-12:00 + 12:00-17:00)
- Riverside: one all-week barista template

One recurring assignment (Barista One, Downtown, Monday 07:00-12:00).
Ids are fixed so the paired-shift settings can point at them:

    PAIRED_LOCATION_ID=10000000-0000-0000-0000-000000000001
    PAIRED_POSITION_ID=20000000-0000-0000-0000-000000000002
    PAIRED_TEMPLATE_ID_1=40000000-0000-0000-0000-000000000005
    PAIRED_TEMPLATE_ID_2=40000000-0000-0000-0000-000000000006

Run with: python -m scripts.seed_demo
"""

import sys
from datetime import time
from shiftboard.db.database import Base, SessionLocal, engine
from shiftboard.db.models.locations import Locations
from shiftboard.db.models.positions import Positions
from shiftboard.db.models.workers import Workers, JobLevel
from shiftboard.db.models.worker_locations import WorkerLocations
from shiftboard.db.models.worker_positions import WorkerPositions
from shiftboard.db.models.location_hours import LocationHours
from shiftboard.db.models.shift_templates import ShiftTemplates, LeadType
from shiftboard.db.models.recurring_shift_assignments import RecurringShiftAssignments
from shiftboard.db.models.shift_assignments import AssignmentType


DOWNTOWN_ID = "10000000-0000-0000-0000-000000000001"
RIVERSIDE_ID = "10000000-0000-0000-0000-000000000002"

BARISTA_ID = "20000000-0000-0000-0000-000000000001"
PREP_BARISTA_ID = "20000000-0000-0000-0000-000000000002"
LEAD_ID = "20000000-0000-0000-0000-000000000003"

LEAD_SENIOR_ID = "30000000-0000-0000-0000-000000000001"
LEAD_JUNIOR_ID = "30000000-0000-0000-0000-000000000002"
BARISTA_ONE_ID = "30000000-0000-0000-0000-000000000003"
BARISTA_TWO_ID = "30000000-0000-0000-0000-000000000004"
PREP_ID = "30000000-0000-0000-0000-000000000005"
RIVERSIDE_BARISTA_ID = "30000000-0000-0000-0000-000000000006"
INACTIVE_ID = "30000000-0000-0000-0000-000000000007"

OPENING_LEAD_TEMPLATE_ID = "40000000-0000-0000-0000-000000000001"
CLOSING_LEAD_TEMPLATE_ID = "40000000-0000-0000-0000-000000000002"
BARISTA_AM_TEMPLATE_ID = "40000000-0000-0000-0000-000000000003"
BARISTA_PM_TEMPLATE_ID = "40000000-0000-0000-0000-000000000004"
PAIR_FIRST_TEMPLATE_ID = "40000000-0000-0000-0000-000000000005"
PAIR_SECOND_TEMPLATE_ID = "40000000-0000-0000-0000-000000000006"
RIVERSIDE_TEMPLATE_ID = "40000000-0000-0000-0000-000000000007"

RECURRING_ID = "50000000-0000-0000-0000-000000000001"

ALL_DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
WEEKDAYS = ALL_DAYS[:5]


def seed_locations(db):
    print("Seeding locations...")
    db.add_all([
        Locations(id=DOWNTOWN_ID, name="Downtown"),
        Locations(id=RIVERSIDE_ID, name="Riverside"),
    ])
    db.commit()


def seed_positions(db):
    print("Seeding positions...")
    db.add_all([
        Positions(id=BARISTA_ID, name="Barista"),
        Positions(id=PREP_BARISTA_ID, name="Prep+Barista"),
        Positions(id=LEAD_ID, name="Shift Lead"),
    ])
    db.commit()


def seed_location_hours(db):
    """06:00-20:00 every day at both locations, noon morning cutoff."""
    print("Seeding operating hours...")
    for location_id in (DOWNTOWN_ID, RIVERSIDE_ID):
        for day in ALL_DAYS:
            db.add(LocationHours(
                location_id=location_id,
                day_of_week=day,
                day_start=time(6, 0),
                day_end=time(20, 0),
                morning_cutoff=time(12, 0),
            ))
    db.commit()


def seed_workers(db):
    print("Seeding workers...")

    all_week = {day: ["all_day"] for day in ALL_DAYS}
    weekdays_only = {day: ["all_day"] for day in WEEKDAYS}

    workers = [
        # Senior lead, opens most days
        Workers(id=LEAD_SENIOR_ID, first_name="Morgan", last_name="Reyes", job_level=JobLevel.L5,
                is_lead=True, availability=all_week, preferred_hours_per_week=40),
        Workers(id=LEAD_JUNIOR_ID, first_name="Sam", last_name="Okafor", job_level=JobLevel.L4,
                is_lead=True, availability=all_week, preferred_hours_per_week=40),
        # Barista One holds the Monday morning recurring slot
        Workers(id=BARISTA_ONE_ID, first_name="Jordan", last_name="Lee", preferred_name="Jo",
                job_level=JobLevel.L3, availability=weekdays_only, preferred_hours_per_week=30),
        Workers(id=BARISTA_TWO_ID, first_name="Casey", last_name="Nguyen", job_level=JobLevel.L2,
                availability={day: ["morning", "afternoon"] for day in WEEKDAYS}, preferred_hours_per_week=25),
        # Only worker holding the prep-barista position
        Workers(id=PREP_ID, first_name="Riley", last_name="Park", job_level=JobLevel.L3,
                availability=weekdays_only, preferred_hours_per_week=40),
        Workers(id=RIVERSIDE_BARISTA_ID, first_name="Avery", last_name="Stone", job_level=JobLevel.L3,
                availability=all_week, preferred_hours_per_week=None),
        Workers(id=INACTIVE_ID, first_name="Quinn", last_name="Hale", job_level=JobLevel.L6,
                is_lead=True, availability=all_week, inactive=True),
    ]
    db.add_all(workers)
    db.commit()

    db.add_all([
        WorkerPositions(worker_id=LEAD_SENIOR_ID, position_id=LEAD_ID),
        WorkerPositions(worker_id=LEAD_JUNIOR_ID, position_id=LEAD_ID),
        WorkerPositions(worker_id=BARISTA_ONE_ID, position_id=BARISTA_ID),
        WorkerPositions(worker_id=BARISTA_TWO_ID, position_id=BARISTA_ID),
        WorkerPositions(worker_id=PREP_ID, position_id=PREP_BARISTA_ID),
        WorkerPositions(worker_id=PREP_ID, position_id=BARISTA_ID),
        WorkerPositions(worker_id=RIVERSIDE_BARISTA_ID, position_id=BARISTA_ID),
        WorkerPositions(worker_id=INACTIVE_ID, position_id=LEAD_ID),
        WorkerLocations(worker_id=LEAD_SENIOR_ID, location_id=DOWNTOWN_ID),
        WorkerLocations(worker_id=LEAD_JUNIOR_ID, location_id=DOWNTOWN_ID),
        WorkerLocations(worker_id=BARISTA_ONE_ID, location_id=DOWNTOWN_ID),
        WorkerLocations(worker_id=BARISTA_TWO_ID, location_id=DOWNTOWN_ID),
        WorkerLocations(worker_id=BARISTA_TWO_ID, location_id=RIVERSIDE_ID),
        WorkerLocations(worker_id=PREP_ID, location_id=DOWNTOWN_ID),
        WorkerLocations(worker_id=RIVERSIDE_BARISTA_ID, location_id=RIVERSIDE_ID),
        WorkerLocations(worker_id=INACTIVE_ID, location_id=DOWNTOWN_ID),
    ])
    db.commit()
    print(f"Seeded {len(workers)} workers.")


def seed_shift_templates(db):
    print("Seeding shift templates...")
    templates = [
        ShiftTemplates(id=OPENING_LEAD_TEMPLATE_ID, location_id=DOWNTOWN_ID, position_id=LEAD_ID,
                       days_of_week=ALL_DAYS, start_time=time(6, 0), end_time=time(12, 0),
                       lead_type=LeadType.OPENING),
        ShiftTemplates(id=CLOSING_LEAD_TEMPLATE_ID, location_id=DOWNTOWN_ID, position_id=LEAD_ID,
                       days_of_week=ALL_DAYS, start_time=time(14, 0), end_time=time(20, 0),
                       lead_type=LeadType.CLOSING),
        ShiftTemplates(id=BARISTA_AM_TEMPLATE_ID, location_id=DOWNTOWN_ID, position_id=BARISTA_ID,
                       days_of_week=WEEKDAYS, start_time=time(7, 0), end_time=time(12, 0)),
        ShiftTemplates(id=BARISTA_PM_TEMPLATE_ID, location_id=DOWNTOWN_ID, position_id=BARISTA_ID,
                       days_of_week=WEEKDAYS, start_time=time(12, 0), end_time=time(17, 0)),
        ShiftTemplates(id=PAIR_FIRST_TEMPLATE_ID, location_id=DOWNTOWN_ID, position_id=PREP_BARISTA_ID,
                       days_of_week=WEEKDAYS, start_time=time(9, 30), end_time=time(12, 0)),
        ShiftTemplates(id=PAIR_SECOND_TEMPLATE_ID, location_id=DOWNTOWN_ID, position_id=PREP_BARISTA_ID,
                       days_of_week=WEEKDAYS, start_time=time(12, 0), end_time=time(17, 0)),
        ShiftTemplates(id=RIVERSIDE_TEMPLATE_ID, location_id=RIVERSIDE_ID, position_id=BARISTA_ID,
                       days_of_week=ALL_DAYS, start_time=time(8, 0), end_time=time(16, 0)),
    ]
    db.add_all(templates)
    db.commit()
    print(f"Seeded {len(templates)} shift templates.")


def seed_recurring_assignments(db):
    print("Seeding recurring assignments...")
    db.add(RecurringShiftAssignments(
        id=RECURRING_ID,
        worker_id=BARISTA_ONE_ID,
        location_id=DOWNTOWN_ID,
        position_id=BARISTA_ID,
        day_of_week="monday",
        start_time=time(7, 0),
        end_time=time(12, 0),
        assignment_type=AssignmentType.REGULAR,
    ))
    db.commit()


def seed(db) -> dict[str, str]:
    """Insert the demo data and return the main ids by name."""
    seed_locations(db)
    seed_positions(db)
    seed_location_hours(db)
    seed_workers(db)
    seed_shift_templates(db)
    seed_recurring_assignments(db)

    return {
        "downtown": DOWNTOWN_ID,
        "riverside": RIVERSIDE_ID,
        "barista": BARISTA_ID,
        "prep_barista": PREP_BARISTA_ID,
        "lead": LEAD_ID,
        "pair_first_template": PAIR_FIRST_TEMPLATE_ID,
        "pair_second_template": PAIR_SECOND_TEMPLATE_ID,
        "recurring": RECURRING_ID,
    }


def main():
    """Main seed function."""
    print("\n" + "="*50)
    print("Shiftboard Database Seeder (demo)")
    print("="*50 + "\n")

    response = input("This will DROP AND RECREATE ALL TABLES. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Aborted.")
        sys.exit(0)

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        ids = seed(db)

        print("\n" + "="*50)
        print("Seeding complete!")
        print("="*50)
        for name, value in ids.items():
            print(f"  {name:<22} {value}")
        print("="*50 + "\n")

    except Exception as e:
        db.rollback()
        print(f"\nError during seeding: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
