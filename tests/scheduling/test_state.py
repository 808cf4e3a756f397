import pytest
from datetime import date, time

from shiftboard.services.scheduling.state import build_shift_records
from shiftboard.services.scheduling.types import AssignmentType, DayOfWeek, LeadType

from conftest import get_test_monday, get_week_dates, make_state, make_template, make_worker


class TestBuildShiftRecords:

    def test_assignment_spans_template(self):
        template = make_template("t1", start=time(7, 0), end=time(12, 0))
        shift, assignment = build_shift_records(template, get_test_monday(), "w1", AssignmentType.REGULAR)

        assert shift.template_id == "t1"
        assert shift.worker_id == "w1"
        assert shift.start_time == time(7, 0) and shift.end_time == time(12, 0)
        assert shift.is_recurring_generated is False
        assert assignment.scheduled_shift_id == shift.id
        assert assignment.assigned_start == time(7, 0)
        assert assignment.assigned_end == time(12, 0)
        assert assignment.is_manual_override is False

    def test_ids_are_unique(self):
        template = make_template("t1")
        first, _ = build_shift_records(template, get_test_monday(), "w1", AssignmentType.REGULAR)
        second, _ = build_shift_records(template, get_test_monday(), "w1", AssignmentType.REGULAR)
        assert first.id != second.id


class TestRecordAssignment:

    def test_updates_hours_fill_and_conflicts(self):
        monday = get_test_monday()
        template = make_template("t1")
        state = make_state([template], [make_worker("w1")])

        shift, assignment = build_shift_records(template, monday, "w1", AssignmentType.REGULAR)
        state.record_assignment(shift, assignment, "t1", 8.0)

        assert state.hours_of("w1") == 8.0
        assert state.is_slot_filled("t1", monday)
        assert state.is_worker_busy("w1", monday)
        assert not state.is_committed_elsewhere("w1", monday)
        assert not state.is_worker_busy("w1", date(2025, 1, 21))
        assert len(state.scheduled_shifts) == 1
        assert len(state.shift_assignments) == 1

    def test_unknown_worker_defaults_to_zero_hours(self):
        state = make_state([], [])
        assert state.hours_of("nobody") == 0.0

    def test_lead_assignment_sets_flag_from_template(self):
        monday = get_test_monday()
        opening = make_template("open", lead_type=LeadType.OPENING)
        state = make_state([opening], [])

        shift, assignment = build_shift_records(opening, monday, "w1", AssignmentType.LEAD)
        state.record_assignment(shift, assignment, "open", 6.0)

        assert state.has_opening_lead(monday)
        assert not state.has_closing_lead(monday)

    def test_closing_lead(self):
        monday = get_test_monday()
        closing = make_template("close", lead_type=LeadType.CLOSING)
        state = make_state([closing], [])

        shift, assignment = build_shift_records(closing, monday, "w1", AssignmentType.LEAD)
        state.record_assignment(shift, assignment, "close", 6.0)

        assert state.has_closing_lead(monday)
        assert not state.has_opening_lead(monday)

    def test_regular_assignment_on_lead_template_does_not_set_flag(self):
        monday = get_test_monday()
        opening = make_template("open", lead_type=LeadType.OPENING)
        state = make_state([opening], [])

        shift, assignment = build_shift_records(opening, monday, "w1", AssignmentType.REGULAR)
        state.record_assignment(shift, assignment, "open", 6.0)

        assert state.is_slot_filled("open", monday)
        assert not state.has_opening_lead(monday)

    def test_filling_same_instance_twice_raises(self):
        monday = get_test_monday()
        template = make_template("t1")
        state = make_state([template], [])

        shift, assignment = build_shift_records(template, monday, "w1", AssignmentType.REGULAR)
        state.record_assignment(shift, assignment, "t1", 8.0)

        shift2, assignment2 = build_shift_records(template, monday, "w2", AssignmentType.REGULAR)
        with pytest.raises(ValueError):
            state.record_assignment(shift2, assignment2, "t1", 8.0)

        assert state.hours_of("w2") == 0.0
        assert len(state.scheduled_shifts) == 1

    def test_batch_is_all_or_nothing(self):
        monday = get_test_monday()
        first = make_template("t1")
        second = make_template("t2")
        state = make_state([first, second], [])

        existing = build_shift_records(second, monday, "w9", AssignmentType.REGULAR)
        state.record_assignment(*existing, "t2", 8.0)

        shift1, a1 = build_shift_records(first, monday, "w1", AssignmentType.REGULAR)
        shift2, a2 = build_shift_records(second, monday, "w1", AssignmentType.REGULAR)
        with pytest.raises(ValueError):
            state.record_assignments([(shift1, a1, "t1", 2.5), (shift2, a2, "t2", 5.0)])

        assert not state.is_slot_filled("t1", monday)
        assert state.hours_of("w1") == 0.0
        assert not state.is_worker_busy("w1", monday)


class TestQueries:

    def test_slot_filled_without_date_means_any_date(self):
        tuesday = date(2025, 1, 21)
        template = make_template("t1", days=[DayOfWeek.MONDAY, DayOfWeek.TUESDAY])
        state = make_state([template], [])
        assert not state.is_slot_filled("t1")

        shift, assignment = build_shift_records(template, tuesday, "w1", AssignmentType.REGULAR)
        state.record_assignment(shift, assignment, "t1", 8.0)

        assert state.is_slot_filled("t1")
        assert state.is_slot_filled("t1", tuesday)
        assert not state.is_slot_filled("t1", get_test_monday())

    def test_external_commitments_make_worker_busy(self):
        monday = get_test_monday()
        state = make_state([], [make_worker("w1")], commitments=[("w1", monday)])

        assert state.is_worker_busy("w1", monday)
        assert not state.is_worker_busy("w1", date(2025, 1, 21))
        assert state.is_committed_elsewhere("w1", monday)
        assert not state.is_committed_elsewhere("w1", date(2025, 1, 21))

    def test_initial_hours(self):
        state = make_state([], [make_worker("w1"), make_worker("w2")], hours={"w1": 10.0})
        assert state.hours_of("w1") == 10.0
        assert state.hours_of("w2") == 0.0

    def test_unfilled_instances_expand_weekdays(self):
        week = get_week_dates()
        template = make_template("t1", days=[DayOfWeek.MONDAY, DayOfWeek.WEDNESDAY])
        state = make_state([template], [])

        instances = state.unfilled_instances(week)
        assert [(i.template.id, i.shift_date, i.day_of_week) for i in instances] == [
            ("t1", date(2025, 1, 20), DayOfWeek.MONDAY),
            ("t1", date(2025, 1, 22), DayOfWeek.WEDNESDAY),
        ]

        shift, assignment = build_shift_records(template, week[0], "w1", AssignmentType.REGULAR)
        state.record_assignment(shift, assignment, "t1", 8.0)

        remaining = state.unfilled_instances(week)
        assert [i.shift_date for i in remaining] == [date(2025, 1, 22)]

    def test_unfilled_templates(self):
        monday = get_test_monday()
        filled = make_template("filled")
        empty = make_template("empty")
        state = make_state([filled, empty], [])

        shift, assignment = build_shift_records(filled, monday, "w1", AssignmentType.REGULAR)
        state.record_assignment(shift, assignment, "filled", 8.0)

        assert [t.id for t in state.unfilled_templates()] == ["empty"]

    def test_returned_lists_are_copies(self):
        monday = get_test_monday()
        template = make_template("t1")
        state = make_state([template], [])
        shift, assignment = build_shift_records(template, monday, "w1", AssignmentType.REGULAR)
        state.record_assignment(shift, assignment, "t1", 8.0)

        state.scheduled_shifts.clear()
        state.shift_assignments.clear()

        assert len(state.scheduled_shifts) == 1
        assert len(state.shift_assignments) == 1
