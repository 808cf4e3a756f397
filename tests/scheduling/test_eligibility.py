import pytest
from datetime import date, time

from shiftboard.services.scheduling.eligibility import (
    find_eligible_workers,
    is_eligible,
    is_shift_within_availability,
    rank_candidates,
    top_tied,
)
from shiftboard.services.scheduling.state import build_shift_records
from shiftboard.services.scheduling.types import (
    AssignmentType,
    AvailabilityLabel,
    DayOfWeek,
    JobLevel,
    LeadType,
    compare_job_levels,
)

from conftest import (
    OTHER_LOCATION_ID,
    get_test_monday,
    make_hours_by_day,
    make_state,
    make_template,
    make_worker,
)

MON = DayOfWeek.MONDAY


def _monday_hours(cutoff: time = time(12, 0)):
    return make_hours_by_day(cutoff)[MON]


class TestAvailabilityLabels:

    def test_all_day_fits_anything(self):
        availability = {MON: [AvailabilityLabel.ALL_DAY]}
        assert is_shift_within_availability(time(6, 0), time(22, 0), get_test_monday(), availability, _monday_hours())

    def test_morning_must_end_by_cutoff(self):
        availability = {MON: [AvailabilityLabel.MORNING]}
        monday = get_test_monday()

        assert is_shift_within_availability(time(7, 0), time(12, 0), monday, availability, _monday_hours())
        assert not is_shift_within_availability(time(7, 0), time(12, 30), monday, availability, _monday_hours())

    def test_afternoon_must_start_at_cutoff(self):
        availability = {MON: [AvailabilityLabel.AFTERNOON]}
        monday = get_test_monday()

        assert is_shift_within_availability(time(12, 0), time(17, 0), monday, availability, _monday_hours())
        assert not is_shift_within_availability(time(11, 30), time(17, 0), monday, availability, _monday_hours())

    def test_morning_and_afternoon_do_not_combine(self):
        availability = {MON: [AvailabilityLabel.MORNING, AvailabilityLabel.AFTERNOON]}
        assert not is_shift_within_availability(
            time(9, 0), time(17, 0), get_test_monday(), availability, _monday_hours()
        )

    @pytest.mark.parametrize("availability", [
        {MON: [AvailabilityLabel.NONE]},
        {MON: []},
        {DayOfWeek.TUESDAY: [AvailabilityLabel.ALL_DAY]},
    ])
    def test_unavailable(self, availability):
        assert not is_shift_within_availability(
            time(9, 0), time(12, 0), get_test_monday(), availability, _monday_hours()
        )

    def test_cutoff_comes_from_operating_hours(self):
        availability = {MON: [AvailabilityLabel.MORNING]}
        monday = get_test_monday()

        assert is_shift_within_availability(time(7, 0), time(13, 0), monday, availability, _monday_hours(time(13, 0)))


class TestIsEligible:

    def test_eligible_worker(self, monday_template):
        worker = make_worker("w1")
        state = make_state([monday_template], [worker])
        assert is_eligible(worker, monday_template, get_test_monday(), state, _monday_hours())

    def test_missing_operating_hours(self, monday_template):
        worker = make_worker("w1")
        state = make_state([monday_template], [worker])
        assert not is_eligible(worker, monday_template, get_test_monday(), state, None)

    def test_busy_worker(self, monday_template):
        worker = make_worker("w1")
        state = make_state([monday_template], [worker], commitments=[("w1", get_test_monday())])
        assert not is_eligible(worker, monday_template, get_test_monday(), state, _monday_hours())

    def test_busy_from_earlier_assignment(self, monday_template):
        monday = get_test_monday()
        other = make_template("other")
        worker = make_worker("w1")
        state = make_state([monday_template, other], [worker])
        shift, assignment = build_shift_records(other, monday, "w1", AssignmentType.REGULAR)
        state.record_assignment(shift, assignment, "other", 8.0)

        assert not is_eligible(worker, monday_template, monday, state, _monday_hours())

    def test_would_exceed_preferred_hours(self, monday_template):
        worker = make_worker("w1", cap=10)
        state = make_state([monday_template], [worker], hours={"w1": 4.0})
        assert not is_eligible(worker, monday_template, get_test_monday(), state, _monday_hours())

    def test_reaching_cap_exactly_is_allowed(self, monday_template):
        worker = make_worker("w1", cap=8)
        state = make_state([monday_template], [worker])
        assert is_eligible(worker, monday_template, get_test_monday(), state, _monday_hours())

    def test_no_cap_means_unbounded(self, monday_template):
        worker = make_worker("w1", cap=None)
        state = make_state([monday_template], [worker], hours={"w1": 200.0})
        assert is_eligible(worker, monday_template, get_test_monday(), state, _monday_hours())

    def test_wrong_position(self, monday_template):
        worker = make_worker("w1", positions={"other-position"})
        state = make_state([monday_template], [worker])
        assert not is_eligible(worker, monday_template, get_test_monday(), state, _monday_hours())

    def test_wrong_location(self, monday_template):
        worker = make_worker("w1", locations={OTHER_LOCATION_ID})
        state = make_state([monday_template], [worker])
        assert not is_eligible(worker, monday_template, get_test_monday(), state, _monday_hours())

    def test_not_available(self, monday_template):
        worker = make_worker("w1", availability={MON: [AvailabilityLabel.MORNING]})
        state = make_state([monday_template], [worker])
        assert not is_eligible(worker, monday_template, get_test_monday(), state, _monday_hours())

    def test_lead_flag_is_not_checked(self):
        opening = make_template("open", lead_type=LeadType.OPENING)
        worker = make_worker("w1", is_lead=False)
        state = make_state([opening], [worker])
        assert is_eligible(worker, opening, get_test_monday(), state, _monday_hours())


class TestRanking:

    def test_job_level_order(self):
        assert JobLevel.L7.rank == 7
        assert compare_job_levels(JobLevel.L2, JobLevel.L5) < 0
        assert compare_job_levels(JobLevel.L5, JobLevel.L5) == 0
        assert compare_job_levels(JobLevel.L6, JobLevel.L1) > 0

    def test_level_then_hours(self):
        senior = make_worker("senior", level=JobLevel.L5)
        busy = make_worker("busy", level=JobLevel.L3)
        fresh = make_worker("fresh", level=JobLevel.L3)
        state = make_state([], [senior, busy, fresh], hours={"senior": 30.0, "busy": 10.0, "fresh": 2.0})

        ranked = rank_candidates([fresh, busy, senior], state)
        assert [w.id for w in ranked] == ["senior", "fresh", "busy"]

    def test_level_only(self):
        a = make_worker("a", level=JobLevel.L4)
        b = make_worker("b", level=JobLevel.L4)
        state = make_state([], [a, b], hours={"a": 10.0})

        ranked = rank_candidates([a, b], state, by_hours=False)
        assert [w.id for w in top_tied(ranked, state, by_hours=False)] == ["a", "b"]

    def test_top_tied_respects_hours(self):
        a = make_worker("a", level=JobLevel.L4)
        b = make_worker("b", level=JobLevel.L4)
        state = make_state([], [a, b], hours={"a": 10.0})

        ranked = rank_candidates([a, b], state)
        assert [w.id for w in top_tied(ranked, state)] == ["b"]

    def test_top_tied_empty(self):
        assert top_tied([], make_state([], [])) == []


class TestFindEligibleWorkers:

    def test_returns_ranked_eligible_workers(self, monday_template):
        workers = [
            make_worker("junior", level=JobLevel.L2),
            make_worker("elsewhere", level=JobLevel.L7, locations={OTHER_LOCATION_ID}),
            make_worker("senior", level=JobLevel.L4),
        ]
        state = make_state([monday_template], workers)

        eligible = find_eligible_workers(workers, monday_template, get_test_monday(), state, _monday_hours())
        assert [w.id for w in eligible] == ["senior", "junior"]

    def test_lead_only(self, monday_template):
        workers = [
            make_worker("lead", level=JobLevel.L3, is_lead=True),
            make_worker("regular", level=JobLevel.L6),
        ]
        state = make_state([monday_template], workers)

        eligible = find_eligible_workers(
            workers, monday_template, get_test_monday(), state, _monday_hours(), lead_only=True
        )
        assert [w.id for w in eligible] == ["lead"]

    def test_skips_other_dates(self, monday_template):
        worker = make_worker("w1")
        state = make_state([monday_template], [worker], commitments=[("w1", date(2025, 1, 21))])

        eligible = find_eligible_workers([worker], monday_template, get_test_monday(), state, _monday_hours())
        assert [w.id for w in eligible] == ["w1"]
