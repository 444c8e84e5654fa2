import random
from collections import Counter

import pytest

from classtime.errors import InfeasibleScheduleError, InputTooLargeError
from classtime.models import ClassSpec, DAYS, HOMEROOM, PERIODS, STAFF, TOTAL_SLOTS
from classtime.scheduling import placement
from classtime.scheduling.placement import (
    AttemptOutcome, AttemptStatus, generate_timetables, run_attempt, schedule,
)
from classtime.scheduling.validation import counts_ok, rooms_ok, teachers_ok


def _subjects(sg):
    return Counter(c.subject for row in sg.grid for c in row if not c.is_free)


def test_single_class_without_bindings(rng):
    cls = ClassSpec(name="1A", subjects={"Math": 2, "English": 1})
    grids = schedule([cls], rng=rng)
    assert len(grids) == 1
    sg = grids[0]
    assert len(sg.grid) == len(DAYS)
    assert all(len(row) == PERIODS for row in sg.grid)
    assert sg.occupied() == 3
    assert _subjects(sg) == {"Math": 2, "English": 1}
    free = [c for row in sg.grid for c in row if c.is_free]
    assert len(free) == TOTAL_SLOTS - 3
    assert all(c.subject == "Free" for c in free)


def test_sentinels_fill_unbound_subjects(rng):
    result = generate_timetables([ClassSpec(name="X", subjects={"A": 1})], rng=rng)
    assert result.attempts == 1
    (cell,) = [c for row in result.grids[0].grid for c in row if not c.is_free]
    assert (cell.subject, cell.teacher, cell.room) == ("A", STAFF, HOMEROOM)


def test_full_week_fills_every_slot(rng):
    cls = ClassSpec(name="Busy", subjects={"Math": 20, "Art": 10}, teachers={"Math": "Mr.A"})
    sg = schedule([cls], rng=rng)[0]
    assert sg.occupied() == TOTAL_SLOTS


def test_shared_resources_never_double_booked(shared_teacher_classes):
    for seed in range(10):
        grids = schedule(shared_teacher_classes, rng=seed)
        assert [g.class_name for g in grids] == ["7A", "7B", "8A"]
        assert counts_ok(shared_teacher_classes, grids)
        assert teachers_ok(grids)
        assert rooms_ok(grids)


def test_sentinel_teacher_may_overlap(rng):
    classes = [ClassSpec(name=f"C{i}", subjects={"Study": TOTAL_SLOTS}) for i in range(3)]
    grids = schedule(classes, rng=rng)
    assert all(g.occupied() == TOTAL_SLOTS for g in grids)


def test_input_too_large_is_raised_before_any_attempt(monkeypatch):
    def boom(*args, **kwargs):
        raise AssertionError("attempt should not run")

    monkeypatch.setattr(placement, "run_attempt", boom)
    cls = ClassSpec(name="Huge", subjects={"Math": 20, "English": 11})
    with pytest.raises(InputTooLargeError) as exc:
        generate_timetables([ClassSpec(name="ok", subjects={"A": 1}), cls])
    assert exc.value.class_name == "Huge"
    assert exc.value.required == 31
    assert exc.value.available == TOTAL_SLOTS
    assert "Huge" in str(exc.value)


def test_exhausted_budget_raises_infeasible():
    classes = [
        ClassSpec(name="A", subjects={"Math": TOTAL_SLOTS}, teachers={"Math": "Mr.A"}),
        ClassSpec(name="B", subjects={"Math": 1}, teachers={"Math": "Mr.A"}),
    ]
    with pytest.raises(InfeasibleScheduleError) as exc:
        generate_timetables(classes, max_attempts=5, rng=0)
    assert exc.value.attempts == 5
    assert "reducing constraints" in str(exc.value)


def test_shared_room_saturation_is_infeasible():
    classes = [
        ClassSpec(name="A", subjects={"PE": 20}, rooms={"PE": "Gym"}),
        ClassSpec(name="B", subjects={"PE": 11}, rooms={"PE": "Gym"}),
    ]
    with pytest.raises(InfeasibleScheduleError):
        generate_timetables(classes, max_attempts=3, rng=0)


def test_conflicting_attempts_are_retried(monkeypatch, rng):
    real = placement.run_attempt
    calls = []

    def flaky(classes, r):
        calls.append(1)
        if len(calls) < 3:
            return AttemptOutcome(AttemptStatus.CONFLICT, stuck_on=classes[0].name)
        return real(classes, r)

    monkeypatch.setattr(placement, "run_attempt", flaky)
    result = generate_timetables([ClassSpec(name="X", subjects={"A": 2})], rng=rng)
    assert result.attempts == 3
    assert result.grids[0].occupied() == 2


def test_run_attempt_reports_stuck_class():
    classes = [
        ClassSpec(name="A", subjects={"Math": TOTAL_SLOTS}, teachers={"Math": "Mr.A"}),
        ClassSpec(name="B", subjects={"Math": 1}, teachers={"Math": "Mr.A"}),
        ClassSpec(name="C", subjects={"Art": 1}),
    ]
    outcome = run_attempt(classes, random.Random(3))
    assert outcome.status is AttemptStatus.CONFLICT
    assert outcome.stuck_on == "B"
    assert outcome.grids == []


def test_same_seed_is_reproducible(shared_teacher_classes):
    a = schedule(shared_teacher_classes, rng=42)
    b = schedule(shared_teacher_classes, rng=42)
    assert a == b


def test_rejects_empty_budget():
    with pytest.raises(ValueError):
        generate_timetables([ClassSpec(name="X", subjects={"A": 1})], max_attempts=0)
