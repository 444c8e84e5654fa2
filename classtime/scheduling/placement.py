"""
Randomized constructive timetabling.

Each attempt shuffles every class's subject pool and its slot scan order,
then places subjects greedily while keeping teachers and rooms exclusive per
(day, period) across all classes. A stuck attempt is thrown away whole and
the next one starts from scratch with fresh randomness.
"""

import enum
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple, Union

from ..algorithms.shuffle import fisher_yates
from ..errors import InfeasibleScheduleError, InputTooLargeError
from ..models import (
    Cell, ClassSpec, DAYS, HOMEROOM, MAX_ATTEMPTS, PERIODS, STAFF,
    ScheduleGrid, TOTAL_SLOTS, empty_grid,
)

logger = logging.getLogger(__name__)

Slot = Tuple[int, int]


class AttemptStatus(enum.Enum):
    SUCCESS = "success"
    CONFLICT = "conflict"


@dataclass
class AttemptOutcome:
    status: AttemptStatus
    grids: List[ScheduleGrid] = field(default_factory=list)
    # class whose pool could not be placed, for logging
    stuck_on: Optional[str] = None


@dataclass
class ScheduleResult:
    grids: List[ScheduleGrid]
    attempts: int


def check_capacity(classes: Sequence[ClassSpec]) -> None:
    for cls in classes:
        if cls.total_periods > TOTAL_SLOTS:
            raise InputTooLargeError(cls.name, cls.total_periods, TOTAL_SLOTS)


def subject_pool(cls: ClassSpec, rng: random.Random) -> List[str]:
    pool = [subj for subj, count in cls.subjects.items() for _ in range(count)]
    return fisher_yates(pool, rng)


def slot_order(rng: random.Random) -> List[Slot]:
    slots = [(d, p) for d in range(len(DAYS)) for p in range(PERIODS)]
    return fisher_yates(slots, rng)


def place_class(cls: ClassSpec, rng: random.Random,
                busy_teachers: Set[Tuple[str, int, int]],
                busy_rooms: Set[Tuple[str, int, int]]) -> Optional[ScheduleGrid]:
    """Place one class's pool. Claims go into the shared busy sets.

    Returns None as soon as one subject instance has nowhere to go.
    """
    grid = empty_grid()
    slots = slot_order(rng)
    for subj in subject_pool(cls, rng):
        teacher = cls.teacher_for(subj)
        room = cls.room_for(subj)
        for i, (d, p) in enumerate(slots):
            if not grid[d][p].is_free:
                continue
            if teacher != STAFF and (teacher, d, p) in busy_teachers:
                continue
            if room != HOMEROOM and (room, d, p) in busy_rooms:
                continue
            grid[d][p] = Cell(subject=subj, teacher=teacher, room=room)
            if teacher != STAFF:
                busy_teachers.add((teacher, d, p))
            if room != HOMEROOM:
                busy_rooms.add((room, d, p))
            del slots[i]
            break
        else:
            return None
    return ScheduleGrid(class_name=cls.name, grid=grid)


def run_attempt(classes: Sequence[ClassSpec], rng: random.Random) -> AttemptOutcome:
    busy_teachers: Set[Tuple[str, int, int]] = set()
    busy_rooms: Set[Tuple[str, int, int]] = set()
    grids: List[ScheduleGrid] = []
    for cls in classes:
        sg = place_class(cls, rng, busy_teachers, busy_rooms)
        if sg is None:
            return AttemptOutcome(AttemptStatus.CONFLICT, stuck_on=cls.name)
        grids.append(sg)
    return AttemptOutcome(AttemptStatus.SUCCESS, grids=grids)


def generate_timetables(classes: Sequence[ClassSpec], max_attempts: int = MAX_ATTEMPTS,
                        rng: Union[random.Random, int, None] = None) -> ScheduleResult:
    """Find any conflict-free weekly grid for every class.

    Raises InputTooLargeError up front if a class cannot fit in the week, and
    InfeasibleScheduleError once ``max_attempts`` attempts have all conflicted.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    check_capacity(classes)
    if not isinstance(rng, random.Random):
        rng = random.Random(rng)

    for attempt in range(1, max_attempts + 1):
        outcome = run_attempt(classes, rng)
        if outcome.status is AttemptStatus.SUCCESS:
            logger.info("Scheduled %d classes in %d attempt(s)", len(classes), attempt)
            return ScheduleResult(grids=outcome.grids, attempts=attempt)
        logger.debug("Attempt %d stuck on class %s", attempt, outcome.stuck_on)

    logger.warning("No feasible timetable after %d attempts", max_attempts)
    raise InfeasibleScheduleError(max_attempts)


def schedule(classes: Sequence[ClassSpec], max_attempts: int = MAX_ATTEMPTS,
             rng: Union[random.Random, int, None] = None) -> List[ScheduleGrid]:
    return generate_timetables(classes, max_attempts=max_attempts, rng=rng).grids
