from typing import Callable, Sequence, Set, Tuple

from ..models import Cell, ClassSpec, HOMEROOM, STAFF, ScheduleGrid


def counts_ok(classes: Sequence[ClassSpec], grids: Sequence[ScheduleGrid]) -> bool:
    if len(classes) != len(grids):
        return False
    for cls, sg in zip(classes, grids):
        placed = {}
        for row in sg.grid:
            for cell in row:
                if not cell.is_free:
                    placed[cell.subject] = placed.get(cell.subject, 0) + 1
        if placed != cls.subjects:
            return False
    return True


def _exclusive(grids: Sequence[ScheduleGrid], key: Callable[[Cell], str], sentinel: str) -> bool:
    seen: Set[Tuple[str, int, int]] = set()
    for sg in grids:
        for d, row in enumerate(sg.grid):
            for p, cell in enumerate(row):
                if cell.is_free or key(cell) == sentinel:
                    continue
                triple = (key(cell), d, p)
                if triple in seen:
                    return False
                seen.add(triple)
    return True


def teachers_ok(grids: Sequence[ScheduleGrid]) -> bool:
    return _exclusive(grids, lambda c: c.teacher, STAFF)


def rooms_ok(grids: Sequence[ScheduleGrid]) -> bool:
    return _exclusive(grids, lambda c: c.room, HOMEROOM)
