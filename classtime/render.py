from typing import List, Sequence

import pandas as pd

from .models import Cell, DAYS, HOMEROOM, PERIODS, ScheduleGrid


def cell_label(cell: Cell) -> str:
    if cell.is_free:
        return "Free"
    if cell.room == HOMEROOM:
        return f"{cell.subject} ({cell.teacher})"
    return f"{cell.subject} ({cell.teacher}, Rm: {cell.room})"


def grid_to_frame(sg: ScheduleGrid) -> pd.DataFrame:
    """Day rows x period columns, one label per cell."""
    return pd.DataFrame(
        [[cell_label(c) for c in row] for row in sg.grid],
        index=pd.Index(DAYS, name="Day"),
        columns=[f"Period {p + 1}" for p in range(PERIODS)],
    )


def grids_to_long_frame(grids: Sequence[ScheduleGrid]) -> pd.DataFrame:
    rows: List[dict] = []
    for sg in grids:
        for d, row in enumerate(sg.grid):
            for p, cell in enumerate(row):
                rows.append({
                    "class": sg.class_name,
                    "day": DAYS[d],
                    "period": p + 1,
                    "subject": cell.subject,
                    "teacher": cell.teacher,
                    "room": cell.room,
                })
    return pd.DataFrame(rows, columns=["class", "day", "period", "subject", "teacher", "room"])


def format_timetable(sg: ScheduleGrid) -> str:
    frame = grid_to_frame(sg)
    frame.index = [d[:3] for d in DAYS]
    return f"{sg.class_name}\n{frame.to_string()}"
