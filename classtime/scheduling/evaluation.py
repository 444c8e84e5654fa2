from typing import Optional, Sequence

from ..graph_build import build_resource_graph, resource_loads
from ..models import ClassSpec, ScheduleGrid, TOTAL_SLOTS
from .validation import counts_ok, rooms_ok, teachers_ok


def overloaded_resources(classes: Sequence[ClassSpec]):
    """Teachers/rooms asked for more periods than the week has. No attempt can succeed."""
    loads = resource_loads(build_resource_graph(classes))
    return sorted((node, load) for node, load in loads.items() if load > TOTAL_SLOTS)


def summary(classes: Sequence[ClassSpec], grids: Sequence[ScheduleGrid],
            attempts: Optional[int] = None) -> str:
    G = build_resource_graph(classes)
    n_teachers = sum(1 for _, k in G.nodes(data="kind") if k == "teacher")
    n_rooms = sum(1 for _, k in G.nodes(data="kind") if k == "room")
    required = sum(c.total_periods for c in classes)
    placed = sum(g.occupied() for g in grids)
    warning = ""
    for (kind, name), load in overloaded_resources(classes):
        warning += f"Warning: {kind} {name} needs {load} periods > {TOTAL_SLOTS} slots; no conflict-free timetable exists.\n"
    attempts_line = f"Attempts: {attempts}\n" if attempts is not None else ""
    return (
        f"Classes: {len(classes)}  Teachers: {n_teachers}  Rooms: {n_rooms}\n"
        f"Periods required: {required}  Placed: {placed}\n"
        f"{attempts_line}"
        f"Valid (counts): {counts_ok(classes, grids)}  Valid (teachers): {teachers_ok(grids)}  "
        f"Valid (rooms): {rooms_ok(grids)}\n"
        f"{warning}"
    )
