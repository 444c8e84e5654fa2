from dataclasses import dataclass, field
from typing import Dict, List, Optional

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
PERIODS = 6
TOTAL_SLOTS = len(DAYS) * PERIODS
MAX_CLASSES = 8
MAX_ATTEMPTS = 5000

# Sentinels for subjects without a bound teacher/room; never conflict-checked.
STAFF = "Staff"
HOMEROOM = "Homeroom"
FREE = "Free"


@dataclass
class ClassSpec:
    name: str
    subjects: Dict[str, int] = field(default_factory=dict)   # subject -> periods per week
    teachers: Dict[str, str] = field(default_factory=dict)   # subject -> teacher
    rooms: Dict[str, str] = field(default_factory=dict)      # subject -> room
    id: Optional[str] = None

    @property
    def total_periods(self) -> int:
        return sum(self.subjects.values())

    def teacher_for(self, subject: str) -> str:
        return self.teachers.get(subject) or STAFF

    def room_for(self, subject: str) -> str:
        return self.rooms.get(subject) or HOMEROOM


@dataclass(frozen=True)
class Cell:
    subject: str = FREE
    teacher: str = "-"
    room: str = "-"

    @property
    def is_free(self) -> bool:
        return self.subject == FREE


@dataclass
class ScheduleGrid:
    class_name: str
    # grid[day][period]
    grid: List[List[Cell]] = field(default_factory=lambda: empty_grid())

    def occupied(self) -> int:
        return sum(1 for row in self.grid for cell in row if not cell.is_free)


@dataclass
class ClassRecord:
    """Unparsed class as entered by the user; the unit of persistence."""
    id: str
    name: str
    subjectsRaw: str = ""
    teachersRaw: str = ""
    roomsRaw: str = ""


def empty_grid() -> List[List[Cell]]:
    return [[Cell() for _ in range(PERIODS)] for _ in range(len(DAYS))]
