import io
import json
import logging
import os
import time
from dataclasses import asdict
from typing import IO, List, Sequence, Union

from .errors import InvalidDatabaseError
from .models import ClassRecord, ScheduleGrid
from .render import grids_to_long_frame

TextOrPath = Union[str, os.PathLike, IO]

STORE_KEY = "autoscheduler_data"

logger = logging.getLogger(__name__)


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a BytesIO buffer.
    """
    if isinstance(src, (str, os.PathLike)):
        return open(src, 'r', encoding='utf-8'), True
    if isinstance(src, io.BytesIO):
        src.seek(0)
        return io.TextIOWrapper(src, encoding='utf-8'), True
    if hasattr(src, 'read'):
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")


def new_class_record(index: int = 1) -> ClassRecord:
    return ClassRecord(id=str(time.time_ns() // 1_000_000 + index), name=f"Class {index}")


def records_from_json(data) -> List[ClassRecord]:
    if not isinstance(data, list):
        raise InvalidDatabaseError("Invalid file format. Expected a list of classes.")
    records = []
    seen = set()
    for i, row in enumerate(data, start=1):
        if not isinstance(row, dict):
            raise InvalidDatabaseError(f"Entry {i} is not an object.")
        # ids key the UI widgets, so they must be unique
        rid = str(row.get('id') or '')
        n = i
        while not rid or rid in seen:
            rid = new_class_record(n).id
            n += len(data) + 1
        seen.add(rid)
        records.append(ClassRecord(
            id=rid,
            name=str(row.get('name') or ''),
            subjectsRaw=str(row.get('subjectsRaw') or ''),
            teachersRaw=str(row.get('teachersRaw') or ''),
            roomsRaw=str(row.get('roomsRaw') or ''),
        ))
    return records


def load_database(src: TextOrPath) -> List[ClassRecord]:
    """Read a JSON class list. The result replaces the caller's list wholesale."""
    f, should_close = _open_text(src)
    try:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidDatabaseError(f"Error reading file: {e}") from e
    finally:
        if should_close:
            f.close()
    return records_from_json(data)


def dump_database(records: Sequence[ClassRecord]) -> str:
    return json.dumps([asdict(r) for r in records], indent=2)


def save_database(path: str, records: Sequence[ClassRecord]):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(dump_database(records))


class ClassStore:
    """Durable JSON file holding the working class list under one key."""

    def __init__(self, path: Union[str, os.PathLike]):
        self.path = path

    def load(self, default_empty: bool = False) -> List[ClassRecord]:
        records: List[ClassRecord] = []
        if os.path.exists(self.path):
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    records = records_from_json(json.load(f).get(STORE_KEY))
            except (OSError, json.JSONDecodeError, UnicodeDecodeError, AttributeError, InvalidDatabaseError) as e:
                logger.warning("Ignoring unreadable store %s: %s", self.path, e)
                records = []
        if not records and default_empty:
            records = [new_class_record(1)]
        return records

    def save(self, records: Sequence[ClassRecord]):
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump({STORE_KEY: [asdict(r) for r in records]}, f, indent=2)


def save_timetables_csv(path: str, grids: Sequence[ScheduleGrid]):
    grids_to_long_frame(grids).to_csv(path, index=False)
