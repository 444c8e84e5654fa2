"""
Turn the raw per-class text fields into typed maps and ClassSpecs.

Fields look like ``Math:5, English:4, Art`` (subjects) or
``Math:Mr.A, English:Ms.B`` (teachers/rooms). A bare key counts once.
"""

import re
from typing import Dict, Iterable, List, Union

from .errors import InvalidClassError
from .models import ClassRecord, ClassSpec, MAX_CLASSES

_LEADING_INT = re.compile(r"[+-]?[0-9]+")


def _tokens(raw: str):
    if not raw:
        return
    for item in raw.split(','):
        parts = [s.strip() for s in item.split(':')]
        if len(parts) == 2 and parts[0]:
            yield parts[0], parts[1]
        elif len(parts) == 1 and parts[0]:
            yield parts[0], None


def _as_int(val: str):
    """Leading integer of ``val`` ("5 periods" -> 5, "3.5" -> 3), None if there is none."""
    m = _LEADING_INT.match(val)
    return int(m.group(0)) if m else None


def parse_config_string(raw: str) -> Dict[str, Union[int, str]]:
    """Loose parse: integers where the value is numeric, strings otherwise."""
    out: Dict[str, Union[int, str]] = {}
    for key, val in _tokens(raw):
        if val is None:
            out[key] = 1
            continue
        num = _as_int(val)
        out[key] = val if num is None else num
    return out


def parse_subjects(raw: str) -> Dict[str, int]:
    subjects: Dict[str, int] = {}
    for key, val in _tokens(raw):
        count = 1 if val is None else _as_int(val)
        if count is None or count < 1:
            continue
        subjects[key] = count
    return subjects


def parse_assignments(raw: str) -> Dict[str, str]:
    """Subject -> teacher or room. Bare keys carry no assignment."""
    return {key: val for key, val in _tokens(raw) if val}


def build_class_spec(record: ClassRecord) -> ClassSpec:
    name = (record.name or "").strip()
    if not name:
        raise InvalidClassError("All classes must have a name.")
    subjects = parse_subjects(record.subjectsRaw)
    if not subjects:
        raise InvalidClassError(f"Class {name} has no subjects.")
    return ClassSpec(
        id=record.id,
        name=name,
        subjects=subjects,
        teachers=parse_assignments(record.teachersRaw),
        rooms=parse_assignments(record.roomsRaw),
    )


def build_class_specs(records: Iterable[ClassRecord]) -> List[ClassSpec]:
    records = list(records)
    if len(records) > MAX_CLASSES:
        raise InvalidClassError(f"At most {MAX_CLASSES} classes are supported, got {len(records)}.")
    return [build_class_spec(r) for r in records]
