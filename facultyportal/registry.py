"""
Faculty registry builder (class-centric upload -> faculty-centric records).

Pass 1 walks every class's facultyAssignments and creates one FacultyRecord per
unique display name, in first-seen order (ids faculty-1, faculty-2, ...).
Pass 2 walks every timetable cell and appends the expanded time slots to the
faculty that pass 1 already knows. Names only seen in timetable cells are skipped.

The display name is the only identity key: two people sharing a name share a record.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Tuple

from facultyportal.labs import expand_slot
from facultyportal.model import ClassSchedule, FacultyAssignment, FacultyRecord, SlotAssignment
from facultyportal.slots import parse_slot, recorded_subject, split_faculty_names

logger = logging.getLogger(__name__)

EMAIL_DOMAIN = "faculty.edu"


class MalformedInput(ValueError):
    """
    The upload has no usable "classes" array.
    """


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


def derive_email(name: str) -> str:
    """
    "Mrs. R. Pallavi Reddy" -> "mrs..r..pallavi.reddy@faculty.edu"
    """
    local = re.sub(r"[^a-z0-9]", ".", name.lower())
    return f"{local}@{EMAIL_DOMAIN}"


def derive_password(name: str) -> str:
    """
    Default password: last whitespace-separated part of the name, lowercased.
    """
    parts = name.split()
    return parts[-1].lower() if parts else ""


# ---------------------------------------------------------------------------
# Upload reading
# ---------------------------------------------------------------------------


def _read_timetable(raw: Any) -> Dict[str, Dict[str, SlotAssignment]]:
    timetable: Dict[str, Dict[str, SlotAssignment]] = {}
    if not isinstance(raw, Mapping):
        return timetable

    for day, slots in raw.items():
        if not isinstance(slots, Mapping):
            continue
        cells: Dict[str, SlotAssignment] = {}
        for time, details in slots.items():
            if not isinstance(details, Mapping):
                continue
            cells[str(time)] = SlotAssignment.from_dict(details)
        timetable[str(day)] = cells

    return timetable


def read_classes(data: Any) -> List[ClassSchedule]:
    """
    Validate an upload and turn its "classes" array into ClassSchedules.

    Raises MalformedInput when data is empty or "classes" is missing / not a list.
    """
    if not data:
        raise MalformedInput("data is null or empty")
    if not isinstance(data, Mapping):
        raise MalformedInput(f"expected an object, got {type(data).__name__}")

    raw_classes = data.get("classes")
    if not isinstance(raw_classes, list):
        raise MalformedInput("missing classes array")

    classes: List[ClassSchedule] = []
    for i, raw in enumerate(raw_classes):
        if not isinstance(raw, Mapping):
            logger.warning("Skipping class entry #%d: not an object", i)
            continue

        name = str(raw.get("name") or "")
        assignments_raw = raw.get("facultyAssignments")
        if not isinstance(assignments_raw, list):
            logger.warning("Class %s has no faculty assignments", name)
            assignments_raw = []

        assignments = [FacultyAssignment.from_dict(a) for a in assignments_raw if isinstance(a, Mapping)]

        classes.append(
            ClassSchedule(
                name=name,
                timetable=_read_timetable(raw.get("timetable")),
                faculty_assignments=assignments,
            )
        )

    return classes


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------


def _register_assignments(classes: List[ClassSchedule]) -> Dict[str, FacultyRecord]:
    registry: Dict[str, FacultyRecord] = {}

    for cls in classes:
        for assignment in cls.faculty_assignments:
            for name in split_faculty_names(assignment.faculty):
                record = registry.get(name)
                if record is None:
                    record = FacultyRecord(
                        id=f"faculty-{len(registry) + 1}",
                        name=name,
                        email=derive_email(name),
                        password=derive_password(name),
                    )
                    registry[name] = record
                if assignment.subject not in record.subjects:
                    record.subjects.append(assignment.subject)

    return registry


def _assign_time_slots(classes: List[ClassSchedule], registry: Dict[str, FacultyRecord]) -> None:
    for cls in classes:
        for day, cells in cls.timetable.items():
            for time, cell in cells.items():
                if not cell.subject:
                    continue

                for sub in parse_slot(cell.subject, cell.faculty):
                    subject = recorded_subject(sub)
                    for name in split_faculty_names(sub.faculty):
                        record = registry.get(name)
                        if record is None:
                            logger.debug("Unknown faculty %r in %s %s %s; skipped", name, cls.name, day, time)
                            continue
                        record.time_slots.extend(expand_slot(day, time, subject, sub.is_lab, cls.name))


def build_registry(classes: List[ClassSchedule]) -> List[FacultyRecord]:
    """
    Build the faculty records for a list of classes (both passes).
    """
    registry = _register_assignments(classes)
    _assign_time_slots(classes, registry)
    return list(registry.values())


def build_from_upload(data: Any) -> Tuple[List[FacultyRecord], List[ClassSchedule]]:
    """
    read_classes + build_registry. Raises MalformedInput.
    """
    classes = read_classes(data)
    faculties = build_registry(classes)
    logger.info("Processed %d faculty members and %d classes", len(faculties), len(classes))
    return faculties, classes
