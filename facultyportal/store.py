"""
In-memory timetable store.

The store owns the faculty and class collections of the latest successful
ingestion. State is replaced wholesale: new collections are built completely
first and then swapped in under the lock. Every read returns a deep copy.

Slot changes from accepted swap requests go through apply() with one of the
two list operations below.
"""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from facultyportal.labs import DAYS
from facultyportal.model import ClassSchedule, FacultyRecord, TimeSlotRecord
from facultyportal.registry import MalformedInput, build_from_upload

logger = logging.getLogger(__name__)


@dataclass
class Transfer:
    """
    Move one slot from one faculty's list to the end of another's.
    """

    slot: TimeSlotRecord
    from_faculty_id: str
    to_faculty_id: str


@dataclass
class Exchange:
    """
    Swap one slot of faculty A with one slot of faculty B, in place.
    """

    faculty_a_id: str
    slot_a: TimeSlotRecord
    faculty_b_id: str
    slot_b: TimeSlotRecord


SlotOperation = Union[Transfer, Exchange]


def _find_slot_index(faculty: FacultyRecord, slot: TimeSlotRecord) -> int:
    for i, own in enumerate(faculty.time_slots):
        if own.matches(slot):
            return i
    return -1


class TimetableStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._faculties: List[FacultyRecord] = []
        self._classes: List[ClassSchedule] = []
        self._loaded = False

    # -----------------------------------------------------------------------
    # Writing
    # -----------------------------------------------------------------------

    def replace_all(self, faculties: List[FacultyRecord], classes: List[ClassSchedule]) -> None:
        faculties = copy.deepcopy(faculties)
        classes = copy.deepcopy(classes)
        with self._lock:
            self._faculties = faculties
            self._classes = classes
            self._loaded = True

    def clear(self) -> None:
        with self._lock:
            self._faculties = []
            self._classes = []

    def ingest(self, data: Any) -> bool:
        """
        Process an uploaded document (already decoded to Python objects).

        Returns False when the document has no usable "classes" array; the store
        is emptied in that case and nothing is raised.
        """
        try:
            faculties, classes = build_from_upload(data)
        except MalformedInput as e:
            logger.error("Invalid data format: %s", e)
            self.clear()
            return False

        self.replace_all(faculties, classes)
        return True

    def apply(self, operation: SlotOperation) -> bool:
        """
        Run a Transfer or Exchange. Returns False (and changes nothing) when a
        faculty or slot cannot be found.
        """
        with self._lock:
            by_id = {f.id: f for f in self._faculties}

            if isinstance(operation, Transfer):
                source = by_id.get(operation.from_faculty_id)
                target = by_id.get(operation.to_faculty_id)
                if source is None or target is None:
                    return False
                i = _find_slot_index(source, operation.slot)
                if i == -1:
                    return False
                target.time_slots.append(source.time_slots.pop(i))
                return True

            if isinstance(operation, Exchange):
                a = by_id.get(operation.faculty_a_id)
                b = by_id.get(operation.faculty_b_id)
                if a is None or b is None:
                    return False
                i = _find_slot_index(a, operation.slot_a)
                j = _find_slot_index(b, operation.slot_b)
                if i == -1 or j == -1:
                    return False
                a.time_slots[i], b.time_slots[j] = b.time_slots[j], a.time_slots[i]
                return True

        raise TypeError(f"Unsupported slot operation: {operation!r}")

    # -----------------------------------------------------------------------
    # Reading
    # -----------------------------------------------------------------------

    def is_data_loaded(self) -> bool:
        return self._loaded

    def get_all_faculties(self) -> List[FacultyRecord]:
        with self._lock:
            return copy.deepcopy(self._faculties)

    def get_all_classes(self) -> List[ClassSchedule]:
        with self._lock:
            return copy.deepcopy(self._classes)

    def get_faculty_by_id(self, faculty_id: str) -> Optional[FacultyRecord]:
        with self._lock:
            for f in self._faculties:
                if f.id == faculty_id:
                    return copy.deepcopy(f)
        return None

    def get_faculty_by_email(self, email: str) -> Optional[FacultyRecord]:
        with self._lock:
            for f in self._faculties:
                if f.email == email:
                    return copy.deepcopy(f)
        return None

    def get_faculty_timetable(self, faculty_id: str) -> List[TimeSlotRecord]:
        faculty = self.get_faculty_by_id(faculty_id)
        return faculty.time_slots if faculty else []

    def search_faculties(self, text: str) -> List[FacultyRecord]:
        """
        Case-insensitive substring search over name, email and subjects.
        """
        query = (text or "").strip().lower()
        faculties = self.get_all_faculties()
        if not query:
            return faculties

        out: List[FacultyRecord] = []
        for f in faculties:
            if query in f.name.lower() or query in f.email.lower():
                out.append(f)
            elif any(query in s.lower() for s in f.subjects):
                out.append(f)
        return out

    def search_timetable(self, faculty_id: str, query: str) -> Dict[str, List[TimeSlotRecord]]:
        """
        Answer a schedule question for one faculty member.

        A day name ("monday") returns that day's slots; anything else matches
        subject, class, time or day text. Results are grouped by day.
        """
        slots = self.get_faculty_timetable(faculty_id)
        q = (query or "").strip().lower()
        if not slots or not q:
            return {}

        day_match = next((d for d in DAYS if d.lower() == q), None)
        if day_match is None:
            day_match = next((s.day for s in slots if s.day.lower() == q), None)

        if day_match is not None:
            same_day = [s for s in slots if s.day.lower() == day_match.lower()]
            return {day_match: same_day} if same_day else {}

        results: Dict[str, List[TimeSlotRecord]] = {}
        for s in slots:
            hay = f"{s.subject} {s.class_name} {s.time} {s.day}".lower()
            if q in hay:
                results.setdefault(s.day, []).append(s)

        def day_order(day: str) -> int:
            upper = day.upper()
            return DAYS.index(upper) if upper in DAYS else len(DAYS)

        return {day: results[day] for day in sorted(results, key=day_order)}
