"""
Clash detection.

A clash is one faculty member holding two time-slot records on the same day
and time label (e.g. two classes booked into the same hour, or a swap that
moved a slot onto an occupied hour).
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Tuple

from facultyportal.model import FacultyRecord, TimeSlotRecord

Clash = Tuple[FacultyRecord, TimeSlotRecord, TimeSlotRecord]


def find_clashes(faculties: List[FacultyRecord]) -> List[Clash]:
    """
    Return (faculty, slot_a, slot_b) for every clashing pair, each pair once.
    """
    clashes: List[Clash] = []

    for faculty in faculties:
        by_hour: Dict[Tuple[str, str], List[TimeSlotRecord]] = defaultdict(list)
        for slot in faculty.time_slots:
            by_hour[(slot.day, slot.time)].append(slot)

        for slots in by_hour.values():
            for i in range(len(slots)):
                for j in range(i + 1, len(slots)):
                    clashes.append((faculty, slots[i], slots[j]))

    return clashes
