"""
Lab expansion (one parsed cell -> the hours it occupies).

Labs run up to MAX_LAB_HOURS consecutive slots of the fixed daily grid and never
wrap past the last slot: a lab starting at 3:00-4:00 is a 1-hour block.
"""

from __future__ import annotations

import logging
from typing import List

from facultyportal.model import TimeSlotRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Daily grid
# ---------------------------------------------------------------------------

TIME_SLOTS = [
    "9:00-10:00",
    "10:00-11:00",
    "11:10-12:10",
    "1:00-2:00",
    "2:00-3:00",
    "3:00-4:00",
]

DAYS = ["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY"]

MAX_LAB_HOURS = 3


def lab_block_length(start_index: int) -> int:
    return min(MAX_LAB_HOURS, len(TIME_SLOTS) - start_index)


def expand_slot(
    day: str,
    start_time: str,
    subject: str,
    is_lab: bool,
    class_name: str = "",
) -> List[TimeSlotRecord]:
    """
    Produce the TimeSlotRecords for one faculty member's share of a cell.

    Regular classes give one record at start_time. Labs give one record per
    hour, numbered from 1. A lab whose start_time is not on the grid gives
    no records.
    """
    if not is_lab:
        return [TimeSlotRecord(day=day, time=start_time, subject=subject, class_name=class_name)]

    try:
        start = TIME_SLOTS.index(start_time)
    except ValueError:
        logger.warning("Lab %r of class %r starts off-grid at %r on %s; skipped", subject, class_name, start_time, day)
        return []

    hours = lab_block_length(start)
    return [
        TimeSlotRecord(
            day=day,
            time=TIME_SLOTS[start + hour],
            subject=subject,
            class_name=class_name,
            is_lab=True,
            lab_hour=hour + 1,
            total_lab_hours=hours,
        )
        for hour in range(hours)
    ]
