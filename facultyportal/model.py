"""
Central data model definitions used across the project.

Upload documents and exports use camelCase keys (``isLab``, ``timeSlots`` ...),
so every record offers ``to_dict()`` and the input records offer ``from_dict()``.
Inside Python the attributes are snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class SlotAssignment:
    """
    One (day, time) cell of a class timetable.
    """

    subject: str = ""
    faculty: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SlotAssignment":
        return cls(
            subject=str(data.get("subject") or ""),
            faculty=str(data.get("faculty") or ""),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"subject": self.subject, "faculty": self.faculty}


@dataclass
class FacultyAssignment:
    """
    Declares which faculty teach a subject for a class (upload input only).
    """

    subject: str
    faculty: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FacultyAssignment":
        return cls(
            subject=str(data.get("subject") or ""),
            faculty=str(data.get("faculty") or ""),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"subject": self.subject, "faculty": self.faculty}


@dataclass
class ClassSchedule:
    """
    Weekly schedule of one class: day -> time label -> SlotAssignment.
    """

    name: str
    timetable: Dict[str, Dict[str, SlotAssignment]] = field(default_factory=dict)
    faculty_assignments: List[FacultyAssignment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "facultyAssignments": [a.to_dict() for a in self.faculty_assignments],
            "timetable": {
                day: {time: cell.to_dict() for time, cell in slots.items()}
                for day, slots in self.timetable.items()
            },
        }


@dataclass
class SubAssignment:
    """
    One section of a (possibly split) timetable cell after slot parsing.
    """

    subject: str
    faculty: str
    batch: Optional[str] = None
    is_lab: bool = False


@dataclass
class TimeSlotRecord:
    """
    One hour owned by one faculty member.

    lab_hour / total_lab_hours are only set for lab records.
    """

    day: str
    time: str
    subject: str
    class_name: str
    is_lab: bool = False
    lab_hour: Optional[int] = None
    total_lab_hours: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TimeSlotRecord":
        return cls(
            day=str(data.get("day", "")),
            time=str(data.get("time", "")),
            subject=str(data.get("subject", "")),
            class_name=str(data.get("class", data.get("class_name", ""))),
            is_lab=bool(data.get("isLab", data.get("is_lab", False))),
            lab_hour=data.get("labHour", data.get("lab_hour")),
            total_lab_hours=data.get("totalLabHours", data.get("total_lab_hours")),
        )

    def matches(self, other: "TimeSlotRecord") -> bool:
        """
        Slot identity used by swap requests: same day, time and subject.
        """
        return self.day == other.day and self.time == other.time and self.subject == other.subject

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "day": self.day,
            "time": self.time,
            "subject": self.subject,
            "class": self.class_name,
            "isLab": self.is_lab,
        }
        if self.is_lab:
            out["labHour"] = self.lab_hour
            out["totalLabHours"] = self.total_lab_hours
        return out


@dataclass
class FacultyRecord:
    id: str
    name: str
    email: str
    password: str
    subjects: List[str] = field(default_factory=list)
    time_slots: List[TimeSlotRecord] = field(default_factory=list)

    def to_dict(self, include_timetable: bool = True) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "subjects": list(self.subjects),
        }
        if include_timetable:
            out["timeSlots"] = [s.to_dict() for s in self.time_slots]
        return out


PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"


@dataclass
class SwapRequest:
    """
    A faculty-initiated request to hand over (or exchange) one period.
    """

    id: str
    requesting_faculty_id: str
    requested_faculty_id: str
    time_slot: TimeSlotRecord
    proposed_time_slot: Optional[TimeSlotRecord]
    reason: str
    status: str
    created_at: datetime

    def involves(self, faculty_id: str) -> bool:
        return faculty_id in (self.requesting_faculty_id, self.requested_faculty_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "requestingFacultyId": self.requesting_faculty_id,
            "requestedFacultyId": self.requested_faculty_id,
            "timeSlot": self.time_slot.to_dict(),
            "proposedTimeSlot": self.proposed_time_slot.to_dict() if self.proposed_time_slot else None,
            "reason": self.reason,
            "status": self.status,
            "createdAt": self.created_at.isoformat(),
        }
