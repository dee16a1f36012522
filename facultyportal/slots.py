"""
Slot parsing (one timetable cell -> sub-assignments).

A cell holds a subject text and a comma-joined faculty text. Three shapes exist:
- regular class:  "DM"                 / "Mrs. R. Pallavi Reddy"
- single lab:     "OOPJ LAB(B1)"       / "Dr. T. Divya Kumari"
- split lab:      "OOPJ LAB/OSMP LAB"  / "A, B, C, D"

Rules:
- a split lab is only recognised when the subject contains "/" AND "LAB"
- faculty are handed out in contiguous groups of floor(count / labs);
  faculty beyond groups * floor(count / labs) are dropped
- batch tags "(B1)" / "(B2)" are found by plain substring search in any subject
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from facultyportal.model import SubAssignment

LAB_MARKER = "LAB"
BATCH_TAGS = ("B1", "B2")


def split_faculty_names(faculty_text: Optional[str]) -> List[str]:
    """
    Split a comma-joined faculty text into trimmed, non-empty names.
    """
    if not faculty_text:
        return []
    return [name.strip() for name in faculty_text.split(",") if name.strip()]


def is_lab_subject(subject: str) -> bool:
    return LAB_MARKER in subject


def extract_batch_tag(subject: str) -> Tuple[str, Optional[str]]:
    """
    Remove a "(B1)" / "(B2)" tag from a subject.

    Returns (subject_without_tag, tag) where tag is "B1", "B2" or None.
    """
    for tag in BATCH_TAGS:
        literal = f"({tag})"
        if literal in subject:
            return subject.replace(literal, "", 1).strip(), tag
    return subject, None


def recorded_subject(sub: SubAssignment) -> str:
    """
    Subject text stored on a TimeSlotRecord.

    Tagged subjects drop a trailing LAB marker (the record carries is_lab)
    and get the tag appended: "OOPJ LAB(B1)" -> "OOPJ(B1)".
    """
    if not sub.batch:
        return sub.subject

    base = sub.subject
    if base.endswith(" " + LAB_MARKER):
        base = base[: -len(LAB_MARKER)].rstrip()
    return f"{base}({sub.batch})"


def _split_lab(subject_text: str, faculty_text: str) -> List[Tuple[str, str]]:
    subjects = [s.strip() for s in subject_text.split("/")]
    faculty = [f.strip() for f in faculty_text.split(",")]

    per_lab = len(faculty) // len(subjects)

    out: List[Tuple[str, str]] = []
    for i, lab_subject in enumerate(subjects):
        group = faculty[i * per_lab : (i + 1) * per_lab]
        out.append((lab_subject, ", ".join(group)))
    return out


def parse_slot(subject_text: Optional[str], faculty_text: Optional[str]) -> List[SubAssignment]:
    """
    Parse one timetable cell into an ordered list of sub-assignments.

    An empty subject yields an empty list.
    """
    subject_text = (subject_text or "").strip()
    faculty_text = faculty_text or ""
    if not subject_text:
        return []

    if "/" in subject_text and LAB_MARKER in subject_text:
        pieces = _split_lab(subject_text, faculty_text)
    else:
        pieces = [(subject_text, faculty_text)]

    result: List[SubAssignment] = []
    for subject, faculty in pieces:
        is_lab = is_lab_subject(subject)
        stripped, batch = extract_batch_tag(subject)
        result.append(SubAssignment(subject=stripped, faculty=faculty, batch=batch, is_lab=is_lab))

    return result
