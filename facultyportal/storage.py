"""
JSON export of the faculty roster.

The admin hands the derived credentials (and optionally the full weekly
timetables) to faculty members; this writes them in the same camelCase shape
the portal uses everywhere else:

    {"faculties": [{"id": ..., "email": ..., "password": ..., "timeSlots": [...]}]}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from facultyportal.model import FacultyRecord


def export_faculties(
    faculties: Iterable[FacultyRecord],
    path: str | Path,
    include_timetable: bool = True,
) -> int:
    """
    Write the roster to path, creating parent directories. Returns the number of faculty written.
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    rows = [f.to_dict(include_timetable=include_timetable) for f in faculties]
    payload = {"faculties": rows}

    out_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return len(rows)
