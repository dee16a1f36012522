"""
Bundled development data (two classes of the CSE department).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from facultyportal.store import TimetableStore

SAMPLE_PATH = Path(__file__).resolve().parent / "data" / "sample_timetable.json"


def sample_document() -> Any:
    return json.loads(SAMPLE_PATH.read_text(encoding="utf-8"))


def load_sample_data(store: TimetableStore) -> bool:
    return store.ingest(sample_document())
