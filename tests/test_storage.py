"""
Unit tests for the roster export.

Export contract:
- JSON schema: {"faculties": [ ... ]} with camelCase keys
- parent directories are created
"""

import json
import tempfile
import unittest
from pathlib import Path

from facultyportal.sample import load_sample_data
from facultyportal.storage import export_faculties
from facultyportal.store import TimetableStore


class TestExport(unittest.TestCase):
    def setUp(self) -> None:
        self.store = TimetableStore()
        load_sample_data(self.store)

    def test_export_with_timetable(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "nested" / "roster.json"
            n = export_faculties(self.store.get_all_faculties(), p)
            self.assertEqual(n, 13)

            data = json.loads(p.read_text(encoding="utf-8"))
            first = data["faculties"][0]
            self.assertEqual(first["id"], "faculty-1")
            self.assertEqual(first["email"], "mrs..r..pallavi.reddy@faculty.edu")
            self.assertEqual(first["password"], "reddy")
            self.assertIn("timeSlots", first)
            self.assertEqual(first["timeSlots"][0]["class"], "CSE-A")
            self.assertNotIn("labHour", first["timeSlots"][0])

    def test_export_lab_fields(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "roster.json"
            export_faculties(self.store.get_all_faculties(), p)
            data = json.loads(p.read_text(encoding="utf-8"))
            labs = [s for f in data["faculties"] for s in f["timeSlots"] if s["isLab"]]
            self.assertTrue(labs)
            self.assertTrue(all(1 <= s["labHour"] <= s["totalLabHours"] <= 3 for s in labs))

    def test_export_credentials_only(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "roster.json"
            export_faculties(self.store.get_all_faculties(), p, include_timetable=False)
            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertNotIn("timeSlots", data["faculties"][0])


if __name__ == "__main__":
    unittest.main()
