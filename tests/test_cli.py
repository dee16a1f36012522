"""
Tests for CLI entry points.

These tests focus on:
- exit codes of the sub-commands
- the bundled sample data being used when no document is given
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from facultyportal.cli import main


def _run(argv: list[str]) -> tuple[int, str]:
    out = io.StringIO()
    code = None
    with redirect_stdout(out):
        try:
            main(argv)
        except SystemExit as e:
            code = e.code
    return code, out.getvalue()


class TestCLI(unittest.TestCase):
    def test_load_sample(self) -> None:
        code, out = _run(["load"])
        self.assertEqual(code, 0)
        self.assertIn("Loaded 13 faculty members from 2 classes", out)

    def test_faculties_search(self) -> None:
        code, out = _run(["faculties", "jyothi"])
        self.assertEqual(code, 0)
        self.assertIn("faculty-5 | Mrs. A. Jyothi | mrs..a..jyothi@faculty.edu", out)

    def test_timetable_by_email(self) -> None:
        code, out = _run(["timetable", "dr..t..divya.kumari@faculty.edu"])
        self.assertEqual(code, 0)
        self.assertIn("OOPJ(B1)", out)
        self.assertIn("(lab 1/3)", out)

    def test_timetable_unknown_faculty(self) -> None:
        code, _ = _run(["timetable", "faculty-999"])
        self.assertNotEqual(code, 0)

    def test_ask_requires_query(self) -> None:
        code, _ = _run(["ask", "faculty-2", " "])
        self.assertNotEqual(code, 0)

    def test_ask_day(self) -> None:
        code, out = _run(["ask", "faculty-2", "Monday"])
        self.assertEqual(code, 0)
        self.assertIn("MONDAY", out)

    def test_invalid_document(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "bad.json"
            p.write_text(json.dumps({"classes": "not-an-array"}), encoding="utf-8")
            code, out = _run(["load", "-d", str(p)])
        self.assertEqual(code, 1)
        self.assertIn("missing classes array", out)

    def test_export(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "roster.json"
            code, _ = _run(["export", str(p), "--no-timetable"])
            self.assertEqual(code, 0)
            self.assertEqual(len(json.loads(p.read_text(encoding="utf-8"))["faculties"]), 13)


if __name__ == "__main__":
    unittest.main()
