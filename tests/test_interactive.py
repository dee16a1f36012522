"""
Tests for the interactive portal session.

Prompts are scripted and console output is captured, so the menus run
without a terminal.
"""

import io
import unittest
from unittest import mock

from rich.console import Console

from facultyportal.interactive import render_timetable, run_interactive
from facultyportal.model import TimeSlotRecord


def _session(answers: list[str]) -> tuple[int, str]:
    buf = io.StringIO()
    console = Console(file=buf, width=240, color_system=None)
    with mock.patch("facultyportal.interactive.console", console), mock.patch(
        "facultyportal.interactive._prompt", side_effect=answers
    ):
        code = run_interactive(None)
    return code, buf.getvalue()


class TestRenderTimetable(unittest.TestCase):
    def test_grid_shape(self) -> None:
        slots = [TimeSlotRecord(day="MONDAY", time="9:00-10:00", subject="DM", class_name="CSE-A")]
        table = render_timetable(slots, title="Test")
        self.assertEqual(len(table.columns), 7)
        self.assertEqual(table.row_count, 6)


class TestSession(unittest.TestCase):
    def test_invalid_login_then_exit(self) -> None:
        code, out = _session(["admin", "wrong", ""])
        self.assertEqual(code, 0)
        self.assertIn("Invalid credentials", out)

    def test_admin_lists_faculty(self) -> None:
        code, out = _session(["admin", "admin123", "2", "jyothi", "0", ""])
        self.assertEqual(code, 0)
        self.assertIn("mrs..a..jyothi@faculty.edu", out)

    def test_swap_request_and_accept(self) -> None:
        answers = [
            # Pallavi asks Lalitha to take her Monday 9:00 DM class
            "mrs..r..pallavi.reddy@faculty.edu", "reddy", "3", "1", "6", "", "conference", "0",
            # Lalitha accepts
            "mrs..m..lalitha@faculty.edu", "lalitha", "4", "1", "a", "0",
            "",
        ]
        code, out = _session(answers)
        self.assertEqual(code, 0)
        self.assertIn("sent to Mrs. M. Lalitha", out)
        self.assertIn("accepted.", out)


if __name__ == "__main__":
    unittest.main()
