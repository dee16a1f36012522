"""
Unit tests for clash detection.

A clash is one faculty member with two records on the same day and time label.
"""

import unittest

from facultyportal.clashes import find_clashes
from facultyportal.model import FacultyRecord, TimeSlotRecord
from facultyportal.sample import load_sample_data
from facultyportal.store import TimetableStore


def _faculty(*slots: TimeSlotRecord) -> FacultyRecord:
    return FacultyRecord(id="faculty-1", name="A B", email="a.b@faculty.edu", password="b", time_slots=list(slots))


class TestClashes(unittest.TestCase):
    def test_same_hour_two_classes(self) -> None:
        a = TimeSlotRecord(day="MONDAY", time="9:00-10:00", subject="DM", class_name="CSE-A")
        b = TimeSlotRecord(day="MONDAY", time="9:00-10:00", subject="DM", class_name="CSE-B")
        clashes = find_clashes([_faculty(a, b)])
        self.assertEqual(len(clashes), 1)
        self.assertEqual(clashes[0][1:], (a, b))

    def test_different_day_no_clash(self) -> None:
        a = TimeSlotRecord(day="MONDAY", time="9:00-10:00", subject="DM", class_name="CSE-A")
        b = TimeSlotRecord(day="TUESDAY", time="9:00-10:00", subject="DM", class_name="CSE-B")
        self.assertEqual(find_clashes([_faculty(a, b)]), [])

    def test_sample_data_has_no_clashes(self) -> None:
        store = TimetableStore()
        load_sample_data(store)
        self.assertEqual(find_clashes(store.get_all_faculties()), [])


if __name__ == "__main__":
    unittest.main()
