"""
Unit tests for swap requests.

State machine: pending -> accepted | rejected (final).
Accepting moves or exchanges slots in the store; failed slot lookups
leave both timetables untouched.
"""

import unittest

from facultyportal.model import TimeSlotRecord
from facultyportal.sample import load_sample_data
from facultyportal.store import TimetableStore
from facultyportal.swaps import SwapCoordinator

# faculty-1 = Mrs. R. Pallavi Reddy, faculty-7 = Mrs. M. Lalitha (see sample data)
PALLAVI_MONDAY = TimeSlotRecord(day="MONDAY", time="9:00-10:00", subject="DM", class_name="CSE-A")
LALITHA_WEDNESDAY = TimeSlotRecord(day="WEDNESDAY", time="11:10-12:10", subject="DM", class_name="CSE-B")


class TestSwapRequests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = TimetableStore()
        load_sample_data(self.store)
        self.swaps = SwapCoordinator(self.store)

    def _count(self, faculty_id: str) -> int:
        return len(self.store.get_faculty_timetable(faculty_id))

    def test_create_is_pending_for_both_parties(self) -> None:
        req = self.swaps.create_swap_request("faculty-1", "faculty-7", PALLAVI_MONDAY, None, "conference")
        self.assertTrue(req.id.startswith("swap-"))

        for fid in ("faculty-1", "faculty-7"):
            found = self.swaps.get_swap_requests_for_faculty(fid)
            self.assertEqual(len(found), 1)
            self.assertEqual(found[0].status, "pending")
            self.assertEqual(found[0].id, req.id)

        self.assertEqual(self.swaps.get_swap_requests_for_faculty("faculty-2"), [])

    def test_ids_unique(self) -> None:
        ids = {self.swaps.create_swap_request("faculty-1", "faculty-7", PALLAVI_MONDAY).id for _ in range(5)}
        self.assertEqual(len(ids), 5)

    def test_accept_without_proposal_moves_slot(self) -> None:
        n1, n7 = self._count("faculty-1"), self._count("faculty-7")
        req = self.swaps.create_swap_request("faculty-1", "faculty-7", PALLAVI_MONDAY, None, "")

        updated = self.swaps.update_swap_request_status(req.id, "accepted")
        self.assertIsNotNone(updated)
        assert updated is not None
        self.assertEqual(updated.status, "accepted")

        self.assertEqual(self._count("faculty-1"), n1 - 1)
        self.assertEqual(self._count("faculty-7"), n7 + 1)
        moved = self.store.get_faculty_timetable("faculty-7")[-1]
        self.assertEqual(moved, PALLAVI_MONDAY)

    def test_accept_with_proposal_exchanges_slots(self) -> None:
        n1, n7 = self._count("faculty-1"), self._count("faculty-7")
        req = self.swaps.create_swap_request("faculty-1", "faculty-7", PALLAVI_MONDAY, LALITHA_WEDNESDAY, "swap")
        self.swaps.update_swap_request_status(req.id, "accepted")

        pallavi = self.store.get_faculty_timetable("faculty-1")
        lalitha = self.store.get_faculty_timetable("faculty-7")
        self.assertEqual((len(pallavi), len(lalitha)), (n1, n7))
        self.assertIn(LALITHA_WEDNESDAY, pallavi)
        self.assertIn(PALLAVI_MONDAY, lalitha)
        self.assertNotIn(PALLAVI_MONDAY, pallavi)

    def test_accept_with_unmatched_proposal_changes_nothing(self) -> None:
        before = [f.to_dict() for f in self.store.get_all_faculties()]
        bogus = TimeSlotRecord(day="MONDAY", time="3:00-4:00", subject="Physics", class_name="CSE-B")
        req = self.swaps.create_swap_request("faculty-1", "faculty-7", PALLAVI_MONDAY, bogus, "")

        updated = self.swaps.update_swap_request_status(req.id, "accepted")
        assert updated is not None
        self.assertEqual(updated.status, "accepted")
        self.assertEqual([f.to_dict() for f in self.store.get_all_faculties()], before)

    def test_accept_with_unknown_requester_slot_changes_nothing(self) -> None:
        before = [f.to_dict() for f in self.store.get_all_faculties()]
        bogus = {"day": "MONDAY", "time": "3:00-4:00", "subject": "Physics", "class": "CSE-A"}
        req = self.swaps.create_swap_request("faculty-1", "faculty-7", bogus)
        self.swaps.update_swap_request_status(req.id, "accepted")
        self.assertEqual([f.to_dict() for f in self.store.get_all_faculties()], before)

    def test_reject_changes_nothing(self) -> None:
        before = [f.to_dict() for f in self.store.get_all_faculties()]
        req = self.swaps.create_swap_request("faculty-1", "faculty-7", PALLAVI_MONDAY)
        updated = self.swaps.update_swap_request_status(req.id, "rejected")
        assert updated is not None
        self.assertEqual(updated.status, "rejected")
        self.assertEqual([f.to_dict() for f in self.store.get_all_faculties()], before)

    def test_final_states_do_not_change(self) -> None:
        n1 = self._count("faculty-1")
        req = self.swaps.create_swap_request("faculty-1", "faculty-7", PALLAVI_MONDAY)
        self.swaps.update_swap_request_status(req.id, "rejected")

        again = self.swaps.update_swap_request_status(req.id, "accepted")
        assert again is not None
        self.assertEqual(again.status, "rejected")
        self.assertEqual(self._count("faculty-1"), n1)

    def test_unknown_request_returns_none(self) -> None:
        self.assertIsNone(self.swaps.update_swap_request_status("swap-0", "accepted"))

    def test_invalid_status(self) -> None:
        req = self.swaps.create_swap_request("faculty-1", "faculty-7", PALLAVI_MONDAY)
        with self.assertRaises(ValueError):
            self.swaps.update_swap_request_status(req.id, "pending")

    def test_list_filters(self) -> None:
        a = self.swaps.create_swap_request("faculty-1", "faculty-7", PALLAVI_MONDAY)
        b = self.swaps.create_swap_request("faculty-2", "faculty-1", PALLAVI_MONDAY)
        self.swaps.update_swap_request_status(b.id, "rejected")

        self.assertEqual([r.id for r in self.swaps.list_swap_requests(status="pending")], [a.id])
        self.assertEqual([r.id for r in self.swaps.list_swap_requests(faculty_id="faculty-1")], [a.id, b.id])
        self.assertEqual([r.id for r in self.swaps.list_swap_requests(status="all")], [a.id, b.id])
        self.assertEqual([r.id for r in self.swaps.incoming_requests("faculty-1")], [b.id])
        self.assertEqual([r.id for r in self.swaps.outgoing_requests("faculty-1")], [a.id])


if __name__ == "__main__":
    unittest.main()
