"""
Period swap requests between faculty members.

Lifecycle: pending -> accepted | rejected. Both end states are final.

Accepting a request changes the store:
- with a proposed slot: the two slots are exchanged (Exchange)
- without one: the requester's slot moves to the other faculty (Transfer)
If a slot lookup fails the request is still accepted but no timetable changes.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from facultyportal.model import ACCEPTED, PENDING, REJECTED, SwapRequest, TimeSlotRecord
from facultyportal.store import Exchange, TimetableStore, Transfer

logger = logging.getLogger(__name__)

SlotLike = Union[TimeSlotRecord, Mapping[str, Any]]


def _as_slot(slot: Optional[SlotLike]) -> Optional[TimeSlotRecord]:
    if slot is None or isinstance(slot, TimeSlotRecord):
        return slot
    return TimeSlotRecord.from_dict(slot)


class SwapCoordinator:
    def __init__(self, store: TimetableStore) -> None:
        self.store = store
        self._lock = threading.Lock()
        self._requests: List[SwapRequest] = []

    def _next_id(self) -> str:
        base = f"swap-{int(time.time() * 1000)}"
        taken = {r.id for r in self._requests}
        request_id = base
        n = 1
        while request_id in taken:
            request_id = f"{base}-{n}"
            n += 1
        return request_id

    def create_swap_request(
        self,
        requesting_faculty_id: str,
        requested_faculty_id: str,
        time_slot: SlotLike,
        proposed_time_slot: Optional[SlotLike] = None,
        reason: str = "",
    ) -> SwapRequest:
        """
        Record a new pending request. The slot is not checked against the
        requester's timetable until the request is accepted.
        """
        with self._lock:
            request = SwapRequest(
                id=self._next_id(),
                requesting_faculty_id=requesting_faculty_id,
                requested_faculty_id=requested_faculty_id,
                time_slot=_as_slot(time_slot),
                proposed_time_slot=_as_slot(proposed_time_slot),
                reason=reason,
                status=PENDING,
                created_at=datetime.now(timezone.utc),
            )
            self._requests.append(request)

        logger.info(
            "Swap request %s: %s -> %s (%s %s)",
            request.id,
            requesting_faculty_id,
            requested_faculty_id,
            request.time_slot.day,
            request.time_slot.time,
        )
        return request

    def get_swap_request(self, request_id: str) -> Optional[SwapRequest]:
        return next((r for r in self._requests if r.id == request_id), None)

    def get_swap_requests_for_faculty(self, faculty_id: str) -> List[SwapRequest]:
        return [r for r in self._requests if r.involves(faculty_id)]

    def incoming_requests(self, faculty_id: str) -> List[SwapRequest]:
        return [r for r in self._requests if r.requested_faculty_id == faculty_id]

    def outgoing_requests(self, faculty_id: str) -> List[SwapRequest]:
        return [r for r in self._requests if r.requesting_faculty_id == faculty_id]

    def list_swap_requests(self, faculty_id: Optional[str] = None, status: Optional[str] = None) -> List[SwapRequest]:
        out = list(self._requests)
        if faculty_id:
            out = [r for r in out if r.involves(faculty_id)]
        if status and status != "all":
            out = [r for r in out if r.status == status]
        return out

    def update_swap_request_status(self, request_id: str, status: str) -> Optional[SwapRequest]:
        """
        Accept or reject a request. Returns None for an unknown id.
        """
        if status not in (ACCEPTED, REJECTED):
            raise ValueError(f"Invalid swap status: {status!r}")

        with self._lock:
            request = self.get_swap_request(request_id)
            if request is None:
                logger.warning("Unknown swap request %s", request_id)
                return None

            if request.status != PENDING:
                logger.warning("Swap request %s is already %s", request_id, request.status)
                return request

            request.status = status

        if status == ACCEPTED:
            self._apply(request)

        return request

    def _apply(self, request: SwapRequest) -> None:
        if request.proposed_time_slot is not None:
            operation = Exchange(
                faculty_a_id=request.requesting_faculty_id,
                slot_a=request.time_slot,
                faculty_b_id=request.requested_faculty_id,
                slot_b=request.proposed_time_slot,
            )
        else:
            operation = Transfer(
                slot=request.time_slot,
                from_faculty_id=request.requesting_faculty_id,
                to_faculty_id=request.requested_faculty_id,
            )

        if not self.store.apply(operation):
            logger.warning("Swap request %s accepted but no timetable matched; nothing changed", request.id)
