"""
Credential checks for the portal.

Faculty accounts are derived at ingestion time (see registry.derive_email /
derive_password). There is one admin account, configured through settings.
Session handling is left to the caller.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Optional

from facultyportal.config import Settings, get_settings
from facultyportal.model import FacultyRecord
from facultyportal.store import TimetableStore

ADMIN = "admin"
FACULTY = "faculty"


class InvalidCredentials(Exception):
    pass


@dataclass
class PortalUser:
    id: str
    name: str
    email: str
    role: str


def _same(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def validate_admin_login(username: str, password: str, settings: Optional[Settings] = None) -> bool:
    settings = settings or get_settings()
    return _same(username, settings.admin_username) and _same(password, settings.admin_password)


def validate_faculty_login(store: TimetableStore, email: str, password: str) -> Optional[FacultyRecord]:
    faculty = store.get_faculty_by_email(email.strip().lower())
    if faculty is None or not _same(password, faculty.password):
        return None
    return faculty


def login(
    store: TimetableStore,
    identifier: str,
    password: str,
    settings: Optional[Settings] = None,
) -> PortalUser:
    """
    Log in as admin (username) or faculty (email).

    Raises InvalidCredentials when neither matches.
    """
    settings = settings or get_settings()
    if validate_admin_login(identifier, password, settings):
        return PortalUser(id="admin", name="Admin User", email=settings.admin_username, role=ADMIN)

    faculty = validate_faculty_login(store, identifier, password)
    if faculty is not None:
        return PortalUser(id=faculty.id, name=faculty.name, email=faculty.email, role=FACULTY)

    raise InvalidCredentials("Invalid credentials")
