"""
CLI (Command Line Interface).

Quick terminal commands for admins and for testing, e.g.:

    facultyportal load -d timetable.json
    facultyportal faculties <text>
    facultyportal timetable <faculty id or email>
    facultyportal ask <faculty id or email> <day or text>
    facultyportal clashes
    facultyportal export <roster.json>
    facultyportal interactive

Every command reads the timetable document given with -d/--document
(path or http(s) URL); without it the bundled sample data is used.

Note:
- The interactive portal lives in facultyportal/interactive.py
- This CLI prints plain text (no rich formatting)
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from facultyportal.clashes import find_clashes
from facultyportal.config import get_settings
from facultyportal.document import DocumentError, read_source
from facultyportal.labs import DAYS, TIME_SLOTS
from facultyportal.model import FacultyRecord, TimeSlotRecord
from facultyportal.sample import sample_document
from facultyportal.storage import export_faculties
from facultyportal.store import TimetableStore


def _load_store(document: Optional[str]) -> Optional[TimetableStore]:
    """
    Read the document and ingest it into a fresh store.

    Returns None (after printing the reason) if the document cannot be used.
    """
    try:
        data = read_source(document) if document else sample_document()
    except DocumentError as e:
        print(f"Cannot read document: {e}")
        return None

    store = TimetableStore()
    if not store.ingest(data):
        print("Invalid timetable document: missing classes array.")
        return None
    return store


def _resolve_faculty(store: TimetableStore, key: str) -> Optional[FacultyRecord]:
    key = (key or "").strip()
    return store.get_faculty_by_id(key) or store.get_faculty_by_email(key.lower())


def slot_sort_key(slot: TimeSlotRecord) -> tuple[int, int, str]:
    day = slot.day.upper()
    d = DAYS.index(day) if day in DAYS else len(DAYS)
    t = TIME_SLOTS.index(slot.time) if slot.time in TIME_SLOTS else len(TIME_SLOTS)
    return (d, t, slot.time)


def slot_line(slot: TimeSlotRecord) -> str:
    bits = [slot.time, slot.subject, slot.class_name]
    if slot.is_lab:
        bits.append(f"(lab {slot.lab_hour}/{slot.total_lab_hours})")
    return " | ".join(b for b in bits if b)


def _cmd_load(args: argparse.Namespace, store: TimetableStore) -> int:
    faculties = store.get_all_faculties()
    classes = store.get_all_classes()
    n_slots = sum(len(f.time_slots) for f in faculties)
    print(f"Loaded {len(faculties)} faculty members from {len(classes)} classes ({n_slots} time slots).")
    return 0


def _cmd_faculties(args: argparse.Namespace, store: TimetableStore) -> int:
    """
    List faculty accounts, optionally filtered by name, email or subject.
    """
    matches = store.search_faculties(args.text or "")
    if not matches:
        print("No results.")
        return 0

    for f in matches:
        subjects = ", ".join(f.subjects)
        print(f"{f.id} | {f.name} | {f.email} | {subjects}")
    return 0


def _cmd_timetable(args: argparse.Namespace, store: TimetableStore) -> int:
    faculty = _resolve_faculty(store, args.faculty)
    if faculty is None:
        print(f"Unknown faculty: {args.faculty}")
        return 1

    print(f"{faculty.name} ({faculty.id})")
    if not faculty.time_slots:
        print("No time slots.")
        return 0

    current_day = None
    for slot in sorted(faculty.time_slots, key=slot_sort_key):
        if slot.day != current_day:
            current_day = slot.day
            print(f"\n{current_day}")
        print(f"  - {slot_line(slot)}")
    return 0


def _cmd_ask(args: argparse.Namespace, store: TimetableStore) -> int:
    """
    Answer a schedule question ("monday", "OOPJ", "CSE-B") for one faculty member.
    """
    faculty = _resolve_faculty(store, args.faculty)
    if faculty is None:
        print(f"Unknown faculty: {args.faculty}")
        return 1

    query = (args.query or "").strip()
    if not query:
        print("Please provide a question (a day or a course).")
        return 1

    results = store.search_timetable(faculty.id, query)
    if not results:
        print("I couldn't find any schedule matching your query.")
        return 0

    for day, slots in results.items():
        print(day)
        for slot in sorted(slots, key=slot_sort_key):
            print(f"  - {slot_line(slot)}")
    return 0


def _cmd_clashes(args: argparse.Namespace, store: TimetableStore) -> int:
    clashes = find_clashes(store.get_all_faculties())
    if not clashes:
        print("No clashes found.")
        return 0

    print(f"Clashes found: {len(clashes)}")
    for faculty, a, b in clashes:
        print(f"- {faculty.name}: {a.day} {a.time} {a.subject} ({a.class_name})  <->  {b.subject} ({b.class_name})")
    return 0


def _cmd_export(args: argparse.Namespace, store: TimetableStore) -> int:
    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .json path.")
        return 1

    n = export_faculties(store.get_all_faculties(), out_path, include_timetable=not args.no_timetable)
    print(f"Exported {n} faculty members to: {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-d", "--document", type=str, default=None, help="Timetable document (.json/.html path or URL)"
    )

    parser = argparse.ArgumentParser(prog="facultyportal", description="Faculty timetable portal CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log ingestion details")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("load", parents=[common], help="Ingest a document and show a summary")

    p_fac = sub.add_parser("faculties", parents=[common], help="List or search faculty accounts")
    p_fac.add_argument("text", type=str, nargs="?", default="", help="Search text (name, email or subject)")

    p_tt = sub.add_parser("timetable", parents=[common], help="Show one faculty member's weekly timetable")
    p_tt.add_argument("faculty", type=str, help="Faculty id (e.g. faculty-1) or email")

    p_ask = sub.add_parser("ask", parents=[common], help="Ask about a faculty member's schedule")
    p_ask.add_argument("faculty", type=str, help="Faculty id or email")
    p_ask.add_argument("query", type=str, help="A day (e.g. Monday) or course/class text")

    sub.add_parser("clashes", parents=[common], help="Show faculty double bookings")

    p_export = sub.add_parser("export", parents=[common], help="Export faculty roster to JSON")
    p_export.add_argument("out", type=str, help="Output file path (e.g. roster.json)")
    p_export.add_argument("--no-timetable", action="store_true", help="Only export credentials and subjects")

    sub.add_parser("interactive", parents=[common], help="Interactive portal session")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.INFO if args.verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "interactive":
        from facultyportal.interactive import run_interactive

        raise SystemExit(run_interactive(args.document))

    store = _load_store(args.document)
    if store is None:
        raise SystemExit(1)

    if args.command == "load":
        raise SystemExit(_cmd_load(args, store))
    if args.command == "faculties":
        raise SystemExit(_cmd_faculties(args, store))
    if args.command == "timetable":
        raise SystemExit(_cmd_timetable(args, store))
    if args.command == "ask":
        raise SystemExit(_cmd_ask(args, store))
    if args.command == "clashes":
        raise SystemExit(_cmd_clashes(args, store))
    if args.command == "export":
        raise SystemExit(_cmd_export(args, store))

    raise SystemExit(2)
