from __future__ import annotations

from collections import defaultdict
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from facultyportal.auth import ADMIN, InvalidCredentials, PortalUser, login
from facultyportal.cli import slot_line, slot_sort_key
from facultyportal.clashes import find_clashes
from facultyportal.document import DocumentError, read_source
from facultyportal.labs import DAYS, TIME_SLOTS
from facultyportal.model import ACCEPTED, PENDING, REJECTED, SwapRequest, TimeSlotRecord
from facultyportal.sample import sample_document
from facultyportal.storage import export_faculties
from facultyportal.store import TimetableStore
from facultyportal.swaps import SwapCoordinator

console = Console()


def _println(msg: str = "") -> None:
    console.print(msg)


def _prompt(msg: str, password: bool = False) -> str:
    return console.input(msg, markup=False, password=password)


def _pick(count: int, msg: str) -> Optional[int]:
    """
    Ask for a 1-based number. Returns a 0-based index or None (blank / invalid).
    """
    pick = _prompt(msg).strip()
    if not pick:
        return None
    if not pick.isdigit():
        _println("Not a number.")
        return None
    i = int(pick)
    if not (1 <= i <= count):
        _println("Out of range.")
        return None
    return i - 1


def _faculty_name(store: TimetableStore, faculty_id: str) -> str:
    f = store.get_faculty_by_id(faculty_id)
    return f.name if f else faculty_id


def _slot_label(slot: Optional[TimeSlotRecord]) -> str:
    if slot is None:
        return "-"
    return f"{slot.day} {slot.time} {slot.subject}"


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_timetable(slots: list[TimeSlotRecord], title: str = "") -> Table:
    """
    Weekly grid: one row per day, one column per grid slot.
    """
    table = Table(title=title or None, box=box.SIMPLE, show_lines=True)
    table.add_column("Day", style="bold")
    for t in TIME_SLOTS:
        table.add_column(t)

    cells: dict[tuple[str, str], list[str]] = defaultdict(list)
    off_grid: list[TimeSlotRecord] = []
    for s in slots:
        if s.day.upper() in DAYS and s.time in TIME_SLOTS:
            text = f"[bold cyan]{s.subject}[/]\n{s.class_name}"
            if s.is_lab:
                text += f"\n[green]lab {s.lab_hour}/{s.total_lab_hours}[/]"
            cells[(s.day.upper(), s.time)].append(text)
        else:
            off_grid.append(s)

    for day in DAYS:
        table.add_row(day.title(), *["\n".join(cells.get((day, t), [])) for t in TIME_SLOTS])

    for s in off_grid:
        table.caption = (table.caption or "") + f"{s.day} {slot_line(s)}\n"

    return table


def _requests_table(store: TimetableStore, requests: list[SwapRequest], title: str) -> Table:
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Slot")
    table.add_column("Offered")
    table.add_column("Reason")
    table.add_column("Status")

    colors = {PENDING: "yellow", ACCEPTED: "green", REJECTED: "red"}
    for i, r in enumerate(requests, start=1):
        table.add_row(
            str(i),
            _faculty_name(store, r.requesting_faculty_id),
            _faculty_name(store, r.requested_faculty_id),
            _slot_label(r.time_slot),
            _slot_label(r.proposed_time_slot),
            r.reason,
            f"[{colors.get(r.status, 'white')}]{r.status}[/]",
        )
    return table


# ---------------------------------------------------------------------------
# Shared flows
# ---------------------------------------------------------------------------


def _flow_upload(store: TimetableStore) -> None:
    source = _prompt("Document path or URL (.json/.html) [blank = back]: ").strip()
    if not source:
        return

    try:
        data = read_source(source)
    except DocumentError as e:
        _println(f"[red]Upload failed:[/] {e}")
        return

    if store.ingest(data):
        _println(
            f"Processed {len(store.get_all_faculties())} faculty members "
            f"and {len(store.get_all_classes())} classes."
        )
    else:
        _println("[red]Invalid data format: missing classes array.[/]")


def _flow_decide(store: TimetableStore, swaps: SwapCoordinator, requests: list[SwapRequest]) -> None:
    pending = [r for r in requests if r.status == PENDING]
    if not pending:
        return

    console.print(_requests_table(store, pending, "Pending requests"))
    idx = _pick(len(pending), "Select request to decide [blank = back]: ")
    if idx is None:
        return

    answer = _prompt("[a]ccept / [r]eject: ").strip().lower()
    if answer.startswith("a"):
        status = ACCEPTED
    elif answer.startswith("r"):
        status = REJECTED
    else:
        _println("Nothing changed.")
        return

    updated = swaps.update_swap_request_status(pending[idx].id, status)
    if updated is not None:
        _println(f"Request {updated.id} {updated.status}.")


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


def _flow_faculties(store: TimetableStore) -> None:
    query = _prompt("Search by name, email or subject [blank = all]: ").strip()
    matches = store.search_faculties(query)
    if not matches:
        _println("No results.")
        return

    table = Table(title=f"Faculty accounts ({len(matches)})", box=box.SIMPLE)
    table.add_column("Id")
    table.add_column("Name", style="bold")
    table.add_column("Email", style="cyan")
    table.add_column("Password", style="magenta")
    table.add_column("Subjects")
    table.add_column("Slots", justify="right")
    for f in matches:
        table.add_row(f.id, f.name, f.email, f.password, ", ".join(f.subjects), str(len(f.time_slots)))
    console.print(table)


def _flow_view_faculty(store: TimetableStore) -> None:
    faculties = store.get_all_faculties()
    if not faculties:
        _println("No faculty loaded.")
        return

    for i, f in enumerate(faculties, start=1):
        _println(f"{i}) {f.name} | {f.email}")
    idx = _pick(len(faculties), "Select faculty [blank = back]: ")
    if idx is None:
        return

    f = faculties[idx]
    console.print(render_timetable(f.time_slots, title=f"{f.name} ({f.id})"))


def _flow_admin_requests(store: TimetableStore, swaps: SwapCoordinator) -> None:
    status = _prompt("Filter by status (all/pending/accepted/rejected) [all]: ").strip().lower() or "all"
    requests = swaps.list_swap_requests(status=status)
    if not requests:
        _println("No swap requests.")
        return

    console.print(_requests_table(store, requests, f"Swap requests ({status})"))
    _flow_decide(store, swaps, requests)


def _flow_clashes(store: TimetableStore) -> None:
    clashes = find_clashes(store.get_all_faculties())
    if not clashes:
        _println("No clashes found.")
        return

    table = Table(title=f"Clashes ({len(clashes)})", box=box.SIMPLE)
    table.add_column("Faculty", style="bold")
    table.add_column("When")
    table.add_column("Slot A")
    table.add_column("Slot B")
    for f, a, b in clashes:
        table.add_row(f.name, f"{a.day} {a.time}", f"{a.subject} ({a.class_name})", f"{b.subject} ({b.class_name})")
    console.print(table)


def _flow_export(store: TimetableStore) -> None:
    out = _prompt("Output file [faculty_roster.json]: ").strip() or "faculty_roster.json"
    n = export_faculties(store.get_all_faculties(), out)
    _println(f"Exported {n} faculty members to {out}")


def _admin_menu(store: TimetableStore, swaps: SwapCoordinator) -> None:
    while True:
        choice = _prompt(
            "\n[1] Upload timetable document\n"
            "[2] Faculty accounts\n"
            "[3] View faculty timetable\n"
            "[4] Swap requests\n"
            "[5] Show clashes\n"
            "[6] Export roster\n"
            "[0] Log out\n"
            "Select: "
        ).strip()

        if choice == "0":
            return
        if choice == "1":
            _flow_upload(store)
        elif choice == "2":
            _flow_faculties(store)
        elif choice == "3":
            _flow_view_faculty(store)
        elif choice == "4":
            _flow_admin_requests(store, swaps)
        elif choice == "5":
            _flow_clashes(store)
        elif choice == "6":
            _flow_export(store)
        else:
            _println("Invalid choice.")


# ---------------------------------------------------------------------------
# Faculty
# ---------------------------------------------------------------------------


def _flow_ask(store: TimetableStore, user: PortalUser) -> None:
    while True:
        query = _prompt("Ask about a day or course (e.g. 'Monday', 'OOPJ') [blank = back]: ").strip()
        if not query:
            return

        results = store.search_timetable(user.id, query)
        if not results:
            _println("I couldn't find any schedule matching your query.")
            continue

        _println("Here's what I found in your schedule:")
        for day, slots in results.items():
            _println(f"[bold]{day}[/]")
            for s in sorted(slots, key=slot_sort_key):
                _println(f"  - {slot_line(s)}")


def _flow_request_swap(store: TimetableStore, swaps: SwapCoordinator, user: PortalUser) -> None:
    own = sorted(store.get_faculty_timetable(user.id), key=slot_sort_key)
    if not own:
        _println("You have no time slots.")
        return

    for i, s in enumerate(own, start=1):
        _println(f"{i}) {s.day} | {slot_line(s)}")
    idx = _pick(len(own), "Slot to give up [blank = back]: ")
    if idx is None:
        return
    slot = own[idx]

    others = [f for f in store.get_all_faculties() if f.id != user.id]
    for i, f in enumerate(others, start=1):
        _println(f"{i}) {f.name} | {', '.join(f.subjects)}")
    fidx = _pick(len(others), "Faculty to ask [blank = back]: ")
    if fidx is None:
        return
    target = others[fidx]

    proposed = None
    theirs = sorted(target.time_slots, key=slot_sort_key)
    if theirs:
        for i, s in enumerate(theirs, start=1):
            _println(f"{i}) {s.day} | {slot_line(s)}")
        pidx = _pick(len(theirs), "Slot to take in exchange [blank = none]: ")
        if pidx is not None:
            proposed = theirs[pidx]

    reason = _prompt("Reason: ").strip()
    request = swaps.create_swap_request(user.id, target.id, slot, proposed, reason)
    _println(f"Swap request {request.id} sent to {target.name}.")


def _flow_incoming(store: TimetableStore, swaps: SwapCoordinator, user: PortalUser) -> None:
    requests = swaps.incoming_requests(user.id)
    if not requests:
        _println("No incoming requests.")
        return

    console.print(_requests_table(store, requests, "Incoming requests"))
    _flow_decide(store, swaps, requests)


def _faculty_menu(store: TimetableStore, swaps: SwapCoordinator, user: PortalUser) -> None:
    while True:
        incoming = [r for r in swaps.incoming_requests(user.id) if r.status == PENDING]
        choice = _prompt(
            "\n[1] My timetable\n"
            "[2] Ask about my schedule\n"
            "[3] Request a period swap\n"
            f"[4] Incoming requests ({len(incoming)} pending)\n"
            "[5] My requests\n"
            "[0] Log out\n"
            "Select: "
        ).strip()

        if choice == "0":
            return
        if choice == "1":
            console.print(render_timetable(store.get_faculty_timetable(user.id), title=user.name))
        elif choice == "2":
            _flow_ask(store, user)
        elif choice == "3":
            _flow_request_swap(store, swaps, user)
        elif choice == "4":
            _flow_incoming(store, swaps, user)
        elif choice == "5":
            mine = swaps.outgoing_requests(user.id)
            if mine:
                console.print(_requests_table(store, mine, "My requests"))
            else:
                _println("No requests sent.")
        else:
            _println("Invalid choice.")


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


def run_interactive(document: Optional[str] = None) -> int:
    """
    Login loop. Admins and faculty share one in-memory store and swap list
    for the lifetime of the session.
    """
    store = TimetableStore()
    swaps = SwapCoordinator(store)

    try:
        data = read_source(document) if document else sample_document()
    except DocumentError as e:
        _println(f"[red]Cannot read document:[/] {e}")
        return 1

    if not store.ingest(data):
        _println("[yellow]Document has no classes; log in as admin to upload one.[/]")

    while True:
        _println("\n=== Faculty Timetable Portal ===")
        _println(f"Faculty loaded: {len(store.get_all_faculties())} | Swap requests: {len(swaps.list_swap_requests())}")

        identifier = _prompt("Email or admin username [blank = exit]: ").strip()
        if not identifier:
            _println("Bye.")
            return 0
        password = _prompt("Password: ", password=True).strip()

        try:
            user = login(store, identifier, password)
        except InvalidCredentials:
            _println("[red]Invalid credentials.[/]")
            continue

        _println(f"Welcome, [bold]{user.name}[/]")
        if user.role == ADMIN:
            _admin_menu(store, swaps)
        else:
            _faculty_menu(store, swaps, user)
