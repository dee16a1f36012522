"""
Reading uploaded timetable documents.

Supported sources:
- .json files in the upload shape {"classes": [...]}
- .html / .htm files (a Word timetable saved as "Web Page")
- http(s) URLs pointing at either of the above

HTML layout (one block per class):

    <h2>CSE-A</h2>
    <table>                                 weekly grid
      <tr><td>Day</td><td>9:00-10:00</td>...</tr>
      <tr><td>MONDAY</td><td>DM<br>Mrs. R. Pallavi Reddy</td>...</tr>
    </table>
    <table>                                 faculty assignments
      <tr><td>Subject</td><td>Faculty</td></tr>
      <tr><td>DM</td><td>Mrs. R. Pallavi Reddy</td></tr>
    </table>

In a grid cell the first text line is the subject, the remaining lines are the faculty.
A merged cell (colspan) sits on its first time column; the columns it spans are left empty.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from bs4 import BeautifulSoup, Tag

from facultyportal.config import get_settings


class DocumentError(Exception):
    """
    The document could not be read or decoded.
    """


# ---------------------------------------------------------------------------
# HTML helpers
# ---------------------------------------------------------------------------


def _row_texts(row: Tag) -> List[str]:
    return [cell.get_text("\n", strip=True) for cell in row.find_all(["td", "th"])]


def _colspan(cell: Tag) -> int:
    try:
        return max(1, int(cell.get("colspan", 1)))
    except (TypeError, ValueError):
        return 1


def _read_grid(table: Tag) -> Dict[str, Dict[str, Dict[str, str]]]:
    rows = table.find_all("tr")
    times = _row_texts(rows[0])[1:]

    grid: Dict[str, Dict[str, Dict[str, str]]] = {}
    for row in rows[1:]:
        cells = row.find_all(["td", "th"])
        if not cells:
            continue
        day = cells[0].get_text(strip=True).upper()
        if not day:
            continue

        slots: Dict[str, Dict[str, str]] = {}
        col = 0
        for cell in cells[1:]:
            if col >= len(times):
                break
            lines = [line.strip() for line in cell.get_text("\n", strip=True).splitlines() if line.strip()]
            subject = lines[0] if lines else ""
            faculty = ", ".join(lines[1:])
            slots[times[col].strip()] = {"subject": subject, "faculty": faculty}

            # A merged cell covers the next columns; the lab expander fills those hours.
            span = _colspan(cell)
            for extra in times[col + 1:col + span]:
                slots[extra.strip()] = {"subject": "", "faculty": ""}
            col += span
        grid[day] = slots

    return grid


def _read_assignments(table: Tag) -> List[Dict[str, str]]:
    out: List[Dict[str, str]] = []
    for row in table.find_all("tr")[1:]:
        cells = _row_texts(row)
        # Only rows with exactly two cells are relevant
        if len(cells) != 2 or not cells[0]:
            continue
        faculty = ", ".join(line.strip() for line in cells[1].splitlines() if line.strip())
        out.append({"subject": cells[0], "faculty": faculty})
    return out


def _table_kind(table: Tag) -> Optional[str]:
    first_row = table.find("tr")
    if first_row is None:
        return None

    header = [h.lower() for h in _row_texts(first_row)]
    if header and header[0] == "day":
        return "grid"
    if header[:2] == ["subject", "faculty"]:
        return "assignments"
    return None


def parse_html_document(html: str) -> Dict[str, Any]:
    """
    Convert an HTML timetable document into the upload shape.
    """
    soup = BeautifulSoup(html, "html.parser")

    classes: List[Dict[str, Any]] = []
    for heading in soup.find_all("h2"):
        name = heading.get_text(strip=True)
        if not name:
            continue

        cls: Dict[str, Any] = {"name": name, "facultyAssignments": [], "timetable": {}}

        for el in heading.find_all_next(["h2", "table"]):
            if el.name == "h2":
                break
            kind = _table_kind(el)
            if kind == "grid":
                cls["timetable"].update(_read_grid(el))
            elif kind == "assignments":
                cls["facultyAssignments"].extend(_read_assignments(el))

        classes.append(cls)

    return {"classes": classes}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _decode(text: str, kind: str, source: str) -> Any:
    if kind == "json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentError(f"{source}: invalid JSON ({e})") from e
    return parse_html_document(text)


def _kind_from_suffix(suffix: str) -> Optional[str]:
    suffix = suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".html", ".htm"):
        return "html"
    return None


def load_document(path: str | Path) -> Any:
    """
    Read a local timetable document.
    """
    p = Path(path)
    kind = _kind_from_suffix(p.suffix)
    if kind is None:
        raise DocumentError(f"{p}: unsupported document type {p.suffix!r} (use .json or .html)")

    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"{p}: cannot read file ({e})") from e

    return _decode(text, kind, str(p))


def fetch_document(url: str, timeout: Optional[float] = None) -> Any:
    """
    Download a timetable document.

    JSON is detected from the content type or a .json URL; everything else
    is treated as HTML.
    """
    if timeout is None:
        timeout = get_settings().http_timeout

    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise DocumentError(f"{url}: download failed ({e})") from e

    content_type = resp.headers.get("Content-Type", "").lower()
    path = url.split("?", 1)[0]
    kind = "json" if "json" in content_type or path.lower().endswith(".json") else "html"

    return _decode(resp.text, kind, url)


def read_source(source: str | Path) -> Any:
    """
    Load a document from a path or an http(s) URL.
    """
    s = str(source)
    if s.startswith(("http://", "https://")):
        return fetch_document(s)
    return load_document(s)
