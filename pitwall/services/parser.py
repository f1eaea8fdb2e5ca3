"""
Result table parser.

Turns an HTML fragment pasted from a timing page into raw rows. Column
detection is driven by header text, so reordered or missing columns only
leave the matching fields empty.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Sequence

from bs4 import BeautifulSoup

from pitwall.core.errors import ParseFailure
from pitwall.schemas.results import ParsedRow, ParsedTable

logger = logging.getLogger(__name__)

# field -> header substrings, first header containing any of them wins
COLUMN_CANDIDATES: Dict[str, Sequence[str]] = {
    "pos": ("pos",),
    "car_number": ("no",),
    "driver_name_raw": ("driver",),
    "team_name_raw": ("team", "car"),
    "laps": ("laps",),
    "time": ("time", "gap", "retired"),
    "points_raw": ("pts",),
    "q1": ("q1",),
    "q2": ("q2",),
    "q3": ("q3",),
}

_ATTACHED_CODE = re.compile(r"([a-z])([A-Z]{3})$")   # "NorrisNOR"
_DETACHED_CODE = re.compile(r"\s+[A-Z]{3}$")         # "Lando Norris NOR"


def classify_table(headers: List[str]) -> str:
    if "q1" in headers and "q2" in headers:
        return "qualifying"
    if "pts" in headers or "pts." in headers:
        return "race"
    if "time/gap" in headers or "gap" in headers:
        return "practice"
    if "time" in headers and "laps" not in headers:
        return "grid"
    return "unknown"


def column_index(headers: List[str], candidates: Sequence[str]) -> int:
    for i, h in enumerate(headers):
        if any(c in h for c in candidates):
            return i
    return -1


def clean_driver_name(raw: str) -> str:
    """Drop the three-letter timing code from the end of a driver cell."""
    name = _ATTACHED_CODE.sub(r"\1", raw)
    return _DETACHED_CODE.sub("", name)


def parse_result_table(html: str) -> ParsedTable | ParseFailure:
    soup = BeautifulSoup(html or "", "html.parser")
    table = soup.find("table")
    if table is None:
        logger.info("No <table> found in pasted result")
        return ParseFailure("No table recognized")

    headers = [th.get_text(strip=True).lower() for th in table.find_all("th")]
    table_kind = classify_table(headers)
    indices = {field: column_index(headers, cands) for field, cands in COLUMN_CANDIDATES.items()}

    rows: List[ParsedRow] = []
    for tr in table.find_all("tr"):
        cells = tr.find_all("td")
        if not cells:
            continue

        def text_at(idx: int) -> str:
            if 0 <= idx < len(cells):
                return cells[idx].get_text(strip=True)
            return ""

        values = {field: text_at(idx) for field, idx in indices.items()}
        values["driver_name_raw"] = clean_driver_name(values["driver_name_raw"])
        row = ParsedRow(**values)
        if row.pos or row.driver_name_raw:
            rows.append(row)

    if not rows:
        logger.info("Table of kind %s had no usable rows", table_kind)
        return ParseFailure("Table contained no result rows")

    logger.debug("Parsed %d rows from %s table", len(rows), table_kind)
    return ParsedTable(table_kind=table_kind, rows=rows)
