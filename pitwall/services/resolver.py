"""
Driver matching for pasted result rows.

Raw names arrive in whatever shape the timing page used ("Norris",
"Lando Norris", "lando-norris"). Stages run in order over the whole roster
and the first hit wins, so roster order decides between ambiguous names.
"""
import logging
import re
from typing import Iterable, Optional, Tuple

from pitwall.models.roster import Driver

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    return re.sub(r"\s+", " ", name or "").strip().lower()


def match_driver(raw_name: str, roster: Iterable[Driver]) -> Tuple[Optional[Driver], str]:
    """Returns (Driver or None, match_method)."""
    clean = normalize_name(raw_name)
    drivers = list(roster)
    if not clean:
        return None, "empty"

    # 1. Last name anywhere in the raw text
    for d in drivers:
        last = normalize_name(d.last_name)
        if last and last in clean:
            return d, "last_name"

    # 2. Full name, either direction
    for d in drivers:
        full = normalize_name(f"{d.first_name} {d.last_name}")
        if full and (full in clean or clean in full):
            return d, "full_name"

    # 3. Slug with hyphens as spaces
    for d in drivers:
        slug = (d.slug or "").replace("-", " ").lower()
        if slug and slug in clean:
            return d, "slug"

    return None, "no_match"


def resolve_driver(raw_name: str, roster: Iterable[Driver]) -> Optional[int]:
    driver, method = match_driver(raw_name, roster)
    if driver is None:
        logger.warning(f"No driver match for {raw_name!r} ({method})")
        return None
    logger.debug(f"Matched {raw_name!r} -> {driver.full_name} ({method})")
    return driver.id
