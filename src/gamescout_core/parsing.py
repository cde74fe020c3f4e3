"""
Lenient field parsers used while normalizing upstream payloads.

None of these raise on bad input: a malformed field degrades to its default
(zero, None, empty) instead of aborting the whole response.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation, Overflow, localcontext
from typing import Any

from bs4 import BeautifulSoup

ZERO = Decimal(0)
HUNDRED = Decimal(100)

BR_REGEX = re.compile(r"<br\s*/?>", re.IGNORECASE)
P_CLOSE_REGEX = re.compile(r"</p\s*>", re.IGNORECASE)
P_OPEN_REGEX = re.compile(r"<p(\s[^>]*)?>", re.IGNORECASE)


def parse_price(value: Any) -> Decimal:
    """Parses an upstream price string into an exact Decimal, zero when unparseable."""
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    return price if price.is_finite() else ZERO


def parse_date(value: Any) -> date | None:
    """Parses a YYYY-MM-DD release date; anything else yields None."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def parse_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def compute_savings(price: Decimal, normal_price: Decimal) -> Decimal:
    """
    Percentage saved relative to the normal price, clamped to [0, 100].
    A non-positive normal price means there is nothing to compare against: 0.
    """
    if normal_price <= ZERO:
        return ZERO
    try:
        with localcontext() as ctx:
            ctx.traps[Overflow] = True
            savings = (normal_price - price) / normal_price * HUNDRED
    except (Overflow, InvalidOperation):
        return ZERO
    return min(max(savings, ZERO), HUNDRED)


def strip_html(html: str | None) -> str:
    """
    Turns a formatted description into plain text.

    Line breaks and paragraph ends are converted before any other tag is
    removed, otherwise the line/paragraph structure would be lost.
    """
    if not html or not html.strip():
        return ""
    text = BR_REGEX.sub("\n", html)
    text = P_CLOSE_REGEX.sub("\n\n", text)
    text = P_OPEN_REGEX.sub("", text)
    # get_text() drops the remaining tags and decodes entities
    text = BeautifulSoup(text, "html.parser").get_text()
    return text.strip()


def flatten_names(entries: Any, wrapper: str | None = None) -> tuple[str, ...]:
    """
    Flattens [{"name": ...}] or [{wrapper: {"name": ...}}] into a tuple of names.
    Entries with a missing or blank name are skipped; order and duplicates are kept.
    """
    names = []
    for entry in entries if isinstance(entries, list) else []:
        if not isinstance(entry, dict):
            continue
        if wrapper:
            entry = entry.get(wrapper)
            if not isinstance(entry, dict):
                continue
        name = entry.get("name")
        if isinstance(name, str) and name.strip():
            names.append(name)
    return tuple(names)
