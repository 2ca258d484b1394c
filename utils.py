import re
from datetime import datetime
from typing import Iterable

from lang import MONTHS_MAP

RE_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
RE_DMY_DATE = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$")


def parse_amount(value: str) -> float | None:
    """
    Parses a grouped decimal string into a float.

    Args:
        value (str): Amount string (e.g. '1,234.56', '500', 'PKR 3,000').

    Returns:
        float | None: Parsed numeric value, or None if parsing fails.
    """
    if not value or not isinstance(value, str):
        return None

    # Keep only digits, dots and minus; commas are thousands separators here
    cleaned = re.sub(r"[^\d.\-]", "", value)
    if not cleaned or cleaned in {"-", ".", "-."}:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def is_iso_date(value: str) -> bool:
    return bool(value) and bool(RE_ISO_DATE.match(value))


def dmy_to_iso(date_str: str) -> str:
    """
    '01-03-2024' -> '2024-03-01' (zero-padded). Anything that is not
    DD-MM-YYYY is returned unchanged.
    """
    m = RE_DMY_DATE.match((date_str or "").strip())
    if not m:
        return date_str
    day, month, year = m.groups()
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def day_month_name_to_iso(date_str: str) -> str | None:
    """
    Parse date strings like '5 Mar 2024' or '25 July 2023'.
    Returns 'YYYY-MM-DD' or None if not recognised.
    """
    if not date_str:
        return None
    parts = date_str.strip().split()
    if len(parts) != 3:
        return None

    day, month_str, year = parts
    month_num = MONTHS_MAP.get(month_str.lower())
    if not month_num:
        return None

    try:
        return datetime(int(year), month_num, int(day)).strftime("%Y-%m-%d")
    except ValueError:
        return None


def count_indicator_hits(text: str, indicators: Iterable[str]) -> int:
    """How many indicators occur in text, checked case-sensitively and case-insensitively."""
    if not text:
        return 0
    lower = text.lower()
    return sum(1 for ind in indicators if ind in text or ind.lower() in lower)
