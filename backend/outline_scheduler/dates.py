import re
from datetime import date
from typing import Optional

# ============================================================
# MONTH NAMES
# ============================================================
MONTHS = {
    "january": 1,
    "jan": 1,
    "february": 2,
    "feb": 2,
    "march": 3,
    "mar": 3,
    "april": 4,
    "apr": 4,
    "may": 5,
    "june": 6,
    "jun": 6,
    "july": 7,
    "jul": 7,
    "august": 8,
    "aug": 8,
    "september": 9,
    "sept": 9,
    "sep": 9,
    "october": 10,
    "oct": 10,
    "november": 11,
    "nov": 11,
    "december": 12,
    "dec": 12,
}

# Full names come first so "March" is never cut down to "Mar".
MONTH_PATTERN = (
    r"(?:January|February|March|April|May|June|July|August|September|October|"
    r"November|December|Jan\.?|Feb\.?|Mar\.?|Apr\.?|May\.?|Jun\.?|Jul\.?|"
    r"Aug\.?|Sept\.?|Sep\.?|Oct\.?|Nov\.?|Dec\.?)"
)
ORDINAL = r"(?:st|nd|rd|th)?"

ISO_RE = re.compile(r"(\d{4}-\d{2}-\d{2})")
SLASH_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{2,4})")
MONTH_DAY_RE = re.compile(
    rf"^({MONTH_PATTERN})\s+(\d{{1,2}}){ORDINAL}(?:\s+(\d{{4}}))?$", re.IGNORECASE
)
DAY_MONTH_RE = re.compile(
    rf"^(\d{{1,2}}){ORDINAL}\s+({MONTH_PATTERN})(?:\s+(\d{{4}}))?$", re.IGNORECASE
)


# ============================================================
# NORMALIZATION
# ============================================================
def _iso(year, month, day) -> str:
    return f"{str(year).zfill(4)}-{str(month).zfill(2)}-{str(day).zfill(2)}"


def _month_number(name: str) -> Optional[int]:
    return MONTHS.get(name.replace(".", "").lower())


def normalize_date(raw: str) -> Optional[str]:
    """
    Canonicalize a date token to YYYY-MM-DD.

    Accepted shapes, tried in order:
      - 2026-03-22 (returned as found)
      - 3/22/2026, 3/22/26 (two-digit years are 20xx)
      - March 22nd, 2026 / Mar. 22 (year defaults to the current one)
      - 22 March 2026 / 22nd Mar

    Returns None when nothing matches. The calendar validity of the result
    is not checked.
    """
    if not raw:
        return None
    raw = raw.strip()

    m = ISO_RE.search(raw)
    if m:
        return m.group(1)

    m = SLASH_RE.search(raw)
    if m:
        month, day, year = m.groups()
        if len(year) == 2:
            year = "20" + year
        return _iso(year, month, day)

    # "March 3rd, 2026." -> "March 3rd 2026"
    compact = re.sub(r"[,.]", "", raw).strip()

    m = MONTH_DAY_RE.match(compact)
    if m:
        month_name, day, year = m.groups()
        month = _month_number(month_name)
        if not month:
            return None
        return _iso(year or date.today().year, month, day)

    m = DAY_MONTH_RE.match(compact)
    if m:
        day, month_name, year = m.groups()
        month = _month_number(month_name)
        if not month:
            return None
        return _iso(year or date.today().year, month, day)

    return None
