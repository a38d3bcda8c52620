"""
Regex/keyword schedule extractor.

Runs on its own when no OpenAI key is configured and as the fallback when
the model call fails or returns something that cannot be parsed.
"""

import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

from .dates import MONTH_PATTERN, ORDINAL, normalize_date
from .models import DEFAULT_TITLE, UNKNOWN_COURSE, CourseExtraction, ScheduleItem
from .text import normalize_text

logger = logging.getLogger(__name__)

# ============================================================
# PATTERNS
# ============================================================
COURSE_LABEL_RE = re.compile(r"Course[:\s]+([A-Z]{2,6}\s?\d{3}\w?)", re.IGNORECASE)
COURSE_CODE_RE = re.compile(r"([A-Z]{2,6}\s?\d{3}\w?)")
COURSE_LINE_RE = re.compile(r"course\s*title|course[:\s]", re.IGNORECASE)
COURSE_LINE_LABEL_RE = re.compile(r"course\s*title[:\s]*|course[:\s]*", re.IGNORECASE)
COURSE_SCAN_LINES = 40

# "March 20-22, 2026", "Mar. 3rd", "April 9 2026"
RANGE_RE = re.compile(
    rf"\b({MONTH_PATTERN})\s*(\d{{1,2}}){ORDINAL}(?!\d)"
    rf"(?:\s*-\s*(\d{{1,2}}){ORDINAL}(?!\d|\s?%|:))?"
    rf"(?:,?\s*(\d{{4}}))?",
    re.IGNORECASE,
)

DATE_TOKEN_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"|\d{1,2}/\d{1,2}/\d{2,4}"
    rf"|\b{MONTH_PATTERN}\s*\d{{1,2}}{ORDINAL}(?!\d)(?:,?\s*\d{{4}})?"
    rf"|\b\d{{1,2}}{ORDINAL}\s+{MONTH_PATTERN}(?:,?\s*\d{{4}})?",
    re.IGNORECASE,
)

WEIGHT_RE = re.compile(r"(\d{1,3})\s?%")
TIME_RE = re.compile(r"\b([01]?\d|2[0-3]):([0-5]\d)\b")
FILLER_RE = re.compile(r"[-:\t]+")
DUE_LABEL_RE = re.compile(r"\b(due date|due on|due)\b[:\s]*", re.IGNORECASE)

# Ordered; the first pattern found anywhere on the line decides the type.
TYPE_RULES = [
    (re.compile(r"final", re.IGNORECASE), "final"),
    (re.compile(r"midterm", re.IGNORECASE), "midterm"),
    (re.compile(r"quiz", re.IGNORECASE), "quiz"),
    (re.compile(r"lab", re.IGNORECASE), "lab"),
    (re.compile(r"project", re.IGNORECASE), "project"),
    (re.compile(r"work|shift|schedule", re.IGNORECASE), "work"),
]
DEFAULT_TYPE = "assignment"


# ============================================================
# FIELD HELPERS
# ============================================================
def extract_course_name(lines: List[str]) -> str:
    top_lines = lines[:COURSE_SCAN_LINES]
    top = "\n".join(top_lines)

    m = COURSE_LABEL_RE.search(top)
    if m:
        return m.group(1).upper()

    m = COURSE_CODE_RE.search(top)
    if m:
        return m.group(1).upper()

    for line in top_lines:
        if COURSE_LINE_RE.search(line):
            name = COURSE_LINE_LABEL_RE.sub("", line, count=1).strip()
            if name:
                return name

    return UNKNOWN_COURSE


def classify_type(line: str) -> str:
    for pattern, item_type in TYPE_RULES:
        if pattern.search(line):
            return item_type
    return DEFAULT_TYPE


def extract_weight(line: str) -> Optional[int]:
    m = WEIGHT_RE.search(line)
    return int(m.group(1)) if m else None


def extract_time(line: str) -> str:
    m = TIME_RE.search(line)
    if not m:
        return ""
    return f"{int(m.group(1)):02d}:{m.group(2)}"


def clean_title(line: str, start: int, end: int) -> str:
    """Strip the date span at [start, end), the weight and labels from a line."""
    title = line[:start] + " " + line[end:]
    title = WEIGHT_RE.sub("", title, count=1)
    title = FILLER_RE.sub(" ", title)
    title = DUE_LABEL_RE.sub("", title, count=1)
    title = " ".join(title.split())
    return title or DEFAULT_TITLE


def _build_item(line: str, date_str: str, start: int, end: int) -> ScheduleItem:
    return ScheduleItem(
        title=clean_title(line, start, end),
        type=classify_type(line),
        date=date_str,
        time=extract_time(line),
        weight=extract_weight(line),
        notes="",
    )


# ============================================================
# LINE STRATEGIES
# ============================================================
def _items_from_range(line: str) -> Optional[List[ScheduleItem]]:
    """
    Month-name dates, with an optional day range.

    Returns None when the line has no month-name date so the next strategy
    can try; a range resolves to its later day.
    """
    m = RANGE_RE.search(line)
    if not m:
        return None

    month, first_day, last_day, year = m.groups()
    candidate = f"{month} {last_day or first_day}, {year or date.today().year}"
    date_str = normalize_date(candidate)
    if not date_str:
        return []
    return [_build_item(line, date_str, m.start(), m.end())]


def _items_from_tokens(line: str) -> List[ScheduleItem]:
    items: List[ScheduleItem] = []
    for m in DATE_TOKEN_RE.finditer(line):
        date_str = normalize_date(m.group(0))
        if not date_str:
            continue
        items.append(_build_item(line, date_str, m.start(), m.end()))
    return items


def extract_items_from_line(line: str) -> List[ScheduleItem]:
    items = _items_from_range(line)
    if items is not None:
        return items
    return _items_from_tokens(line)


# ============================================================
# ENTRY POINT
# ============================================================
def extract_schedule_heuristic(text: str) -> Dict[str, Any]:
    lines = [line.strip() for line in normalize_text(text).splitlines()]
    lines = [line for line in lines if line]
    logger.debug("Heuristic: %d non-empty lines", len(lines))

    course_name = extract_course_name(lines)

    items: List[ScheduleItem] = []
    for line in lines:
        found = extract_items_from_line(line)
        for item in found:
            logger.debug("Heuristic item: %s", item.model_dump())
        items.extend(found)

    logger.info(
        "Heuristic extracted %d item(s) for course '%s'", len(items), course_name
    )
    extraction = CourseExtraction(course_name=course_name, items=items)
    return extraction.model_dump(exclude={"source"})
