"""
Schedule extraction through the OpenAI Responses API, with the heuristic
extractor as the fallback.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional, get_args

from .config import MODEL_NAME
from .heuristic import extract_schedule_heuristic
from .models import UNKNOWN_COURSE, ItemType
from .reminders import EARLIEST_REMINDER, REMINDER_OFFSETS_DAYS
from .text import normalize_text

logger = logging.getLogger(__name__)

# ============================================================
# OUTPUT SCHEMA
# ============================================================
ITEM_TYPES = list(get_args(ItemType))

SCHEDULE_SCHEMA_NAME = "course_schedule_extraction"
SCHEDULE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "course_name": {"type": "string"},
        "source": {
            "type": "string",
            "description": "Optional source filename or document identifier.",
        },
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "title": {"type": "string"},
                    "type": {"type": "string", "enum": ITEM_TYPES},
                    "date": {
                        "type": "string",
                        "description": "ISO date YYYY-MM-DD. If only month/day given, infer year.",
                    },
                    "time": {
                        "type": "string",
                        "description": "Optional time like 14:00 or 'in class'.",
                    },
                    "weight": {
                        "type": ["number", "null"],
                        "description": "Percent weight if stated.",
                    },
                    "notes": {"type": "string"},
                    "reminders": {
                        "type": "array",
                        "items": {
                            "type": "string",
                            "description": "ISO date YYYY-MM-DD for reminder occurrences.",
                        },
                    },
                },
                "required": [
                    "title",
                    "type",
                    "date",
                    "time",
                    "weight",
                    "notes",
                    "reminders",
                ],
            },
        },
    },
    "required": ["course_name", "source", "items"],
}


# ============================================================
# PROMPT
# ============================================================
SYSTEM_PROMPT = (
    "You are an assistant that extracts calendar events from one or more documents. "
    "Return ONLY valid JSON that strictly follows the provided JSON schema. "
    "Do not include any explanatory text."
)


def create_user_prompt(text: str) -> str:
    offsets = ", ".join(str(d) for d in REMINDER_OFFSETS_DAYS[:-1])
    offsets = f"{offsets}, and {REMINDER_OFFSETS_DAYS[-1]}"
    return f"""
Imagine you are a university student building a semester schedule.

WHAT TO EXTRACT:
- Using ALL of the provided text, find every dated item: assignments, quizzes, midterms, finals, projects, labs.
- Also include non-school dated items like work shifts or personal events.
- If the document is not a course outline (for example a work schedule), use type 'work' or 'personal' as appropriate.

FOR EACH ITEM RETURN:
- title, type ({"/".join(ITEM_TYPES)}), date as YYYY-MM-DD, optional time, weight in percent if stated, and notes.

DATE RULES:
- When a date is given as a range, use the latest date in the range as the due date.
- If a year is missing, infer the most likely year for the semester (prefer the upcoming year/term).

REMINDERS:
- For each item compute reminders exactly {offsets} days before the due date.
- Put them in the 'reminders' array as ISO dates.
- Omit reminders that would fall before {EARLIEST_REMINDER.isoformat()}.

COURSE:
- If you cannot find a course name, set course_name to '{UNKNOWN_COURSE}'.
- The 'items' array may be empty if no dated items are found.

{text}
""".strip()


def build_request(text: str, model: str = MODEL_NAME) -> Dict[str, Any]:
    return {
        "model": model,
        "input": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": create_user_prompt(text)},
        ],
        "text": {
            "format": {
                "type": "json_schema",
                "name": SCHEDULE_SCHEMA_NAME,
                "schema": SCHEDULE_SCHEMA,
                "strict": True,
            }
        },
    }


# ============================================================
# RESPONSE PARSING
# ============================================================
def _as_object(value: Any) -> Optional[Dict[str, Any]]:
    if hasattr(value, "model_dump"):
        value = value.model_dump()
    return value if isinstance(value, dict) else None


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        return _as_object(json.loads(text))
    except (TypeError, ValueError):
        return None


def output_text_blocks(response: Any) -> List[str]:
    blocks: List[str] = []
    for item in getattr(response, "output", None) or []:
        for content in getattr(item, "content", None) or []:
            if getattr(content, "type", None) != "output_text":
                continue
            text = getattr(content, "text", None)
            if isinstance(text, str):
                blocks.append(text)
    return blocks


def parse_output_parsed(response: Any) -> Optional[Dict[str, Any]]:
    return _as_object(getattr(response, "output_parsed", None))


def parse_joined_text(response: Any) -> Optional[Dict[str, Any]]:
    blocks = output_text_blocks(response)
    if not blocks:
        return None
    return _loads_object("\n".join(blocks))


def parse_brace_substring(response: Any) -> Optional[Dict[str, Any]]:
    joined = "\n".join(output_text_blocks(response))
    start = joined.find("{")
    end = joined.rfind("}")
    if start == -1 or end <= start:
        return None
    return _loads_object(joined[start : end + 1])


RESPONSE_PARSERS: List[Callable[[Any], Optional[Dict[str, Any]]]] = [
    parse_output_parsed,
    parse_joined_text,
    parse_brace_substring,
]


def parse_response(response: Any) -> Optional[Dict[str, Any]]:
    """Run each parser in order; the first JSON object found wins."""
    for parser in RESPONSE_PARSERS:
        parsed = parser(response)
        if parsed is not None:
            logger.debug("Model output parsed via %s", parser.__name__)
            return parsed
    return None


# ============================================================
# ORCHESTRATION
# ============================================================
def _fallback(text: str, reason: str) -> Dict[str, Any]:
    logger.warning(
        "AI extraction unavailable, using heuristic extractor: %s",
        reason,
        extra={"reason": reason, "text_chars": len(text)},
    )
    return extract_schedule_heuristic(text)


def extract_schedule(
    text: str, client: Optional[Any] = None, model: str = MODEL_NAME
) -> Dict[str, Any]:
    """
    Extract a course schedule from decoded document text.

    Without a client this is the heuristic extractor. With one, the model's
    JSON is returned as parsed (no schema validation); any error from the
    call or an unparseable reply falls back to the heuristic extractor.
    """
    text = normalize_text(text)
    if client is None:
        return extract_schedule_heuristic(text)

    try:
        response = client.responses.create(**build_request(text, model))
    except Exception as e:
        logger.debug("OpenAI request failed", exc_info=True)
        return _fallback(text, f"{type(e).__name__}: {e}")

    parsed = parse_response(response)
    if parsed is None:
        return _fallback(text, "unparseable model output")
    return parsed
