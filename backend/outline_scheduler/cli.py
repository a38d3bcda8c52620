"""Run the extraction pipeline on local files without the API."""

import argparse
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from .aggregation import aggregate_events
from .config import MODEL_NAME, get_openai_client
from .documents import DocumentDecodeError, extract_text
from .extraction import extract_schedule
from .ics import events_to_ics
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="outline-scheduler",
        description="Extract dated items from course outlines and work schedules.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="PDF, .docx or text files")
    parser.add_argument(
        "--heuristic",
        action="store_true",
        help="skip the OpenAI call even if OPENAI_API_KEY is set",
    )
    parser.add_argument("--model", default=MODEL_NAME, help="OpenAI model name")
    parser.add_argument("--ics", type=Path, help="also write the events to this .ics file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    client = None if args.heuristic else get_openai_client()
    courses = []
    for path in args.files:
        content_type = mimetypes.guess_type(path.name)[0] or ""
        try:
            text = extract_text(path.read_bytes(), content_type, path.name)
        except (OSError, DocumentDecodeError) as e:
            logger.error("Skipping %s: %s", path, e)
            continue
        extracted = extract_schedule(text, client, model=args.model)
        if not extracted.get("source"):
            extracted["source"] = path.name
        courses.append(extracted)

    if not courses:
        logger.error("No documents could be processed.")
        return 1

    events = aggregate_events(courses)
    result = {"courses": courses, "events": [ev.model_dump() for ev in events]}
    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")

    if args.ics:
        if events:
            args.ics.write_text(events_to_ics(events), encoding="utf-8")
            logger.info("Wrote %d event(s) to %s", len(events), args.ics)
        else:
            logger.warning("No events found, %s not written.", args.ics)
    return 0


if __name__ == "__main__":
    sys.exit(main())
