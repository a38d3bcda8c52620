import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, File, HTTPException, Response, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from .aggregation import aggregate_events
from .config import API_HOST, API_PORT, cors_origins, get_openai_client, openai_configured
from .documents import DocumentDecodeError, extract_text
from .extraction import extract_schedule
from .ics import events_to_ics
from .logging_config import configure_logging
from .models import CalendarRequest, UploadError, UploadResponse

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@lru_cache()
def get_ai_client():
    return get_openai_client()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if not openai_configured():
        logger.info("OPENAI_API_KEY not set, using heuristic extractor.")
    yield


# ============================================================
# FASTAPI
# ============================================================
app = FastAPI(title="Course Outline Scheduler", version=VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# PROCESSING
# ============================================================
async def process_upload(upload: UploadFile, client: Any) -> Dict[str, Any]:
    data = await upload.read()
    text = await run_in_threadpool(
        extract_text, data, upload.content_type or "", upload.filename or ""
    )
    extracted = await run_in_threadpool(extract_schedule, text, client)
    if not extracted.get("source"):
        extracted["source"] = upload.filename or ""
    logger.info(
        "Extracted %d item(s) from %s",
        len(extracted.get("items") or []),
        upload.filename,
    )
    return extracted


# ============================================================
# ENDPOINTS
# ============================================================
@app.post("/api/upload", response_model=UploadResponse)
async def upload_outlines(
    files: Optional[List[UploadFile]] = File(None),
    client: Any = Depends(get_ai_client),
):
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded.")

    courses: List[Dict[str, Any]] = []
    errors: List[UploadError] = []
    for upload in files:
        source = upload.filename or ""
        try:
            courses.append(await process_upload(upload, client))
        except DocumentDecodeError as e:
            logger.error("Failed to decode %s: %s", source, e)
            errors.append(UploadError(source=source, detail=str(e)))
        except Exception as e:
            logger.exception("Failed to process %s", source)
            errors.append(UploadError(source=source, detail=str(e)))

    if errors and not courses:
        raise HTTPException(
            status_code=500,
            detail={
                "error": "Failed to process outlines.",
                "details": [err.model_dump() for err in errors],
            },
        )

    return UploadResponse(
        courses=courses, events=aggregate_events(courses), errors=errors
    )


@app.post("/api/ics")
async def calendar_from_events(request: CalendarRequest = Body(...)):
    if not request.events:
        raise HTTPException(status_code=400, detail="No events.")

    return Response(
        content=events_to_ics(request.events),
        media_type="text/calendar",
        headers={"Content-Disposition": "attachment; filename=schedule.ics"},
    )


@app.get("/")
async def root():
    return {
        "message": "Course Outline Scheduler API",
        "version": VERSION,
        "endpoints": {
            "upload": "/api/upload (POST)",
            "ics": "/api/ics (POST)",
            "health": "/health (GET)",
            "docs": "/docs (GET)",
        },
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "openai_configured": openai_configured(),
        "message": "Course Outline Scheduler API is running",
    }


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=API_HOST, port=API_PORT, reload=False)


if __name__ == "__main__":
    run()
