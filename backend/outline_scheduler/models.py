from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

# ============================================================
# MODELS
# ============================================================
ItemType = Literal[
    "assignment",
    "quiz",
    "midterm",
    "final",
    "project",
    "lab",
    "work",
    "personal",
    "other",
]

UNKNOWN_COURSE = "Unknown Course"
DEFAULT_TITLE = "Assessment"

# Integer weights stay integers in the JSON output.
Weight = Union[int, float]


class ScheduleItem(BaseModel):
    title: str = Field(default=DEFAULT_TITLE, min_length=1)
    type: ItemType = "assignment"
    date: str  # YYYY-MM-DD
    time: str = ""
    weight: Optional[Weight] = None
    notes: str = ""
    reminders: List[str] = Field(default_factory=list)


class CourseExtraction(BaseModel):
    course_name: str = UNKNOWN_COURSE
    source: str = ""
    term: str = ""
    items: List[ScheduleItem] = Field(default_factory=list)


class AggregatedEvent(BaseModel):
    course: str = UNKNOWN_COURSE
    title: str = ""
    type: str = "assignment"
    date: str = ""
    time: str = ""
    weight: Optional[Weight] = None
    notes: str = ""


class UploadError(BaseModel):
    source: str
    detail: str


class UploadResponse(BaseModel):
    # Extractions are passed through as the extractor produced them.
    courses: List[Dict[str, Any]]
    events: List[AggregatedEvent]
    errors: List[UploadError] = Field(default_factory=list)


class CalendarEvent(BaseModel):
    course: Optional[str] = ""
    title: Optional[str] = ""
    date: Optional[str] = ""
    weight: Optional[Weight] = None

    @field_validator("course", "title", "date", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class CalendarRequest(BaseModel):
    events: List[CalendarEvent] = Field(default_factory=list)
