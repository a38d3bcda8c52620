import pytest
from fastapi.testclient import TestClient

from outline_scheduler import main
from outline_scheduler.main import app, get_ai_client

api = TestClient(app)

OUTLINE = b"Course: CS 101\nHW1 due 2026-03-22 10%\nMidterm 2026-02-10 25%\n"
SHIFTS = b"Work schedule\nShift 2025-12-01 09:00\n"


@pytest.fixture
def ai_client():
    """Overrides the OpenAI dependency; None means heuristic mode."""
    holder = {"client": None}
    app.dependency_overrides[get_ai_client] = lambda: holder["client"]
    yield holder
    app.dependency_overrides.clear()


def _upload(*files):
    return api.post(
        "/api/upload",
        files=[("files", (name, data, ctype)) for name, data, ctype in files],
    )


def test_upload_heuristic(ai_client):
    response = _upload(("outline.txt", OUTLINE, "text/plain"))

    assert response.status_code == 200
    body = response.json()
    [course] = body["courses"]
    assert course["course_name"] == "CS 101"
    assert course["source"] == "outline.txt"
    assert [(e["title"], e["type"], e["weight"]) for e in body["events"]] == [
        ("Midterm", "midterm", 25),
        ("HW1", "assignment", 10),
    ]
    assert all(type(e["weight"]) is int for e in body["events"])
    assert body["errors"] == []


def test_events_are_sorted_across_files(ai_client):
    response = _upload(
        ("outline.txt", OUTLINE, "text/plain"),
        ("shifts.txt", SHIFTS, "text/plain"),
    )
    events = response.json()["events"]
    assert [e["date"] for e in events] == ["2025-12-01", "2026-02-10", "2026-03-22"]
    assert events[0]["course"] == "Unknown Course"
    assert events[0]["time"] == "09:00"


def test_upload_without_files_is_rejected(ai_client):
    response = api.post("/api/upload")
    assert response.status_code == 400
    assert response.json()["detail"] == "No files uploaded."


def test_one_broken_document_does_not_fail_the_batch(ai_client):
    response = _upload(
        ("broken.pdf", b"not a pdf", "application/pdf"),
        ("outline.txt", OUTLINE, "text/plain"),
    )
    assert response.status_code == 200
    body = response.json()
    assert len(body["courses"]) == 1
    assert [err["source"] for err in body["errors"]] == ["broken.pdf"]


def test_batch_fails_when_every_document_fails(ai_client):
    response = _upload(("broken.pdf", b"not a pdf", "application/pdf"))
    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error"] == "Failed to process outlines."
    assert detail["details"][0]["source"] == "broken.pdf"


def test_upload_with_model(ai_client, fake_client_factory, response_factory):
    parsed = {
        "course_name": "ENTI 333",
        "source": "",
        "items": [
            {
                "title": "Pitch",
                "type": "project",
                "date": "2026-04-02",
                "time": "",
                "weight": 30,
                "notes": "Group",
                "reminders": ["2026-03-26", "2026-03-28", "2026-03-30"],
            }
        ],
    }
    ai_client["client"] = fake_client_factory(response_factory(parsed=parsed))

    response = _upload(("enti.txt", b"whatever", "text/plain"))

    body = response.json()
    assert body["courses"][0]["source"] == "enti.txt"
    assert body["courses"][0]["items"][0]["reminders"] == parsed["items"][0]["reminders"]
    assert body["events"][0]["notes"] == "Group"


def test_document_decoding_runs_off_the_event_loop(ai_client, monkeypatch):
    offloaded = []
    real_run_in_threadpool = main.run_in_threadpool

    async def recording_run_in_threadpool(func, *args, **kwargs):
        offloaded.append(func.__name__)
        return await real_run_in_threadpool(func, *args, **kwargs)

    monkeypatch.setattr(main, "run_in_threadpool", recording_run_in_threadpool)

    response = _upload(("outline.txt", OUTLINE, "text/plain"))

    assert response.status_code == 200
    assert offloaded == ["extract_text", "extract_schedule"]


def test_ics_export():
    response = api.post(
        "/api/ics",
        json={"events": [{"course": "CS101", "title": "HW1", "date": "2026-03-22", "weight": 10}]},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/calendar")
    assert "schedule.ics" in response.headers["content-disposition"]
    lines = response.text.splitlines()
    assert "SUMMARY:CS101 - HW1" in lines
    assert "DESCRIPTION:Weight 10%" in lines


def test_ics_export_accepts_null_fields():
    response = api.post(
        "/api/ics",
        json={"events": [{"course": "A", "title": None, "date": None, "weight": None}]},
    )
    assert response.status_code == 200
    assert "DTSTART;VALUE=DATE:" in response.text.splitlines()


def test_ics_export_without_events_is_rejected():
    assert api.post("/api/ics", json={"events": []}).status_code == 400
    assert api.post("/api/ics", json={}).status_code == 400


def test_health():
    body = api.get("/health").json()
    assert body["status"] == "healthy"
    assert isinstance(body["openai_configured"], bool)
