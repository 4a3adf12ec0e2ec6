"""Polling client used by the Streamlit demo, against a scripted session."""

import pytest

from transcript_cleaner.clients.cleaner_api import (
    CleanerAPI,
    CleanerAPIError,
    JobFailedError,
    JobTimeoutError,
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, posts=(), gets=()):
        self.posts = list(posts)
        self.gets = list(gets)
        self.post_calls = []
        self.get_calls = []

    def post(self, url, json=None, timeout=None):
        self.post_calls.append((url, json))
        return self.posts.pop(0)

    def get(self, url, timeout=None):
        self.get_calls.append(url)
        return self.gets.pop(0)


def _status(status, current=0, total=2, message="Processing...", result=None, error=None):
    return FakeResponse(payload={
        "job_id": "j1",
        "status": status,
        "progress": {"current_chunk": current, "total_chunks": total, "message": message},
        "result": result,
        "error": error,
    })


def _api(session, **kwargs):
    sleeps = []
    api = CleanerAPI("http://api.test/", session=session, sleep=sleeps.append, **kwargs)
    return api, sleeps


def test_clean_submits_and_polls_until_completed():
    result = {"cleaned_transcript": "done", "tokens_used": 20, "inserted_labels": []}
    session = FakeSession(
        posts=[FakeResponse(payload={"job_id": "j1", "total_chunks": 2, "status": "pending"})],
        gets=[
            _status("processing", current=1, message="Cleaning chunk 2 of 2..."),
            _status("completed", current=2, result=result),
        ],
    )
    api, sleeps = _api(session)
    progress = []

    assert api.clean("raw text", on_progress=lambda *p: progress.append(p)) == result
    assert session.post_calls == [("http://api.test/api/process", {"transcript": "raw text"})]
    assert session.get_calls == ["http://api.test/api/process/j1/status"] * 2
    assert progress == [(0, 2, "Starting..."), (1, 2, "Cleaning chunk 2 of 2...")]
    assert sleeps == [1.0, 1.0]


def test_failed_job_raises():
    session = FakeSession(gets=[_status("failed", error="Invalid API key")])
    api, _ = _api(session)

    with pytest.raises(JobFailedError, match="Invalid API key"):
        api.poll("j1")


def test_poll_gives_up_after_max_attempts():
    session = FakeSession(gets=[_status("pending") for _ in range(3)])
    api, sleeps = _api(session, interval=0.5, max_attempts=3)

    with pytest.raises(JobTimeoutError):
        api.poll("j1")
    assert len(session.get_calls) == 3
    assert sleeps == [0.5, 0.5, 0.5]


def test_http_error_carries_detail():
    session = FakeSession(posts=[FakeResponse(400, {"detail": "No transcript provided"})])
    api, _ = _api(session)

    with pytest.raises(CleanerAPIError) as exc:
        api.segment("")
    assert str(exc.value) == "No transcript provided"
    assert exc.value.status_code == 400


def test_http_error_without_json_uses_text():
    session = FakeSession(posts=[FakeResponse(502, None, text="Bad Gateway")])
    api, _ = _api(session)

    with pytest.raises(CleanerAPIError, match="Bad Gateway"):
        api.check_names("text")


def test_single_call_passes_hit_their_endpoints():
    session = FakeSession(posts=[
        FakeResponse(payload={"verified_transcript": "v", "tokens_used": 1}),
        FakeResponse(payload={"transcript": "with disclaimers"}),
    ])
    api, _ = _api(session)

    assert api.verify_speakers("t")["verified_transcript"] == "v"
    assert api.add_disclaimers("t")["transcript"] == "with disclaimers"
    assert [url for url, _ in session.post_calls] == [
        "http://api.test/api/verify-speakers",
        "http://api.test/api/disclaimers",
    ]
