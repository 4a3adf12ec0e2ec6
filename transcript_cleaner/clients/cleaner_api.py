# transcript_cleaner/clients/cleaner_api.py
# ------------------------------------------------------------
# HTTP client for the cleaner API, used by the Streamlit demo.
#
# The clean pass is a job: submit, then poll
#   GET /api/process/{job_id}/status
# every `interval` seconds, at most `max_attempts` times
# (defaults: 1s x 300 = 5 minutes).
#
# Env:
#   CLEANER_API_URL  - base URL of the API (default http://127.0.0.1:8000)
# ------------------------------------------------------------
import logging
import os
import time
from typing import Any, Callable, Dict, Optional

import requests

CLEANER_API_URL = os.getenv("CLEANER_API_URL", "http://127.0.0.1:8000")

# Verification of very large transcripts can take 60-120s
LARGE_TRANSCRIPT_CHARS = 40000

logger = logging.getLogger(__name__)


class CleanerAPIError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class JobFailedError(CleanerAPIError):
    pass


class JobTimeoutError(CleanerAPIError):
    pass


ProgressCallback = Callable[[int, int, str], None]


class CleanerAPI:
    def __init__(
        self,
        base_url: str = CLEANER_API_URL,
        *,
        interval: float = 1.0,
        max_attempts: int = 300,
        timeout: float = 180.0,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.interval = interval
        self.max_attempts = max_attempts
        self.timeout = timeout
        self.session = session or requests.Session()
        self._sleep = sleep

    # --------------------------
    # Internal helpers
    # --------------------------
    def _json(self, resp: requests.Response, failure: str) -> Dict[str, Any]:
        try:
            body = resp.json()
        except ValueError:
            body = {"detail": resp.text}
        if not resp.ok:
            detail = body.get("detail") if isinstance(body, dict) else None
            raise CleanerAPIError(str(detail or failure), status_code=resp.status_code)
        return body

    def _post(self, path: str, transcript: str, failure: str) -> Dict[str, Any]:
        resp = self.session.post(
            f"{self.base_url}{path}", json={"transcript": transcript}, timeout=self.timeout
        )
        return self._json(resp, failure)

    # --------------------------
    # Clean pass (job + polling)
    # --------------------------
    def submit(self, transcript: str) -> Dict[str, Any]:
        """POST /api/process -> {job_id, total_chunks, status}"""
        return self._post("/api/process", transcript, "Processing failed")

    def status(self, job_id: str) -> Dict[str, Any]:
        resp = self.session.get(f"{self.base_url}/api/process/{job_id}/status", timeout=self.timeout)
        return self._json(resp, "Error checking job status")

    def poll(self, job_id: str, on_progress: Optional[ProgressCallback] = None) -> Dict[str, Any]:
        """
        Poll until the job completes; returns the job result dict
        ({cleaned_transcript, tokens_used, inserted_labels}).

        Raises JobFailedError / JobTimeoutError.
        """
        for attempt in range(1, self.max_attempts + 1):
            self._sleep(self.interval)
            data = self.status(job_id)
            status = data.get("status")

            if status == "completed":
                return data["result"]
            if status == "failed":
                raise JobFailedError(data.get("error") or "Unknown error")

            if on_progress is not None:
                progress = data.get("progress") or {}
                on_progress(
                    progress.get("current_chunk", 0),
                    progress.get("total_chunks", 0),
                    progress.get("message") or "Processing...",
                )
            logger.debug("Job %s still %s (attempt %d/%d)", job_id, status, attempt, self.max_attempts)

        raise JobTimeoutError("Processing timed out. Please try again.")

    def clean(self, transcript: str, on_progress: Optional[ProgressCallback] = None) -> Dict[str, Any]:
        job = self.submit(transcript)
        if on_progress is not None:
            on_progress(0, job.get("total_chunks", 0), "Starting...")
        return self.poll(job["job_id"], on_progress=on_progress)

    # --------------------------
    # Single-call passes
    # --------------------------
    def segment(self, transcript: str) -> Dict[str, Any]:
        return self._post("/api/segment", transcript, "Segmentation failed")

    def verify_speakers(self, transcript: str) -> Dict[str, Any]:
        return self._post("/api/verify-speakers", transcript, "Speaker verification failed")

    def check_names(self, transcript: str) -> Dict[str, Any]:
        return self._post("/api/check-names", transcript, "Name check failed")

    def add_disclaimers(self, transcript: str) -> Dict[str, Any]:
        return self._post("/api/disclaimers", transcript, "Adding disclaimers failed")
