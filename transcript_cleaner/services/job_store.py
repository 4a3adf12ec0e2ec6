# transcript_cleaner/services/job_store.py
# -------------------------------------------------------------------
# A tiny, swappable store for clean jobs. For now: in-memory, single
# process. Finished jobs are dropped after JOB_TTL_SECONDS so a long
# running server does not keep every transcript forever.
# -------------------------------------------------------------------

from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional
from uuid import uuid4

from transcript_cleaner.models.job import Job, JobProgress, JobResult
from transcript_cleaner.utils.time import now_et, seconds_since

logger = logging.getLogger(__name__)

JOB_TTL_SECONDS = int(os.getenv("JOB_TTL_SECONDS", "3600"))

_JOBS: Dict[str, Job] = {}


def create_job(chunks: List[str], *, inserted_labels: Optional[List[str]] = None) -> Job:
    """
    Register a new pending job for the given chunks. Called from /api/process.
    """
    prune_jobs()
    now = now_et()
    job = Job(
        job_id=str(uuid4()),
        created_at=now,
        updated_at=now,
        chunks=list(chunks),
        inserted_labels=list(inserted_labels or []),
        progress=JobProgress(total_chunks=len(chunks)),
    )
    _JOBS[job.job_id] = job
    return job


def get_job(job_id: str) -> Job:
    """
    Retrieve a job by its ID. Raises KeyError if not found.
    """
    job = _JOBS.get(job_id)
    if not job:
        raise KeyError(f"Job {job_id} not found")
    return job


def _touch(job: Job) -> Job:
    job.updated_at = now_et()
    return job


def _require_active(job: Job) -> None:
    if job.finished:
        raise ValueError(f"Job {job.job_id} is already {job.status}")


# Lifecycle helpers

def mark_processing(job_id: str, message: str = "Processing...") -> Job:
    job = get_job(job_id)
    _require_active(job)
    job.status = "processing"
    job.progress.message = message
    return _touch(job)


def update_progress(job_id: str, current_chunk: int, message: str) -> Job:
    job = get_job(job_id)
    _require_active(job)
    total = job.progress.total_chunks
    job.progress.current_chunk = max(0, min(current_chunk, total))
    job.progress.message = message
    return _touch(job)


def complete_job(job_id: str, result: JobResult) -> Job:
    job = get_job(job_id)
    _require_active(job)
    job.status = "completed"
    job.result = result
    job.progress.current_chunk = job.progress.total_chunks
    job.progress.message = "Done"
    return _touch(job)


def fail_job(job_id: str, error: str) -> Job:
    job = get_job(job_id)
    _require_active(job)
    job.status = "failed"
    job.error = error or "Processing failed"
    job.progress.message = "Failed"
    return _touch(job)


def prune_jobs(max_age_seconds: Optional[int] = None) -> int:
    """
    Drop finished jobs whose last update is older than max_age_seconds.
    Returns how many were removed.
    """
    ttl = JOB_TTL_SECONDS if max_age_seconds is None else max_age_seconds
    now = now_et()
    stale = [
        jid for jid, job in _JOBS.items()
        if job.finished and seconds_since(job.updated_at, now) > ttl
    ]
    for jid in stale:
        del _JOBS[jid]
    if stale:
        logger.debug("Pruned %d finished job(s)", len(stale))
    return len(stale)

#test only cleanup/clear function

def _reset_jobs_for_tests() -> None:
    """
    Danger: test environments only.
    Clears all in-memory jobs to a blank slate.
    """
    _JOBS.clear()
