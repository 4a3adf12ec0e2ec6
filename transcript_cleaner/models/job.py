from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

JobStatus = Literal["pending", "processing", "completed", "failed"]


class JobProgress(BaseModel):
    """
    Progress of a clean job, polled by the client.
    - current_chunk: how many chunks are finished
    - total_chunks:  how many chunks the transcript was split into
    - message:       human-readable status line for the progress bar
    """
    current_chunk: int = 0
    total_chunks: int = 0
    message: str = "Queued"


class JobResult(BaseModel):
    """
    - cleaned_transcript: cleaned chunks joined back together
    - tokens_used:        sum over all chunk calls
    - inserted_labels:    speaker labels added by the hand-off preprocessor
    """
    cleaned_transcript: str
    tokens_used: int = 0
    inserted_labels: List[str] = Field(default_factory=list)


class Job(BaseModel):
    """
    In-memory record of one /api/process request.

    Lifecycle:
      - status: 'pending' -> 'processing' -> 'completed' | 'failed'
      - result is set only when completed, error only when failed
    """
    job_id: str
    status: JobStatus = "pending"
    created_at: datetime
    updated_at: datetime
    chunks: List[str] = Field(default_factory=list)
    inserted_labels: List[str] = Field(default_factory=list)
    progress: JobProgress = Field(default_factory=JobProgress)
    result: Optional[JobResult] = None
    error: Optional[str] = None

    @property
    def finished(self) -> bool:
        return self.status in ("completed", "failed")


class JobCreatedResponse(BaseModel):
    job_id: str
    total_chunks: int
    status: JobStatus = "pending"


class JobStatusResponse(BaseModel):
    """What GET /api/process/{job_id}/status returns (chunks are not echoed)."""
    job_id: str
    status: JobStatus
    progress: JobProgress
    result: Optional[JobResult] = None
    error: Optional[str] = None
