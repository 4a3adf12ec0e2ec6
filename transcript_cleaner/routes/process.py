# transcript_cleaner/routes/process.py
# ------------------------------------------------------------
# Long-running clean pass:
#   POST /api/process                 -> create job, return job_id
#   GET  /api/process/{job_id}/status -> poll progress / result
# ------------------------------------------------------------

import logging
import os

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from transcript_cleaner.clients.openai_client import CompletionClient, get_completion_client
from transcript_cleaner.models.job import JobCreatedResponse, JobStatusResponse
from transcript_cleaner.models.transcript import TranscriptRequest
from transcript_cleaner.services import job_store
from transcript_cleaner.services.clean_job import run_clean_job
from transcript_cleaner.utils.chunking import chunk_transcript
from transcript_cleaner.utils.handoff import preprocess_transcript

CHUNK_MAX_CHARS = int(os.getenv("CHUNK_MAX_CHARS", "12000"))

logger = logging.getLogger(__name__)

router = APIRouter()


def require_transcript(body: TranscriptRequest) -> str:
    transcript = (body.transcript or "").strip()
    if not transcript:
        raise HTTPException(status_code=400, detail="No transcript provided")
    return transcript


def require_configured(client: CompletionClient) -> None:
    if not client.configured:
        raise HTTPException(status_code=500, detail="OpenAI API key not configured")


@router.post("/process", response_model=JobCreatedResponse)
async def create_process_job(
    body: TranscriptRequest,
    background_tasks: BackgroundTasks,
    client: CompletionClient = Depends(get_completion_client),
) -> JobCreatedResponse:
    """
    Flow:
    1) Validate input + API key.
    2) Run the hand-off preprocessor (stray 0s, missing speaker labels).
    3) Chunk at speaker turns and register a pending job.
    4) Schedule the clean pass in the background and return at once.
    """
    transcript = require_transcript(body)
    require_configured(client)

    prepared, inserted = preprocess_transcript(transcript)
    chunks = chunk_transcript(prepared, max_chars=CHUNK_MAX_CHARS)
    job = job_store.create_job(chunks, inserted_labels=inserted)
    background_tasks.add_task(run_clean_job, job.job_id, client)

    logger.info(
        "Created job %s: %d chars, %d chunk(s), %d inserted label(s)",
        job.job_id, len(transcript), len(chunks), len(inserted),
    )
    return JobCreatedResponse(job_id=job.job_id, total_chunks=len(chunks), status=job.status)


@router.get("/process/{job_id}/status", response_model=JobStatusResponse)
async def get_process_status(job_id: str) -> JobStatusResponse:
    try:
        job = job_store.get_job(job_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Job not found")

    return JobStatusResponse(
        job_id=job.job_id,
        status=job.status,
        progress=job.progress,
        result=job.result,
        error=job.error,
    )
