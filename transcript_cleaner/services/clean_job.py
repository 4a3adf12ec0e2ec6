# transcript_cleaner/services/clean_job.py
# ------------------------------------------------------------
# Background worker for /api/process.
#
# Flow:
#   1) mark the job processing
#   2) send each chunk through the "clean" pass, one at a time,
#      bumping progress after every chunk (the client polls this)
#   3) join the cleaned chunks, sum token usage, complete the job
#   Any failure is recorded on the job so the poller can show it.
# ------------------------------------------------------------

from __future__ import annotations

import logging
from typing import List

from transcript_cleaner.clients.openai_client import CompletionClient
from transcript_cleaner.models.job import JobResult
from transcript_cleaner.services import job_store
from transcript_cleaner.services.cleanup_passes import run_pass
from transcript_cleaner.utils.time import seconds_since

logger = logging.getLogger(__name__)


async def run_clean_job(job_id: str, client: CompletionClient) -> None:
    job = job_store.get_job(job_id)
    total = len(job.chunks)

    try:
        job_store.mark_processing(job_id, message=f"Cleaning chunk 1 of {total}...")
        cleaned: List[str] = []
        tokens = 0
        for i, chunk in enumerate(job.chunks, start=1):
            completion = await run_pass(client, "clean", chunk)
            cleaned.append(completion.text)
            tokens += completion.tokens_used
            next_msg = f"Cleaning chunk {i + 1} of {total}..." if i < total else "Finishing up..."
            job_store.update_progress(job_id, current_chunk=i, message=next_msg)
            logger.debug("Job %s: chunk %d/%d cleaned", job_id, i, total)

        job_store.complete_job(
            job_id,
            JobResult(
                cleaned_transcript="\n\n".join(c for c in cleaned if c),
                tokens_used=tokens,
                inserted_labels=job.inserted_labels,
            ),
        )
        logger.info(
            "Job %s completed: %d chunk(s), %d tokens in %.1fs",
            job_id, total, tokens, seconds_since(job.created_at),
        )
    except Exception as e:
        logger.exception("Job %s failed", job_id)
        job_store.fail_job(job_id, str(e) or e.__class__.__name__)
