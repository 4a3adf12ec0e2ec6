# transcript_cleaner/routes/passes.py
# ------------------------------------------------------------
# Follow-up passes run on an already cleaned transcript.
# Each one is a single model call; disclaimers need no model.
# ------------------------------------------------------------

import logging

from fastapi import APIRouter, Depends, HTTPException

from transcript_cleaner.clients.openai_client import CompletionClient, get_completion_client
from transcript_cleaner.models.transcript import (
    CheckNamesResponse,
    Completion,
    DisclaimerResponse,
    SegmentResponse,
    TranscriptRequest,
    VerifySpeakersResponse,
)
from transcript_cleaner.routes.process import require_configured, require_transcript
from transcript_cleaner.services.cleanup_passes import run_pass
from transcript_cleaner.utils.disclaimers import DisclaimersAlreadyAdded, add_disclaimers
from transcript_cleaner.utils.postprocess import split_changes

logger = logging.getLogger(__name__)

router = APIRouter()


async def _run(client: CompletionClient, pass_name: str, body: TranscriptRequest, failure: str) -> Completion:
    transcript = require_transcript(body)
    require_configured(client)
    try:
        return await run_pass(client, pass_name, transcript)
    except Exception as e:
        logger.error("%s: %s", failure, e)
        raise HTTPException(status_code=500, detail=str(e) or failure)


@router.post("/segment", response_model=SegmentResponse)
async def segment_transcript(
    body: TranscriptRequest,
    client: CompletionClient = Depends(get_completion_client),
) -> SegmentResponse:
    completion = await _run(client, "segment", body, "Failed to segment transcript")
    return SegmentResponse(segmented_transcript=completion.text, tokens_used=completion.tokens_used)


@router.post("/check-names", response_model=CheckNamesResponse)
async def check_names(
    body: TranscriptRequest,
    client: CompletionClient = Depends(get_completion_client),
) -> CheckNamesResponse:
    completion = await _run(client, "check_names", body, "Failed to check names")
    return CheckNamesResponse(corrected_transcript=completion.text, tokens_used=completion.tokens_used)


@router.post("/verify-speakers", response_model=VerifySpeakersResponse)
async def verify_speakers(
    body: TranscriptRequest,
    client: CompletionClient = Depends(get_completion_client),
) -> VerifySpeakersResponse:
    """
    The model appends '---CHANGES---' and a bullet list; we split that off
    so the transcript stays clean and the list goes to the change log.
    """
    completion = await _run(client, "verify_speakers", body, "Failed to verify speakers")
    verified, changes = split_changes(completion.text)
    return VerifySpeakersResponse(
        verified_transcript=verified,
        changes_summary=changes,
        tokens_used=completion.tokens_used,
    )


@router.post("/disclaimers", response_model=DisclaimerResponse)
async def disclaimers(body: TranscriptRequest) -> DisclaimerResponse:
    transcript = require_transcript(body)
    try:
        wrapped = add_disclaimers(transcript)
    except DisclaimersAlreadyAdded as e:
        raise HTTPException(status_code=409, detail=str(e))
    return DisclaimerResponse(transcript=wrapped)
