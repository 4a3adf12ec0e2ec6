from typing import List, Optional

from pydantic import BaseModel


class Completion(BaseModel):
    """
    What we get back from the model provider for one call.
    - text:        completion text (already post-processed by the pass runner)
    - tokens_used: provider-reported total tokens, 0 if not reported
    """
    text: str
    tokens_used: int = 0


class TranscriptRequest(BaseModel):
    """
    Body of every transcript endpoint. Empty text is rejected by the
    route with a 400 (not a 422) so the client can show a plain message.
    """
    transcript: str = ""


class PassResponse(BaseModel):
    success: bool = True
    tokens_used: int = 0


class SegmentResponse(PassResponse):
    segmented_transcript: str


class VerifySpeakersResponse(PassResponse):
    """
    - verified_transcript: transcript with speaker attributions fixed
    - changes_summary:     bullet items the model listed after ---CHANGES---
    """
    verified_transcript: str
    changes_summary: Optional[List[str]] = None


class CheckNamesResponse(PassResponse):
    corrected_transcript: str


class DisclaimerResponse(BaseModel):
    success: bool = True
    transcript: str
