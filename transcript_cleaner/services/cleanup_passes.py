# transcript_cleaner/services/cleanup_passes.py
# ------------------------------------------------------------
# The model passes. Each pass = one prompt pair + one API call +
# the shared post-processing. Adding a pass means adding two
# prompt files and one registry entry.
# ------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Dict, NamedTuple

from transcript_cleaner.clients.openai_client import CompletionClient
from transcript_cleaner.models.transcript import Completion
from transcript_cleaner.utils.postprocess import clean_model_output
from transcript_cleaner.utils.prompt_loader import load_prompt, render_prompt

logger = logging.getLogger(__name__)


class CleanupPass(NamedTuple):
    name: str
    system_file: str
    user_file: str


def _pass(name: str) -> CleanupPass:
    return CleanupPass(name, f"{name}.system.txt", f"{name}.user.txt")


# clean: speaker labels and titles; segment: paragraphs;
# verify_speakers: attributions + changes list; check_names: spelling
PASSES: Dict[str, CleanupPass] = {
    p.name: p
    for p in (_pass("clean"), _pass("segment"), _pass("verify_speakers"), _pass("check_names"))
}


def build_messages(pass_name: str, transcript: str) -> tuple[str, str]:
    """Return the rendered (system, user) prompts for a pass."""
    cleanup_pass = PASSES[pass_name]
    system_prompt = load_prompt(cleanup_pass.system_file)
    user_template = load_prompt(cleanup_pass.user_file)
    return system_prompt.strip(), render_prompt(user_template, transcript=transcript).strip()


async def run_pass(client: CompletionClient, pass_name: str, transcript: str) -> Completion:
    """
    Send one transcript through one pass.

    Raises KeyError for an unknown pass; provider errors propagate.
    """
    if pass_name not in PASSES:
        raise KeyError(f"Unknown cleanup pass: {pass_name}")

    system_prompt, user_prompt = build_messages(pass_name, transcript)
    logger.info("Running %s pass on %d chars", pass_name, len(transcript))

    completion = await client.complete(system_prompt, user_prompt)
    return Completion(
        text=clean_model_output(completion.text),
        tokens_used=completion.tokens_used,
    )
