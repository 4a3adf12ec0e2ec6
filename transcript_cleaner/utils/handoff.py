# transcript_cleaner/utils/handoff.py
# ------------------------------------------------------------
# Operator hand-off preprocessor (runs before any model call).
#
# Raw earnings-call transcripts often lose the speaker label of the
# person the operator just introduced:
#
#   Krista(Operator)
#   0
#   Your next question comes from the line of Doug Anmuth with JP Morgan.
#   Thanks so much for taking the questions...      <- no "Doug Anmuth" label
#
# We detect the hand-off phrase, and if the next spoken line is not a
# speaker label we insert "Doug Anmuth (JP Morgan)" in front of it.
# Pure heuristics over free text: when nothing matches we return the
# input untouched.
# ------------------------------------------------------------

from __future__ import annotations

import logging
import re
from typing import List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

_UPPER = "A-ZÀ-ÖØ-Þ"
_WORD = rf"[{_UPPER}][\w'\-]*"
# Up to four capitalized words; middle initials like "S." allowed
_NAME = rf"{_WORD}(?:\s+(?:[{_UPPER}]\.|{_WORD})){{0,3}}"

_LABEL_RE = re.compile(
    rf"^(?:<strong>)?(?P<name>{_NAME})(?:</strong>)?\s*"
    r"(?:\((?P<role>[^()]{1,80})\))?\s*:?$"
)

# Affiliation stops at a sentence end or comma; "J.P." initials do not end it
_ORG_END = r"(?<!\b[A-Z])\s*[.;:!?](?:\s|$)|\s*,\s|\s*$"

_QUESTION_RE = re.compile(
    r"(?i:question)\s+(?i:(?:comes|is\s+coming|will\s+come|is)\s+)?(?i:from)\s+"
    r"(?i:the\s+line\s+of\s+)?"
    rf"(?P<name>{_NAME})"
    rf"(?:\s+(?i:with|from|of|at)\s+(?P<org>.+?)(?={_ORG_END}))?"
    r"(?=\s*[.,;:!?]|\s*$)"
)

_TURN_OVER_RE = re.compile(
    r"(?i:turn\s+(?:the\s+(?:call|conference|floor|line)|it|things)(?:\s+back)?(?:\s+over)?\s+to)\s+"
    r"(?:(?i:our)\s+(?P<role_before>[^,.]+?),\s+)?"
    rf"(?P<name>{_NAME})"
    r"(?:,\s+(?:(?i:our|the)\s+)?(?!(?i:who|which|for|please|and)\b)(?P<role_after>[^,.;]+?))?"
    r"(?=\s*[.;]|\s*,\s|\s+(?i:for|who|please)\b|\s*$)"
)

# Operator lines that sit between the introduction and the speaker
_FILLER_RE = re.compile(
    r"^(?:(?:(?:please\s+)?go\s+ahead|your\s+line\s+is\s+(?:now\s+)?(?:open|live)"
    r"|please\s+proceed|you\s+may\s+(?:begin|proceed))[.!]?\s*)+$",
    re.IGNORECASE,
)


class SpeakerLabel(NamedTuple):
    name: str
    role: Optional[str]
    bold: bool


class Handoff(NamedTuple):
    name: str
    affiliation: Optional[str] = None

    def label(self, bold: bool = False) -> str:
        name = f"<strong>{self.name}</strong>" if bold else self.name
        return f"{name} ({self.affiliation})" if self.affiliation else name


def match_speaker_label(line: str) -> Optional[SpeakerLabel]:
    """Parse a speaker label line like 'Doug Anmuth(JP Morgan)' or return None."""
    stripped = line.strip()
    if not stripped or len(stripped) > 120:
        return None
    m = _LABEL_RE.match(stripped)
    if not m:
        return None
    name = m.group("name")
    role = (m.group("role") or "").strip() or None
    # A single bare capitalized word is far more likely speech ("Thanks")
    if role is None and len(name.split()) < 2 and name.lower() != "operator":
        return None
    return SpeakerLabel(name=name, role=role, bold=stripped.startswith("<strong>"))


def is_speaker_label(line: str) -> bool:
    return match_speaker_label(line) is not None


def strip_stray_zeros(text: str) -> str:
    """Drop lines that are just '0' directly after a speaker label."""
    out: List[str] = []
    prev_is_label = False
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            out.append(line)
            continue
        if stripped == "0" and prev_is_label:
            continue
        prev_is_label = is_speaker_label(stripped)
        out.append(line)
    return "\n".join(out)


def find_handoff(line: str) -> Optional[Handoff]:
    """Return who the operator/executive is handing the floor to, if anyone."""
    m = _QUESTION_RE.search(line)
    if m:
        org = (m.group("org") or "").strip() or None
        return Handoff(name=m.group("name").strip(), affiliation=org)

    m = _TURN_OVER_RE.search(line)
    if m:
        role = m.group("role_after") or m.group("role_before")
        role = role.strip() if role else None
        return Handoff(name=m.group("name").strip(), affiliation=role or None)
    return None


def _same_person(a: str, b: str) -> bool:
    ta = a.lower().split()
    tb = b.lower().split()
    if ta == tb:
        return True
    short, long_ = (ta, tb) if len(ta) <= len(tb) else (tb, ta)
    return bool(short) and all(t in long_ for t in short)


def insert_missing_speaker_labels(text: str) -> Tuple[str, List[str]]:
    """
    Insert the label of an introduced speaker when the transcript skipped it.

    Returns (new_text, labels_inserted_or_completed).
    """
    out: List[str] = []
    changed: List[str] = []
    pending: Optional[Handoff] = None
    last_label_bold = False

    for line in text.split("\n"):
        stripped = line.strip()

        if pending is not None:
            if not stripped or stripped == "0" or _FILLER_RE.match(stripped):
                out.append(line)
                continue

            label = match_speaker_label(stripped)
            if label is None:
                new_label = pending.label(bold=last_label_bold)
                out.append(new_label)
                changed.append(new_label)
            elif label.role is None and pending.affiliation and _same_person(label.name, pending.name):
                completed = f"{stripped.rstrip(':').rstrip()} ({pending.affiliation})"
                out.append(completed)
                changed.append(completed)
                pending = None
                last_label_bold = label.bold
                continue
            pending = None

        label = match_speaker_label(stripped)
        if label is not None:
            last_label_bold = label.bold
            out.append(line)
            continue

        handoff = find_handoff(stripped)
        if handoff is not None:
            pending = handoff
        out.append(line)

    if changed:
        logger.info("Inserted %d speaker label(s) after operator hand-offs", len(changed))
    return "\n".join(out), changed


def preprocess_transcript(text: str) -> Tuple[str, List[str]]:
    """Stray-zero removal followed by hand-off label insertion."""
    return insert_missing_speaker_labels(strip_stray_zeros(text))
