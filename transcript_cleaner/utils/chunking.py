# transcript_cleaner/utils/chunking.py
# ------------------------------------------------------------
# Split long transcripts into model-sized chunks.
#
# Chunks break at speaker turns so the model always sees a label
# together with what that speaker said. A turn longer than the budget
# is split at line boundaries; a single over-long line is kept whole.
# ------------------------------------------------------------

from typing import List, Optional

from transcript_cleaner.utils.handoff import is_speaker_label


def split_turns(text: str) -> List[str]:
    """
    Split a transcript into speaker turns (label line + following lines).
    Text before the first label becomes its own turn.
    """
    turns: List[List[str]] = []
    current: List[str] = []
    for line in text.split("\n"):
        if is_speaker_label(line) and any(l.strip() for l in current):
            turns.append(current)
            current = []
        current.append(line)
    if current:
        turns.append(current)
    return ["\n".join(t) for t in turns]


def _pack(pieces: List[str], max_chars: int) -> List[str]:
    chunks: List[str] = []
    buf: Optional[str] = None
    for piece in pieces:
        if buf is None:
            buf = piece
        elif len(buf) + 1 + len(piece) > max_chars:
            chunks.append(buf)
            buf = piece
        else:
            buf = f"{buf}\n{piece}"
    if buf is not None:
        chunks.append(buf)
    return chunks


def chunk_transcript(text: str, max_chars: int = 12000) -> List[str]:
    """
    Greedily pack whole speaker turns into chunks of at most max_chars.

    "\\n".join(chunk_transcript(t)) == t.rstrip() for any transcript t.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")
    text = text.rstrip()
    if not text.strip():
        return []

    pieces: List[str] = []
    for turn in split_turns(text):
        if len(turn) <= max_chars:
            pieces.append(turn)
        else:
            # oversized turn -> line-level pieces, packed on their own
            pieces.extend(_pack(turn.split("\n"), max_chars))
    return _pack(pieces, max_chars)
