# transcript_cleaner/utils/postprocess.py
# ------------------------------------------------------------
# String clean-up applied to every model reply before it goes
# back to the client.
# ------------------------------------------------------------

import re
from typing import List, Optional, Tuple

CHANGES_MARKER = "---CHANGES---"

# ```html ... ``` wrapping the whole reply
_FENCE_RE = re.compile(r"^\s*```[\w-]*[ \t]*\n(?P<body>.*?)\n?```\s*$", re.DOTALL)
_BOLD_RE = re.compile(r"\*\*(?=\S)(.+?)(?<=\S)\*\*")
_BULLET_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+")


def strip_code_fences(text: str) -> str:
    """Remove a markdown code fence wrapping the entire reply (if any)."""
    m = _FENCE_RE.match(text or "")
    if not m:
        return text or ""
    return m.group("body")


def markdown_bold_to_html(text: str) -> str:
    """**Name** -> <strong>Name</strong>"""
    return _BOLD_RE.sub(r"<strong>\1</strong>", text)


def split_changes(text: str, marker: str = CHANGES_MARKER) -> Tuple[str, Optional[List[str]]]:
    """
    Split '<transcript>\\n---CHANGES---\\n- change 1\\n- change 2'.

    Returns (transcript, changes). changes is None when the marker is
    missing or nothing follows it.
    """
    if marker not in text:
        return text.strip(), None
    body, _, tail = text.partition(marker)
    changes = [_BULLET_RE.sub("", line).strip() for line in tail.splitlines()]
    changes = [c for c in changes if c]
    return body.strip(), changes or None


def clean_model_output(text: Optional[str]) -> str:
    """Fences off, markdown bold -> HTML, outer whitespace trimmed."""
    return markdown_bold_to_html(strip_code_fences(text or "")).strip()


def newlines_to_br(text: str) -> str:
    return text.replace("\n", "<br>")
