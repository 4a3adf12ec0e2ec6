# transcript_cleaner/utils/prompt_loader.py
# ------------------------------------------------------------
# Prompt loader + renderer utilities
#
# Every model pass has two prompt files under transcript_cleaner/prompts/:
#
#   <pass>.system.txt   -> editor persona + hard rules
#   <pass>.user.txt     -> instruction + {{ transcript }} placeholder
#
# services/cleanup_passes.py maps each pass to its two files.
#
# Placeholders use the form:  {{ variable_name }}
# Dict/List values are pretty-printed as JSON automatically.
# ------------------------------------------------------------

import json
import re
from pathlib import Path
from typing import Any, Dict

PROMPTS_DIR = Path(__file__).resolve().parents[1] / "prompts"

# Match {{ var }} with optional whitespace
_VAR_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")

def load_prompt(filename: str) -> str:
    """
    Load a single prompt file from transcript_cleaner/prompts/<filename>.
    """
    path = PROMPTS_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Prompt file {filename} not found in {PROMPTS_DIR}")
    return path.read_text(encoding="utf-8")

# --------------------------
# Internal helpers
# --------------------------
def _jsonify(val: Any) -> str:
    """
    Convert dict/list to pretty JSON; otherwise cast to str.
    """
    if isinstance(val, (dict, list)):
        return json.dumps(val, indent=2, ensure_ascii=False)
    return str(val)

def _substitute(template: str, ctx: Dict[str, Any]) -> str:
    """
    Perform {{ var }} substitution on a template using the given context.
    """

    def replacer(match: re.Match) -> str:
        key = match.group(1)  # the name inside {{ ... }}
        if key not in ctx:
            # Leave placeholder intact if no value was provided
            return match.group(0)
        return _jsonify(ctx[key])

    return _VAR_RE.sub(replacer, template)

# --------------------------
# Public API
# --------------------------
def render_prompt(template: str, context: Dict[str, Any] | None = None, **kwargs) -> str:
    """
    render_prompt(template_str, transcript=..., ...)

    Values come from the optional 'context' dict merged with kwargs
    (kwargs win). Unknown placeholders are left untouched.
    """
    ctx: Dict[str, Any] = {}
    if context:
        ctx.update(context)
    ctx.update(kwargs)
    return _substitute(template, ctx)
