"""Filename sanitization for pack output paths."""

import re
from typing import Any

FALLBACK_NAME = "unnamed"

# Windows-invalid characters plus whitespace and ampersand
_INVALID_RUN = re.compile(r'[<>:"|?*\\/\s&]+')
_UNDERSCORES = re.compile(r"_{2,}")


def sanitize_filename(name: Any) -> str:
    """Convert a display name into a path component safe on Windows and Linux.

    "Goblin: Chief / Boss" → "Goblin_Chief_Boss"
    """
    if not name or not isinstance(name, str):
        return FALLBACK_NAME
    text = _INVALID_RUN.sub("_", name)
    text = _UNDERSCORES.sub("_", text)
    text = text.strip("_").strip()
    return text or FALLBACK_NAME
