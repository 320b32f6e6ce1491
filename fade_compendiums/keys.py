"""Store key classification.

Key grammar: ``!<type>[.<subtype>]!<id>[.<childId>]``

  "!folders!abc"         → FolderKey
  "!actors!P1"           → ContentKey
  "!actors.items!P1.C1"  → EmbeddedKey (parent key "!actors!P1")
  anything else          → MalformedKey
"""

from __future__ import annotations

import re

from .models import (
    FOLDER_PREFIX,
    ContentKey,
    EmbeddedKey,
    FolderKey,
    KeyKind,
    MalformedKey,
)

_KEY_RE = re.compile(r"^!([^!]+)!(.+)$", re.DOTALL)


def classify_key(key: str) -> KeyKind:
    """Classify a store key into exactly one variant."""
    if key.startswith(FOLDER_PREFIX):
        return FolderKey(key=key, id=key[len(FOLDER_PREFIX):])

    match = _KEY_RE.match(key)
    if match is None:
        return MalformedKey(key=key, reason="key does not match !<type>!<id>")

    type_section, id_section = match.groups()
    if "." not in type_section:
        return ContentKey(key=key, doc_type=type_section, id=id_section)

    parent_type, _, child_type = type_section.partition(".")
    parent_id, _, child_id = id_section.partition(".")
    if not parent_id or not child_id:
        return MalformedKey(
            key=key, reason="embedded key is missing a parent or child id"
        )
    return EmbeddedKey(
        key=key,
        parent_type=parent_type,
        child_type=child_type,
        parent_id=parent_id,
        child_id=child_id,
    )
