"""Core domain models.

Store keys are classified once into one of the ``KeyKind`` variants and the
converter dispatches on ``kind``. Diagnostics and the extraction result are
pydantic models so tests and callers can inspect them directly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

FOLDER_PREFIX = "!folders!"

DiagnosticKind = Literal[
    "malformed_key",
    "orphaned_embedded",
    "missing_folder",
    "folder_cycle",
    "name_collision",
    "write_failed",
]


class FolderKey(BaseModel):
    """``!folders!<id>``"""

    kind: Literal["folder"] = "folder"
    key: str
    id: str


class ContentKey(BaseModel):
    """``!<type>!<id>``, a top-level document written to its own file."""

    kind: Literal["content"] = "content"
    key: str
    doc_type: str
    id: str


class EmbeddedKey(BaseModel):
    """``!<parentType>.<childType>!<parentId>.<childId>``"""

    kind: Literal["embedded"] = "embedded"
    key: str
    parent_type: str
    child_type: str
    parent_id: str
    child_id: str

    @property
    def parent_key(self) -> str:
        return f"!{self.parent_type}!{self.parent_id}"


class MalformedKey(BaseModel):
    """A key that matches none of the patterns above."""

    kind: Literal["malformed"] = "malformed"
    key: str
    reason: str


KeyKind = Annotated[
    Union[FolderKey, ContentKey, EmbeddedKey, MalformedKey],
    Field(discriminator="kind"),
]


class Diagnostic(BaseModel):
    """A tolerated data-quality problem found during extraction."""

    kind: DiagnosticKind
    key: str
    message: str


class ExtractResult(BaseModel):
    """Outcome of one ``Converter.extract`` run."""

    pack: str
    source: Path
    output_dir: Path
    folder_count: int = 0
    extracted: int = 0
    written: list[Path] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    def diagnostics_of(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]
