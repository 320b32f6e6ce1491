"""Document store → JSON file tree converter.

Extraction flow for one pack:
  1. Delete the pack output folder (absence is fine, anything else is fatal).
  2. Parse the whole store file as one JSON object.
  3. Classify every key once (folder / content / embedded / malformed).
  4. Write all folder documents to ``_folders.json`` (skipped when none).
  5. Nest embedded documents into their parents under ``embedded``.
  6. Resolve each content document's folder chain into a directory path.
  7. Write one ``<sanitized name>.json`` per content document.

Data-quality problems never abort the run; they are logged and collected as
``Diagnostic`` entries on the returned ``ExtractResult``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
from pathlib import Path
from typing import Any

from .config import AVAILABLE_PACKS, DEFAULT_PACK, PackConfig
from .keys import classify_key
from .models import (
    FOLDER_PREFIX,
    ContentKey,
    Diagnostic,
    ExtractResult,
    KeyKind,
    MalformedKey,
)
from .sanitize import sanitize_filename

logger = logging.getLogger(__name__)

FOLDERS_FILENAME = "_folders.json"

Document = dict[str, Any]


class ConvertError(Exception):
    """Base class for fatal extraction errors."""


class InvalidPackError(ConvertError, ValueError):
    """Raised when a pack name is not one of AVAILABLE_PACKS."""


class StoreNotFoundError(ConvertError, FileNotFoundError):
    """Raised when the source document store does not exist."""


class StoreParseError(ConvertError, ValueError):
    """Raised when the source document store is not a JSON object."""


class PackFolderError(ConvertError, OSError):
    """Raised when the pack output folder cannot be deleted or created."""


def validate_pack_name(pack: str) -> None:
    if pack not in AVAILABLE_PACKS:
        raise InvalidPackError(
            f"Invalid pack name: {pack}. Available packs: {', '.join(AVAILABLE_PACKS)}"
        )


class Converter:
    """Extracts one pack's document store into a tree of JSON files.

    Args:
        pack:   Pack name, one of AVAILABLE_PACKS. Defaults to "actors".
        config: Path configuration. Defaults to ``PackConfig.from_env()``.
    """

    def __init__(self, pack: str = DEFAULT_PACK, config: PackConfig | None = None) -> None:
        validate_pack_name(pack)
        self.pack = pack
        self.config = config or PackConfig.from_env()
        self.source = self.config.source_file(pack)
        self.output_dir = self.config.pack_output_dir(pack)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def extract(self, source: Path | str | None = None) -> ExtractResult:
        """Extract documents from the store file into individual JSON files."""
        db_file = Path(source) if source else self.source
        if not await asyncio.to_thread(db_file.is_file):
            raise StoreNotFoundError(f"Database file not found: {db_file}")

        result = ExtractResult(pack=self.pack, source=db_file, output_dir=self.output_dir)

        await self.delete_pack_folder()
        documents = await self._load_store(db_file)
        await self.ensure_output_dir()

        classified = self.classify(documents, result)
        folders = await self.extract_folders(classified, result)
        await self.extract_documents(classified, folders, result)

        logger.info("Extraction completed for: %s", db_file)
        return result

    # ------------------------------------------------------------------
    # Filesystem helpers
    # ------------------------------------------------------------------

    async def delete_pack_folder(self) -> None:
        """Delete the pack output folder and everything in it."""
        try:
            await asyncio.to_thread(shutil.rmtree, self.output_dir)
        except FileNotFoundError:
            logger.info("Pack folder does not exist: %s", self.output_dir)
            return
        except OSError as e:
            raise PackFolderError(
                f"Failed to delete pack folder: {self.output_dir} - {e}"
            ) from e
        logger.info("Deleted pack folder: %s", self.output_dir)

    async def ensure_output_dir(self) -> None:
        try:
            await asyncio.to_thread(self.output_dir.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise PackFolderError(
                f"Failed to create output directory: {self.output_dir} - {e}"
            ) from e

    async def _load_store(self, db_file: Path) -> dict[str, Any]:
        try:
            text = await asyncio.to_thread(db_file.read_text, encoding="utf-8")
            documents = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StoreParseError(f"Database file is not valid JSON: {db_file} - {e}") from e
        if not isinstance(documents, dict):
            raise StoreParseError(
                f"Database file must contain a JSON object, got {type(documents).__name__}: {db_file}"
            )
        return documents

    async def _write_json(self, path: Path, data: Any) -> None:
        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

        await asyncio.to_thread(_write)

    # ------------------------------------------------------------------
    # Classification and partitioning
    # ------------------------------------------------------------------

    def classify(
        self, documents: dict[str, Any], result: ExtractResult
    ) -> list[tuple[KeyKind, Document]]:
        """Classify every key once. Malformed keys are dropped here."""
        classified: list[tuple[KeyKind, Document]] = []
        for key, document in documents.items():
            kind = classify_key(key)
            if kind.kind != "malformed" and not isinstance(document, dict):
                kind = MalformedKey(key=key, reason="document body is not an object")
            if isinstance(kind, MalformedKey):
                logger.debug("Skipping malformed key %r: %s", key, kind.reason)
                result.diagnostics.append(
                    Diagnostic(kind="malformed_key", key=key, message=kind.reason)
                )
                continue
            classified.append((kind, document))
        return classified

    async def extract_folders(
        self, classified: list[tuple[KeyKind, Document]], result: ExtractResult
    ) -> dict[str, Document]:
        """Write folder documents to _folders.json and return them by key."""
        folders = {kind.key: doc for kind, doc in classified if kind.kind == "folder"}
        result.folder_count = len(folders)
        if not folders:
            logger.info("No folder documents found to extract.")
            return folders

        path = self.output_dir / FOLDERS_FILENAME
        await self._write_json(path, folders)
        logger.info("Extracted %d folder documents to: %s", len(folders), path)
        return folders

    def organize_documents(
        self, classified: list[tuple[KeyKind, Document]], result: ExtractResult
    ) -> dict[str, tuple[ContentKey, Document]]:
        """Return top-level documents with embedded children nested in.

        Each top-level document is a shallow copy of its store record. When
        embedded children exist they are set as ``embedded`` in source order.
        Children whose parent is absent are dropped.
        """
        top_level: dict[str, tuple[ContentKey, Document]] = {}
        embedded: dict[str, list[tuple[str, Document]]] = {}

        for kind, document in classified:
            if kind.kind == "content":
                top_level[kind.key] = (kind, dict(document))
            elif kind.kind == "embedded":
                embedded.setdefault(kind.parent_key, []).append((kind.key, document))

        for parent_key, children in embedded.items():
            if parent_key in top_level:
                top_level[parent_key][1]["embedded"] = [doc for _, doc in children]
                continue
            for child_key, _ in children:
                logger.debug("Dropping orphaned embedded document %s", child_key)
                result.diagnostics.append(
                    Diagnostic(
                        kind="orphaned_embedded",
                        key=child_key,
                        message=f"Parent document not found: {parent_key}",
                    )
                )
        return top_level

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def resolve_folder_path(
        self,
        key: str,
        document: Document,
        folders: dict[str, Document],
        result: ExtractResult,
    ) -> list[str]:
        """Return sanitized folder names from the pack root down to the document."""
        parts: list[str] = []
        folder_id = document.get("folder")
        seen: set[str] = set()

        while folder_id:
            folder_key = f"{FOLDER_PREFIX}{folder_id}"
            if folder_key in seen:
                logger.warning("Folder cycle detected at %s (document %s)", folder_key, key)
                result.diagnostics.append(
                    Diagnostic(
                        kind="folder_cycle",
                        key=key,
                        message=f"Folder cycle detected at: {folder_key}",
                    )
                )
                break
            seen.add(folder_key)

            folder = folders.get(folder_key)
            if folder is None:
                logger.warning("Folder reference not found: %s (document %s)", folder_key, key)
                result.diagnostics.append(
                    Diagnostic(
                        kind="missing_folder",
                        key=key,
                        message=f"Folder reference not found: {folder_key}",
                    )
                )
                break

            parts.insert(0, sanitize_filename(folder.get("name")))
            folder_id = folder.get("folder")
        return parts

    # ------------------------------------------------------------------
    # Document extraction
    # ------------------------------------------------------------------

    @staticmethod
    def _unique_path(folder_dir: Path, name: str, doc_id: str, used: set[Path]) -> Path:
        """First unused ``<name>_<id>[_<n>].json`` in folder_dir."""
        stem = f"{name}_{sanitize_filename(doc_id)}"
        path = folder_dir / f"{stem}.json"
        counter = 2
        while path in used:
            path = folder_dir / f"{stem}_{counter}.json"
            counter += 1
        return path

    async def extract_documents(
        self,
        classified: list[tuple[KeyKind, Document]],
        folders: dict[str, Document],
        result: ExtractResult,
    ) -> int:
        """Write every top-level document to its own JSON file."""
        top_level = self.organize_documents(classified, result)
        used: set[Path] = set()

        for key, (content_key, document) in top_level.items():
            try:
                folder_dir = self.output_dir.joinpath(
                    *self.resolve_folder_path(key, document, folders, result)
                )
                name = sanitize_filename(document.get("name"))
                path = folder_dir / f"{name}.json"
                if path in used:
                    path = self._unique_path(folder_dir, name, content_key.id, used)
                    logger.warning("Name collision for %s, writing to %s", key, path.name)
                    result.diagnostics.append(
                        Diagnostic(
                            kind="name_collision",
                            key=key,
                            message=f"{name}.json already written, using {path.name}",
                        )
                    )
                used.add(path)

                await self._write_json(path, document)
            except (OSError, ValueError) as e:
                logger.error("Error extracting document %s: %s", key, e)
                result.diagnostics.append(
                    Diagnostic(kind="write_failed", key=key, message=str(e))
                )
                continue

            result.written.append(path)
            result.extracted += 1

        logger.info("Extracted %d documents to individual JSON files.", result.extracted)
        return result.extracted
