import json
from pathlib import Path
from typing import Any, Callable

import pytest

from fade_compendiums import PackConfig


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project root with a packs/ directory."""
    (tmp_path / "packs").mkdir()
    return tmp_path


@pytest.fixture
def config(project_root: Path) -> PackConfig:
    return PackConfig(root=project_root)


@pytest.fixture
def write_store(project_root: Path) -> Callable[..., Path]:
    """Write a document store for a pack and return its path."""

    def _write(documents: dict[str, Any], pack: str = "actors") -> Path:
        path = project_root / "packs" / f"{pack}.db"
        path.write_text(json.dumps(documents), encoding="utf-8")
        return path

    return _write
