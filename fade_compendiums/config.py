"""Pack names and path configuration.

Paths are resolved from an explicit ``PackConfig`` instead of the process
working directory, so the converter can run against any project root:

  <root>/
    packs/<pack>.db        Source document stores
    packsrc/<pack>/        Extracted JSON tree (wiped and rebuilt per run)

``PackConfig.from_env()`` reads ``FADE_ROOT``, ``FADE_PACKS_DIR`` and
``FADE_OUTPUT_DIR`` (a ``.env`` file in the current directory is loaded first).
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

AVAILABLE_PACKS: tuple[str, ...] = ("actors", "items", "macros", "rollTables")
DEFAULT_PACK = "actors"


class PackConfig(BaseModel):
    root: Path
    packs_dir: Path = Path("packs")
    output_dir: Path = Path("packsrc")

    @classmethod
    def from_env(cls, root: Path | None = None) -> "PackConfig":
        load_dotenv(Path.cwd() / ".env")
        resolved = root or Path(os.getenv("FADE_ROOT", str(Path.cwd())))
        return cls(
            root=resolved,
            packs_dir=Path(os.getenv("FADE_PACKS_DIR", "packs")),
            output_dir=Path(os.getenv("FADE_OUTPUT_DIR", "packsrc")),
        )

    def source_file(self, pack: str) -> Path:
        return self.root / self.packs_dir / f"{pack}.db"

    def pack_output_dir(self, pack: str) -> Path:
        return self.root / self.output_dir / pack
