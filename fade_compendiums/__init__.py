"""Compendium pack build tools.

Converts a pack's single-file document store (``packs/<pack>.db``) into a
tree of JSON files (``packsrc/<pack>/``):

  packsrc/<pack>/
    _folders.json            All folder documents, keyed by store key
    <Folder>/<Sub_Folder>/   One directory per resolved folder chain
      <Document_Name>.json   One file per top-level document; embedded
                             child documents are nested under "embedded"

Name rules: runs of < > : " | ? * \\ / whitespace & → "_", repeated "_"
collapsed, leading/trailing "_" stripped, empty → "unnamed".
"""

# Re-export public symbols so `from fade_compendiums import Converter` works.

from .config import AVAILABLE_PACKS, DEFAULT_PACK, PackConfig  # noqa: F401

from .converter import (  # noqa: F401
    ConvertError,
    Converter,
    InvalidPackError,
    PackFolderError,
    StoreNotFoundError,
    StoreParseError,
    validate_pack_name,
)

from .keys import classify_key  # noqa: F401

from .models import (  # noqa: F401
    ContentKey,
    Diagnostic,
    EmbeddedKey,
    ExtractResult,
    FolderKey,
    MalformedKey,
)

from .sanitize import sanitize_filename  # noqa: F401
