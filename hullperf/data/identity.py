"""
Vessel identity normalization.

Every source (docking, coating, ship details, navigation events) spells
vessel names slightly differently: mixed case, stray whitespace, accents
present in one export and missing in another. All cross-source joins go
through normalize() so that those variants collapse to one key.
"""

import re
import unicodedata
from typing import Optional

_WHITESPACE = re.compile(r"\s+")


def normalize(name: Optional[str]) -> str:
    """
    Canonicalize a vessel name into a join key.

    Steps: trim, uppercase, NFD decomposition, strip combining marks,
    collapse internal whitespace to single spaces.

    Args:
        name: Raw vessel name (None and blank strings yield "")

    Returns:
        Normalized key, e.g. "  São  Luís " -> "SAO LUIS"
    """
    if not name:
        return ""

    decomposed = unicodedata.normalize("NFD", str(name).strip().upper())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE.sub(" ", stripped).strip()
