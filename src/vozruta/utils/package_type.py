"""Parcel type detection."""

import re
from typing import Optional

# (label, pattern) in priority order
PACKAGE_TYPES: tuple[tuple[str, re.Pattern], ...] = (
    ("sobre", re.compile(r"\bsobres?\b", re.IGNORECASE)),
    ("caja", re.compile(r"\bcajas?\b", re.IGNORECASE)),
    ("bicicleta", re.compile(r"\b(?:bicicletas?|bicis?)\b", re.IGNORECASE)),
    ("bolsa", re.compile(r"\bbolsas?\b", re.IGNORECASE)),
    ("paquete", re.compile(r"\bpaquetes?\b", re.IGNORECASE)),
    ("encomienda", re.compile(r"\bencomiendas?\b", re.IGNORECASE)),
)

PACKAGE_LABELS = tuple(label for label, _ in PACKAGE_TYPES)


def detect_package_type(text: str) -> Optional[str]:
    """Return the first parcel type named in the text, or None."""
    if not text:
        return None
    for label, pattern in PACKAGE_TYPES:
        if pattern.search(text):
            return label
    return None
