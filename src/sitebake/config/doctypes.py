"""Document-type discovery from configuration key shape.

A document type is never declared. It exists because some layer holds a
``template.<type>.file`` key; ``template.<type>.extension`` only
configures a type, it never registers one.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

TEMPLATE_DOC_PATTERN = re.compile(r"template\.([A-Za-z0-9_-]+)\.file")


def match_document_type(key: str) -> str | None:
    """Return the document type registered by *key*, or None."""
    match = TEMPLATE_DOC_PATTERN.fullmatch(key)
    return match.group(1) if match else None


def scan_document_types(keys: Iterable[str]) -> list[str]:
    """Collect document types from *keys*, deduplicated in first-seen order."""
    found: dict[str, None] = {}
    for key in keys:
        doc_type = match_document_type(key)
        if doc_type is not None:
            found.setdefault(doc_type, None)
    return list(found)
