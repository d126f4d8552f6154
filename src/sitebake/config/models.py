"""Frozen value objects returned by the resolved configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel


class FolderLayout(BaseModel):
    """Snapshot of every resolved folder, taken atomically."""

    model_config = {"frozen": True}

    source: Path | None = None
    destination: Path | None = None
    asset: Path | None = None
    template: Path | None = None
    content: Path | None = None


class OptionLookup(BaseModel):
    """Result of looking up one ``asciidoctor.option.*`` entry.

    ``found`` separates a missing option from one configured as an empty
    string, which the plain accessor cannot do.
    """

    model_config = {"frozen": True}

    key: str
    found: bool
    value: Any = None


class DocumentType(BaseModel):
    """A document type with its resolved template file and output extension."""

    model_config = {"frozen": True}

    name: str
    template_file: Path | None = None
    output_extension: str | None = None
