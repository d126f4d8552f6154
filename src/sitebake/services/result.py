"""Result envelope returned by every inspection query.

The CLI only formats these envelopes; it never reads the configuration
itself. A failed query carries an :class:`ErrorCode` so scripts driving
``sitebake --json`` can branch on a stable value instead of the message.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Stable failure codes of the inspection queries."""

    NOT_FOUND = "NOT_FOUND"  # key or asciidoctor option absent from every layer
    NO_TEMPLATE = "NO_TEMPLATE"  # document type without template.<type>.file


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one query.

    Attributes:
        ok: Whether the query succeeded.
        op: Query name, matching the CLI command (``"paths"``, ``"get"``...).
        data: Query payload; empty on failure.
        warnings: Non-fatal findings, such as folders left unresolved.
        error: Populated only when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(cls, op: str, data: dict[str, Any], warnings: list[str] | None = None) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
