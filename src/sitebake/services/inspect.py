"""InspectService — read-only views of a resolved configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sitebake.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from sitebake.config.configuration import BakeConfiguration

logger = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    """Convert store values into JSON-friendly primitives."""
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


class InspectService:
    """Queries behind the ``sitebake`` inspection commands.

    Every method is a pure read; the configuration is expected to be
    frozen before it reaches this service.
    """

    def __init__(self, config: BakeConfiguration) -> None:
        self._config = config

    def paths(self) -> ServiceResult:
        """Resolved folders plus the relative names they derive from."""
        layout = self._config.folder_layout()
        data = {name: _plain(value) for name, value in layout.model_dump().items()}
        data["names"] = {
            "destination": self._config.destination_folder_name,
            "asset": self._config.asset_folder_name,
            "template": self._config.template_folder_name,
            "content": self._config.content_folder_name,
        }
        warnings = [
            f"{name} folder is not resolved"
            for name, value in layout.model_dump().items()
            if value is None
        ]
        return ServiceResult.success("paths", data, warnings)

    def document_types(self) -> ServiceResult:
        """Every discovered document type with its template and extension."""
        items = [
            self._config.describe_document_type(doc_type).model_dump(mode="json")
            for doc_type in sorted(self._config.document_types())
        ]
        return ServiceResult.success("doctypes", {"count": len(items), "items": items})

    def document_type(self, doc_type: str) -> ServiceResult:
        described = self._config.describe_document_type(doc_type)
        if described.template_file is None:
            return ServiceResult.failure(
                "doctype",
                ErrorCode.NO_TEMPLATE,
                f"Document type {doc_type!r} has no template mapping",
                doc_type=doc_type,
            )
        return ServiceResult.success("doctype", described.model_dump(mode="json"))

    def options(self) -> ServiceResult:
        """All ``asciidoctor.option.*`` entries plus attribute settings."""
        options = {
            key: _plain(self._config.lookup_asciidoctor_option(key).value)
            for key in self._config.asciidoctor_option_keys()
        }
        data = {
            "count": len(options),
            "options": options,
            "attributes": self._config.asciidoctor_attributes(),
            "export_attributes": self._config.export_asciidoctor_attributes,
            "export_prefix": self._config.asciidoctor_attributes_export_prefix,
        }
        return ServiceResult.success("options", data)

    def option(self, option_key: str) -> ServiceResult:
        lookup = self._config.lookup_asciidoctor_option(option_key)
        if not lookup.found:
            return ServiceResult.failure(
                "option",
                ErrorCode.NOT_FOUND,
                f"Asciidoctor option {option_key!r} is not configured",
                key=option_key,
            )
        return ServiceResult.success("option", {"key": option_key, "value": _plain(lookup.value)})

    def get(self, key: str) -> ServiceResult:
        store = self._config.store
        if key not in store:
            return ServiceResult.failure("get", ErrorCode.NOT_FOUND, f"No such key: {key!r}", key=key)
        return ServiceResult.success("get", {"key": key, "value": _plain(store.get_property(key))})

    def keys(self, prefix: str | None = None) -> ServiceResult:
        """Effective keys and values, optionally narrowed to ``prefix.``."""
        effective = self._config.effective_values(prefix)
        values = {key: _plain(effective[key]) for key in sorted(effective)}
        logger.debug("Listed %d keys (prefix=%s)", len(values), prefix)
        return ServiceResult.success("keys", {"count": len(values), "values": values})
