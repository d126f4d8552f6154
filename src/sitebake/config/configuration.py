"""Resolved runtime configuration for a sitebake project.

:class:`BakeConfiguration` sits on top of a :class:`LayeredStore` and adds
the two pieces that are more than pass-through lookups:

* **Folder resolution.** Destination, asset, template and content
  folders are stored twice: an absolute path under an engine key
  (``templateFolder``) and a relative name under a project key
  (``template.folder``). The absolute value is always ``source root /
  relative name``; every setter that touches one side updates the other
  under the same lock.
* **Document types.** Types are discovered from ``template.<type>.file``
  keys and resolve their template file and output extension on demand.

The object is built and mutated during an initialization phase, then
:meth:`BakeConfiguration.freeze` hands a read-only view to the pipeline.
"""

from __future__ import annotations

import functools
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import structlog

from sitebake.config import keys
from sitebake.config.doctypes import scan_document_types
from sitebake.config.models import DocumentType, FolderLayout, OptionLookup
from sitebake.config.store import LayeredStore
from sitebake.errors import ConfigurationFrozenError

log = structlog.get_logger(__name__)

_F = TypeVar("_F", bound=Callable[..., Any])


def _mutator(method: _F) -> _F:
    """Reject calls once frozen and run the whole method under the lock."""

    @functools.wraps(method)
    def wrapper(self: BakeConfiguration, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            if self._frozen:
                raise ConfigurationFrozenError(method.__name__)
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def _as_path(value: Any) -> Path | None:
    if isinstance(value, Path):
        return value
    if isinstance(value, str) and value:
        return Path(value)
    return None


class BakeConfiguration:
    """Folder locations, document types and typed settings for one project.

    Args:
        source_root: Project base directory. When None, no folder is
            resolved until :meth:`set_source_root` is called.
        store: Populated layered store (defaults plus project overrides).
    """

    def __init__(self, source_root: Path | str | None, store: LayeredStore) -> None:
        self._store = store
        self._lock = threading.RLock()
        self._frozen = False
        if source_root is not None:
            self._store.set_property(keys.SOURCE_FOLDER_KEY, Path(source_root))
            # Destination first, it does not follow set_source_root.
            self._resolve_destination()
            self._resolve_relative_to_source()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def store(self) -> LayeredStore:
        return self._store

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """End the initialization phase; later mutations raise."""
        with self._lock:
            self._frozen = True

    # ------------------------------------------------------------------
    # Folder resolution
    # ------------------------------------------------------------------

    def _int(self, key: str, default: int) -> int:
        value = self._store.get_long(key, default)
        return default if value is None else value

    def _folder(self, key: str) -> Path | None:
        return _as_path(self._store.get_property(key))

    def _derive(self, relative_key: str) -> Path | None:
        root = self.source_folder
        name = self._store.get_string(relative_key)
        if root is None or name is None:
            return None
        return root / name

    def _resolve_destination(self) -> None:
        destination = self._derive(keys.DESTINATION_FOLDER)
        if destination is not None:
            self._store.set_property(keys.DESTINATION_FOLDER_KEY, destination)

    def _resolve_relative_to_source(self) -> None:
        for absolute_key, relative_key in (
            (keys.ASSET_FOLDER_KEY, keys.ASSET_FOLDER),
            (keys.TEMPLATE_FOLDER_KEY, keys.TEMPLATE_FOLDER),
            (keys.CONTENT_FOLDER_KEY, keys.CONTENT_FOLDER),
        ):
            folder = self._derive(relative_key)
            if folder is not None:
                self._store.set_property(absolute_key, folder)

    def _set_folder(self, absolute_key: str, relative_key: str, folder: Path | str | None) -> None:
        if folder is None:
            return
        path = Path(folder)
        self._store.set_property(absolute_key, path)
        self._store.set_property(relative_key, path.name)

    @_mutator
    def set_source_root(self, root: Path | str) -> None:
        """Move the source root and recompute asset, template and content folders.

        The destination folder keeps its location; use
        :meth:`set_destination_folder_name` to re-derive it.
        """
        self._store.set_property(keys.SOURCE_FOLDER_KEY, Path(root))
        self._resolve_relative_to_source()

    @_mutator
    def set_destination_folder_name(self, name: str) -> None:
        """Store a destination path relative to the source root and re-derive it."""
        self._store.set_property(keys.DESTINATION_FOLDER, name)
        self._resolve_destination()

    @_mutator
    def set_destination_folder(self, folder: Path | str | None) -> None:
        self._set_folder(keys.DESTINATION_FOLDER_KEY, keys.DESTINATION_FOLDER, folder)

    @_mutator
    def set_asset_folder(self, folder: Path | str | None) -> None:
        self._set_folder(keys.ASSET_FOLDER_KEY, keys.ASSET_FOLDER, folder)

    @_mutator
    def set_template_folder(self, folder: Path | str | None) -> None:
        self._set_folder(keys.TEMPLATE_FOLDER_KEY, keys.TEMPLATE_FOLDER, folder)

    @_mutator
    def set_content_folder(self, folder: Path | str | None) -> None:
        self._set_folder(keys.CONTENT_FOLDER_KEY, keys.CONTENT_FOLDER, folder)

    @property
    def source_folder(self) -> Path | None:
        return self._folder(keys.SOURCE_FOLDER_KEY)

    @property
    def destination_folder(self) -> Path | None:
        return self._folder(keys.DESTINATION_FOLDER_KEY)

    @property
    def asset_folder(self) -> Path | None:
        return self._folder(keys.ASSET_FOLDER_KEY)

    @property
    def template_folder(self) -> Path | None:
        return self._folder(keys.TEMPLATE_FOLDER_KEY)

    @property
    def content_folder(self) -> Path | None:
        return self._folder(keys.CONTENT_FOLDER_KEY)

    @property
    def destination_folder_name(self) -> str | None:
        return self._store.get_string(keys.DESTINATION_FOLDER)

    @property
    def asset_folder_name(self) -> str | None:
        return self._store.get_string(keys.ASSET_FOLDER)

    @property
    def template_folder_name(self) -> str | None:
        return self._store.get_string(keys.TEMPLATE_FOLDER)

    @property
    def content_folder_name(self) -> str | None:
        return self._store.get_string(keys.CONTENT_FOLDER)

    def folder_layout(self) -> FolderLayout:
        """Read all five folders in one consistent snapshot."""
        with self._lock:
            return FolderLayout(
                source=self.source_folder,
                destination=self.destination_folder,
                asset=self.asset_folder,
                template=self.template_folder,
                content=self.content_folder,
            )

    # ------------------------------------------------------------------
    # Document types
    # ------------------------------------------------------------------

    def document_types(self) -> list[str]:
        """Every type with a ``template.<type>.file`` key, without duplicates.

        Order follows store key iteration and carries no meaning.
        """
        with self._lock:
            return scan_document_types(list(self._store.keys()))

    def template_file_for(self, doc_type: str) -> Path | None:
        """Template file rendering *doc_type*, or None when no mapping exists.

        A missing mapping means the type has no renderer; callers skip it.
        """
        template_key = keys.template_file_key(doc_type)
        file_name = self._store.get_string(template_key)
        if file_name is None:
            log.warning(
                "Cannot find template configuration key",
                key=template_key,
                doc_type=doc_type,
            )
            return None
        folder = self.template_folder
        return folder / file_name if folder is not None else Path(file_name)

    def output_extension_for(self, doc_type: str) -> str | None:
        """Per-type output extension, falling back to ``output.extension``."""
        return self._store.get_string(keys.template_extension_key(doc_type), self.output_extension)

    def describe_document_type(self, doc_type: str) -> DocumentType:
        return DocumentType(
            name=doc_type,
            template_file=self.template_file_for(doc_type),
            output_extension=self.output_extension_for(doc_type),
        )

    @_mutator
    def set_template_file_for(self, doc_type: str, file_name: str) -> None:
        """Map *doc_type* to a template file, registering the type if new."""
        self._store.set_property(keys.template_file_key(doc_type), file_name)

    @_mutator
    def set_output_extension_for(self, doc_type: str, extension: str) -> None:
        self._store.set_property(keys.template_extension_key(doc_type), extension)

    def example_project_for(self, template_type: str) -> str | None:
        return self._store.get_string(keys.example_project_key(template_type))

    @_mutator
    def set_example_project(self, template_type: str, file_name: str) -> None:
        self._store.set_property(keys.example_project_key(template_type), file_name)

    # ------------------------------------------------------------------
    # Asciidoctor
    # ------------------------------------------------------------------

    def asciidoctor_option_keys(self) -> list[str]:
        with self._lock:
            return list(self._store.subset(keys.ASCIIDOCTOR_OPTION).keys())

    def lookup_asciidoctor_option(self, option_key: str) -> OptionLookup:
        """Look up ``asciidoctor.option.<option_key>`` with an explicit found flag."""
        with self._lock:
            options = self._store.subset(keys.ASCIIDOCTOR_OPTION)
        if option_key not in options:
            return OptionLookup(key=option_key, found=False)
        return OptionLookup(key=option_key, found=True, value=options.get_property(option_key))

    def asciidoctor_option(self, option_key: str) -> Any:
        """Option value, or ``""`` when the option is not configured.

        The empty string cannot be told apart from an option configured as
        empty; use :meth:`lookup_asciidoctor_option` where that matters.
        """
        lookup = self.lookup_asciidoctor_option(option_key)
        if not lookup.found or lookup.value is None:
            log.warning(
                "Cannot find asciidoctor option",
                key=f"{keys.ASCIIDOCTOR_OPTION}.{option_key}",
            )
            return ""
        return lookup.value

    def asciidoctor_attributes(self) -> list[str]:
        return self._store.get_string_array(keys.ASCIIDOCTOR_ATTRIBUTES)

    @property
    def export_asciidoctor_attributes(self) -> bool:
        return self._store.get_boolean(keys.ASCIIDOCTOR_ATTRIBUTES_EXPORT)

    @property
    def asciidoctor_attributes_export_prefix(self) -> str:
        return self._store.get_string(keys.ASCIIDOCTOR_ATTRIBUTES_EXPORT_PREFIX, "") or ""

    # ------------------------------------------------------------------
    # Render flags
    # ------------------------------------------------------------------

    @property
    def render_archive(self) -> bool:
        return self._store.get_boolean(keys.RENDER_ARCHIVE)

    @property
    def render_feed(self) -> bool:
        return self._store.get_boolean(keys.RENDER_FEED)

    @property
    def render_index(self) -> bool:
        return self._store.get_boolean(keys.RENDER_INDEX)

    @property
    def render_sitemap(self) -> bool:
        return self._store.get_boolean(keys.RENDER_SITEMAP)

    @property
    def render_tags(self) -> bool:
        return self._store.get_boolean(keys.RENDER_TAGS)

    @property
    def render_tags_index(self) -> bool:
        return self._store.get_boolean(keys.RENDER_TAGS_INDEX)

    @_mutator
    def set_render_tags_index(self, enable: bool) -> None:
        self._store.set_property(keys.RENDER_TAGS_INDEX, enable)

    @property
    def render_encoding(self) -> str | None:
        return self._store.get_string(keys.RENDER_ENCODING)

    @property
    def template_encoding(self) -> str | None:
        return self._store.get_string(keys.TEMPLATE_ENCODING)

    @property
    def thymeleaf_locale(self) -> str | None:
        return self._store.get_string(keys.THYMELEAF_LOCALE)

    # ------------------------------------------------------------------
    # Output naming
    # ------------------------------------------------------------------

    @property
    def output_extension(self) -> str | None:
        return self._store.get_string(keys.OUTPUT_EXTENSION)

    @_mutator
    def set_output_extension(self, extension: str) -> None:
        self._store.set_property(keys.OUTPUT_EXTENSION, extension)

    @property
    def archive_file_name(self) -> str | None:
        return self._store.get_string(keys.ARCHIVE_FILE)

    @property
    def feed_file_name(self) -> str | None:
        return self._store.get_string(keys.FEED_FILE)

    @property
    def index_file_name(self) -> str | None:
        return self._store.get_string(keys.INDEX_FILE)

    @property
    def sitemap_file_name(self) -> str | None:
        return self._store.get_string(keys.SITEMAP_FILE)

    @property
    def tag_path_name(self) -> str | None:
        return self._store.get_string(keys.TAG_PATH)

    @property
    def sanitize_tag(self) -> bool:
        return self._store.get_boolean(keys.TAG_SANITIZE)

    @property
    def draft_suffix(self) -> str:
        return self._store.get_string(keys.DRAFT_SUFFIX, "") or ""

    @property
    def uri_without_extension(self) -> bool:
        return self._store.get_boolean(keys.URI_NO_EXTENSION)

    @_mutator
    def set_uri_without_extension(self, without_extension: bool) -> None:
        self._store.set_property(keys.URI_NO_EXTENSION, without_extension)

    @property
    def prefix_for_uri_without_extension(self) -> str | None:
        return self._store.get_string(keys.URI_NO_EXTENSION_PREFIX)

    @_mutator
    def set_prefix_for_uri_without_extension(self, prefix: str) -> None:
        self._store.set_property(keys.URI_NO_EXTENSION_PREFIX, prefix)

    @property
    def asset_ignore_hidden(self) -> bool:
        return self._store.get_boolean(keys.ASSET_IGNORE_HIDDEN)

    @_mutator
    def set_asset_ignore_hidden(self, ignore_hidden: bool) -> None:
        self._store.set_property(keys.ASSET_IGNORE_HIDDEN, ignore_hidden)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    @property
    def paginate_index(self) -> bool:
        return self._store.get_boolean(keys.PAGINATE_INDEX)

    @_mutator
    def set_paginate_index(self, paginate: bool) -> None:
        self._store.set_property(keys.PAGINATE_INDEX, paginate)

    @property
    def posts_per_page(self) -> int:
        return self._int(keys.POSTS_PER_PAGE, 5)

    @_mutator
    def set_posts_per_page(self, posts_per_page: int) -> None:
        self._store.set_property(keys.POSTS_PER_PAGE, posts_per_page)

    # ------------------------------------------------------------------
    # Content defaults
    # ------------------------------------------------------------------

    @property
    def default_status(self) -> str | None:
        return self._store.get_string(keys.DEFAULT_STATUS)

    @_mutator
    def set_default_status(self, status: str) -> None:
        self._store.set_property(keys.DEFAULT_STATUS, status)

    @property
    def default_type(self) -> str | None:
        """Default content type; an empty setting means none."""
        value = self._store.get_string(keys.DEFAULT_TYPE)
        return value or None

    @_mutator
    def set_default_type(self, content_type: str) -> None:
        self._store.set_property(keys.DEFAULT_TYPE, content_type)

    @property
    def date_format(self) -> str | None:
        return self._store.get_string(keys.DATE_FORMAT)

    @property
    def header_separator(self) -> str | None:
        return self._store.get_string(keys.HEADER_SEPARATOR)

    @_mutator
    def set_header_separator(self, separator: str) -> None:
        self._store.set_property(keys.HEADER_SEPARATOR, separator)

    # ------------------------------------------------------------------
    # Markdown
    # ------------------------------------------------------------------

    @property
    def markdown_extensions(self) -> list[str]:
        return self._store.get_string_array(keys.MARKDOWN_EXTENSIONS)

    @_mutator
    def set_markdown_extensions(self, *extensions: str) -> None:
        self._store.set_property(keys.MARKDOWN_EXTENSIONS, ",".join(extensions))

    def markdown_max_parsing_time(self, default: int) -> int:
        return self._int(keys.MARKDOWN_MAX_PARSING_TIME, default)

    # ------------------------------------------------------------------
    # Cache database
    # ------------------------------------------------------------------

    @property
    def database_store(self) -> str | None:
        return self._store.get_string(keys.DB_STORE)

    @_mutator
    def set_database_store(self, store_type: str) -> None:
        self._store.set_property(keys.DB_STORE, store_type)

    @property
    def database_path(self) -> str | None:
        return self._store.get_string(keys.DB_PATH)

    @_mutator
    def set_database_path(self, path: str) -> None:
        self._store.set_property(keys.DB_PATH, path)

    @property
    def clear_cache(self) -> bool:
        return self._store.get_boolean(keys.CLEAR_CACHE)

    @_mutator
    def set_clear_cache(self, clear: bool) -> None:
        self._store.set_property(keys.CLEAR_CACHE, clear)

    # ------------------------------------------------------------------
    # Site and server
    # ------------------------------------------------------------------

    @property
    def site_host(self) -> str:
        return self._store.get_string(keys.SITE_HOST, "http://www.jbake.org") or ""

    @_mutator
    def set_site_host(self, host: str) -> None:
        self._store.set_property(keys.SITE_HOST, host)

    @property
    def server_port(self) -> int:
        return self._int(keys.SERVER_PORT, 8080)

    @_mutator
    def set_server_port(self, port: int) -> None:
        self._store.set_property(keys.SERVER_PORT, port)

    @property
    def version(self) -> str | None:
        return self._store.get_string(keys.VERSION)

    @property
    def build_timestamp(self) -> str | None:
        return self._store.get_string(keys.BUILD_TIMESTAMP)

    # ------------------------------------------------------------------
    # Generic access
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any:
        return self._store.get_property(key)

    @_mutator
    def set_property(self, key: str, value: Any) -> None:
        self._store.set_property(key, value)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._store.keys())

    def effective_values(self, prefix: str | None = None) -> dict[str, Any]:
        """Effective key/value pairs, optionally narrowed to keys under ``prefix.``.

        The snapshot is taken under the lock so a concurrent writer cannot
        change the key set mid-iteration.
        """
        with self._lock:
            store = self._store.subset(prefix) if prefix else self._store
            return store.as_dict()
