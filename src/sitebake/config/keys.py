"""Configuration key names.

Two families of folder keys coexist in the store:

* absolute-location keys (``templateFolder``) hold resolved paths and are
  engine-internal;
* relative-name keys (``template.folder``) are project-facing, live in
  ``sitebake.toml`` and are used to recompute the absolute keys whenever
  the source root moves.
"""

from __future__ import annotations

# --- Absolute-location keys ---

SOURCE_FOLDER_KEY = "sourceFolder"
DESTINATION_FOLDER_KEY = "destinationFolder"
ASSET_FOLDER_KEY = "assetFolder"
TEMPLATE_FOLDER_KEY = "templateFolder"
CONTENT_FOLDER_KEY = "contentFolder"

# --- Relative-name keys ---

DESTINATION_FOLDER = "destination.folder"
ASSET_FOLDER = "asset.folder"
TEMPLATE_FOLDER = "template.folder"
CONTENT_FOLDER = "content.folder"

# --- Document types ---

TEMPLATE_PREFIX = "template"
TEMPLATE_FILE_SUFFIX = "file"
TEMPLATE_EXTENSION_SUFFIX = "extension"
EXAMPLE_PROJECT_PREFIX = "example.project"
OUTPUT_EXTENSION = "output.extension"

# --- Asciidoctor ---

ASCIIDOCTOR_OPTION = "asciidoctor.option"
ASCIIDOCTOR_ATTRIBUTES = "asciidoctor.attributes"
ASCIIDOCTOR_ATTRIBUTES_EXPORT = "asciidoctor.attributes.export"
ASCIIDOCTOR_ATTRIBUTES_EXPORT_PREFIX = "asciidoctor.attributes.export.prefix"

# --- Rendering ---

RENDER_ARCHIVE = "render.archive"
RENDER_FEED = "render.feed"
RENDER_INDEX = "render.index"
RENDER_SITEMAP = "render.sitemap"
RENDER_TAGS = "render.tags"
RENDER_TAGS_INDEX = "render.tagsindex"
RENDER_ENCODING = "render.encoding"
TEMPLATE_ENCODING = "template.encoding"
THYMELEAF_LOCALE = "thymeleaf.locale"

# --- File and path names ---

ARCHIVE_FILE = "archive.file"
FEED_FILE = "feed.file"
INDEX_FILE = "index.file"
SITEMAP_FILE = "sitemap.file"
TAG_PATH = "tag.path"
TAG_SANITIZE = "tag.sanitize"
DRAFT_SUFFIX = "draft.suffix"
URI_NO_EXTENSION = "uri.noExtension"
URI_NO_EXTENSION_PREFIX = "uri.noExtension.prefix"
ASSET_IGNORE_HIDDEN = "asset.ignore"

# --- Pagination ---

PAGINATE_INDEX = "index.paginate"
POSTS_PER_PAGE = "index.posts_per_page"

# --- Content defaults ---

DEFAULT_STATUS = "default.status"
DEFAULT_TYPE = "default.type"
DATE_FORMAT = "date.format"
HEADER_SEPARATOR = "header.separator"

# --- Markdown ---

MARKDOWN_EXTENSIONS = "markdown.extensions"
MARKDOWN_MAX_PARSING_TIME = "markdown.maxParsingTimeInMillis"

# --- Cache database ---

DB_STORE = "db.store"
DB_PATH = "db.path"
CLEAR_CACHE = "db.clear.cache"

# --- Site and server ---

SITE_HOST = "site.host"
SERVER_PORT = "server.port"
VERSION = "version"
BUILD_TIMESTAMP = "build.timestamp"


def template_file_key(doc_type: str) -> str:
    """Key naming the template file that renders *doc_type*."""
    return f"{TEMPLATE_PREFIX}.{doc_type}.{TEMPLATE_FILE_SUFFIX}"


def template_extension_key(doc_type: str) -> str:
    """Key naming the output extension for *doc_type*."""
    return f"{TEMPLATE_PREFIX}.{doc_type}.{TEMPLATE_EXTENSION_SUFFIX}"


def example_project_key(template_type: str) -> str:
    return f"{EXAMPLE_PROJECT_PREFIX}.{template_type}"
