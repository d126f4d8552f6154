"""Tests for document-type discovery and per-type resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from sitebake.config import keys
from sitebake.config.configuration import BakeConfiguration
from sitebake.config.doctypes import match_document_type, scan_document_types
from tests.conftest import make_config


@pytest.fixture
def config() -> BakeConfiguration:
    return make_config(
        {
            "templateFolder": "/site/templates",
            "template.post.file": "post.html",
            "template.page.file": "page.html",
            "template.post.extension": ".htm",
            keys.OUTPUT_EXTENSION: ".html",
        },
        root=None,
    )


class TestPattern:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("template.post.file", "post"),
            ("template.blog-entry.file", "blog-entry"),
            ("template.news_item2.file", "news_item2"),
            ("template.post.extension", None),
            ("template.folder", None),
            ("template..file", None),
            ("template.a.b.file", None),
            ("my.template.post.file", None),
            ("template.post.file.bak", None),
            ("template.po st.file", None),
        ],
    )
    def test_match(self, key: str, expected: str | None) -> None:
        assert match_document_type(key) == expected

    def test_scan_deduplicates(self) -> None:
        found = scan_document_types(["template.post.file", "template.page.file", "template.post.file"])
        assert found == ["post", "page"]


class TestDocumentTypes:
    def test_lists_file_keys_only(self, config: BakeConfiguration) -> None:
        assert set(config.document_types()) == {"post", "page"}

    def test_extension_key_alone_registers_nothing(self) -> None:
        config = make_config({"template.draft.extension": ".txt"})
        assert config.document_types() == []

    def test_new_type_via_configuration(self, config: BakeConfiguration) -> None:
        config.set_template_file_for("gallery", "gallery.html")
        assert set(config.document_types()) == {"post", "page", "gallery"}

    def test_override_in_upper_layer_not_duplicated(self, project_config: BakeConfiguration) -> None:
        types = project_config.document_types()
        assert len(types) == len(set(types))
        assert {"post", "page", "masterindex", "feed"} <= set(types)


class TestTemplateFile:
    def test_joined_with_template_folder(self, config: BakeConfiguration) -> None:
        assert config.template_file_for("post") == Path("/site/templates/post.html")

    def test_missing_type_is_a_miss(self, config: BakeConfiguration) -> None:
        with capture_logs() as logs:
            assert config.template_file_for("missing") is None
        assert logs[0]["log_level"] == "warning"
        assert logs[0]["key"] == "template.missing.file"
        assert logs[0]["doc_type"] == "missing"

    def test_follows_template_folder_changes(self, config: BakeConfiguration) -> None:
        config.set_template_folder("/themes/dark")
        assert config.template_file_for("page") == Path("/themes/dark/page.html")

    def test_project_template_folder(self, project_config: BakeConfiguration, project_root: Path) -> None:
        assert project_config.template_file_for("post") == project_root / "layouts" / "post.html"
        assert project_config.template_file_for("feed") == project_root / "layouts" / "feed.ftl"


class TestOutputExtension:
    def test_per_type_extension(self, config: BakeConfiguration) -> None:
        assert config.output_extension_for("post") == ".htm"

    def test_falls_back_to_global(self, config: BakeConfiguration) -> None:
        assert config.output_extension_for("page") == ".html"
        assert config.output_extension_for("missing") == ".html"

    def test_no_global_default(self) -> None:
        config = make_config({"template.post.file": "post.html"})
        assert config.output_extension_for("post") is None

    def test_set_extension(self, config: BakeConfiguration) -> None:
        config.set_output_extension_for("page", ".xhtml")
        assert config.output_extension_for("page") == ".xhtml"
        assert "page" in config.document_types()


class TestDescribe:
    def test_describe(self, config: BakeConfiguration) -> None:
        described = config.describe_document_type("post")
        assert described.name == "post"
        assert described.template_file == Path("/site/templates/post.html")
        assert described.output_extension == ".htm"


class TestExampleProjects:
    def test_defaults(self, project_config: BakeConfiguration) -> None:
        assert project_config.example_project_for("freemarker") == "example_project_freemarker.zip"
        assert project_config.example_project_for("nope") is None

    def test_set(self, config: BakeConfiguration) -> None:
        config.set_example_project("jinja", "example_project_jinja.zip")
        assert config.example_project_for("jinja") == "example_project_jinja.zip"
