"""Tests for template rendering."""

from __future__ import annotations

import pytest

from framekit.exceptions import UnresolvedPlaceholder
from framekit.template import TemplateRenderer, render_string


class TestRenderString:
    def test_substitutes_placeholder(self):
        assert render_string("# {{projectTitle}}", {"projectTitle": "hello-framework"}) == "# hello-framework"

    def test_whitespace_tolerant(self):
        assert render_string("{{  name }}-{{name}}", {"name": "x"}) == "x-x"

    def test_missing_key_raises(self):
        with pytest.raises(UnresolvedPlaceholder) as exc_info:
            render_string("{{missingKey}}", {"other": "value"})
        assert exc_info.value.key == "missingKey"

    def test_empty_value_raises(self):
        with pytest.raises(UnresolvedPlaceholder):
            render_string("{{ runCommand }}", {"runCommand": ""})

    def test_non_identifier_braces_left_alone(self):
        assert render_string("{{ a-b }} {x}", {}) == "{{ a-b }} {x}"


class TestTemplateRenderer:
    @pytest.fixture
    def template_root(self, tmp_path):
        root = tmp_path / "template"
        (root / "src" / "data").mkdir(parents=True)
        (root / "README.md.tmpl").write_text("# {{projectTitle}}\n\nRun `{{ runCommand }} dev`.\n")
        (root / "src" / "index.md").write_text("{{ left as-is }}\n")
        (root / "src" / "data" / "blob.bin").write_bytes(b"\x00\xff{{projectTitle}}")
        (root / ".DS_Store").write_bytes(b"junk")
        (root / "src" / ".DS_Store").write_bytes(b"junk")
        return root

    def test_renders_tree(self, template_root, tmp_path):
        out = tmp_path / "out"
        written = TemplateRenderer().render(
            template_root, out, {"projectTitle": "hello-framework", "runCommand": "npm run"}
        )

        readme = (out / "README.md").read_text()
        assert readme == "# hello-framework\n\nRun `npm run dev`.\n"
        assert "{{" not in readme
        assert not (out / "README.md.tmpl").exists()
        assert (out / "src" / "index.md").read_text() == "{{ left as-is }}\n"
        assert (out / "src" / "data" / "blob.bin").read_bytes() == b"\x00\xff{{projectTitle}}"
        assert out / "README.md" in written

    def test_skips_ds_store(self, template_root, tmp_path):
        out = tmp_path / "out"
        TemplateRenderer().render(template_root, out, {"projectTitle": "p", "runCommand": "npm run"})
        assert not (out / ".DS_Store").exists()
        assert not (out / "src" / ".DS_Store").exists()

    def test_deterministic_order(self, template_root, tmp_path):
        context = {"projectTitle": "p", "runCommand": "npm run"}
        first = TemplateRenderer().render(template_root, tmp_path / "a", context)
        second = TemplateRenderer().render(template_root, tmp_path / "b", context)
        assert [p.relative_to(tmp_path / "a") for p in first] == [p.relative_to(tmp_path / "b") for p in second]

    def test_existing_directories_tolerated(self, template_root, tmp_path):
        out = tmp_path / "out"
        (out / "src" / "data").mkdir(parents=True)
        TemplateRenderer().render(template_root, out, {"projectTitle": "p", "runCommand": "npm run"})
        assert (out / "README.md").exists()

    def test_unresolved_placeholder_writes_nothing_for_that_file(self, tmp_path):
        root = tmp_path / "template"
        root.mkdir()
        (root / "a.txt").write_text("copied first")
        (root / "b.md.tmpl").write_text("before {{projectTitle}} {{missingKey}} after")
        out = tmp_path / "out"

        with pytest.raises(UnresolvedPlaceholder) as exc_info:
            TemplateRenderer().render(root, out, {"projectTitle": "hello"})

        assert exc_info.value.key == "missingKey"
        assert not (out / "b.md").exists()
        # earlier files are not rolled back
        assert (out / "a.txt").read_text() == "copied first"

    def test_pluggable_writes(self, template_root, tmp_path):
        writes = []
        renderer = TemplateRenderer(
            mkdir=lambda path: None,
            copy_file=lambda src, dst: writes.append(("copy", dst.name)),
            write_file=lambda path, contents: writes.append(("write", path.name)),
        )
        renderer.render(template_root, tmp_path / "out", {"projectTitle": "p", "runCommand": "npm run"})
        assert writes == [("write", "README.md"), ("copy", "blob.bin"), ("copy", "index.md")]

    def test_line_endings_preserved(self, tmp_path):
        root = tmp_path / "template"
        root.mkdir()
        (root / "notes.txt.tmpl").write_bytes(b"# {{projectTitle}}\r\n\r\nline two\r\n")
        out = tmp_path / "out"

        TemplateRenderer().render(root, out, {"projectTitle": "hello"})

        assert (out / "notes.txt").read_bytes() == b"# hello\r\n\r\nline two\r\n"
