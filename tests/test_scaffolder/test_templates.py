"""Tests for the placeholder renderer.

Covers:
- String rendering, including missing keys and non-matching braces
- Path rendering
- Packaged templates
- Tree rendering with binary files
"""

from __future__ import annotations

from pathlib import Path

import pytest

from flutter_scaffold.scaffolder.emitter import FileEmitter
from flutter_scaffold.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


class TestRenderString:
    def test_substitutes(self, renderer):
        assert renderer.render_string("hello {{name}}", {"name": "world"}) == "hello world"

    def test_missing_key_is_empty(self, renderer):
        assert renderer.render_string("hello {{missing}}", {}) == "hello "

    def test_multiple_occurrences(self, renderer):
        text = "{{a}}-{{b}}-{{a}}"
        assert renderer.render_string(text, {"a": "x", "b": "y"}) == "x-y-x"

    @pytest.mark.parametrize(
        "text",
        ["{{ name }}", "{{name.snakeCase()}}", "{{", "{{}}", "{name}", "${name}", "{{na-me}}"],
    )
    def test_non_matching_left_untouched(self, renderer, text):
        assert renderer.render_string(text, {"name": "x"}) == text

    def test_unrelated_text_unchanged(self, renderer):
        dart = "Widget build(BuildContext context) { return Container(); }"
        assert renderer.render_string(dart, {"name": "x"}) == dart


class TestRenderPath:
    def test_each_component(self, renderer):
        result = renderer.render_path("{{name}}/lib/{{name}}_config.dart", {"name": "core"})
        assert result == Path("core/lib/core_config.dart")


class TestPackagedTemplates:
    def test_list_templates(self, renderer):
        templates = renderer.list_templates()
        assert "domain/repository.dart.tmpl" in templates
        assert "presentation/cubit.dart.tmpl" in templates

    def test_list_templates_prefix(self, renderer):
        assert all(t.startswith("data/") for t in renderer.list_templates("data"))

    def test_list_templates_missing_prefix(self, renderer):
        assert renderer.list_templates("nope") == []

    def test_render_domain_repository(self, renderer):
        result = renderer.render("domain/repository.dart.tmpl", {"pascal_name": "OrderDetails"})
        assert "abstract class OrderDetailsRepository" in result

    def test_render_missing_template(self, renderer):
        with pytest.raises(FileNotFoundError):
            renderer.render("nope.tmpl", {})

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "greet.tmpl").write_text("hi {{who}}", encoding="utf-8")
        assert TemplateRenderer(tmp_path).render("greet.tmpl", {"who": "you"}) == "hi you"


class TestRenderTree:
    def test_renders_paths_and_contents(self, renderer, tmp_path: Path):
        source = tmp_path / "src"
        (source / "{{name}}").mkdir(parents=True)
        (source / "{{name}}" / "{{name}}_page.dart").write_text(
            "class {{pascal_name}}Page {}", encoding="utf-8"
        )
        (source / "README.md").write_text("{{name}}", encoding="utf-8")
        out = tmp_path / "out"

        written = renderer.render_tree(source, out, {"name": "cart", "pascal_name": "Cart"})

        page = out / "cart" / "cart_page.dart"
        assert page.read_text(encoding="utf-8") == "class CartPage {}"
        assert (out / "README.md").read_text(encoding="utf-8") == "cart"
        assert sorted(written) == sorted([page, out / "README.md"])

    def test_binary_copied_unchanged(self, renderer, tmp_path: Path):
        source = tmp_path / "src"
        source.mkdir()
        payload = b"\xff\xfe{{name}}"
        (source / "{{name}}.png").write_bytes(payload)

        renderer.render_tree(source, tmp_path / "out", {"name": "logo"})

        assert (tmp_path / "out" / "logo.png").read_bytes() == payload

    def test_missing_source(self, renderer, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            renderer.render_tree(tmp_path / "nope", tmp_path / "out", {})

    def test_uses_given_emitter(self, renderer, tmp_path: Path):
        source = tmp_path / "src"
        source.mkdir()
        (source / "a.txt").write_text("a", encoding="utf-8")
        blocker = tmp_path / "out"
        blocker.write_text("not a directory", encoding="utf-8")
        emitter = FileEmitter(extension="")

        written = renderer.render_tree(source, blocker, {}, emitter)

        assert written == []
        assert len(emitter.failures) == 1
