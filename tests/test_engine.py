# jinjaview — Jinja2 view driver for convention-based web frameworks
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Tests for jinjaview.engine."""

from __future__ import annotations

import pytest
from jinja2 import TemplateNotFound, TemplateSyntaxError

from jinjaview.engine import JinjaEngine


@pytest.fixture
def engine():
    eng = JinjaEngine()
    eng.set_left_delimiter("{")
    eng.set_right_delimiter("}")
    return eng


class TestFetch:
    def test_render_absolute_path(self, engine, tmp_path):
        tpl = tmp_path / "hello.html"
        tpl.write_text("Hello {name}!")
        engine.assign({"name": "Ada"})
        assert engine.fetch(str(tpl)) == "Hello Ada!"

    def test_block_tags_keep_jinja_syntax(self, engine, tmp_path):
        tpl = tmp_path / "loop.html"
        tpl.write_text("{% for item in items %}[{item}]{% endfor %}")
        engine.assign(items=["a", "b"])
        assert engine.fetch(str(tpl)) == "[a][b]"

    def test_include_from_template_dir(self, engine, tmp_path):
        (tmp_path / "common").mkdir()
        (tmp_path / "common" / "header.html").write_text("<h1>{title}</h1>")
        page = tmp_path / "page.html"
        page.write_text('{% include "common/header.html" %}body')
        engine.set_template_dir(str(tmp_path))
        engine.assign(title="Home")
        assert engine.fetch(str(page)) == "<h1>Home</h1>body"

    def test_html_autoescaped(self, engine, tmp_path):
        tpl = tmp_path / "x.html"
        tpl.write_text("{value}")
        engine.assign(value="<b>")
        assert engine.fetch(str(tpl)) == "&lt;b&gt;"

    def test_missing_template_raises(self, engine, tmp_path):
        with pytest.raises(TemplateNotFound):
            engine.fetch(str(tmp_path / "nope.html"))

    def test_template_exists(self, engine, tmp_path):
        (tmp_path / "a.html").write_text("a")
        engine.set_template_dir(str(tmp_path))
        assert engine.template_exists("a.html")
        assert not engine.template_exists("b.html")

    def test_delimiter_change_rebuilds_environment(self, engine, tmp_path):
        tpl = tmp_path / "d.html"
        tpl.write_text("<{name}>")
        engine.assign(name="x")
        engine.config({"autoescape": False})
        first = engine.environment
        engine.set_left_delimiter("<{")
        engine.set_right_delimiter("}>")
        assert engine.environment is not first
        assert engine.fetch(str(tpl)) == "x"


class TestAutoLiteral:
    def test_css_braces_render_as_written(self, engine, tmp_path):
        tpl = tmp_path / "page.html"
        tpl.write_text("<style>body { color: red }</style><p>{name}</p>")
        engine.set_auto_literal(True)
        engine.assign(name="Ada")
        assert engine.fetch(str(tpl)) == "<style>body { color: red }</style><p>Ada</p>"

    def test_blocks_and_raw_sections_untouched(self, engine, tmp_path):
        tpl = tmp_path / "mixed.html"
        tpl.write_text("{% if true %}{ x }{% endif %}{% raw %}{ y }{% endraw %}")
        engine.set_auto_literal(True)
        assert engine.fetch(str(tpl)) == "{ x }{ y }"

    def test_off_by_default(self, engine, tmp_path):
        tpl = tmp_path / "page.html"
        tpl.write_text("<style>body { color: red }</style>")
        with pytest.raises(TemplateSyntaxError):
            engine.fetch(str(tpl))


class TestVariables:
    def test_assign_and_get(self, engine):
        engine.assign({"a": 1}, b=2)
        assert engine.get_template_vars() == {"a": 1, "b": 2}
        assert engine.get_template_vars("a") == 1
        assert engine.get_template_vars("missing") is None

    def test_clear_assign(self, engine):
        engine.assign(a=1, b=2)
        engine.clear_assign("a")
        assert engine.get_template_vars() == {"b": 2}

    def test_clear_all_assign(self, engine):
        engine.assign(a=1)
        engine.clear_all_assign()
        assert engine.get_template_vars() == {}


class TestSettings:
    def test_caching_writes_bytecode_cache(self, engine, tmp_path):
        cache_dir = tmp_path / "cache"
        tpl = tmp_path / "c.html"
        tpl.write_text("cached")
        engine.set_cache_dir(str(cache_dir))
        engine.set_caching(True)
        assert engine.fetch(str(tpl)) == "cached"
        assert any(cache_dir.iterdir())

    def test_cached_bytecode_respects_delimiters(self, engine, tmp_path):
        tpl = tmp_path / "d.txt"
        tpl.write_text("<{name}>")
        engine.set_cache_dir(str(tmp_path / "cache"))
        engine.set_caching(True)
        engine.assign(name="x")
        assert engine.fetch(str(tpl)) == "<x>"
        engine.set_left_delimiter("<{")
        engine.set_right_delimiter("}>")
        assert engine.fetch(str(tpl)) == "x"

    def test_no_cache_dir_without_caching(self, engine, tmp_path):
        cache_dir = tmp_path / "cache"
        tpl = tmp_path / "c.html"
        tpl.write_text("plain")
        engine.set_cache_dir(str(cache_dir))
        engine.fetch(str(tpl))
        assert not cache_dir.exists()

    def test_force_compile_disables_memory_cache(self, engine):
        engine.set_force_compile(True)
        assert engine.environment.cache is None

    def test_merge_compiled_includes_sets_optimized(self, engine):
        engine.set_merge_compiled_includes(False)
        assert engine.environment.optimized is False
        engine.set_merge_compiled_includes(True)
        assert engine.environment.optimized is True

    def test_config_passes_environment_options(self, engine, tmp_path):
        tpl = tmp_path / "t.html"
        tpl.write_text("{% if true %}\nyes{% endif %}")
        engine.config({"trim_blocks": True})
        assert engine.fetch(str(tpl)) == "yes"

    def test_register_filter_and_global(self, engine, tmp_path):
        tpl = tmp_path / "f.html"
        tpl.write_text("{site|shout}")
        engine.register_global("site", "jinjaview")
        engine.register_filter("shout", lambda s: s.upper())
        assert engine.fetch(str(tpl)) == "JINJAVIEW"


class TestCompileTemplates:
    def test_compiles_into_compile_dir(self, engine, tmp_path):
        views = tmp_path / "view"
        (views / "index").mkdir(parents=True)
        (views / "index" / "index.html").write_text("Hi {name}")
        compile_dir = tmp_path / "cache_c"
        engine.set_template_dir(str(views))
        engine.set_compile_dir(str(compile_dir))

        names = engine.compile_templates()

        assert names == ["index/index.html"]
        assert list(compile_dir.glob("*.py"))

    def test_skips_files_with_other_extensions(self, engine, tmp_path):
        views = tmp_path / "view"
        (views / "index").mkdir(parents=True)
        (views / "index" / "index.html").write_text("Hi {name}")
        (views / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe")
        engine.set_template_dir(str(views))
        engine.set_compile_dir(str(tmp_path / "cache_c"))

        assert engine.compile_templates() == ["index/index.html"]

    def test_requires_compile_dir(self, engine):
        with pytest.raises(ValueError, match="No compile directory"):
            engine.compile_templates()
