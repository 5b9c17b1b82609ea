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

"""Jinja2 engine wrapper with an explicit, setter-based API.

The view driver configures its engine through a small set of setters
instead of building a :class:`jinja2.Environment` itself.  Settings map
onto Jinja2 as follows:

* left/right delimiter -> ``variable_start_string`` / ``variable_end_string``
  (``{% %}`` blocks and ``{# #}`` comments keep Jinja2's syntax)
* caching -> :class:`jinja2.FileSystemBytecodeCache` in the cache directory
* force compile -> no in-memory template cache, sources always recompiled
* template directory -> search path for ``include`` / ``extends``
* compile directory -> target of :meth:`JinjaEngine.compile_templates`
* merge compiled includes -> Jinja2's ``optimized`` compilation flag
* auto literal -> a left delimiter followed by whitespace is plain text,
  so inline CSS and JavaScript braces render as written

The environment is built lazily and discarded whenever a setting
changes.
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemBytecodeCache,
    TemplateNotFound,
    select_autoescape,
)
from jinja2.ext import Extension

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 400
DEFAULT_TEMPLATE_EXTENSIONS = ("html", "htm", "xml", "tpl", "txt")


class AutoLiteralExtension(Extension):
    """Treat a left delimiter followed by whitespace as literal text.

    ``body { color: red }`` renders unchanged while ``{name}`` is still a
    variable tag.  Block tags, comments and ``raw`` sections are left
    alone.
    """

    def preprocess(
        self, source: str, name: str | None, filename: str | None = None,
    ) -> str:
        env = self.environment
        bs, be = env.block_start_string, env.block_end_string
        cs, ce = env.comment_start_string, env.comment_end_string
        delimiter = env.variable_start_string
        pattern = re.compile(
            rf"(?P<raw>{re.escape(bs)}[-+]?\s*raw\s*[-+]?{re.escape(be)}.*?"
            rf"{re.escape(bs)}[-+]?\s*endraw\s*[-+]?{re.escape(be)})"
            rf"|(?P<block>{re.escape(bs)}.*?{re.escape(be)})"
            rf"|(?P<comment>{re.escape(cs)}.*?{re.escape(ce)})"
            rf"|(?P<literal>{re.escape(delimiter)})(?=\s)",
            re.DOTALL,
        )
        literal = f"{bs} raw {be}{delimiter}{bs} endraw {be}"

        def replace(match: re.Match[str]) -> str:
            if match.group("literal"):
                return literal
            return match.group(0)

        return pattern.sub(replace, source)


class _PathLoader(BaseLoader):
    """Jinja2 loader for absolute template files and template directories.

    Absolute paths are loaded as they are; other names are looked up in
    each template directory in turn.
    """

    def __init__(self, template_dirs: Iterable[str] = ()) -> None:
        self.template_dirs = [d for d in template_dirs if d]

    def _candidates(self, template: str) -> list[Path]:
        if os.path.isabs(template):
            return [Path(template)]
        return [Path(directory) / template for directory in self.template_dirs]

    def get_source(
        self, environment: Environment, template: str,
    ) -> tuple[str, str, Callable[[], bool]]:
        for path in self._candidates(template):
            if path.is_file():
                source = path.read_text(encoding="utf-8")
                mtime = path.stat().st_mtime
                return source, str(path), lambda: path.is_file() and path.stat().st_mtime == mtime
        raise TemplateNotFound(template)

    def list_templates(self) -> list[str]:
        found: set[str] = set()
        for directory in self.template_dirs:
            root = Path(directory)
            if not root.is_dir():
                continue
            for path in root.rglob("*"):
                if path.is_file():
                    found.add(path.relative_to(root).as_posix())
        return sorted(found)


class JinjaEngine:
    """Render template files with Jinja2.

    Variables are assigned up front with :meth:`assign` and stay bound
    until cleared, so several :meth:`fetch` calls can share them.
    """

    def __init__(self) -> None:
        self.left_delimiter = "{{"
        self.right_delimiter = "}}"
        self.caching = False
        self.force_compile = False
        self.merge_compiled_includes = False
        self.auto_literal = False
        self.template_dirs: list[str] = []
        self.cache_dir = ""
        self.compile_dir = ""
        self._options: dict[str, Any] = {}
        self._filters: dict[str, Callable[..., Any]] = {}
        self._globals: dict[str, Any] = {}
        self._vars: dict[str, Any] = {}
        self._env: Environment | None = None

    # --- Settings -----------------------------------------------------------

    def _changed(self) -> None:
        self._env = None

    def set_left_delimiter(self, delimiter: str) -> None:
        self.left_delimiter = delimiter
        self._changed()

    def set_right_delimiter(self, delimiter: str) -> None:
        self.right_delimiter = delimiter
        self._changed()

    def set_caching(self, caching: bool) -> None:
        self.caching = bool(caching)
        self._changed()

    def set_force_compile(self, force: bool) -> None:
        self.force_compile = bool(force)
        self._changed()

    def set_template_dir(self, template_dir: str | Iterable[str]) -> None:
        """Set the directory (or directories) searched for relative names."""
        if isinstance(template_dir, (str, os.PathLike)):
            template_dir = [template_dir]
        self.template_dirs = [str(d) for d in template_dir if d]
        self._changed()

    def set_cache_dir(self, cache_dir: str) -> None:
        self.cache_dir = str(cache_dir)
        self._changed()

    def set_compile_dir(self, compile_dir: str) -> None:
        self.compile_dir = str(compile_dir)

    def set_merge_compiled_includes(self, merge: bool) -> None:
        self.merge_compiled_includes = bool(merge)
        self._changed()

    def set_auto_literal(self, auto_literal: bool) -> None:
        self.auto_literal = bool(auto_literal)
        self._changed()

    def config(self, options: Mapping[str, Any]) -> None:
        """Pass extra keyword options to :class:`jinja2.Environment`."""
        self._options.update(options)
        self._changed()

    def register_filter(self, name: str, func: Callable[..., Any]) -> None:
        self._filters[name] = func
        if self._env is not None:
            self._env.filters[name] = func

    def register_global(self, name: str, value: Any) -> None:
        self._globals[name] = value
        if self._env is not None:
            self._env.globals[name] = value

    # --- Environment --------------------------------------------------------

    @property
    def environment(self) -> Environment:
        if self._env is None:
            self._env = self._build_environment()
        return self._env

    def _build_environment(self) -> Environment:
        bytecode_cache = None
        if self.caching and self.cache_dir:
            Path(self.cache_dir).mkdir(parents=True, exist_ok=True)
            # Bytecode depends on the tag syntax, not only on the source
            syntax = hashlib.sha1(
                f"{self.left_delimiter}\0{self.right_delimiter}\0{self.auto_literal}".encode("utf-8"),
            ).hexdigest()[:8]
            bytecode_cache = FileSystemBytecodeCache(
                self.cache_dir, pattern=f"__jinjaview_{syntax}_%s.cache",
            )

        options: dict[str, Any] = {
            "loader": _PathLoader(self.template_dirs),
            "variable_start_string": self.left_delimiter,
            "variable_end_string": self.right_delimiter,
            "bytecode_cache": bytecode_cache,
            "cache_size": 0 if self.force_compile else DEFAULT_CACHE_SIZE,
            "optimized": self.merge_compiled_includes,
            "keep_trailing_newline": True,
            "autoescape": select_autoescape(("html", "htm", "xml")),
        }
        options.update(self._options)
        extensions = list(options.get("extensions", ()))
        if self.auto_literal:
            extensions.append(AutoLiteralExtension)
        options["extensions"] = extensions

        env = Environment(**options)
        env.filters.update(self._filters)
        env.globals.update(self._globals)
        logger.debug(
            "Jinja2 environment built: delimiters=%s %s, caching=%s, force_compile=%s",
            self.left_delimiter, self.right_delimiter, self.caching, self.force_compile,
        )
        return env

    # --- Variables ----------------------------------------------------------

    def assign(self, data: Mapping[str, Any] | None = None, **variables: Any) -> None:
        """Bind template variables."""
        if data:
            self._vars.update(data)
        self._vars.update(variables)

    def get_template_vars(self, name: str | None = None) -> Any:
        """Return one assigned variable, or a copy of all of them."""
        if name is None:
            return dict(self._vars)
        return self._vars.get(name)

    def clear_assign(self, *names: str) -> None:
        for name in names:
            self._vars.pop(name, None)

    def clear_all_assign(self) -> None:
        self._vars.clear()

    # --- Rendering ----------------------------------------------------------

    def fetch(self, template: str) -> str:
        """Render *template* (absolute path or relative name) to a string.

        Raises ``jinja2.TemplateNotFound`` if the template cannot be found.
        """
        return self.environment.get_template(template).render(self._vars)

    def template_exists(self, template: str) -> bool:
        """Check whether the loader can find *template*."""
        try:
            self.environment.get_template(template)
            return True
        except TemplateNotFound:
            return False

    def compile_templates(
        self, extensions: Iterable[str] = DEFAULT_TEMPLATE_EXTENSIONS,
    ) -> list[str]:
        """Precompile the templates of the template directories.

        Only files whose extension is in *extensions* are compiled, so
        assets stored next to the templates are skipped.  Writes Jinja2
        modules into the compile directory and returns the template names
        that were compiled.
        """
        extensions = [ext.lstrip(".") for ext in extensions]
        if not self.compile_dir:
            raise ValueError("No compile directory configured")
        Path(self.compile_dir).mkdir(parents=True, exist_ok=True)
        env = self.environment
        names = env.list_templates(extensions=extensions)
        env.compile_templates(
            self.compile_dir, extensions=extensions, zip=None, ignore_errors=False,
        )
        logger.info("Compiled %d templates into %s", len(names), self.compile_dir)
        return names
