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

"""View driver binding a web framework's view layer to Jinja2.

The framework hands its view configuration and application context to
:class:`JinjaView`; controllers then render by template rule::

    from jinjaview import AppContext, JinjaView, RequestContext

    app = AppContext(
        app_path="/srv/site/app/",
        runtime_path="/srv/site/runtime/",
        base_path="/srv/site/app/",
        request=RequestContext(app="", controller="UserInfo", action="index"),
    )
    view = JinjaView(app, {"view_suffix": "html"})
    view.fetch("", {"name": "Ada"})    # app/view/user_info/index.html
    view.fetch("admin@index/index")    # app/admin/view/index/index.html

Rendered output is written to standard output; there is no
return-value based rendering at this level.  Use :attr:`JinjaView.engine`
to get strings back.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Mapping
from typing import Any, TextIO

from jinjaview.config import ViewConfig
from jinjaview.context import AppContext
from jinjaview.engine import JinjaEngine
from jinjaview.exceptions import TemplateNotFound
from jinjaview.resolver import has_extension, resolve_template

logger = logging.getLogger(__name__)


class JinjaView:
    """Framework view driver rendering templates with Jinja2.

    Args:
        app: Application context (paths, debug flag, current request).
        config: View option overrides; see :class:`ViewConfig`.  Values
            for ``debug``, ``tpl_dir``, ``cache_path`` and
            ``compile_path`` are replaced by application-derived ones.
        engine: Engine to configure and render with.  A fresh
            :class:`JinjaEngine` by default.
        stream: Output stream.  ``sys.stdout`` at write time by default.
    """

    def __init__(
        self,
        app: AppContext,
        config: Mapping[str, Any] | None = None,
        *,
        engine: JinjaEngine | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.app = app
        self._config = ViewConfig.build(app, config)
        self._engine = engine if engine is not None else JinjaEngine()
        self._stream = stream

        cfg = self._config
        self._apply_syntax()
        self._engine.set_caching(cfg.tpl_cache and not cfg.debug)
        self._engine.set_force_compile(cfg.debug)
        self._engine.set_cache_dir(cfg.cache_path)
        self._engine.set_compile_dir(cfg.compile_path)
        self._engine.set_merge_compiled_includes(True)

    def _apply_syntax(self) -> None:
        cfg = self._config
        self._engine.set_left_delimiter(cfg.tpl_begin)
        self._engine.set_right_delimiter(cfg.tpl_end)
        self._engine.set_auto_literal(cfg.auto_literal)
        self._engine.set_template_dir(cfg.view_base or cfg.view_path)

    @property
    def options(self) -> ViewConfig:
        """The current view configuration."""
        return self._config

    @property
    def engine(self) -> JinjaEngine:
        """The wrapped engine, for anything not exposed here."""
        return self._engine

    # --- Templates ----------------------------------------------------------

    def parse_template(self, template: str) -> str:
        """Resolve a template rule against the current request."""
        path = resolve_template(
            template, self._config, self.app.request, self.app.base_path,
        )
        logger.debug("Template rule %r resolved to %s", template, path)
        return path

    def _locate(self, template: str) -> str:
        if not has_extension(template):
            return self.parse_template(template)
        return template

    def exists(self, template: str) -> bool:
        """Check whether a template file or template rule exists.

        References carrying an extension are tested as literal paths.
        """
        return os.path.isfile(self._locate(template))

    def fetch(self, template: str, data: Mapping[str, Any] | None = None) -> None:
        """Render a template and write the output.

        Raises :class:`~jinjaview.exceptions.TemplateNotFound` if the
        template file does not exist.
        """
        data = data or {}
        template = self._locate(template)

        if not os.path.isfile(template):
            raise TemplateNotFound(template)

        if self._config.debug:
            logger.info("[ VIEW ] %s [ %s ]", template, list(data.keys()))

        self._engine.assign(data)
        output = self._engine.fetch(template)
        (self._stream or sys.stdout).write(output)

    def display(
        self,
        template: str,
        data: Mapping[str, Any] | None = None,
        config: Mapping[str, Any] | None = None,
    ) -> None:
        """Same as :meth:`fetch`; *config* is accepted and ignored."""
        self.fetch(template, data)

    # --- Configuration ------------------------------------------------------

    def config(self, options: Mapping[str, Any]) -> None:
        """Update view options and pass engine options through.

        Recognised view keys update the view configuration (except the
        application-derived ones); everything else goes to the engine.
        Options are validated before anything is applied.  Tag syntax and
        the template directory are re-applied to the engine.
        """
        new_config = self._config.merge(options)

        view_keys = ViewConfig.keys()
        engine_options = {k: v for k, v in options.items() if k not in view_keys}
        if engine_options:
            self._engine.config(engine_options)

        self._config = new_config
        self._apply_syntax()

    # --- Engine API ---------------------------------------------------------

    def assign(self, data: Mapping[str, Any] | None = None, **variables: Any) -> None:
        self._engine.assign(data, **variables)

    def get_template_vars(self, name: str | None = None) -> Any:
        return self._engine.get_template_vars(name)

    def clear_all_assign(self) -> None:
        self._engine.clear_all_assign()

    def register_filter(self, name: str, func: Callable[..., Any]) -> None:
        self._engine.register_filter(name, func)

    def register_global(self, name: str, value: Any) -> None:
        self._engine.register_global(name, value)

    def compile_templates(self) -> list[str]:
        """Precompile all templates carrying the configured suffix."""
        return self._engine.compile_templates([self._config.view_suffix])
