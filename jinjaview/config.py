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

"""View configuration.

:class:`ViewConfig` is the flat option set the framework hands to its view
driver.  It is built once from caller overrides and the application
context, then never mutated: :meth:`ViewConfig.merge` returns a new
instance.

Four keys are always derived from the application and caller values for
them are discarded: ``debug``, ``tpl_dir``, ``cache_path`` and
``compile_path``.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from jinjaview.context import AppContext
from jinjaview.naming import NamingRule

logger = logging.getLogger(__name__)

APP_DERIVED_KEYS = frozenset({"debug", "tpl_dir", "cache_path", "compile_path"})


@dataclass(frozen=True)
class ViewConfig:
    """Options of the view driver.

    Attributes:
        auto_rule: Naming rule for controller/action path segments.
        view_base: Centralised view directory holding one folder per app.
        view_path: Template root of the current app.
        view_suffix: Template file suffix.
        view_depr: Separator used inside template names.
        tpl_begin: Start delimiter of variable tags.
        tpl_end: End delimiter of variable tags.
        auto_literal: Treat a start delimiter followed by whitespace as
            plain text (inline CSS and JavaScript).
        tpl_cache: Keep compiled templates in a persistent cache.
        cache_path: Engine cache directory.
        compile_path: Engine compile directory.
        tpl_dir: Template directory.
        debug: Debug mode of the application.
    """

    auto_rule: NamingRule = NamingRule.UNDERSCORE
    view_base: str = ""
    view_path: str = ""
    view_suffix: str = "html"
    view_depr: str = os.sep
    tpl_begin: str = "{"
    tpl_end: str = "}"
    auto_literal: bool = True
    tpl_cache: bool = True
    cache_path: str = ""
    compile_path: str = ""
    tpl_dir: str = ""
    debug: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "auto_rule", NamingRule.coerce(self.auto_rule))

    @classmethod
    def keys(cls) -> frozenset[str]:
        """Names of all recognised options."""
        return frozenset(f.name for f in dataclasses.fields(cls))

    @classmethod
    def build(
        cls,
        app: AppContext,
        overrides: Mapping[str, Any] | None = None,
    ) -> ViewConfig:
        """Merge *overrides* onto the defaults and apply application paths."""
        options = _recognised(overrides or {})
        config = cls(**options)
        if not config.view_path:
            config = dataclasses.replace(
                config, view_path=app.app_path + "view" + os.sep,
            )
        return dataclasses.replace(
            config,
            debug=app.is_debug(),
            tpl_dir="",
            cache_path=app.runtime_path + "cache" + os.sep,
            compile_path=app.runtime_path + "cache_c" + os.sep,
        )

    def merge(self, options: Mapping[str, Any]) -> ViewConfig:
        """Return a copy with recognised *options* applied.

        Application-derived keys keep their current values.
        """
        changes = {
            key: value
            for key, value in _recognised(options).items()
            if key not in APP_DERIVED_KEYS
        }
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


def _recognised(options: Mapping[str, Any]) -> dict[str, Any]:
    known = ViewConfig.keys()
    ignored = sorted(key for key in options if key not in known)
    if ignored:
        logger.debug("Ignoring unknown view options: %s", ignored)
    return {key: value for key, value in options.items() if key in known}
