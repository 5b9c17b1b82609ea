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

"""Template rule resolution.

Turns a short template rule into a file path using the framework's
conventions.  With ``view_path="/app/view/"``, controller ``UserInfo`` and
action ``index``:

=========================  ==========================================
rule                       resolved path
=========================  ==========================================
``""``                     ``/app/view/user_info/index.html``
``"edit"``                 ``/app/view/user_info/edit.html``
``"user/profile"``         ``/app/view/user/profile.html``
``"user:profile"``         ``/app/view/user/profile.html``
``"/common/header"``       ``/app/view/common/header.html``
``"admin@index/index"``    ``<base_path>admin/view/index/index.html``
=========================  ==========================================

Resolution is a pure function of the rule, the configuration and the
request context.  It never touches the filesystem; see
:meth:`jinjaview.view.JinjaView.exists` for that.
"""

from __future__ import annotations

import os

from jinjaview.config import ViewConfig
from jinjaview.context import RequestContext
from jinjaview.naming import NamingRule, parse_name


def has_extension(template: str) -> bool:
    """Return ``True`` if the last path component carries a file extension."""
    name = template.replace(os.sep, "/").rsplit("/", 1)[-1]
    _, dot, extension = name.rpartition(".")
    return bool(dot) and bool(extension)


def resolve_template(
    template: str,
    config: ViewConfig,
    request: RequestContext,
    base_path: str = "",
) -> str:
    """Resolve a template rule into a template file path.

    Args:
        template: Template rule, e.g. ``"index"``, ``"user/profile"``,
            ``"/common/header"`` or ``"admin@index/index"``.
        config: View configuration.
        request: Routing information of the current request.
        base_path: Application base path, parent of the per-app folders.
    """
    app: str | None = None
    # A leading "@" is part of the name, not a cross-app marker
    if template.find("@") > 0:
        app, template = template.split("@", 1)

    if config.view_base:
        app = app if app is not None else request.app
        path = config.view_base + (app + os.sep if app else "")
    elif app is not None:
        path = base_path + app + os.sep + "view" + os.sep
    else:
        path = config.view_path

    depr = config.view_depr

    if not template.startswith("/"):
        template = template.replace("/", depr).replace(":", depr)
        controller = parse_name(request.controller, config.auto_rule)
        if controller:
            controller = controller.replace(".", os.sep)
            if template == "":
                if config.auto_rule is NamingRule.UNDERSCORE:
                    action = parse_name(request.action)
                else:
                    action = request.action
                template = controller + depr + action
            elif depr not in template:
                template = controller + depr + template
    else:
        template = template[1:].replace("/", depr).replace(":", depr)

    return path + template.lstrip("/") + "." + config.view_suffix.lstrip(".")
