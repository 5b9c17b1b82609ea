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

"""Jinja2 view driver for convention-based web frameworks.

Resolves short template rules (``"index"``, ``"user/profile"``,
``"/common/header"``, ``"admin@index/index"``) into template files and
renders them with Jinja2.

Usage::

    from jinjaview import AppContext, JinjaView, RequestContext

    app = AppContext(
        app_path="/srv/site/app/",
        runtime_path="/srv/site/runtime/",
        request=RequestContext(controller="Index", action="index"),
    )
    view = JinjaView(app)
    view.fetch("", {"title": "Home"})
"""

from jinjaview.config import ViewConfig
from jinjaview.context import AppContext, RequestContext
from jinjaview.engine import JinjaEngine
from jinjaview.exceptions import TemplateNotFound
from jinjaview.naming import NamingRule, parse_name
from jinjaview.resolver import has_extension, resolve_template
from jinjaview.view import JinjaView

__all__ = [
    "AppContext",
    "JinjaEngine",
    "JinjaView",
    "NamingRule",
    "RequestContext",
    "TemplateNotFound",
    "ViewConfig",
    "has_extension",
    "parse_name",
    "resolve_template",
]
