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

"""Exceptions raised by the view driver."""

from __future__ import annotations

from jinja2 import TemplateNotFound as _JinjaTemplateNotFound


class TemplateNotFound(_JinjaTemplateNotFound):
    """The resolved template file does not exist.

    Subclasses :class:`jinja2.TemplateNotFound` so callers already
    handling Jinja2's exception keep working.

    Attributes:
        template: The file path that was tried.
    """

    def __init__(self, template: str) -> None:
        super().__init__(template, f"template not exists:{template}")
        self.template = template
