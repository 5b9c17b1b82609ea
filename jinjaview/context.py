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

"""Request and application context passed explicitly into the view layer.

The hosting framework owns the real request and application objects.
These dataclasses carry the handful of values the view driver reads from
them, so resolution never reaches for global state.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RequestContext:
    """Routing information of the request being rendered.

    Attributes:
        app: Current module/app name (empty for single-app setups).
        controller: Controller name as routed (e.g. ``"UserInfo"``).
        action: Action name as routed (e.g. ``"index"``).
    """

    app: str = ""
    controller: str = ""
    action: str = ""


@dataclass
class AppContext:
    """Application paths and flags the view driver depends on.

    Paths are plain strings ending in a directory separator, the way the
    framework hands them out, because template paths are built by
    concatenation.
    """

    app_path: str
    runtime_path: str
    base_path: str = ""
    debug: bool = False
    request: RequestContext = field(default_factory=RequestContext)

    def is_debug(self) -> bool:
        return self.debug
