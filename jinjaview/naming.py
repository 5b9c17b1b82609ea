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

"""Naming-rule conversion for controller and action identifiers.

Frameworks name controllers in StudlyCase (``UserInfo``) while template
directories use lowercase path segments.  The ``auto_rule`` option picks
how one becomes the other:

* ``NamingRule.UNDERSCORE`` (``1``): ``UserInfo`` -> ``user_info``
* ``NamingRule.LOWER`` (``2``): ``UserInfo`` -> ``userinfo``
"""

from __future__ import annotations

import re
from enum import Enum

_UPPER_RE = re.compile(r"[A-Z]")


class NamingRule(Enum):
    UNDERSCORE = 1
    LOWER = 2

    @classmethod
    def coerce(cls, value: NamingRule | int) -> NamingRule:
        """Return the rule for an enum member or its integer value.

        Raises :class:`ValueError` for anything else.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unknown naming rule {value!r}. Available: "
                f"{[rule.value for rule in cls]}"
            ) from None


def _snake(segment: str) -> str:
    return _UPPER_RE.sub(r"_\g<0>", segment).strip("_").lower()


def parse_name(name: str, rule: NamingRule | int = NamingRule.UNDERSCORE) -> str:
    """Convert a controller or action name into a template path segment.

    Multi-level names (``admin.UserInfo``) are converted per dot-separated
    segment so the dots survive for the caller to map onto directories.
    """
    if not name:
        return ""
    rule = NamingRule.coerce(rule)
    if rule is NamingRule.LOWER:
        return name.lower()
    return ".".join(_snake(segment) for segment in name.split("."))
