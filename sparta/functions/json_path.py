# sparta — template renderer with secret-store integration
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

"""Dotted-path field lookup in JSON documents.

Secrets are frequently stored as JSON blobs (``{"username": ..., "password":
...}``).  :func:`extract_field` pulls a single value out of such a blob::

    extract_field('{"db": {"user": "app"}}', "db.user")   # -> "app"

Only object keys are supported as path segments.  Arrays cannot be indexed:
reaching an array with a segment left to consume always fails.
"""

from __future__ import annotations

import json
from typing import Any, NamedTuple

from sparta.errors import RenderAbort


class JsonPathError(ValueError):
    """A JSON path lookup failed.

    Attributes:
        segment: The path segment at which the lookup failed, or ``None``
            when the document itself is not valid JSON.
    """

    def __init__(self, message: str, segment: str | None = None) -> None:
        self.segment = segment
        super().__init__(message)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def extract_field(json_text: str, path: str) -> Any:
    """Return the raw JSON value found at the dotted *path* in *json_text*.

    Raises :class:`JsonPathError` if the text is not valid JSON, a key is
    missing, an array is reached, or a scalar is reached before the path
    is exhausted.  ``NaN`` and ``Infinity`` are not valid JSON and are
    rejected.
    """
    if not isinstance(path, str):
        raise JsonPathError(f"path must be a string, got {type(path).__name__}")
    try:
        current = json.loads(json_text, parse_constant=_reject_constant)
    except (ValueError, TypeError) as exc:
        raise JsonPathError(f"invalid JSON: {exc}") from exc

    for segment in path.split("."):
        if isinstance(current, dict):
            if segment not in current:
                raise JsonPathError(f"field {segment} not found", segment)
            current = current[segment]
        elif isinstance(current, list):
            raise JsonPathError("array indexing not supported", segment)
        else:
            raise JsonPathError(f"invalid path: {segment}", segment)

    return current


class FieldResult(NamedTuple):
    """Outcome of a safe field lookup: either a value or an error.

    Unpacks as ``value, error`` inside templates::

        {% set user, err = jsonField(creds, "user") %}
        {% if err %}anonymous{% else %}{{ user }}{% endif %}
    """

    value: Any
    error: JsonPathError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or abort the render if the lookup failed."""
        if self.error is not None:
            raise RenderAbort(f"Error extracting JSON field: {self.error}") from self.error
        return self.value


def json_field(json_text: str, path: str) -> FieldResult:
    """Template function ``jsonField``: lookup that reports failure as a value."""
    try:
        return FieldResult(extract_field(json_text, path))
    except JsonPathError as exc:
        return FieldResult(None, exc)


def must_json_field(json_text: str, path: str) -> Any:
    """Template function ``mustJsonField``: lookup that aborts the render on failure."""
    return json_field(json_text, path).unwrap()
