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

"""Functions available inside templates.

Built-ins:

* ``b64enc(s)`` / ``b64dec(s)`` — standard base64; ``b64dec`` aborts the
  render on invalid input.
* ``jsonField(json, path)`` — returns a :class:`FieldResult` (``value, error``).
* ``mustJsonField(json, path)`` — returns the value or aborts the render.
"""

from sparta.functions.encoding import b64dec, b64enc
from sparta.functions.json_path import (
    FieldResult,
    JsonPathError,
    extract_field,
    json_field,
    must_json_field,
)
from sparta.functions.registry import (
    FunctionRegistry,
    default_function_registry,
    register_builtins,
)

__all__ = [
    "FieldResult",
    "FunctionRegistry",
    "JsonPathError",
    "b64dec",
    "b64enc",
    "default_function_registry",
    "extract_field",
    "json_field",
    "must_json_field",
    "register_builtins",
]
