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

"""Thread-safe registry of callables exposed to templates.

Registration is expected to happen during startup, possibly from several
initializers at once, so writes are serialised under a lock.  Rendering
only ever reads a :meth:`FunctionRegistry.snapshot`.

Usage::

    from sparta.functions import default_function_registry

    functions = default_function_registry()
    functions.register("upper", str.upper)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class FunctionRegistry:
    """Mapping of template function name -> callable."""

    def __init__(self) -> None:
        self._functions: dict[str, Callable[..., Any]] = {}
        self._lock = threading.Lock()

    def register(self, name: str, fn: Callable[..., Any]) -> None:
        """Install *fn* under *name*.

        Re-registering an existing name replaces the previous entry (last
        writer wins), which is how callers override a built-in.
        """
        with self._lock:
            replaced = name in self._functions
            self._functions[name] = fn
        if replaced:
            logger.debug("Template function %r overridden", name)

    def get(self, name: str) -> Callable[..., Any] | None:
        with self._lock:
            return self._functions.get(name)

    def names(self) -> list[str]:
        """Return registered function names in sorted order."""
        with self._lock:
            return sorted(self._functions)

    def snapshot(self) -> dict[str, Callable[..., Any]]:
        """Return a copy of the current name -> callable mapping."""
        with self._lock:
            return dict(self._functions)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._functions

    def __len__(self) -> int:
        with self._lock:
            return len(self._functions)


def register_builtins(registry: FunctionRegistry) -> None:
    """Register the built-in base64 and JSON functions on *registry*."""
    from sparta.functions.encoding import b64dec, b64enc
    from sparta.functions.json_path import json_field, must_json_field

    registry.register("b64enc", b64enc)
    registry.register("b64dec", b64dec)
    registry.register("jsonField", json_field)
    registry.register("mustJsonField", must_json_field)


def default_function_registry() -> FunctionRegistry:
    """Return a new registry pre-populated with the built-in functions."""
    registry = FunctionRegistry()
    register_builtins(registry)
    return registry
