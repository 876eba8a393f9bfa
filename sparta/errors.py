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

"""Exception hierarchy shared by the config, secrets, and template layers.

Every error wraps its underlying cause (``raise ... from exc``) and carries
the piece of context that identifies *where* processing failed: a file
path, a secret identifier, a provider name, or a JSON path segment.
"""

from __future__ import annotations

from pathlib import Path


class SpartaError(Exception):
    """Base class for all errors raised by sparta."""


class ConfigLoadError(SpartaError):
    """A config file could not be read or decoded."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"error loading config {self.path}: {reason}")


# --- Secrets ---


class MalformedSecretIdentifierError(SpartaError, ValueError):
    """A secret identifier does not have the ``provider[:config]:key`` shape."""

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        super().__init__(f"malformed secret identifier {identifier!r}: {reason}")


class UnknownProviderError(SpartaError, LookupError):
    """An identifier names a provider that is not registered."""

    def __init__(self, provider: str, available: list[str] | None = None) -> None:
        self.provider = provider
        self.available = sorted(available or [])
        super().__init__(
            f"Unknown secret provider {provider!r}. Available: {self.available}"
        )


class ProviderInitError(SpartaError):
    """A provider initializer failed."""

    def __init__(self, provider: str, config_name: str, reason: str) -> None:
        self.provider = provider
        self.config_name = config_name
        label = f"{provider}:{config_name}" if config_name else provider
        super().__init__(f"error initializing secret provider {label}: {reason}")


class SecretFetchError(SpartaError):
    """A provider failed to return the value for one identifier."""

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        super().__init__(f"error loading secret {identifier}: {reason}")


# --- Templates ---


class TemplateLoadError(SpartaError):
    """A template file could not be read or decoded as UTF-8."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"error reading template {self.path}: {reason}")


class TemplateParseError(SpartaError):
    """A template file is not valid template syntax."""

    def __init__(self, path: str | Path, reason: str, lineno: int | None = None) -> None:
        self.path = Path(path)
        self.lineno = lineno
        where = f"{self.path}:{lineno}" if lineno else str(self.path)
        super().__init__(f"error parsing template {where}: {reason}")


class TemplateExecError(SpartaError):
    """Executing a parsed template failed or was aborted by a function."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"error executing template {self.path}: {reason}")


class OutputIOError(SpartaError):
    """Rendered output could not be written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"error writing output {self.path}: {reason}")


class RenderAbort(SpartaError):
    """Raised by "must"-style template functions to abort the whole render."""
