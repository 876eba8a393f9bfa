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

"""Abstract base class for secret providers.

A provider is constructed from an opaque configuration mapping (the named
entry under ``secret_providers`` in a config file, or ``{}``) and then
answers :meth:`SecretProvider.fetch` calls for any number of keys.

Providers must let the backing store's errors propagate unchanged; the
resolver wraps them with the identifier that triggered the fetch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any


class SecretProvider(ABC):
    """Abstract base class for secret providers.

    Class attributes to override:
        PROVIDER_NAME – registry name used in identifiers (e.g. ``"aws_ssm_parameters"``).
        DESCRIPTION   – one-liner.
    """

    PROVIDER_NAME: str
    DESCRIPTION: str

    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        self._config: dict[str, Any] = dict(config or {})

    @property
    def config(self) -> dict[str, Any]:
        return self._config

    @abstractmethod
    def fetch(self, key: str) -> Any:
        """Return the value stored under *key*."""


# Anything that turns a config mapping into a ready provider: usually the
# provider class itself.
ProviderFactory = Callable[[Mapping[str, Any]], SecretProvider]
