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

"""Secret provider registry.

Providers are registered by name as factories that accept a configuration
mapping.  New providers can be added at runtime via
:meth:`ProviderRegistry.register` without touching the resolver.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sparta.errors import UnknownProviderError
from sparta.secrets.base import ProviderFactory, SecretProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Mapping of provider name -> provider factory."""

    def __init__(self) -> None:
        self._factories: dict[str, ProviderFactory] = {}

    def register(self, name: str, factory: ProviderFactory) -> None:
        """Register *factory* under *name*, replacing any previous entry."""
        self._factories[name] = factory

    def get(self, name: str) -> ProviderFactory:
        """Return the factory for *name*.

        Raises :class:`UnknownProviderError` if the provider is not registered.
        """
        factory = self._factories.get(name)
        if factory is None:
            raise UnknownProviderError(name, list(self._factories))
        return factory

    def create(self, name: str, config: Mapping[str, Any] | None = None) -> SecretProvider:
        """Instantiate provider *name* with *config* (``{}`` when omitted)."""
        factory = self.get(name)
        logger.debug("Initializing secret provider %s", name)
        return factory({} if config is None else config)

    def names(self) -> list[str]:
        """Return names of all registered providers."""
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories


def register_builtins(registry: ProviderRegistry) -> None:
    """Register the built-in AWS and environment providers on *registry*."""
    from sparta.secrets.aws_secret_manager import AwsSecretManagerProvider
    from sparta.secrets.aws_ssm_parameters import AwsSsmParametersProvider
    from sparta.secrets.environment import EnvironmentProvider

    for cls in (AwsSecretManagerProvider, AwsSsmParametersProvider, EnvironmentProvider):
        registry.register(cls.PROVIDER_NAME, cls)


def default_provider_registry() -> ProviderRegistry:
    """Return a new registry pre-populated with the built-in providers."""
    registry = ProviderRegistry()
    register_builtins(registry)
    return registry
