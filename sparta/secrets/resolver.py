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

"""Resolve secret identifiers into config values.

Identifiers take one of two forms:

* ``provider:key`` — provider initialised with an empty configuration.
* ``provider:config_name:key`` — provider initialised with the
  ``secret_providers[config_name]`` entry of the config (``{}`` if absent).

Usage::

    from sparta.secrets import SecretResolver, default_provider_registry

    resolver = SecretResolver(default_provider_registry())
    resolver.resolve(config)   # config.values now holds the secrets
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sparta.config import Config
from sparta.errors import (
    MalformedSecretIdentifierError,
    ProviderInitError,
    SecretFetchError,
    UnknownProviderError,
)
from sparta.secrets.base import SecretProvider
from sparta.secrets.registry import ProviderRegistry

logger = logging.getLogger(__name__)

IDENTIFIER_SEPARATOR = ":"


@dataclass(frozen=True)
class SecretIdentifier:
    """A parsed ``provider[:config_name]:key`` identifier."""

    provider: str
    key: str
    config_name: str = ""
    raw: str = ""

    @property
    def cache_key(self) -> tuple[str, str]:
        return self.provider, self.config_name

    def __str__(self) -> str:
        return self.raw or IDENTIFIER_SEPARATOR.join(
            part for part in (self.provider, self.config_name, self.key) if part
        )


def parse_identifier(identifier: str) -> SecretIdentifier:
    """Split *identifier* into provider, optional config name, and key.

    Raises :class:`MalformedSecretIdentifierError` unless the identifier has
    exactly two or three non-empty ``:``-separated segments.
    """
    segments = identifier.split(IDENTIFIER_SEPARATOR)
    if len(segments) < 2:
        raise MalformedSecretIdentifierError(
            identifier, "expected provider:key or provider:config:key",
        )
    if len(segments) > 3:
        raise MalformedSecretIdentifierError(
            identifier, f"expected at most 3 segments, got {len(segments)}",
        )
    if not all(segments):
        raise MalformedSecretIdentifierError(identifier, "empty segment")

    if len(segments) == 2:
        provider, key = segments
        return SecretIdentifier(provider=provider, key=key, raw=identifier)
    provider, config_name, key = segments
    return SecretIdentifier(
        provider=provider, key=key, config_name=config_name, raw=identifier,
    )


class SecretResolver:
    """Fetch a config's secrets and merge them into its values.

    Provider instances are cached per :meth:`resolve` call, keyed by
    ``(provider, config_name)``, so repeated identifiers against the same
    provider configuration initialise the provider once.
    """

    def __init__(self, providers: ProviderRegistry) -> None:
        self.providers = providers

    def resolve(self, config: Config) -> Config:
        """Resolve every secret of *config* in declared order.

        Resolved values overwrite static values of the same name.  The
        first failure aborts the pass; later secrets are not attempted.
        """
        cache: dict[tuple[str, str], SecretProvider] = {}
        for destination, raw in config.secrets.items():
            identifier = parse_identifier(raw)
            provider = self._get_provider(identifier, config, cache)
            try:
                value = provider.fetch(identifier.key)
            except Exception as exc:
                raise SecretFetchError(raw, str(exc)) from exc

            if destination in config.values:
                logger.debug("Secret %s overrides static value %r", raw, destination)
            config.values[destination] = value
            logger.debug("Resolved secret %s into %r", raw, destination)

        return config

    def _get_provider(
        self,
        identifier: SecretIdentifier,
        config: Config,
        cache: dict[tuple[str, str], SecretProvider],
    ) -> SecretProvider:
        provider = cache.get(identifier.cache_key)
        if provider is not None:
            return provider

        if identifier.provider not in self.providers:
            raise UnknownProviderError(identifier.provider, self.providers.names())

        blob = config.provider_config(identifier.config_name)
        try:
            provider = self.providers.create(identifier.provider, blob)
        except Exception as exc:
            raise ProviderInitError(
                identifier.provider, identifier.config_name, str(exc),
            ) from exc

        cache[identifier.cache_key] = provider
        return provider
