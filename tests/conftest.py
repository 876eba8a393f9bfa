"""Shared fixtures for sparta tests."""

from __future__ import annotations

import logging

import pytest

from sparta.secrets import ProviderRegistry, SecretProvider


class DictProvider(SecretProvider):
    """In-memory provider: the config's ``data`` mapping holds the secrets."""

    PROVIDER_NAME = "dummy"
    DESCRIPTION = "Test provider"

    def fetch(self, key: str):
        data = self._config.get("data", {"k": "v"})
        if key not in data:
            raise KeyError(f"no secret named {key}")
        return data[key]


class CountingFactory:
    """Provider factory that records every initialisation."""

    def __init__(self, provider_cls=DictProvider):
        self.provider_cls = provider_cls
        self.calls: list[dict] = []

    def __call__(self, config):
        self.calls.append(dict(config))
        return self.provider_cls(config)


@pytest.fixture
def counting_factory():
    return CountingFactory()


@pytest.fixture
def providers(counting_factory):
    registry = ProviderRegistry()
    registry.register("dummy", counting_factory)
    return registry


@pytest.fixture(autouse=True)
def _reset_sparta_logger():
    yield
    logger = logging.getLogger("sparta")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
