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

"""Per-environment config files.

A config file is YAML with three optional sections::

    values:
      replicas: 3
    secrets:
      db_password: "aws_ssm_parameters:/prod/db/password"
      api_token: "aws_secret_manager:eu:prod/api"
    secret_providers:
      eu:
        region: eu-west-1

The config name (used for output subdirectories) is the file name without
its extension.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from sparta.errors import ConfigLoadError

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Template values plus the secrets to merge into them.

    Attributes:
        name: Config name, derived from the source file name.
        values: Template data context; resolved secrets are written here.
        secrets: Destination key -> secret identifier, in declared order.
        secret_providers: Provider config name -> provider configuration.
        path: Source file, if the config was loaded from disk.
    """

    name: str
    values: dict[str, Any] = field(default_factory=dict)
    secrets: dict[str, str] = field(default_factory=dict)
    secret_providers: dict[str, Any] = field(default_factory=dict)
    path: Path | None = None

    def provider_config(self, name: str) -> Any:
        """Return the named provider configuration, or ``{}`` if absent."""
        blob = self.secret_providers.get(name)
        return {} if blob is None else blob


def _section(data: dict[str, Any], key: str, path: Path) -> dict[str, Any]:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigLoadError(path, f"{key!r} must be a mapping, got {type(section).__name__}")
    return section


def load_config(path: str | Path) -> Config:
    """Read and decode the config file at *path*.

    Raises :class:`ConfigLoadError` on I/O errors, invalid YAML, or a
    document that does not follow the config schema.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(path, str(exc)) from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path, f"invalid YAML: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigLoadError(path, f"expected a mapping, got {type(data).__name__}")

    secrets = _section(data, "secrets", path)
    for name, identifier in secrets.items():
        if not isinstance(identifier, str):
            raise ConfigLoadError(path, f"secret {name!r} must be an identifier string")

    config = Config(
        name=path.stem,
        values=_section(data, "values", path),
        secrets={str(k): v for k, v in secrets.items()},
        secret_providers=_section(data, "secret_providers", path),
        path=path,
    )
    logger.debug(
        "Loaded config %s: %d values, %d secrets",
        config.name, len(config.values), len(config.secrets),
    )
    return config
