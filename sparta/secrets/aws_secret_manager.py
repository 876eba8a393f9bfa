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

"""AWS Secrets Manager provider (``aws_secret_manager:<secret-id>``)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sparta.secrets.aws import create_client
from sparta.secrets.base import SecretProvider

logger = logging.getLogger(__name__)


class AwsSecretManagerProvider(SecretProvider):
    """Fetch secret strings from AWS Secrets Manager.

    In addition to the common AWS keys, the config accepts
    ``version_stage`` (e.g. ``"AWSPREVIOUS"``).
    """

    PROVIDER_NAME = "aws_secret_manager"
    DESCRIPTION = "Secrets from AWS Secrets Manager"

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        *,
        client: Any = None,
    ) -> None:
        super().__init__(config)
        self._client = client if client is not None else create_client(
            "secretsmanager", self._config,
        )

    def fetch(self, key: str) -> Any:
        request: dict[str, str] = {"SecretId": key}
        if self._config.get("version_stage"):
            request["VersionStage"] = self._config["version_stage"]

        response = self._client.get_secret_value(**request)
        if "SecretString" in response:
            return response["SecretString"]
        # Binary secrets are returned as raw bytes by boto3
        logger.debug("Secret %s has no SecretString, decoding SecretBinary", key)
        return response["SecretBinary"].decode("utf-8")
