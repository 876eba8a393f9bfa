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

"""AWS Systems Manager Parameter Store provider (``aws_ssm_parameters:<name>``)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sparta.secrets.aws import create_client
from sparta.secrets.base import SecretProvider


class AwsSsmParametersProvider(SecretProvider):
    """Fetch parameters from SSM Parameter Store, decrypting SecureStrings."""

    PROVIDER_NAME = "aws_ssm_parameters"
    DESCRIPTION = "Parameters from AWS SSM Parameter Store"

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        *,
        client: Any = None,
    ) -> None:
        super().__init__(config)
        self._client = client if client is not None else create_client("ssm", self._config)

    def fetch(self, key: str) -> Any:
        response = self._client.get_parameter(Name=key, WithDecryption=True)
        return response["Parameter"]["Value"]
