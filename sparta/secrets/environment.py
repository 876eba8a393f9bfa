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

"""Environment-variable provider for local runs (``environment:<VAR>``)."""

from __future__ import annotations

import os

from sparta.secrets.base import SecretProvider


class EnvironmentProvider(SecretProvider):
    """Read secrets from environment variables.

    The optional ``prefix`` config key is prepended to every key, so
    ``{"prefix": "STAGING_"}`` maps ``environment:staging:DB_URL`` to
    ``$STAGING_DB_URL``.
    """

    PROVIDER_NAME = "environment"
    DESCRIPTION = "Secrets from process environment variables"

    def fetch(self, key: str) -> str:
        name = f"{self._config.get('prefix') or ''}{key}"
        value = os.environ.get(name)
        if value is None:
            raise LookupError(f"environment variable {name} is not set")
        return value
