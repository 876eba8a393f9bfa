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

"""Secret providers and identifier resolution.

Built-in providers:

* ``aws_secret_manager`` — AWS Secrets Manager.
* ``aws_ssm_parameters`` — AWS SSM Parameter Store (decrypted).
* ``environment`` — process environment variables.
"""

from sparta.secrets.base import ProviderFactory, SecretProvider
from sparta.secrets.registry import (
    ProviderRegistry,
    default_provider_registry,
    register_builtins,
)
from sparta.secrets.resolver import SecretIdentifier, SecretResolver, parse_identifier

__all__ = [
    "ProviderFactory",
    "ProviderRegistry",
    "SecretIdentifier",
    "SecretProvider",
    "SecretResolver",
    "default_provider_registry",
    "parse_identifier",
    "register_builtins",
]
