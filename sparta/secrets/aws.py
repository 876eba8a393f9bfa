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

"""Shared boto3 client construction for the AWS-backed providers.

Recognised provider config keys (all optional):

* ``region`` / ``region_name`` — AWS region.
* ``profile`` / ``profile_name`` — named profile from the shared credentials file.
* ``endpoint_url`` — alternative endpoint (e.g. LocalStack).

Without any of them the standard boto3 credential and region chain is used.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import boto3


def create_client(service_name: str, config: Mapping[str, Any]) -> Any:
    """Create a boto3 client for *service_name* from a provider config."""
    profile = config.get("profile_name") or config.get("profile")
    session = boto3.Session(profile_name=profile) if profile else boto3.Session()

    kwargs: dict[str, object] = {}
    region = config.get("region_name") or config.get("region")
    if region:
        kwargs["region_name"] = region
    if config.get("endpoint_url"):
        kwargs["endpoint_url"] = config["endpoint_url"]
    return session.client(service_name, **kwargs)
