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

"""Base64 template functions (standard alphabet, ``=`` padding)."""

from __future__ import annotations

import base64
import binascii

from sparta.errors import RenderAbort


def b64enc(value: str) -> str:
    """Encode the UTF-8 bytes of *value* as standard base64."""
    return base64.b64encode(str(value).encode("utf-8")).decode("ascii")


def b64dec(value: str) -> str:
    """Decode standard base64 into a UTF-8 string.

    Line breaks are ignored, so wrapped output (``base64 -w76``, PEM bodies)
    decodes.  Any other invalid input aborts the render via
    :class:`RenderAbort`.
    """
    try:
        unwrapped = value.replace("\r", "").replace("\n", "")
        return base64.b64decode(unwrapped, validate=True).decode("utf-8")
    except AttributeError as exc:
        raise RenderAbort(f"Error decoding base64: expected a string, got {type(value).__name__}") from exc
    except (binascii.Error, UnicodeDecodeError, TypeError, ValueError) as exc:
        raise RenderAbort(f"Error decoding base64: {exc}") from exc
