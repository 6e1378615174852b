# common/identifiers.py

"""
Identifier parsing for URL / query parameters.

Every numeric identifier must be a positive integer; anything else is a
400 that names the offending parameter.
"""

from __future__ import annotations

import re

from common.exceptions import InvalidParameterError

_POSITIVE_INT = re.compile(r"^\d+$")


def parse_id(value, name: str = "id") -> int:
    raw = str(value).strip() if value is not None else ""

    if not _POSITIVE_INT.match(raw) or int(raw) < 1:
        raise InvalidParameterError(
            f"Invalid {name}: must be a positive integer",
            details={"parameter": name, "value": value},
        )

    return int(raw)
