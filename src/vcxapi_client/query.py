# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""URL building helpers: path segment escaping and query string encoding."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote


def encode_segment(value: Any) -> str:
    """Percent-encode a value for safe inclusion in a single path segment."""
    return quote(str(value), safe="")


def _encode_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote(str(value), safe="")


def encode_bracket_query(params: Mapping[str, Any]) -> str:
    """Encode *params* as a query string using bracketed array keys.

    Keys are emitted in sorted order. List values repeat the key with a
    ``[]`` suffix (``types[]=a&types[]=b``); ``None`` values and empty lists
    are left out. Booleans are written as ``true``/``false``.

    >>> encode_bracket_query({"types": ["a", "b"], "statuses": ["pending"]})
    'statuses[]=pending&types[]=a&types[]=b'
    """
    parts: list[str] = []
    for key in sorted(params):
        value = params[key]
        if value is None:
            continue
        name = quote(key, safe="")
        if isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping)):
            parts.extend(f"{name}[]={_encode_scalar(item)}" for item in value if item is not None)
        else:
            parts.append(f"{name}={_encode_scalar(value)}")
    return "&".join(parts)


def encode_selection(**fields: Any) -> str:
    """Encode a ``selection`` query parameter holding a compact JSON object."""
    return "selection=" + quote(json.dumps(fields, separators=(",", ":")), safe="")
