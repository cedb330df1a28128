"""
Query-string helpers for the HTTP boundary.

Turns flat ``(key, value)`` pairs into RawParameters, expanding bracket
notation the way the listing endpoints expect: ``hourlyRate[gt]=20``
becomes ``{"hourlyRate": {"gt": "20"}}``.
"""

import re
from typing import Any, Dict, Iterable, Tuple

from resource_query.core.errors import QueryParseError

_BRACKET_KEY = re.compile(r"^([^\[\]]+)\[([^\[\]]*)\]$")


def _append(container: Dict[str, Any], key: str, value: Any) -> None:
    """Store value under key, turning repeated keys into lists."""
    if key not in container:
        container[key] = value
    elif isinstance(container[key], list):
        container[key].append(value)
    else:
        container[key] = [container[key], value]


def nest_query_params(pairs: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """
    Build RawParameters from query-string pairs.

    Args:
        pairs: Decoded ``(key, value)`` pairs in request order

    Returns:
        Mapping of parameter name to a string, a list of strings for
        repeated keys, or a nested ``{token: value}`` mapping for
        bracketed keys

    Raises:
        QueryParseError: If a key has unbalanced or multi-level brackets,
            or mixes plain and bracketed forms
    """
    raw: Dict[str, Any] = {}

    for key, value in pairs:
        if "[" not in key and "]" not in key:
            if isinstance(raw.get(key), dict):
                raise QueryParseError(f"Parameter '{key}' mixes plain and bracketed forms")
            _append(raw, key, value)
            continue

        match = _BRACKET_KEY.match(key)
        if not match:
            raise QueryParseError(f"Malformed parameter name '{key}'")

        name, token = match.groups()
        if token == "":
            # name[]=a&name[]=b
            if isinstance(raw.get(name), dict):
                raise QueryParseError(f"Parameter '{name}' mixes plain and bracketed forms")
            existing = raw.setdefault(name, [])
            if not isinstance(existing, list):
                raw[name] = [existing]
            raw[name].append(value)
            continue

        nested = raw.setdefault(name, {})
        if not isinstance(nested, dict):
            raise QueryParseError(f"Parameter '{name}' mixes plain and bracketed forms")
        _append(nested, token, value)

    return raw
