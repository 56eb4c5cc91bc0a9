"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

URL assembly for outgoing requests.

Query strings use repeated keys for list values (``tag=a&tag=b``), render
booleans as ``true``/``false`` and drop ``None`` values entirely.
"""

from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query_string(query_params: Optional[Mapping[str, Any]]) -> str:
    """
    Encode query parameters without the leading ``?``.

    Keys are emitted in sorted order; keys and values are percent-encoded
    (a space becomes ``%20``).

    Args:
        query_params: Mapping of parameter name to scalar or list of scalars

    Returns:
        Encoded query string, empty if nothing is left after dropping None values
    """
    if not query_params:
        return ""

    pairs: List[Tuple[str, str]] = []
    for key in sorted(query_params):
        value = query_params[key]
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _format_value(item)) for item in value if item is not None)
        else:
            pairs.append((key, _format_value(value)))

    return urlencode(pairs, quote_via=quote, safe="")


def build_url(
    base_url: str,
    path: str,
    query_params: Optional[Mapping[str, Any]] = None,
    bypass_base_url: bool = False,
) -> str:
    """
    Assemble the final request URL.

    Concatenation is literal: no slashes are added or removed. Absolute URLs
    are not detected, pass ``bypass_base_url=True`` to use ``path`` as is.

    Args:
        base_url: Base URL the client was constructed with
        path: Request path, or a full URL when bypassing the base URL
        query_params: Optional query parameters
        bypass_base_url: Skip the base URL prefix

    Returns:
        The request URL
    """
    query_string = build_query_string(query_params)
    suffix = f"?{query_string}" if query_string else ""

    if bypass_base_url:
        return path + suffix
    return base_url + path + suffix
