from __future__ import annotations

from typing import Any, List, Optional, Sequence

from nerdgraph_graphql.paths import find_by_path

from ..errors import NerdgraphError


def _type_name(value: Any) -> str:
    return "null" if value is None else type(value).__name__


def single_result(results: Sequence[Any], what: str) -> Any:
    if len(results) != 1:
        raise NerdgraphError(f"Expected one {what} result but found {len(results)}")
    return results[0]


def list_at(data: Any, path: str, what: str) -> Optional[List[Any]]:
    """Return the list at ``path``, or None when the key is absent or null."""
    resolved = find_by_path(data, path)
    if resolved.absent or (resolved.found and resolved.value is None):
        return None
    if resolved.found and isinstance(resolved.value, list):
        return resolved.value
    found = _type_name(resolved.value) if resolved.found else "invalid path"
    raise NerdgraphError(f"Expected {what} array but found {found}")


def value_at(data: Any, path: str) -> Any:
    resolved = find_by_path(data, path)
    return resolved.value if resolved.found else None
