from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from nerdgraph_graphql.client import GraphQLClient
from nerdgraph_graphql.models import build_request
from nerdgraph_graphql.paths import find_by_path

from ..errors import NerdgraphError


class Region(str, Enum):
    US = "US"
    EU = "EU"


ENDPOINTS: Dict[Region, str] = {
    Region.US: "https://api.newrelic.com/graphql",
    Region.EU: "https://api.eu.newrelic.com/graphql",
}


def to_region(value: Optional[str]) -> Region:
    if not value:
        return Region.US
    if value.strip().upper() == Region.EU.value:
        return Region.EU
    return Region.US


class NerdgraphClient:
    """NerdGraph access on top of a plain GraphQL client.

    Adds the API key header, picks the regional endpoint (unless ``endpoint``
    overrides it) and follows ``nextCursor`` style pagination.
    """

    def __init__(self, graphql_client: GraphQLClient, *, endpoint: Optional[str] = None):
        self.graphql_client = graphql_client
        self.endpoint = endpoint or None

    def endpoint_for(self, region: Region) -> str:
        return self.endpoint or ENDPOINTS[region]

    def query(
        self,
        api_key: str,
        query: str,
        variables: Optional[Mapping[str, Tuple[str, Any]]] = None,
        mutation: bool = False,
        next_cursor_path: Optional[str] = None,
        region: Region = Region.US,
        headers: Optional[Mapping[str, str]] = None,
    ) -> List[Any]:
        """Run ``query`` and return the ``data`` payload of every page.

        With ``next_cursor_path`` set, a ``$cursor: String`` variable is added
        and the query repeats until the cursor at that path is null or absent.
        """
        request_variables: Dict[str, Tuple[str, Any]] = dict(variables or {})
        request_headers = {"API-Key": api_key, **(headers or {})}
        url = self.endpoint_for(region)

        results: List[Any] = []
        cursor: Optional[str] = None
        seen_cursors: Set[str] = set()

        while True:
            if next_cursor_path:
                request_variables["cursor"] = ("String", cursor)

            response = self.graphql_client.query(
                url,
                request_headers,
                build_request(query, request_variables, mutation),
            )
            if response.errors:
                raise NerdgraphError(
                    f"Errors returned on GraphQL post for query: {query}",
                    response.errors,
                )

            results.append(response.data)

            if not next_cursor_path:
                break

            resolved = find_by_path(response.data, next_cursor_path)
            if resolved.invalid:
                raise NerdgraphError(
                    f"Expected value at path {next_cursor_path} but found none"
                )
            next_cursor = resolved.value if resolved.found else None
            if next_cursor is None:
                break
            if not isinstance(next_cursor, str):
                raise NerdgraphError(
                    f"Expected string at path {next_cursor_path} but found "
                    f"{type(next_cursor).__name__}"
                )
            if next_cursor in seen_cursors:
                raise NerdgraphError(
                    "Pagination cursor repeated; aborting to prevent infinite loop"
                )
            seen_cursors.add(next_cursor)
            cursor = next_cursor

        return results
