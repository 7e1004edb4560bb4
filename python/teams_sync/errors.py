from __future__ import annotations

from typing import List, Optional

from nerdgraph_graphql.errors import GraphQLResponseError, SerializationError, TransportError
from nerdgraph_graphql.models import GraphQLErrorItem


class NerdgraphError(Exception):
    def __init__(self, message: str, errors: Optional[List[GraphQLErrorItem]] = None):
        super().__init__(message)
        self.errors: List[GraphQLErrorItem] = list(errors) if errors else []


__all__ = [
    "NerdgraphError",
    "GraphQLResponseError",
    "SerializationError",
    "TransportError",
]
