from .client import GraphQLClient, HttpPostFunc, HttpPostResponse, httpx_poster, raise_for_status
from .errors import GraphQLResponseError, SerializationError, TransportError
from .models import (
    GraphQLErrorItem,
    GraphQLErrorLocation,
    GraphQLRequest,
    GraphQLResponse,
    build_request,
    parse_graphql_response,
)
from .paths import PathResolution, PathStatus, find_by_path

__all__ = [
    "GraphQLClient",
    "HttpPostFunc",
    "HttpPostResponse",
    "httpx_poster",
    "raise_for_status",
    "GraphQLRequest",
    "GraphQLResponse",
    "GraphQLErrorItem",
    "GraphQLErrorLocation",
    "build_request",
    "parse_graphql_response",
    "PathResolution",
    "PathStatus",
    "find_by_path",
    "TransportError",
    "SerializationError",
    "GraphQLResponseError",
]
