from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import GraphQLResponseError
from .type_helpers import is_not_empty_string, is_number, is_object, is_string_array

# variable name -> (GraphQL type, value)
Variables = Mapping[str, Tuple[str, Any]]


@dataclass(frozen=True)
class GraphQLRequest:
    query: str
    variables: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"query": self.query, "variables": self.variables}


@dataclass(frozen=True)
class GraphQLErrorLocation:
    line: float
    column: float


@dataclass(frozen=True)
class GraphQLErrorItem:
    message: str
    locations: List[GraphQLErrorLocation] = field(default_factory=list)
    path: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class GraphQLResponse:
    data: Optional[Any] = None
    errors: List[GraphQLErrorItem] = field(default_factory=list)


def build_request(
    query: str,
    variables: Optional[Variables] = None,
    mutation: bool = False,
) -> GraphQLRequest:
    """Prefix a query body with its operation keyword and variable declarations.

    Declarations follow the insertion order of ``variables``; the parenthesized
    clause is left out entirely when there are no variables.
    """
    values: Dict[str, Any] = {}
    declarations: List[str] = []
    for name, (type_name, value) in (variables or {}).items():
        declarations.append(f"${name}: {type_name}")
        values[name] = value

    clause = f"({','.join(declarations)})" if declarations else ""
    keyword = "mutation" if mutation else "query"
    return GraphQLRequest(query=f"{keyword}{clause}{query}", variables=values)


def parse_error_location(raw: Any) -> GraphQLErrorLocation:
    if not is_object(raw):
        raise GraphQLResponseError("Invalid GraphQL error location", raw)
    if not is_number(raw.get("line")):
        raise GraphQLResponseError("Invalid GraphQL error location line", raw)
    if not is_number(raw.get("column")):
        raise GraphQLResponseError("Invalid GraphQL error location column", raw)
    return GraphQLErrorLocation(line=raw["line"], column=raw["column"])


def parse_error_item(raw: Any) -> GraphQLErrorItem:
    if not is_object(raw):
        raise GraphQLResponseError("Invalid GraphQL error", raw)
    message = raw.get("message")
    if not is_not_empty_string(message):
        raise GraphQLResponseError("Invalid GraphQL error message", raw)

    locations: List[GraphQLErrorLocation] = []
    if isinstance(raw.get("locations"), list):
        locations = [parse_error_location(loc) for loc in raw["locations"]]

    path: List[str] = []
    raw_path = raw.get("path")
    if raw_path is not None:
        if not is_string_array(raw_path):
            raise GraphQLResponseError("Invalid GraphQL error path", raw)
        path = list(raw_path)

    return GraphQLErrorItem(message=message, locations=locations, path=path)


def parse_graphql_response(raw: Any) -> GraphQLResponse:
    if not is_object(raw):
        raise GraphQLResponseError("Invalid GraphQL response", raw)

    errors: List[GraphQLErrorItem] = []
    if isinstance(raw.get("errors"), list):
        errors = [parse_error_item(err) for err in raw["errors"]]

    return GraphQLResponse(data=raw.get("data"), errors=errors)
