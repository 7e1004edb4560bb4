from __future__ import annotations

from typing import Any

from nerdgraph_graphql.type_helpers import is_not_empty_string, is_object, is_string

from ...canonical_models import UserEntity
from ...errors import NerdgraphError


def is_user_search_result(raw: Any) -> bool:
    return (
        is_object(raw)
        and is_string(raw.get("authenticationDomainId"))
        and is_string(raw.get("id"))
    )


def map_user_entity(raw: Any) -> UserEntity:
    if (
        not is_object(raw)
        or not is_not_empty_string(raw.get("guid"))
        or not is_not_empty_string(raw.get("name"))
    ):
        raise NerdgraphError("Expected user entity but found incompatible result")
    return UserEntity(guid=raw["guid"], name=raw["name"])
