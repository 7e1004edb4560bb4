from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from nerdgraph_graphql.type_helpers import (
    is_not_empty_string,
    is_object,
    is_string,
    is_string_array,
)

from ...canonical_models import TeamEntity, TeamMembership, TeamResource, TeamTag
from ...errors import NerdgraphError


def map_team_resource(raw: Any) -> TeamResource:
    if not is_object(raw):
        raise NerdgraphError("Invalid team resource")
    if not is_not_empty_string(raw.get("type")):
        raise NerdgraphError("Invalid team resource type")
    if not is_not_empty_string(raw.get("content")):
        raise NerdgraphError("Invalid team resource content")

    title = raw.get("title")
    return TeamResource(
        type=raw["type"],
        title=title if is_string(title) else None,
        content=raw["content"],
    )


def map_team_tags(raw: Any) -> List[TeamTag]:
    if not isinstance(raw, list):
        raise NerdgraphError("Invalid tags")

    tags: List[TeamTag] = []
    for item in raw:
        if not is_object(item):
            raise NerdgraphError("Invalid tag item")
        if not is_not_empty_string(item.get("key")):
            raise NerdgraphError("Invalid tag item key")
        if not is_string_array(item.get("values")):
            raise NerdgraphError("Invalid tag item values")
        tags.append(TeamTag(key=item["key"], values=list(item["values"])))
    return tags


def map_team_entity(raw: Any) -> TeamEntity:
    if not is_object(raw):
        raise NerdgraphError("Invalid team entity")
    if not is_not_empty_string(raw.get("id")):
        raise NerdgraphError("Invalid team entity id")
    if not is_not_empty_string(raw.get("name")):
        raise NerdgraphError("Invalid team entity name")

    description = raw.get("description")
    aliases = raw.get("aliases")

    resources: List[TeamResource] = []
    if isinstance(raw.get("resources"), list):
        resources = [map_team_resource(item) for item in raw["resources"]]

    membership = raw.get("membership")
    if not is_object(membership) or not is_not_empty_string(membership.get("id")):
        raise NerdgraphError("Invalid team entity membership")

    return TeamEntity(
        id=raw["id"],
        name=raw["name"],
        description=description if is_string(description) else "",
        aliases=list(aliases) if is_string_array(aliases) else [],
        resources=resources,
        membership=TeamMembership(id=membership["id"]),
        tags=map_team_tags(raw.get("tags")),
    )


def tags_to_input(tags: Mapping[str, Sequence[str]]) -> List[Dict[str, Any]]:
    return [{"key": key, "values": list(values)} for key, values in tags.items()]


def resources_to_input(resources: Sequence[TeamResource]) -> List[Dict[str, Any]]:
    return [resource.to_input() for resource in resources]
