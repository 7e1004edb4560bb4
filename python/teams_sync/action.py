from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from nerdgraph_graphql.type_helpers import (
    is_object,
    is_string,
    is_string_array,
    is_string_map_string_array,
)

from .canonical_models import TeamEntity, TeamMembersInput, TeamResource
from .graph.api.teams import TeamsClient
from .graph.mappers.teams import map_team_resource
from .inputs import Inputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamDefinition:
    description: str = ""
    aliases: List[str] = field(default_factory=list)
    members: List[TeamMembersInput] = field(default_factory=list)
    contacts: List[TeamResource] = field(default_factory=list)
    links: List[TeamResource] = field(default_factory=list)
    tags: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def resources(self) -> List[TeamResource]:
        return [*self.contacts, *self.links]


def parse_members(raw: Any, default_authentication_domain_id: Optional[str]) -> List[TeamMembersInput]:
    """Normalize a definition's ``members`` list.

    Bare email strings are gathered into one batch for the default
    authentication domain, which goes first. A list holding anything other than
    strings and well formed ``{authenticationDomainId, members}`` objects is
    treated as no members at all.
    """
    if not isinstance(raw, list):
        return []

    default_members: List[str] = []
    batches: List[TeamMembersInput] = []
    for item in raw:
        if is_string(item):
            default_members.append(item)
        elif (
            is_object(item)
            and is_string(item.get("authenticationDomainId"))
            and is_string_array(item.get("members"))
        ):
            batches.append(
                TeamMembersInput(
                    authentication_domain_id=item["authenticationDomainId"],
                    members=list(item["members"]),
                )
            )
        else:
            return []

    if default_members:
        if not default_authentication_domain_id:
            raise ValueError(
                "authentication-domain-id is required when members are listed as plain emails"
            )
        batches.insert(
            0,
            TeamMembersInput(
                authentication_domain_id=default_authentication_domain_id,
                members=default_members,
            ),
        )
    return batches


def parse_team_definition(raw: Any, default_authentication_domain_id: Optional[str] = None) -> TeamDefinition:
    if not is_object(raw):
        raise ValueError("Invalid team definition")

    description = raw.get("description")
    aliases = raw.get("aliases")
    tags = raw.get("tags")
    contacts = raw.get("contacts")
    links = raw.get("links")

    return TeamDefinition(
        description=description if is_string(description) else "",
        aliases=list(aliases) if is_string_array(aliases) else [],
        members=parse_members(raw.get("members"), default_authentication_domain_id),
        contacts=[map_team_resource(item) for item in contacts] if isinstance(contacts, list) else [],
        links=[map_team_resource(item) for item in links] if isinstance(links, list) else [],
        tags={key: list(values) for key, values in tags.items()} if is_string_map_string_array(tags) else {},
    )


def team_name_for(file: str) -> str:
    return Path(file).stem


class TeamsSyncAction:
    """Applies added, modified and deleted team definition files, in that order."""

    def __init__(self, client: TeamsClient, inputs: Inputs):
        self.client = client
        self.inputs = inputs
        self.workspace = Path(inputs.workspace or "")

    def run(self) -> None:
        self.process_files_added(self.inputs.files_added)
        self.process_files_modified(self.inputs.files_modified)
        self.process_files_deleted(self.inputs.files_deleted)

    def load_definition(self, file: str) -> TeamDefinition:
        path = self.workspace / file
        logger.debug("loading team definition: %s", path)
        data = json.loads(path.read_text(encoding="utf-8"))
        return parse_team_definition(data, self.inputs.authentication_domain_id)

    def process_files_added(self, files_added: List[str]) -> List[TeamEntity]:
        if not files_added:
            logger.debug("no files added")
            return []

        teams: List[TeamEntity] = []
        for file in files_added:
            definition = self.load_definition(file)
            name = team_name_for(file)
            logger.debug("creating team: %s", name)
            teams.append(
                self.client.create_team(
                    name,
                    definition.members,
                    definition.description,
                    definition.aliases,
                    definition.tags,
                    definition.resources,
                )
            )
        return teams

    def process_files_modified(self, files_modified: List[str]) -> List[TeamEntity]:
        if not files_modified:
            logger.debug("no files modified")
            return []

        teams: List[TeamEntity] = []
        for file in files_modified:
            definition = self.load_definition(file)
            name = team_name_for(file)
            logger.debug("updating team: %s", name)
            teams.append(
                self.client.update_team(
                    name,
                    definition.members,
                    definition.description,
                    definition.aliases,
                    definition.tags,
                    definition.resources,
                )
            )
        return teams

    def process_files_deleted(self, files_deleted: List[str]) -> List[str]:
        if not files_deleted:
            logger.debug("no files deleted")
            return []

        ids: List[str] = []
        for file in files_deleted:
            name = team_name_for(file)
            logger.debug("deleting team: %s", name)
            ids.append(self.client.remove_team(name))
        return ids
