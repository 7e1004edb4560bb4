from __future__ import annotations

import logging
from collections import Counter
from typing import List, Mapping, Optional, Sequence

from nerdgraph_graphql.type_helpers import is_not_empty_string, is_number, is_object, is_string_array

from ...canonical_models import (
    TeamEntity,
    TeamMembersInput,
    TeamResource,
    UpdateMembershipResult,
    UserEntity,
)
from ...errors import NerdgraphError
from ..client import NerdgraphClient, Region
from ..mappers.teams import map_team_entity, resources_to_input, tags_to_input
from ..results import list_at, single_result, value_at
from .users import UsersClient

logger = logging.getLogger(__name__)

TEAM_FIELDS = """
          id
          name
          description
          aliases
          resources {
            content
            title
            type
          }
          membership {
            id
          }
          tags {
            key
            values
          }
"""

TEAM_SEARCH_QUERY = (
    """
{
  actor {
    entityManagement {
      entitySearch(query: "type = 'TEAM'", cursor: $cursor) {
        entities {
          ... on EntityManagementTeamEntity {"""
    + TEAM_FIELDS
    + """          }
        }
        nextCursor
      }
    }
  }
}
"""
)
TEAM_SEARCH_CURSOR_PATH = "actor.entityManagement.entitySearch.nextCursor"
TEAM_SEARCH_ENTITIES_PATH = "actor.entityManagement.entitySearch.entities"

COLLECTION_ELEMENTS_QUERY = """
{
  actor {
    entityManagement {
      collectionElements(
        filter: {collectionId: {eq: $collectionId}}
        cursor: $cursor
      ) {
        items {
          ... on EntityManagementUserEntity {
            userId
          }
        }
        nextCursor
      }
    }
  }
}
"""
COLLECTION_ELEMENTS_CURSOR_PATH = "actor.entityManagement.collectionElements.nextCursor"
COLLECTION_ELEMENTS_ITEMS_PATH = "actor.entityManagement.collectionElements.items"

ADD_MEMBERS_MUTATION = """
{
  entityManagementAddCollectionMembers(
    collectionId: $collectionId
    ids: $userGuids
  )
}
"""

REMOVE_MEMBERS_MUTATION = """
{
  entityManagementRemoveCollectionMembers(
    collectionId: $collectionId
    ids: $userGuids
  )
}
"""

CREATE_TEAM_MUTATION = """
{
  entityManagementCreateTeam(
    teamEntity: {
      name: $teamName
      description: $teamDescription
      aliases: $teamAliases
      tags: $tags
      resources: $resources
      scope: {
        id: $orgId
        type: ORGANIZATION
      }
    }
  ) {
    entity {
      id
    }
  }
}
"""

UPDATE_TEAM_MUTATION = (
    """
{
  entityManagementUpdateTeam(
    id: $teamId
    teamEntity: {
      name: $teamName
      description: $teamDescription
      aliases: $teamAliases
      tags: $tags
      resources: $resources
    }
  ) {
    entity {"""
    + TEAM_FIELDS
    + """    }
  }
}
"""
)

DELETE_TEAM_MUTATION = """
{
  entityManagementDelete(id: $teamId) {
    id
  }
}
"""


def _same_members(actual: Sequence[str], expected: Sequence[str]) -> bool:
    return Counter(actual) == Counter(expected)


class TeamsClient:
    def __init__(
        self,
        client: NerdgraphClient,
        users_client: UsersClient,
        org_id: str,
        api_key: str,
        region: Region = Region.US,
    ):
        self.client = client
        self.users_client = users_client
        self.org_id = org_id
        self.api_key = api_key
        self.region = region

    def get_team_by_name(self, name: str) -> Optional[TeamEntity]:
        """Find a team by exact (case-sensitive) name across all search pages."""
        results = self.client.query(
            self.api_key,
            TEAM_SEARCH_QUERY,
            {},
            next_cursor_path=TEAM_SEARCH_CURSOR_PATH,
            region=self.region,
        )

        for data in results:
            entities = list_at(data, TEAM_SEARCH_ENTITIES_PATH, "entity management entity search entities")
            if entities is None:
                continue
            for entity in entities:
                if is_object(entity) and entity.get("name") == name:
                    return map_team_entity(entity)
        return None

    def get_team_members(self, team: TeamEntity) -> List[UserEntity]:
        results = self.client.query(
            self.api_key,
            COLLECTION_ELEMENTS_QUERY,
            {"collectionId": ("ID!", team.membership.id)},
            next_cursor_path=COLLECTION_ELEMENTS_CURSOR_PATH,
            region=self.region,
        )

        members: List[UserEntity] = []
        for data in results:
            items = list_at(data, COLLECTION_ELEMENTS_ITEMS_PATH, "entity management collection elements items")
            if items is None:
                continue
            for item in items:
                if not is_object(item) or not is_number(item.get("userId")):
                    raise NerdgraphError("Expected user item but found incompatible result")
                user = self.users_client.get_user_by_id(item["userId"])
                if user is None:
                    raise NerdgraphError(f"Invalid userId returned for collection: {item['userId']}")
                members.append(user)
        return members

    def add_members(self, team: TeamEntity, user_guids: Sequence[str]) -> List[str]:
        return self._change_members(
            team,
            user_guids,
            ADD_MEMBERS_MUTATION,
            "entityManagementAddCollectionMembers",
            "add",
            "added",
        )

    def remove_members(self, team: TeamEntity, user_guids: Sequence[str]) -> List[str]:
        return self._change_members(
            team,
            user_guids,
            REMOVE_MEMBERS_MUTATION,
            "entityManagementRemoveCollectionMembers",
            "remove",
            "removed",
        )

    def _change_members(
        self,
        team: TeamEntity,
        user_guids: Sequence[str],
        mutation: str,
        result_path: str,
        verb: str,
        past: str,
    ) -> List[str]:
        results = self.client.query(
            self.api_key,
            mutation,
            {
                "collectionId": ("ID!", team.membership.id),
                "userGuids": ("[ID!]!", list(user_guids)),
            },
            mutation=True,
            region=self.region,
        )
        data = single_result(results, f"{verb} member")

        changed = value_at(data, result_path)
        if not is_string_array(changed):
            raise NerdgraphError(
                f"Expected {past} user IDs array but found {type(changed).__name__}"
            )
        if not _same_members(changed, user_guids):
            raise NerdgraphError(
                f"Expected the set of users to {verb} and the set of users "
                f"{past} to be equal but they differ"
            )
        return list(changed)

    def update_membership(
        self,
        team: TeamEntity,
        members: Sequence[TeamMembersInput],
    ) -> UpdateMembershipResult:
        """Make the team's membership match ``members``.

        Emails that do not resolve to a user are logged and skipped. Users to
        add and users to remove are each sent in a single mutation.
        """
        users_to_remove = [member.guid for member in self.get_team_members(team)]
        users_to_add: List[str] = []

        for batch in members:
            for email in batch.members:
                user = self.users_client.get_user_by_email(batch.authentication_domain_id, email)
                if user is None:
                    logger.warning("User not found: %s", email)
                    continue
                if user.guid in users_to_remove:
                    users_to_remove.remove(user.guid)
                else:
                    users_to_add.append(user.guid)

        if users_to_add:
            self.add_members(team, users_to_add)
        if users_to_remove:
            self.remove_members(team, users_to_remove)

        return UpdateMembershipResult(users_added=users_to_add, users_removed=users_to_remove)

    def create_team(
        self,
        name: str,
        members: Sequence[TeamMembersInput],
        description: str,
        aliases: Sequence[str],
        tags: Mapping[str, Sequence[str]],
        resources: Sequence[TeamResource],
    ) -> TeamEntity:
        results = self.client.query(
            self.api_key,
            CREATE_TEAM_MUTATION,
            {
                "teamName": ("String!", name),
                "teamDescription": ("String", description),
                "teamAliases": ("[String!]", list(aliases)),
                "orgId": ("ID!", self.org_id),
                "tags": ("[EntityManagementTagInput!]", tags_to_input(tags)),
                "resources": (
                    "[EntityManagementTeamResourceCreateInput!]",
                    resources_to_input(resources),
                ),
            },
            mutation=True,
            region=self.region,
        )
        data = single_result(results, "create team")

        team_guid = value_at(data, "entityManagementCreateTeam.entity.id")
        if not is_not_empty_string(team_guid):
            raise NerdgraphError(f"Expected team entity GUID but found {team_guid!r}")

        # The search index is the only source of the full entity shape.
        team = self.get_team_by_name(name)
        if team is None:
            raise NerdgraphError(f"Team not found: {name}")
        if team.id != team_guid:
            raise NerdgraphError(
                f"Expected created team entity GUID {team_guid} to match "
                f"fetched team entity GUID {team.id}"
            )

        self.update_membership(team, members)
        return team

    def update_team(
        self,
        name: str,
        members: Sequence[TeamMembersInput],
        description: str,
        aliases: Sequence[str],
        tags: Mapping[str, Sequence[str]],
        resources: Sequence[TeamResource],
    ) -> TeamEntity:
        team = self.get_team_by_name(name)
        if team is None:
            raise NerdgraphError(f"Team not found: {name}")

        results = self.client.query(
            self.api_key,
            UPDATE_TEAM_MUTATION,
            {
                "teamId": ("ID!", team.id),
                "teamName": ("String!", name),
                "teamDescription": ("String", description),
                "teamAliases": ("[String!]", list(aliases)),
                "tags": ("[EntityManagementTagInput!]", tags_to_input(tags)),
                "resources": (
                    "[EntityManagementTeamResourceUpdateInput!]",
                    resources_to_input(resources),
                ),
            },
            mutation=True,
            region=self.region,
        )
        data = single_result(results, "update team")

        entity = value_at(data, "entityManagementUpdateTeam.entity")
        if not is_object(entity):
            raise NerdgraphError("Expected updated team entity but found incompatible result")
        updated = map_team_entity(entity)

        self.update_membership(updated, members)
        return updated

    def remove_team(self, name: str) -> str:
        team = self.get_team_by_name(name)
        if team is None:
            raise NerdgraphError(f"Team not found: {name}")

        results = self.client.query(
            self.api_key,
            DELETE_TEAM_MUTATION,
            {"teamId": ("ID!", team.id)},
            mutation=True,
            region=self.region,
        )
        data = single_result(results, "delete team")

        team_guid = value_at(data, "entityManagementDelete.id")
        if not is_not_empty_string(team_guid):
            raise NerdgraphError(f"Expected team entity GUID but found {team_guid!r}")
        if team_guid != team.id:
            raise NerdgraphError(
                f"Expected deleted team entity GUID {team_guid} to match "
                f"fetched team entity GUID {team.id}"
            )
        return team_guid
