from __future__ import annotations

from typing import Optional, Union

from ...canonical_models import UserEntity
from ...errors import NerdgraphError
from ..client import NerdgraphClient, Region
from ..mappers.users import is_user_search_result, map_user_entity
from ..results import list_at, single_result

USER_ID_BY_EMAIL_QUERY = """
{
  customerAdministration {
    users(filter: {authenticationDomainId: {eq: $authenticationDomainId}, email: {eq: $email}}) {
      items {
        authenticationDomainId
        id
      }
    }
  }
}
"""

USER_BY_ID_QUERY = """
{
  actor {
    entitySearch(query: $query) {
      results {
        entities {
          guid
          name
        }
      }
    }
  }
}
"""


def user_search_query(user_id: Union[int, str]) -> str:
    user_id_clean = str(user_id).strip()
    if not user_id_clean or "'" in user_id_clean or "\\" in user_id_clean:
        raise ValueError(f"invalid user id: {user_id!r}")
    return f"type = 'USER' and tags.userId = '{user_id_clean}'"


class UsersClient:
    def __init__(self, client: NerdgraphClient, api_key: str, region: Region = Region.US):
        self.client = client
        self.api_key = api_key
        self.region = region

    def get_user_id_by_email(self, authentication_domain_id: str, email: str) -> Optional[str]:
        """Look up a user id by email within one authentication domain.

        Returns None when no user matches. More than one match, or a match from
        a different authentication domain, raises NerdgraphError.
        """
        results = self.client.query(
            self.api_key,
            USER_ID_BY_EMAIL_QUERY,
            {
                "authenticationDomainId": ("ID", authentication_domain_id),
                "email": ("String", email),
            },
            region=self.region,
        )
        data = single_result(results, "user search")

        items = list_at(data, "customerAdministration.users.items", "users items")
        if not items:
            return None
        if len(items) > 1:
            raise NerdgraphError(f"Expected exactly one user but found {len(items)}")

        user = items[0]
        if not is_user_search_result(user):
            raise NerdgraphError("Expected user search result but found incompatible result")
        if user["authenticationDomainId"] != authentication_domain_id:
            raise NerdgraphError(
                f"Expected authentication domain ID {authentication_domain_id} "
                f"but found {user['authenticationDomainId']}"
            )
        return user["id"]

    def get_user_by_id(self, user_id: Union[int, str]) -> Optional[UserEntity]:
        results = self.client.query(
            self.api_key,
            USER_BY_ID_QUERY,
            {"query": ("String", user_search_query(user_id))},
            region=self.region,
        )
        data = single_result(results, "user entity search")

        entities = list_at(data, "actor.entitySearch.results.entities", "entity search results entities")
        if not entities:
            return None
        if len(entities) > 1:
            raise NerdgraphError(f"Expected exactly one user entity but found {len(entities)}")
        return map_user_entity(entities[0])

    def get_user_by_email(self, authentication_domain_id: str, email: str) -> Optional[UserEntity]:
        user_id = self.get_user_id_by_email(authentication_domain_id, email)
        if user_id is None:
            return None
        return self.get_user_by_id(user_id)
