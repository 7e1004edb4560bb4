from __future__ import annotations

from functools import cached_property
from typing import Optional

import httpx

from nerdgraph_graphql.client import GraphQLClient

from .action import TeamsSyncAction
from .graph.api.teams import TeamsClient
from .graph.api.users import UsersClient
from .graph.client import NerdgraphClient
from .inputs import Inputs, get_inputs


class AppConfig:
    """Builds each collaborator once, on first use."""

    def __init__(
        self,
        inputs: Optional[Inputs] = None,
        *,
        timeout_seconds: float = 30.0,
    ):
        self._inputs = inputs
        self.timeout_seconds = timeout_seconds

    @cached_property
    def inputs(self) -> Inputs:
        return self._inputs if self._inputs is not None else get_inputs()

    @cached_property
    def http_client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout_seconds)

    @cached_property
    def graphql_client(self) -> GraphQLClient:
        return GraphQLClient(http_client=self.http_client)

    @cached_property
    def nerdgraph_client(self) -> NerdgraphClient:
        return NerdgraphClient(self.graphql_client, endpoint=self.inputs.endpoint)

    @cached_property
    def users_client(self) -> UsersClient:
        return UsersClient(self.nerdgraph_client, self.inputs.api_key, self.inputs.region)

    @cached_property
    def teams_client(self) -> TeamsClient:
        return TeamsClient(
            self.nerdgraph_client,
            self.users_client,
            self.inputs.org_id,
            self.inputs.api_key,
            self.inputs.region,
        )

    @cached_property
    def teams_sync_action(self) -> TeamsSyncAction:
        return TeamsSyncAction(self.teams_client, self.inputs)

    def close(self) -> None:
        if "http_client" in self.__dict__:
            self.http_client.close()

    def __enter__(self) -> "AppConfig":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
