from .action import TeamDefinition, TeamsSyncAction, parse_team_definition
from .app_config import AppConfig
from .canonical_models import (
    TeamEntity,
    TeamMembersInput,
    TeamMembership,
    TeamResource,
    TeamTag,
    UpdateMembershipResult,
    UserEntity,
)
from .errors import (
    GraphQLResponseError,
    NerdgraphError,
    SerializationError,
    TransportError,
)
from .graph.api.teams import TeamsClient
from .graph.api.users import UsersClient
from .graph.client import ENDPOINTS, NerdgraphClient, Region, to_region
from .inputs import Inputs, get_inputs

__all__ = [
    "AppConfig",
    "Inputs",
    "get_inputs",
    "NerdgraphClient",
    "Region",
    "ENDPOINTS",
    "to_region",
    "TeamsClient",
    "UsersClient",
    "TeamsSyncAction",
    "TeamDefinition",
    "parse_team_definition",
    "TeamEntity",
    "TeamMembership",
    "TeamMembersInput",
    "TeamResource",
    "TeamTag",
    "UpdateMembershipResult",
    "UserEntity",
    "NerdgraphError",
    "GraphQLResponseError",
    "SerializationError",
    "TransportError",
]
