from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class TeamResource:
    type: str  # EMAIL, GITHUB, GITLAB, SLACK, ...
    content: str
    title: Optional[str] = None

    def to_input(self) -> Dict[str, Any]:
        return {"type": self.type, "title": self.title, "content": self.content}


@dataclass(frozen=True)
class TeamTag:
    key: str
    values: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class TeamMembership:
    id: str


@dataclass(frozen=True)
class TeamEntity:
    id: str
    name: str
    membership: TeamMembership
    description: str = ""
    aliases: List[str] = field(default_factory=list)
    resources: List[TeamResource] = field(default_factory=list)
    tags: List[TeamTag] = field(default_factory=list)


@dataclass(frozen=True)
class TeamMembersInput:
    authentication_domain_id: str
    members: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class UpdateMembershipResult:
    users_added: List[str] = field(default_factory=list)
    users_removed: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class UserEntity:
    guid: str
    name: str
