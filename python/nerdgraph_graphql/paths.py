from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class PathStatus(Enum):
    INVALID = "invalid"
    ABSENT = "absent"
    FOUND = "found"


@dataclass(frozen=True)
class PathResolution:
    status: PathStatus
    value: Any = None

    @property
    def found(self) -> bool:
        return self.status is PathStatus.FOUND

    @property
    def invalid(self) -> bool:
        return self.status is PathStatus.INVALID

    @property
    def absent(self) -> bool:
        return self.status is PathStatus.ABSENT


INVALID = PathResolution(PathStatus.INVALID)
ABSENT = PathResolution(PathStatus.ABSENT)


def find_by_path(value: Any, prop_path: str) -> PathResolution:
    """Resolve a dotted path such as ``actor.entitySearch.nextCursor``.

    Walking into anything that is not an object gives ``INVALID``; a missing
    key gives ``ABSENT``; otherwise the value is ``FOUND``, whatever it is
    (``None``, ``False`` and ``0`` included).
    """
    current = value
    for key in prop_path.split("."):
        if not isinstance(current, dict):
            return INVALID
        if key not in current:
            return ABSENT
        current = current[key]
    return PathResolution(PathStatus.FOUND, current)
