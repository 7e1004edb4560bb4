from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .graph.client import Region, to_region

_LIST_SEPARATOR = re.compile(r"\s*,\s*")


@dataclass(frozen=True)
class Inputs:
    org_id: str
    api_key: str
    region: Region = Region.US
    authentication_domain_id: Optional[str] = None
    files_added: List[str] = field(default_factory=list)
    files_modified: List[str] = field(default_factory=list)
    files_deleted: List[str] = field(default_factory=list)
    workspace: str = ""
    endpoint: Optional[str] = None


def split_files(raw: Optional[str]) -> List[str]:
    if not raw or not raw.strip():
        return []
    return [part.strip() for part in _LIST_SEPARATOR.split(raw.strip()) if part.strip()]


def get_input(environ: Mapping[str, str], name: str, required: bool = False) -> str:
    """Read an action input the way the Actions runner exposes it (INPUT_<NAME>)."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    value = (environ.get(key) or "").strip()
    if required and not value:
        raise ValueError(f"Input required and not supplied: {name}")
    return value


def get_inputs(environ: Optional[Mapping[str, str]] = None) -> Inputs:
    env = os.environ if environ is None else environ
    return Inputs(
        org_id=get_input(env, "org-id", required=True),
        api_key=get_input(env, "api-key", required=True),
        region=to_region(get_input(env, "region")),
        authentication_domain_id=get_input(env, "authentication-domain-id") or None,
        files_added=split_files(get_input(env, "files-added")),
        files_modified=split_files(get_input(env, "files-modified")),
        files_deleted=split_files(get_input(env, "files-deleted")),
        workspace=env.get("GITHUB_WORKSPACE", ""),
        endpoint=env.get("NERDGRAPH_ENDPOINT") or None,
    )
