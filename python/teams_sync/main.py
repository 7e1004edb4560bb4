from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .app_config import AppConfig
from .graph.client import to_region
from .inputs import Inputs, get_input, split_files
from .logging import configure_logging

logger = logging.getLogger("teams_sync")


def _failure_message(error: BaseException) -> str:
    message = str(error).strip()
    return message or f"Unknown error ({type(error).__name__})"


def do_action(app_config: AppConfig) -> int:
    """Run the sync action; any failure is logged and turned into exit status 1."""
    try:
        logger.debug("running teams sync action")
        app_config.teams_sync_action.run()
        return 0
    except Exception as exc:
        logger.debug("teams sync action failed", exc_info=True)
        logger.error(_failure_message(exc))
        return 1
    finally:
        logger.debug("teams sync action complete")


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    env = os.environ
    parser = argparse.ArgumentParser(
        description="Sync New Relic teams from JSON team definition files"
    )
    parser.add_argument("--org-id", default=get_input(env, "org-id"))
    parser.add_argument("--api-key", default=get_input(env, "api-key"))
    parser.add_argument("--region", default=get_input(env, "region") or "US")
    parser.add_argument(
        "--authentication-domain-id",
        default=get_input(env, "authentication-domain-id"),
        help="Authentication domain used for members listed as plain emails",
    )
    parser.add_argument("--files-added", default=get_input(env, "files-added"))
    parser.add_argument("--files-modified", default=get_input(env, "files-modified"))
    parser.add_argument("--files-deleted", default=get_input(env, "files-deleted"))
    parser.add_argument("--workspace", default=env.get("GITHUB_WORKSPACE", ""))
    parser.add_argument(
        "--endpoint",
        default=env.get("NERDGRAPH_ENDPOINT", ""),
        help="Override the regional NerdGraph endpoint",
    )
    parser.add_argument(
        "--timeout-seconds",
        type=float,
        default=30.0,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=env.get("RUNNER_DEBUG") == "1",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    configure_logging(debug=args.debug)

    if not args.org_id.strip():
        logger.error("Input required and not supplied: org-id")
        return 1
    if not args.api_key.strip():
        logger.error("Input required and not supplied: api-key")
        return 1

    inputs = Inputs(
        org_id=args.org_id.strip(),
        api_key=args.api_key.strip(),
        region=to_region(args.region),
        authentication_domain_id=args.authentication_domain_id.strip() or None,
        files_added=split_files(args.files_added),
        files_modified=split_files(args.files_modified),
        files_deleted=split_files(args.files_deleted),
        workspace=args.workspace,
        endpoint=args.endpoint.strip() or None,
    )

    with AppConfig(inputs, timeout_seconds=args.timeout_seconds) as app_config:
        return do_action(app_config)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
