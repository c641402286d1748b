#!/usr/bin/env python3
"""Command line entry point for ad-hoc GraphQL calls against the MRP backend.

Usage:
    mrp-client query 'query { getAllRoles { id nombre } }'
    mrp-client mutate 'mutation($id: ID!) { deleteRole(id: $id) }' --variables '{"id": "3"}'
    mrp-client login admin@example.com

Environment variables (a ``.env`` file in the working directory is loaded):
    MRP_API_URL, MRP_ACCESS_TOKEN, MRP_HTTP_TIMEOUT, LOG_LEVEL
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from mrp_client.auth import AuthClient
from mrp_client.client import GraphQLClient
from mrp_client.exceptions import MrpClientError
from mrp_client.session import EnvTokenSource, SessionStore, StaticTokenSource

logger = logging.getLogger(__name__)


def _parse_variables(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    if not raw:
        return None
    try:
        variables = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"--variables is not valid JSON: {exc}") from exc
    if not isinstance(variables, dict):
        raise argparse.ArgumentTypeError("--variables must be a JSON object")
    return variables


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mrp-client",
        description="Run GraphQL operations against the MRP backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--api-url", help="Backend base URL (default: MRP_API_URL)")
    parser.add_argument("--token", help="Bearer token (default: MRP_ACCESS_TOKEN)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name in ("query", "mutate"):
        sub = subparsers.add_parser(name, help=f"Execute a GraphQL {name}")
        sub.add_argument("document", help="GraphQL document, or '-' to read it from stdin")
        sub.add_argument("--variables", type=_parse_variables, help="Variables as a JSON object")
        sub.add_argument("--operation-name", help="operationName to send")

    login = subparsers.add_parser("login", help="Log in and print the bearer token")
    login.add_argument("email")
    login.add_argument("--password", help="Password (prompted when omitted)")
    return parser


def _run_operation(args: argparse.Namespace) -> int:
    token_source = StaticTokenSource(args.token) if args.token else EnvTokenSource()
    document = sys.stdin.read() if args.document == "-" else args.document
    with GraphQLClient(args.api_url, token_source=token_source) as client:
        if args.command == "mutate":
            data = client.mutate(document, args.variables, args.operation_name)
        else:
            data = client.query(document, args.variables, args.operation_name)
    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


def _run_login(args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("Password: ")
    store = SessionStore()
    AuthClient(store, args.api_url).login(args.email, password)
    print(store.get())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    load_dotenv()

    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = build_parser().parse_args(argv)
    try:
        if args.command == "login":
            return _run_login(args)
        return _run_operation(args)
    except MrpClientError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error [{exc.error_code}]: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
