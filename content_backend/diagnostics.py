"""
Command-line diagnostics for the content storage backends.

Direct file commands print errors with their underlying message and exit
non-zero. Examples:
    python scripts/storage_diagnostics.py status
    python scripts/storage_diagnostics.py dump news
    python scripts/storage_diagnostics.py get news.json
    python scripts/storage_diagnostics.py save test.json --content '{"ok": true}'
    python scripts/storage_diagnostics.py delete test.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from content_backend.config import get_settings
from content_backend.dependencies import build_data_manager
from content_backend.errors import GitHubApiError
from content_backend.storage import DOCUMENT_KINDS

_DUMPERS = {
    "news": "get_news_items",
    "site_settings": "get_site_settings",
    "social_links": "get_social_links",
    "admin_settings": "get_admin_settings",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Content storage diagnostics")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("status", help="Show which backend is in use")

    dump = sub.add_parser("dump", help="Print a content document")
    dump.add_argument("kind", choices=sorted(DOCUMENT_KINDS))

    get = sub.add_parser("get", help="Read a repository file")
    get.add_argument("path")

    save = sub.add_parser("save", help="Create or update a repository file")
    save.add_argument("path")
    save.add_argument("--content", required=True)
    save.add_argument("--message", default="Update via diagnostics")

    delete = sub.add_parser("delete", help="Delete a repository file")
    delete.add_argument("path")
    delete.add_argument("--message", default="Delete via diagnostics")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    manager = build_data_manager(settings)
    manager.initialize()

    if args.command == "status":
        print(f"backend: {manager.state.value}")
        return 0
    if args.command == "dump":
        document = getattr(manager, _DUMPERS[args.kind])()
        print(json.dumps(document, indent=2, ensure_ascii=False))
        return 0

    api = manager.github_api
    if api is None:
        print("GitHub storage is not available; file commands need it.", file=sys.stderr)
        return 2
    try:
        if args.command == "get":
            file = api.get_file(args.path)
            if file is None:
                print(f"{args.path}: not found")
                return 1
            print(f"sha: {file.sha}")
            print(file.content)
        elif args.command == "save":
            result = api.save_file(args.path, args.content, args.message)
            print(json.dumps(result.get("commit", result), indent=2))
        elif args.command == "delete":
            result = api.delete_file(args.path, args.message)
            print(json.dumps(result.get("commit", result), indent=2))
    except (GitHubApiError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0