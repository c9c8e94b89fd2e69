"""Command line access to a running Inkdrop local server.

Usage:
    INKDROP_USERNAME=... INKDROP_PASSWORD=... python -m inkdrop_client \
        list-notes [--keyword K] [--limit 10] [--sort updatedAt] [--ascending]

    python -m inkdrop_client list-books
    python -m inkdrop_client list-tags
    python -m inkdrop_client get note:Bk5Ivk0T
    python -m inkdrop_client info
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

import requests

from .client import InkdropClient
from .config import load_config
from .errors import InkdropError
from .transport import RequestAborted

logger = logging.getLogger(__name__)


async def run(args: argparse.Namespace, client: InkdropClient) -> List[str]:
    """Execute one subcommand and return the lines to print."""
    if args.command == "list-notes":
        params = {
            "keyword": args.keyword,
            "limit": args.limit,
            "sort": args.sort,
            "descending": not args.ascending,
        }
        notes = await client.notes.list(params)
        return [f"{note.id}\t{note.title or '(untitled)'}" for note in notes]

    if args.command == "list-books":
        books = await client.books.list()
        return [f"{book.id}\t{book.name}" for book in books]

    if args.command == "list-tags":
        tags = await client.tags.list()
        return [f"{tag.id}\t{tag.name}" for tag in tags]

    if args.command == "get":
        doc = await client.docs.get(args.doc_id)
        return [json.dumps(doc.to_dict(), indent=2, ensure_ascii=False)]

    if args.command == "info":
        info = await client.server_info()
        return [json.dumps(info.model_dump(), indent=2)]

    raise ValueError(f"Unknown command: {args.command}")


async def _main_async(args: argparse.Namespace) -> List[str]:
    config = load_config()
    if args.base_url:
        config = replace(config, base_url=args.base_url)

    logger.debug("Connecting to %s as %s", config.base_url, config.username)
    async with InkdropClient.from_config(config) as client:
        return await run(args, client)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inkdrop_client", description="Inkdrop local server client"
    )
    parser.add_argument(
        "--base-url", default=None,
        help="Server URL (default: $INKDROP_BASE_URL or http://127.0.0.1:19840)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    notes = sub.add_parser("list-notes", help="List notes")
    notes.add_argument("--keyword", default=None, help="Search keyword")
    notes.add_argument("--limit", type=int, default=10, help="Maximum notes")
    notes.add_argument(
        "--sort", default="updatedAt",
        choices=["updatedAt", "createdAt", "title"],
        help="Sort field",
    )
    notes.add_argument(
        "--ascending", action="store_true", help="Sort ascending"
    )

    sub.add_parser("list-books", help="List notebooks")
    sub.add_parser("list-tags", help="List tags")

    get = sub.add_parser("get", help="Print a document as JSON")
    get.add_argument("doc_id", help="Document id, e.g. note:Bk5Ivk0T")

    sub.add_parser("info", help="Print server info")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        lines = asyncio.run(_main_async(args))
    except (
        ValueError, InkdropError, RequestAborted, requests.RequestException
    ) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0
