"""Command line interface for the snippet manager."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from .config import Settings
from .logging_config import configure_logging
from .search import ScoredSnippet, SearchQuery
from .services import Services, build_services
from .snippet import CodesparkError, Snippet, SnippetPatch, SnippetValidationError
from .usecases import CreateSnippetInput

logger = logging.getLogger("codespark")

ALL_LIBRARIES = "all"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codespark",
        description="Store, search and copy reusable text snippets",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL env variable or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search snippets; no query lists suggestions")
    search.add_argument("query", nargs="?", default="", help="Free-text query")
    search.add_argument("--library", "-l", action="append", dest="libraries", help="Library id filter")
    search.add_argument("--tag", "-t", action="append", dest="tags", help="Required tag (repeatable)")
    search.add_argument("--limit", type=int, default=None, help="Maximum number of results")

    add = subparsers.add_parser("add", help="Create a snippet")
    add.add_argument("--title", required=True)
    add.add_argument("--body", default="-", help="Snippet body, or '-' to read stdin (default)")
    add.add_argument("--tag", "-t", action="append", dest="tags", default=[])
    add.add_argument("--shortcut")
    add.add_argument("--description")
    add.add_argument("--language")
    add.add_argument("--library", "-l", dest="library_id")
    add.add_argument("--favorite", action="store_true")

    # Absent options stay out of the namespace so they are left untouched;
    # an empty string clears shortcut/description/language.
    edit = subparsers.add_parser("edit", help="Update fields of a snippet", argument_default=argparse.SUPPRESS)
    edit.add_argument("snippet_id")
    edit.add_argument("--title")
    edit.add_argument("--body")
    edit.add_argument("--tag", "-t", action="append", dest="tags")
    edit.add_argument("--shortcut")
    edit.add_argument("--description")
    edit.add_argument("--language")
    edit.add_argument("--library", "-l", dest="library_id")
    favorite = edit.add_mutually_exclusive_group()
    favorite.add_argument("--favorite", dest="is_favorite", action="store_true")
    favorite.add_argument("--no-favorite", dest="is_favorite", action="store_false")

    remove = subparsers.add_parser("rm", help="Delete a snippet")
    remove.add_argument("snippet_id")

    copy = subparsers.add_parser("copy", help="Copy a snippet body to the clipboard")
    copy.add_argument("snippet_id")

    subparsers.add_parser("libraries", help="List libraries and the active one")

    use = subparsers.add_parser("use", help="Switch the active library")
    use.add_argument("library_id", help=f"Library id, or '{ALL_LIBRARIES}' for every library")

    return parser


def format_snippet(snippet: Snippet) -> str:
    tags = f" [{', '.join(snippet.tags)}]" if snippet.tags else ""
    star = "*" if snippet.is_favorite else " "
    shortcut = f" ({snippet.shortcut})" if snippet.shortcut else ""
    return f"{star} {snippet.id}  {snippet.title}{shortcut}{tags}"


def format_result(result: ScoredSnippet) -> str:
    return f"{result.score:7.2f} {format_snippet(result.snippet)}"


async def run_command(args: argparse.Namespace, services: Services) -> int:
    if args.command == "search":
        request = SearchQuery(
            query=args.query,
            library_ids=args.libraries,
            tags=args.tags,
            limit=services.settings.search_limit if args.limit is None else args.limit,
        )
        results = await services.search.execute(request)
        if not results:
            print("No snippets found", file=sys.stderr)
            return 1
        for result in results:
            print(format_result(result))
        return 0

    if args.command == "add":
        body = sys.stdin.read() if args.body == "-" else args.body
        snippet = await services.create.execute(
            CreateSnippetInput(
                title=args.title,
                body=body,
                tags=list(args.tags),
                shortcut=args.shortcut,
                description=args.description,
                language=args.language,
                library_id=args.library_id,
                is_favorite=args.favorite,
            )
        )
        print(format_snippet(snippet))
        return 0

    if args.command == "edit":
        fields = {key: value for key, value in vars(args).items() if key in SnippetPatch.model_fields}
        snippet = await services.update.execute(args.snippet_id, SnippetPatch(**fields))
        print(format_snippet(snippet))
        return 0

    if args.command == "rm":
        snippet = await services.delete.execute(args.snippet_id)
        print(f"Deleted {snippet.title} ({snippet.id})")
        return 0

    if args.command == "copy":
        snippet = await services.copy.execute(args.snippet_id)
        print(f"Copied {snippet.title} (used {snippet.usage_count} times)")
        return 0

    if args.command == "libraries":
        libraries = await services.libraries.execute()
        active = await services.active_library.execute(
            libraries,
            fallback_library_id=services.settings.default_library_id,
        )
        for library in libraries:
            marker = ">" if library.id == active else " "
            read_only = " (read-only)" if library.is_read_only else ""
            print(f"{marker} {library.id}  {library.name} [{library.category.value}]{read_only}")
        return 0

    if args.command == "use":
        library_id = None if args.library_id == ALL_LIBRARIES else args.library_id
        preferences = await services.switch_library.execute(library_id)
        print(f"Active library: {preferences.default_library_id or ALL_LIBRARIES}")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


async def _main(args: argparse.Namespace, settings: Settings) -> int:
    services = await build_services(settings)
    return await run_command(args, services)


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)

    try:
        exit_code = asyncio.run(_main(args, settings))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except SnippetValidationError as exc:
        for issue in exc.issues:
            print(f"Error: {issue.message}", file=sys.stderr)
        sys.exit(1)
    except CodesparkError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        logger.exception("Fatal error")
        print("Fatal error occurred. See log for details.", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
