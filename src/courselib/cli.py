"""CLI entrypoint for the course library."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from courselib.api.authors_api import create_author, delete_author, get_author, list_authors
from courselib.api.courses_api import list_courses
from courselib.api.models import AuthorForCreationDto, AuthorsResourceParameters
from courselib.api.property_mappings import build_property_mapping_registry
from courselib.config.loader import (
    get_paging_settings,
    get_sqlite_path,
    load_config,
    load_property_mappings_config,
)
from courselib.database.sqlite_client import session_context
from courselib.query.errors import InvalidQueryError, MappingConfigurationError
from courselib.query.mapping import PropertyMappingRegistry
from courselib.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_BAD_REQUEST = 2
EXIT_NOT_FOUND = 3


def _load_runtime_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Load runtime config; a missing file means built-in defaults."""
    try:
        return load_config(Path(args.config) if args.config else None)
    except FileNotFoundError:
        logger.debug("No runtime config found, using defaults")
        return {}


def _build_registry(args: argparse.Namespace) -> PropertyMappingRegistry:
    try:
        mappings_config = load_property_mappings_config(Path(args.mappings) if args.mappings else None)
    except FileNotFoundError:
        logger.debug("No property mappings config found, using built-in mappings")
        mappings_config = None
    return build_property_mapping_registry(mappings_config)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_authors_list(args: argparse.Namespace) -> int:
    """List one page of authors."""
    config = _load_runtime_config(args)
    registry = _build_registry(args)
    query = {
        "orderBy": args.order_by,
        "fields": args.fields,
        "pageNumber": args.page_number,
        "pageSize": args.page_size,
        "mainCategory": args.main_category,
        "searchQuery": args.search_query,
    }
    params = AuthorsResourceParameters.from_query(query, paging=get_paging_settings(config))

    with session_context(get_sqlite_path(config)) as session:
        page = list_authors(session, params, registry)

    _print_json({
        "items": page.items,
        "pagination": page.pagination.model_dump(by_alias=True),
    })
    return EXIT_OK


def cmd_authors_get(args: argparse.Namespace) -> int:
    """Show one author."""
    config = _load_runtime_config(args)
    with session_context(get_sqlite_path(config)) as session:
        author = get_author(session, args.author_id, fields=args.fields or "")

    if author is None:
        print(f"Author not found: {args.author_id}", file=sys.stderr)
        return EXIT_NOT_FOUND
    _print_json(author)
    return EXIT_OK


def cmd_authors_add(args: argparse.Namespace) -> int:
    """Add an author."""
    config = _load_runtime_config(args)
    try:
        author_in = AuthorForCreationDto(
            first_name=args.first_name,
            last_name=args.last_name,
            date_of_birth=args.date_of_birth,
            main_category=args.main_category,
        )
    except ValidationError as e:
        logger.warning(f"Invalid author: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_REQUEST

    with session_context(get_sqlite_path(config)) as session:
        created = create_author(session, author_in)
    _print_json(created.model_dump())
    return EXIT_OK


def cmd_authors_delete(args: argparse.Namespace) -> int:
    """Delete an author and its courses."""
    config = _load_runtime_config(args)
    with session_context(get_sqlite_path(config)) as session:
        deleted = delete_author(session, args.author_id)
    if not deleted:
        print(f"Author not found: {args.author_id}", file=sys.stderr)
        return EXIT_NOT_FOUND
    print(f"Deleted author {args.author_id}")
    return EXIT_OK


def cmd_courses_list(args: argparse.Namespace) -> int:
    """List courses for an author."""
    config = _load_runtime_config(args)
    with session_context(get_sqlite_path(config)) as session:
        courses = list_courses(session, args.author_id, fields=args.fields or "")
    if courses is None:
        print(f"Author not found: {args.author_id}", file=sys.stderr)
        return EXIT_NOT_FOUND
    _print_json(courses)
    return EXIT_OK


def cmd_seed(args: argparse.Namespace) -> int:
    """Load authors (with courses) from a JSON file."""
    config = _load_runtime_config(args)
    seed_path = Path(args.file)
    if not seed_path.exists():
        print(f"Error: seed file not found: {seed_path}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    raw = json.loads(seed_path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        print("Error: seed file must contain a JSON list of authors", file=sys.stderr)
        return EXIT_BAD_REQUEST
    try:
        authors: List[AuthorForCreationDto] = [AuthorForCreationDto.model_validate(a) for a in raw]
    except ValidationError as e:
        logger.warning(f"Invalid seed data: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_REQUEST

    with session_context(get_sqlite_path(config)) as session:
        for author_in in authors:
            create_author(session, author_in)
    print(f"Seeded {len(authors)} authors")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="courselib", description="Course library CLI")
    parser.add_argument("--config", type=str, help="Runtime config path (default: courselib.config.yaml)")
    parser.add_argument(
        "--mappings",
        type=str,
        help="Property mappings config path (default: config/property_mappings.yaml)",
    )
    parser.add_argument("--log-level", type=str, help="Log level (default: $COURSELIB_LOG_LEVEL or WARNING)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # authors command
    authors_parser = subparsers.add_parser("authors", help="Author commands")
    authors_subparsers = authors_parser.add_subparsers(dest="authors_subcommand", required=True)

    authors_list_parser = authors_subparsers.add_parser("list", help="List authors (sorted, paged, shaped)")
    authors_list_parser.add_argument("--order-by", type=str, default="name", help="e.g. 'name desc, age' (default: name)")
    authors_list_parser.add_argument("--fields", type=str, default="", help="e.g. 'id,name' (default: all)")
    authors_list_parser.add_argument("--page-number", type=str, help="Page number (default: 1)")
    authors_list_parser.add_argument("--page-size", type=str, help="Page size (default: 10, max: 20)")
    authors_list_parser.add_argument("--main-category", type=str, help="Filter by main category")
    authors_list_parser.add_argument("--search-query", type=str, help="Search category and names")
    authors_list_parser.set_defaults(func=cmd_authors_list)

    authors_get_parser = authors_subparsers.add_parser("get", help="Show one author")
    authors_get_parser.add_argument("author_id", type=str)
    authors_get_parser.add_argument("--fields", type=str, default="", help="e.g. 'id,name' (default: all)")
    authors_get_parser.set_defaults(func=cmd_authors_get)

    authors_add_parser = authors_subparsers.add_parser("add", help="Add an author")
    authors_add_parser.add_argument("--first-name", type=str, required=True)
    authors_add_parser.add_argument("--last-name", type=str, required=True)
    authors_add_parser.add_argument("--date-of-birth", type=str, required=True, help="ISO date, e.g. 1650-07-23")
    authors_add_parser.add_argument("--main-category", type=str, required=True)
    authors_add_parser.set_defaults(func=cmd_authors_add)

    authors_delete_parser = authors_subparsers.add_parser("delete", help="Delete an author")
    authors_delete_parser.add_argument("author_id", type=str)
    authors_delete_parser.set_defaults(func=cmd_authors_delete)

    # courses command
    courses_parser = subparsers.add_parser("courses", help="Course commands")
    courses_subparsers = courses_parser.add_subparsers(dest="courses_subcommand", required=True)
    courses_list_parser = courses_subparsers.add_parser("list", help="List courses for an author")
    courses_list_parser.add_argument("author_id", type=str)
    courses_list_parser.add_argument("--fields", type=str, default="", help="e.g. 'id,title' (default: all)")
    courses_list_parser.set_defaults(func=cmd_courses_list)

    # seed command
    seed_parser = subparsers.add_parser("seed", help="Load authors from a JSON file")
    seed_parser.add_argument("file", type=str, help="Path to JSON list of authors")
    seed_parser.set_defaults(func=cmd_seed)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return EXIT_OK

    try:
        return args.func(args)
    except InvalidQueryError as e:
        logger.warning(f"Bad request for '{args.command}': {e}")
        print(f"Bad request: {e}", file=sys.stderr)
        return EXIT_BAD_REQUEST
    except (MappingConfigurationError, ValueError) as e:
        logger.error(f"Configuration error running '{args.command}': {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
