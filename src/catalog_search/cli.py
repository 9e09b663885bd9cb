"""Command-line interface for the catalog search engine."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from catalog_search.sample_data import SAMPLE_PRODUCTS
from catalog_search.search.models import Product, ScoredResult
from catalog_search.search.scorer import search


def sample_catalog() -> list[Product]:
    """The built-in sample catalog as scorer Products."""
    return [
        Product(
            id=item["slug"],
            **{key: value for key, value in item.items() if key not in ("slug", "price")},
            price=float(item["price"]),
        )
        for item in SAMPLE_PRODUCTS
    ]


def load_catalog(path: str) -> list[Product]:
    """Load a JSON list of products from a file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("Catalog file must contain a JSON list of products")
    return [Product.model_validate(item) for item in data]


def search_command(args: argparse.Namespace) -> int:
    """Search a catalog file (or the sample catalog) and print ranked results."""
    if args.catalog:
        try:
            catalog = load_catalog(args.catalog)
        except (OSError, ValueError, ValidationError) as e:
            print(f"Could not load catalog: {e}", file=sys.stderr)
            return 1
    else:
        catalog = sample_catalog()
        print("Using sample catalog (use --catalog to provide your own)\n")

    results = search(catalog, args.query)
    if args.limit:
        results = results[: args.limit]

    print(f"Query: {args.query!r}")
    print(f"{'=' * 60}")

    if not results:
        print("No matching products.")
        return 0

    for position, product in enumerate(results, start=1):
        if isinstance(product, ScoredResult):
            fields = ", ".join(product.matched_fields) or "-"
            print(f"{position:3}. [{product.relevance_score:4}] {product.name} ({product.id})")
            print(f"       matches: {fields}")
        else:
            print(f"{position:3}. {product.name} ({product.id})")

    print(f"{'=' * 60}")
    print(f"{len(results)} result(s)")
    return 0


def example_command(args: argparse.Namespace) -> int:
    """Print the sample catalog in the --catalog JSON format."""
    data = [product.model_dump(mode="json", exclude_none=True) for product in sample_catalog()]
    print(json.dumps(data, indent=2 if args.pretty else None, ensure_ascii=False))
    return 0


async def _create_admin(username: str, email: str, password: str) -> int:
    from catalog_search.db.base import async_session_maker, create_tables
    from catalog_search.services.auth import create_admin, get_user_by_login

    await create_tables()
    async with async_session_maker() as session:
        if await get_user_by_login(session, username) or await get_user_by_login(session, email):
            print(f"Admin '{username}' or email '{email}' already exists", file=sys.stderr)
            return 1
        await create_admin(session, username, email, password)
        await session.commit()

    print(f"Created admin user: {username}")
    return 0


def create_admin_command(args: argparse.Namespace) -> int:
    """Create an admin account directly in the database."""
    return asyncio.run(_create_admin(args.username, args.email, args.password))


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="catalog-search",
        description="Product catalog relevance search",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search a product catalog")
    search_parser.add_argument("query", help="Free-text query (empty string lists everything)")
    search_parser.add_argument(
        "--catalog",
        type=str,
        help="Path to a JSON file with a list of products",
    )
    search_parser.add_argument(
        "--limit",
        type=int,
        default=0,
        help="Show at most this many results (default: all)",
    )

    # Example command
    example_parser = subparsers.add_parser(
        "example",
        help="Show the sample catalog as JSON",
    )
    example_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty print JSON",
    )

    # Create admin command
    admin_parser = subparsers.add_parser("create-admin", help="Create an admin user")
    admin_parser.add_argument("--username", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)

    args = parser.parse_args(argv)

    if args.command == "search":
        return search_command(args)
    if args.command == "example":
        return example_command(args)
    if args.command == "create-admin":
        return create_admin_command(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
