import argparse
import asyncio
import sys

import aiohttp

from gamescout_core.catalog_api_manager import CatalogAPIManager
from gamescout_core.deals_api_manager import DealsAPIManager
from gamescout_core.exceptions import GameScoutException
from gamescout_core.models import Deal, SortBy
from gamescout_core.store_directory import StoreDirectory
from gamescout_core.ttl_cache import TTLCache

from .config import CATALOG_BASE_URL, DEALS_BASE_URL, HTTP_TIMEOUT, RAWG_API_KEY
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)

SORT_CHOICES = {s.value: s for s in SortBy}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gamescout", description="Look up games and current deals.")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search the game catalog")
    search.add_argument("query", nargs="?", default="")
    search.add_argument("--platform", action="append", default=[], help="Platform id filter (repeatable)")
    search.add_argument("--genre", action="append", default=[], help="Genre slug filter (repeatable)")
    search.add_argument("--page", type=int, default=1)
    search.add_argument("--page-size", type=int, default=20)
    search.add_argument("--sort", choices=sorted(SORT_CHOICES), default=SortBy.METACRITIC.value)

    details = sub.add_parser("details", help="Show catalog details for a game id")
    details.add_argument("game_id", type=int)

    deals = sub.add_parser("deals", help="List current deals for a title")
    deals.add_argument("title")

    sub.add_parser("top", help="List the top deals feed")
    return parser


def format_deal(deal: Deal) -> str:
    return f"{deal.label}: ${deal.price} (was ${deal.normal_price}, -{deal.savings:.0f}%) {deal.url}"


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    cache = TTLCache()
    timeout = aiohttp.ClientTimeout(total=HTTP_TIMEOUT)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        try:
            if args.command == "search":
                catalog = CatalogAPIManager(session, CATALOG_BASE_URL, cache, RAWG_API_KEY)
                result = await catalog.search(
                    args.query, args.platform, args.genre, args.page, args.page_size, SORT_CHOICES[args.sort]
                )
                print(f"{result.total} games found")
                for game in result.items:
                    released = game.released.isoformat() if game.released else "TBA"
                    score = game.metacritic if game.metacritic is not None else "-"
                    print(f"[{game.id}] {game.name} ({released}) metacritic={score} {', '.join(game.platforms)}")

            elif args.command == "details":
                catalog = CatalogAPIManager(session, CATALOG_BASE_URL, cache, RAWG_API_KEY)
                details = await catalog.get_details(args.game_id)
                if details is None:
                    print(f"Game {args.game_id} not found")
                    return 1
                print(details.name)
                print(", ".join(details.genres))
                print()
                print(details.description)

            else:
                deals_manager = DealsAPIManager(session, DEALS_BASE_URL, cache, StoreDirectory(session, DEALS_BASE_URL))
                if args.command == "deals":
                    deals = await deals_manager.get_deals_by_title(args.title)
                else:
                    deals = await deals_manager.get_top_deals()
                if not deals:
                    print("No deals found")
                for deal in deals:
                    print(format_deal(deal))

        except GameScoutException as e:
            logger.error(f"Lookup failed: {e}")
            return 1

    return 0


def cli():
    setup_logging()
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        # Handle Ctrl+C gracefully
        pass


if __name__ == "__main__":
    cli()
