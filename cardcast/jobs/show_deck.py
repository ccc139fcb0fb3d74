"""
Print Cardcast decks by play code.

Usage:
    python -m cardcast.jobs.show_deck CAHBS 1DKT2 --show responses
    cardcast CAHBS

Prompts for a play code when none is given. Repeated codes (in any casing)
are fetched once.
"""

import argparse
import asyncio
import logging
import sys
from typing import TextIO

from cardcast.config import settings
from cardcast.models.card import Card
from cardcast.models.deck import Deck
from cardcast.services.client import CardcastClient
from cardcast.services.deck_cache import DeckCache

logger = logging.getLogger(__name__)

SHOW_CHOICES = ("calls", "responses", "both")


def format_card(card: Card) -> str:
    """Render a card on one line, with blanks shown as underscores."""
    return "____".join(card.text) if card.text else f"<card {card.id}>"


def format_deck(deck: Deck, show: str = "responses") -> str:
    """Render a deck header followed by the selected cards."""
    info = deck.info
    author = info.author.username if info.author else "unknown"
    lines = [
        f"{info.name} [{info.code}] by {author}",
        f"  {len(deck.calls)} calls, {len(deck.responses)} responses, rating {info.rating:.1f}",
    ]
    if show in ("calls", "both"):
        lines.append("Calls:")
        lines.extend(f"  {format_card(card)}" for card in deck.calls)
    if show in ("responses", "both"):
        lines.append("Responses:")
        lines.extend(f"  {format_card(card)}" for card in deck.responses)
    return "\n".join(lines)


async def show_decks(
    codes: list[str],
    cache: DeckCache,
    show: str = "responses",
    out: TextIO = sys.stdout,
    err: TextIO = sys.stderr,
) -> int:
    """
    Look up each code through the cache and print it.

    Returns:
        Number of codes that failed
    """
    failures = 0
    for code in codes:
        result = await cache.try_get_deck(code)
        if result.ok:
            print(format_deck(result.unwrap(), show), file=out)
            continue

        failures += 1
        error = result.error
        assert error is not None
        print(f"{code}: {error.kind.value} failure: {error.message}", file=err)
    return failures


async def run(codes: list[str], ttl: float, show: str) -> int:
    """Fetch and print decks, returning the process exit status."""
    async with CardcastClient() as client:
        cache = DeckCache(client, ttl_seconds=ttl)
        failures = await show_decks(codes, cache, show)

    if failures:
        logger.info("%d of %d lookups failed", failures, len(codes))
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Print Cardcast decks by play code")
    parser.add_argument("codes", nargs="*", help="Deck play codes (e.g., CAHBS)")
    parser.add_argument(
        "--show",
        default="responses",
        choices=SHOW_CHOICES,
        help="Which cards to print (default: responses)",
    )
    parser.add_argument(
        "--ttl",
        type=float,
        default=settings.cache_ttl_seconds,
        help=f"Cache TTL in seconds (default: {settings.cache_ttl_seconds:g})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    codes = args.codes or [input("Enter deck playcode: ")]
    sys.exit(asyncio.run(run(codes, args.ttl, args.show)))


if __name__ == "__main__":
    main()
