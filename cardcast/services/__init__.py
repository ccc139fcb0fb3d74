"""
Cardcast services.

API client and the fetch-through deck cache.
"""

from cardcast.services.client import CardcastClient
from cardcast.services.deck_cache import CacheEntry, DeckCache, DeckFetcher, normalize_code

__all__ = [
    "CacheEntry",
    "CardcastClient",
    "DeckCache",
    "DeckFetcher",
    "normalize_code",
]
