from cardcast.models import (
    Card,
    Deck,
    DeckAuthor,
    DeckInfo,
    DeckResult,
    DecodeError,
    FailureKind,
    FetchError,
    RemoteError,
    TransportError,
)
from cardcast.services import CardcastClient, DeckCache, normalize_code

__all__ = [
    "Card",
    "CardcastClient",
    "Deck",
    "DeckAuthor",
    "DeckCache",
    "DeckInfo",
    "DeckResult",
    "DecodeError",
    "FailureKind",
    "FetchError",
    "RemoteError",
    "TransportError",
    "normalize_code",
]
