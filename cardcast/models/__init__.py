from cardcast.models.card import Card
from cardcast.models.deck import Deck, DeckAuthor, DeckInfo
from cardcast.models.failure import (
    DecodeError,
    DeckResult,
    FailureKind,
    FetchError,
    RemoteError,
    TransportError,
)

__all__ = [
    "Card",
    "Deck",
    "DeckAuthor",
    "DeckInfo",
    "DeckResult",
    "DecodeError",
    "FailureKind",
    "FetchError",
    "RemoteError",
    "TransportError",
]
