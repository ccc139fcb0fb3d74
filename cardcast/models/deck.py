"""
Deck models.

A Deck is the unit of caching: the card payload and the deck metadata
merged from a single successful fetch cycle.

INVARIANTS:
- A Deck always carries both its cards and its DeckInfo
- All models are frozen (immutable after construction)
"""

from dataclasses import dataclass
from typing import Any

from cardcast.models.card import Card


@dataclass(frozen=True, slots=True)
class DeckAuthor:
    """The Cardcast user who published a deck."""

    id: str
    username: str


@dataclass(frozen=True, slots=True)
class DeckInfo:
    """
    Descriptive metadata about a deck.

    Attributes:
        name: Deck name
        code: Play code as reported by the service (upper-case, e.g. "CAHBS")
        description: Free-text description
        created_at: Creation timestamp
        updated_at: Last modification timestamp
        copyright_holder_url: URL of the external copyright holder, if any
        category: Deck category
        unlisted: True if the deck is private
        external_copyright: True if the deck has an external copyright holder
        call_count: Number of call (black) cards
        response_count: Number of response (white) cards
        rating: Average user rating
        author: Publishing user
    """

    name: str
    code: str
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    copyright_holder_url: str | None = None
    category: str | None = None
    unlisted: bool = False
    external_copyright: bool = False
    call_count: int = 0
    response_count: int = 0
    rating: float = 0.0
    author: DeckAuthor | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view using the service's field names."""
        return {
            "name": self.name,
            "code": self.code,
            "description": self.description,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "copyright_holder_url": self.copyright_holder_url,
            "category": self.category,
            "unlisted": self.unlisted,
            "external_copyright": self.external_copyright,
            "call_count": self.call_count,
            "response_count": self.response_count,
            "rating": self.rating,
            "author": (
                {"id": self.author.id, "username": self.author.username}
                if self.author
                else None
            ),
        }


@dataclass(frozen=True, slots=True)
class Deck:
    """
    A complete deck: calls, responses and metadata.

    Attributes:
        calls: Call (black) cards, in service order
        responses: Response (white) cards, in service order
        info: Deck metadata
    """

    calls: tuple[Card, ...]
    responses: tuple[Card, ...]
    info: DeckInfo

    @property
    def code(self) -> str:
        return self.info.code

    @property
    def name(self) -> str:
        return self.info.name

    def card_count(self) -> int:
        """Total calls and responses in the deck."""
        return len(self.calls) + len(self.responses)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view of the whole deck."""
        return {
            "info": self.info.to_dict(),
            "calls": [card.to_dict() for card in self.calls],
            "responses": [card.to_dict() for card in self.responses],
        }
