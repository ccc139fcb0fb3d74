"""
Cardcast JSON parsers.

Maps the two Cardcast API documents onto the frozen models:

- GET /v1/decks/{code}/cards -> {"calls": [...], "responses": [...]}
- GET /v1/decks/{code}       -> deck metadata

API docs (archived): https://api.cardcastgame.com/v1/
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cardcast.models.card import Card
from cardcast.models.deck import DeckAuthor, DeckInfo
from cardcast.models.failure import DecodeError

# The service sends counts and ratings as strings ("60", "4.3") and some IDs as numbers
_LAX = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class CardSchema(BaseModel):
    """A card as returned in the cards document."""

    model_config = _LAX

    id: str = Field(..., min_length=1)
    text: list[str] = Field(default_factory=list)
    created_at: str | None = None
    nsfw: bool = False

    def to_card(self) -> Card:
        return Card(
            id=self.id,
            text=tuple(self.text),
            created_at=self.created_at,
            nsfw=self.nsfw,
        )


class CardsSchema(BaseModel):
    """The cards document: calls and responses."""

    model_config = _LAX

    calls: list[CardSchema]
    responses: list[CardSchema]


class AuthorSchema(BaseModel):
    model_config = _LAX

    id: str
    username: str


class DeckInfoSchema(BaseModel):
    """The deck metadata document."""

    model_config = _LAX

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
    author: AuthorSchema | None = None

    def to_deck_info(self) -> DeckInfo:
        return DeckInfo(
            name=self.name,
            code=self.code,
            description=self.description,
            created_at=self.created_at,
            updated_at=self.updated_at,
            copyright_holder_url=self.copyright_holder_url,
            category=self.category,
            unlisted=self.unlisted,
            external_copyright=self.external_copyright,
            call_count=self.call_count,
            response_count=self.response_count,
            rating=self.rating,
            author=(
                DeckAuthor(id=self.author.id, username=self.author.username)
                if self.author
                else None
            ),
        )


def parse_cards(data: Any, code: str) -> tuple[tuple[Card, ...], tuple[Card, ...]]:
    """
    Parse the cards document into call and response cards.

    Args:
        data: Decoded JSON body of the cards endpoint
        code: Play code being fetched (for error reporting)

    Returns:
        (calls, responses), each in the order the service listed them

    Raises:
        DecodeError: If the document does not have the expected shape
    """
    try:
        parsed = CardsSchema.model_validate(data)
    except ValidationError as e:
        raise DecodeError(
            code,
            f"Malformed cards document for deck {code}",
            detail=_summarize(e),
        ) from e

    calls = tuple(card.to_card() for card in parsed.calls)
    responses = tuple(card.to_card() for card in parsed.responses)
    return calls, responses


def parse_deck_info(data: Any, code: str) -> DeckInfo:
    """
    Parse the deck metadata document.

    Raises:
        DecodeError: If the document does not have the expected shape
    """
    try:
        parsed = DeckInfoSchema.model_validate(data)
    except ValidationError as e:
        raise DecodeError(
            code,
            f"Malformed metadata document for deck {code}",
            detail=_summarize(e),
        ) from e

    return parsed.to_deck_info()


def _summarize(error: ValidationError) -> str:
    """Compact one-line summary of pydantic validation errors."""
    parts = []
    for err in error.errors()[:5]:
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
