from typing import Any

import pytest

from cardcast.models.card import Card
from cardcast.models.deck import Deck, DeckAuthor, DeckInfo
from cardcast.models.failure import FetchError

API = "https://api.cardcastgame.com/v1/decks/"


@pytest.fixture
def cards_json() -> dict[str, Any]:
    """Cards document as served by /decks/{code}/cards."""
    return {
        "calls": [
            {
                "id": "c1",
                "text": ["Why can't I sleep at night? ", ""],
                "created_at": "2014-02-11T09:39:00.000Z",
                "nsfw": True,
            },
            {
                "id": "c2",
                "text": ["", " + ", " = ", ""],
                "created_at": "2014-02-11T09:40:00.000Z",
                "nsfw": False,
            },
        ],
        "responses": [
            {"id": "r1", "text": ["Flying sex snakes."], "created_at": None, "nsfw": True},
            {"id": "r2", "text": ["A mime having a stroke."], "nsfw": False},
            {"id": "r3", "text": ["Puppies!"], "created_at": "2014-02-11", "nsfw": False},
        ],
    }


@pytest.fixture
def info_json() -> dict[str, Any]:
    """Metadata document as served by /decks/{code}."""
    return {
        "name": "Base Set",
        "code": "CAHBS",
        "description": "The original deck.",
        "unlisted": False,
        "created_at": "2014-02-11T09:38:00.000Z",
        "updated_at": "2015-06-01T12:00:00.000Z",
        "external_copyright": True,
        "copyright_holder_url": "https://cardsagainsthumanity.com",
        "category": "other",
        "call_count": "2",
        "response_count": "3",
        "author": {"id": "a1b2", "username": "cardcast"},
        "rating": "4.5",
    }


def make_deck(code: str = "CAHBS", name: str = "Base Set") -> Deck:
    return Deck(
        calls=(Card(id="c1", text=("Why? ", "")),),
        responses=(Card(id="r1", text=("Puppies!",)), Card(id="r2", text=("Snakes.",))),
        info=DeckInfo(
            name=name,
            code=code,
            author=DeckAuthor(id="a1", username="cardcast"),
            call_count=1,
            response_count=2,
            rating=4.5,
        ),
    )


@pytest.fixture
def sample_deck() -> Deck:
    return make_deck()


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """Deck source that records every fetch and can be told to fail."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.error: FetchError | None = None
        self.version = 0

    async def fetch_deck(self, code: str) -> Deck:
        self.calls.append(code)
        if self.error is not None:
            raise self.error
        self.version += 1
        return make_deck(code=code.upper(), name=f"Deck v{self.version}")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()
