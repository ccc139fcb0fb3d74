from dataclasses import FrozenInstanceError

import pytest

from cardcast.models.card import Card
from cardcast.models.deck import Deck
from cardcast.models.failure import (
    DecodeError,
    DeckResult,
    FailureKind,
    RemoteError,
    TransportError,
)


class TestCard:
    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValueError):
            Card(id="")

    def test_blank_count(self) -> None:
        assert Card(id="c", text=("A ", " and ", ".")).blank_count == 2
        assert Card(id="r", text=("Puppies!",)).blank_count == 0
        assert Card(id="x").blank_count == 0

    def test_frozen(self) -> None:
        card = Card(id="c")

        with pytest.raises(FrozenInstanceError):
            card.id = "other"  # type: ignore[misc]


class TestDeck:
    def test_shortcuts(self, sample_deck: Deck) -> None:
        assert sample_deck.code == "CAHBS"
        assert sample_deck.name == "Base Set"
        assert sample_deck.card_count() == 3

    def test_to_dict(self, sample_deck: Deck) -> None:
        data = sample_deck.to_dict()

        assert data["info"]["code"] == "CAHBS"
        assert data["info"]["author"] == {"id": "a1", "username": "cardcast"}
        assert [c["id"] for c in data["responses"]] == ["r1", "r2"]
        assert data["calls"][0]["text"] == ["Why? ", ""]

    def test_frozen(self, sample_deck: Deck) -> None:
        with pytest.raises(FrozenInstanceError):
            sample_deck.calls = ()  # type: ignore[misc]


class TestFetchErrors:
    def test_kinds(self) -> None:
        assert TransportError("c", "m").kind == FailureKind.TRANSPORT
        assert RemoteError("c", "m", status_code=500).kind == FailureKind.REMOTE
        assert DecodeError("c", "m").kind == FailureKind.DECODE

    def test_not_found(self) -> None:
        assert RemoteError("c", "m", status_code=404).not_found
        assert not RemoteError("c", "m", status_code=503).not_found

    def test_to_dict(self) -> None:
        data = RemoteError("cahbs", "gone", status_code=404, detail="x").to_dict()

        assert data == {
            "kind": "remote",
            "code": "cahbs",
            "message": "gone",
            "detail": "x",
            "status_code": 404,
        }


class TestDeckResult:
    def test_success(self, sample_deck: Deck) -> None:
        result = DeckResult.success(sample_deck)

        assert result.ok
        assert result.kind is None
        assert result.unwrap() is sample_deck

    def test_failed(self) -> None:
        error = TransportError("cahbs", "timeout")
        result = error.to_result()

        assert not result.ok
        assert result.deck is None
        assert result.kind == FailureKind.TRANSPORT
        with pytest.raises(TransportError):
            result.unwrap()

    def test_requires_exactly_one(self, sample_deck: Deck) -> None:
        with pytest.raises(ValueError):
            DeckResult()
        with pytest.raises(ValueError):
            DeckResult(deck=sample_deck, error=DecodeError("c", "m"))
