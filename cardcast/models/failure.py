"""
Fetch failures and the explicit deck result.

Every failed deck lookup is classified into one of three kinds:

- TRANSPORT: the request never completed (connection refused, timeout, DNS)
- REMOTE: the service answered with a non-success status (e.g. 404 for an
  unknown play code)
- DECODE: the body could not be parsed into the expected shape

A failed lookup never produces a Deck. Callers either catch FetchError or
use DeckResult, whose `deck` is None exactly when `error` is set.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from cardcast.models.deck import Deck


class FailureKind(str, Enum):
    """Classification of fetch failures."""

    TRANSPORT = "transport"
    REMOTE = "remote"
    DECODE = "decode"


class FetchError(Exception):
    """
    Base class for failures while fetching a deck.

    The underlying httpx or parsing exception is chained as __cause__.
    """

    kind: FailureKind

    def __init__(
        self,
        code: str,
        message: str,
        detail: str | None = None,
    ):
        self.code = code
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_result(self) -> "DeckResult":
        """Convert to a failed DeckResult."""
        return DeckResult.failed(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }


class TransportError(FetchError):
    """The request failed before a response was received."""

    kind = FailureKind.TRANSPORT


class RemoteError(FetchError):
    """The service returned a non-success status."""

    kind = FailureKind.REMOTE

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int,
        detail: str | None = None,
    ):
        self.status_code = status_code
        super().__init__(code, message, detail)

    @property
    def not_found(self) -> bool:
        """True if the play code does not exist."""
        return self.status_code == 404

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        return data


class DecodeError(FetchError):
    """The response body was not valid deck JSON."""

    kind = FailureKind.DECODE


@dataclass(frozen=True)
class DeckResult:
    """
    Outcome of a deck lookup: a Deck or a FetchError, never both.

    Build with DeckResult.success() or DeckResult.failed().
    """

    deck: Deck | None = None
    error: FetchError | None = None

    def __post_init__(self) -> None:
        if (self.deck is None) == (self.error is None):
            raise ValueError("DeckResult must hold exactly one of deck or error")

    @classmethod
    def success(cls, deck: Deck) -> "DeckResult":
        return cls(deck=deck)

    @classmethod
    def failed(cls, error: FetchError) -> "DeckResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> FailureKind | None:
        """Failure kind, or None on success."""
        return self.error.kind if self.error else None

    def unwrap(self) -> Deck:
        """
        Return the deck, or raise the stored failure.

        Raises:
            FetchError: If the lookup failed
        """
        if self.error is not None:
            raise self.error
        assert self.deck is not None
        return self.deck
