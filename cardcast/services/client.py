"""
Cardcast API client.

Fetches a deck in two dependent calls, cards first and then metadata, and
merges them into one Deck. The Deck is atomic: if either call fails the
whole fetch fails and nothing partial is returned. No retries are made.
"""

import logging
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from cardcast.config import settings
from cardcast.models.card import Card
from cardcast.models.deck import Deck, DeckInfo
from cardcast.models.failure import (
    DecodeError,
    DeckResult,
    FetchError,
    RemoteError,
    TransportError,
)
from cardcast.parsers.cardcast import parse_cards, parse_deck_info

logger = logging.getLogger(__name__)

CARDS_PATH = "/cards"


class CardcastClient:
    """
    Async client for the Cardcast deck API.

    Use as an async context manager, or call aclose() when done. An injected
    httpx.AsyncClient is not closed by this client.

    Example:
        async with CardcastClient() as client:
            deck = await client.fetch_deck("cahbs")
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ):
        base_url = base_url or settings.api_endpoint
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"

        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=timeout if timeout is not None else settings.request_timeout,
                headers={"User-Agent": user_agent or settings.user_agent},
                follow_redirects=True,
            )
        self._client = http_client

    async def __aenter__(self) -> "CardcastClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def deck_url(self, code: str) -> str:
        """URL of the metadata document for a play code."""
        return f"{self.base_url}{quote(code, safe='')}"

    def cards_url(self, code: str) -> str:
        """URL of the cards document for a play code."""
        return f"{self.deck_url(code)}{CARDS_PATH}"

    async def fetch_cards(self, code: str) -> tuple[tuple[Card, ...], tuple[Card, ...]]:
        """
        Fetch the calls and responses of a deck.

        Raises:
            TransportError: If the request could not be completed
            RemoteError: If the service returned a non-success status
            DecodeError: If the body is not a valid cards document
        """
        data = await self._get_json(self.cards_url(code), code)
        return parse_cards(data, code)

    async def fetch_deck_info(self, code: str) -> DeckInfo:
        """
        Fetch the metadata of a deck.

        Raises:
            TransportError: If the request could not be completed
            RemoteError: If the service returned a non-success status
            DecodeError: If the body is not a valid metadata document
        """
        data = await self._get_json(self.deck_url(code), code)
        return parse_deck_info(data, code)

    async def fetch_deck(self, code: str) -> Deck:
        """
        Fetch a complete deck: cards, then metadata.

        Args:
            code: Play code, already normalized by the caller

        Returns:
            Deck carrying both the cards and the metadata

        Raises:
            FetchError: If either call fails (see TransportError, RemoteError,
                DecodeError). The cards are discarded if the metadata call fails.
        """
        logger.info("Fetching deck %s", code)

        calls, responses = await self.fetch_cards(code)
        info = await self.fetch_deck_info(code)
        deck = Deck(calls=calls, responses=responses, info=info)

        logger.info(
            "Fetched deck %s (%r): %d calls, %d responses",
            code,
            info.name,
            len(calls),
            len(responses),
        )
        return deck

    async def try_fetch_deck(self, code: str) -> DeckResult:
        """Fetch a deck, returning the failure as a DeckResult instead of raising."""
        try:
            return DeckResult.success(await self.fetch_deck(code))
        except FetchError as e:
            return e.to_result()

    async def _get_json(self, url: str, code: str) -> Any:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Cardcast returned HTTP %d for %s", status, url)
            raise RemoteError(
                code,
                f"Failed to fetch deck {code}: HTTP {status}",
                status_code=status,
                detail=e.response.text[:200] or None,
            ) from e
        except httpx.RequestError as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise TransportError(
                code,
                f"Failed to fetch deck {code}: {type(e).__name__}",
                detail=str(e) or None,
            ) from e

        try:
            return response.json()
        except ValueError as e:
            logger.warning("Invalid JSON from %s", url)
            raise DecodeError(
                code,
                f"Failed to fetch deck {code}: response is not JSON",
                detail=str(e),
            ) from e
