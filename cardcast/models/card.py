from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Card:
    """
    A single call (black) or response (white) card.

    Attributes:
        id: Cardcast card ID
        text: Text fragments of the card, in the order the service returns them.
            Calls are split around their blanks; responses usually have one fragment.
        created_at: Creation timestamp as sent by the service
        nsfw: True if the card is flagged NSFW
    """

    id: str
    text: tuple[str, ...] = ()
    created_at: str | None = None
    nsfw: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Card id must not be empty")

    @property
    def blank_count(self) -> int:
        """Number of blanks on a call card (zero for responses)."""
        return max(len(self.text) - 1, 0)

    def to_dict(self) -> dict[str, object]:
        """JSON-ready view using the service's field names."""
        return {
            "id": self.id,
            "text": list(self.text),
            "created_at": self.created_at,
            "nsfw": self.nsfw,
        }
