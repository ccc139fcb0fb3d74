from cardcast.parsers.cardcast import parse_cards, parse_deck_info

__all__ = ["parse_cards", "parse_deck_info"]
