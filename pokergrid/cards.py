"""Card abstractions and helpers for the puzzle grid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, Sequence


class Suit(str, Enum):
    """Enumeration of the four suits."""

    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]


_SUIT_SYMBOLS: Final[dict[Suit, str]] = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}


class Rank(str, Enum):
    """Enumeration of ranks; ``numeric_value`` gives the total order (ace high)."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @classmethod
    def ordered(cls) -> tuple["Rank", ...]:
        """Return ranks from lowest to highest numeric value."""

        return tuple(sorted(cls, key=lambda rank: rank.numeric_value))

    @property
    def numeric_value(self) -> int:
        return _RANK_VALUES[self]

    def is_face_card(self) -> bool:
        """Return ``True`` for jacks, queens and kings (the ace is not a face card)."""

        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)


_RANK_VALUES: Final[dict[Rank, int]] = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 11,
    Rank.QUEEN: 12,
    Rank.KING: 13,
    Rank.ACE: 14,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a single playing card."""

    suit: Suit
    rank: Rank

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Parse a compact code such as ``"10H"`` or ``"qs"``."""

        text = code.strip().upper()
        if len(text) < 2:
            raise ValueError(f"invalid card code '{code}'")
        rank_text, suit_text = text[:-1], text[-1]
        try:
            return cls(suit=Suit(suit_text), rank=Rank(rank_text))
        except ValueError:
            raise ValueError(f"invalid card code '{code}'") from None

    @property
    def numeric_value(self) -> int:
        return self.rank.numeric_value

    @property
    def code(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def label(self) -> str:
        """Create a display label suitable for CLI representations."""

        return f"{self.rank.value}{self.suit.symbol}"

    def __str__(self) -> str:
        return self.label()


def cards_from_codes(codes: Iterable[str]) -> list[Card]:
    return [Card.from_code(code) for code in codes]


def format_cards(cards: Sequence[Card | None]) -> str:
    return " ".join(card.label() if card is not None else "·" for card in cards)
