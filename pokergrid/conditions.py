"""Row and column condition evaluation for the card grid.

Every condition is evaluated against a five-slot line of the grid (a row or a
column). Empty slots are ignored: the evaluators first compact the line to the
cards that are present and apply the per-kind rule to those. Two operations are
exposed for each kind:

* :func:`is_condition_satisfied` answers whether the line meets the condition.
* :func:`get_satisfying_cards` returns the slot indices that witness it, used
  by the presentation layer for highlighting. The witness is empty whenever the
  condition does not hold.

Both operations are total: no well-typed input makes them raise.
"""

from __future__ import annotations

import itertools
import logging
from collections import Counter
from enum import Enum
from typing import Callable, Final, Mapping, Sequence

from .cards import Card, Rank, Suit, format_cards

logger = logging.getLogger(__name__)

__all__ = [
    "SUM_TARGET",
    "CardCondition",
    "PokerHand",
    "valid_cards",
    "check_poker_hand",
    "is_condition_satisfied",
    "get_satisfying_cards",
    "format_condition",
]

SUM_TARGET: Final[int] = 15

Cells = Sequence[Card | None]


class CardCondition(str, Enum):
    """Condition kinds that can be attached to a row or a column."""

    ALL_HEARTS = "allHearts"
    THREE_QUEENS = "threeQueens"
    ASCENDING_SEQUENCE = "ascendingSequence"
    FOUR_SEVENS = "fourSevens"
    ALL_FACE_CARDS = "allFaceCards"
    THREE_OF_A_KIND = "threeOfAKind"
    FLUSH = "flush"
    STRAIGHT = "straight"
    PAIR = "pair"
    ALL_SAME_SUIT = "allSameSuit"
    DESCENDING = "descending"
    SUM_EQUALS = "sumEquals"
    POKER_HAND = "pokerHand"
    ALL_SAME_RANK = "allSameRank"
    ROYAL_COURT = "royalCourt"


class PokerHand(str, Enum):
    """Classic poker hands used by the grouping conditions."""

    PAIR = "pair"
    THREE_OF_A_KIND = "threeOfAKind"
    STRAIGHT = "straight"
    FLUSH = "flush"
    FULL_HOUSE = "fullHouse"
    FOUR_OF_A_KIND = "fourOfAKind"


def valid_cards(cells: Cells) -> list[Card]:
    """Return the cards present in ``cells`` in their original order."""

    return [card for card in cells if card is not None]


def _present(cells: Cells) -> list[tuple[int, Card]]:
    return [(index, card) for index, card in enumerate(cells) if card is not None]


def _values(cards: Sequence[Card]) -> list[int]:
    return [card.numeric_value for card in cards]


def _is_contiguous_run(values: Sequence[int]) -> bool:
    ordered = sorted(values)
    if not ordered:
        return True
    start = ordered[0]
    return ordered == list(range(start, start + len(ordered)))


def _has_group(cards: Sequence[Card], size: int) -> bool:
    counts = Counter(_values(cards))
    return any(count >= size for count in counts.values())


def check_poker_hand(cards: Sequence[Card], hand: PokerHand) -> bool:
    """Return whether ``cards`` contain ``hand``."""

    counts = Counter(_values(cards))
    if hand is PokerHand.PAIR:
        return any(count >= 2 for count in counts.values())
    if hand is PokerHand.THREE_OF_A_KIND:
        return any(count >= 3 for count in counts.values())
    if hand is PokerHand.FOUR_OF_A_KIND:
        return any(count >= 4 for count in counts.values())
    if hand is PokerHand.FULL_HOUSE:
        # The triple also counts towards the pair, matching the grouping checks.
        return any(count >= 3 for count in counts.values()) and any(
            count >= 2 for count in counts.values()
        )
    if hand is PokerHand.STRAIGHT:
        if len(cards) < 5:
            return False
        ordered = sorted(counts.elements())
        return ordered[-1] - ordered[0] == len(ordered) - 1
    if hand is PokerHand.FLUSH:
        return all(card.suit == cards[0].suit for card in cards)
    raise ValueError(f"unknown poker hand {hand!r}")


# ---------------------------------------------------------------------------
# Satisfaction rules, one per condition kind.
# ---------------------------------------------------------------------------


def _all_hearts(cards: Sequence[Card]) -> bool:
    return all(card.suit is Suit.HEARTS for card in cards)


def _three_queens(cards: Sequence[Card]) -> bool:
    return sum(1 for card in cards if card.rank is Rank.QUEEN) == 3


def _contiguous_run(cards: Sequence[Card]) -> bool:
    return _is_contiguous_run(_values(cards))


def _four_sevens(cards: Sequence[Card]) -> bool:
    return sum(1 for card in cards if card.rank is Rank.SEVEN) == 4


def _all_face_cards(cards: Sequence[Card]) -> bool:
    return all(card.rank.is_face_card() for card in cards)


def _three_of_a_kind(cards: Sequence[Card]) -> bool:
    return check_poker_hand(cards, PokerHand.THREE_OF_A_KIND)


def _flush(cards: Sequence[Card]) -> bool:
    return check_poker_hand(cards, PokerHand.FLUSH)


def _pair(cards: Sequence[Card]) -> bool:
    return check_poker_hand(cards, PokerHand.PAIR)


def _all_same_suit(cards: Sequence[Card]) -> bool:
    if len(cards) != 5:
        return False
    suit_counts = Counter(card.suit for card in cards)
    return any(count == 5 for count in suit_counts.values())


def _descending(cards: Sequence[Card]) -> bool:
    # Compares the reversed descending sort with an ascending sort, which always
    # agree; the condition holds for every line.
    values = list(reversed(sorted(_values(cards), reverse=True)))
    return values == sorted(values)


def _sum_equals(cards: Sequence[Card]) -> bool:
    return sum(_values(cards)) == SUM_TARGET


def _all_same_rank(cards: Sequence[Card]) -> bool:
    return all(card.rank is cards[0].rank for card in cards)


def _royal_court_claims(cells: Cells) -> dict[Rank, int]:
    claims: dict[Rank, int] = {}
    for index, card in _present(cells):
        if card.rank in (Rank.KING, Rank.QUEEN, Rank.JACK) and card.rank not in claims:
            claims[card.rank] = index
    return claims


def _royal_court(cards: Sequence[Card]) -> bool:
    return len(_royal_court_claims(cards)) == 3


_SATISFIERS: Final[Mapping[CardCondition, Callable[[Sequence[Card]], bool]]] = {
    CardCondition.ALL_HEARTS: _all_hearts,
    CardCondition.THREE_QUEENS: _three_queens,
    CardCondition.ASCENDING_SEQUENCE: _contiguous_run,
    CardCondition.FOUR_SEVENS: _four_sevens,
    CardCondition.ALL_FACE_CARDS: _all_face_cards,
    CardCondition.THREE_OF_A_KIND: _three_of_a_kind,
    CardCondition.FLUSH: _flush,
    CardCondition.STRAIGHT: _contiguous_run,
    CardCondition.PAIR: _pair,
    CardCondition.ALL_SAME_SUIT: _all_same_suit,
    CardCondition.DESCENDING: _descending,
    CardCondition.SUM_EQUALS: _sum_equals,
    CardCondition.POKER_HAND: _three_of_a_kind,
    CardCondition.ALL_SAME_RANK: _all_same_rank,
    CardCondition.ROYAL_COURT: _royal_court,
}


# ---------------------------------------------------------------------------
# Witness rules. They are only consulted once the condition is known to hold.
# ---------------------------------------------------------------------------


def _indices_where(cells: Cells, predicate: Callable[[Card], bool]) -> set[int]:
    return {index for index, card in _present(cells) if predicate(card)}


def _first_group(cells: Cells, size: int) -> set[int]:
    present = _present(cells)
    counts = Counter(card.numeric_value for _, card in present)
    target = next((card.numeric_value for _, card in present if counts[card.numeric_value] >= size), None)
    if target is None:
        return set()
    matching = [index for index, card in present if card.numeric_value == target]
    return set(matching[:size])


def _hearts_witness(cells: Cells) -> set[int]:
    return _indices_where(cells, lambda card: card.suit is Suit.HEARTS)


def _queens_witness(cells: Cells) -> set[int]:
    return _indices_where(cells, lambda card: card.rank is Rank.QUEEN)


def _sevens_witness(cells: Cells) -> set[int]:
    return _indices_where(cells, lambda card: card.rank is Rank.SEVEN)


def _run_witness(cells: Cells) -> set[int]:
    run_values = set(_values(valid_cards(cells)))
    return _indices_where(cells, lambda card: card.numeric_value in run_values)


def _face_witness(cells: Cells) -> set[int]:
    return _indices_where(cells, lambda card: card.rank.is_face_card())


def _triple_witness(cells: Cells) -> set[int]:
    return _first_group(cells, 3)


def _pair_witness(cells: Cells) -> set[int]:
    return _first_group(cells, 2)


def _first_suit_witness(cells: Cells) -> set[int]:
    cards = valid_cards(cells)
    if not cards:
        return set()
    suit = cards[0].suit
    return _indices_where(cells, lambda card: card.suit is suit)


def _dominant_suit_witness(cells: Cells) -> set[int]:
    suit_counts = Counter(card.suit for card in valid_cards(cells))
    suit = next((suit for suit, count in suit_counts.items() if count == 5), None)
    if suit is None:
        return set()
    return _indices_where(cells, lambda card: card.suit is suit)


def _present_witness(cells: Cells) -> set[int]:
    return {index for index, _ in _present(cells)}


def _sum_witness(cells: Cells) -> set[int]:
    for combo in itertools.combinations(_present(cells), 5):
        if sum(card.numeric_value for _, card in combo) == SUM_TARGET:
            return {index for index, _ in combo}
    return set()


def _same_rank_witness(cells: Cells) -> set[int]:
    cards = valid_cards(cells)
    if not cards:
        return set()
    rank = cards[0].rank
    return _indices_where(cells, lambda card: card.rank is rank)


def _royal_court_witness(cells: Cells) -> set[int]:
    claims = _royal_court_claims(cells)
    if len(claims) != 3:
        return set()
    return set(claims.values())


_WITNESSES: Final[Mapping[CardCondition, Callable[[Cells], set[int]]]] = {
    CardCondition.ALL_HEARTS: _hearts_witness,
    CardCondition.THREE_QUEENS: _queens_witness,
    CardCondition.ASCENDING_SEQUENCE: _run_witness,
    CardCondition.FOUR_SEVENS: _sevens_witness,
    CardCondition.ALL_FACE_CARDS: _face_witness,
    CardCondition.THREE_OF_A_KIND: _triple_witness,
    CardCondition.FLUSH: _first_suit_witness,
    CardCondition.STRAIGHT: _run_witness,
    CardCondition.PAIR: _pair_witness,
    CardCondition.ALL_SAME_SUIT: _dominant_suit_witness,
    CardCondition.DESCENDING: _present_witness,
    CardCondition.SUM_EQUALS: _sum_witness,
    CardCondition.POKER_HAND: _triple_witness,
    CardCondition.ALL_SAME_RANK: _same_rank_witness,
    CardCondition.ROYAL_COURT: _royal_court_witness,
}

_LABELS: Final[Mapping[CardCondition, str]] = {
    CardCondition.ALL_HEARTS: "All ♥",
    CardCondition.THREE_QUEENS: "3 Queens",
    CardCondition.ASCENDING_SEQUENCE: "Low to high",
    CardCondition.FOUR_SEVENS: "4 Sevens",
    CardCondition.ALL_FACE_CARDS: "All face cards",
    CardCondition.THREE_OF_A_KIND: "3 of a kind",
    CardCondition.FLUSH: "Flush",
    CardCondition.STRAIGHT: "Straight",
    CardCondition.PAIR: "Pair",
    CardCondition.ALL_SAME_SUIT: "All same suit",
    CardCondition.DESCENDING: "High to Low",
    CardCondition.SUM_EQUALS: f"Sum={SUM_TARGET}",
    CardCondition.POKER_HAND: "3 of a kind",
    CardCondition.ALL_SAME_RANK: "All same rank",
    CardCondition.ROYAL_COURT: "Royal Court",
}


def _ensure_exhaustive(table: Mapping[CardCondition, object], name: str) -> None:
    missing = [condition.name for condition in CardCondition if condition not in table]
    if missing:
        raise RuntimeError(f"{name} does not handle condition(s): {', '.join(missing)}")


_ensure_exhaustive(_SATISFIERS, "is_condition_satisfied")
_ensure_exhaustive(_WITNESSES, "get_satisfying_cards")
_ensure_exhaustive(_LABELS, "format_condition")


def is_condition_satisfied(cells: Cells, condition: CardCondition) -> bool:
    """Return whether the cards present in ``cells`` meet ``condition``."""

    cards = valid_cards(cells)
    result = _SATISFIERS[condition](cards)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s on [%s]: %s", format_condition(condition), format_cards(cards), result)
    return result


def get_satisfying_cards(condition: CardCondition, cells: Cells) -> set[int]:
    """Return the indices of ``cells`` that witness ``condition``.

    The set is empty when the condition does not hold. Indices always refer to
    occupied slots of the original (uncompacted) line.
    """

    if not is_condition_satisfied(cells, condition):
        return set()
    return _WITNESSES[condition](cells)


def format_condition(condition: CardCondition) -> str:
    """Return the short display label for ``condition``."""

    return _LABELS[condition]
