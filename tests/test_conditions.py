"""Tests covering row/column condition evaluation and witnesses."""

from __future__ import annotations

import pytest

from pokergrid import conditions
from pokergrid.cards import Card
from pokergrid.conditions import (
    CardCondition,
    PokerHand,
    check_poker_hand,
    format_condition,
    get_satisfying_cards,
    is_condition_satisfied,
)


def _cells(*codes: str | None) -> list[Card | None]:
    return [None if code is None else Card.from_code(code) for code in codes]


@pytest.mark.parametrize(
    ("condition", "cells", "expected", "witness"),
    [
        (CardCondition.ALL_HEARTS, _cells("2H", "5H", None, "KH", "9H"), True, {0, 1, 3, 4}),
        (CardCondition.ALL_HEARTS, _cells("2H", "5H", "3S", "KH", "9H"), False, set()),
        (CardCondition.THREE_QUEENS, _cells("QH", "QS", "2C", "QD", "3C"), True, {0, 1, 3}),
        (CardCondition.THREE_QUEENS, _cells("QH", "QS", "QC", "QD", "3C"), False, set()),
        (CardCondition.FOUR_SEVENS, _cells("7H", "7S", "7D", "2H", "7C"), True, {0, 1, 2, 4}),
        (CardCondition.FOUR_SEVENS, _cells("7H", "7S", "7D", "2H", "3C"), False, set()),
        (CardCondition.ALL_FACE_CARDS, _cells("JH", "QS", "KD", "JC", "QD"), True, {0, 1, 2, 3, 4}),
        (CardCondition.ALL_FACE_CARDS, _cells("JH", "QS", "KD", "JC", "AD"), False, set()),
        (CardCondition.ALL_SAME_RANK, _cells("4H", "4S", None, "4D", None), True, {0, 1, 3}),
        (CardCondition.ALL_SAME_RANK, _cells("4H", "4S", "5D", None, None), False, set()),
        (CardCondition.POKER_HAND, _cells("5H", "8S", "8H", "2C", "8D"), True, {1, 2, 4}),
        (CardCondition.POKER_HAND, _cells("5H", "8S", "8H", "2C", "9D"), False, set()),
    ],
)
def test_condition_examples(
    condition: CardCondition,
    cells: list[Card | None],
    expected: bool,
    witness: set[int],
) -> None:
    assert is_condition_satisfied(cells, condition) is expected
    assert get_satisfying_cards(condition, cells) == witness


def test_flush_and_all_same_suit_on_five_spades() -> None:
    cells = _cells("AS", "3S", "9S", "JS", "6S")

    for condition in (CardCondition.FLUSH, CardCondition.ALL_SAME_SUIT):
        assert is_condition_satisfied(cells, condition)
        assert get_satisfying_cards(condition, cells) == {0, 1, 2, 3, 4}


def test_flush_ignores_empty_cells_but_all_same_suit_needs_five_cards() -> None:
    cells = _cells("2H", None, "5H", "9H", None)

    assert is_condition_satisfied(cells, CardCondition.FLUSH)
    assert get_satisfying_cards(CardCondition.FLUSH, cells) == {0, 2, 3}
    assert not is_condition_satisfied(cells, CardCondition.ALL_SAME_SUIT)
    assert get_satisfying_cards(CardCondition.ALL_SAME_SUIT, cells) == set()


def test_flush_fails_with_mixed_suits() -> None:
    cells = _cells("2H", "5H", "9D", "KH", "3H")

    assert not is_condition_satisfied(cells, CardCondition.FLUSH)
    assert get_satisfying_cards(CardCondition.FLUSH, cells) == set()


def test_three_of_a_kind_implies_pair() -> None:
    cells = _cells("8S", "8H", "8D", "2H", "3H")

    assert is_condition_satisfied(cells, CardCondition.THREE_OF_A_KIND)
    assert is_condition_satisfied(cells, CardCondition.PAIR)
    assert get_satisfying_cards(CardCondition.THREE_OF_A_KIND, cells) == {0, 1, 2}
    assert get_satisfying_cards(CardCondition.PAIR, cells) == {0, 1}


def test_pair_without_three_of_a_kind() -> None:
    cells = _cells("9H", "9D", "2C", "5S", "KH")

    assert is_condition_satisfied(cells, CardCondition.PAIR)
    assert not is_condition_satisfied(cells, CardCondition.THREE_OF_A_KIND)
    assert get_satisfying_cards(CardCondition.PAIR, cells) == {0, 1}
    assert get_satisfying_cards(CardCondition.THREE_OF_A_KIND, cells) == set()


def test_pair_witness_uses_first_repeated_value_in_scan_order() -> None:
    cells = _cells("2H", "5S", "5D", "2C", "9H")

    assert get_satisfying_cards(CardCondition.PAIR, cells) == {0, 3}


def test_three_of_a_kind_witness_caps_at_three_cards() -> None:
    cells = _cells("8S", "8H", "2H", "8D", "8C")

    assert get_satisfying_cards(CardCondition.THREE_OF_A_KIND, cells) == {0, 1, 3}


def test_royal_court_satisfied() -> None:
    cells = _cells("KS", "QH", "JD", "4C", "4S")

    assert is_condition_satisfied(cells, CardCondition.ROYAL_COURT)
    assert get_satisfying_cards(CardCondition.ROYAL_COURT, cells) == {0, 1, 2}


def test_royal_court_without_jack_clears_partial_matches() -> None:
    cells = _cells("KS", "KH", "QD", "4C", "4S")

    assert not is_condition_satisfied(cells, CardCondition.ROYAL_COURT)
    assert get_satisfying_cards(CardCondition.ROYAL_COURT, cells) == set()


def test_royal_court_claims_first_of_each_rank() -> None:
    cells = _cells("2H", "KS", "KH", "JC", "QD")

    assert get_satisfying_cards(CardCondition.ROYAL_COURT, cells) == {1, 3, 4}


@pytest.mark.parametrize("condition", [CardCondition.ASCENDING_SEQUENCE, CardCondition.STRAIGHT])
def test_runs_accept_contiguous_values_in_any_order(condition: CardCondition) -> None:
    cells = _cells("5H", "3S", "7D", "4C", "6H")

    assert is_condition_satisfied(cells, condition)
    assert get_satisfying_cards(condition, cells) == {0, 1, 2, 3, 4}


@pytest.mark.parametrize("condition", [CardCondition.ASCENDING_SEQUENCE, CardCondition.STRAIGHT])
def test_runs_reject_gaps_and_repeats(condition: CardCondition) -> None:
    gap = _cells("3H", "4S", "6D", "7C", "8H")
    repeat = _cells("3H", "4S", "4D", "5C", "6H")

    assert not is_condition_satisfied(gap, condition)
    assert not is_condition_satisfied(repeat, condition)
    assert get_satisfying_cards(condition, gap) == set()


def test_runs_evaluate_partial_lines() -> None:
    cells = _cells("3H", None, "4S", None, "5D")

    assert is_condition_satisfied(cells, CardCondition.ASCENDING_SEQUENCE)
    assert is_condition_satisfied(cells, CardCondition.STRAIGHT)
    assert get_satisfying_cards(CardCondition.ASCENDING_SEQUENCE, cells) == {0, 2, 4}


def test_ascending_run_including_ace_high() -> None:
    cells = _cells("10S", "JS", "QS", "KS", "AS")

    assert is_condition_satisfied(cells, CardCondition.ASCENDING_SEQUENCE)


def test_descending_holds_for_any_line() -> None:
    ordered = _cells("7H", "6S", "5D", "4C", "3H")
    unordered = _cells("2H", "KS", "5D", "9C", "9H")

    assert is_condition_satisfied(ordered, CardCondition.DESCENDING)
    assert is_condition_satisfied(unordered, CardCondition.DESCENDING)
    assert get_satisfying_cards(CardCondition.DESCENDING, ordered) == {0, 1, 2, 3, 4}


def test_sum_equals_fifteen() -> None:
    cells = _cells("2H", "2S", "3H", "3S", "5D")

    assert is_condition_satisfied(cells, CardCondition.SUM_EQUALS)
    assert get_satisfying_cards(CardCondition.SUM_EQUALS, cells) == {0, 1, 2, 3, 4}


def test_sum_equals_rejects_other_totals() -> None:
    cells = _cells("2H", "2S", "3H", "3S", "6D")

    assert not is_condition_satisfied(cells, CardCondition.SUM_EQUALS)
    assert get_satisfying_cards(CardCondition.SUM_EQUALS, cells) == set()


def test_sum_equals_partial_line_has_no_five_card_witness() -> None:
    cells = _cells("10H", None, "5S", None, None)

    assert is_condition_satisfied(cells, CardCondition.SUM_EQUALS)
    assert get_satisfying_cards(CardCondition.SUM_EQUALS, cells) == set()


@pytest.mark.parametrize("condition", list(CardCondition))
@pytest.mark.parametrize("cells", [[], [None] * 5, _cells("AH", None, None, None, None)])
def test_evaluation_is_total(condition: CardCondition, cells: list[Card | None]) -> None:
    satisfied = is_condition_satisfied(cells, condition)
    witness = get_satisfying_cards(condition, cells)

    assert isinstance(satisfied, bool)
    assert all(cells[index] is not None for index in witness)


@pytest.mark.parametrize("condition", list(CardCondition))
def test_vacuous_conditions_on_empty_line(condition: CardCondition) -> None:
    vacuous = {
        CardCondition.ALL_HEARTS,
        CardCondition.ASCENDING_SEQUENCE,
        CardCondition.ALL_FACE_CARDS,
        CardCondition.FLUSH,
        CardCondition.STRAIGHT,
        CardCondition.DESCENDING,
        CardCondition.ALL_SAME_RANK,
    }

    assert is_condition_satisfied([None] * 5, condition) is (condition in vacuous)


@pytest.mark.parametrize("condition", list(CardCondition))
@pytest.mark.parametrize(
    "cells",
    [
        _cells("AS", "KS", "QS", "JS", "10S"),
        _cells("8S", "8H", "8D", "2H", "3H"),
        _cells("8C", "KH", "QH", "JH", "4H"),
        _cells("KD", None, "9D", "6H", None),
        _cells("7H", "7S", "7D", "7C", "QH"),
    ],
)
def test_witness_matches_satisfaction(condition: CardCondition, cells: list[Card | None]) -> None:
    satisfied = is_condition_satisfied(cells, condition)
    witness = get_satisfying_cards(condition, cells)

    assert is_condition_satisfied(list(cells), condition) is satisfied
    assert all(cells[index] is not None for index in witness)
    if not satisfied:
        assert witness == set()
    elif condition is not CardCondition.SUM_EQUALS:
        assert witness


def test_dispatch_tables_cover_every_condition() -> None:
    expected = set(CardCondition)

    assert set(conditions._SATISFIERS) == expected
    assert set(conditions._WITNESSES) == expected
    assert set(conditions._LABELS) == expected


def test_ensure_exhaustive_reports_missing_kinds() -> None:
    partial = {CardCondition.PAIR: object()}

    with pytest.raises(RuntimeError, match="ROYAL_COURT"):
        conditions._ensure_exhaustive(partial, "table")


@pytest.mark.parametrize(
    ("condition", "label"),
    [
        (CardCondition.ALL_HEARTS, "All ♥"),
        (CardCondition.ASCENDING_SEQUENCE, "Low to high"),
        (CardCondition.DESCENDING, "High to Low"),
        (CardCondition.SUM_EQUALS, "Sum=15"),
        (CardCondition.POKER_HAND, "3 of a kind"),
        (CardCondition.ROYAL_COURT, "Royal Court"),
    ],
)
def test_format_condition_labels(condition: CardCondition, label: str) -> None:
    assert format_condition(condition) == label


@pytest.mark.parametrize(
    ("codes", "hand", "expected"),
    [
        (["8S", "8H", "8D", "2H", "2S"], PokerHand.FULL_HOUSE, True),
        (["8S", "8H", "3D", "2H", "2S"], PokerHand.FULL_HOUSE, False),
        (["8S", "8H", "8D", "8C", "2S"], PokerHand.FOUR_OF_A_KIND, True),
        (["8S", "8H", "8D", "2C", "2S"], PokerHand.FOUR_OF_A_KIND, False),
        (["3S", "4H", "5D", "6C", "7S"], PokerHand.STRAIGHT, True),
        (["3S", "4H", "5D", "6C"], PokerHand.STRAIGHT, False),
        (["2H", "7H", "9H"], PokerHand.FLUSH, True),
        ([], PokerHand.FLUSH, True),
    ],
)
def test_check_poker_hand(codes: list[str], hand: PokerHand, expected: bool) -> None:
    cards = [Card.from_code(code) for code in codes]

    assert check_poker_hand(cards, hand) is expected
