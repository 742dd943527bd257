"""Randomised checks of board invariants over seeded boards."""

from __future__ import annotations

import random

import pytest

from gomori.board import Board, CalculatedEffects
from gomori.cards import Card, Rank, Suit, full_deck
from gomori.field import Field
from gomori.rules import BOARD_SIZE, CardToPlay, IllegalCardPlayed, NoTargetForKingAbility

SEEDS = range(30)


def _random_board(rng: random.Random) -> tuple[Board, list[Card]]:
    deck = full_deck()
    rng.shuffle(deck)
    origin_i, origin_j = rng.randint(-50, 50), rng.randint(-50, 50)
    coords = [
        (origin_i + di, origin_j + dj)
        for di in range(rng.randint(1, BOARD_SIZE))
        for dj in range(rng.randint(1, BOARD_SIZE))
    ]
    fields = []
    for i, j in rng.sample(coords, rng.randint(1, len(coords))):
        hidden = [deck.pop() for _ in range(rng.randint(0, 1))]
        top = deck.pop() if not hidden or rng.random() < 0.8 else None
        fields.append(Field.of(i, j, top, hidden))
    return Board.from_fields(fields), deck


def _assert_valid(board: Board) -> None:
    bbox = board.bbox()
    assert bbox.size_i() <= BOARD_SIZE
    assert bbox.size_j() <= BOARD_SIZE

    coords = [(i, j) for i, j, _ in board]
    assert len(coords) == len(set(coords))
    for i, j, compact_field in board:
        assert not compact_field.is_empty()
        assert bbox.contains(i, j)

    for suit in Suit:
        expected = {
            (i, j)
            for i, j, compact_field in board
            if compact_field.top_card() is not None and compact_field.top_card().suit is suit
        }
        assert set(board.bitboard_for(suit)) == expected


@pytest.mark.parametrize("seed", SEEDS)
def test_locations_agree_with_calculate(seed: int) -> None:
    rng = random.Random(seed)
    board, remaining = _random_board(rng)
    _assert_valid(board)

    for card in rng.sample(remaining, 6):
        locations = board.locations_for_card(card)
        assert board.possible_to_play_card(card) == (not locations.is_empty())
        for i, j in locations:
            result = board.calculate(CardToPlay(card=card, i=i, j=j))
            if isinstance(result, IllegalCardPlayed):
                assert result == NoTargetForKingAbility()


@pytest.mark.parametrize("seed", SEEDS)
def test_successful_plays_produce_valid_boards(seed: int) -> None:
    rng = random.Random(seed)
    board, remaining = _random_board(rng)
    rng.shuffle(remaining)

    for card in remaining[:12]:
        locations = list(board.locations_for_card(card))
        if not locations:
            continue
        i, j = rng.choice(locations)
        target = None
        if card.rank is Rank.KING:
            target = rng.choice([(fi, fj) for fi, fj, _ in board])
        before = board.to_fields()

        result = board.calculate(CardToPlay(card=card, i=i, j=j, target_field_for_king_ability=target))
        assert board.to_fields() == before
        if isinstance(result, IllegalCardPlayed):
            continue

        assert isinstance(result, CalculatedEffects)
        assert (i, j) not in result.won
        new_board = result.execute()
        _assert_valid(new_board)
        assert new_board.get(i, j) is not None
        assert all(new_board.get(wi, wj) is None for wi, wj in result.won)
        assert result.cards_won.mask & new_board.all_cards().mask == 0
        assert board.to_fields() == before
        board = new_board


@pytest.mark.parametrize("seed", SEEDS)
def test_round_trip_through_fields(seed: int) -> None:
    board, _ = _random_board(random.Random(seed))
    fields = board.to_fields()
    assert fields == sorted(fields, key=lambda f: (f.i, f.j))
    assert Board.from_fields(fields).to_fields() == fields
