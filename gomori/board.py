"""Board state and the plan/apply transition for playing a card."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from .bbox import BoundingBox
from .bitboard import BitBoard
from .cards import Card, CardsSet, Rank, Suit
from .field import CompactField, Field
from .rules import (
    BOARD_SIZE,
    DEFAULT_RULES,
    MAX_FIELDS,
    CardToPlay,
    IllegalCardPlayed,
    IncompatibleCard,
    InvalidBoard,
    NoTargetForKingAbility,
    OutOfBounds,
    RulesConfig,
    TargetForKingAbilityDoesNotExist,
    TargetForKingAbilityIsFaceDown,
)

__all__ = ["Board", "CalculatedEffects", "Cell"]

logger = logging.getLogger(__name__)

Cell = tuple[int, int, CompactField]


@dataclass(frozen=True, slots=True)
class Board:
    """A board with at least one card on it.

    Judges and bots exchange boards as flat lists of :class:`Field` values;
    this type is built from such a list to answer rule questions and to play
    cards. Use :meth:`from_fields` or :meth:`from_cells` rather than calling
    the constructor directly, since the derived attributes must agree with
    ``cells``.
    """

    # Exactly one entry per coordinate holding at least one card, unsorted.
    cells: tuple[Cell, ...]
    # Shared center of every bitboard produced by this board.
    bitboards_center: tuple[int, int]
    bounding_box: BoundingBox
    # Visible top cards, indexed by ``Suit.index``.
    suit_bitboards: tuple[BitBoard, ...]
    rules: RulesConfig = DEFAULT_RULES

    @classmethod
    def from_fields(cls, fields: Iterable[Field], rules: RulesConfig = DEFAULT_RULES) -> "Board":
        """Create a board from :class:`Field` values.

        Raises :class:`InvalidBoard` if the list is obviously invalid, e.g. if
        it is empty or larger than ``BOARD_SIZE`` x ``BOARD_SIZE``.
        """

        return cls.from_cells(((f.i, f.j, CompactField.from_field(f)) for f in fields), rules)

    @classmethod
    def from_cells(cls, cells: Iterable[Cell], rules: RulesConfig = DEFAULT_RULES) -> "Board":
        """Create a board from ``(i, j, CompactField)`` triples."""

        cells = tuple(cells)
        if not cells:
            raise InvalidBoard("a board needs at least one field")

        center = (cells[0][0], cells[0][1])
        bbox = BoundingBox.singleton(*center)
        seen: set[tuple[int, int]] = set()
        for i, j, compact_field in cells:
            if (i, j) in seen:
                raise InvalidBoard(f"more than one field at ({i}, {j})")
            if compact_field.is_empty():
                raise InvalidBoard(f"field at ({i}, {j}) holds no cards")
            seen.add((i, j))
            bbox = bbox.update(i, j)

        if bbox.size_i() > BOARD_SIZE or bbox.size_j() > BOARD_SIZE:
            raise InvalidBoard(
                f"fields span {bbox.size_i()}x{bbox.size_j()}, more than {BOARD_SIZE}x{BOARD_SIZE}"
            )

        bitboards = [BitBoard.empty_board_centered_at(center) for _ in Suit]
        for i, j, compact_field in cells:
            top = compact_field.top_card()
            if top is not None:
                bitboards[top.suit.index] = bitboards[top.suit.index].insert(i, j)

        return cls(
            cells=cells,
            bitboards_center=center,
            bounding_box=bbox,
            suit_bitboards=tuple(bitboards),
            rules=rules,
        )

    def calculate(self, card_to_play: CardToPlay) -> "CalculatedEffects | IllegalCardPlayed":
        """Work out the effects of playing a card without changing the board.

        Checks that the play is legal, resolves face card abilities and finds
        the cards won. The returned plan can be inspected and then applied
        with :meth:`CalculatedEffects.execute`. A refused play returns an
        :class:`IllegalCardPlayed` value instead.

        Whether the card has already been played elsewhere is not checked.
        """

        card, i, j = card_to_play.card, card_to_play.i, card_to_play.j

        if not self.is_in_bounds(i, j):
            return self._reject(card_to_play, OutOfBounds())

        existing_field = self.get(i, j)
        if existing_field is not None:
            top = existing_field.top_card()
            if top is not None and not self.rules.placement_rule(card, top):
                return self._reject(card_to_play, IncompatibleCard(existing_card=top))

        # A field only exists while it holds cards, so this is a combo.
        combo = existing_field is not None

        if combo or not self.rules.abilities_require_combo:
            flipped = self._fields_to_flip(card_to_play)
            if isinstance(flipped, IllegalCardPlayed):
                return self._reject(card_to_play, flipped)
        else:
            flipped = self._empty_bitboard()

        # Any line of four has to be of the played suit. Cards flipped by
        # this play no longer count, and the played card itself stays.
        same_suit = self.suit_bitboards[card.suit.index].insert(i, j).difference(flipped)
        won = same_suit.lines_going_through_point(i, j).remove(i, j)

        cards_won = CardsSet()
        for field_i, field_j, compact_field in self.cells:
            if won.contains(field_i, field_j):
                cards_won |= compact_field.all_cards()
        if cards_won:
            logger.debug("%s at (%d, %d) wins %s", card, i, j, cards_won)

        return CalculatedEffects(
            board=self,
            diff=_Diff(flipped=flipped, won=won, new_card=card, new_card_i=i, new_card_j=j),
            cards_won=cards_won,
            combo=combo,
        )

    def play_card(self, card_to_play: CardToPlay) -> "Board | IllegalCardPlayed":
        """Shorthand for :meth:`calculate` immediately followed by ``execute()``."""

        effects = self.calculate(card_to_play)
        if isinstance(effects, IllegalCardPlayed):
            return effects
        return effects.execute()

    def bbox(self) -> BoundingBox:
        """The smallest area enclosing the cards currently on the board."""

        return self.bounding_box

    def playable_area(self) -> BoundingBox:
        """The coordinates where a card may be placed.

        This can be larger than ``BOARD_SIZE`` x ``BOARD_SIZE``: with a single
        card on the board it is the 7 x 7 area centered on that card.
        """

        bbox = self.bounding_box
        return BoundingBox(
            i_min=bbox.i_max - BOARD_SIZE + 1,
            j_min=bbox.j_max - BOARD_SIZE + 1,
            i_max=bbox.i_min + BOARD_SIZE - 1,
            j_max=bbox.j_min + BOARD_SIZE - 1,
        )

    def bitboard_for(self, suit: Suit) -> BitBoard:
        return self.suit_bitboards[suit.index]

    def diamonds(self) -> BitBoard:
        return self.bitboard_for(Suit.DIAMOND)

    def hearts(self) -> BitBoard:
        return self.bitboard_for(Suit.HEART)

    def spades(self) -> BitBoard:
        return self.bitboard_for(Suit.SPADE)

    def clubs(self) -> BitBoard:
        return self.bitboard_for(Suit.CLUB)

    def possible_to_play_card(self, card: Card) -> bool:
        """Is it possible to play this card anywhere?"""

        if len(self.cells) < MAX_FIELDS:
            return True
        return any(f.can_place_card(card, self.rules.placement_rule) for _, _, f in self.cells)

    def locations_for_card(self, card: Card) -> BitBoard:
        """All coordinates where ``card`` can be played."""

        area = self.playable_area()
        locations = self._empty_bitboard().insert_area(area.i_min, area.j_min, area.i_max, area.j_max)
        for i, j, compact_field in self.cells:
            if not compact_field.can_place_card(card, self.rules.placement_rule):
                locations = locations.remove(i, j)
        return locations

    def combo_locations_for_card(self, card: Card) -> BitBoard:
        """Coordinates that already hold cards and on which ``card`` can be played."""

        locations = self._empty_bitboard()
        for i, j, compact_field in self.cells:
            if compact_field.can_place_card(card, self.rules.placement_rule):
                locations = locations.insert(i, j)
        return locations

    def get(self, i: int, j: int) -> CompactField | None:
        for field_i, field_j, compact_field in self.cells:
            if field_i == i and field_j == j:
                return compact_field
        return None

    def is_in_bounds(self, i: int, j: int) -> bool:
        """Would the cards still fit ``BOARD_SIZE`` x ``BOARD_SIZE`` with a card at ``(i, j)``?"""

        bbox = self.bounding_box
        return (
            i - bbox.i_min < BOARD_SIZE
            and bbox.i_max - i < BOARD_SIZE
            and j - bbox.j_min < BOARD_SIZE
            and bbox.j_max - j < BOARD_SIZE
        )

    def all_cards(self) -> CardsSet:
        """Every card on the board, visible or not."""

        cards = CardsSet()
        for _, _, compact_field in self.cells:
            cards |= compact_field.all_cards()
        return cards

    def to_fields(self) -> list[Field]:
        """The occupied fields sorted by coordinate, for hand-off to serialization."""

        fields = [cf.to_field(i, j) for i, j, cf in self.cells if not cf.is_empty()]
        fields.sort(key=lambda f: (f.i, f.j))
        return fields

    def _empty_bitboard(self) -> BitBoard:
        return BitBoard.empty_board_centered_at(self.bitboards_center)

    def _reject(self, card_to_play: CardToPlay, reason: IllegalCardPlayed) -> IllegalCardPlayed:
        logger.debug(
            "refused %s at (%d, %d): %s",
            card_to_play.card,
            card_to_play.i,
            card_to_play.j,
            reason.message,
        )
        return reason

    def _fields_to_flip(self, card_to_play: CardToPlay) -> BitBoard | IllegalCardPlayed:
        # The result may contain coordinates without any cards on them.
        card_i, card_j = card_to_play.i, card_to_play.j
        flipped = self._empty_bitboard()
        rank = card_to_play.card.rank
        if rank is Rank.JACK or rank is Rank.QUEEN:
            if rank is Rank.JACK:
                neighbors = ((-1, 0), (1, 0), (0, -1), (0, 1))
            else:
                neighbors = ((-1, -1), (-1, 1), (1, -1), (1, 1))
            for di, dj in neighbors:
                if self.is_in_bounds(card_i + di, card_j + dj):
                    flipped = flipped.insert(card_i + di, card_j + dj)
        elif rank is Rank.KING:
            target = card_to_play.target_field_for_king_ability
            if target is None:
                return NoTargetForKingAbility()
            tgt_i, tgt_j = target
            target_field = self.get(tgt_i, tgt_j)
            if target_field is None:
                return TargetForKingAbilityDoesNotExist(tgt_i=tgt_i, tgt_j=tgt_j)
            if target_field.top_card() is None and (card_i, card_j) != (tgt_i, tgt_j):
                return TargetForKingAbilityIsFaceDown(tgt_i=tgt_i, tgt_j=tgt_j)
            flipped = flipped.insert(tgt_i, tgt_j)
        return flipped

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __rich__(self):  # pragma: no cover - rendering hook
        from .render import render_board

        return render_board(self)


@dataclass(frozen=True, slots=True)
class _Diff:
    flipped: BitBoard
    won: BitBoard
    new_card: Card
    new_card_i: int
    new_card_j: int

    def apply(self, board: Board) -> Board:
        new_position = (self.new_card_i, self.new_card_j)
        bbox = BoundingBox.singleton(*new_position)
        bitboards = [BitBoard.empty_board_centered_at(new_position) for _ in Suit]
        new_cells: list[Cell] = []
        field_for_new_card_exists = False

        # Copy the fields over while applying the changes, and rebuild the
        # derived bounding box and bitboards.
        for i, j, compact_field in board.cells:
            if self.won.contains(i, j):
                continue
            if (i, j) == new_position:
                compact_field = compact_field.place_card(self.new_card)
                field_for_new_card_exists = True
            if self.flipped.contains(i, j):
                compact_field = compact_field.turn_face_down()
            new_cells.append((i, j, compact_field))

            bbox = bbox.update(i, j)
            top = compact_field.top_card()
            if top is not None:
                bitboards[top.suit.index] = bitboards[top.suit.index].insert(i, j)

        if not field_for_new_card_exists:
            new_field = CompactField.new().place_card(self.new_card)
            if self.flipped.contains(*new_position):
                new_field = new_field.turn_face_down()
            else:
                suit_index = self.new_card.suit.index
                bitboards[suit_index] = bitboards[suit_index].insert(*new_position)
            new_cells.append((self.new_card_i, self.new_card_j, new_field))

        return Board(
            cells=tuple(new_cells),
            bitboards_center=new_position,
            bounding_box=bbox,
            suit_bitboards=tuple(bitboards),
            rules=board.rules,
        )


@dataclass(frozen=True, slots=True)
class CalculatedEffects:
    """The effects that playing a card would have, as returned by :meth:`Board.calculate`."""

    board: Board
    diff: _Diff
    # The cards won by this play.
    cards_won: CardsSet
    # Whether the card was stacked on an existing field, earning another play.
    combo: bool

    @property
    def flipped(self) -> BitBoard:
        return self.diff.flipped

    @property
    def won(self) -> BitBoard:
        return self.diff.won

    @property
    def new_card(self) -> Card:
        return self.diff.new_card

    @property
    def position(self) -> tuple[int, int]:
        return (self.diff.new_card_i, self.diff.new_card_j)

    def execute(self) -> Board:
        """Apply the planned changes and return the resulting board."""

        return self.diff.apply(self.board)
