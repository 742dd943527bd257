from __future__ import annotations

from gomori.bbox import BoundingBox
from gomori.cards import Card, CardsSet
from gomori.field import CompactField, Field


def card(label: str) -> Card:
    return Card.parse(label)


def test_bounding_box_growth() -> None:
    bbox = BoundingBox.singleton(2, -1)
    assert (bbox.size_i(), bbox.size_j()) == (1, 1)

    bbox = bbox.update(-1, 0).update(0, -3)
    assert bbox == BoundingBox(i_min=-1, j_min=-3, i_max=2, j_max=0)
    assert (bbox.size_i(), bbox.size_j()) == (4, 4)
    assert bbox.contains(0, 0)
    assert not bbox.contains(3, 0)
    assert len(list(bbox)) == 16


def test_new_field_is_empty() -> None:
    field = CompactField.new()
    assert field.is_empty()
    assert field.top_card() is None
    assert field.all_cards().is_empty()
    assert field.can_place_card(card("K♠"))


def test_place_card_pushes_top_into_hidden() -> None:
    field = CompactField.new().place_card(card("5♥")).place_card(card("9♣"))
    assert field.top_card() == card("9♣")
    assert field.hidden_cards() == CardsSet.of([card("5♥")])
    assert field.all_cards() == CardsSet.of([card("5♥"), card("9♣")])
    assert not field.is_empty()


def test_turn_face_down_keeps_field_non_empty() -> None:
    field = CompactField.new().place_card(card("5♥")).turn_face_down()
    assert field.top_card() is None
    assert field.hidden_cards() == CardsSet.of([card("5♥")])
    assert not field.is_empty()
    assert field.turn_face_down() == field
    assert field.can_place_card(card("2♦"))


def test_can_place_card_uses_rule() -> None:
    field = CompactField.new().place_card(card("7♦"))
    assert field.can_place_card(card("8♠"))
    assert not field.can_place_card(card("6♠"))
    assert field.can_place_card(card("6♠"), rule=lambda new, old: True)


def test_field_conversion_round_trip() -> None:
    flat = Field.of(3, -2, card("Q♥"), [card("4♣"), card("A♠")])
    compact = CompactField.from_field(flat)
    assert compact.top_card() == card("Q♥")
    assert len(compact.hidden_cards()) == 2
    assert compact.to_field(3, -2) == flat
