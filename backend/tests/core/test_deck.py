"""Tarot Deck — verifies the 78-card table, shuffling, elemental decks, and draws.

Invariants:
    - 22 majors then 56 minors; ids 0-77; all upright
    - shuffle_deck never mutates its input and keeps the same cards
    - Elemental decks hold exactly one suit each (14 cards)
    - draw_cards rejects duplicates and out-of-range indices
"""

import random

import pytest

from lucid.core.deck import (
    DECK_SIZE, build_elemental_decks, card_image_url, draw_cards,
    generate_tarot_deck, is_major, shuffle_deck,
)
from lucid.core.domain_types import Element
from lucid.core.errors import ValidationError


# --- deck table ----------------------------------------------------------------

def test_deck_has_78_cards_with_sequential_ids():
    deck = generate_tarot_deck()
    assert len(deck) == DECK_SIZE == 78
    assert [c.id for c in deck] == list(range(78))


def test_deck_starts_upright_with_majors_first():
    deck = generate_tarot_deck()
    assert not any(c.is_reversed for c in deck)
    assert deck[0].name == "愚者" and deck[0].name_en == "ar00"
    assert deck[21].name == "世界" and deck[21].name_en == "ar21"
    assert sum(is_major(c) for c in deck) == 22


def test_minor_names_and_codes():
    deck = generate_tarot_deck()
    assert deck[22].name == "权杖一" and deck[22].name_en == "wa01"
    assert deck[-1].name == "星币国王" and deck[-1].name_en == "pe14"


# --- shuffle -------------------------------------------------------------------

def test_shuffle_returns_new_list_and_keeps_input():
    deck = generate_tarot_deck()
    shuffled = shuffle_deck(deck, random.Random(1))
    assert shuffled is not deck
    assert not any(c.is_reversed for c in deck)
    assert sorted(c.id for c in shuffled) == list(range(78))


def test_shuffle_is_deterministic_for_seed():
    a = shuffle_deck(generate_tarot_deck(), random.Random(42))
    b = shuffle_deck(generate_tarot_deck(), random.Random(42))
    assert [(c.id, c.is_reversed) for c in a] == [(c.id, c.is_reversed) for c in b]


def test_shuffle_produces_some_reversals():
    shuffled = shuffle_deck(generate_tarot_deck(), random.Random(3))
    assert any(c.is_reversed for c in shuffled)
    assert not all(c.is_reversed for c in shuffled)


# --- elemental decks -------------------------------------------------------------

def test_elemental_decks_split_minors_by_suit():
    decks = build_elemental_decks(random.Random(5))
    assert set(decks) == set(Element)
    for element, cards in decks.items():
        assert len(cards) == 14
        assert all(c.name_en.startswith(element.suit_code) for c in cards)


# --- draws -----------------------------------------------------------------------

def test_draw_attaches_positions():
    deck = generate_tarot_deck()
    drawn = draw_cards(deck, [0, 5], ["过去", "现在"])
    assert [c.name for c in drawn] == ["愚者", "教皇"]
    assert [c.position for c in drawn] == ["过去", "现在"]
    assert deck[0].position is None


def test_draw_names_missing_positions():
    drawn = draw_cards(generate_tarot_deck(), [1, 2, 3], ["一"])
    assert [c.position for c in drawn] == ["一", "Position 2", "Position 3"]


def test_draw_rejects_duplicates():
    with pytest.raises(ValidationError) as exc:
        draw_cards(generate_tarot_deck(), [4, 4], [])
    assert exc.value.field == "indices"


def test_draw_rejects_out_of_range():
    with pytest.raises(ValidationError):
        draw_cards(generate_tarot_deck(), [78], [])


# --- images ------------------------------------------------------------------------

def test_card_image_url_for_major_and_court():
    deck = generate_tarot_deck()
    assert card_image_url(deck[0]).endswith("/ar00.jpg")
    assert card_image_url(deck[22]).endswith("/waac.jpg")
    assert card_image_url(deck[23]).endswith("/wa02.jpg")
    assert card_image_url(deck[-1]).endswith("/peki.jpg")
