"""Spread Catalog — verifies spread definitions are well-formed and addressable."""

import pytest

from lucid.core.errors import UnknownSpreadError
from lucid.core.spreads import (
    FOUR_ELEMENTS_SPREAD_ID, FREESTYLE_SPREAD_ID, SPREADS, get_spread, list_spreads,
)


def test_catalog_has_twenty_unique_spreads():
    ids = [s.id for s in SPREADS]
    assert len(ids) == 20
    assert len(set(ids)) == 20


def test_card_count_matches_positions():
    for spread in SPREADS:
        assert spread.card_count == len(spread.positions), spread.id
        assert [p.id for p in spread.positions] == list(range(1, spread.card_count + 1))


def test_position_coordinates_are_percentages():
    for spread in SPREADS:
        for p in spread.positions:
            assert 0 <= p.x <= 100 and 0 <= p.y <= 100, (spread.id, p.name)


def test_first_spread_is_the_recommendation_fallback():
    assert list_spreads()[0].id == "inspiration_correspondence"


def test_special_spreads_exist():
    assert get_spread(FREESTYLE_SPREAD_ID).card_count == 3
    elements = get_spread(FOUR_ELEMENTS_SPREAD_ID)
    assert [p.name for p in elements.positions] == ["火", "水", "风", "土"]


def test_unknown_spread_raises():
    with pytest.raises(UnknownSpreadError) as exc:
        get_spread("nope")
    assert exc.value.http_status == 400
    assert exc.value.code == "UNKNOWN_SPREAD"


def test_list_spreads_returns_a_copy():
    spreads = list_spreads()
    spreads.clear()
    assert len(list_spreads()) == 20
