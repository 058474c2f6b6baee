"""Domain Types — verifies enum values, element mapping, and date keys."""

from datetime import date

from lucid.core.date_keys import date_key, now_millis
from lucid.core.domain_types import (
    DAILY_POSITIONS, ChatRole, Element, Feedback, Provider,
)


def test_enums_serialize_to_stored_strings():
    assert Provider.SILICONFLOW.value == "siliconflow"
    assert ChatRole.MODEL.value == "model"
    assert {f.value for f in Feedback} == {"accurate", "confused", "comforted"}


def test_elements_map_to_suits_and_positions():
    assert [(e.suit_code, e.position_name) for e in Element] == [
        ("wa", "火"), ("cu", "水"), ("sw", "风"), ("pe", "土"),
    ]


def test_daily_positions_are_body_mind_spirit():
    assert DAILY_POSITIONS == ("身", "心", "灵")


def test_date_key_has_no_zero_padding():
    assert date_key(date(2026, 1, 5)) == "2026/1/5"
    assert date_key(date(2026, 10, 19)) == "2026/10/19"


def test_now_millis_is_epoch_milliseconds():
    assert now_millis() > 1_700_000_000_000
