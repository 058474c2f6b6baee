"""Tarot Deck — static 78-card table, shuffle with reversals, and draws.

Invariants:
    - generate_tarot_deck() returns 78 upright cards, ids 0-77, majors first
    - shuffle_deck returns a NEW list; input cards are never mutated
    - draw_cards rejects duplicate or out-of-range indices
    - Randomness comes from an injectable random.Random (deterministic in tests)
"""

import random

from lucid.core.domain_types import Element
from lucid.core.errors import ValidationError
from lucid.core.records import TarotCard

_MAJORS: tuple[str, ...] = (
    "愚者", "魔术师", "女祭司", "女皇", "皇帝", "教皇", "恋人", "战车",
    "力量", "隐士", "命运之轮", "正义", "倒吊人", "死神", "节制", "恶魔",
    "高塔", "星星", "月亮", "太阳", "审判", "世界",
)

_SUITS: tuple[tuple[str, str], ...] = (
    ("权杖", "wa"), ("圣杯", "cu"), ("宝剑", "sw"), ("星币", "pe"),
)

_RANKS: tuple[tuple[str, str], ...] = (
    ("一", "01"), ("二", "02"), ("三", "03"), ("四", "04"), ("五", "05"),
    ("六", "06"), ("七", "07"), ("八", "08"), ("九", "09"), ("十", "10"),
    ("侍从", "11"), ("骑士", "12"), ("王后", "13"), ("国王", "14"),
)

DECK_SIZE = len(_MAJORS) + len(_SUITS) * len(_RANKS)

_IMAGE_BASE_URL = "https://www.sacred-texts.com/tarot/pkt/img"
_RANK_IMAGE_SUFFIX = {"01": "ac", "11": "pa", "12": "kn", "13": "qu", "14": "ki"}


def generate_tarot_deck() -> list[TarotCard]:
    """Build the full deck in canonical order."""
    deck: list[TarotCard] = []
    for i, name in enumerate(_MAJORS):
        deck.append(TarotCard(id=i, name=name, name_en=f"ar{i:02d}"))
    for suit_name, suit_code in _SUITS:
        for rank_name, rank_code in _RANKS:
            deck.append(TarotCard(
                id=len(deck),
                name=f"{suit_name}{rank_name}",
                name_en=f"{suit_code}{rank_code}",
            ))
    return deck


def shuffle_deck(
    cards: list[TarotCard], rng: random.Random | None = None,
) -> list[TarotCard]:
    """Fisher-Yates from the end; the card landing at i gets a coin-flip reversal.

    Position 0 is never re-flipped, so it keeps its incoming orientation.
    """
    rng = rng or random.Random()
    result = [c.model_copy() for c in cards]
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
        result[i].is_reversed = rng.random() > 0.5
    return result


def is_major(card: TarotCard) -> bool:
    return card.name_en.lower().startswith("ar")


def build_elemental_decks(
    rng: random.Random | None = None,
) -> dict[Element, list[TarotCard]]:
    """Minor arcana split by suit (fire=wands ... earth=pentacles), each shuffled."""
    rng = rng or random.Random()
    minors = [c for c in generate_tarot_deck() if not is_major(c)]
    return {
        element: shuffle_deck(
            [c for c in minors if c.name_en.lower().startswith(element.suit_code)],
            rng,
        )
        for element in Element
    }


def draw_cards(
    deck: list[TarotCard],
    indices: list[int],
    position_names: list[str],
) -> list[TarotCard]:
    """Pick cards by deck index, attaching the spread position to each."""
    if len(set(indices)) != len(indices):
        raise ValidationError("Each card can only be drawn once", "indices")
    for idx in indices:
        if not 0 <= idx < len(deck):
            raise ValidationError(
                f"Card index {idx} out of range (deck has {len(deck)})", "indices",
            )
    drawn = []
    for i, idx in enumerate(indices):
        position = (
            position_names[i] if i < len(position_names) and position_names[i]
            else f"Position {i + 1}"
        )
        drawn.append(deck[idx].model_copy(update={"position": position}))
    return drawn


def card_image_url(card: TarotCard) -> str:
    """Rider-Waite (PKT) scan on sacred-texts.com; "" when the card has no code."""
    if not card.name_en:
        return ""
    raw = card.name_en.lower()
    if raw.startswith("ar"):
        return f"{_IMAGE_BASE_URL}/{raw}.jpg"
    suit, rank = raw[:2], raw[2:]
    return f"{_IMAGE_BASE_URL}/{suit}{_RANK_IMAGE_SUFFIX.get(rank, rank)}.jpg"
