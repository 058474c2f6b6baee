"""Domain Types — enums and value types shared across the codebase.

Invariants:
    - All valid states encoded as Enums — no raw string matching
    - str Enums serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

SessionId = NewType("SessionId", str)      # uuid4 string
EpochMillis = NewType("EpochMillis", int)  # JS-style Date.now()
DateKey = NewType("DateKey", str)          # zh-CN short date, e.g. "2026/10/19"


# ─── Enums ───────────────────────────────────────────────────────

class Provider(str, Enum):
    """The two interchangeable chat-completion backends."""
    GEMINI = "gemini"
    SILICONFLOW = "siliconflow"


class ChatRole(str, Enum):
    """Roles stored in reading chat history."""
    USER = "user"
    MODEL = "model"


class Feedback(str, Enum):
    """User feedback on a finished reading."""
    ACCURATE = "accurate"
    CONFUSED = "confused"
    COMFORTED = "comforted"


class Element(str, Enum):
    """Four-elements spread: each element draws from one minor suit."""
    FIRE = "fire"
    WATER = "water"
    AIR = "air"
    EARTH = "earth"

    @property
    def suit_code(self) -> str:
        return _ELEMENT_SUITS[self][0]

    @property
    def position_name(self) -> str:
        return _ELEMENT_SUITS[self][1]


_ELEMENT_SUITS: dict[Element, tuple[str, str]] = {
    Element.FIRE: ("wa", "火"),
    Element.WATER: ("cu", "水"),
    Element.AIR: ("sw", "风"),
    Element.EARTH: ("pe", "土"),
}

# Daily draw positions: body, mind, spirit
DAILY_POSITIONS: tuple[str, str, str] = ("身", "心", "灵")

DEFAULT_USER_NAME = "旅行者"
