"""Prompt Builders — pure functions that render every oracle prompt.

Invariants:
    - All functions are pure (no IO, no provider calls)
    - Every JSON-producing prompt names the exact keys the parser reads back
    - Card lines follow draw order; position i of the spread describes card i
"""

from lucid.core.domain_types import ChatRole
from lucid.core.records import ChatMessage, Spread, TarotCard
from lucid.core.spreads import FREESTYLE_SPREAD_ID

# System texts, one per operation
RECOMMEND_SYSTEM = "You are a Tarot expert. Output JSON array."
READING_SYSTEM = "You are a Tarot Reader. Output JSON."
DAILY_SYSTEM = "Deep Spiritual Mentor. JSON."
PRACTICE_SYSTEM = "Action Coach. JSON."
JOURNAL_SYSTEM = "Expert Psychologist/Healer. JSON."

PING_PROMPT = "ping"
HELLO_PROMPT = "Hello"

_FREESTYLE_RULES = """
**SPECIAL LAYOUT RULES FOR 'three_card_freestyle'**:
- This is a "Center + Wings" structure, NOT a timeline.
- **Card 2 (Middle)** is the CORE/MAIN answer/theme. Focus heavily on this card.
- **Card 1 (Left) and Card 3 (Right)** are AUXILIARY. They modify, support, or add detail to the core meaning of Card 2.
- Do NOT interpret this spread as "Past, Present, Future". Interpret it as "Central Energy (2) flanked by Influences (1 & 3)".
"""

_INTERPRETATION_RULES = """
**CRITICAL INTERPRETATION RULES**:
1. **Subject Analysis**:
   - If the user asks about **themselves** ("I", "me", "my"), the cards primarily reflect the **user's** internal state, subconscious, or actions.
   - If the user asks about **someone else** ("he", "she", "they", "specific person"), the cards likely reflect **that person's** thoughts, feelings, or situation (unless the position specifically says "Querent").

2. **Gender & Archetypes**:
   - Pay close attention to Court Cards (King, Queen, Knight, Page) and Major Arcana archetypes (Emperor, Empress).
   - **Kings/Knights/Emperor**: Often represent Masculine energy, Men, Father figures, or Bosses.
   - **Queens/Empress/High Priestess**: Often represent Feminine energy, Women, or Mother figures.
   - **Pages**: Often represent Young people, Students, Children, or immature energy regardless of gender.
   - Use these archetypes to identify *who* the card is talking about in the context of the question (e.g., in a love reading, a King often represents the male partner).
"""


def orientation(card: TarotCard, short: bool = False) -> str:
    if short:
        return "Rev" if card.is_reversed else "Upr"
    return "Reversed" if card.is_reversed else "Upright"


def build_recommend_spread_prompt(question: str, spreads: list[Spread]) -> str:
    spread_lines = "\n".join(
        f"- ID: {s.id}, Name: {s.name}, Desc: {s.description}" for s in spreads
    )
    return f"""
User Question: "{question}"
Available Spreads:
{spread_lines}

Based on the user's question, recommend the top 3 most suitable spread IDs.
Return strictly a JSON array of strings, e.g.: ["id1", "id2", "id3"]
Do not add markdown formatting.
"""


def describe_drawn_cards(spread: Spread, cards: list[TarotCard]) -> str:
    """One line per card: position label, description, card name, orientation."""
    lines = []
    for i, card in enumerate(cards):
        if i < len(spread.positions):
            pos = spread.positions[i]
            label = f"{pos.name} - {pos.description}"
        else:
            label = card.position or f"Position {i + 1}"
        lines.append(
            f"Position {i + 1} ({label}): Card [{card.name}], {orientation(card)}",
        )
    return "\n".join(lines)


def build_full_reading_prompt(
    question: str, spread: Spread, cards: list[TarotCard], user_name: str,
) -> str:
    special = _FREESTYLE_RULES if spread.id == FREESTYLE_SPREAD_ID else ""
    return f"""
You are a mystical and wise Tarot Reader named LUCID.
User Name: {user_name}.
Question: "{question}".
Spread: {spread.name} ({spread.description}).

Cards Drawn:
{describe_drawn_cards(spread, cards)}
{_INTERPRETATION_RULES}
{special}
Please provide a deep, healing, and empowering interpretation.

Format requirements:
1. **Overview**: A summary of the energy.
2. **Card by Card**: Brief analysis of each card in its position.
3. **Synthesis**: How the cards interact.
4. **Guidance**: Actionable advice.

Output strictly as JSON:
{{
    "interpretation": "The full markdown formatted text of the reading...",
    "cardMeanings": ["Specific meaning for card 1", "Specific meaning for card 2", ...] (MUST provide a specific string for EVERY card drawn. Do not omit.)
}}
Language: Chinese (Warm, mystical, professional).
"""


def build_chat_system_prompt(reading_context: str) -> str:
    return f"""
You are LUCID, a Tarot Reader.
Context of the reading:
{reading_context}

Answer the user's follow-up questions based on the cards drawn and the interpretation.
Be concise, wise, and comforting. Use Chinese.
"""


def chat_turns(history: list[ChatMessage]) -> list[dict[str, str]]:
    """Reading chat history as provider-neutral user/assistant turns."""
    return [
        {
            "role": "assistant" if msg.role == ChatRole.MODEL else "user",
            "content": msg.text,
        }
        for msg in history
    ]


def build_daily_reading_prompt(cards: list[TarotCard], user_name: str) -> str:
    card_desc = ", ".join(
        f"{c.position or 'Position'}: {c.name} ({orientation(c, short=True)})"
        for c in cards
    )
    return f"""
Daily Energy Check for {user_name}.
Cards: {card_desc}.

**ROLE**: You are a PROFOUND SOUL MENTOR and SPIRITUAL GUIDE.

**TASK**: Analyze the psychological and spiritual energy for the user today based on these cards.

**CRITICAL STYLE GUIDELINES**:
1. **Language**: Modern, grounded, conversational Chinese (大白话).
2. **Tone**: Mature, insightful, and empathetic. **DO NOT be childish, superficial, or overly "peppy".** Avoid clichés.
3. **Content**: Focus on "Why this is happening" and "What the soul is learning". Dig deeper than surface level luck.
4. Provide a clear, cohesive narrative that connects the Body, Mind, and Spirit cards.

JSON Output:
{{
    "guidance": "A deep, insightful analysis of today's energy (approx 80-100 words). Focus on internal growth and awareness.",
    "cardMeanings": ["Insight for body energy", "Insight for mental state", "Insight for spiritual path"]
}}
"""


def build_practice_context(guidance: str, cards: list[TarotCard]) -> str:
    """Context handed from the daily reading to the practice generator."""
    return f"{guidance}. Cards: {', '.join(c.name for c in cards)}"


def build_daily_practice_prompt(context: str, user_name: str) -> str:
    return f"""
Based on this tarot reading context: "{context}"
Generate a daily practice for {user_name}.

**REQUIREMENTS**:
1. **actionStep**: MUST be a **SIMPLE, EASY-TO-EXECUTE MICRO-HABIT**.
   - **DO NOT** specify exact times (like "at 3pm").
   - **DO NOT** require specific items that might not be available (like "herbal tea", "candles").
   - **DO** focus on body awareness, breathing, simple observation, or mindset shifts.
   - Examples of GOOD actions: "Take 3 deep breaths when you feel stressed", "Look at the sky for 1 minute", "Stretch your arms up and release tension", "Write down one thing you are grateful for".
   - Keep it flexible and low-pressure.

JSON: {{
    "energyStatus": "Short poetic phrase (e.g. 静谧之海, 破茧成蝶)",
    "todaysAffirmation": "One powerful sentence to reprogram the subconscious",
    "actionStep": "One simple, flexible, physical action."
}}
Language: Chinese.
"""


def build_journal_prompt(content: str) -> str:
    return f"""
Analyze this journal entry for a spiritual self-discovery context.
User's entry: "{content}"

Provide a psychological and spiritual analysis.
1. Emotional State: Key emotions detected (max 3).
2. Blocks Identified: Any limiting beliefs or resistance? (max 3)
3. High Self Traits: Positive qualities or wisdom showing through (max 3).
4. Insight/Summary: Deep reflection on what this means (approx 50 words).
5. Tomorrow's Advice: One actionable spiritual or mindset advice.

Output JSON:
{{
    "emotionalState": ["..."],
    "blocksIdentified": ["..."],
    "highSelfTraits": ["..."],
    "summary": "...",
    "tomorrowsAdvice": "..."
}}
Language: Chinese.
"""
