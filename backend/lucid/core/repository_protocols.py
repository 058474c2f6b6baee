"""Boundary Protocols — contracts between core/services and infrastructure.

Invariants:
    - Services depend on these Protocols, never on concrete infrastructure classes
    - Implementations provided by infrastructure via dependency injection
    - Boundary methods are async because implementations do IO

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Protocol, Union

# One user turn, or a list of {"role": "user"|"assistant", "content": str}
PromptInput = Union[str, list[dict[str, str]]]


class KeyValueStore(Protocol):
    """String-to-string persistent map (the app's "local storage")."""
    async def get(self, key: str) -> str | None: ...
    async def set(self, key: str, value: str) -> None: ...
    async def delete(self, key: str) -> None: ...


class ChatProvider(Protocol):
    """Text-in/text-out chat completion backend with a JSON-mode flag."""
    name: str

    async def send_prompt(
        self,
        system_text: str,
        prompt: PromptInput,
        json_mode: bool = False,
    ) -> str: ...

    async def ping(self) -> None:
        """Cheapest possible round trip; raises on any failure."""
        ...
