"""Chat Providers — Gemini and SiliconFlow adapters behind one ChatProvider contract.

Invariants:
    - Both adapters accept a single prompt string or a list of user/assistant turns
    - JSON mode maps to each API's native switch (responseMimeType / response_format)
    - A missing API key raises ApiKeyMissingError before any network call
    - Empty or oddly shaped model output is returned as "" (callers own the fallback)
    - ProviderHub.reconfigure() drops the cached provider; the next call rebuilds it

Design Decisions:
    - Plain REST over httpx for both backends: one retry policy (ResilientHttpClient),
      and tests mock transport instead of SDK internals
    - Gemini receives the system text as systemInstruction (native field) rather
      than splicing it into the first user turn
"""

import logging

from lucid.config import Settings
from lucid.core.domain_types import Provider
from lucid.core.errors import ApiKeyMissingError, ErrorContext
from lucid.core.prompts import HELLO_PROMPT, PING_PROMPT
from lucid.core.provider_config import ProviderConfig, SILICONFLOW_BASE_URL
from lucid.core.repository_protocols import ChatProvider, PromptInput
from lucid.infrastructure.http_client import ResilientHttpClient

logger = logging.getLogger(__name__)

GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"


def _as_turns(prompt: PromptInput) -> list[dict[str, str]]:
    if isinstance(prompt, str):
        return [{"role": "user", "content": prompt}]
    return list(prompt)


class SiliconFlowProvider:
    """OpenAI-compatible /chat/completions gateway."""

    name = Provider.SILICONFLOW.value

    def __init__(
        self,
        http: ResilientHttpClient,
        api_key: str,
        base_url: str = SILICONFLOW_BASE_URL,
        model: str = "deepseek-ai/DeepSeek-V3",
    ):
        self.http = http
        self.api_key = api_key
        self.base_url = (base_url or SILICONFLOW_BASE_URL).rstrip("/")
        self.model = model

    async def send_prompt(
        self, system_text: str, prompt: PromptInput, json_mode: bool = False,
    ) -> str:
        if not self.api_key:
            raise ApiKeyMissingError(ErrorContext(provider=self.name))

        messages = []
        if system_text:
            messages.append({"role": "system", "content": system_text})
        messages.extend(_as_turns(prompt))

        payload: dict = {
            "model": self.model,
            "messages": messages,
            "stream": False,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        data = await self.http.post_json(
            f"{self.base_url}/chat/completions",
            headers={"Authorization": f"Bearer {self.api_key}"},
            payload=payload,
            error_prefix="SiliconFlow API Error",
            context=ErrorContext(provider=self.name),
        )
        return _first_choice_content(data)

    async def ping(self) -> None:
        await self.send_prompt("", HELLO_PROMPT)


class GeminiProvider:
    """Google Generative Language API (generateContent)."""

    name = Provider.GEMINI.value

    def __init__(
        self,
        http: ResilientHttpClient,
        api_key: str,
        base_url: str = "",
        model: str = "gemini-2.5-flash",
    ):
        self.http = http
        self.api_key = api_key
        # A SiliconFlow URL left over from a provider switch is not a Gemini proxy
        if not base_url or base_url == SILICONFLOW_BASE_URL:
            base_url = GEMINI_DEFAULT_BASE_URL
        self.base_url = base_url.rstrip("/")
        self.model = model

    async def send_prompt(
        self, system_text: str, prompt: PromptInput, json_mode: bool = False,
    ) -> str:
        payload: dict = {"contents": self._contents(prompt)}
        if system_text:
            payload["systemInstruction"] = {"parts": [{"text": system_text}]}
        if json_mode:
            payload["generationConfig"] = {"responseMimeType": "application/json"}
        return await self._generate(payload)

    async def ping(self) -> None:
        await self._generate({
            "contents": self._contents(PING_PROMPT),
            "generationConfig": {"maxOutputTokens": 1},
        })

    async def _generate(self, payload: dict) -> str:
        if not self.api_key:
            raise ApiKeyMissingError(ErrorContext(provider=self.name))
        data = await self.http.post_json(
            f"{self.base_url}/v1beta/models/{self.model}:generateContent",
            headers={"x-goog-api-key": self.api_key},
            payload=payload,
            error_prefix="Gemini API Error",
            context=ErrorContext(provider=self.name),
        )
        return _first_candidate_text(data)

    @staticmethod
    def _contents(prompt: PromptInput) -> list[dict]:
        return [
            {
                "role": "model" if turn["role"] == "assistant" else "user",
                "parts": [{"text": turn["content"]}],
            }
            for turn in _as_turns(prompt)
        ]


def _first_choice_content(data: object) -> str:
    """choices[0].message.content, or "" for any body of another shape."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


def _first_candidate_text(data: object) -> str:
    """Concatenated text parts of the first candidate, or "" for any other shape."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "".join(
        p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)
    )


def build_provider(
    config: ProviderConfig, settings: Settings, http: ResilientHttpClient,
) -> ChatProvider:
    """Instantiate the adapter selected by config.provider."""
    api_key = config.effective_api_key(settings.api_key)
    if config.provider == Provider.SILICONFLOW:
        return SiliconFlowProvider(
            http, api_key,
            base_url=config.base_url or SILICONFLOW_BASE_URL,
            model=settings.siliconflow_model,
        )
    return GeminiProvider(
        http, api_key,
        base_url=config.base_url or settings.gemini_base_url,
        model=settings.gemini_model,
    )


class ProviderHub:
    """Holds the active ProviderConfig and a lazily built, cached provider.

    Created once at startup; reconfigure() is the only way to change it.
    """

    def __init__(self, settings: Settings, http: ResilientHttpClient):
        self.settings = settings
        self.http = http
        self._config: ProviderConfig | None = None
        self._provider: ChatProvider | None = None

    @property
    def loaded(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> ProviderConfig:
        return self._config or ProviderConfig()

    def reconfigure(self, config: ProviderConfig) -> None:
        self._config = config
        self._provider = None
        logger.info(
            "Provider reconfigured", extra={"provider": config.provider.value},
        )

    def provider(self) -> ChatProvider:
        if self._provider is None:
            self._provider = build_provider(self.config, self.settings, self.http)
        return self._provider

    def has_api_key(self) -> bool:
        return bool(self.settings.api_key or self.config.api_key)
