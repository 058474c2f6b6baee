"""Fake Chat Provider — scripted ChatProvider for oracle, flow, and route tests.

Invariants:
    - FakeProvider sequences responses: one per send_prompt call, "" once exhausted
    - An Exception in the script is raised instead of returned
    - Every call is recorded (system text, prompt, json_mode)
    - FakeHub always hands out the same FakeProvider, whatever the config

Design Decisions:
    - Flat fakes (no mocking library): Protocol typing means no inheritance needed
"""

from lucid.config import Settings
from lucid.infrastructure.providers import ProviderHub


class FakeProvider:
    def __init__(self, responses=None, name="gemini"):
        self.name = name
        self.responses = list(responses or [])
        self.calls = []
        self.ping_error = None
        self.pings = 0

    def queue(self, *responses):
        self.responses.extend(responses)

    async def send_prompt(self, system_text, prompt, json_mode=False):
        self.calls.append(
            {"system": system_text, "prompt": prompt, "json_mode": json_mode},
        )
        reply = self.responses.pop(0) if self.responses else ""
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def ping(self):
        self.pings += 1
        if self.ping_error:
            raise self.ping_error


class FakeHub(ProviderHub):
    """ProviderHub whose provider() is fixed; config handling stays real."""

    def __init__(self, provider: FakeProvider, settings: Settings | None = None):
        super().__init__(settings or Settings(_env_file=None, api_key=""), http=None)
        self.fake = provider

    def provider(self):
        return self.fake
