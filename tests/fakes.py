"""Test doubles and helpers shared by the test suite."""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Optional

from askcart.config import Settings
from askcart.db.sqlite import Database
from askcart.integrations.llm.base import BaseLLM, LLMResponse
from askcart.server.app import Services, build_services


def run(coro):
    return asyncio.run(coro)


CATALOG = [
    {"name": "MacBook Pro", "price": 199900, "description": "14-inch laptop with M3 chip",
     "specifications": {"ram": "16GB"}, "tags": ["laptop", "apple"]},
    {"name": "iPhone 15 Pro", "price": 99900, "description": "Titanium smartphone",
     "tags": ["phone"]},
    {"name": "Budget Laptop", "price": 64900, "description": "15-inch laptop for everyday work",
     "tags": ["laptop"]},
    {"name": "Noise Cancelling Headphones", "price": 29900, "description": "Over-ear wireless headphones"},
]


class FakeLLM(BaseLLM):
    """Scripted LLM: returns a fixed reply, a computed reply, or raises."""

    def __init__(
        self,
        reply: str | Callable[[str, Optional[str]], str] = "Happy to help!",
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls: list[dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 1024,
        json_mode: bool = False,
    ) -> LLMResponse:
        self.calls.append(
            {"prompt": prompt, "system_prompt": system_prompt, "json_mode": json_mode}
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        content = self.reply(prompt, system_prompt) if callable(self.reply) else self.reply
        return LLMResponse(content=content, model="fake")

    @property
    def name(self) -> str:
        return "fake"


class GatedLLM(FakeLLM):
    """Blocks any prompt containing `marker` until `gate` is set."""

    def __init__(self, gate: asyncio.Event, marker: str = "slow", **kwargs):
        super().__init__(**kwargs)
        self.gate = gate
        self.marker = marker

    async def generate(self, prompt: str, *args, **kwargs) -> LLMResponse:
        if self.marker in prompt.split("Current user message:")[-1]:
            await self.gate.wait()
        return await super().generate(prompt, *args, **kwargs)


class FakeSender:
    """Collects frames the gateway sends."""

    def __init__(self):
        self.frames: list[dict[str, Any]] = []

    async def send_json(self, data: Any) -> None:
        self.frames.append(data)

    @property
    def errors(self) -> list[dict[str, Any]]:
        return [f for f in self.frames if f["type"] == "error"]


def make_settings(db_url: str, **overrides) -> Settings:
    return Settings(_env_file=None, database_url=db_url, **overrides)


async def seed_catalog(services_or_db, products: list[dict] = CATALOG) -> list:
    """Add products through the catalog accessor."""
    from askcart.core.catalog import CatalogAccessor

    if isinstance(services_or_db, Services):
        catalog = services_or_db.catalog
    else:
        catalog = CatalogAccessor(services_or_db)

    return [await catalog.add(**product) for product in products]


@asynccontextmanager
async def open_services(
    db_url: str,
    llm: BaseLLM,
    settings: Optional[Settings] = None,
    products: Optional[list[dict]] = None,
) -> AsyncIterator[Services]:
    """Wire the full pipeline against a fresh database with a fake LLM."""
    settings = settings or make_settings(db_url)
    db = Database(db_url, echo=False)
    await db.init()
    services = build_services(settings, db, llm)
    if products:
        await seed_catalog(services, products)
    try:
        yield services
    finally:
        await services.analytics.drain()
        await db.close()


def join(session_id: str) -> str:
    import json

    return json.dumps({"type": "join", "sessionId": session_id})


def chat(content: str, session_id: str = "s1") -> str:
    import json

    return json.dumps({"type": "message", "content": content, "sessionId": session_id})
