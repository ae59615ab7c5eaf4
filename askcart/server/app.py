"""
FastAPI application setup and service wiring.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

from fastapi import FastAPI

from askcart.config import Settings, settings as default_settings
from askcart.core.analytics import AnalyticsSink
from askcart.core.catalog import CatalogAccessor
from askcart.core.conversations import ConversationStore
from askcart.core.reasoning import ReasoningClient, create_reasoning_client
from askcart.db.sqlite import Database
from askcart.gateway import SessionGateway
from askcart.integrations.llm import BaseLLM
from askcart.server.routes import register_routes

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Components shared by all connections of one app instance."""

    db: Database
    store: ConversationStore
    catalog: CatalogAccessor
    reasoning: ReasoningClient
    analytics: AnalyticsSink
    gateway: SessionGateway


def build_services(
    settings: Settings,
    db: Database,
    llm: BaseLLM | None = None,
) -> Services:
    """Construct pipeline components; pass `llm` to substitute the provider."""
    store = ConversationStore(db)
    catalog = CatalogAccessor(db, search_limit=settings.search_limit)
    reasoning = create_reasoning_client(settings, llm=llm)
    analytics = AnalyticsSink(db)
    gateway = SessionGateway(
        store=store,
        catalog=catalog,
        reasoning=reasoning,
        analytics=analytics,
        history_limit=settings.history_limit,
    )
    return Services(
        db=db,
        store=store,
        catalog=catalog,
        reasoning=reasoning,
        analytics=analytics,
        gateway=gateway,
    )


def create_app(
    settings: Settings | None = None,
    llm: BaseLLM | None = None,
) -> FastAPI:
    """Create configured application instance."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting AskCart...")

        db = Database(settings.db_url)
        await db.init()
        logger.info("Database initialized")

        services = build_services(settings, db, llm)
        app.state.services = services
        logger.info(f"Reasoning provider: {services.reasoning.llm.name}")

        try:
            yield
        finally:
            logger.info("Shutting down AskCart...")
            await services.analytics.drain()
            await db.close()
            logger.info("Cleanup complete")

    app = FastAPI(title="AskCart Assistant", lifespan=lifespan)
    register_routes(app, settings)
    return app
