"""
Analytics sink - records pipeline events without holding up the reply.
"""

import asyncio
import logging
from typing import Any, Optional

from askcart.db.models import AnalyticsEvent, generate_id, utcnow
from askcart.db.sqlite import Database

logger = logging.getLogger(__name__)

MESSAGE_SENT = "message_sent"
PRODUCT_RECOMMENDED = "product_recommended"


class AnalyticsSink:
    """Writes AnalyticsEvent rows; `emit` schedules the write in the background."""

    def __init__(self, db: Database):
        self.db = db
        self._pending: set[asyncio.Task] = set()

    async def record(
        self,
        event: str,
        conversation_id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> AnalyticsEvent:
        """Write an event and wait for it. Errors propagate."""
        analytics_event = AnalyticsEvent(
            id=generate_id(),
            conversation_id=conversation_id,
            event=event,
            meta=metadata,
            created_at=utcnow(),
        )
        async with self.db.session() as session:
            session.add(analytics_event)
        return analytics_event

    async def _record_quietly(
        self,
        event: str,
        conversation_id: Optional[str],
        metadata: Optional[dict[str, Any]],
    ) -> None:
        try:
            await self.record(event, conversation_id, metadata)
        except Exception as e:
            logger.warning(
                f"Dropped analytics event '{event}' for conversation {conversation_id}: {e}"
            )

    def emit(
        self,
        event: str,
        conversation_id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> asyncio.Task:
        """Fire-and-forget: failures are logged and dropped."""
        task = asyncio.create_task(self._record_quietly(event, conversation_id, metadata))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for scheduled writes (used on shutdown and in tests)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
