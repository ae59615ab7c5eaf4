"""
Conversation store - durable conversations and their ordered turns.
"""

import asyncio
import logging
import weakref
from datetime import timedelta
from typing import Any, Optional

from sqlalchemy import select

from askcart.core.errors import InvalidArgument, NotFound
from askcart.db.models import (
    Conversation,
    ConversationStatus,
    Message,
    MessageRole,
    generate_id,
    utcnow,
)
from askcart.db.sqlite import Database

logger = logging.getLogger(__name__)


class ConversationStore:
    """
    Persists conversations keyed by client session id.

    Writes to one conversation are serialized by a per-conversation lock, so
    message timestamps within a conversation are strictly increasing.
    First contact for a session id is serialized the same way to avoid
    creating two conversations for one session inside this process.

    Usage:
        store = ConversationStore(db)
        conversation = await store.resolve_or_create("s1")
        await store.append_message(conversation.id, MessageRole.USER, "Hi")
    """

    def __init__(self, db: Database):
        self.db = db
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def _lock(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def resolve_or_create(self, session_id: str) -> Conversation:
        """Return the most recent conversation for the session, creating one if needed."""
        async with self._lock(f"session:{session_id}"):
            async with self.db.session() as session:
                stmt = (
                    select(Conversation)
                    .where(Conversation.session_id == session_id)
                    .order_by(Conversation.created_at.desc())
                    .limit(1)
                )
                conversation = (await session.execute(stmt)).scalar_one_or_none()

                if conversation is None:
                    now = utcnow()
                    conversation = Conversation(
                        id=generate_id(),
                        session_id=session_id,
                        status=ConversationStatus.ACTIVE.value,
                        created_at=now,
                        updated_at=now,
                    )
                    session.add(conversation)
                    logger.info(f"Created conversation {conversation.id} for session {session_id}")

        return conversation

    async def get(self, conversation_id: str) -> Conversation:
        async with self.db.session() as session:
            conversation = await session.get(Conversation, conversation_id)
        if conversation is None:
            raise NotFound(f"Conversation {conversation_id} not found")
        return conversation

    async def append_message(
        self,
        conversation_id: str,
        role: MessageRole | str,
        content: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Message:
        """
        Append a turn to a conversation.

        Raises:
            NotFound: If the conversation does not exist
            InvalidArgument: If the role is unknown
        """
        try:
            role = MessageRole(role)
        except ValueError:
            raise InvalidArgument(f"Unknown message role: {role}") from None

        async with self._lock(f"conversation:{conversation_id}"):
            async with self.db.session() as session:
                conversation = await session.get(Conversation, conversation_id)
                if conversation is None:
                    raise NotFound(f"Conversation {conversation_id} not found")

                stmt = (
                    select(Message.created_at)
                    .where(Message.conversation_id == conversation_id)
                    .order_by(Message.created_at.desc())
                    .limit(1)
                )
                last_created = (await session.execute(stmt)).scalar_one_or_none()

                created_at = utcnow()
                if last_created is not None and created_at <= last_created:
                    created_at = last_created + timedelta(microseconds=1)

                message = Message(
                    id=generate_id(),
                    conversation_id=conversation_id,
                    role=role.value,
                    content=content,
                    meta=metadata,
                    created_at=created_at,
                )
                session.add(message)
                conversation.updated_at = created_at

        return message

    async def history(
        self,
        conversation_id: str,
        limit: Optional[int] = None,
    ) -> list[Message]:
        """
        Get turns of a conversation, oldest first.

        Args:
            conversation_id: Conversation to read
            limit: Only return the most recent N turns (still oldest first)
        """
        async with self.db.session() as session:
            if await session.get(Conversation, conversation_id) is None:
                raise NotFound(f"Conversation {conversation_id} not found")

            stmt = select(Message).where(Message.conversation_id == conversation_id)
            if limit is None:
                stmt = stmt.order_by(Message.created_at.asc())
                return list((await session.execute(stmt)).scalars().all())

            if limit <= 0:
                return []
            stmt = stmt.order_by(Message.created_at.desc()).limit(limit)
            recent = list((await session.execute(stmt)).scalars().all())

        recent.reverse()
        return recent

    async def set_status(
        self,
        conversation_id: str,
        status: ConversationStatus | str,
    ) -> Conversation:
        """Update conversation status. Setting the current status again is a no-op."""
        try:
            status = ConversationStatus(status)
        except ValueError:
            raise InvalidArgument(f"Unknown conversation status: {status}") from None

        async with self._lock(f"conversation:{conversation_id}"):
            async with self.db.session() as session:
                conversation = await session.get(Conversation, conversation_id)
                if conversation is None:
                    raise NotFound(f"Conversation {conversation_id} not found")

                if conversation.status != status.value:
                    conversation.status = status.value
                    conversation.updated_at = utcnow()

        return conversation
