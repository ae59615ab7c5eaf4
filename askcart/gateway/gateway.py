"""
Session gateway - runs the join/chat protocol for each live connection.
"""

import logging
from typing import Any, Protocol

from fastapi import WebSocketDisconnect

from askcart.core.analytics import MESSAGE_SENT, PRODUCT_RECOMMENDED, AnalyticsSink
from askcart.core.catalog import CatalogAccessor
from askcart.core.conversations import ConversationStore
from askcart.core.errors import AskCartError, ProtocolError
from askcart.core.reasoning import HistoryEntry, ReasoningClient
from askcart.db.models import MessageRole
from askcart.gateway.protocol import (
    JoinFrame,
    UserMessageFrame,
    error_frame,
    history_frame,
    message_frame,
    parse_client_frame,
)
from askcart.gateway.state import ConnectionState

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Failed to process message"


class FrameSender(Protocol):
    """Anything that can push a JSON frame to the client (e.g. a WebSocket)."""

    async def send_json(self, data: Any) -> None:
        ...


class SessionGateway:
    """
    Sequences the per-turn protocol for connections.

    The caller feeds frames of one connection one at a time, so a
    connection's turns are processed in arrival order; separate connections
    run concurrently. A failing frame produces one error frame and leaves
    the connection usable.

    Usage:
        state = gateway.open_connection()
        await gateway.handle_raw(state, raw_text, websocket)
        gateway.close_connection(state)
    """

    def __init__(
        self,
        store: ConversationStore,
        catalog: CatalogAccessor,
        reasoning: ReasoningClient,
        analytics: AnalyticsSink,
        history_limit: int = 20,
    ):
        self.store = store
        self.catalog = catalog
        self.reasoning = reasoning
        self.analytics = analytics
        self.history_limit = history_limit
        self._connections: dict[str, ConnectionState] = {}

    @property
    def active_connections(self) -> int:
        return len(self._connections)

    def open_connection(self) -> ConnectionState:
        state = ConnectionState()
        self._connections[state.connection_id] = state
        logger.info(f"Client connected ({state.connection_id}), active={self.active_connections}")
        return state

    def close_connection(self, state: ConnectionState) -> None:
        """Release connection state. Persisted conversations are left as they are."""
        self._connections.pop(state.connection_id, None)
        state.close()
        logger.info(f"Client disconnected ({state.connection_id}), active={self.active_connections}")

    async def handle_raw(
        self,
        state: ConnectionState,
        raw: str | bytes | dict,
        sender: FrameSender,
    ) -> None:
        """Parse and process one inbound frame, answering errors with an error frame."""
        if state.is_closed:
            return

        try:
            frame = parse_client_frame(raw)
            await self.handle_frame(state, frame, sender)
        except WebSocketDisconnect:
            # Client went away mid-turn; the receive loop handles the close
            raise
        except AskCartError as e:
            logger.warning(f"[{state.connection_id}] {type(e).__name__}: {e}")
            await sender.send_json(error_frame(str(e)))
        except Exception as e:
            logger.error(f"[{state.connection_id}] Error processing frame: {e}", exc_info=True)
            await sender.send_json(error_frame(GENERIC_ERROR))

    async def handle_frame(
        self,
        state: ConnectionState,
        frame: JoinFrame | UserMessageFrame,
        sender: FrameSender,
    ) -> None:
        if isinstance(frame, JoinFrame):
            await self.join(state, frame.session_id, sender)
        else:
            await self.process_turn(state, frame.content, sender)

    async def join(self, state: ConnectionState, session_id: str, sender: FrameSender) -> None:
        """Bind the connection to the session's conversation and replay its history."""
        conversation = await self.store.resolve_or_create(session_id)
        state.bind(session_id, conversation.id)

        messages = await self.store.history(conversation.id)
        logger.info(
            f"[{state.connection_id}] Joined session {session_id} "
            f"(conversation {conversation.id}, {len(messages)} messages)"
        )
        await sender.send_json(history_frame(messages))

    async def process_turn(self, state: ConnectionState, content: str, sender: FrameSender) -> None:
        """
        Handle one user message: persist, ask the model, persist the reply, respond.

        If the model fails the user turn stays saved and no assistant turn is
        written; the ReasoningUnavailable propagates to handle_raw.
        """
        if not state.is_joined:
            raise ProtocolError("No active conversation")

        conversation_id = state.conversation_id
        user_message = await self.store.append_message(conversation_id, MessageRole.USER, content)

        # Prior turns only, capped to the most recent history_limit
        history: list[HistoryEntry] = []
        if self.history_limit > 0:
            recent = await self.store.history(conversation_id, limit=self.history_limit + 1)
            prior = [m for m in recent if m.id != user_message.id]
            history = [
                HistoryEntry(role=m.role, content=m.content)
                for m in prior[-self.history_limit:]
            ]

        products = await self.catalog.list()

        reply = await self.reasoning.generate_reply(content, history, products)

        assistant_message = await self.store.append_message(
            conversation_id,
            MessageRole.ASSISTANT,
            reply.content,
            metadata={
                "productRecommendations": [p.id for p in reply.recommendations],
                "intent": reply.intent.value,
            },
        )

        self.analytics.emit(MESSAGE_SENT, conversation_id, {"intent": reply.intent.value})
        if reply.recommendations:
            self.analytics.emit(
                PRODUCT_RECOMMENDED,
                conversation_id,
                {
                    "productIds": [p.id for p in reply.recommendations],
                    "count": len(reply.recommendations),
                },
            )

        await sender.send_json(message_frame(assistant_message))

        logger.info(
            f"[{state.connection_id}] Session {state.session_id}: "
            f"{content[:50]!r} -> intent={reply.intent.value}, "
            f"recommended={len(reply.recommendations)}"
        )
