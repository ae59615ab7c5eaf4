"""
Per-connection state owned by the gateway.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ConnectionPhase(str, Enum):
    CONNECTED = "connected"
    JOINED = "joined"
    CLOSED = "closed"


@dataclass
class ConnectionState:
    """
    State of one live connection.

    Attributes:
        connection_id: Gateway-local identifier for logging
        phase: Where the connection is in the join/chat lifecycle
        session_id: Client session bound by the last join
        conversation_id: Conversation resolved for that session
    """

    connection_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    phase: ConnectionPhase = ConnectionPhase.CONNECTED
    session_id: Optional[str] = None
    conversation_id: Optional[str] = None

    @property
    def is_joined(self) -> bool:
        return self.phase == ConnectionPhase.JOINED and self.conversation_id is not None

    @property
    def is_closed(self) -> bool:
        return self.phase == ConnectionPhase.CLOSED

    def bind(self, session_id: str, conversation_id: str) -> None:
        self.session_id = session_id
        self.conversation_id = conversation_id
        self.phase = ConnectionPhase.JOINED

    def close(self) -> None:
        self.phase = ConnectionPhase.CLOSED
        self.session_id = None
        self.conversation_id = None
