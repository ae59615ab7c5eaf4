"""
Conversation persistence.
"""

from askcart.core.conversations.store import ConversationStore

__all__ = ["ConversationStore"]
