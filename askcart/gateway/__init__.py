"""
Real-time chat gateway.
"""

from askcart.gateway.gateway import FrameSender, SessionGateway
from askcart.gateway.protocol import parse_client_frame
from askcart.gateway.state import ConnectionPhase, ConnectionState

__all__ = [
    "ConnectionPhase",
    "ConnectionState",
    "FrameSender",
    "SessionGateway",
    "parse_client_frame",
]
