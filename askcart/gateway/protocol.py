"""
Chat wire protocol: client frame parsing and server frame builders.

Client -> server:
    {"type": "join", "sessionId": "..."}
    {"type": "message", "content": "...", "sessionId": "..."}

Server -> client:
    {"type": "history", "messages": [...]}
    {"type": "message", "message": {...}}
    {"type": "error", "content": "..."}
"""

import json
from typing import Annotated, Any, Iterable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from askcart.core.errors import ProtocolError
from askcart.db.models import Message


class JoinFrame(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: Literal["join"]
    session_id: str = Field(alias="sessionId", min_length=1)


class UserMessageFrame(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: Literal["message"]
    content: str
    session_id: Optional[str] = Field(default=None, alias="sessionId")

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content must not be empty")
        return value


ClientFrame = Annotated[Union[JoinFrame, UserMessageFrame], Field(discriminator="type")]

_client_frame = TypeAdapter(ClientFrame)

FRAME_TYPES = ("join", "message")


def parse_client_frame(raw: str | bytes | dict[str, Any]) -> JoinFrame | UserMessageFrame:
    """
    Parse and validate one client frame.

    Raises:
        ProtocolError: On invalid JSON, unknown type or missing fields
    """
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            data = json.loads(raw)
        except (ValueError, UnicodeDecodeError):
            raise ProtocolError("Invalid message format: expected JSON") from None
    else:
        data = raw

    if not isinstance(data, dict):
        raise ProtocolError("Invalid message format: expected a JSON object")

    frame_type = data.get("type")
    if frame_type not in FRAME_TYPES:
        raise ProtocolError(f"Unknown message type: {frame_type!r}")

    try:
        return _client_frame.validate_python(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"][1:]) or "frame" for err in e.errors())
        raise ProtocolError(f"Invalid '{frame_type}' message: check {fields}") from None


def history_frame(messages: Iterable[Message]) -> dict[str, Any]:
    return {"type": "history", "messages": [m.to_dict() for m in messages]}


def message_frame(message: Message) -> dict[str, Any]:
    return {"type": "message", "message": message.to_dict()}


def error_frame(content: str) -> dict[str, Any]:
    return {"type": "error", "content": content}
