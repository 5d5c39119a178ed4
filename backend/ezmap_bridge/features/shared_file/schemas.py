"""
Shared file schemas.

Pydantic models for the HTTP channel boundary. Event payloads are
tagged by `kind` and converted into the dataclass payloads the
pipeline works with.
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from .models import (
    EventPayload,
    Locator,
    SendPayload,
    ViewPayload,
    OpenUrlPayload,
    ContinueActivityPayload,
    OtherPayload,
)


def _locator(uri: Optional[str]) -> Optional[Locator]:
    return Locator.parse(uri) if uri else None


class SendEvent(BaseModel):
    """Share sheet action."""

    kind: Literal["send"]
    mime_type: Optional[str] = None
    stream: Optional[str] = Field(default=None, description="Stream extra URI")

    def to_payload(self) -> EventPayload:
        return SendPayload(mime_type=self.mime_type, stream=_locator(self.stream))


class ViewEvent(BaseModel):
    """Open action (double-tap, file manager)."""

    kind: Literal["view"]
    data: Optional[str] = Field(default=None, description="Primary data URI")

    def to_payload(self) -> EventPayload:
        return ViewPayload(data=_locator(self.data))


class OpenUrlEvent(BaseModel):
    """App opened via URL."""

    kind: Literal["open_url"]
    url: str

    def to_payload(self) -> EventPayload:
        return OpenUrlPayload(url=Locator.parse(self.url))


class ContinueActivityEvent(BaseModel):
    """App continued from a user activity."""

    kind: Literal["continue_activity"]
    activity_type: str
    webpage_url: Optional[str] = None

    def to_payload(self) -> EventPayload:
        return ContinueActivityPayload(
            activity_type=self.activity_type,
            webpage_url=_locator(self.webpage_url),
        )


class OtherEvent(BaseModel):
    """Anything else; ignored by the pipeline."""

    kind: Literal["other"]
    action: Optional[str] = None

    def to_payload(self) -> EventPayload:
        return OtherPayload(action=self.action)


# Tagged by `kind`; routes pass discriminator="kind" to Body()
IncomingEvent = Union[SendEvent, ViewEvent, OpenUrlEvent, ContinueActivityEvent, OtherEvent]


class EventResponse(BaseModel):
    """Result of reporting an event."""

    path: Optional[str] = None  # None when the event was not relevant


class MethodCall(BaseModel):
    """Call on a method channel."""

    method: str
    arguments: Optional[Any] = None


class MethodResult(BaseModel):
    """Successful method call result."""

    result: Optional[Any] = None
