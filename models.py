"""
Pydantic data models for the quote streaming service.

A QuoteEvent is the only payload that leaves the server on the event
stream; it is built at emission time and never stored.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def iso_timestamp(now: Optional[datetime] = None) -> str:
    """UTC timestamp like 2024-05-01T12:00:00.123Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class SessionState(str, Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class QuoteEvent(BaseModel):
    """
    One quote pushed to a client.
    Serialized as a single `data:` record of an event stream.
    """
    quote: str
    timestamp: str = Field(default_factory=iso_timestamp)

    @classmethod
    def create(cls, quote: str) -> "QuoteEvent":
        return cls(quote=quote, timestamp=iso_timestamp())

    def to_sse(self) -> str:
        """Format as an event-stream record terminated by a blank line."""
        return f"data: {self.model_dump_json()}\n\n"

    @property
    def emitted_at(self) -> datetime:
        return datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))
