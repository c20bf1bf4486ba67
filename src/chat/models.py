"""Pydantic models for chat messages."""

from typing import Literal

from pydantic import BaseModel, Field

SPEAKER_LABELS = {"user": "You", "assistant": "AI"}


class ChatMessage(BaseModel):
    """A single message in the chat log."""

    role: Literal["user", "assistant"] = Field(..., description="Who sent the message")
    text: str = Field(..., description="Message body")

    def display(self) -> str:
        """Format the message as a log line, e.g. "You: Hello"."""
        return f"{SPEAKER_LABELS[self.role]}: {self.text}"
