"""Stub chat panel with a scripted assistant."""

from .models import ChatMessage
from .stub import DEFAULT_REPLY, ChatStub

__all__ = ["ChatMessage", "ChatStub", "DEFAULT_REPLY"]
