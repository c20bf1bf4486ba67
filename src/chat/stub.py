"""Chat panel that answers every message with a scripted reply."""

import asyncio
from typing import List

from ..logging_config import get_logger
from .models import ChatMessage

logger = get_logger(__name__)

DEFAULT_REPLY = "This is a placeholder response."


class ChatStub:
    """Append-only chat log with one delayed scripted reply per message."""

    def __init__(self, reply_delay: float = 1.0, reply_text: str = DEFAULT_REPLY):
        """Initialize the chat stub.

        Args:
            reply_delay: Seconds to wait before the reply is appended
            reply_text: Text of the scripted reply
        """
        if reply_delay < 0:
            raise ValueError(f"Reply delay must be non-negative, got {reply_delay}")
        self.reply_delay = reply_delay
        self.reply_text = reply_text
        self._messages: List[ChatMessage] = []

    @property
    def messages(self) -> List[ChatMessage]:
        """Get a copy of the message log."""
        return list(self._messages)

    def lines(self) -> List[str]:
        """Get the log as display lines, oldest first."""
        return [message.display() for message in self._messages]

    def post(self, text: str) -> bool:
        """Append a user message without waiting for the reply.

        Returns:
            False if the text was blank and nothing was appended
        """
        text = text.strip()
        if not text:
            return False
        self._messages.append(ChatMessage(role="user", text=text))
        logger.debug(f"User message appended ({len(text)} chars)")
        return True

    async def reply(self) -> None:
        """Append the scripted reply after the delay."""
        await asyncio.sleep(self.reply_delay)
        self._messages.append(ChatMessage(role="assistant", text=self.reply_text))

    async def send(self, text: str) -> bool:
        """Append a user message, then the scripted reply after the delay.

        Args:
            text: Message typed by the user

        Returns:
            False if the text was blank and nothing was sent
        """
        if not self.post(text):
            return False
        await self.reply()
        return True
