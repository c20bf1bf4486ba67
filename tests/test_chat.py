"""Tests for the chat stub."""

import asyncio

import pytest
from pydantic import ValidationError

from src.chat import DEFAULT_REPLY, ChatMessage, ChatStub


class TestChatMessage:
    """Test ChatMessage formatting and validation."""

    def test_display(self):
        """Test speaker prefixes."""
        assert ChatMessage(role="user", text="Hello").display() == "You: Hello"
        assert ChatMessage(role="assistant", text="Hi").display() == "AI: Hi"

    def test_invalid_role(self):
        """Test unknown roles are rejected."""
        with pytest.raises(ValidationError):
            ChatMessage(role="system", text="Hello")


class TestChatStub:
    """Test ChatStub ordering and delay."""

    def test_send_scenario(self):
        """Test the user line appears at once and the reply after the delay."""
        chat = ChatStub(reply_delay=0.05)

        async def scenario():
            task = asyncio.create_task(chat.send("Hello"))
            await asyncio.sleep(0)
            immediate = chat.lines()
            await task
            return immediate

        immediate = asyncio.run(scenario())
        assert immediate == ["You: Hello"]
        assert chat.lines() == ["You: Hello", "AI: This is a placeholder response."]

    def test_post_appends_without_reply(self):
        """Test post adds only the user line and reply adds the scripted answer."""
        chat = ChatStub(reply_delay=0, reply_text="ok")

        assert chat.post(" Hello ") is True
        assert chat.lines() == ["You: Hello"]
        assert chat.post("  ") is False

        asyncio.run(chat.reply())
        assert chat.lines() == ["You: Hello", "AI: ok"]

    def test_default_reply(self):
        """Test the scripted reply text."""
        assert DEFAULT_REPLY == "This is a placeholder response."

    def test_blank_message_ignored(self):
        """Test whitespace-only input is not sent."""
        chat = ChatStub(reply_delay=0)
        assert asyncio.run(chat.send("   ")) is False
        assert chat.lines() == []

    def test_log_is_append_only(self):
        """Test messages keep their order across sends."""
        chat = ChatStub(reply_delay=0, reply_text="ok")
        asyncio.run(chat.send("one"))
        asyncio.run(chat.send(" two "))

        assert chat.lines() == ["You: one", "AI: ok", "You: two", "AI: ok"]
        chat.messages.clear()
        assert len(chat.messages) == 4

    def test_negative_delay(self):
        """Test a negative delay is rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            ChatStub(reply_delay=-1)


if __name__ == "__main__":
    pytest.main([__file__])
