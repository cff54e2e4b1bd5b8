"""Tests for the vision client (LangChain model replaced by a fake)."""

from __future__ import annotations

import asyncio
import base64

import pytest

from boardread.config import settings
from boardread.errors import TransportError
from boardread.llm.client import detect_media_type, get_vision_response

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class _Reply:
    def __init__(self, content):
        self.content = content


class FakeChat:
    """Stands in for ChatAnthropic; records constructor args and messages."""

    instances: list["FakeChat"] = []
    reply: object = "{}"

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.messages = None
        FakeChat.instances.append(self)

    async def ainvoke(self, messages):
        self.messages = messages
        if isinstance(FakeChat.reply, Exception):
            raise FakeChat.reply
        return _Reply(FakeChat.reply)


@pytest.fixture
def fake_chat(monkeypatch):
    FakeChat.instances = []
    FakeChat.reply = '{"assessment": {"overall_score": 5}}'
    monkeypatch.setattr("langchain_anthropic.ChatAnthropic", FakeChat)
    monkeypatch.setattr(settings, "anthropic_api_key", "test-key")
    return FakeChat


def _call(image=PNG):
    return asyncio.run(get_vision_response(image, "system prompt", "user prompt"))


class TestMediaType:
    def test_signatures(self):
        assert detect_media_type(PNG) == "image/png"
        assert detect_media_type(b"\xff\xd8\xff\xe0rest") == "image/jpeg"
        assert detect_media_type(b"GIF89a....") == "image/gif"
        assert detect_media_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"

    def test_unknown_defaults_to_jpeg(self):
        assert detect_media_type(b"????") == "image/jpeg"


def test_not_configured(monkeypatch):
    monkeypatch.setattr(settings, "anthropic_api_key", "")
    with pytest.raises(TransportError, match="not configured"):
        _call()


def test_sends_image_and_prompts(fake_chat):
    text = _call()
    assert text == '{"assessment": {"overall_score": 5}}'

    chat = fake_chat.instances[0]
    assert chat.kwargs["model"] == settings.model_vision
    assert chat.kwargs["max_tokens"] == settings.max_tokens
    system, human = chat.messages
    assert system.content == "system prompt"
    text_block, image_block = human.content
    assert text_block == {"type": "text", "text": "user prompt"}
    expected = "data:image/png;base64," + base64.b64encode(PNG).decode("ascii")
    assert image_block["image_url"]["url"] == expected


def test_content_blocks_are_joined(fake_chat):
    fake_chat.reply = [{"type": "text", "text": '{"a": '}, {"type": "text", "text": "1}"}]
    assert _call() == '{"a": 1}'


def test_empty_response(fake_chat):
    fake_chat.reply = "   "
    with pytest.raises(TransportError, match="empty"):
        _call()


def test_provider_error_wrapped(fake_chat):
    fake_chat.reply = ConnectionError("503 Service Unavailable")
    with pytest.raises(TransportError, match="503"):
        _call()
