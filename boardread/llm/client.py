"""LangChain ChatAnthropic vision client.

Any awaitable with the signature of ``get_vision_response`` can stand in for
it (tests pass fakes). Every failure surfaces as ``TransportError``.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Awaitable, Callable

from boardread.config import settings
from boardread.errors import TransportError

logger = logging.getLogger(__name__)

RemoteAnalyzer = Callable[[bytes, str, str], Awaitable[str]]

_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def detect_media_type(image: bytes) -> str:
    for magic, media_type in _SIGNATURES:
        if image.startswith(magic):
            return media_type
    if image[:4] == b"RIFF" and image[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


def _content_text(content: object) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts)
    return str(content or "")


async def get_vision_response(image: bytes, system_prompt: str, user_prompt: str) -> str:
    """Send the creative plus prompts to the vision model; return its raw text."""
    if not settings.anthropic_api_key:
        raise TransportError("LLM not configured, set ANTHROPIC_API_KEY in .env")

    from langchain_anthropic import ChatAnthropic
    from langchain_core.messages import HumanMessage, SystemMessage

    llm = ChatAnthropic(
        model=settings.model_vision,
        api_key=settings.anthropic_api_key,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
    )

    encoded = base64.b64encode(image).decode("ascii")
    messages = [
        SystemMessage(content=system_prompt),
        HumanMessage(
            content=[
                {"type": "text", "text": user_prompt},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{detect_media_type(image)};base64,{encoded}"},
                },
            ]
        ),
    ]

    try:
        response = await asyncio.wait_for(llm.ainvoke(messages), timeout=settings.analyzer_timeout_s)
    except asyncio.TimeoutError as exc:
        raise TransportError(f"vision model timed out after {settings.analyzer_timeout_s}s") from exc
    except Exception as exc:
        logger.warning("Vision model call failed: %s", exc)
        raise TransportError(f"vision model call failed: {exc}") from exc

    text = _content_text(response.content).strip()
    if not text:
        raise TransportError("vision model returned an empty response")
    return text
