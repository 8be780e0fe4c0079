"""
Stateless retrieval-augmented onboarding chat.

Each request carries the whole transcript. The latest user message is embedded,
its nearest neighbour is appended to it as material, and the transcript goes to
the model behind the tutor system prompt. The reply is streamed back as text.
"""

import logging
from typing import AsyncGenerator, Dict, List, Optional

from models.tutor_models import ChatMessage
from prompts.tutor_prompts import (
    CHAT_MATERIAL_HEADER,
    CHAT_NO_MATCHES,
    CHAT_SYSTEM_PROMPT,
    format_material,
)
from utils import config
from utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

CHAT_TOP_K = 1


def dedupe_lines(text: str) -> str:
    """Drop repeated lines, keeping the first occurrence of each in order."""
    return "\n".join(dict.fromkeys(text.split("\n")))


class ChatService:

    def __init__(self, retrieval, llm, dedupe: Optional[bool] = None):
        self.retrieval = retrieval
        self.llm = llm
        self.dedupe = config.CHAT_DEDUPE_LINES if dedupe is None else dedupe

    async def prepare(self, messages: Optional[List[ChatMessage]]) -> List[Dict[str, str]]:
        """Validate the transcript and build the model messages, retrieval included."""
        if not messages:
            raise ValidationError("Invalid input data", error_code="INVALID_REQUEST")

        last = messages[-1]
        if not last.content or not last.content.strip():
            raise ValidationError("No content in the last message")

        snippets = await self.retrieval.snippets(
            last.content, top_k=CHAT_TOP_K, missing="No content provided"
        )
        material = format_material(CHAT_MATERIAL_HEADER, snippets, empty=CHAT_NO_MATCHES)

        transcript = [{"role": "system", "content": CHAT_SYSTEM_PROMPT}]
        for msg in messages[:-1]:
            transcript.append({
                "role": "assistant" if msg.role == "assistant" else "user",
                "content": msg.content or "",
            })
        transcript.append({"role": "user", "content": last.content + material})
        return transcript

    async def stream(self, transcript: List[Dict[str, str]]) -> AsyncGenerator[str, None]:
        if not self.dedupe:
            async for delta in self.llm.stream(transcript):
                yield delta
            return

        parts = []
        async for delta in self.llm.stream(transcript):
            parts.append(delta)
        text = "".join(parts)
        if text:
            yield dedupe_lines(text)
