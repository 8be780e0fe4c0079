"""
Provider-agnostic chat model used by the tutor services.
Routes each call to the OpenAI or Groq client according to ModelConfig.
"""

import logging
from typing import AsyncGenerator, Dict, List, Optional

import clients.groq_client as groq_client
import clients.openai_client as openai_client
from utils.model_config import ModelConfig, ModelProvider

logger = logging.getLogger(__name__)


class LanguageModel:
    """Thin async facade over the configured chat provider"""

    def __init__(self, model_key: Optional[str] = None):
        self.config = ModelConfig.get_config(model_key)
        self.provider = self.config["provider"]
        self.model = self.config["model"]
        self._backend = groq_client if self.provider == ModelProvider.GROQ else openai_client
        logger.info(f"LanguageModel using {self.provider.value}:{self.model}")

    async def complete(self, messages: List[Dict[str, str]]) -> Optional[str]:
        """Return the model's text for the transcript, or None if it produced none."""
        return await self._backend.chat_completion(
            messages,
            model=self.model,
            max_tokens=self.config["max_tokens"],
            temperature=self.config["temperature"],
        )

    async def stream(self, messages: List[Dict[str, str]]) -> AsyncGenerator[str, None]:
        async for delta in self._backend.stream_chat_completion(
            messages,
            model=self.model,
            max_tokens=self.config["max_tokens"],
            temperature=self.config["temperature"],
        ):
            yield delta


class OpenAIEmbedder:
    """Embeds query text with the configured OpenAI embedding model"""

    def __init__(self, model: Optional[str] = None):
        self.model = model

    async def embed(self, text: str) -> List[float]:
        return await openai_client.create_embedding(text, model=self.model)
