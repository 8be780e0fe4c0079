"""
OpenAI access for the tutor: query embeddings and chat completions.
The SDK client is created on first use so importing this module never needs a key.
"""

import logging
from functools import lru_cache
from typing import AsyncGenerator, Dict, List, Optional

from openai import AsyncOpenAI

from utils import config
from utils.exceptions import UpstreamError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_client() -> AsyncOpenAI:
    if not config.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not found in environment variables")
    return AsyncOpenAI(api_key=config.OPENAI_API_KEY, timeout=config.LLM_TIMEOUT_SECONDS)


async def create_embedding(text: str, model: Optional[str] = None) -> List[float]:
    """
    Embed a single text.
    Args:
        text: Text to embed.
        model: Embedding model name (default: EMBEDDING_MODEL setting).
    Returns:
        The embedding vector.
    Raises:
        UpstreamError if the API call fails or returns no vector.
    """
    model = model or config.EMBEDDING_MODEL
    try:
        response = await get_client().embeddings.create(model=model, input=text)
    except Exception as e:
        logger.error(f"OpenAI embedding failed: {e}")
        raise UpstreamError("openai", "Embedding request failed") from e

    vector = response.data[0].embedding if response.data else None
    if not isinstance(vector, list) or not vector:
        logger.error(f"OpenAI embedding returned an invalid vector for model {model}")
        raise UpstreamError("openai", "Embedding service returned an invalid vector")
    return vector


async def chat_completion(
    messages: List[Dict[str, str]],
    model: str,
    max_tokens: int,
    temperature: float,
) -> Optional[str]:
    """
    Run a chat completion and return the text of the first choice.
    Returns None when the response carries no text content.
    """
    try:
        response = await get_client().chat.completions.create(
            model=model,
            messages=messages,
            max_completion_tokens=max_tokens,
            temperature=temperature,
        )
    except Exception as e:
        logger.error(f"OpenAI {model} failed: {e}")
        raise UpstreamError("openai", "Language model request failed", context={"model": model}) from e

    if not response.choices:
        return None
    return response.choices[0].message.content


async def stream_chat_completion(
    messages: List[Dict[str, str]],
    model: str,
    max_tokens: int,
    temperature: float,
) -> AsyncGenerator[str, None]:
    """Yield text deltas as the model produces them."""
    try:
        stream = await get_client().chat.completions.create(
            model=model,
            messages=messages,
            max_completion_tokens=max_tokens,
            temperature=temperature,
            stream=True,
        )
        async for chunk in stream:
            if chunk.choices and chunk.choices[0].delta.content:
                yield chunk.choices[0].delta.content
    except Exception as e:
        logger.error(f"OpenAI {model} stream failed: {e}")
        raise UpstreamError("openai", "Language model stream failed", context={"model": model}) from e
