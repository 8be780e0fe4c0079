import logging
from functools import lru_cache
from typing import AsyncGenerator, Dict, List, Optional

from groq import AsyncGroq

from utils import config
from utils.exceptions import UpstreamError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_client() -> AsyncGroq:
    if not config.GROQ_API_KEY:
        logger.warning("GROQ_API_KEY not found in environment variables")
    return AsyncGroq(api_key=config.GROQ_API_KEY, timeout=config.LLM_TIMEOUT_SECONDS)


async def chat_completion(
    messages: List[Dict[str, str]],
    model: str,
    max_tokens: int,
    temperature: float,
) -> Optional[str]:
    """
    Run a Groq chat completion and return the first choice's text, or None if empty.
    Raises:
        UpstreamError if the API call fails.
    """
    try:
        response = await get_client().chat.completions.create(
            model=model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
            stream=False,
        )
    except Exception as e:
        logger.error(f"Groq {model} failed: {e}")
        raise UpstreamError("groq", "Language model request failed", context={"model": model}) from e

    if not response.choices:
        return None
    return response.choices[0].message.content


async def stream_chat_completion(
    messages: List[Dict[str, str]],
    model: str,
    max_tokens: int,
    temperature: float,
) -> AsyncGenerator[str, None]:
    try:
        stream = await get_client().chat.completions.create(
            model=model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
            stream=True,
        )
        async for chunk in stream:
            if chunk.choices and chunk.choices[0].delta.content:
                yield chunk.choices[0].delta.content
    except Exception as e:
        logger.error(f"Groq {model} stream failed: {e}")
        raise UpstreamError("groq", "Language model stream failed", context={"model": model}) from e
