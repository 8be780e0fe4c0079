"""
Model configuration and switching for the tutor endpoints.
One table of chat models; TUTOR_MODEL picks the active entry.
"""

from typing import Dict, Any, Optional
from enum import Enum


class ModelProvider(str, Enum):
    OPENAI = "openai"
    GROQ = "groq"


# Model configurations
MODEL_CONFIGS: Dict[str, Dict[str, Any]] = {
    "gpt-4o": {
        "provider": ModelProvider.OPENAI,
        "model": "gpt-4o",
        "max_tokens": 4000,
        "temperature": 0.7
    },
    "gpt-4o-mini": {
        "provider": ModelProvider.OPENAI,
        "model": "gpt-4o-mini",
        "max_tokens": 4000,
        "temperature": 0.7
    },
    "llama-4-scout": {
        "provider": ModelProvider.GROQ,
        "model": "meta-llama/llama-4-scout-17b-16e-instruct",
        "max_tokens": 4000,
        "temperature": 0.7
    },
    "llama-3.3-70b": {
        "provider": ModelProvider.GROQ,
        "model": "llama-3.3-70b-versatile",
        "max_tokens": 4000,
        "temperature": 0.7
    }
}

DEFAULT_MODEL = "gpt-4o-mini"


class ModelConfig:
    """Model configuration manager"""

    @staticmethod
    def get_config(model_key: Optional[str] = None) -> Dict[str, Any]:
        """Get configuration for specified model or default"""
        key = model_key or DEFAULT_MODEL

        if key not in MODEL_CONFIGS:
            raise ValueError(f"Unknown model: {key}. Available: {list(MODEL_CONFIGS.keys())}")

        return MODEL_CONFIGS[key]

    @staticmethod
    def get_available_models() -> list:
        """List all available models"""
        return list(MODEL_CONFIGS.keys())
