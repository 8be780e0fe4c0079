from .exceptions import (
    TutorError,
    ValidationError,
    InvalidArgumentError,
    GenerationError,
    QuizDecodeError,
    UpstreamError
)

from .model_config import (
    ModelConfig,
    ModelProvider,
    MODEL_CONFIGS,
    DEFAULT_MODEL
)

__all__ = [
    'TutorError',
    'ValidationError',
    'InvalidArgumentError',
    'GenerationError',
    'QuizDecodeError',
    'UpstreamError',
    'ModelConfig',
    'ModelProvider',
    'MODEL_CONFIGS',
    'DEFAULT_MODEL'
]
