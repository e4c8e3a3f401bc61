from .base import GenerationClient
from .config import GenerationConfig
from .http import HTTPGenerationClient

__all__ = [
    "GenerationClient",
    "GenerationConfig",
    "HTTPGenerationClient",
]
