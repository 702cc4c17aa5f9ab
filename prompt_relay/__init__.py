"""Prompt Relay - HTTP relay from a small REST API to a local Ollama server"""
__version__ = "0.1.0"

from .config import RelaySettings
from .errors import RelayError, RelayErrorKind
from .client import OllamaClient
from .app import create_app

__all__ = [
    "RelaySettings",
    "RelayError",
    "RelayErrorKind",
    "OllamaClient",
    "create_app",
]
