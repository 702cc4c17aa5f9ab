"""Relay settings resolved from the environment"""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_MODEL = "llama2"
DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"

# Upstream generation calls block for at most this long
UPSTREAM_TIMEOUT_S = 60.0


def _read_str(name: str, default: str) -> str:
    # Empty counts as unset
    return os.getenv(name) or default


def _read_port(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if not 0 <= port <= 65535:
        raise ValueError(f"{name} out of range: {port}")
    return port


@dataclass(frozen=True)
class RelaySettings:
    ollama_url: str = DEFAULT_OLLAMA_URL
    default_model: str = DEFAULT_MODEL
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    log_level: str = "INFO"
    timeout_s: float = UPSTREAM_TIMEOUT_S

    def __post_init__(self):
        object.__setattr__(self, "ollama_url", self.ollama_url.rstrip("/"))

    @classmethod
    def from_env(cls) -> RelaySettings:
        return cls(
            ollama_url=_read_str("OLLAMA_URL", DEFAULT_OLLAMA_URL),
            default_model=_read_str("DEFAULT_MODEL", DEFAULT_MODEL),
            port=_read_port("PORT", DEFAULT_PORT),
            host=_read_str("HOST", DEFAULT_HOST),
            log_level=_read_str("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def as_dict(self) -> dict:
        return {
            "ollama_url": self.ollama_url,
            "default_model": self.default_model,
            "port": self.port,
            "host": self.host,
            "log_level": self.log_level,
            "timeout_s": self.timeout_s,
        }
