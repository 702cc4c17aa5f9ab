import json
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from .config import RelaySettings
from .errors import RelayError, RelayErrorKind
from .schemas import UpstreamRequest, UpstreamResponse

logger = logging.getLogger(__name__)

_decoder = json.JSONDecoder()


class OllamaClient:
    """
    Blocking client for Ollama's /api/generate.

    One instance is shared by every request handler; it holds nothing
    mutable besides the underlying httpx.Client, which is thread-safe.
    Config comes from RelaySettings:
      ollama_url (default http://localhost:11434)
      default_model (default llama2)
      timeout_s (fixed 60)
    """

    def __init__(
        self,
        settings: Optional[RelaySettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.settings = settings or RelaySettings()
        self.base_url = self.settings.ollama_url
        self.default_model = self.settings.default_model
        self.timeout_s = self.settings.timeout_s
        self._http = httpx.Client(timeout=self.timeout_s, transport=transport)

    def resolve_model(self, model: str) -> str:
        return model or self.default_model

    def complete(self, prompt: str, model: str = "") -> str:
        """
        Send a prompt upstream and return the generated text unaltered.

        Args:
            prompt: Prompt text, passed through as is
            model: Model name; empty selects the default model

        Returns:
            The `response` field of the upstream body

        Raises:
            RelayError: on any failure; never retried
        """
        effective_model = self.resolve_model(model)
        url = f"{self.base_url}/api/generate"

        try:
            body = UpstreamRequest(model=effective_model, prompt=prompt).model_dump_json()
        except (ValidationError, TypeError, ValueError) as e:
            raise RelayError(RelayErrorKind.REQUEST_BUILD, "failed to marshal request", cause=e) from e

        logger.debug(f"POST {url} model={effective_model} prompt_chars={len(prompt)}")
        try:
            r = self._http.post(url, content=body, headers={"Content-Type": "application/json"})
        except httpx.RequestError as e:
            logger.warning(f"Ollama unreachable at {self.base_url}: {e!r}")
            raise RelayError(RelayErrorKind.UPSTREAM_UNREACHABLE, "ollama request failed", cause=e) from e

        if r.status_code != httpx.codes.OK:
            logger.warning(f"Ollama returned status {r.status_code} for model {effective_model}")
            raise RelayError(
                RelayErrorKind.UPSTREAM_STATUS,
                f"ollama returned status {r.status_code}: {r.text}",
                status_code=r.status_code,
                body=r.text,
            )

        try:
            data = self._decode(r.text)
        except ValueError as e:
            raise RelayError(RelayErrorKind.RESPONSE_DECODE, "failed to decode ollama response", cause=e) from e
        return data.response

    @staticmethod
    def _decode(text: str) -> UpstreamResponse:
        # A streamed body is a series of JSON objects; only the first one is read
        obj, _ = _decoder.raw_decode(text.lstrip())
        if obj is None:
            obj = {}
        return UpstreamResponse.model_validate(obj)

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
