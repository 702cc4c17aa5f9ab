"""Pytest configuration and fixtures for relay tests"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from prompt_relay.app import create_app
from prompt_relay.client import OllamaClient
from prompt_relay.config import RelaySettings

OLLAMA_URL = "http://ollama.test:11434"


class StubUpstream:
    """Fake Ollama server for httpx.MockTransport that records every request"""

    def __init__(self, status_code=200, json_body=None, text=None, exc=None):
        self.status_code = status_code
        self.json_body = json_body if json_body is not None else {
            "model": "llama2",
            "created_at": "t",
            "response": "hi there",
        }
        self.text = text
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def sent(self, index: int = -1) -> dict:
        """JSON body of a recorded upstream request"""
        return json.loads(self.requests[index].content)


@pytest.fixture
def settings():
    return RelaySettings(ollama_url=OLLAMA_URL, default_model="llama2")


@pytest.fixture
def upstream():
    return StubUpstream()


@pytest.fixture
def relay(settings, upstream):
    client = OllamaClient(settings, transport=httpx.MockTransport(upstream))
    yield client
    client.close()


@pytest.fixture
def client(settings, relay):
    return TestClient(create_app(settings, relay))
