"""Pydantic schemas for the public API and the upstream Ollama API"""
from pydantic import BaseModel, Field, field_validator


# Upstream (Ollama /api/generate)
class UpstreamRequest(BaseModel):
    """Body sent to the inference server"""
    model: str
    prompt: str


class UpstreamResponse(BaseModel):
    """Body returned by the inference server; only `response` is used"""
    model: str = ""
    created_at: str = ""
    response: str = ""

    @field_validator("model", "created_at", "response", mode="before")
    @classmethod
    def _null_is_empty(cls, value):
        return "" if value is None else value


# Public API
class CompletionRequest(BaseModel):
    """Request for a prompt completion"""
    prompt: str = Field(..., min_length=1)
    model: str = ""

    @field_validator("model", mode="before")
    @classmethod
    def _null_model_is_empty(cls, value):
        return "" if value is None else value


class CompletionResponse(BaseModel):
    """Generated text plus the requested model and elapsed time"""
    response: str
    model: str
    time: str


class HealthResponse(BaseModel):
    status: str = "healthy"


class ErrorResponse(BaseModel):
    error: str
