"""FastAPI application for the prompt relay"""
import time
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .client import OllamaClient
from .config import RelaySettings
from .durations import format_duration
from .errors import RelayError
from .schemas import CompletionRequest, CompletionResponse, ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Content-Length, Accept-Encoding, Authorization",
}


def _validation_message(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one line, e.g. 'prompt: Field required'"""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts) or "invalid request"


async def read_completion_request(request: Request) -> CompletionRequest:
    """Parse the body as JSON whatever its Content-Type says"""
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="request body is not valid UTF-8") from None
    try:
        return CompletionRequest.model_validate_json(text)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e


def create_app(
    settings: Optional[RelaySettings] = None,
    client: Optional[OllamaClient] = None,
) -> FastAPI:
    """
    Build the relay application.

    Args:
        settings: Resolved settings (read from the environment if omitted)
        client: Relay client to use; one is created from settings if omitted
            and closed again on shutdown

    Returns:
        FastAPI app with /api/complete and /health
    """
    settings = settings or RelaySettings.from_env()
    owns_client = client is None
    relay = client or OllamaClient(settings)

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        logger.info(f"Using Ollama at {relay.base_url} with default model {relay.default_model}")
        yield
        if owns_client:
            relay.close()

    app = FastAPI(
        title="Prompt Relay",
        version=__version__,
        description="Relays prompts to a local Ollama server",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.relay = relay

    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_204_NO_CONTENT, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    # Registered last so it wraps everything, including preflights
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = time.perf_counter_ns()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "internal server error"},
                headers=CORS_HEADERS,
            )
        elapsed = format_duration(time.perf_counter_ns() - start)
        logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed}")
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _validation_message(exc)},
        )

    @app.exception_handler(RelayError)
    async def relay_error(request: Request, exc: RelayError):
        logger.error(f"Completion failed ({exc.kind.value}): {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )

    @app.post(
        "/api/complete",
        response_model=CompletionResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        openapi_extra={
            "requestBody": {
                "required": True,
                "content": {"application/json": {"schema": CompletionRequest.model_json_schema()}},
            }
        },
    )
    def complete(request: CompletionRequest = Depends(read_completion_request)):
        """
        Generate text for a prompt

        The `model` field of the answer echoes the requested model, so it is
        empty when the default model was used.
        """
        start = time.perf_counter_ns()
        text = relay.complete(request.prompt, request.model)
        return CompletionResponse(
            response=text,
            model=request.model,
            time=format_duration(time.perf_counter_ns() - start),
        )

    @app.get("/health", response_model=HealthResponse)
    def health():
        """Health check endpoint; does not contact Ollama"""
        return HealthResponse(status="healthy")

    return app
