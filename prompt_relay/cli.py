"""Command line entry point for the prompt relay"""
import logging
import sys

import click
import uvicorn
from dotenv import load_dotenv

from . import __version__
from .app import create_app
from .client import OllamaClient
from .config import RelaySettings
from .errors import RelayError

logger = logging.getLogger("prompt_relay")


def _load_settings() -> RelaySettings:
    load_dotenv()
    try:
        return RelaySettings.from_env()
    except ValueError as e:
        click.echo(f"✗ Invalid configuration: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def cli():
    """Prompt Relay - forward prompts to a local Ollama server"""
    pass


@cli.command()
def serve():
    """Run the HTTP server (configured from the environment)"""
    settings = _load_settings()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info(f"Starting server on port {settings.port}")
    # uvicorn exits the process if the port cannot be bound
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=logging.getLevelName(level).lower(),
        access_log=False,
    )


@cli.command()
@click.argument("prompt")
@click.option("--model", default="", help="Model name (defaults to DEFAULT_MODEL)")
def complete(prompt, model):
    """Send one PROMPT through the relay client and print the answer"""
    settings = _load_settings()
    with OllamaClient(settings) as client:
        try:
            text = client.complete(prompt, model)
        except RelayError as e:
            click.echo(f"✗ {e}", err=True)
            sys.exit(1)
    click.echo(text)


if __name__ == "__main__":
    cli()
