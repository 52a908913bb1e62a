"""habisync entry point: loads settings and runs the webhook server."""

from __future__ import annotations

import asyncio
import signal
import sys

import click

from habisync import __version__
from habisync.config import Settings, load_settings
from habisync.utils.logging import get_logger, setup_logging
from habisync.webhooks.server import WebhookServer

log = get_logger(__name__)


async def run(settings: Settings) -> None:
    server = WebhookServer(settings)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        log.info("shutdown_signal")
        stop_event.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

    log.info("habisync_starting", version=__version__)
    await server.start()

    try:
        if sys.platform == "win32":
            while not stop_event.is_set():
                await asyncio.sleep(1)
        else:
            await stop_event.wait()
    except KeyboardInterrupt:
        pass
    finally:
        await server.stop()


@click.command()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--bind", default=None, help="Address to listen on")
@click.option("--port", default=None, type=int, help="Port to listen on")
def cli(
    config_path: str | None,
    log_level: str | None,
    bind: str | None,
    port: int | None,
) -> None:
    """Mirror GitHub pull requests into Habitica to-dos."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    if bind:
        settings.webhook.bind = bind
    if port is not None:
        settings.webhook.port = port
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    asyncio.run(run(settings))


if __name__ == "__main__":
    cli()
