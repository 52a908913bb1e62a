"""Webhook HTTP server using aiohttp."""

from __future__ import annotations

import json
from typing import Any, Callable

from aiohttp import web

from habisync.config import HabiticaConfig, Settings
from habisync.errors import ConfigurationError, SignatureMismatch
from habisync.habitica.client import HabiticaClient
from habisync.sync import PullRequestSync
from habisync.utils.logging import get_logger
from habisync.webhooks.models import PULL_REQUEST_EVENT, WebhookEvent
from habisync.webhooks.signature import verify_signature

log = get_logger(__name__)

ClientFactory = Callable[[HabiticaConfig], HabiticaClient]


class WebhookServer:
    """Receives GitHub deliveries and mirrors them into Habitica.

    Only a failed signature check changes the response (403). Once a
    delivery is verified the answer is always 200, even if Habitica is down
    or the payload is unusable: GitHub redelivers on non-2xx, and a replayed
    ``opened`` after a partial failure is not guaranteed to be harmless.
    Errors after verification are only visible in the logs.
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: ClientFactory = HabiticaClient,
    ) -> None:
        self._settings = settings
        self._config = settings.webhook
        self._client_factory = client_factory
        self._runner: web.AppRunner | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if not self._config.secret:
            log.warning(
                "webhook_no_secret",
                msg="No webhook secret configured, all deliveries will be rejected.",
            )
        app = self._build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._config.bind, self._config.port)
        await site.start()
        log.info(
            "webhook_server_started",
            bind=self._config.bind,
            port=self._config.port,
            path=self._path,
        )

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        log.info("webhook_server_stopped")

    # ------------------------------------------------------------------
    # App construction
    # ------------------------------------------------------------------

    @property
    def _path(self) -> str:
        path = self._config.path
        return path if path.startswith("/") else f"/{path}"

    def _build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post(self._path, self._handle_webhook)
        app.router.add_get("/healthz", self._handle_health)
        return app

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _handle_health(self, request: web.Request) -> web.Response:
        return web.Response(status=200, text="ok")

    async def _handle_webhook(self, request: web.Request) -> web.Response:
        event = WebhookEvent(
            body=await request.read(),
            signature=request.headers.get("X-Hub-Signature-256", ""),
            event_type=request.headers.get("X-GitHub-Event", ""),
            delivery_id=request.headers.get("X-GitHub-Delivery", ""),
        )

        try:
            verify_signature(event.body, event.signature, self._config.secret)
        except (ConfigurationError, SignatureMismatch) as e:
            log.warning("webhook_rejected", delivery_id=event.delivery_id, reason=str(e))
            return web.Response(status=403)

        try:
            await self._process(event)
        except Exception:
            log.exception(
                "webhook_processing_failed",
                delivery_id=event.delivery_id,
                event_type=event.event_type,
            )

        return web.Response(status=200)

    async def _process(self, event: WebhookEvent) -> None:
        if event.event_type != PULL_REQUEST_EVENT:
            log.info(
                "event_ignored",
                delivery_id=event.delivery_id,
                event_type=event.event_type,
            )
            return

        payload: Any = json.loads(event.body)
        log.info("webhook_received", delivery_id=event.delivery_id, event_type=event.event_type)

        async with self._client_factory(self._settings.habitica) as client:
            await PullRequestSync(client).handle(event.event_type, payload)
