"""Async client for the Habitica v3 task API."""

from __future__ import annotations

from typing import Any

import httpx

from habisync.config import HabiticaConfig
from habisync.errors import ConfigurationError, UnexpectedResponse
from habisync.habitica.models import ScoreDirection, Task, TaskPriority, TaskType
from habisync.utils.logging import get_logger

log = get_logger(__name__)


class HabiticaClient:
    """Thin wrapper over the Habitica task endpoints.

    The client never retries and never deduplicates; callers that need
    create-if-absent semantics check ``has_task`` first. Transport failures
    propagate as httpx raises them.

    Use as an async context manager so the underlying connection is closed::

        async with HabiticaClient(settings.habitica) as client:
            await client.has_task("github__acme-widgets-42")
    """

    def __init__(
        self,
        config: HabiticaConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not config.user_id or not config.api_token:
            raise ConfigurationError("Missing Habitica credentials")

        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            transport=transport,
            headers={
                "x-api-user": config.user_id,
                "x-api-key": config.api_token,
                "x-client": f"{config.user_id}-{config.client_name}",
            },
        )

    async def __aenter__(self) -> HabiticaClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Task operations
    # ------------------------------------------------------------------

    async def has_task(self, alias: str) -> bool:
        """Return whether a task with ``alias`` exists.

        Only 200 and 404 are meaningful; any other status raises
        ``UnexpectedResponse`` rather than being read as either answer.
        """
        resp = await self._request("GET", f"tasks/{alias}")
        if resp.status_code == 404:
            return False
        if resp.status_code == 200:
            return True
        raise UnexpectedResponse(resp.status_code, str(resp.url))

    async def create_task(
        self,
        alias: str,
        text: str,
        notes: str | None = None,
        priority: TaskPriority = TaskPriority.EASY,
        task_type: TaskType = TaskType.TODO,
    ) -> Task:
        task = Task(alias=alias, text=text, type=task_type, notes=notes, priority=priority)
        resp = await self._request("POST", "tasks/user", payload=task.to_payload())
        self._expect_success(resp)
        return task

    async def score_task(
        self, alias: str, direction: ScoreDirection = ScoreDirection.UP
    ) -> None:
        resp = await self._request(
            "POST", f"tasks/{alias}/score/{ScoreDirection(direction).value}"
        )
        self._expect_success(resp)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _request(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> httpx.Response:
        resp = await self._client.request(method, path, json=payload)
        log.info(
            "habitica_response",
            status=resp.status_code,
            method=method,
            url=str(resp.url),
        )
        log.debug("habitica_response_body", body=resp.text)
        return resp

    @staticmethod
    def _expect_success(resp: httpx.Response) -> None:
        if not resp.is_success:
            raise UnexpectedResponse(resp.status_code, str(resp.url))
