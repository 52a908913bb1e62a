"""Mirror pull request lifecycle events onto Habitica to-dos.

The task alias is the only link between a pull request and its to-do, so
every operation here is an existence check followed by a conditional
create or score. The two calls are not atomic: concurrent duplicate
deliveries for the same pull request can both see "absent" and create
two to-dos. Habitica exposes no compare-and-swap to prevent that.
"""

from __future__ import annotations

from typing import Any

from habisync.habitica.client import HabiticaClient
from habisync.habitica.models import ScoreDirection, Task, TaskPriority
from habisync.utils.logging import get_logger
from habisync.webhooks.models import PULL_REQUEST_EVENT, PullRequestPayload

log = get_logger(__name__)

ALIAS_PREFIX = "github__"


def task_alias(owner: str, repo: str, number: int) -> str:
    """Derive the to-do alias for a pull request, e.g. ``github__acme-widgets-42``."""
    return f"{ALIAS_PREFIX}{owner}-{repo}-{number}".lower()


def task_priority(pr: PullRequestPayload) -> TaskPriority:
    # Author owns the repository
    if pr.author == pr.owner:
        return TaskPriority.MEDIUM
    return TaskPriority.EASY


def task_text(pr: PullRequestPayload) -> str:
    return f"{pr.full_name}#{pr.number}"


def task_notes(pr: PullRequestPayload) -> str:
    return f"{pr.title}\n{pr.url}"


class PullRequestSync:
    """Applies pull request webhook events to a Habitica account."""

    def __init__(self, client: HabiticaClient) -> None:
        self._client = client

    async def handle(self, event_type: str, payload: dict[str, Any]) -> None:
        if event_type != PULL_REQUEST_EVENT:
            log.info("event_ignored", event_type=event_type)
            return

        pr = PullRequestPayload.from_payload(payload)
        alias = task_alias(pr.owner, pr.repo, pr.number)

        if pr.action == "opened":
            log.info("pull_request_opened", alias=alias)
            await self.add_todo(
                alias,
                text=task_text(pr),
                notes=task_notes(pr),
                priority=task_priority(pr),
            )
        elif pr.action == "closed":
            log.info("pull_request_closed", alias=alias)
            await self.complete_todo(alias)
        else:
            log.info("action_ignored", action=pr.action, alias=alias)

    async def add_todo(
        self,
        alias: str,
        text: str,
        notes: str | None = None,
        priority: TaskPriority = TaskPriority.EASY,
    ) -> Task | None:
        """Create the to-do unless one with ``alias`` already exists."""
        if await self._client.has_task(alias):
            log.info("task_already_exists", alias=alias)
            return None
        log.info("task_creating", alias=alias, priority=priority.name)
        return await self._client.create_task(alias, text, notes=notes, priority=priority)

    async def complete_todo(self, alias: str) -> bool:
        """Score the to-do up. Returns False when there was nothing to complete."""
        if not await self._client.has_task(alias):
            log.info("task_missing", alias=alias)
            return False
        log.info("task_completing", alias=alias)
        await self._client.score_task(alias, ScoreDirection.UP)
        return True
