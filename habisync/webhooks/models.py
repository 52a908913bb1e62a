"""Webhook event models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from habisync.errors import PayloadError

PULL_REQUEST_EVENT = "pull_request"


@dataclass(frozen=True)
class WebhookEvent:
    body: bytes
    signature: str
    event_type: str
    delivery_id: str = ""


def _get(payload: dict[str, Any], *path: str) -> Any:
    value: Any = payload
    for key in path:
        if not isinstance(value, dict) or key not in value:
            raise PayloadError(f"Missing field in payload: {'.'.join(path)}")
        value = value[key]
    return value


def _get_str(payload: dict[str, Any], *path: str) -> str:
    value = _get(payload, *path)
    if not isinstance(value, str):
        raise PayloadError(f"Expected string at {'.'.join(path)}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class PullRequestPayload:
    """The parts of a ``pull_request`` webhook body that get mirrored."""

    action: str
    owner: str
    repo: str
    full_name: str
    number: int
    title: str
    url: str
    author: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> PullRequestPayload:
        if not isinstance(payload, dict):
            raise PayloadError(f"Expected a JSON object, got {type(payload).__name__}")

        number = _get(payload, "number")
        # bool is an int subclass
        if not isinstance(number, int) or isinstance(number, bool):
            raise PayloadError(f"Expected integer pull request number, got {number!r}")

        return cls(
            action=_get_str(payload, "action"),
            owner=_get_str(payload, "repository", "owner", "login"),
            repo=_get_str(payload, "repository", "name"),
            full_name=_get_str(payload, "repository", "full_name"),
            number=number,
            title=_get_str(payload, "pull_request", "title"),
            url=_get_str(payload, "pull_request", "html_url"),
            author=_get_str(payload, "pull_request", "user", "login"),
        )
