"""GitHub webhook intake."""

from habisync.webhooks.models import PullRequestPayload, WebhookEvent
from habisync.webhooks.signature import compute_signature, verify_signature

__all__ = [
    "PullRequestPayload",
    "WebhookEvent",
    "compute_signature",
    "verify_signature",
]
