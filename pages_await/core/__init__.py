"""Core functionality for pages-await."""

from pages_await.core.actions import ActionsRuntime, EventContext, load_event_context
from pages_await.core.exceptions import (
    CloudflareAPIError,
    CloudflareRequestError,
    CloudflareResponseError,
    ConfigurationError,
    DeploymentFailedError,
    GitHubAPIError,
    PagesAwaitError,
)

__all__ = [
    "ActionsRuntime",
    "EventContext",
    "load_event_context",
    "CloudflareAPIError",
    "CloudflareRequestError",
    "CloudflareResponseError",
    "ConfigurationError",
    "DeploymentFailedError",
    "GitHubAPIError",
    "PagesAwaitError",
]
