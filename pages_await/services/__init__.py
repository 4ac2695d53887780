"""External API clients."""

from pages_await.services.cloudflare import CloudflareClient
from pages_await.services.github import GitHubDeployments
from pages_await.services.slack import SlackNotifier

__all__ = [
    "CloudflareClient",
    "GitHubDeployments",
    "SlackNotifier",
]
