"""Slack incoming-webhook notifier.

Messages are sent in the background so a slow webhook never holds up
the watcher; callers drain pending sends before exiting.
"""

import asyncio

import httpx

from pages_await.utils.logging import get_logger


def format_failure_message(
    project: str,
    commit_url: str,
    actor: str,
    deployment_id: str,
    logs: str,
) -> str:
    """Message for a deployment that failed on some stage."""
    return (
        f"Deployment failed for project *{project}*\n"
        f"Commit: {commit_url}\n"
        f"Actor: *{actor}*\n"
        f"Deployment ID: *{deployment_id}*\n"
        f"Logs: {logs}\n"
    )


def format_success_message(
    project: str,
    commit_url: str,
    actor: str,
    deployment_id: str,
    alias_url: str,
    deployment_url: str,
    dashboard_url: str,
) -> str:
    """Message for a deployment whose deploy stage succeeded."""
    return (
        f"Deployment succeeded for project *{project}*\n"
        f"Commit: {commit_url}\n"
        f"Actor: *{actor}*\n"
        f"Deployment ID: *{deployment_id}*\n"
        f"Alias URL: {alias_url}\n"
        f"Deployment URL: {deployment_url}\n"
        f"<{dashboard_url}|Logs>"
    )


class SlackNotifier:
    """Fire-and-forget sender for a Slack webhook."""

    def __init__(self, http: httpx.AsyncClient, webhook_url: str = ""):
        self.http = http
        self.webhook_url = webhook_url
        self._pending: set[asyncio.Task[bool]] = set()
        self.logger = get_logger("slack")

    @property
    def configured(self) -> bool:
        return bool(self.webhook_url)

    async def send(self, text: str) -> bool:
        """Post a message. Errors are logged and reported as False."""
        try:
            response = await self.http.post(self.webhook_url, json={"text": text})
            response.raise_for_status()
        except httpx.HTTPError as e:
            self.logger.error("slack.send_failed", error=str(e))
            return False
        return True

    def notify(self, text: str, label: str = "") -> None:
        """Schedule a message without waiting for it. No-op without a webhook."""
        if not self.configured:
            return

        async def _deliver() -> bool:
            sent = await self.send(text)
            if sent:
                self.logger.info("slack.message_sent", label=label)
            return sent

        task = asyncio.create_task(_deliver())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every scheduled message to settle."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
