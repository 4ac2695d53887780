"""Action entry point."""

import asyncio

import httpx
from pydantic import ValidationError

from pages_await import __version__
from pages_await.config import Settings, get_settings
from pages_await.core.actions import ActionsRuntime, load_event_context
from pages_await.core.exceptions import PagesAwaitError
from pages_await.core.tracker import DeploymentWatcher
from pages_await.models.run import RunOutcome
from pages_await.services.cloudflare import CloudflareClient
from pages_await.services.github import GitHubDeployments
from pages_await.services.slack import SlackNotifier
from pages_await.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

ISSUES_URL = "https://github.com/WalshyDev/cf-pages-await/issues"


async def watch(
    settings: Settings,
    actions: ActionsRuntime,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RunOutcome:
    """Build the API clients and watch the configured deployment.

    Raises:
        PagesAwaitError: On configuration, API or deployment failures.
    """
    settings.validate_inputs()
    event = load_event_context()

    async with httpx.AsyncClient(
        timeout=settings.request_timeout, transport=transport
    ) as client:
        watcher = DeploymentWatcher(
            cloudflare=CloudflareClient(
                client,
                settings.credentials,
                settings.account_id,
                settings.project,
                base_url=settings.cloudflare_api_url,
                dashboard_url=settings.cloudflare_dashboard_url,
            ),
            github=GitHubDeployments(
                client,
                settings.github_token,
                settings.repository_owner,
                settings.repository_name,
                base_url=settings.github_api_url,
            ),
            slack=SlackNotifier(client, settings.slack_webhook),
            actions=actions,
            event=event,
            commit_hash=settings.commit_hash,
            poll_interval=settings.poll_interval,
        )
        logger.info("pages_await.waiting_for_build", project=settings.project)
        return await watcher.run()


def main() -> int:
    """Run the action and return its exit code."""
    actions = ActionsRuntime()
    try:
        settings = get_settings()
    except ValidationError as e:
        actions.set_failed(f"Invalid configuration: {e}")
        return actions.exit_code

    configure_logging(settings)

    logger.info("pages_await.starting", version=__version__)

    try:
        outcome = asyncio.run(watch(settings, actions))
    except PagesAwaitError as e:
        logger.error("pages_await.failed", error=e.message, details=e.details)
        actions.set_failed(e.message)
    except Exception as e:
        logger.error("pages_await.unexpected_error", error=str(e), exc_info=True)
        logger.error("pages_await.please_report", issues=ISSUES_URL)
        actions.set_failed(str(e))
    else:
        if outcome is RunOutcome.FAILED:
            actions.set_failed("Deployment failed on step: deploy!")

    return actions.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
