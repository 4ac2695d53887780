"""Deployment watcher.

Polls Cloudflare Pages for one deployment and reacts to its stage changes:

1. skipped deployment - stop, nothing is reported
2. first stage change - GitHub deployment marked in progress
3. any failed stage - failure notification, GitHub failure, step fails
4. finished deploy stage - outputs, success notification, GitHub status

The failed-stage check runs before the deploy-stage check, so a failed
deploy stage always takes the failure path.
"""

import asyncio
from typing import Awaitable, Callable

from pages_await.core.actions import ActionsRuntime, EventContext
from pages_await.core.exceptions import DeploymentFailedError, GitHubAPIError
from pages_await.models.deployment import Deployment, DeploymentOutputs, DeploymentState
from pages_await.models.run import RunOutcome, RunState
from pages_await.services.cloudflare import CloudflareClient
from pages_await.services.github import GitHubDeployments
from pages_await.services.slack import (
    SlackNotifier,
    format_failure_message,
    format_success_message,
)
from pages_await.utils.logging import get_logger


class DeploymentWatcher:
    """Runs the polling loop for a single deployment."""

    def __init__(
        self,
        cloudflare: CloudflareClient,
        github: GitHubDeployments,
        slack: SlackNotifier,
        actions: ActionsRuntime,
        event: EventContext | None = None,
        commit_hash: str = "",
        poll_interval: float = 5.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.cloudflare = cloudflare
        self.github = github
        self.slack = slack
        self.actions = actions
        self.event = event or EventContext()
        self.commit_hash = commit_hash
        self.poll_interval = poll_interval
        self.sleep = sleep
        self.state = RunState()
        self.outcome: RunOutcome | None = None
        self.logger = get_logger("watcher")

    async def run(self) -> RunOutcome:
        """Poll until the deployment is skipped, fails or finishes deploying.

        Pending notifications are delivered before this returns or raises.

        Raises:
            DeploymentFailedError: A stage of the deployment failed.
            PagesAwaitError: Polling or GitHub reporting failed.
        """
        self.logger.info(
            "watcher.started",
            project=self.cloudflare.project,
            commit_hash=self.commit_hash or None,
        )
        try:
            while self.state.waiting:
                await self.sleep(self.poll_interval)

                deployment = await self.cloudflare.poll_deployment(self.commit_hash)
                if deployment is None:
                    self.logger.info("watcher.waiting_for_deployment")
                    continue

                await self.step(deployment)
        finally:
            await self.slack.drain()

        self.logger.info("watcher.finished", outcome=self.outcome.value)
        return self.outcome

    async def step(self, deployment: Deployment) -> None:
        """Apply one polled deployment to the run state."""
        if deployment.is_skipped:
            self.state.waiting = False
            self.outcome = RunOutcome.SKIPPED
            self.logger.info("watcher.deployment_skipped", deployment_id=deployment.id)
            self.actions.set_output("message", f"Deployment skipped {deployment.id}!")
            return

        stage = deployment.latest_stage

        if stage.name != self.state.last_stage:
            self.state.last_stage = stage.name
            self.logger.info("watcher.stage_changed", stage=stage.name, status=stage.status)

            if not self.state.marked_as_in_progress:
                await self._reflect(deployment, DeploymentState.IN_PROGRESS)
                self.state.marked_as_in_progress = True

        if stage.is_failed:
            await self._handle_failure(deployment)
            return

        if stage.is_deploy_finished:
            await self._handle_deploy_finished(deployment)

    async def _reflect(self, deployment: Deployment, state: DeploymentState) -> None:
        await self.github.update(
            deployment,
            state,
            self.state,
            log_url=self.cloudflare.dashboard_link(deployment),
        )

    async def _handle_failure(self, deployment: Deployment) -> None:
        stage = deployment.latest_stage
        self.state.waiting = False
        self.outcome = RunOutcome.FAILED
        self.logger.error(
            "watcher.deployment_failed",
            deployment_id=deployment.id,
            stage=stage.name,
        )

        if self.slack.configured:
            logs = await self.cloudflare.fetch_logs(deployment.id)
            self.slack.notify(
                format_failure_message(
                    project=self.cloudflare.project,
                    commit_url=self.event.commit_url,
                    actor=self.event.actor,
                    deployment_id=deployment.id,
                    logs=logs,
                ),
                label=f"{stage.name} failed",
            )

        try:
            await self._reflect(deployment, DeploymentState.FAILURE)
        except GitHubAPIError as e:
            # The stage failure stays the reported cause
            raise DeploymentFailedError(stage.name, deployment.id, github_error=e.message) from e
        raise DeploymentFailedError(stage.name, deployment.id)

    async def _handle_deploy_finished(self, deployment: Deployment) -> None:
        self.state.waiting = False
        outputs = DeploymentOutputs.from_deployment(deployment)
        self.outcome = RunOutcome.SUCCEEDED if outputs.success else RunOutcome.FAILED

        for name, value in outputs.model_dump().items():
            self.actions.set_output(name, value)

        if outputs.success:
            self.slack.notify(
                format_success_message(
                    project=self.cloudflare.project,
                    commit_url=self.event.commit_url,
                    actor=self.event.actor,
                    deployment_id=deployment.id,
                    alias_url=outputs.alias,
                    deployment_url=deployment.url,
                    dashboard_url=self.cloudflare.dashboard_link(deployment),
                ),
                label="deploy succeeded",
            )

        state = DeploymentState.SUCCESS if outputs.success else DeploymentState.FAILURE
        await self._reflect(deployment, state)
