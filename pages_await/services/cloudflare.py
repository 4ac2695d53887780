"""Cloudflare Pages API client.

Reads deployment state for one Pages project and, best-effort, the build
logs of a deployment.
"""

import json

import httpx
from pydantic import ValidationError

from pages_await.core.exceptions import (
    CloudflareAPIError,
    CloudflareRequestError,
    CloudflareResponseError,
)
from pages_await.models.auth import Credentials
from pages_await.models.deployment import ApiResponse, Deployment, LogsResponse
from pages_await.utils.logging import get_logger

# Number of trailing build log lines embedded in failure notifications
MAX_LOG_LINES = 20


class CloudflareClient:
    """Client for the Pages deployments endpoints of one project."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        credentials: Credentials,
        account_id: str,
        project: str,
        base_url: str = "https://api.cloudflare.com/client/v4",
        dashboard_url: str = "https://dash.cloudflare.com",
    ):
        self.http = http
        self.credentials = credentials
        self.account_id = account_id
        self.project = project
        self.base_url = base_url.rstrip("/")
        self.dashboard_url = dashboard_url.rstrip("/")
        self.logger = get_logger("cloudflare")

    @property
    def project_url(self) -> str:
        return f"{self.base_url}/accounts/{self.account_id}/pages/projects/{self.project}"

    def dashboard_link(self, deployment: Deployment) -> str:
        """Dashboard page showing the deployment and its build log."""
        return (
            f"{self.dashboard_url}?to=/{self.account_id}/pages/view/"
            f"{deployment.project_name}/{deployment.id}"
        )

    async def poll_deployment(self, commit_hash: str = "") -> Deployment | None:
        """Fetch the deployment to watch.

        Args:
            commit_hash: Only consider deployments triggered by this commit.
                Empty means the newest deployment.

        Returns:
            The matching deployment, or None if it has not started yet.

        Raises:
            CloudflareRequestError: The request could not be sent.
            CloudflareResponseError: The body is not the expected JSON envelope.
            CloudflareAPIError: Cloudflare reported the call as unsuccessful.
        """
        try:
            response = await self.http.get(
                f"{self.project_url}/deployments",
                params={"sort_by": "created_on", "sort_order": "desc"},
                headers=self.credentials.headers(),
            )
        except httpx.HTTPError as e:
            self.logger.error("cloudflare.request_failed", error=str(e))
            raise CloudflareRequestError(str(e)) from e

        try:
            body = ApiResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            self.logger.error(
                "cloudflare.invalid_response",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
            raise CloudflareResponseError(response.status_code, response.reason_phrase) from e

        if not body.success:
            error = json.dumps(body.errors[0]) if body.errors else json.dumps("Unknown error!")
            raise CloudflareAPIError(error)

        deployments = body.result or []
        if not commit_hash:
            return deployments[0] if deployments else None

        for deployment in deployments:
            if deployment.commit_hash == commit_hash:
                return deployment
        return None

    async def fetch_logs(self, deployment_id: str) -> str:
        """Return the last build log lines of a deployment as a code block.

        Any failure yields an empty string.
        """
        url = f"{self.project_url}/deployments/{deployment_id}/history/logs"
        try:
            response = await self.http.get(url, headers=self.credentials.headers())
        except httpx.HTTPError as e:
            self.logger.error("cloudflare.logs_request_failed", error=str(e))
            return ""

        if not response.is_success:
            self.logger.error(
                "cloudflare.logs_fetch_failed",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
            return ""

        try:
            body = LogsResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            self.logger.error("cloudflare.logs_invalid_response", error=str(e))
            return ""

        if body.result is None or not body.result.data:
            return ""

        lines = [entry.line for entry in body.result.data[-MAX_LOG_LINES:]]
        return "```" + "\n".join(lines) + "\n```"
