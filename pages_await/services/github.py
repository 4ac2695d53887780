"""GitHub deployments API client.

Mirrors the Pages deployment into a GitHub deployment record so the
commit and pull request show the environment and its URL.
"""

import httpx

from pages_await.core.exceptions import GitHubAPIError
from pages_await.models.deployment import Deployment, DeploymentState
from pages_await.models.run import RunState
from pages_await.utils.logging import get_logger

DEPLOYMENT_DESCRIPTION = "Cloudflare Pages"


class GitHubDeployments:
    """Creates one GitHub deployment per run and posts its statuses."""

    API_VERSION = "2022-11-28"

    def __init__(
        self,
        http: httpx.AsyncClient,
        token: str,
        owner: str,
        repo: str,
        base_url: str = "https://api.github.com",
    ):
        self.http = http
        self.token = token
        self.owner = owner
        self.repo = repo
        self.base_url = base_url.rstrip("/")
        self.logger = get_logger("github")

    @property
    def enabled(self) -> bool:
        return bool(self.token)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

    async def _post(self, path: str, payload: dict) -> dict:
        url = f"{self.base_url}/repos/{self.owner}/{self.repo}/{path}"
        try:
            response = await self.http.post(url, json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"request to {path} failed: {e}") from e

        if not response.is_success:
            raise GitHubAPIError(
                f"{path} returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(f"{path} returned a non-JSON body") from e

    async def update(
        self,
        deployment: Deployment,
        state: DeploymentState,
        run_state: RunState,
        log_url: str = "",
    ) -> None:
        """Reflect the Pages deployment on GitHub.

        The GitHub deployment is created on the first call of a run and
        reused afterwards. A status is only posted once the deploy stage
        has finished.

        Raises:
            GitHubAPIError: If GitHub rejects or cannot be reached.
        """
        if not self.enabled:
            return

        environment = deployment.environment_label

        if run_state.github_deployment_id is None:
            data = await self._post(
                "deployments",
                {
                    "ref": deployment.commit_hash,
                    "auto_merge": False,
                    "environment": environment,
                    "production_environment": deployment.is_production,
                    "description": DEPLOYMENT_DESCRIPTION,
                    "required_contexts": [],
                },
            )
            if "id" not in data:
                raise GitHubAPIError(data.get("message") or "deployment was not created")
            run_state.github_deployment_id = data["id"]
            self.logger.info(
                "github.deployment_created",
                deployment_id=run_state.github_deployment_id,
                environment=environment,
            )

        if not deployment.latest_stage.is_deploy_finished:
            return

        await self._post(
            f"deployments/{run_state.github_deployment_id}/statuses",
            {
                "environment": environment,
                "environment_url": deployment.url,
                "log_url": log_url,
                "description": DEPLOYMENT_DESCRIPTION,
                "state": state.value,
            },
        )
        self.logger.info(
            "github.status_posted",
            deployment_id=run_state.github_deployment_id,
            state=state.value,
        )
