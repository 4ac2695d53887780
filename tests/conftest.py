"""Pytest configuration and fixtures."""

import io
from pathlib import Path
from typing import Any

import httpx
import pytest

from pages_await.core.actions import ActionsRuntime, EventContext
from pages_await.models.auth import Credentials

CF_HOST = "api.cloudflare.com"
GH_HOST = "api.github.com"
SLACK_WEBHOOK = "https://hooks.slack.com/services/T000/B000/XXXX"


def make_deployment(
    deployment_id: str = "dep-1",
    stage: str = "queued",
    status: str = "active",
    environment: str = "production",
    url: str = "https://prod.example",
    aliases: list[str] | None = None,
    commit_hash: str | None = "abc123",
    branch: str | None = "main",
    is_skipped: bool = False,
) -> dict[str, Any]:
    """Deployment payload shaped like the Pages API."""
    return {
        "id": deployment_id,
        "project_name": "my-site",
        "environment": environment,
        "url": url,
        "aliases": aliases,
        "deployment_trigger": {
            "type": "github:push",
            "metadata": {
                "branch": branch,
                "commit_hash": commit_hash,
                "commit_message": "Update",
            },
        },
        "latest_stage": {"name": stage, "status": status},
        "is_skipped": is_skipped,
    }


def envelope(*deployments: dict[str, Any]) -> dict[str, Any]:
    """Successful deployments list response."""
    return {"success": True, "errors": [], "messages": [], "result": list(deployments)}


class FakeApis:
    """Mock transport standing in for Cloudflare, GitHub and Slack.

    Each poll of the deployments list consumes the next queued response;
    the last one is repeated once the queue runs dry.
    """

    def __init__(self):
        self.polls: list[Any] = []
        self.logs: Any = httpx.Response(
            200, json={"result": {"data": [{"line": "npm run build"}, {"line": "Error: boom"}]}}
        )
        self.slack_status = 200
        self.github_deployment_id = 42
        self.requests: list[httpx.Request] = []

    def queue(self, *items: Any) -> None:
        self.polls.extend(items)

    @staticmethod
    def _reply(item: Any) -> httpx.Response:
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return item
        return httpx.Response(200, json=item)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        path = request.url.path

        if host == CF_HOST:
            if path.endswith("/history/logs"):
                return self._reply(self.logs)
            if path.endswith("/deployments"):
                item = self.polls.pop(0) if len(self.polls) > 1 else self.polls[0]
                return self._reply(item)
        if host == GH_HOST:
            if path.endswith("/statuses"):
                return httpx.Response(201, json={"id": 1, "state": "created"})
            if path.endswith("/deployments"):
                return httpx.Response(201, json={"id": self.github_deployment_id})
        if host == "hooks.slack.com":
            return httpx.Response(self.slack_status, text="ok")
        return httpx.Response(404, json={"message": "Not Found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, host: str, suffix: str = "") -> list[httpx.Request]:
        return [
            r for r in self.requests if r.url.host == host and r.url.path.endswith(suffix)
        ]


@pytest.fixture
def apis() -> FakeApis:
    return FakeApis()


@pytest.fixture
async def http(apis: FakeApis) -> httpx.AsyncClient:
    """Async client routed to the fake APIs."""
    async with httpx.AsyncClient(transport=apis.transport) as client:
        yield client


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_token="cf-token")


@pytest.fixture
def actions(tmp_path: Path) -> ActionsRuntime:
    """Actions runtime writing outputs to a temporary file."""
    return ActionsRuntime(output_path=tmp_path / "github_output", stream=io.StringIO())


@pytest.fixture
def event() -> EventContext:
    return EventContext(
        actor="octocat",
        commit_url="https://github.com/acme/site/commit/abc123",
    )
