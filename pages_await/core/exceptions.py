"""Custom exceptions for pages-await."""

from typing import Any


class PagesAwaitError(Exception):
    """Base exception for pages-await."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(PagesAwaitError):
    """Missing or conflicting action inputs."""

    pass


class CloudflareRequestError(PagesAwaitError):
    """Request to the Cloudflare API could not be sent."""

    def __init__(self, message: str):
        super().__init__(f"Failed to send request to CF API - network issue? {message}")


class CloudflareResponseError(PagesAwaitError):
    """Cloudflare answered with something other than the expected JSON envelope."""

    def __init__(self, status_code: int, reason: str):
        super().__init__(
            f"CF API did not return a JSON (possibly down?) - Status code: {status_code} ({reason})",
            {"status_code": status_code},
        )
        self.status_code = status_code


class CloudflareAPIError(PagesAwaitError):
    """Cloudflare reported the request as unsuccessful."""

    def __init__(self, error: str):
        super().__init__(f"Failed to check deployment status! Error: {error}", {"error": error})


class GitHubAPIError(PagesAwaitError):
    """GitHub deployments API call failed."""

    def __init__(self, message: str, status_code: int | None = None):
        details = {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(f"GitHub API error: {message}", details)
        self.status_code = status_code


class DeploymentFailedError(PagesAwaitError):
    """The watched deployment failed on one of its stages."""

    def __init__(self, stage: str, deployment_id: str, github_error: str | None = None):
        details = {"stage": stage, "deployment_id": deployment_id}
        if github_error is not None:
            details["github_error"] = github_error
        super().__init__(f"Deployment failed on step: {stage}!", details)
        self.stage = stage
        self.deployment_id = deployment_id
