"""Data models for pages-await."""

from pages_await.models.auth import Credentials
from pages_await.models.deployment import (
    DEPLOY_STAGE,
    ApiResponse,
    Deployment,
    DeploymentOutputs,
    DeploymentStage,
    DeploymentState,
    DeploymentTrigger,
    LogsResponse,
    TriggerMetadata,
)
from pages_await.models.run import RunOutcome, RunState

__all__ = [
    # Auth
    "Credentials",
    # Deployment models
    "DEPLOY_STAGE",
    "ApiResponse",
    "Deployment",
    "DeploymentOutputs",
    "DeploymentStage",
    "DeploymentState",
    "DeploymentTrigger",
    "LogsResponse",
    "TriggerMetadata",
    # Run models
    "RunOutcome",
    "RunState",
]
