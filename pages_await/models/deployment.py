"""Cloudflare Pages deployment models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Stage whose status resolves the overall deployment outcome
DEPLOY_STAGE = "deploy"

FAILED_STATUSES = frozenset({"failed", "failure"})
DEPLOY_TERMINAL_STATUSES = frozenset({"success", "failed"})


class DeploymentState(str, Enum):
    """State reported to GitHub for a deployment."""

    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    FAILURE = "failure"


class DeploymentStage(BaseModel):
    """A named phase of the Pages pipeline."""

    model_config = ConfigDict(extra="ignore")

    name: str
    status: str

    @property
    def is_failed(self) -> bool:
        return self.status in FAILED_STATUSES

    @property
    def is_deploy_finished(self) -> bool:
        """True for the deploy stage once it has succeeded or failed."""
        return self.name == DEPLOY_STAGE and self.status in DEPLOY_TERMINAL_STATUSES


class TriggerMetadata(BaseModel):
    """Commit information that started the deployment."""

    model_config = ConfigDict(extra="ignore")

    commit_hash: str = ""
    branch: str = ""

    @field_validator("commit_hash", "branch", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        # Direct uploads and older deployments report null commit details
        return "" if value is None else value


class DeploymentTrigger(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    metadata: TriggerMetadata = Field(default_factory=TriggerMetadata)

    @field_validator("metadata", mode="before")
    @classmethod
    def _null_metadata(cls, value: object) -> object:
        return {} if value is None else value


class Deployment(BaseModel):
    """A Pages deployment as returned by the deployments list endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: str
    project_name: str = ""
    environment: str = ""
    url: str = ""
    aliases: list[str] | None = None
    deployment_trigger: DeploymentTrigger = Field(default_factory=DeploymentTrigger)
    latest_stage: DeploymentStage
    is_skipped: bool = False

    @field_validator("deployment_trigger", mode="before")
    @classmethod
    def _null_trigger(cls, value: object) -> object:
        return {} if value is None else value

    @property
    def commit_hash(self) -> str:
        return self.deployment_trigger.metadata.commit_hash

    @property
    def branch(self) -> str:
        return self.deployment_trigger.metadata.branch

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def environment_label(self) -> str:
        """Environment name shown on GitHub."""
        if self.is_production:
            return "Production"
        return f"Preview ({self.branch})"

    @property
    def alias_url(self) -> str:
        """First alias if there is one, otherwise the deployment URL."""
        if self.aliases:
            return self.aliases[0]
        return self.url


class ApiResponse(BaseModel):
    """Cloudflare v4 response envelope for the deployments list."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    errors: list[Any] = Field(default_factory=list)
    result: list[Deployment] | None = None


class LogLine(BaseModel):
    model_config = ConfigDict(extra="ignore")

    line: str = ""


class LogsResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: list[LogLine] | None = None


class LogsResponse(BaseModel):
    """Envelope of the deployment history logs endpoint."""

    model_config = ConfigDict(extra="ignore")

    result: LogsResult | None = None


class DeploymentOutputs(BaseModel):
    """Step outputs published once the deploy stage finishes."""

    id: str
    environment: str
    url: str
    alias: str
    success: bool

    @classmethod
    def from_deployment(cls, deployment: Deployment) -> "DeploymentOutputs":
        return cls(
            id=deployment.id,
            environment=deployment.environment,
            url=deployment.url,
            alias=deployment.alias_url,
            success=deployment.latest_stage.status == "success",
        )
