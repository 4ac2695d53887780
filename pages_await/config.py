"""Action configuration using pydantic-settings.

GitHub Actions exposes step inputs as ``INPUT_<NAME>`` environment
variables, so every input field is aliased to that name.
"""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pages_await.core.exceptions import ConfigurationError
from pages_await.models.auth import Credentials

# Load .env file without clobbering inputs set by the runner
load_dotenv()


class Settings(BaseSettings):
    """Action settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Cloudflare authentication (token, or email + key)
    account_email: str = Field(default="", alias="INPUT_ACCOUNTEMAIL")
    api_key: str = Field(default="", alias="INPUT_APIKEY")
    api_token: str = Field(default="", alias="INPUT_APITOKEN")

    # Pages project
    account_id: str = Field(default="", alias="INPUT_ACCOUNTID")
    project: str = Field(default="", alias="INPUT_PROJECT")
    commit_hash: str = Field(default="", alias="INPUT_COMMITHASH")

    # Optional integrations
    github_token: str = Field(default="", alias="INPUT_GITHUBTOKEN")
    slack_webhook: str = Field(default="", alias="INPUT_SLACKWEBHOOK")

    # Workflow context
    github_repository: str = Field(default="", alias="GITHUB_REPOSITORY")
    github_api_url: str = Field(default="https://api.github.com", alias="GITHUB_API_URL")

    # Cloudflare API
    cloudflare_api_url: str = Field(
        default="https://api.cloudflare.com/client/v4", alias="CLOUDFLARE_API_URL"
    )
    cloudflare_dashboard_url: str = Field(
        default="https://dash.cloudflare.com", alias="CLOUDFLARE_DASHBOARD_URL"
    )

    # Polling
    poll_interval: float = Field(default=5.0, gt=0, alias="PAGES_AWAIT_POLL_INTERVAL")
    request_timeout: float = Field(default=30.0, gt=0, alias="PAGES_AWAIT_REQUEST_TIMEOUT")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="PAGES_AWAIT_LOG_LEVEL"
    )
    log_format: Literal["console", "json"] = Field(
        default="console", alias="PAGES_AWAIT_LOG_FORMAT"
    )

    @field_validator(
        "account_email",
        "api_key",
        "api_token",
        "account_id",
        "project",
        "commit_hash",
        "github_token",
        "slack_webhook",
        mode="before",
    )
    @classmethod
    def _strip_whitespace(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def credentials(self) -> Credentials:
        """Cloudflare credentials built from the auth inputs."""
        return Credentials(
            api_token=self.api_token,
            account_email=self.account_email,
            api_key=self.api_key,
        )

    @property
    def repository_owner(self) -> str:
        return self.github_repository.partition("/")[0]

    @property
    def repository_name(self) -> str:
        return self.github_repository.partition("/")[2]

    def validate_inputs(self) -> None:
        """Check required inputs before any request is made.

        Raises:
            ConfigurationError: If a required input is missing or the
                authentication details are incomplete.
        """
        missing = [
            name
            for name, value in (("accountId", self.account_id), ("project", self.project))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Input required and not supplied: {', '.join(missing)}",
                {"missing": missing},
            )

        if not self.credentials.is_complete:
            raise ConfigurationError(
                "Please specify authentication details! "
                "Set either `apiToken` or `accountEmail` + `accountKey`!"
            )

        if self.github_token and "/" not in self.github_repository:
            raise ConfigurationError(
                "GITHUB_REPOSITORY must be set as `owner/repo` when `githubToken` is supplied",
                {"github_repository": self.github_repository},
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
