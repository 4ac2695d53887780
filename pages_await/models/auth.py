"""Cloudflare authentication model."""

from pydantic import BaseModel


class Credentials(BaseModel):
    """Either an API token or an account email + global API key."""

    api_token: str = ""
    account_email: str = ""
    api_key: str = ""

    @property
    def is_complete(self) -> bool:
        """True when one full authentication form is present."""
        return bool(self.api_token) or bool(self.account_email and self.api_key)

    def headers(self) -> dict[str, str]:
        """Request headers for the Cloudflare API. The token wins if both forms are set."""
        if self.api_token:
            return {"Authorization": f"Bearer {self.api_token}"}
        return {"X-Auth-Email": self.account_email, "X-Auth-Key": self.api_key}
