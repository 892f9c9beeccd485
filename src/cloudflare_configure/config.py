"""
CloudFlare Configure Settings

API endpoint and credentials for the zone settings client.
Override with environment variables for flexibility.
"""

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.cloudflare.com/client/v4"


@dataclass
class CloudFlareConfig:
    """Configuration for the CloudFlare API client."""

    api_url: str = DEFAULT_API_URL

    # Global API key authentication
    email: str = ""
    key: str = ""

    # Scoped API token, preferred over email/key when set
    token: str = ""

    timeout: float = 30.0

    def __post_init__(self):
        self.api_url = os.getenv("CF_API_URL", self.api_url).rstrip("/")
        self.email = os.getenv("CF_EMAIL", self.email)
        self.key = os.getenv("CF_KEY", self.key)
        self.token = os.getenv("CF_API_TOKEN", self.token)
        self.timeout = float(os.getenv("CF_TIMEOUT", self.timeout))

    @property
    def has_credentials(self) -> bool:
        """Check if enough credentials are set to authenticate."""
        return bool(self.token or (self.email and self.key))

    def auth_headers(self) -> dict[str, str]:
        """Build the authentication headers for API requests."""
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {"X-Auth-Email": self.email, "X-Auth-Key": self.key}
