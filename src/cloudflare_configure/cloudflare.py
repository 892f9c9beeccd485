"""
CloudFlare v4 API Client for zone settings

Provides access to the settings of a single zone:
- Zone lookup by name
- Listing all zone settings
- Updating one setting at a time

Authentication uses either a scoped API token or the account email
and global API key, see CloudFlareConfig.
"""

import logging
from typing import Any, Dict, List, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from cloudflare_configure.config import CloudFlareConfig
from cloudflare_configure.state import ConfigItems

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CloudFlareError(Exception):
    """A failed request or an unsuccessful API response."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class CloudFlareResponse(BaseModel):
    """Envelope shared by every v4 API response."""

    success: bool
    errors: List[Dict[str, Any]] = []
    messages: List[Any] = []
    result: Any = None


class ZoneSetting(BaseModel):
    """A single zone setting as reported by the API."""

    id: str
    value: Any = None
    editable: bool = True
    modified_on: Optional[str] = None


class Zone(BaseModel):
    """The subset of zone details used for lookups."""

    id: str
    name: str
    status: Optional[str] = None


class CloudFlareClient:
    """
    Async client for the CloudFlare zone settings API.

    Usage:
        async with CloudFlareClient(CloudFlareConfig(token="...")) as client:
            zone_id = await client.get_zone_id("example.com")
            items = await client.get_config_items(zone_id)
            await client.update_setting(zone_id, "always_online", "off")
    """

    def __init__(
        self,
        config: Optional[CloudFlareConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize CloudFlare client.

        Args:
            config: API endpoint and credentials (default from environment)
            http_client: Pre-built client, left open on close()
        """
        self.config = config or CloudFlareConfig()
        self._client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.api_url,
                timeout=self.config.timeout,
                headers={
                    **self.config.auth_headers(),
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "CloudFlareClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Send a request and unwrap the response envelope.

        Args:
            method: HTTP method
            path: Path relative to the API base URL

        Returns:
            The ``result`` member of the response

        Raises:
            CloudFlareError: On transport failure or unsuccessful response
        """
        client = await self._get_client()

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"CloudFlare API request failed: {e}")
            raise CloudFlareError(f"Failed to connect to CloudFlare API: {e}") from e

        try:
            envelope = CloudFlareResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise CloudFlareError(
                f"{method} {path}: unexpected response (HTTP {response.status_code})"
            ) from e

        if response.is_error or not envelope.success:
            messages = [err.get("message", str(err)) for err in envelope.errors]
            detail = "; ".join(messages) or f"HTTP {response.status_code}"
            raise CloudFlareError(f"{method} {path}: {detail}", errors=envelope.errors)

        return envelope.result

    @staticmethod
    def _parse(model: type[ModelT], data: Any, what: str) -> ModelT:
        """Validate one API result object, failing as CloudFlareError."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise CloudFlareError(f"Malformed {what} in API response: {e}") from e

    async def get_zone_id(self, zone_name: str) -> str:
        """Look up the ID of a zone by its domain name."""
        result = await self._request("GET", "/zones", params={"name": zone_name})
        zones = [self._parse(Zone, z, "zone") for z in result or []]

        for zone in zones:
            if zone.name == zone_name:
                return zone.id

        raise CloudFlareError(f"Zone not found: {zone_name}")

    async def get_settings(self, zone_id: str) -> List[ZoneSetting]:
        """List every setting of a zone."""
        result = await self._request("GET", f"/zones/{zone_id}/settings")
        return [self._parse(ZoneSetting, s, "setting") for s in result or []]

    async def get_config_items(self, zone_id: str) -> ConfigItems:
        """Fetch the settings of a zone as a name -> value map."""
        return {setting.id: setting.value for setting in await self.get_settings(zone_id)}

    async def update_setting(self, zone_id: str, name: str, value: Any) -> ZoneSetting:
        """Change the value of a single zone setting."""
        result = await self._request(
            "PATCH", f"/zones/{zone_id}/settings/{name}", json={"value": value}
        )
        return self._parse(ZoneSetting, result, f"setting {name}")
