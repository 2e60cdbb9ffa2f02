"""
Client Data Connector

Fetches a client's campaign payload from the dashboard backend:

    GET {base_url}/clients/{client_id}/data

The response body is arbitrary JSON (object or array); locating the campaign
entries inside it is the Payload Locator's job, not this connector's.
"""
from typing import Any, Dict, Optional
from urllib.parse import quote
import httpx

from campaign_analytics.connectors.base_connector import BaseConnector
from campaign_analytics.config import Settings, get_settings
from campaign_analytics.utils.logger import log


class ClientDataError(Exception):
    """Non-success response from the client data endpoint"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ClientDataConnector(BaseConnector):
    """
    Connector for the per-client campaign data endpoint

    The client identity is always passed in explicitly. For unscoped loads
    the configured session_client_id is used; without one no request is made
    and the payload is None.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize connector

        Args:
            settings: Settings to read endpoint and retry configuration from
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        super().__init__("ClientData")
        settings = settings or get_settings()
        self.base_url = settings.client_data_base_url.rstrip("/")
        self.api_token = settings.client_data_api_token
        self.timeout = settings.client_data_timeout_seconds
        self.session_client_id = (settings.session_client_id or "").strip() or None
        self.transport = transport

        self.RETRY_MAX_ATTEMPTS = max(1, settings.client_data_max_attempts)
        self.RETRY_BASE_DELAY = settings.client_data_retry_base_delay

    def _get_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    def request_url(self, client_id: str) -> str:
        return f"{self.base_url}/clients/{quote(client_id, safe='')}/data"

    async def fetch_client_data(self, client_id: Optional[str]) -> Any:
        """
        GET the raw payload for a client

        Returns:
            Decoded JSON body, or None when there is no identity to ask for

        Raises:
            ClientDataError: Non-200 response
            httpx.HTTPError: Transport failure
            ValueError: Body is not valid JSON
        """
        target = client_id or self.session_client_id
        if not target:
            log.info("No client id or session client configured, skipping remote fetch")
            return None

        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            response = await client.get(self.request_url(target), headers=self._get_headers())

        if response.status_code != 200:
            raise ClientDataError(
                f"Failed to fetch campaign data for client {target}: "
                f"{response.status_code} - {response.text[:200]}",
                status_code=response.status_code
            )

        return response.json()
