"""
External items client - reads posts from the upstream partner service.

Usage:
    from services.external_items import ExternalItemsClient

    client = ExternalItemsClient()
    payload = client.fetch_items()
"""

import logging
from typing import Any, Optional

import requests

from config import Config

logger = logging.getLogger(__name__)


class ExternalItemsError(Exception):
    """Upstream service unreachable or answered with an error."""
    pass


class ExternalItemsClient:
    """
    Thin wrapper over a requests.Session.

    No retries: a failed call surfaces immediately as ExternalItemsError.
    """

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.url = url or Config.EXTERNAL_API_URL
        self.timeout = timeout or Config.EXTERNAL_API_TIMEOUT
        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/json",
            "User-Agent": "PartnerHubAPI/1.0",
        })

    def fetch_items(self) -> Any:
        """
        Fetch the upstream payload as decoded JSON.

        Raises:
            ExternalItemsError: On network errors, non-2xx status or invalid JSON.
        """
        try:
            response = self._session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.warning(f"External items request to {self.url} failed: {e}")
            raise ExternalItemsError(f"External items service failed: {e}") from e
        except ValueError as e:
            logger.warning(f"External items response from {self.url} is not JSON: {e}")
            raise ExternalItemsError("External items service returned invalid JSON") from e
