"""
Storefront API client for the checkout shipping address.

update_address always returns an UpdateResult; transport and decoding errors
are logged and turned into failure outcomes so the form never has to catch.
"""

from __future__ import annotations

from typing import Any

import requests

from src.domains.checkout.address import ShippingAddress
from src.domains.checkout.outcome import UpdateResult
from src.utils.config import storefront_api_timeout, storefront_api_token, storefront_api_url
from src.utils.logger import get_logger

logger = get_logger()

ADDRESS_PATH = "/user/address"

_MAX_ERROR_BODY_CHARS = 500


def _error_message(response: requests.Response) -> str:
    """Prefer the API's own message; fall back to the status line."""
    status_code = getattr(response, "status_code", None)
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    body = ""
    try:
        body = (response.text or "")[:_MAX_ERROR_BODY_CHARS]
    except Exception:
        body = ""
    logger.debug("Storefront error body: %s", body)
    return f"Could not update address (HTTP {status_code})"


class StorefrontClient:
    """
    Thin wrapper over the storefront's user address endpoint.

    base_url, token and timeout default to STOREFRONT_API_URL,
    STOREFRONT_API_TOKEN and STOREFRONT_API_TIMEOUT.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: int | None = None,
    ) -> None:
        self._base_url = (base_url or storefront_api_url() or "").rstrip("/")
        self._token = token if token is not None else storefront_api_token()
        self._timeout = timeout if timeout is not None else storefront_api_timeout()

    @property
    def configured(self) -> bool:
        return bool(self._base_url)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _url(self) -> str:
        return f"{self._base_url}{ADDRESS_PATH}"

    def update_address(self, address: ShippingAddress) -> UpdateResult:
        """
        Persist the user's shipping address.

        Args:
            address: Validated address to send.

        Returns:
            UpdateResult with success flag and the API's message. Failures
            (bad status, network error, invalid JSON, missing config) come back
            as success=False with a user-facing message.
        """
        if not self.configured:
            logger.error("STOREFRONT_API_URL not set; cannot update address")
            return UpdateResult(
                success=False,
                message="Storefront API URL not configured",
            )

        try:
            logger.info("Updating shipping address via %s", self._url())
            r = requests.post(
                self._url(),
                json=address.to_payload(),
                headers=self._headers(),
                timeout=self._timeout,
            )
            logger.info("Storefront responded with status: %s", getattr(r, "status_code", None))
            if not r.ok:
                return UpdateResult(success=False, message=_error_message(r))
            data = r.json()
        except requests.exceptions.Timeout as e:
            logger.exception("Storefront address update timed out: %s", e)
            return UpdateResult(
                success=False,
                message=f"Request timed out after {self._timeout} seconds. Please try again.",
            )
        except ValueError as e:
            # requests raises a JSONDecodeError that is also a RequestException
            logger.exception("Storefront returned invalid JSON: %s", e)
            return UpdateResult(success=False, message="Unexpected response from the store")
        except requests.RequestException as e:
            logger.exception("Storefront address update failed: %s", e)
            return UpdateResult(
                success=False,
                message="Could not reach the store. Check your connection and try again.",
            )

        if not isinstance(data, dict):
            logger.warning("Storefront returned non-object body: %r", data)
            return UpdateResult(success=False, message="Unexpected response from the store")

        result = UpdateResult.from_response(data)
        if not result.success:
            logger.info("Storefront rejected address: %s", result.message)
        return result

    def fetch_address(self) -> dict[str, Any] | None:
        """
        Load the user's saved shipping address, if any.

        Returns:
            Raw address mapping as sent by the API (camelCase keys), or None
            when nothing is stored or the request fails.
        """
        if not self.configured:
            return None
        try:
            r = requests.get(self._url(), headers=self._headers(), timeout=self._timeout)
            if r.status_code == 404:
                return None
            r.raise_for_status()
            data = r.json()
        except ValueError as e:
            logger.warning("Saved address response was not JSON: %s", e)
            return None
        except requests.RequestException as e:
            logger.warning("Could not load saved address: %s", e)
            return None

        # Either the address itself or wrapped as {"address": {...}}
        if isinstance(data, dict) and isinstance(data.get("address"), dict):
            data = data["address"]
        if not isinstance(data, dict) or not data:
            return None
        return data
