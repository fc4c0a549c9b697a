"""
NameSilo DNS API client.

This module implements the three NameSilo DNS operations the updater needs:
listing the records of a domain, adding a record, and updating a record.
Every operation is a GET with query parameters and answers with the same
JSON envelope, where reply code 300 means success.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from namesilo_ddns.errors import APIError, DecodeError, TransportError
from namesilo_ddns.models import APIResponse

if TYPE_CHECKING:
    from typing import Final

    from namesilo_ddns.models import DNSRecord, RecordType


# NameSilo API base URL
NAMESILO_API_BASE: Final[str] = "https://www.namesilo.com/api"

# TTL (seconds) set on every record written by this tool
RECORD_TTL: Final[int] = 7207

# HTTP timeout in seconds
HTTP_TIMEOUT: Final[float] = 30.0


logger = logging.getLogger(__name__)


class NameSiloClient:
    """
    Client for the NameSilo DNS API.

    Parameters
    ----------
    client : httpx.Client
        HTTP client used for every request.
    api_key : str
        NameSilo API key.
    base_url : str, optional
        API base URL.
    """

    def __init__(
        self,
        client: httpx.Client,
        api_key: str,
        base_url: str = NAMESILO_API_BASE,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    def list_records(self, domain: str) -> list[DNSRecord]:
        """
        List all DNS records of a domain.

        Parameters
        ----------
        domain : str
            The registrable domain (e.g., "example.com").

        Returns
        -------
        list[DNSRecord]
            Records in the order returned by NameSilo.

        Raises
        ------
        TransportError
            If the request fails.
        DecodeError
            If the response is not the expected JSON.
        APIError
            If the reply code is not 300.
        """
        response = self._request("dnsListRecords", {"domain": domain})
        return response.reply.resource_record

    def add_record(
        self,
        domain: str,
        rrtype: RecordType | str,
        rrhost: str,
        rrvalue: str,
        rrttl: int = RECORD_TTL,
    ) -> APIResponse:
        """
        Add a DNS record.

        Parameters
        ----------
        domain : str
            The registrable domain.
        rrtype : RecordType | str
            The record type.
        rrhost : str
            The host label (e.g., "home"), without the domain.
        rrvalue : str
            The record value.
        rrttl : int, optional
            Time to live in seconds.

        Returns
        -------
        APIResponse
            The successful response; ``reply.record_id`` holds the new ID.

        Raises
        ------
        TransportError
            If the request fails.
        DecodeError
            If the response is not the expected JSON.
        APIError
            If the reply code is not 300.
        """
        return self._request(
            "dnsAddRecord",
            {
                "domain": domain,
                "rrtype": str(rrtype),
                "rrhost": rrhost,
                "rrvalue": rrvalue,
                "rrttl": rrttl,
            },
        )

    def update_record(
        self,
        domain: str,
        rrid: str,
        rrhost: str,
        rrvalue: str,
        rrttl: int = RECORD_TTL,
    ) -> APIResponse:
        """
        Update an existing DNS record.

        Parameters
        ----------
        domain : str
            The registrable domain.
        rrid : str
            The ID of the record to update.
        rrhost : str
            The host label (e.g., "home"), without the domain.
        rrvalue : str
            The new record value.
        rrttl : int, optional
            Time to live in seconds.

        Returns
        -------
        APIResponse
            The successful response.

        Raises
        ------
        TransportError
            If the request fails.
        DecodeError
            If the response is not the expected JSON.
        APIError
            If the reply code is not 300.
        """
        return self._request(
            "dnsUpdateRecord",
            {
                "domain": domain,
                "rrid": rrid,
                "rrhost": rrhost,
                "rrvalue": rrvalue,
                "rrttl": rrttl,
            },
        )

    def _request(
        self,
        operation: str,
        params: dict[str, str | int],
    ) -> APIResponse:
        """
        Call a NameSilo operation and decode its reply.

        Parameters
        ----------
        operation : str
            The API operation name (e.g., "dnsListRecords").
        params : dict[str, str | int]
            Operation-specific query parameters.

        Returns
        -------
        APIResponse
            The decoded response, only when the reply code is 300.
        """
        url = f"{self._base_url}/{operation}"
        query: dict[str, str | int] = {
            "version": 1,
            "type": "json",
            "key": self._api_key,
            **params,
        }

        try:
            response = self._client.get(url, params=query)
            response.raise_for_status()
        except httpx.HTTPError as e:
            msg = f"Failed to send request: {e}"
            raise TransportError(msg) from e

        logger.debug("[namesilo] GET %s -> %d", operation, response.status_code)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("[namesilo] Response: %s", response.text)

        try:
            api_response = APIResponse.model_validate(json.loads(response.content))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            msg = f"Failed to parse JSON: {e}"
            raise DecodeError(msg) from e
        except ValidationError as e:
            msg = f"Unexpected response shape: {e}"
            raise DecodeError(msg) from e

        if not api_response.is_success:
            raise APIError(api_response.reply.code, api_response.reply.detail)

        return api_response
