"""
Public IP discovery.

The public address is read from the ipw.cn echo service, which answers a
plain GET with the caller's address as the response body.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from namesilo_ddns.errors import EmptyResultError, TransportError

if TYPE_CHECKING:
    from typing import Final


IPV4_ECHO_URL: Final[str] = "https://4.ipw.cn"
IPV6_ECHO_URL: Final[str] = "https://6.ipw.cn"


logger = logging.getLogger(__name__)


def get_public_ip(client: httpx.Client, *, ipv6: bool = False) -> str:
    """
    Get the caller's current public IP address.

    The returned text is not validated; whatever the echo service answers
    is used as the record value.

    Parameters
    ----------
    client : httpx.Client
        HTTP client (carries the timeout).
    ipv6 : bool, optional
        Query the IPv6 endpoint instead of the IPv4 one.

    Returns
    -------
    str
        The IP address, stripped of surrounding whitespace.

    Raises
    ------
    TransportError
        If the request fails or returns a non-success status.
    EmptyResultError
        If the response body is empty.
    """
    url = IPV6_ECHO_URL if ipv6 else IPV4_ECHO_URL

    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        msg = f"Failed to get IP from {url}: {e}"
        raise TransportError(msg) from e

    logger.debug("[ip] GET %s -> %d", url, response.status_code)

    ip = response.text.strip()
    if not ip:
        msg = "Unable to obtain IP value"
        raise EmptyResultError(msg)

    return ip
