"""Requester IP resolution for lead records."""

import logging
from typing import Protocol

import httpx

from lcl_quote.submission.errors import IpLookupError

logger = logging.getLogger("lcl.ip")


class IpResolver(Protocol):
    async def resolve(self, hint: str | None = None) -> str: ...


class IpifyResolver:
    """Uses the address the caller already knows, else asks an ipify-style service.

    `hint` is the client-resolved address from the form or the forwarded
    address of the request. The lookup service answers {"ip": "..."}.
    """

    def __init__(
        self,
        lookup_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.lookup_url = lookup_url
        self.timeout = timeout
        self.transport = transport

    async def resolve(self, hint: str | None = None) -> str:
        if hint and hint.strip():
            return hint.strip()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.lookup_url)
                response.raise_for_status()
                ip = response.json().get("ip")
        except (httpx.HTTPError, ValueError) as e:
            raise IpLookupError(f"IP lookup failed: {e}") from e

        if not ip:
            raise IpLookupError("IP lookup returned no address")
        return str(ip)
