"""
Receipt endpoint client — posts receipt images to an HTTP parsing service.

The service accepts multipart form data with an ``image`` file field and
answers ``{"description": "<model reply>"}``; the reply is JSON, usually
wrapped in markdown fences.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

from jayloy.receipts import ParsedReceipt, ReceiptParseError, parse_receipt_text, read_image

logger = logging.getLogger("jayloy.connectors.receipt_endpoint")


class ReceiptEndpointClient:
    """Read receipts through a remote parsing endpoint.

    Usage::

        async with ReceiptEndpointClient("https://example.com/api/llm") as client:
            receipt = await client.parse("receipt.jpg")
    """

    def __init__(
        self,
        endpoint_url: str,
        *,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ReceiptEndpointClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def describe(self, path: str | Path) -> str:
        """Upload an image and return the endpoint's raw description text.

        Raises:
            ReceiptParseError: Transport failure, non-2xx status or a reply
                without a ``description``.
        """
        data, mime_type = read_image(path)
        client = await self._get_client()
        try:
            response = await client.post(
                self.endpoint_url,
                files={"image": (Path(path).name, data, mime_type)},
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise ReceiptParseError(
                f"Receipt endpoint returned {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ReceiptParseError(f"Receipt endpoint request failed: {e}") from e

        description = body.get("description") if isinstance(body, dict) else None
        if not isinstance(description, str):
            raise ReceiptParseError("Receipt endpoint reply has no description")
        return description

    async def parse(self, path: str | Path) -> ParsedReceipt:
        """Upload an image and parse the reply into a ParsedReceipt."""
        logger.info("Sending receipt %s to %s", path, self.endpoint_url)
        return parse_receipt_text(await self.describe(path))
