"""
Receipt Agent — reads a receipt photo with a vision-capable LLM.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jayloy.agents.base import BaseAgent
from jayloy.receipts import (
    RECEIPT_PROMPT,
    ParsedReceipt,
    ReceiptParseError,
    image_data_uri,
    parse_receipt_text,
    read_image,
)

logger = logging.getLogger("jayloy.agents.receipt")


class ReceiptAgent(BaseAgent):
    """Extracts vendor, date, total and line items from receipt images."""

    name = "receipt_reader"
    description = "Reads receipts into structured expense data"

    @property
    def system_prompt(self) -> str:
        return """You are a bookkeeping assistant for small businesses in Cambodia.
You read photographed receipts in Khmer, English or mixed languages and
transcribe them faithfully. You never invent items or amounts.

Always return a single valid JSON object."""

    def _build_messages(self, data: bytes, mime_type: str) -> list[dict[str, Any]]:
        prompt = RECEIPT_PROMPT.format(khr_per_usd=self.config.receipts.khr_per_usd)
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": image_data_uri(data, mime_type)}},
                ],
            }
        ]

    async def parse(self, path: str | Path) -> ParsedReceipt:
        """Read one receipt image.

        Raises:
            ReceiptParseError: The file is missing, the model call failed, or
                the reply could not be parsed.
        """
        data, mime_type = read_image(path)
        logger.info("Parsing receipt %s with %s", path, self.llm_config.model)
        try:
            reply = await self._call_llm(self._build_messages(data, mime_type))
        except Exception as e:
            raise ReceiptParseError(f"LLM request failed: {e}") from e
        return parse_receipt_text(reply)
