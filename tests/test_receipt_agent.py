"""Tests for the LLM receipt agent."""

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from jayloy.agents.receipt_agent import ReceiptAgent
from jayloy.config import JayloyConfig
from jayloy.receipts import ReceiptParseError


def llm_reply(content: str) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def receipt(tmp_path: Path) -> Path:
    image = tmp_path / "receipt.jpg"
    image.write_bytes(b"\xff\xd8\xff")
    return image


@pytest.fixture
def agent() -> ReceiptAgent:
    return ReceiptAgent(JayloyConfig(llm={"model": "gemini/gemini-2.0-flash", "api_key": "k"}))


class TestReceiptAgent:
    @pytest.mark.asyncio
    async def test_parse(self, agent: ReceiptAgent, receipt: Path) -> None:
        reply = '```json\n{"vendor": "Lucky Supermarket", "date": "2025-03-02", "total_amount": 12.25, "items": []}\n```'
        with patch("litellm.acompletion", new=AsyncMock(return_value=llm_reply(reply))) as mock:
            parsed = await agent.parse(receipt)

        assert parsed.vendor == "Lucky Supermarket"
        assert parsed.total_amount == 12.25

        kwargs = mock.call_args.kwargs
        assert kwargs["model"] == "gemini/gemini-2.0-flash"
        assert kwargs["api_key"] == "k"
        messages = kwargs["messages"]
        assert messages[0]["role"] == "system"
        content = messages[1]["content"]
        assert "dividing by 4000" in content[0]["text"]
        assert content[1]["image_url"]["url"].startswith("data:image/jpeg;base64,")

    @pytest.mark.asyncio
    async def test_llm_failure_becomes_parse_error(self, agent: ReceiptAgent, receipt: Path) -> None:
        with patch("litellm.acompletion", new=AsyncMock(side_effect=TimeoutError("slow"))):
            with pytest.raises(ReceiptParseError, match="LLM request failed"):
                await agent.parse(receipt)

    @pytest.mark.asyncio
    async def test_unparseable_reply(self, agent: ReceiptAgent, receipt: Path) -> None:
        with patch("litellm.acompletion", new=AsyncMock(return_value=llm_reply("no idea"))):
            with pytest.raises(ReceiptParseError):
                await agent.parse(receipt)

    @pytest.mark.asyncio
    async def test_missing_file(self, agent: ReceiptAgent, tmp_path: Path) -> None:
        with pytest.raises(ReceiptParseError):
            await agent.parse(tmp_path / "gone.jpg")
