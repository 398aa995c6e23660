"""Agents — LLM-backed readers."""
from jayloy.agents.base import BaseAgent
from jayloy.agents.receipt_agent import ReceiptAgent

__all__ = ["BaseAgent", "ReceiptAgent"]
