"""
Jayloy configuration management.

Supports loading from YAML files, environment variables, and keyword overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from jayloy.analyzers.payroll import PayrollRules


class LLMConfig(BaseModel):
    """LLM provider configuration for receipt parsing (powered by litellm)."""

    model: str = Field(default="gemini/gemini-2.0-flash", description="Model identifier (litellm format)")
    api_key: str | None = Field(default=None, description="API key (or set env var)")
    api_base: str | None = Field(default=None, description="Custom API base URL")
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2048, ge=1)
    timeout: int = Field(default=60, description="Request timeout in seconds")


class ReceiptConfig(BaseModel):
    """Receipt parsing settings."""

    endpoint_url: str | None = Field(
        default=None,
        description="HTTP receipt-parsing endpoint; when unset the LLM is called directly",
    )
    timeout: float = Field(default=60.0, gt=0)
    khr_per_usd: float = Field(default=4000.0, gt=0)


class StorageConfig(BaseModel):
    """Where records are persisted."""

    backend: Literal["json", "memory"] = "json"
    data_dir: str = Field(default="./jayloy_data")


class PayrollConfig(BaseModel):
    """Cambodian payroll deduction parameters."""

    nssf_rate: float = Field(default=0.04, ge=0.0, le=1.0)
    nssf_cap: float = Field(default=200.0, ge=0.0)
    tax_threshold: float = Field(default=1300.0, ge=0.0)
    tax_rate: float = Field(default=0.10, ge=0.0, le=1.0)

    def rules(self) -> PayrollRules:
        return PayrollRules(
            nssf_rate=self.nssf_rate,
            nssf_cap=self.nssf_cap,
            tax_threshold=self.tax_threshold,
            tax_rate=self.tax_rate,
        )


class InvoicingConfig(BaseModel):
    vat_rate: float = Field(default=0.10, ge=0.0, le=1.0)
    payment_terms_days: int = Field(default=30, ge=0)


class ReportConfig(BaseModel):
    months: int = Field(default=6, ge=1, description="Length of the trailing monthly series")


class JayloyConfig(BaseModel):
    """Root configuration for Jayloy."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    receipts: ReceiptConfig = Field(default_factory=ReceiptConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    payroll: PayrollConfig = Field(default_factory=PayrollConfig)
    invoicing: InvoicingConfig = Field(default_factory=InvoicingConfig)
    reports: ReportConfig = Field(default_factory=ReportConfig)

    currency: str = Field(default="USD")

    @classmethod
    def load(cls, config_path: str | None = None, **overrides: Any) -> JayloyConfig:
        """Load configuration from file, env vars, and overrides.

        Priority: overrides > env vars > config file > defaults.
        """
        data: dict[str, Any] = {}

        # 1. Load from YAML file if provided
        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

        # 2. Override from environment variables
        env_model = os.environ.get("JAYLOY_MODEL")
        env_key = (
            os.environ.get("JAYLOY_API_KEY")
            or os.environ.get("GOOGLE_API_KEY")
            or os.environ.get("GEMINI_API_KEY")
        )
        env_base = os.environ.get("JAYLOY_API_BASE")
        env_data_dir = os.environ.get("JAYLOY_DATA_DIR")
        env_endpoint = os.environ.get("JAYLOY_RECEIPT_ENDPOINT")

        if env_model or env_key or env_base:
            llm = data.get("llm", {})
            if env_model:
                llm["model"] = env_model
            if env_key:
                llm["api_key"] = env_key
            if env_base:
                llm["api_base"] = env_base
            data["llm"] = llm

        if env_data_dir:
            storage = data.get("storage", {})
            storage["data_dir"] = env_data_dir
            data["storage"] = storage

        if env_endpoint:
            receipts = data.get("receipts", {})
            receipts["endpoint_url"] = env_endpoint
            data["receipts"] = receipts

        # 3. Apply keyword overrides
        data.update(overrides)

        return cls.model_validate(data)
