"""
Inventory — stock valuation and reorder alerts.

Provides:
- Stock status per product (out / low / good)
- Total inventory value at cost
- Low-stock and out-of-stock lists
- Stock value by category
- Most valuable stock holdings
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from jayloy.analyzers.finance_metrics import color_slices
from jayloy.models.metrics import CATEGORY_PALETTE, CategorySlice
from jayloy.models.records import Product


class StockStatus(str, Enum):
    """Stock level status."""

    OUT = "out"
    LOW = "low"
    GOOD = "good"


def stock_status(product: Product) -> StockStatus:
    """Classify a product's stock against its reorder level."""
    if product.stock == 0:
        return StockStatus.OUT
    if product.stock <= product.reorder_level:
        return StockStatus.LOW
    return StockStatus.GOOD


@dataclass
class StockPosition:
    """A product's stock and its value at cost."""

    name: str
    stock: int
    reorder_level: int
    value: float


@dataclass
class InventoryReport:
    """Inventory snapshot."""

    total_value: float = 0.0
    product_count: int = 0
    low_stock: list[Product] = field(default_factory=list)
    out_of_stock: list[Product] = field(default_factory=list)
    category_values: list[CategorySlice] = field(default_factory=list)
    top_stock: list[StockPosition] = field(default_factory=list)


def inventory_report(
    products: Sequence[Product],
    *,
    top_n: int = 10,
    palette: Sequence[str] = CATEGORY_PALETTE,
) -> InventoryReport:
    """Value the inventory and flag products that need reordering.

    Args:
        products: Products in any order.
        top_n: How many of the most valuable holdings to list.
        palette: Colours for the category breakdown.

    Returns:
        InventoryReport. Low stock excludes products that are already out.
    """
    by_category: dict[str, float] = {}
    for product in products:
        by_category[product.category] = by_category.get(product.category, 0) + product.stock_value

    positions = [
        StockPosition(
            name=p.name,
            stock=p.stock,
            reorder_level=p.reorder_level,
            value=p.stock_value,
        )
        for p in products
    ]
    positions.sort(key=lambda pos: pos.value, reverse=True)

    return InventoryReport(
        total_value=sum(p.stock_value for p in products),
        product_count=len(products),
        low_stock=[p for p in products if 0 < p.stock <= p.reorder_level],
        out_of_stock=[p for p in products if p.stock == 0],
        category_values=color_slices(by_category.items(), palette),
        top_stock=positions[:top_n],
    )
