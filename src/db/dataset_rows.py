"""Dataset-to-row conversion helpers.

Both the JSON dataset loader and integration tests convert a parsed dataset payload (`products`,
`sales`, `customers` lists) into row tuples matching the table column order below. Keeping the
conversion in one place prevents drift between loader behavior and test fixtures.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Any

PRODUCT_COLUMNS: tuple[str, ...] = ("id", "name", "category", "price", "inventory")
SALE_COLUMNS: tuple[str, ...] = ("id", "product_id", "quantity", "total_amount", "sale_date")
CUSTOMER_COLUMNS: tuple[str, ...] = ("id", "name", "email", "location", "joined_date")

DATASET_TABLES: dict[str, tuple[str, ...]] = {
    "products": PRODUCT_COLUMNS,
    "sales": SALE_COLUMNS,
    "customers": CUSTOMER_COLUMNS,
}


def iter_product_rows(products: Sequence[Mapping[str, Any]]) -> Iterable[tuple[Any, ...]]:
    """Yield row tuples for inserting into the `products` table."""

    for product in products:
        yield (
            int(product["id"]),
            str(product["name"]),
            str(product["category"]),
            float(product["price"]),
            int(product["inventory"]),
        )


def iter_sale_rows(sales: Sequence[Mapping[str, Any]]) -> Iterable[tuple[Any, ...]]:
    """Yield row tuples for inserting into the `sales` table."""

    for sale in sales:
        yield (
            int(sale["id"]),
            int(sale["product_id"]),
            int(sale["quantity"]),
            float(sale["total_amount"]),
            date.fromisoformat(sale["sale_date"]),
        )


def iter_customer_rows(customers: Sequence[Mapping[str, Any]]) -> Iterable[tuple[Any, ...]]:
    """Yield row tuples for inserting into the `customers` table."""

    for customer in customers:
        yield (
            int(customer["id"]),
            str(customer["name"]),
            str(customer["email"]),
            str(customer["location"]),
            date.fromisoformat(customer["joined_date"]),
        )


def iter_dataset_rows(payload: Mapping[str, Any]) -> Iterable[tuple[str, list[tuple[Any, ...]]]]:
    """Yield `(table, rows)` in foreign-key order (products before sales)."""

    yield "products", list(iter_product_rows(payload["products"]))
    yield "sales", list(iter_sale_rows(payload["sales"]))
    yield "customers", list(iter_customer_rows(payload["customers"]))
