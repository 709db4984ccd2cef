"""Allowlisted SQL identifiers.

All tables, projections and sort keys referenced in generated SQL come from these constants; user
text only ever reaches SQL as a quoted literal.
"""

from __future__ import annotations

SCHEMA_TABLES: tuple[str, ...] = ("products", "sales", "customers")

SALES_REPORT_COLUMNS: tuple[str, ...] = (
    "p.name AS product_name",
    "s.quantity",
    "s.total_amount",
    "s.sale_date",
)

INVENTORY_COLUMNS: tuple[str, ...] = ("name", "category", "inventory", "price")

TOP_PRODUCTS_COLUMNS: tuple[str, ...] = (
    "p.name",
    "SUM(s.quantity) AS total_quantity_sold",
    "SUM(s.total_amount) AS total_revenue",
)

REVENUE_COLUMNS: tuple[str, ...] = (
    "COALESCE(SUM(total_amount), 0) AS total_revenue",
    "COUNT(*) AS transaction_count",
    "COALESCE(SUM(quantity), 0) AS items_sold",
)

CUSTOMER_COLUMNS: tuple[str, ...] = ("name", "email", "location", "joined_date")

# Date column the period filter applies to, per query shape.
SALES_JOIN_DATE_COLUMN = "s.sale_date"
SALES_DATE_COLUMN = "sale_date"
