"""Deterministic SQL builder.

The builder renders one SQL statement per query category from the category's parameters.
Identifiers (tables, columns, intervals) are strictly allowlisted; user-supplied phrases are only
ever rendered as quoted string literals, with `LIKE` wildcards escaped.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from src.intent.periods import Period, PeriodKind, resolve_period
from src.intent.schema import Category, ParameterValue
from src.sql.columns import (
    CUSTOMER_COLUMNS,
    INVENTORY_COLUMNS,
    REVENUE_COLUMNS,
    SALES_DATE_COLUMN,
    SALES_JOIN_DATE_COLUMN,
    SALES_REPORT_COLUMNS,
    TOP_PRODUCTS_COLUMNS,
)

UNRECOGNIZED_SQL = "SELECT 'Cannot parse query' AS message, 'Please try a different query' AS suggestion"
ERROR_SQL = "SELECT 'Unsupported query' AS message"

ALL_PRODUCTS = "products"


class SQLBuilderError(ValueError):
    """Raised when parameters cannot be rendered into deterministic SQL."""


_ALLOWED_INTERVALS = frozenset({"1 month", "1 year"})


def _quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _contains_literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return _quote_literal(f"%{escaped}%")


def _where_and(clauses: list[str]) -> str:
    if not clauses:
        return ""
    return "WHERE " + " AND ".join(clauses)


def _select(columns: tuple[str, ...]) -> str:
    return "SELECT " + ", ".join(columns)


def _period_clause(column_ref: str, period: Period) -> str | None:
    if period.kind == PeriodKind.relative:
        if period.interval not in _ALLOWED_INTERVALS:
            raise SQLBuilderError(f"Unsupported interval: {period.interval}")
        return f"{column_ref} >= CURRENT_DATE + INTERVAL '-{period.interval}'"

    if period.kind == PeriodKind.month:
        if period.year is None or period.month is None or not 1 <= period.month <= 12:
            raise SQLBuilderError("month period requires a year and a month in 1..12")
        return f"to_char({column_ref}, 'YYYY-MM') = '{period.year:04d}-{period.month:02d}'"

    return None


def _text_param(parameters: Mapping[str, ParameterValue], name: str) -> str:
    value = parameters.get(name, "")
    if not isinstance(value, str):
        raise SQLBuilderError(f"{name} must be a string")
    return value


def build_sales_report_sql(time_period: str) -> str:
    """Sales joined to their product, newest first."""

    clauses: list[str] = []
    clause = _period_clause(SALES_JOIN_DATE_COLUMN, resolve_period(time_period))
    if clause is not None:
        clauses.append(clause)

    return (
        f"{_select(SALES_REPORT_COLUMNS)} FROM sales s JOIN products p ON s.product_id = p.id "
        f"{_where_and(clauses)} ORDER BY s.sale_date DESC"
    )


def build_inventory_sql(product: str) -> str:
    """Products by inventory level, optionally filtered by a name fragment."""

    clauses: list[str] = []
    if product and product != ALL_PRODUCTS:
        clauses.append(f"name ILIKE {_contains_literal(product)}")

    return f"{_select(INVENTORY_COLUMNS)} FROM products {_where_and(clauses)} ORDER BY inventory DESC"


def build_top_products_sql(limit: int) -> str:
    """Best sellers by quantity sold."""

    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise SQLBuilderError("limit must be a positive integer")

    return (
        f"{_select(TOP_PRODUCTS_COLUMNS)} FROM sales s JOIN products p ON s.product_id = p.id "
        f"GROUP BY s.product_id, p.name ORDER BY total_quantity_sold DESC LIMIT {limit}"
    )


def build_revenue_sql(time_period: str) -> str:
    """A single aggregate row: revenue, transaction count and items sold."""

    clauses: list[str] = []
    clause = _period_clause(SALES_DATE_COLUMN, resolve_period(time_period))
    if clause is not None:
        clauses.append(clause)

    return f"{_select(REVENUE_COLUMNS)} FROM sales {_where_and(clauses)}"


def build_customer_list_sql(location: str) -> str:
    """Customers whose location contains the phrase, most recent first."""

    clauses: list[str] = []
    if location:
        clauses.append(f"location ILIKE {_contains_literal(location)}")

    return f"{_select(CUSTOMER_COLUMNS)} FROM customers {_where_and(clauses)} ORDER BY joined_date DESC"


def _limit_param(parameters: Mapping[str, ParameterValue]) -> int:
    value = parameters.get("limit")
    if not isinstance(value, int):
        raise SQLBuilderError("limit must be an integer")
    return value


_BUILDERS: dict[Category, Callable[[Mapping[str, ParameterValue]], str]] = {
    Category.sales_report: lambda p: build_sales_report_sql(_text_param(p, "timePeriod")),
    Category.inventory_check: lambda p: build_inventory_sql(_text_param(p, "product")),
    Category.top_products: lambda p: build_top_products_sql(_limit_param(p)),
    Category.revenue_report: lambda p: build_revenue_sql(_text_param(p, "timePeriod")),
    Category.customer_list: lambda p: build_customer_list_sql(_text_param(p, "location")),
    Category.unrecognized: lambda _p: UNRECOGNIZED_SQL,
    Category.error: lambda _p: ERROR_SQL,
}


def build_query(category: Category, parameters: Mapping[str, ParameterValue]) -> str:
    """Render the SQL statement for a category and its parameters.

    Raises:
        SQLBuilderError: If the category is unknown or its parameters are malformed.
    """

    try:
        builder = _BUILDERS[category]
    except KeyError as exc:
        raise SQLBuilderError(f"Unsupported category: {category}") from exc

    return builder(parameters)
