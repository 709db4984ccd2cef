"""Category-specific summaries of executed result rows.

`summarize` is pure: it never mutates the rows it is given and never raises. Empty results always
produce the minimal "0 results" shape. Rows that cannot be interpreted for their category (missing
columns, non-numeric values, unparseable dates) degrade to the generic count-only summary.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime
from operator import itemgetter
from typing import Any

import dateparser
from dateparser.conf import Settings as DateparserSettings

from src.analysis.schema import Analysis, Visualization
from src.intent.schema import Category

logger = logging.getLogger(__name__)

LOW_STOCK_THRESHOLD = 10

Row = Mapping[str, Any]
CategorySummarizer = Callable[[Sequence[Row]], tuple[list[str], Visualization]]

_DATEPARSER_SETTINGS = DateparserSettings().replace(
    DATE_ORDER="YMD",
    RETURN_AS_TIMEZONE_AWARE=False,
)


def _number(row: Row, key: str) -> int | float:
    value = row[key]
    if value is None:
        return 0
    if isinstance(value, bool):
        raise TypeError(f"{key} must be numeric, got bool")
    if isinstance(value, int | float):
        number = value
    else:
        # NUMERIC columns arrive as Decimal.
        number = float(value)
    if isinstance(number, float) and not math.isfinite(number):
        raise ValueError(f"{key} must be finite, got {value!r}")
    return number


def _count(row: Row, key: str) -> int:
    return int(_number(row, key))


def _money(value: float) -> str:
    return f"${value:.2f}"


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
        parsed = dateparser.parse(value, languages=["en"], settings=_DATEPARSER_SETTINGS)
        if parsed is not None:
            return parsed.date()
    raise ValueError(f"unparseable date: {value!r}")


def _format_date(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _summarize_sales(rows: Sequence[Row]) -> tuple[list[str], Visualization]:
    amounts = [_number(r, "total_amount") for r in rows]
    total_sales = sum(amounts)
    total_items = sum(_count(r, "quantity") for r in rows)

    # Rows arrive newest first from the sales query.
    insights = [
        f"Total sales: {_money(total_sales)}",
        f"Total items sold: {total_items}",
        f"Average order value: {_money(total_sales / len(rows))}",
        f"Most recent sale: {_format_date(rows[0]['sale_date'])}",
    ]
    chart = Visualization(
        type="bar",
        title="Sales by Product",
        labels=[str(r["product_name"]) for r in rows],
        data=amounts,
    )
    return insights, chart


def _summarize_inventory(rows: Sequence[Row]) -> tuple[list[str], Visualization]:
    per_category: dict[str, int | float] = {}
    for r in rows:
        category = str(r["category"])
        per_category[category] = per_category.get(category, 0) + _number(r, "inventory")

    total_inventory = sum(_count(r, "inventory") for r in rows)
    low_stock = sum(1 for r in rows if _number(r, "inventory") < LOW_STOCK_THRESHOLD)
    average_price = sum(_number(r, "price") for r in rows) / len(rows)

    insights = [
        f"Total inventory: {total_inventory} items",
        f"Categories represented: {len(per_category)}",
        f"Low stock items (< {LOW_STOCK_THRESHOLD}): {low_stock}",
        f"Average price: {_money(average_price)}",
    ]
    chart = Visualization(
        type="pie",
        title="Inventory by Category",
        labels=list(per_category),
        data=list(per_category.values()),
    )
    return insights, chart


def _summarize_top_products(rows: Sequence[Row]) -> tuple[list[str], Visualization]:
    quantities = [_number(r, "total_quantity_sold") for r in rows]
    total_sold = sum(quantities)
    total_revenue = sum(_number(r, "total_revenue") for r in rows)
    top_share = quantities[0] / total_sold * 100 if total_sold else 0.0

    insights = [
        f"Top product: {rows[0]['name']}",
        f"Total quantity sold: {int(total_sold)} items",
        f"Total revenue: {_money(total_revenue)}",
        f"Top product accounts for {top_share:.2f}% of sales",
    ]
    chart = Visualization(
        type="bar",
        title="Top Products by Quantity Sold",
        labels=[str(r["name"]) for r in rows],
        data=quantities,
    )
    return insights, chart


def _summarize_revenue(rows: Sequence[Row]) -> tuple[list[str], Visualization]:
    row = rows[0]
    total_revenue = _number(row, "total_revenue")
    transactions = _count(row, "transaction_count")
    per_transaction = total_revenue / transactions if transactions else 0.0

    insights = [
        f"Total revenue: {_money(total_revenue)}",
        f"Number of transactions: {transactions}",
        f"Items sold: {_count(row, 'items_sold')}",
        f"Average revenue per transaction: {_money(per_transaction)}",
    ]
    chart = Visualization(type="number", title="Revenue Overview", value=_money(total_revenue))
    return insights, chart


def _summarize_customers(rows: Sequence[Row]) -> tuple[list[str], Visualization]:
    by_join_date = sorted(((_as_date(r["joined_date"]), r) for r in rows), key=itemgetter(0))
    first_date, first = by_join_date[0]
    last_date, last = by_join_date[-1]

    insights = [
        f"Total customers: {len(rows)}",
        f"Most recent customer: {last['name']}",
        f"First customer: {first['name']}",
        f"Customer acquisition timespan: {(last_date - first_date).days} days",
    ]
    # Two-point growth indicator, not a time series.
    chart = Visualization(
        type="line",
        title="Customer Growth",
        labels=["Initial", "Current"],
        data=[1, len(rows)],
    )
    return insights, chart


_SUMMARIZERS: dict[Category, CategorySummarizer] = {
    Category.sales_report: _summarize_sales,
    Category.inventory_check: _summarize_inventory,
    Category.top_products: _summarize_top_products,
    Category.revenue_report: _summarize_revenue,
    Category.customer_list: _summarize_customers,
}


def _summarizer_for(category: str) -> CategorySummarizer | None:
    try:
        return _SUMMARIZERS.get(Category(category))
    except ValueError:
        return None


def summarize(rows: Sequence[Row], category: str) -> Analysis:
    """Summarize executed rows for the given category.

    Unknown categories, and the failure sentinels, get a count-only summary.
    """

    summary = f"Analysis of {len(rows)} results:"
    if not rows:
        return Analysis(summary=summary)

    summarizer = _summarizer_for(category)
    if summarizer is not None:
        try:
            insights, chart = summarizer(rows)
            return Analysis(summary=summary, insights=insights, visualization=chart)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("analysis degraded category=%s reason=%r", category, exc)

    return Analysis(summary=summary, insights=[f"Query returned {len(rows)} results"])
