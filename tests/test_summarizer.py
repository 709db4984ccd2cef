"""Tests for category-specific result summaries."""

from __future__ import annotations

import copy
from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from src.analysis.summarizer import _SUMMARIZERS, summarize
from src.intent.schema import FAILURE_CATEGORIES, Category


@pytest.mark.parametrize("category", [*Category, "something_else"])
def test_empty_rows_give_minimal_analysis(category: str) -> None:
    analysis = summarize([], category)
    assert analysis.summary == "Analysis of 0 results:"
    assert analysis.insights == []
    assert analysis.visualization is None


def test_every_recognized_category_has_a_summarizer() -> None:
    assert set(_SUMMARIZERS) == set(Category) - FAILURE_CATEGORIES


def test_revenue_summary() -> None:
    rows = [{"total_revenue": 14000, "transaction_count": 10, "items_sold": 40}]

    analysis = summarize(rows, Category.revenue_report)

    assert analysis.summary == "Analysis of 1 results:"
    assert analysis.insights == [
        "Total revenue: $14000.00",
        "Number of transactions: 10",
        "Items sold: 40",
        "Average revenue per transaction: $1400.00",
    ]
    assert analysis.visualization is not None
    assert analysis.visualization.type == "number"
    assert analysis.visualization.title == "Revenue Overview"
    assert analysis.visualization.value == "$14000.00"


def test_revenue_without_transactions_has_zero_average() -> None:
    rows = [{"total_revenue": None, "transaction_count": 0, "items_sold": None}]

    analysis = summarize(rows, Category.revenue_report)

    assert "Total revenue: $0.00" in analysis.insights
    assert "Average revenue per transaction: $0.00" in analysis.insights


def test_revenue_accepts_decimal_values() -> None:
    rows = [{"total_revenue": Decimal("100.50"), "transaction_count": 2, "items_sold": 3}]

    analysis = summarize(rows, Category.revenue_report)

    assert "Average revenue per transaction: $50.25" in analysis.insights


def test_sales_summary() -> None:
    rows = [
        {"product_name": "Laptop", "quantity": 5, "total_amount": 6000.0, "sale_date": date(2025, 3, 15)},
        {"product_name": "Jeans", "quantity": 12, "total_amount": 720.0, "sale_date": date(2025, 2, 1)},
    ]

    analysis = summarize(rows, Category.sales_report)

    assert analysis.insights == [
        "Total sales: $6720.00",
        "Total items sold: 17",
        "Average order value: $3360.00",
        "Most recent sale: 2025-03-15",
    ]
    chart = analysis.visualization
    assert chart is not None
    assert chart.type == "bar"
    assert chart.labels == ["Laptop", "Jeans"]
    assert chart.data == [6000.0, 720.0]


def test_inventory_summary() -> None:
    rows = [
        {"name": "Laptop", "category": "Electronics", "inventory": 50, "price": 1200.0},
        {"name": "Headphones", "category": "Electronics", "inventory": 100, "price": 100.0},
        {"name": "Jacket", "category": "Clothing", "inventory": 5, "price": 725.0},
    ]

    analysis = summarize(rows, Category.inventory_check)

    assert analysis.insights == [
        "Total inventory: 155 items",
        "Categories represented: 2",
        "Low stock items (< 10): 1",
        "Average price: $675.00",
    ]
    chart = analysis.visualization
    assert chart is not None
    assert chart.type == "pie"
    assert chart.labels == ["Electronics", "Clothing"]
    assert chart.data == [150, 5]


def test_top_products_summary() -> None:
    rows = [
        {"name": "T-shirt", "total_quantity_sold": 35, "total_revenue": 875.0},
        {"name": "Headphones", "total_quantity_sold": 23, "total_revenue": 3450.0},
        {"name": "Jeans", "total_quantity_sold": 22, "total_revenue": 1320.0},
    ]

    analysis = summarize(rows, Category.top_products)

    assert analysis.insights == [
        "Top product: T-shirt",
        "Total quantity sold: 80 items",
        "Total revenue: $5645.00",
        "Top product accounts for 43.75% of sales",
    ]
    assert analysis.visualization is not None
    assert analysis.visualization.labels == ["T-shirt", "Headphones", "Jeans"]


def test_top_products_with_nothing_sold() -> None:
    rows = [{"name": "Laptop", "total_quantity_sold": 0, "total_revenue": 0}]

    analysis = summarize(rows, Category.top_products)

    assert "Top product accounts for 0.00% of sales" in analysis.insights


def test_customer_summary(sample_dataset: dict[str, Any]) -> None:
    rows = sorted(sample_dataset["customers"], key=lambda c: c["joined_date"], reverse=True)
    before = copy.deepcopy(rows)

    analysis = summarize(rows, Category.customer_list)

    assert analysis.insights == [
        "Total customers: 5",
        "Most recent customer: James Wilson",
        "First customer: John Doe",
        "Customer acquisition timespan: 122 days",
    ]
    chart = analysis.visualization
    assert chart is not None
    assert chart.type == "line"
    assert chart.labels == ["Initial", "Current"]
    assert chart.data == [1, 5]
    assert rows == before


def test_customer_dates_in_free_form_text() -> None:
    rows = [
        {"name": "A", "joined_date": "June 15, 2024"},
        {"name": "B", "joined_date": date(2024, 6, 25)},
    ]

    analysis = summarize(rows, Category.customer_list)

    assert "Customer acquisition timespan: 10 days" in analysis.insights
    assert "Most recent customer: B" in analysis.insights


@pytest.mark.parametrize(
    ("rows", "category"),
    [
        ([{"total_revenue": 10}], Category.revenue_report),
        ([{"total_revenue": 1, "transaction_count": float("inf"), "items_sold": 1}], Category.revenue_report),
        (
            [{"product_name": "Laptop", "quantity": float("inf"), "total_amount": 1.0, "sale_date": date(2025, 1, 1)}],
            Category.sales_report,
        ),
        ([{"name": "A", "category": "B", "inventory": float("nan"), "price": 1.0}], Category.inventory_check),
        ([{"name": "A", "joined_date": "???"}], Category.customer_list),
        ([{"name": "A", "total_quantity_sold": True, "total_revenue": 1}], Category.top_products),
        ([{"message": "Cannot parse query"}], Category.unrecognized),
        ([{"x": 1}], "something_else"),
    ],
)
def test_uninterpretable_rows_get_generic_summary(rows: list[dict[str, Any]], category: str) -> None:
    analysis = summarize(rows, category)

    assert analysis.summary == "Analysis of 1 results:"
    assert analysis.insights == ["Query returned 1 results"]
    assert analysis.visualization is None
