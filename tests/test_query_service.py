"""Tests for the translate-execute-analyze pipeline."""

from __future__ import annotations

from typing import Any

import pytest

from src.db.query import QueryExecutionError
from src.intent.schema import Category
from src.query_service import EXECUTION_ERROR, UNINTERPRETED_MESSAGE, QueryService


class _FakeExecutor:
    def __init__(self, rows: list[dict[str, Any]] | None = None, error: Exception | None = None) -> None:
        self.rows = rows or []
        self.error = error
        self.calls: list[str] = []

    async def __call__(self, sql: str) -> list[dict[str, Any]]:
        self.calls.append(sql)
        if self.error is not None:
            raise self.error
        return self.rows


@pytest.mark.asyncio
async def test_success_without_analysis() -> None:
    executor = _FakeExecutor(rows=[{"name": "Laptop", "category": "Electronics", "inventory": 50, "price": 1200.0}])
    service = QueryService(executor)

    result = await service.process_query("How many laptops do we have in stock?")

    assert result.success is True
    assert result.query_type == Category.inventory_check
    assert result.data == executor.rows
    assert result.metadata is not None
    assert result.metadata.result_count == 1
    assert result.metadata.query == executor.calls[0]
    assert "ILIKE '%laptops%'" in result.metadata.query
    assert result.analysis is None
    assert result.error is None


@pytest.mark.asyncio
async def test_success_with_analysis() -> None:
    executor = _FakeExecutor(rows=[{"total_revenue": 14000, "transaction_count": 2, "items_sold": 15}])
    service = QueryService(executor)

    result = await service.process_query("What is the total revenue in january", analyze=True)

    assert result.success is True
    assert result.analysis is not None
    assert "Total revenue: $14000.00" in result.analysis.insights


@pytest.mark.asyncio
async def test_empty_result_is_still_success() -> None:
    service = QueryService(_FakeExecutor(rows=[]))

    result = await service.process_query("Who are the customers in Atlantis", analyze=True)

    assert result.success is True
    assert result.metadata is not None
    assert result.metadata.result_count == 0
    assert result.analysis is not None
    assert result.analysis.insights == []


@pytest.mark.asyncio
async def test_uninterpreted_query_is_not_executed() -> None:
    executor = _FakeExecutor()
    service = QueryService(executor)

    result = await service.process_query("tell me a joke")

    assert result.success is False
    assert result.query_type == Category.unrecognized
    assert result.error == "Unrecognized query pattern"
    assert result.message == UNINTERPRETED_MESSAGE
    assert result.data == []
    assert executor.calls == []


@pytest.mark.asyncio
async def test_execution_error_is_reported() -> None:
    executor = _FakeExecutor(error=QueryExecutionError('relation "sales" does not exist'))
    service = QueryService(executor)

    result = await service.process_query("Show me sales from last month")

    assert result.success is False
    assert result.query_type == Category.sales_report
    assert result.error == EXECUTION_ERROR
    assert result.message == 'relation "sales" does not exist'
    assert result.metadata is None


@pytest.mark.asyncio
async def test_result_serializes_with_camel_case_keys() -> None:
    service = QueryService(_FakeExecutor(rows=[{"name": "T-shirt", "total_quantity_sold": 35, "total_revenue": 875.0}]))

    result = await service.process_query("Show me the top 1 products")
    payload = result.model_dump(by_alias=True, mode="json")

    assert payload["queryType"] == "top_products"
    assert payload["metadata"]["resultCount"] == 1
    assert payload["metadata"]["query"].endswith("LIMIT 1")


def test_explain_and_validate_do_not_execute() -> None:
    explanation = QueryService.explain("Show me sales from last month")
    validation = QueryService.validate("tell me a joke")

    assert explanation.interpreted_as == Category.sales_report
    assert explanation.model_dump(by_alias=True)["originalQuery"] == "Show me sales from last month"
    assert validation.valid is False
    assert validation.supported_features == []
