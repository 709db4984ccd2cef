"""Tests for dataset parsing and migration discovery (no database needed)."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from src.db.dataset_rows import DATASET_TABLES, iter_dataset_rows
from src.db.load_json import _load_json_bytes, validate_payload
from src.db.migrate import list_migration_files


def test_rows_are_yielded_in_foreign_key_order(sample_dataset: dict[str, Any]) -> None:
    tables = [table for table, _rows in iter_dataset_rows(sample_dataset)]
    assert tables == ["products", "sales", "customers"]


def test_rows_match_table_columns(sample_dataset: dict[str, Any]) -> None:
    rows = dict(iter_dataset_rows(sample_dataset))

    assert len(rows["products"]) == 5
    assert len(rows["sales"]) == 10
    assert len(rows["customers"]) == 5
    for table, table_rows in rows.items():
        assert all(len(row) == len(DATASET_TABLES[table]) for row in table_rows)

    assert rows["sales"][0] == (1, 1, 5, 6000.0, date(2025, 1, 15))
    assert rows["customers"][0][4] == date(2024, 6, 15)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"products": [], "sales": []},
        {"products": [], "sales": {}, "customers": []},
    ],
)
def test_validate_payload_rejects_bad_shape(payload: Any) -> None:
    with pytest.raises(ValueError, match="Unexpected dataset format"):
        validate_payload(payload)


def test_exactly_one_source_is_required() -> None:
    with pytest.raises(ValueError):
        _load_json_bytes(path=None, url=None, sample=False)
    with pytest.raises(ValueError):
        _load_json_bytes(path="data.json", url=None, sample=True)


def test_sample_source_is_bundled() -> None:
    assert b'"products"' in _load_json_bytes(path=None, url=None, sample=True)


def test_migrations_are_ordered() -> None:
    assert [p.name for p in list_migration_files()] == [
        "001_create_tables.sql",
        "002_create_indexes.sql",
    ]
