"""Intent schema (Pydantic models).

This schema is the contract between the rules-based translator and everything downstream of it
(execution, analysis, the bot replies). Failures are represented as data on the `Intent` itself,
never as exceptions.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_MULTISPACE_RE = re.compile(r"\s+")


class Category(StrEnum):
    """Closed set of query categories, including the two failure sentinels."""

    sales_report = "sales_report"
    inventory_check = "inventory_check"
    top_products = "top_products"
    revenue_report = "revenue_report"
    customer_list = "customer_list"
    unrecognized = "unrecognized"
    error = "error"


FAILURE_CATEGORIES: frozenset[Category] = frozenset({Category.unrecognized, Category.error})

ParameterValue = str | int


class Intent(BaseModel):
    """A translated natural-language request."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    category: Category
    parameters: dict[str, ParameterValue] = Field(default_factory=dict)
    query_text: str
    explanation: str
    error: str | None = None

    @field_validator("query_text")
    @classmethod
    def normalize_query_text(cls, value: str) -> str:
        """Collapse whitespace so the query renders on a single line."""

        value = _MULTISPACE_RE.sub(" ", value).strip()
        if not value:
            raise ValueError("query_text must not be empty")
        return value

    @model_validator(mode="after")
    def validate_error_field(self) -> Intent:
        """`error` is set if and only if the category is a failure sentinel."""

        if self.category in FAILURE_CATEGORIES:
            if not self.error:
                raise ValueError(f"error is required for category={self.category}")
        elif self.error is not None:
            raise ValueError(f"error must be null for category={self.category}")
        return self

    @property
    def is_valid(self) -> bool:
        return self.category not in FAILURE_CATEGORIES


class QueryExplanation(BaseModel):
    """How a phrase would be interpreted, without executing anything."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    original_query: str = Field(serialization_alias="originalQuery")
    interpreted_as: Category = Field(serialization_alias="interpretedAs")
    parameters: dict[str, ParameterValue]
    explanation: str
    query_text: str = Field(serialization_alias="queryText")


class QueryValidation(BaseModel):
    """Whether a phrase maps onto a supported category."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    valid: bool
    category: Category
    supported_features: list[str] = Field(serialization_alias="supportedFeatures")
    feedback: str
