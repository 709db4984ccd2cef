"""Query pipeline: translate, execute, optionally analyze.

The service is the boundary exposed to the bot. Translation and analysis are pure; the only
suspension point is the executor call. Three outcomes are kept distinct:
    - success,
    - the phrase could not be interpreted (nothing is executed),
    - the database failed to run the generated statement.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import monotonic
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from src.analysis.schema import Analysis
from src.analysis.summarizer import summarize
from src.db.query import QueryExecutionError
from src.intent.parser import explain_query, translate, validate_query
from src.intent.schema import Category, QueryExplanation, QueryValidation

logger = logging.getLogger(__name__)

UNINTERPRETED_MESSAGE = "Unable to understand the query. Please try a different phrasing."
EXECUTION_ERROR = "Database execution error"


class RowExecutor(Protocol):
    """Runs a fully rendered SQL statement and returns its rows."""

    async def __call__(self, sql: str) -> list[dict[str, Any]]: ...


class QueryMetadata(BaseModel):
    """Execution details returned alongside the rows."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    result_count: int = Field(serialization_alias="resultCount")
    query: str
    explanation: str


class QueryResult(BaseModel):
    """Outcome of processing one request.

    On success `query_type`, `data` and `metadata` are set (and `analysis` when requested). On
    failure `error` and `message` describe what went wrong.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool
    query_type: Category | None = Field(default=None, serialization_alias="queryType")
    data: list[dict[str, Any]] = Field(default_factory=list)
    metadata: QueryMetadata | None = None
    analysis: Analysis | None = None
    error: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class QueryService:
    """Natural-language query entry points backed by a row executor."""

    executor: RowExecutor

    async def process_query(self, text: str, *, analyze: bool = False) -> QueryResult:
        """Translate and execute a request; summarize the rows when `analyze` is set."""

        started = monotonic()
        intent = translate(text)

        if not intent.is_valid:
            logger.info("uninterpreted category=%s reason=%s", intent.category, intent.error)
            return QueryResult(
                success=False,
                query_type=intent.category,
                error=intent.error,
                message=UNINTERPRETED_MESSAGE,
            )

        try:
            rows = await self.executor(intent.query_text)
        except QueryExecutionError as exc:
            logger.warning(
                "execution failed category=%s sql=%s reason=%s",
                intent.category,
                intent.query_text,
                exc,
            )
            return QueryResult(
                success=False,
                query_type=intent.category,
                error=EXECUTION_ERROR,
                message=str(exc),
            )

        analysis = summarize(rows, intent.category) if analyze else None

        latency_ms = int((monotonic() - started) * 1000)
        logger.info(
            "handled category=%s rows=%d analyze=%s latency_ms=%d",
            intent.category,
            len(rows),
            analyze,
            latency_ms,
        )
        return QueryResult(
            success=True,
            query_type=intent.category,
            data=rows,
            metadata=QueryMetadata(
                result_count=len(rows),
                query=intent.query_text,
                explanation=intent.explanation,
            ),
            analysis=analysis,
        )

    @staticmethod
    def explain(text: str) -> QueryExplanation:
        """How the text would be interpreted; nothing is executed."""

        return explain_query(text)

    @staticmethod
    def validate(text: str) -> QueryValidation:
        """Whether the text can be processed; nothing is executed."""

        return validate_query(text)
