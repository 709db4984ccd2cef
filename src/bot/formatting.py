"""Plain-text rendering of service results for chat replies."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from src.analysis.schema import Analysis
from src.intent.schema import QueryExplanation, QueryValidation
from src.query_service import EXECUTION_ERROR, QueryResult

TELEGRAM_MESSAGE_LIMIT = 4096
_ELLIPSIS = "…"


def truncate(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - len(_ELLIPSIS)] + _ELLIPSIS


def _format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def _format_row(index: int, row: Mapping[str, Any]) -> str:
    cells = ", ".join(f"{key}={_format_value(value)}" for key, value in row.items())
    return f"{index}. {cells}"


def _format_analysis(analysis: Analysis) -> list[str]:
    lines = [analysis.summary]
    lines.extend(f"- {insight}" for insight in analysis.insights)
    chart = analysis.visualization
    if chart is not None:
        lines.append(f"Chart: {chart.type} \"{chart.title}\"")
    return lines


def render_result(result: QueryResult, *, max_rows: int) -> str:
    """Render a processed query as a chat reply."""

    if not result.success:
        if result.error == EXECUTION_ERROR:
            # Driver messages stay in the logs.
            return f"{EXECUTION_ERROR}. Please try again later."
        return f"{result.error}. {result.message}"

    lines: list[str] = []
    if result.metadata is not None:
        lines.append(f"{result.query_type}: {result.metadata.result_count} results")
        lines.append(result.metadata.explanation)

    lines.extend(_format_row(i, row) for i, row in enumerate(result.data[:max_rows], start=1))
    hidden = len(result.data) - max_rows
    if hidden > 0:
        lines.append(f"{_ELLIPSIS} and {hidden} more")

    if result.analysis is not None:
        lines.append("")
        lines.extend(_format_analysis(result.analysis))

    return truncate("\n".join(lines))


def render_explanation(explanation: QueryExplanation) -> str:
    parameters = ", ".join(f"{k}={v}" for k, v in explanation.parameters.items()) or "none"
    return truncate(
        "\n".join(
            [
                f"Interpreted as: {explanation.interpreted_as}",
                f"Parameters: {parameters}",
                explanation.explanation,
                f"SQL: {explanation.query_text}",
            ]
        )
    )


def render_validation(validation: QueryValidation) -> str:
    features = ", ".join(validation.supported_features) or "none"
    return "\n".join(
        [
            f"Valid: {'yes' if validation.valid else 'no'}",
            f"Category: {validation.category}",
            f"Supported features: {features}",
            validation.feedback,
        ]
    )


def render_schema(layout: Mapping[str, list[Mapping[str, Any]]]) -> str:
    lines: list[str] = []
    for table, columns in layout.items():
        lines.append(f"{table}:")
        lines.extend(f"  {c['name']} {c['type']}" for c in columns)
    return truncate("\n".join(lines) or "No tables found.")
