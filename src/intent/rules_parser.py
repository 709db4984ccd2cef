"""Rules-based English NLQ translator.

The translator is an ordered table of `(pattern, builder)` rules:
    - patterns are searched in the lowercased input, strictly in table order,
    - the first match wins; only one rule ever fires per call,
    - the last rule matches anything and yields the `unrecognized` intent.

More specific phrasings must stay above looser ones that would otherwise shadow them. Reordering
the table changes behavior.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from src.intent.normalize import clean_capture, normalize_text
from src.intent.schema import Category, Intent, ParameterValue
from src.sql.builder import ALL_PRODUCTS, ERROR_SQL, build_query

DEFAULT_TOP_LIMIT = 5
MAX_TOP_LIMIT = 1000

UNRECOGNIZED_ERROR = "Unrecognized query pattern"
BUILD_ERROR = "Failed to parse query"

IntentBuilder = Callable[[tuple[str, ...]], Intent]


@dataclass(frozen=True)
class Rule:
    """One translator rule: a named pattern and the builder fed with its captured groups."""

    name: str
    pattern: re.Pattern[str]
    builder: IntentBuilder


def _intent(category: Category, parameters: dict[str, ParameterValue], explanation: str) -> Intent:
    return Intent(
        category=category,
        parameters=parameters,
        query_text=build_query(category, parameters),
        explanation=explanation,
    )


def _parse_limit(raw: str | None) -> int:
    try:
        value = int(raw or "")
    except ValueError:
        return DEFAULT_TOP_LIMIT
    if value <= 0:
        return DEFAULT_TOP_LIMIT
    return min(value, MAX_TOP_LIMIT)


def _build_sales_report(groups: tuple[str, ...]) -> Intent:
    time_period = clean_capture(groups[0])
    return _intent(
        Category.sales_report,
        {"timePeriod": time_period},
        f"This query retrieves sales information for {time_period}, including product name, "
        "quantity sold, total amount, and sale date.",
    )


def _build_inventory_check(groups: tuple[str, ...]) -> Intent:
    product = clean_capture(groups[0])
    related = f' related to "{product}"' if product and product != ALL_PRODUCTS else ""
    return _intent(
        Category.inventory_check,
        {"product": product},
        f"This query checks the current inventory levels for products{related}, including "
        "product name, category, and available quantity.",
    )


def _build_top_products(groups: tuple[str, ...]) -> Intent:
    limit = _parse_limit(groups[0])
    return _intent(
        Category.top_products,
        {"limit": limit},
        f"This query identifies the top {limit} selling products based on quantity sold, showing "
        "product name, total quantity sold, and total revenue generated.",
    )


def _build_revenue_report(groups: tuple[str, ...]) -> Intent:
    time_period = clean_capture(groups[0])
    return _intent(
        Category.revenue_report,
        {"timePeriod": time_period},
        f"This query calculates the total revenue for {time_period}, along with the number of "
        "transactions and total items sold.",
    )


def _build_customer_list(groups: tuple[str, ...]) -> Intent:
    location = clean_capture(groups[0])
    return _intent(
        Category.customer_list,
        {"location": location},
        f"This query retrieves a list of customers from {location}, showing their name, email, "
        "location, and when they joined.",
    )


def _build_unrecognized(_groups: tuple[str, ...]) -> Intent:
    return Intent(
        category=Category.unrecognized,
        parameters={},
        query_text=build_query(Category.unrecognized, {}),
        explanation="The natural language query could not be interpreted. "
                    "Please try rephrasing your question.",
        error=UNRECOGNIZED_ERROR,
    )


ERROR_INTENT = Intent(
    category=Category.error,
    parameters={},
    query_text=ERROR_SQL,
    explanation="The query could not be processed.",
    error=BUILD_ERROR,
)

RULES: tuple[Rule, ...] = (
    Rule(
        name="sales_report",
        pattern=re.compile(r"sales (?:in|from) (.*)"),
        builder=_build_sales_report,
    ),
    # Must precede the looser inventory rule, which would also match and keep the suffix.
    Rule(
        name="inventory_available",
        pattern=re.compile(
            r"(?:how many|inventory|stock) (?:of )?(.*?) (?:do we have|available|in stock)"
        ),
        builder=_build_inventory_check,
    ),
    Rule(
        name="inventory_any",
        pattern=re.compile(r"(?:how many|inventory|stock) (?:of )?(.*)"),
        builder=_build_inventory_check,
    ),
    Rule(
        name="top_products",
        pattern=re.compile(
            r"(?:what are|show me|list) (?:the |our )?top (\d+) (?:products|selling products)"
        ),
        builder=_build_top_products,
    ),
    Rule(
        name="revenue_report",
        pattern=re.compile(
            r"(?:what is|show me|calculate) (?:the |our )?(?:revenue|total revenue|sales) "
            r"(?:in|from|for) (.*)"
        ),
        builder=_build_revenue_report,
    ),
    Rule(
        name="customer_list",
        pattern=re.compile(
            r"(?:who are|show me|list) (?:the |our )?(?:customers|clients) (?:from|in) (.*)"
        ),
        builder=_build_customer_list,
    ),
    Rule(
        name="fallback",
        pattern=re.compile(r"(.*)", flags=re.DOTALL),
        builder=_build_unrecognized,
    ),
)

RULES_BY_NAME: dict[str, Rule] = {rule.name: rule for rule in RULES}


def match_rule(text: str) -> tuple[Rule, tuple[str, ...]] | None:
    """Return the first rule matching the text together with its captured groups."""

    normalized = normalize_text(text)
    for rule in RULES:
        match = rule.pattern.search(normalized)
        if match:
            return rule, tuple(g or "" for g in match.groups())
    return None
