# promptsql/core/engine/intent.py
"""
INTENT MATCHER - Turn a free-text prompt into one of a few query shapes

Rules are evaluated top to bottom, first match wins:

    1. "with name" → name search on the display column
    2. "name"      → name search on the display column
    3. "top"       → ORDER BY follower_count / campaign_budget / budget DESC LIMIT 10
    4. "platform" / "industry" / "age" / "location" / "status" → ILIKE filter
    5. nothing     → first 20 rows

Keyword tests are case-insensitive substring checks, so "stop" triggers "top"
and "page" triggers "age"; the vocabulary is small on purpose.

Only column names that exist on the table are ever put into an Intent. The
text extracted from the prompt is a value and travels as a bound parameter.

Examples (table with display column "full_name" and a "platform" column):
    "with name john"         → NAME_SEARCH full_name, "%john%"
    "platform tiktok please" → FILTER platform, "%tiktok%"
    "hello"                  → DEFAULT, limit 20
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from promptsql.core.models import TableDescriptor

DEFAULT_LIMIT = 20
TOP_LIMIT = 10

# Sort key candidates for "top", in priority order
TOP_SORT_COLUMNS = ("follower_count", "campaign_budget", "budget")

# keyword in the prompt → column it filters on
FILTER_KEYWORDS = (
    ("platform", "platform"),
    ("industry", "industry"),
    ("age", "age_range"),
    ("location", "location"),
    ("status", "status"),
)


class QueryShape(str, Enum):
    DEFAULT = "default"
    NAME_SEARCH = "name_search"
    TOP_N = "top_n"
    FILTER = "filter"


@dataclass(frozen=True)
class Intent:
    shape: QueryShape
    column: Optional[str] = None
    fragment: Optional[str] = None
    limit: int = DEFAULT_LIMIT

    @property
    def parameter(self) -> Optional[str]:
        """The partial-match pattern bound into the query, if any."""
        if self.fragment is None:
            return None
        return f"%{self.fragment}%"


DEFAULT_INTENT = Intent(QueryShape.DEFAULT)


# ============================================================================
# EXTRACTION
# ============================================================================


def extract_after(prompt: str, keyword: str) -> str:
    """
    First word following `keyword` in the prompt, original case kept.

    Only the text between the first and the second occurrence of the keyword
    is looked at. No word after the keyword gives "".

    Examples:
        ("with name John Smith", "with name") → "John"
        ("platform   tiktok", "platform")     → "tiktok"
        ("show name", "name")                 → ""
    """
    parts = re.split(re.escape(keyword), prompt, maxsplit=2, flags=re.IGNORECASE)
    if len(parts) < 2:
        return ""

    words = parts[1].split()
    return words[0] if words else ""


# ============================================================================
# RULES
# ============================================================================


@dataclass(frozen=True)
class Rule:
    """
    One entry of the matcher.

    predicate(table, lowered_prompt) decides whether the rule fires,
    extractor(prompt) pulls the value out of the raw prompt (None when the
    shape takes no value), builder(table, value) produces the Intent.
    """

    name: str
    predicate: Callable[[TableDescriptor, str], bool]
    extractor: Callable[[str], Optional[str]]
    builder: Callable[[TableDescriptor, Optional[str]], Intent]


def no_value(prompt: str) -> Optional[str]:
    return None


def name_search_rule(trigger: str) -> Rule:
    return Rule(
        name=trigger,
        predicate=lambda table, lowered: (
            trigger in lowered and table.has_column(table.resolved_display)
        ),
        extractor=lambda prompt: extract_after(prompt, trigger),
        builder=lambda table, value: Intent(
            QueryShape.NAME_SEARCH, column=table.resolved_display, fragment=value
        ),
    )


def top_sort_column(table: TableDescriptor) -> Optional[str]:
    return next((col for col in TOP_SORT_COLUMNS if table.has_column(col)), None)


def build_top(table: TableDescriptor, value: Optional[str]) -> Intent:
    # "top" without a sortable column still claims the prompt
    column = top_sort_column(table)
    if column is None:
        return DEFAULT_INTENT
    return Intent(QueryShape.TOP_N, column=column, limit=TOP_LIMIT)


def filter_rule(keyword: str, column: str) -> Rule:
    return Rule(
        name=keyword,
        predicate=lambda table, lowered: keyword in lowered and table.has_column(column),
        extractor=lambda prompt: extract_after(prompt, keyword),
        builder=lambda table, value: Intent(
            QueryShape.FILTER, column=column, fragment=value
        ),
    )


RULES: Tuple[Rule, ...] = (
    name_search_rule("with name"),
    name_search_rule("name"),
    Rule(
        name="top",
        predicate=lambda table, lowered: "top" in lowered,
        extractor=no_value,
        builder=build_top,
    ),
    *(filter_rule(keyword, column) for keyword, column in FILTER_KEYWORDS),
)


def match(table: TableDescriptor, prompt: Optional[str]) -> Intent:
    """
    Pick the query shape for `prompt` against `table`.

    Never fails: an empty or unrecognized prompt gives the default shape.
    """
    prompt = prompt or ""
    lowered = prompt.lower()

    for rule in RULES:
        if rule.predicate(table, lowered):
            return rule.builder(table, rule.extractor(prompt))

    return DEFAULT_INTENT
