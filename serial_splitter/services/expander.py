from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..models.delimiter_rule import DEFAULT_RULES, DelimiterRule

"""Serial number value expansion.

Turns one identifier value into the ordered list of output rows it stands for.
Rules are applied in priority order and the first one that fires wins:

1. Whole-value range ("S1 to S5", "S1-S5") with start <= end: the original
   row followed by one row per member S<n>.
2. Delimiter split: the original row followed by one row per non-empty
   trimmed token. Tokens that are ascending ranges expand to their members.
3. Anything else: the row unchanged.

Descending ranges are never errors. As a whole value they fall through to
steps 2/3; as a token they are emitted literally.
"""

__all__ = [
    "Expansion",
    "RangeMatch",
    "expand",
    "match_range",
    "select_delimiter",
]

TO_RANGE = "to range"
HYPHEN_RANGE = "hyphen range"

# "to" form is tried first
_RANGE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (TO_RANGE, re.compile(r"^S(\d+)\s+to\s+S(\d+)$", re.IGNORECASE)),
    (HYPHEN_RANGE, re.compile(r"^S(\d+)\s*-\s*S(\d+)$", re.IGNORECASE)),
)
RANGE_KINDS: tuple[str, ...] = tuple(kind for kind, _ in _RANGE_PATTERNS)

# Blocks the whitespace fallback rule: "S5 to S2" must stay one token
_RANGE_SEPARATOR = re.compile(r"-|(?<![A-Za-z])to(?![A-Za-z])", re.IGNORECASE)


@dataclass(frozen=True)
class RangeMatch:
    kind: str
    start: int
    end: int

    def members(self) -> list[str]:
        return [f"S{n}" for n in range(self.start, self.end + 1)]


@dataclass(frozen=True)
class Expansion:
    rows: list[dict[str, Any]]
    delimiter: str | None = None  # rule name used to split this value
    ranges: list[str] = field(default_factory=list)  # range kinds expanded


def match_range(text: str) -> RangeMatch | None:
    """Return the ascending range ``text`` denotes, or None."""
    for kind, pattern in _RANGE_PATTERNS:
        m = pattern.match(text)
        if m is None:
            continue
        start, end = int(m.group(1)), int(m.group(2))
        if start <= end:
            return RangeMatch(kind, start, end)
        return None
    return None


def select_delimiter(value: str, rules: Sequence[DelimiterRule]) -> DelimiterRule | None:
    primary = [r for r in rules if not r.is_fallback]
    for rule in rules:
        if not rule.occurs_in(value):
            continue
        if rule.is_fallback and (
            any(other.occurs_in(value) for other in primary) or _RANGE_SEPARATOR.search(value)
        ):
            continue
        return rule
    return None


def _with_identifier(row: Mapping[str, Any], column: str, value: str) -> dict[str, Any]:
    out = dict(row)
    out[column] = value
    return out


def expand(
    value: str,
    row: Mapping[str, Any],
    column: str,
    rules: Sequence[DelimiterRule] = DEFAULT_RULES,
) -> Expansion:
    """Expand ``value`` (found under ``column`` of ``row``) into output rows.

    Parameters:
        value: Identifier text as classified (untrimmed)
        row: Source row; never mutated
        column: Row key holding the identifier; the only key ever rewritten
        rules: Delimiter rules in priority order

    Returns:
        Expansion with the output rows, the delimiter rule name used (if any)
        and the range kinds expanded along the way
    """
    whole = match_range(value)
    if whole is not None:
        rows = [dict(row)]
        rows.extend(_with_identifier(row, column, member) for member in whole.members())
        return Expansion(rows=rows, ranges=[whole.kind])

    rule = select_delimiter(value, rules)
    if rule is None:
        return Expansion(rows=[dict(row)])

    rows = [dict(row)]
    ranges: list[str] = []
    for token in rule.split(value):
        token = token.strip()
        if not token:
            continue
        inner = match_range(token)
        if inner is not None:
            rows.extend(_with_identifier(row, column, member) for member in inner.members())
            ranges.append(inner.kind)
            continue
        rows.append(_with_identifier(row, column, token))
    return Expansion(rows=rows, delimiter=rule.name, ranges=ranges)
