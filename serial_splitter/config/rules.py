from __future__ import annotations

import json
import re
from collections.abc import Iterable, Sequence
from datetime import date
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import ValidationError

from ..models.delimiter_rule import DelimiterRule

"""Delimiter rule import / export.

Rules are exchanged as a JSON array of {"name", "pattern", "regex"} objects.
Both directions are pure functions over text; reading and writing files is a
thin wrapper on top. An "id" key (present in older exports) is accepted and
ignored on import. When "regex" is absent, a pattern starting with a
backslash escape is read as a regular expression; set "regex": false to keep
such a pattern literal.
"""

__all__ = [
    "RuleFormatError",
    "dump_rules",
    "export_filename",
    "load_rules",
    "read_rules_file",
    "rules_from_data",
    "write_rules_file",
]

SCHEMA_PATH = Path(__file__).parent / "rules_schema.json"


class RuleFormatError(Exception):
    """Raised when a delimiter rule document cannot be imported."""


def rules_from_data(items: Iterable[dict[str, Any]]) -> tuple[DelimiterRule, ...]:
    """Build rules from already schema-validated dicts, checking regex syntax."""
    rules: list[DelimiterRule] = []
    for item in items:
        pattern = item["pattern"]
        regex = item.get("regex")
        if regex is None:
            # older exports store escaped patterns such as "\t" or "\|" with no flag
            regex = len(pattern) > 1 and pattern.startswith("\\")
        rule = DelimiterRule(name=item["name"], pattern=pattern, regex=bool(regex))
        if rule.regex:
            try:
                re.compile(rule.pattern)
            except re.error as e:
                raise RuleFormatError(f"rule '{rule.name}': invalid regex {rule.pattern!r}: {e}") from e
        rules.append(rule)
    return tuple(rules)


def load_rules(text: str) -> tuple[DelimiterRule, ...]:
    """Parse a JSON rule document.

    Raises:
        RuleFormatError: malformed JSON, schema violation or invalid regex
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RuleFormatError(f"invalid rules json: {e}") from e
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    try:
        jsonschema.validate(data, schema)
    except ValidationError as e:
        raise RuleFormatError(f"rules validation failed: {e.message}") from e
    return rules_from_data(data)


def dump_rules(rules: Sequence[DelimiterRule]) -> str:
    return json.dumps([r.to_dict() for r in rules], ensure_ascii=False, indent=2)


def export_filename(today: date | None = None) -> str:
    stamp = (today or date.today()).isoformat()
    return f"delimiter-rules-{stamp}.json"


def read_rules_file(path: Path) -> tuple[DelimiterRule, ...]:
    if not path.exists():
        raise RuleFormatError(f"rules file not found: {path}")
    return load_rules(path.read_text(encoding="utf-8"))


def write_rules_file(rules: Sequence[DelimiterRule], path: Path) -> Path:
    """Write rules as JSON. A directory target gets a dated default filename."""
    if path.is_dir():
        path = path / export_filename()
    path.write_text(dump_rules(rules) + "\n", encoding="utf-8")
    return path
