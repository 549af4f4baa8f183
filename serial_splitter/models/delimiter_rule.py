from __future__ import annotations

import re
from dataclasses import dataclass

"""DelimiterRule model.

A delimiter rule names one token separator that may join several serial
numbers in a single cell. Rules are tried in list order; the first rule whose
pattern occurs in a value is the one used to split it.

Whitespace-only patterns are fallback rules: they are only used when no other
rule matches and the value holds no range separator, so that values such as
"S5 to S2" are never split on their inner spaces.
"""

__all__ = [
    "DelimiterRule",
    "DEFAULT_RULES",
]


@dataclass(frozen=True)
class DelimiterRule:
    """Named token separator.

    Attributes:
        name: Label reported in delimiter statistics
        pattern: Literal separator text, or a regular expression when ``regex`` is set
        regex: Treat ``pattern`` as a regular expression
    """
    name: str
    pattern: str
    regex: bool = False

    @property
    def is_fallback(self) -> bool:
        return not self.pattern.strip()

    def occurs_in(self, value: str) -> bool:
        if self.regex:
            return re.search(self.pattern, value) is not None
        return self.pattern in value

    def split(self, value: str) -> list[str]:
        if self.regex:
            # groups that did not participate in a match come back as None
            return [t for t in re.split(self.pattern, value) if t is not None]
        return value.split(self.pattern)

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "pattern": self.pattern, "regex": self.regex}


# Priority order: ASCII comma, CJK commas, semicolons, then space as last resort
DEFAULT_RULES: tuple[DelimiterRule, ...] = (
    DelimiterRule("comma", ","),
    DelimiterRule("ideographic comma", "、"),
    DelimiterRule("fullwidth comma", "，"),
    DelimiterRule("semicolon", ";"),
    DelimiterRule("fullwidth semicolon", "；"),
    DelimiterRule("space", " "),
)
