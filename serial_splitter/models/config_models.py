from __future__ import annotations

from dataclasses import dataclass, field

from .delimiter_rule import DEFAULT_RULES, DelimiterRule

"""Config dataclasses for the serial number expansion tool.

ExpansionConfig is the explicit value handed to the expansion engine; it
replaces any process-wide rule state. AppConfig wraps it with the settings
used only by the command line and workbook I/O layers.
"""

__all__ = [
    "AppConfig",
    "DEFAULT_ALIASES",
    "ExpansionConfig",
]

DEFAULT_ALIASES: tuple[str, ...] = ("SERIAL_NUMBER", "serial_number", "Serial Number")


@dataclass(frozen=True)
class ExpansionConfig:
    """Settings consumed by the expansion engine.

    identifier_aliases are tried in order; delimiter_rules are tried in
    priority order. header_offset turns a 0-based data row index into the
    worksheet row number shown to users (2 = header on the first line).
    """
    identifier_aliases: tuple[str, ...] = DEFAULT_ALIASES
    delimiter_rules: tuple[DelimiterRule, ...] = DEFAULT_RULES
    header_offset: int = 2

    def with_rules(self, rules: tuple[DelimiterRule, ...]) -> ExpansionConfig:
        return ExpansionConfig(
            identifier_aliases=self.identifier_aliases,
            delimiter_rules=tuple(rules),
            header_offset=self.header_offset,
        )


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object for the command line tool."""
    expansion: ExpansionConfig = field(default_factory=ExpansionConfig)
    preview_limit: int = 50  # rows shown in the preview table
    max_file_mb: float = 10  # upload size cap
    output_suffix: str = "_processed"  # appended to the input stem

    @property
    def max_file_bytes(self) -> int:
        return int(self.max_file_mb * 1024 * 1024)
