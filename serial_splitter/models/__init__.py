"""Domain models for the serial number expansion tool.

This package contains the value types shared by the expansion engine,
the configuration layer and the workbook I/O code.
"""

from .config_models import AppConfig, ExpansionConfig
from .delimiter_rule import DEFAULT_RULES, DelimiterRule
from .error_item import ErrorItem, ErrorReason
from .processed_result import DelimiterStat, ProcessedResult

__all__ = [
    # Configuration models
    "AppConfig",
    "DelimiterRule",
    "DEFAULT_RULES",
    "ExpansionConfig",
    # Result models
    "DelimiterStat",
    "ErrorItem",
    "ErrorReason",
    "ProcessedResult",
]
