"""serial-splitter: expand serial number ranges and lists in Excel sheets."""

__version__ = "0.1.0"
