"""Centralized symbols for consistent console output."""


class LogSymbols:
    """Unicode symbols for log messages."""
    
    SUCCESS = "✓"
    ERROR = "✗"
    ERROR_BOLD = "❌"     # U+274C - Cross mark (bold error for summaries)
    WARNING = "⚠️"
    INFO = "ℹ"
    NOT_INSTALLED = "○"
    DOWNLOADING = "⬇"    # U+2B07 - Download in progress
    
    # List and formatting
    BULLET = "•"         # U+2022 - Bullet point for lists
    ARROW_RIGHT = "→"    # U+2192 - Rightwards arrow (for "A → B" transitions)
    SEPARATOR = "─"      # U+2500 - Box drawing light horizontal (line separator)
