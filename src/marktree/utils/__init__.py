"""Utility modules for marktree.

Provides:
- text: html_escape, trim_indents, normalize_label
- logger: get_logger for logging
"""

from marktree.utils.logger import get_logger
from marktree.utils.text import html_escape, normalize_label, trim_indents

__all__ = [
    "get_logger",
    "html_escape",
    "normalize_label",
    "trim_indents",
]
