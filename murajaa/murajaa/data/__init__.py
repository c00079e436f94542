"""
Quran data module for Murajaa library.

Provides the spelling-variant whitelist and Mushaf page geometry.
"""

from murajaa.data.whitelist import UTHMANI_MODERN_WHITELIST
from murajaa.data.pages import (
    QURAN_TOTAL_PAGES,
    get_lines_per_page,
    is_simple_page,
    get_total_lines,
    get_global_line_number,
    get_position_from_global_line,
    is_last_page,
)

__all__ = [
    "UTHMANI_MODERN_WHITELIST",
    "QURAN_TOTAL_PAGES",
    "get_lines_per_page",
    "is_simple_page",
    "get_total_lines",
    "get_global_line_number",
    "get_position_from_global_line",
    "is_last_page",
]
