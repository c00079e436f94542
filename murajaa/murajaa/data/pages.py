"""
Mushaf page geometry.

Line counts of the standard Medina Mushaf (602 pages) and conversions
between (page, line) positions and global line numbers.
"""

from murajaa.exceptions import ProgressionError


QURAN_TOTAL_PAGES = 602

STANDARD_LINES_PER_PAGE = 15

# Pages with a short layout: Al-Fatiha and the opening of Al-Baqarah
SHORT_PAGE_LINES: dict[int, int] = {
    1: 7,
    2: 6,
}

# Pages with at most this many lines skip the join and second learning stages
SIMPLE_PAGE_MAX_LINES = 7

_SHORT_PAGES_TOTAL = sum(SHORT_PAGE_LINES.values())


def _check_page(page: int, total_pages: int = QURAN_TOTAL_PAGES) -> None:
    if not 1 <= page <= total_pages:
        raise ProgressionError(f"Page must be between 1 and {total_pages}, got {page}", page=page)


def get_lines_per_page(page: int) -> int:
    """
    Number of lines on a page.

    Raises:
        ProgressionError: If the page is out of range

    Examples:
        >>> get_lines_per_page(1)
        7
        >>> get_lines_per_page(300)
        15
    """
    _check_page(page)
    return SHORT_PAGE_LINES.get(page, STANDARD_LINES_PER_PAGE)


def is_simple_page(total_lines: int) -> bool:
    """Whether a page is short enough to go straight from learning to the full page."""
    return total_lines <= SIMPLE_PAGE_MAX_LINES


def get_total_lines() -> int:
    """Total number of lines in the Mushaf (9013)."""
    return _SHORT_PAGES_TOTAL + (QURAN_TOTAL_PAGES - len(SHORT_PAGE_LINES)) * STANDARD_LINES_PER_PAGE


def get_global_line_number(page: int, line: int) -> int:
    """
    1-based line number counted from the start of the Mushaf.

    Raises:
        ProgressionError: If the page or line is out of range
    """
    total = get_lines_per_page(page)
    if not 1 <= line <= total:
        raise ProgressionError(
            f"Line must be between 1 and {total} on page {page}, got {line}",
            page=page,
            line=line,
        )

    preceding = sum(lines for p, lines in SHORT_PAGE_LINES.items() if p < page)
    full_pages = max(0, page - 1 - len(SHORT_PAGE_LINES))
    return preceding + full_pages * STANDARD_LINES_PER_PAGE + line


def get_position_from_global_line(global_line: int) -> tuple[int, int]:
    """
    (page, line) for a global line number.

    Raises:
        ProgressionError: If the number is outside 1..get_total_lines()
    """
    if not 1 <= global_line <= get_total_lines():
        raise ProgressionError(
            f"Global line must be between 1 and {get_total_lines()}, got {global_line}"
        )

    remaining = global_line
    for page in sorted(SHORT_PAGE_LINES):
        if remaining <= SHORT_PAGE_LINES[page]:
            return page, remaining
        remaining -= SHORT_PAGE_LINES[page]

    page_offset, line = divmod(remaining - 1, STANDARD_LINES_PER_PAGE)
    return len(SHORT_PAGE_LINES) + 1 + page_offset, line + 1


def is_last_page(page: int, total_pages: int = QURAN_TOTAL_PAGES) -> bool:
    """Whether ``page`` is the final page of the Mushaf."""
    return page >= total_pages
