import logging

logger = logging.getLogger("outgrid.column_widths")

# list view indent; selectable rows also carry a "[ ] " checkbox
LIST_VIEW_OFFSET = 4
SELECTABLE_LIST_VIEW_OFFSET = 8

# the frame loses 3 columns on the left and 2 on the right
LEFT_CHROME = 3
RIGHT_CHROME = 2

DEFAULT_SAMPLE_LIMIT = 50


def list_view_offset(selectable: bool) -> int:
    return SELECTABLE_LIST_VIEW_OFFSET if selectable else LIST_VIEW_OFFSET


def usable_width(terminal_width: int, column_count: int, selectable: bool) -> int:
    return (
        terminal_width
        - LEFT_CHROME
        - column_count
        - list_view_offset(selectable)
        - RIGHT_CHROME
    )


def compute_column_widths(headers, rows, sample_limit, usable):
    """Widths start at the header length and grow to the longest sampled value.

    Only the first ``sample_limit`` columns of each row are sampled, so
    columns past that window keep their header width. The result is then
    shrunk, one character at a time off the widest column (lowest index on
    ties), until the total is strictly below ``usable``.
    """
    widths = [len(h) for h in headers]

    window = max(0, min(sample_limit, len(widths)))
    if window:
        for row in rows:
            for i, value in enumerate(row[:window]):
                n = len(value)
                if n > widths[i]:
                    widths[i] = n

    total = sum(widths)
    shrunk = False
    while widths and total >= usable:
        max_idx = 0
        for i, w in enumerate(widths):
            if w > widths[max_idx]:
                max_idx = i
        if widths[max_idx] == 0:
            break
        widths[max_idx] -= 1
        total -= 1
        shrunk = True

    if total >= usable or (shrunk and 0 in widths):
        logger.warning(
            "degenerate layout: usable width %d for %d columns, widths %s",
            usable,
            len(widths),
            widths,
        )
    return widths
