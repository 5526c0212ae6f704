import logging

from column_widths import (
    DEFAULT_SAMPLE_LIMIT,
    compute_column_widths,
    list_view_offset,
    usable_width,
)
from filter_engine import FilterView, make_predicate
from row_formatter import pad_values, underline
from row_registry import RowRegistry

logger = logging.getLogger("outgrid.session")


class GridSession:
    """Layout, rows, filter and selection state of one grid window.

    Holds no curses objects; the orchestrator feeds it filter text and mark
    toggles and asks it for the selection when the window closes.
    """

    ACCEPT = "Accept"
    CANCEL = "Cancel"
    CLOSE = "Close"

    def __init__(
        self,
        table,
        pass_through=False,
        title="",
        terminal_width=80,
        sample_limit=DEFAULT_SAMPLE_LIMIT,
        filter_mode="query",
    ):
        self.table = table
        self.pass_through = pass_through
        self.title = title
        self.cancelled = False
        self.finished = False

        headers = table.labels
        self.offset = list_view_offset(pass_through)
        self.usable_width = usable_width(terminal_width, len(headers), pass_through)
        self.widths = compute_column_widths(
            headers, table.rows, sample_limit, self.usable_width
        )

        self.header = pad_values(headers, self.offset, self.widths)
        self.header_line = underline(self.header)

        self.registry = RowRegistry.build(
            table, self.widths, self.offset, selectable=pass_through
        )
        self.view = FilterView(self.registry, make_predicate(filter_mode, headers))
        logger.info(
            "session %r: %d rows, %d columns, widths %s",
            title,
            len(self.registry),
            len(headers),
            self.widths,
        )

    # ---------- filter ----------
    def apply_filter(self, text) -> bool:
        return self.view.apply(text)

    @property
    def visible_rows(self):
        return self.view.rows

    @property
    def filter_error(self):
        return self.view.error

    # ---------- selection ----------
    @property
    def selectable(self):
        return self.pass_through

    def toggle_mark(self, row) -> bool:
        return self.registry.toggle_mark(row)

    def mark_visible(self) -> int:
        return self.registry.mark_all(self.view.rows)

    def clear_marks(self):
        self.registry.clear_marks()

    # ---------- lifecycle ----------
    def menu_items(self):
        if self.pass_through:
            return [self.ACCEPT, self.CANCEL]
        return [self.CLOSE]

    def choose(self, item):
        if item == self.CANCEL:
            self.cancel()
        elif item == self.ACCEPT:
            self.accept()
        elif item == self.CLOSE:
            self.close()
        else:
            raise ValueError(f"unknown menu item '{item}'")

    def accept(self):
        self.finished = True

    def close(self):
        self.finished = True

    def cancel(self):
        self.cancelled = True
        self.finished = True

    def harvest(self) -> set[int]:
        if self.cancelled or not self.pass_through:
            return set()
        return self.registry.marked_original_indices()
