import curses
import logging
import os

from action_menu import ActionMenu
from config_paths import load_config
from filter_pane import FilterPane
from grid_pane import GridPane
from screen_layout import ScreenLayout
from session import GridSession

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

logger = logging.getLogger("outgrid.orchestrator")

FOCUS_FILTER = 0
FOCUS_LIST = 1


class Orchestrator:
    PAIR_ERROR = 3

    def __init__(self, stdscr, session):
        self.stdscr = stdscr
        try:
            curses.curs_set(1)
        except curses.error:
            pass
        curses.raw()
        self.stdscr.keypad(True)
        self.stdscr.timeout(100)

        self.session = session
        self.layout = ScreenLayout(stdscr)
        self.grid = GridPane(session)
        self.filter = FilterPane()
        self.menu = ActionMenu(self.layout, session.menu_items())

        self.error_attr = curses.A_BOLD
        try:
            curses.init_pair(self.PAIR_ERROR, curses.COLOR_RED, -1)
            self.error_attr = curses.color_pair(self.PAIR_ERROR) | curses.A_BOLD
        except curses.error:
            pass

        # list has focus first; Tab reaches the filter
        self.focus = FOCUS_LIST

    # ---------------- filter ----------------

    def _apply_filter(self):
        text = self.filter.get_buffer()
        if self.session.apply_filter(text):
            self.grid.reset()
        # on failure the session keeps its previous rows and reports the error

    def _clear_filter(self):
        self.filter.reset()
        self._apply_filter()

    def _leave_filter(self):
        # the field goes back to the filter that is actually applied
        self.filter.set_buffer(self.session.view.text)
        self.focus = FOCUS_LIST

    def _relayout(self):
        self.layout = ScreenLayout(self.stdscr)
        self.menu.layout = self.layout
        if self.menu.visible:
            selected = self.menu.selected
            self.menu.open()
            self.menu.selected = selected

    # ---------------- UI ----------------

    def _draw_frame(self):
        scr = self.stdscr
        L = self.layout
        scr.erase()
        self.menu.draw_bar(scr, L.W)

        try:
            frame = scr.derwin(L.frame_h, L.W, L.frame_y, 0)
            frame.box()
        except curses.error:
            frame = None

        title = self.session.title
        if title and frame is not None:
            try:
                frame.addnstr(0, 2, f" {title} ", max(0, L.W - 4))
            except curses.error:
                pass

        usable = max(1, self.session.usable_width)
        error = self.session.filter_error
        try:
            if error:
                scr.addnstr(L.error_y, 2 + len(FilterPane.LABEL) + 1, error,
                            max(0, L.W - 4 - len(FilterPane.LABEL)), self.error_attr)
            scr.addnstr(L.header_y, L.list_x, self.session.header, max(0, L.list_w), curses.A_BOLD)
            scr.addnstr(L.underline_y, L.list_x, self.session.header_line, max(0, L.list_w))
        except curses.error:
            pass

        status = self._status_text()
        try:
            scr.addnstr(L.H - 1, 2, status, max(0, L.W - 4))
        except curses.error:
            pass

        self.filter.draw(scr, L.filter_y, 2, usable, active=False)
        scr.noutrefresh()

    def _status_text(self):
        shown = len(self.session.visible_rows)
        total = len(self.session.registry)
        text = f" {shown}/{total} rows "
        if self.session.selectable:
            marked = len(self.session.registry.marked_original_indices())
            text += f"| {marked} marked "
        return text

    def redraw(self):
        self._draw_frame()
        self.grid.draw(self.layout.list_win, active=(self.focus == FOCUS_LIST))

        if self.menu.visible:
            try:
                curses.curs_set(0)
            except curses.error:
                pass
            self.menu.draw()
        else:
            filter_active = self.focus == FOCUS_FILTER
            try:
                curses.curs_set(1 if filter_active else 0)
            except curses.error:
                pass
            if filter_active:
                self.filter.draw(
                    self.stdscr,
                    self.layout.filter_y,
                    2,
                    max(1, self.session.usable_width),
                    active=True,
                )
                self.stdscr.noutrefresh()
        curses.doupdate()

    # ---------------- main loop ----------------

    def handle_key(self, ch):
        if ch == -1:
            # lone Esc in the filter: nothing followed the Alt prefix
            if self.focus == FOCUS_FILTER and self.filter.meta_pending:
                self.filter.meta_pending = False
                self._leave_filter()
            return

        if ch in (3, 24):  # Ctrl+C / Ctrl+X
            self.session.cancel()
            return

        if ch == curses.KEY_RESIZE:
            self._relayout()
            return

        if self.menu.visible:
            choice = self.menu.handle_key(ch)
            if choice is not None:
                self.session.choose(choice)
            return

        if ch == curses.KEY_F9:
            self.menu.open()
            return

        if ch == 12:  # Ctrl+L, clear the filter from either pane
            self._clear_filter()
            return

        if ch == 9:  # Tab
            self.focus = FOCUS_LIST if self.focus == FOCUS_FILTER else FOCUS_FILTER
            return

        if self.focus == FOCUS_FILTER:
            result = self.filter.handle_key(ch)
            if result in ("changed", "submit"):
                self._apply_filter()
            elif result == "cancel":
                self._leave_filter()
            return

        if ch == 27:
            self.session.cancel()
            return

        if self.grid.handle_key(ch) == "accept":
            self.session.accept()

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while not self.session.finished:
            ch = self.stdscr.getch()
            self.handle_key(ch)
            if self.session.finished:
                break
            self.redraw()

        return self.session.harvest()


def run_session(table, pass_through=False, title="", config=None):
    """Show ``table`` in a curses grid; return the original indices of marked rows."""
    cfg = config if config is not None else load_config()
    result = set()

    def curses_main(stdscr):
        nonlocal result
        _, width = stdscr.getmaxyx()
        session = GridSession(
            table,
            pass_through=pass_through,
            title=title,
            terminal_width=width,
            sample_limit=cfg.get("SAMPLE_LIMIT", 50),
            filter_mode=cfg.get("FILTER_MODE", "query"),
        )
        result = Orchestrator(stdscr, session).run()

    curses.wrapper(curses_main)
    logger.info("session %r returned %d indices", title, len(result))
    return result
