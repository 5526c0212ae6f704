import curses


class GridPane:
    PAIR_ROW_TEXT = 1
    PAIR_ROW_MARKED = 2

    MARK_ON = "[x] "
    MARK_OFF = "[ ] "

    def __init__(self, session):
        self.session = session
        self.marked_attr = curses.A_BOLD
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_ROW_TEXT, curses.COLOR_WHITE, -1)
            curses.init_pair(self.PAIR_ROW_MARKED, curses.COLOR_GREEN, -1)
            self.marked_attr = curses.color_pair(self.PAIR_ROW_MARKED) | curses.A_BOLD
        except curses.error:
            pass

        self.curr_row = 0
        self.row_offset = 0
        self.page_size = 20

    @property
    def rows(self):
        return self.session.visible_rows

    def current(self):
        if not self.rows:
            return None
        self.clamp()
        return self.rows[self.curr_row]

    def clamp(self):
        n = len(self.rows)
        self.curr_row = max(0, min(self.curr_row, n - 1)) if n else 0
        self.row_offset = max(0, min(self.row_offset, self.curr_row))

    def reset(self):
        self.curr_row = 0
        self.row_offset = 0

    # ---------- navigation ----------
    def move_down(self, n=1):
        self.curr_row = min(len(self.rows) - 1, self.curr_row + n)
        self.clamp()

    def move_up(self, n=1):
        self.curr_row = max(0, self.curr_row - n)
        self.clamp()

    def jump_first(self):
        self.curr_row = 0
        self.row_offset = 0

    def jump_last(self):
        self.curr_row = max(0, len(self.rows) - 1)

    # ---------- input handling ----------
    def handle_key(self, ch):
        if ch in (curses.KEY_DOWN, ord("j")):
            self.move_down()
        elif ch in (curses.KEY_UP, ord("k")):
            self.move_up()
        elif ch == curses.KEY_NPAGE:
            self.move_down(self.page_size)
        elif ch == curses.KEY_PPAGE:
            self.move_up(self.page_size)
        elif ch == curses.KEY_HOME:
            self.jump_first()
        elif ch == curses.KEY_END:
            self.jump_last()
        elif ch == ord(" "):
            row = self.current()
            if row is not None and self.session.toggle_mark(row):
                self.move_down()
                return "marked"
        elif ch == ord("a"):
            if self.session.mark_visible():
                return "marked"
        elif ch == ord("n"):
            if self.session.selectable:
                self.session.clear_marks()
                return "marked"
        elif ch in (10, 13, curses.KEY_ENTER):
            return "accept"
        return None

    # ---------- rendering ----------
    def line_for(self, row) -> str:
        text = row.display_string
        if not self.session.selectable:
            return text
        # checkbox sits at the end of the reserved indent
        glyph = self.MARK_ON if row.marked else self.MARK_OFF
        start = max(0, self.session.offset - len(glyph))
        return text[:start] + glyph + text[start + len(glyph) :]

    def draw(self, win, active=False):
        win.erase()
        h, w = win.getmaxyx()
        self.page_size = max(1, h)
        self.clamp()

        if self.curr_row >= self.row_offset + h:
            self.row_offset = self.curr_row - h + 1

        visible = self.rows[self.row_offset : self.row_offset + h]
        for y, row in enumerate(visible):
            idx = self.row_offset + y
            attr = curses.A_NORMAL
            if row.marked:
                attr = self.marked_attr
            if active and idx == self.curr_row:
                attr |= curses.A_REVERSE
            try:
                win.addnstr(y, 0, self.line_for(row).ljust(w), w, attr)
            except curses.error:
                pass

        win.refresh()
