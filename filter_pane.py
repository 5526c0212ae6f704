import curses


class FilterPane:
    LABEL = "Filter"
    APPLY_LABEL = "[Apply]"

    def __init__(self):
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0
        self.meta_pending = False

    # ---------- state helpers ----------
    def reset(self):
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0
        self.meta_pending = False

    def get_buffer(self):
        return self.buffer

    def set_buffer(self, text):
        self.buffer = text or ""
        self.cursor = len(self.buffer)
        self.hscroll = 0

    # ---------- word helpers ----------
    @staticmethod
    def _is_word_char(ch):
        return ch.isalnum() or ch == "_"

    def _word_boundary_left(self):
        i = self.cursor
        while i > 0 and not self._is_word_char(self.buffer[i - 1]):
            i -= 1
        while i > 0 and self._is_word_char(self.buffer[i - 1]):
            i -= 1
        return i

    def _word_boundary_right(self):
        i = self.cursor
        n = len(self.buffer)
        while i < n and not self._is_word_char(self.buffer[i]):
            i += 1
        while i < n and self._is_word_char(self.buffer[i]):
            i += 1
        return i

    def _edit(self, new_buffer, new_cursor):
        changed = new_buffer != self.buffer
        self.buffer = new_buffer
        self.cursor = new_cursor
        return "changed" if changed else None

    # ---------- input handling ----------
    def handle_key(self, ch):
        """Returns "changed", "submit", "cancel" or None."""
        if self.meta_pending:
            self.meta_pending = False
            if ch in (ord("f"), ord("F")):
                self.cursor = self._word_boundary_right()
                return None
            if ch in (ord("b"), ord("B")):
                self.cursor = self._word_boundary_left()
                return None
            return "cancel"

        if ch in (10, 13, curses.KEY_ENTER):
            return "submit"

        if ch == 27:  # Esc, or Alt prefix
            self.meta_pending = True
            return None

        if ch == 23:  # Ctrl+W, delete word backward
            start = self._word_boundary_left()
            return self._edit(self.buffer[:start] + self.buffer[self.cursor :], start)

        if ch == 21:  # Ctrl+U, kill to line start
            return self._edit(self.buffer[self.cursor :], 0)

        if ch == 11:  # Ctrl+K, kill to line end
            return self._edit(self.buffer[: self.cursor], self.cursor)

        if ch in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor == 0:
                return None
            return self._edit(
                self.buffer[: self.cursor - 1] + self.buffer[self.cursor :],
                self.cursor - 1,
            )

        if ch == curses.KEY_DC:
            return self._edit(
                self.buffer[: self.cursor] + self.buffer[self.cursor + 1 :],
                self.cursor,
            )

        if ch in (curses.KEY_LEFT, 2):  # Left or Ctrl+B
            self.cursor = max(0, self.cursor - 1)
            return None

        if ch in (curses.KEY_RIGHT, 6):  # Right or Ctrl+F
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return None

        if ch in (curses.KEY_HOME, 1):  # Home or Ctrl+A
            self.cursor = 0
            return None

        if ch in (curses.KEY_END, 5):  # End or Ctrl+E
            self.cursor = len(self.buffer)
            return None

        if 32 <= ch <= 126:
            return self._edit(
                self.buffer[: self.cursor] + chr(ch) + self.buffer[self.cursor :],
                self.cursor + 1,
            )

        return None

    # ---------- rendering ----------
    def field_width(self, usable_width):
        # label, one space, field, one space, apply button
        return max(1, usable_width - len(self.LABEL) - len(self.APPLY_LABEL) - 2)

    def draw(self, win, y, x, usable_width, active=False):
        text_w = self.field_width(usable_width)

        if self.cursor < self.hscroll:
            self.hscroll = self.cursor
        elif self.cursor > self.hscroll + text_w - 1:
            self.hscroll = self.cursor - text_w + 1

        visible = self.buffer[self.hscroll : self.hscroll + text_w]
        field_x = x + len(self.LABEL) + 1
        try:
            win.addnstr(y, x, self.LABEL, len(self.LABEL), curses.A_BOLD)
            win.addnstr(y, field_x, visible.ljust(text_w), text_w, curses.A_UNDERLINE)
            win.addnstr(
                y,
                field_x + text_w + 1,
                self.APPLY_LABEL,
                len(self.APPLY_LABEL),
            )
        except curses.error:
            pass

        if active:
            try:
                win.move(y, field_x + (self.cursor - self.hscroll))
            except curses.error:
                pass
        return field_x
