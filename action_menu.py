import curses
from typing import List


class ActionMenu:
    TITLE = "Actions (F9)"

    def __init__(self, layout, items: List[str]):
        self.layout = layout
        self.items = list(items)
        self.visible = False
        self.selected = 0
        self.win = None

    def open(self):
        self.selected = 0
        self.visible = True
        width = max(len(self.TITLE), max((len(i) for i in self.items), default=0)) + 4
        if self.layout is not None:
            self.win = self.layout.open_menu(width, len(self.items) + 2)

    def close(self):
        self.visible = False
        self.win = None
        if self.layout is not None:
            self.layout.close_menu()

    def handle_key(self, ch):
        """Returns the chosen item on Enter or its hotkey, else None."""
        if not self.visible:
            return None

        if ch in (27, curses.KEY_F9):
            self.close()
            return None

        if ch in (curses.KEY_DOWN, ord("j")):
            self.selected = (self.selected + 1) % len(self.items)
            return None

        if ch in (curses.KEY_UP, ord("k")):
            self.selected = (self.selected - 1) % len(self.items)
            return None

        if ch in (10, 13, curses.KEY_ENTER):
            choice = self.items[self.selected]
            self.close()
            return choice

        # first letter works as a hotkey (_Accept, _Cancel, _Close)
        if 32 <= ch <= 126:
            key = chr(ch).lower()
            for item in self.items:
                if item[:1].lower() == key:
                    self.close()
                    return item
        return None

    def draw_bar(self, win, width):
        try:
            win.addnstr(0, 0, f" {self.TITLE}".ljust(width), width, curses.A_REVERSE)
        except curses.error:
            pass

    def draw(self):
        if not self.visible or self.win is None:
            return
        win = self.win
        win.erase()
        try:
            win.box()
        except curses.error:
            pass
        h, w = win.getmaxyx()
        for i, item in enumerate(self.items):
            if i + 1 >= h - 1:
                break
            attr = curses.A_REVERSE if i == self.selected else curses.A_NORMAL
            try:
                win.addnstr(i + 1, 1, f" {item}".ljust(w - 2), w - 2, attr)
            except curses.error:
                pass
        win.refresh()
