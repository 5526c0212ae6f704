import curses


class ScreenLayout:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()

        # layout: menu bar (1 line), framed window below it holding
        # filter line, error line, header, header underline and the row list
        self.menu_y = 0
        self.frame_y = 1
        self.frame_h = max(3, self.H - self.frame_y)

        self.filter_y = self.frame_y + 1
        self.error_y = self.filter_y + 1
        self.header_y = self.error_y + 1
        self.underline_y = self.header_y + 1

        self.list_y = self.underline_y + 1
        self.list_x = 1
        self.list_h = max(1, self.H - self.list_y - 1)
        self.list_w = max(1, self.W - 2)

        self.list_win = curses.newwin(self.list_h, self.list_w, self.list_y, self.list_x)
        # list never owns the cursor
        self.list_win.leaveok(True)

        self.menu_win = None

    def open_menu(self, width, height):
        h = min(height, max(1, self.H - 1))
        w = min(width, self.W)
        self.menu_win = curses.newwin(h, w, self.frame_y, 0)
        self.menu_win.leaveok(True)
        return self.menu_win

    def close_menu(self):
        self.menu_win = None
