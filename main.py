import argparse
import contextlib
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version

from config_paths import LOG_PATH, ensure_config_dirs, load_config
from filter_engine import FILTER_MODES
from log_setup import setup_logger
from table_loader import SUPPORTED, TableLoader

try:
    __version__ = version("outgrid")
except PackageNotFoundError:
    # running from a source checkout
    __version__ = "0.0.0"

logger = logging.getLogger("outgrid.main")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="outgrid",
        description="Show a table in an interactive terminal grid with a live filter.",
        epilog=(
            "Filters are pandas expressions over the columns, e.g. "
            "\"Age > 10 and Name != 'Bob'\" (backticks quote labels with "
            "spaces), or regular expressions with --filter-mode regex.\n"
            f"Supported files: {', '.join(SUPPORTED)}; '-' or no path reads CSV from stdin."
        ),
    )
    parser.add_argument("path", nargs="?", default=None, help="table file to show")
    parser.add_argument(
        "-p",
        "--passthru",
        action="store_true",
        help="allow marking rows and print the marked rows as CSV on accept",
    )
    parser.add_argument("-t", "--title", default=None, help="window title")
    parser.add_argument("--filter-mode", choices=FILTER_MODES, default=None)
    parser.add_argument("-v", "--version", action="version", version=__version__)
    return parser


@contextlib.contextmanager
def _terminal_attached():
    """Point fds 0 and 1 at the controlling terminal while curses runs.

    Needed when the table arrives on a pipe or the selection is piped on.
    """
    saved = []
    tty_fd = None
    try:
        for fd, stream in ((0, sys.stdin), (1, sys.stdout)):
            if stream is not None and stream.isatty():
                continue
            if tty_fd is None:
                tty_fd = os.open("/dev/tty", os.O_RDWR)
            if fd == 1 and stream is not None:
                stream.flush()
            saved.append((fd, os.dup(fd)))
            os.dup2(tty_fd, fd)
        yield
    finally:
        sys.stdout.flush()
        for fd, copy in saved:
            os.dup2(copy, fd)
            os.close(copy)
        if tty_fd is not None:
            os.close(tty_fd)


def main(argv=None):
    args = build_parser().parse_args(argv)

    cfg = load_config()
    if args.filter_mode:
        cfg["FILTER_MODE"] = args.filter_mode

    try:
        ensure_config_dirs()
        setup_logger(LOG_PATH, cfg["LOG_LEVEL"])
    except OSError as exc:
        print(f"Logging disabled: {exc}", file=sys.stderr)

    try:
        loader = TableLoader(args.path)
        df, table = loader.load()
    except (OSError, ValueError) as exc:
        # UnsupportedFileType and DatasetError are ValueErrors
        print(f"Load failed: {exc}", file=sys.stderr)
        return 1
    logger.info("loaded %s: %d rows, %d columns", loader.title, len(table.rows), len(table.columns))

    from orchestrator import run_session

    title = args.title if args.title is not None else loader.title
    try:
        with _terminal_attached():
            selected = run_session(
                table, pass_through=args.passthru, title=title, config=cfg
            )
    except OSError as exc:
        print(f"No terminal available: {exc}", file=sys.stderr)
        return 1

    if args.passthru and selected:
        df.iloc[sorted(selected)].to_csv(sys.stdout, index=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
