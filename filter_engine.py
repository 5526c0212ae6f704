import logging
import re

import numpy as np
import pandas as pd

logger = logging.getLogger("outgrid.filter_engine")

FILTER_MODES = ("query", "regex")


class FilterSyntaxError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


def _query_names(labels):
    names = []
    used: set[str] = set()
    for label in labels:
        name = label
        n = 0
        while name in used:
            n += 1
            name = f"{label}_{n}"
        used.add(name)
        names.append(name)
    return names


def _coerce_column(series: pd.Series) -> pd.Series:
    # numeric only when every non-empty value parses
    present = series[series != ""]
    if present.empty:
        return series
    converted = pd.to_numeric(present, errors="coerce")
    if converted.isna().any():
        return series
    # empty cells become NaN
    return pd.to_numeric(series, errors="coerce")


class QueryPredicate:
    """pandas expressions over the row values, e.g. ``Age > 10 and Name != 'Bob'``.

    Labels that are not identifiers are quoted with backticks, as in
    ``DataFrame.query``.
    """

    def __init__(self, labels):
        self.names = _query_names([str(label) for label in labels])

    def frame(self, rows) -> pd.DataFrame:
        df = pd.DataFrame(
            [row.values for row in rows], columns=self.names, dtype=object
        )
        for name in df.columns:
            df[name] = _coerce_column(df[name])
        return df

    def mask(self, rows, text):
        try:
            df = self.frame(rows)
            result = df.eval(text, engine="python")
        except Exception as exc:
            raise FilterSyntaxError(self._describe(exc)) from exc

        if isinstance(result, (bool, np.bool_)):
            return [bool(result)] * len(df)
        if not isinstance(result, pd.Series) or len(result) != len(df):
            raise FilterSyntaxError("filter must give true/false for each row")
        if len(result) and not pd.api.types.is_bool_dtype(result.dtype):
            raise FilterSyntaxError("filter must give true/false for each row")
        return [bool(v) for v in result.tolist()]

    @staticmethod
    def _describe(exc):
        msg = str(exc).strip().splitlines()
        text = msg[0] if msg else ""
        return f"{type(exc).__name__}: {text}" if text else type(exc).__name__


class RegexPredicate:
    """Case-insensitive regular expression searched in each display line."""

    def mask(self, rows, text):
        try:
            pattern = re.compile(text, re.IGNORECASE)
        except re.error as exc:
            raise FilterSyntaxError(f"invalid pattern: {exc}") from exc
        return [pattern.search(row.display_string) is not None for row in rows]


def make_predicate(mode, labels):
    if mode == "query":
        return QueryPredicate(labels)
    if mode == "regex":
        return RegexPredicate()
    raise ValueError(f"unknown filter mode '{mode}' (use {', '.join(FILTER_MODES)})")


def filter_rows(rows, predicate_text, predicate):
    rows = list(rows)
    text = (predicate_text or "").strip()
    if not text:
        return rows
    keep = predicate.mask(rows, text)
    return [row for row, ok in zip(rows, keep) if ok]


class FilterView:
    """Current projection of a registry: unfiltered or filtered by some text.

    ``apply`` either moves to the new filter or, on a bad filter, keeps the
    previous rows and records the error.
    """

    UNFILTERED = "unfiltered"
    FILTERED = "filtered"

    def __init__(self, registry, predicate):
        self.registry = registry
        self.predicate = predicate
        self.state = self.UNFILTERED
        self.text = ""
        self.rows = list(registry.rows)
        self.error = None

    def apply(self, text) -> bool:
        try:
            rows = filter_rows(self.registry.rows, text, self.predicate)
        except FilterSyntaxError as exc:
            logger.debug("filter %r rejected: %s", text, exc.message)
            self.error = exc.message
            return False

        self.error = None
        self.rows = rows
        if (text or "").strip():
            self.state = self.FILTERED
            self.text = text
        else:
            self.state = self.UNFILTERED
            self.text = ""
        return True

    def clear(self):
        self.apply("")
