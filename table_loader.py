import os
import sys

import pandas as pd

from dataset import DataTable

SUPPORTED = (".csv", ".tsv", ".json", ".parquet", ".xlsx")


class UnsupportedFileType(ValueError):
    pass


class TableLoader:
    def __init__(self, path: str | None):
        # None or "-" reads CSV from stdin
        self.path = path if path not in (None, "-") else None
        if self.path is None:
            self.ext = ".csv"
            return
        _, ext = os.path.splitext(self.path)
        self.ext = ext.lower()
        if self.ext not in SUPPORTED:
            raise UnsupportedFileType(
                f"Unsupported file type (use {', '.join(SUPPORTED)})"
            )

    @property
    def title(self) -> str:
        return os.path.basename(self.path) if self.path else "stdin"

    def load_frame(self) -> pd.DataFrame:
        source = self.path if self.path is not None else sys.stdin
        try:
            if self.ext == ".csv":
                return pd.read_csv(source, dtype=str, keep_default_na=False)
            if self.ext == ".tsv":
                return pd.read_csv(source, sep="\t", dtype=str, keep_default_na=False)
            if self.ext == ".json":
                return pd.read_json(source)
            if self.ext == ".parquet":
                self._ensure_engine("pyarrow", "Parquet")
                return pd.read_parquet(source)
            if self.ext == ".xlsx":
                self._ensure_engine("openpyxl", "XLSX")
                return pd.read_excel(source)
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        raise UnsupportedFileType(f"Unsupported file type '{self.ext}'")

    def load(self) -> tuple[pd.DataFrame, DataTable]:
        df = self.load_frame()
        return df, DataTable.from_dataframe(df)

    @staticmethod
    def _ensure_engine(module, label):
        try:
            __import__(module)
        except ImportError:
            raise UnsupportedFileType(
                f"{label} support requires {module}. Install via: pip install {module}"
            ) from None
