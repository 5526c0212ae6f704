from dataclasses import dataclass
from typing import Mapping, Sequence

import pandas as pd


class DatasetError(ValueError):
    pass


@dataclass(frozen=True)
class DataColumn:
    label: str

    def __str__(self):
        return self.label


def display_value(value) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        # list-like cells make isna return an array
        pass
    text = str(value)
    return text.replace("\r\n", "`n").replace("\n", "`n")


@dataclass(frozen=True)
class DataTable:
    """Immutable table of display strings handed to a grid session."""

    columns: tuple
    rows: tuple

    @property
    def labels(self) -> list[str]:
        return [c.label for c in self.columns]

    def display_value(self, row_index: int, column_index: int) -> str:
        return self.rows[row_index][column_index]

    @classmethod
    def from_records(cls, labels: Sequence[str], records) -> "DataTable":
        columns = tuple(DataColumn(str(label)) for label in labels)
        rows = []
        for i, record in enumerate(records):
            if isinstance(record, Mapping):
                values = []
                for col in columns:
                    if col.label not in record:
                        raise DatasetError(
                            f"row {i} is missing column '{col.label}'"
                        )
                    values.append(display_value(record[col.label]))
            else:
                values = [display_value(v) for v in record]
                if len(values) != len(columns):
                    raise DatasetError(
                        f"row {i} has {len(values)} values, expected {len(columns)}"
                    )
            rows.append(tuple(values))
        return cls(columns=columns, rows=tuple(rows))

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "DataTable":
        labels = [str(c) for c in df.columns]
        records = df.itertuples(index=False, name=None)
        return cls.from_records(labels, records)
