from dataclasses import dataclass

from row_formatter import pad_values


@dataclass(eq=False)
class GridRow:
    original_index: int
    display_string: str
    values: tuple
    marked: bool = False


class RowRegistry:
    """Owns every GridRow of a session.

    Filtered views hold references into ``rows``; marks are always read back
    from here, so they survive any number of filter changes.
    """

    def __init__(self, rows, selectable=False):
        self.rows: list[GridRow] = list(rows)
        self.selectable = selectable

    @classmethod
    def build(cls, table, widths, offset, selectable=False):
        rows = []
        for i, values in enumerate(table.rows):
            rows.append(
                GridRow(
                    original_index=i,
                    display_string=pad_values(values, offset, widths),
                    values=tuple(values),
                )
            )
        return cls(rows, selectable=selectable)

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def toggle_mark(self, row: GridRow) -> bool:
        if not self.selectable:
            return False
        row.marked = not row.marked
        return True

    def mark_all(self, rows) -> int:
        if not self.selectable:
            return 0
        count = 0
        for row in rows:
            if not row.marked:
                row.marked = True
                count += 1
        return count

    def clear_marks(self) -> None:
        for row in self.rows:
            row.marked = False

    def marked_original_indices(self) -> set[int]:
        return {row.original_index for row in self.rows if row.marked}
