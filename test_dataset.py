import numpy as np
import pandas as pd
import pytest

from dataset import DataTable, DatasetError, display_value


def test_from_records_accepts_mappings_and_sequences():
    table = DataTable.from_records(
        ["Name", "Age"], [{"Name": "Alice", "Age": 30}, ("Bob", 7)]
    )
    assert table.labels == ["Name", "Age"]
    assert table.rows == (("Alice", "30"), ("Bob", "7"))
    assert table.display_value(1, 0) == "Bob"


def test_mapping_missing_a_column_fails_fast():
    with pytest.raises(DatasetError, match="row 1 is missing column 'Age'"):
        DataTable.from_records(["Name", "Age"], [("Alice", "30"), {"Name": "Bob"}])


def test_sequence_with_wrong_length_fails_fast():
    with pytest.raises(DatasetError):
        DataTable.from_records(["Name", "Age"], [("Alice",)])


def test_duplicate_labels_are_kept_by_position():
    table = DataTable.from_records(["A", "A"], [("1", "2")])
    assert table.labels == ["A", "A"]
    assert table.rows == (("1", "2"),)


def test_from_dataframe_renders_missing_and_multiline_values():
    df = pd.DataFrame(
        {"Name": ["Alice", None], "Note": ["line one\nline two", np.nan]},
        dtype=object,
    )
    table = DataTable.from_dataframe(df)
    assert table.rows == (("Alice", "line one`nline two"), ("", ""))


def test_display_value_handles_na_variants():
    assert display_value(pd.NA) == ""
    assert display_value(pd.NaT) == ""
    assert display_value(None) == ""
    assert display_value(7) == "7"
