import unittest

from dataset import DataTable
from row_registry import GridRow, RowRegistry


class RowRegistryTests(unittest.TestCase):
    def setUp(self):
        self.table = DataTable.from_records(
            ["Name", "Age"], [("Alice", "30"), ("Bob", "7"), ("Carol", "41")]
        )

    def test_build_keeps_dataset_order_and_indices(self):
        registry = RowRegistry.build(self.table, [5, 3], 4)
        self.assertEqual([r.original_index for r in registry], [0, 1, 2])
        self.assertEqual(registry.rows[0].display_string, "    Alice 30 ")
        self.assertEqual(registry.rows[1].values, ("Bob", "7"))
        self.assertFalse(any(r.marked for r in registry))
        self.assertEqual(len(registry), 3)

    def test_toggle_mark_is_noop_without_selection(self):
        registry = RowRegistry.build(self.table, [5, 3], 4, selectable=False)
        self.assertFalse(registry.toggle_mark(registry.rows[0]))
        self.assertEqual(registry.marked_original_indices(), set())

    def test_toggle_mark_flips_in_place(self):
        registry = RowRegistry.build(self.table, [5, 3], 8, selectable=True)
        row = registry.rows[2]
        self.assertTrue(registry.toggle_mark(row))
        self.assertTrue(row.marked)
        self.assertEqual(registry.marked_original_indices(), {2})
        registry.toggle_mark(row)
        self.assertEqual(registry.marked_original_indices(), set())

    def test_mark_all_and_clear(self):
        registry = RowRegistry.build(self.table, [5, 3], 8, selectable=True)
        registry.toggle_mark(registry.rows[0])
        self.assertEqual(registry.mark_all(registry.rows[:2]), 1)
        self.assertEqual(registry.marked_original_indices(), {0, 1})
        registry.clear_marks()
        self.assertEqual(registry.marked_original_indices(), set())

    def test_rows_compare_by_identity(self):
        a = GridRow(0, "x", ("x",))
        b = GridRow(0, "x", ("x",))
        self.assertNotEqual(a, b)
        self.assertEqual(a, a)


if __name__ == "__main__":
    unittest.main()
