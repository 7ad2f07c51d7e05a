import unittest

import builder
from associativity import is_associative
from chain_table import OperationTable
from verify import is_monotone, verify_table

N4_TABLES = {
    (0, 0, 0),
    (0, 0, 1),
    (0, 0, 2),
    (0, 1, 2),
    (1, 1, 1),
    (1, 1, 2),
}


class BuilderTests(unittest.TestCase):
    def test_trivial_sizes_skip_search(self):
        for n in (1, 2):
            self.assertEqual(builder.build(n), [OperationTable(n, ())])

    def test_invalid_size_rejected(self):
        with self.assertRaises(ValueError):
            builder.build(0)

    def test_three_elements_gives_drastic_and_goedel(self):
        tables = builder.build(3)
        self.assertEqual({t.values for t in tables}, {(0,), (1,)})

    def test_four_elements_matches_hand_enumeration(self):
        tables = builder.build(4)
        self.assertEqual(len(tables), 6)
        self.assertEqual({t.values for t in tables}, N4_TABLES)

    def test_pruned_search_matches_unpruned_search(self):
        for n in range(1, builder.UNPRUNED_LIMIT + 1):
            pruned = builder.build(n)
            unpruned = builder.enumerate_unpruned(n)
            self.assertEqual(set(pruned), set(unpruned), f"n={n}")
            self.assertEqual(len(pruned), len(set(pruned)), f"duplicates at n={n}")

    def test_unpruned_search_refuses_large_sizes(self):
        with self.assertRaises(ValueError):
            builder.enumerate_unpruned(builder.UNPRUNED_LIMIT + 1)

    def test_accepted_tables_satisfy_all_laws(self):
        for table in builder.build(6):
            report = verify_table(table)
            self.assertTrue(report.ok, list(table.values))

    def test_branches_partition_the_search(self):
        n = 6
        whole = builder.build_with_stats(n)
        stats = builder.SearchStats(rows_generated=len(builder.first_rows(n)))
        tables = []
        for row in builder.first_rows(n):
            branch = builder.search_branch(n, row)
            self.assertEqual(branch.first_row, tuple(row))
            self.assertTrue(all(t.values[: n - 2] == tuple(row) for t in branch.tables))
            tables.extend(branch.tables)
            stats = stats.merge(branch.stats)
        self.assertEqual(tables, whole.tables)
        self.assertEqual(stats, whole.stats)

    def test_stats_are_consistent(self):
        res = builder.build_with_stats(5)
        self.assertEqual(res.stats.accepted, len(res.tables))
        self.assertEqual(
            res.stats.candidates_checked,
            res.stats.accepted + res.stats.candidates_rejected,
        )
        self.assertGreater(res.stats.rows_pruned, 0)

    def test_generation_order_is_reproducible(self):
        first = [t.values for t in builder.build(6)]
        second = [t.values for t in builder.build(6)]
        self.assertEqual(first, second)
        self.assertEqual(first, sorted(first))

    def test_accepted_tables_are_monotone_and_associative(self):
        for table in builder.build(5):
            self.assertTrue(is_monotone(table), list(table.values))
            self.assertTrue(is_associative(table), list(table.values))


if __name__ == "__main__":
    unittest.main()
