import unittest

from chain_table import (
    OperationTable,
    OutOfDomainError,
    cayley_matrix,
    evaluate,
    evaluate_values,
    packed_size,
    table_index,
)

# Łukasiewicz t-norm on five elements: a·b = max(0, a + b - 4).
LUKASIEWICZ_5 = (0, 0, 0, 0, 1, 2)


class PackedLayoutTests(unittest.TestCase):
    def test_packed_size(self):
        self.assertEqual([packed_size(n) for n in range(1, 8)], [0, 0, 1, 3, 6, 10, 15])

    def test_table_index_walks_rows_in_order(self):
        # For N=5 the vector is (A, B, C, D, E, F) = (1·1, 1·2, 1·3, 2·2, 2·3, 3·3).
        pairs = [(1, 1), (1, 2), (1, 3), (2, 2), (2, 3), (3, 3)]
        self.assertEqual([table_index(5, a, b) for a, b in pairs], list(range(6)))

    def test_table_index_is_symmetric(self):
        for a in range(1, 6):
            for b in range(1, 6):
                self.assertEqual(table_index(7, a, b), table_index(7, b, a))

    def test_evaluate_values_uses_boundary_shortcuts(self):
        self.assertEqual(evaluate_values((1,), 3, 0, 2), 0)
        self.assertEqual(evaluate_values((1,), 3, 2, 1), 1)
        self.assertEqual(evaluate_values((1,), 3, 1, 2), 1)
        self.assertEqual(evaluate_values((1,), 3, 1, 1), 1)


class OperationTableTests(unittest.TestCase):
    def test_construction_rejects_wrong_length(self):
        with self.assertRaisesRegex(ValueError, "needs 6 values"):
            OperationTable(5, (0, 0, 0))

    def test_construction_rejects_out_of_range_values(self):
        with self.assertRaises(ValueError):
            OperationTable(4, (0, 0, 4))
        with self.assertRaises(ValueError):
            OperationTable(4, (-1, 0, 0))

    def test_construction_rejects_non_integer_values(self):
        for bad in (0.9, "1", None):
            with self.assertRaisesRegex(ValueError, "not an integer"):
                OperationTable(3, (bad,))

    def test_construction_rejects_empty_chain(self):
        with self.assertRaises(ValueError):
            OperationTable(0, ())

    def test_values_are_frozen_as_tuple(self):
        table = OperationTable(4, [0, 1, 2])
        self.assertEqual(table.values, (0, 1, 2))
        self.assertEqual(hash(table), hash(OperationTable(4, (0, 1, 2))))

    def test_evaluate_boundaries(self):
        table = OperationTable(5, LUKASIEWICZ_5)
        for x in range(5):
            self.assertEqual(evaluate(table, 0, x), 0)
            self.assertEqual(evaluate(table, x, 0), 0)
            self.assertEqual(evaluate(table, 4, x), x)
            self.assertEqual(evaluate(table, x, 4), x)

    def test_evaluate_interior_matches_lukasiewicz(self):
        table = OperationTable(5, LUKASIEWICZ_5)
        for a in range(5):
            for b in range(5):
                self.assertEqual(evaluate(table, a, b), max(0, a + b - 4))
                self.assertEqual(table(a, b), evaluate(table, a, b))

    def test_evaluate_rejects_out_of_domain_on_either_side(self):
        table = OperationTable(4, (0, 0, 1))
        for a, b in [(-1, 1), (4, 1), (1, -1), (1, 4), (5, 5)]:
            with self.assertRaises(OutOfDomainError):
                evaluate(table, a, b)

    def test_evaluate_rejects_non_integer_indices(self):
        table = OperationTable(4, (0, 0, 1))
        for a, b in [(1.5, 2), (1, 2.0), ("1", 1)]:
            with self.assertRaisesRegex(OutOfDomainError, "not an element index"):
                evaluate(table, a, b)

    def test_trivial_chains(self):
        one = OperationTable(1, ())
        self.assertEqual(evaluate(one, 0, 0), 0)
        two = OperationTable(2, ())
        self.assertEqual(cayley_matrix(two), [[0, 0], [0, 1]])

    def test_cayley_matrix_for_goedel_chain(self):
        table = OperationTable(4, (1, 1, 2))
        self.assertEqual(
            cayley_matrix(table),
            [[0, 0, 0, 0], [0, 1, 1, 1], [0, 1, 2, 2], [0, 1, 2, 3]],
        )


if __name__ == "__main__":
    unittest.main()
