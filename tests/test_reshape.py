from __future__ import annotations

import unittest


class ReshapeTests(unittest.TestCase):
    def test_nested_to_flat(self) -> None:
        from vecview import reshape

        self.assertEqual(reshape([[1, 2, 3], [4, 5, 6]], [6]), [1, 2, 3, 4, 5, 6])

    def test_flat_to_nested(self) -> None:
        from vecview import reshape

        self.assertEqual(reshape([1, 2, 3, 4, 5, 6], [3, 2]), [[1, 2], [3, 4], [5, 6]])
        self.assertEqual(reshape(list(range(8)), [2, 2, 2]), [[[0, 1], [2, 3]], [[4, 5], [6, 7]]])

    def test_nested_to_nested(self) -> None:
        from vecview import reshape

        self.assertEqual(reshape([[1, 2], [3, 4], [5, 6]], [2, 3]), [[1, 2, 3], [4, 5, 6]])

    def test_reshape_into_keeps_existing_entries(self) -> None:
        from vecview import reshape_into

        b = [[9, 9, 9]]
        reshape_into([[1, 2], [3, 4], [5, 6]], [2, 3], b, 2)
        self.assertEqual(b, [[9, 9, 9], [1, 2, 3], [4, 5, 6]])

    def test_element_count_mismatch(self) -> None:
        from vecview import ShapeError, reshape

        with self.assertRaises(ShapeError):
            reshape([1, 2, 3], [2, 2])

    def test_bad_shape_descriptors(self) -> None:
        from vecview import InvalidArgument, reshape

        for shape in ([], [-1], [2, -3], 6):
            with self.subTest(shape=shape):
                with self.assertRaises(InvalidArgument):
                    reshape([1, 2, 3, 4, 5, 6], shape)

    def test_round_trip(self) -> None:
        from vecview import flatten, reshape, shape_of

        nested = [[[1, 2, 3], [4, 5, 6]], [[7, 8, 9], [10, 11, 12]]]
        shape = shape_of(nested)
        self.assertEqual(shape, (2, 2, 3))
        self.assertEqual(reshape(flatten(nested), shape), nested)


class FlattenTests(unittest.TestCase):
    def test_flatten(self) -> None:
        from vecview import flatten

        cases = [
            ([], []),
            ([[1, 2, 3], [4, 5, 6]], [1, 2, 3, 4, 5, 6]),
            ([[[1, 2], [3, 4]], [[5, 6], [7, 8]]], [1, 2, 3, 4, 5, 6, 7, 8]),
            ([["ab", "c"], ["d"]], ["ab", "c", "d"]),
        ]
        for nested, expected in cases:
            with self.subTest(nested=nested):
                self.assertEqual(flatten(nested), expected)

    def test_flatten_into(self) -> None:
        from vecview import flatten_into

        b = [9, 9, 9]
        flatten_into([[[1, 2], [3, 4]], [[5, 6], [7, 8]]], b, 4)
        self.assertEqual(b, [9, 9, 9, 1, 2, 3, 4, 5, 6, 7, 8])

    def test_flatten_reads_views(self) -> None:
        from vecview import flatten, reverse

        self.assertEqual(flatten([reverse([1, 2]), (3,)]), [2, 1, 3])

    def test_shape_of(self) -> None:
        from vecview import shape_of

        self.assertEqual(shape_of(5), ())
        self.assertEqual(shape_of([]), (0,))
        self.assertEqual(shape_of([[1, 2, 3], [4, 5, 6]]), (2, 3))


if __name__ == "__main__":
    unittest.main()
