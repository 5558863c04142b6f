from __future__ import annotations

import unittest


class GroupTests(unittest.TestCase):
    def test_group_yields_group_index_and_values(self) -> None:
        from vecview.iterator import group

        self.assertEqual(list(group([1, 2, 3, 4, 5, 6], 2)), [(1, 1, 2), (2, 3, 4), (3, 5, 6)])
        self.assertEqual(list(group([1, 2, 3, 4, 5, 6], 3)), [(1, 1, 2, 3), (2, 4, 5, 6)])
        self.assertEqual(list(group([], 2)), [])

    def test_group_ex_over_slice(self) -> None:
        from vecview.iterator import group_ex

        self.assertEqual(list(group_ex([1, 2, 3, 4, 5, 6], 2, 4, 2)), [(1, 2, 3), (2, 4, 5)])

    def test_partial_final_group_runs_past_the_end(self) -> None:
        from vecview import RangeError
        from vecview.iterator import group

        groups = group([1, 2, 3], 2)
        self.assertEqual(next(groups), (1, 1, 2))
        with self.assertRaises(RangeError):
            next(groups)

    def test_partial_final_group_inside_a_larger_sequence(self) -> None:
        from vecview.iterator import group_ex

        self.assertEqual(list(group_ex([1, 2, 3, 4], 1, 3, 2)), [(1, 1, 2), (2, 3, 4)])

    def test_bad_group_size(self) -> None:
        from vecview import InvalidArgument
        from vecview.iterator import group

        with self.assertRaises(InvalidArgument):
            list(group([1, 2], 0))

    def test_group_views_write_through(self) -> None:
        from vecview.iterator import group_views

        points = [1, 2, 3, 4]
        for i, point in group_views(points, 2):
            point[0] = point[0] * 10
            self.assertEqual(len(point), 2)
        self.assertEqual(points, [10, 2, 30, 4])

    def test_zip_groups(self) -> None:
        from vecview.iterator import zip_groups, zip_groups_ex

        a = [1, -2, 3, -4]
        b = [-1, 2, -3, 4]
        self.assertTrue(all(ax == -bx and ay == -by for _, ax, ay, bx, by in zip_groups(a, b, 2)))
        self.assertEqual(list(zip_groups([1, 2, 3, 4], [5, 6], 2)), [(1, 1, 2, 5, 6)])
        self.assertEqual(list(zip_groups_ex([0, 1, 2], 2, 2, [7, 8, 9], 2, 1)), [(1, 1, 8), (2, 2, 9)])


class FormatTests(unittest.TestCase):
    def test_format_array(self) -> None:
        from vecview import format_array

        self.assertEqual(format_array([1, 2, 3, 4, 5]), "1, 2, 3, 4, 5")
        self.assertEqual(format_array([1, 2, 3, 4, 5], fmt="%d"), "1, 2, 3, 4, 5")
        self.assertEqual(format_array([1, 2, 3, 4, 5], fmt="%.2f"), "1.00, 2.00, 3.00, 4.00, 5.00")
        self.assertEqual(format_array(["hello", "world"]), "hello, world")
        self.assertEqual(format_array([1, 2], separator=" "), "1 2")
        self.assertEqual(format_array([]), "")

    def test_format_slice_and_views(self) -> None:
        from vecview import format_array, format_slice, reverse

        self.assertEqual(format_slice([1, 2, 3, 4], 1, 3), "1, 2, 3")
        self.assertEqual(format_array(reverse([1, 2, 3])), "3, 2, 1")

    def test_format_matrix(self) -> None:
        from vecview import format_matrix

        self.assertEqual(format_matrix([1, 2, 3, 4], 1, 2, 2), "1, 3\n2, 4")
        self.assertEqual(format_matrix([1, 2, 3, 4], 1, 2, 2, row_major_order=True), "1, 2\n3, 4")
        self.assertEqual(format_matrix([0, 1, 2, 3, 4, 5, 6], 2, 3, 2, fmt="%.1f"), "1.0, 3.0, 5.0\n2.0, 4.0, 6.0")

    def test_tabulated(self) -> None:
        from vecview import Column, tabulated

        text = tabulated(
            3,
            Column([1, 2], "idx"),
            Column([0, 0, 0, 0, 1, 0], "pos", group_size=2, fmt="%d,%d"),
            Column([1.0, 1.5], count=1),
        )
        lines = text.splitlines()
        self.assertEqual(len(lines), 5)
        self.assertIn("idx", lines[0])
        self.assertIn("pos", lines[0])
        self.assertEqual(lines[2].split(), ["1", "1", "0,0", "1.0"])
        self.assertEqual(lines[4].split(), ["3", "-", "1,0", "-"])

    def test_column_validation(self) -> None:
        from vecview import Column, InvalidArgument, tabulated

        with self.assertRaises(InvalidArgument):
            Column(None)
        with self.assertRaises(InvalidArgument):
            Column([1], group_size=0)
        with self.assertRaises(InvalidArgument):
            tabulated(1)


if __name__ == "__main__":
    unittest.main()
