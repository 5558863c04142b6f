from __future__ import annotations

import array
import os
import unittest
from unittest import mock


class ElementAccessTests(unittest.TestCase):
    def test_get_and_set_are_one_based(self) -> None:
        from vecview import get, set

        data = [10, 20, 30]
        self.assertEqual(get(data, 1), 10)
        self.assertEqual(get(data, 3), 30)
        set(data, 2, 99)
        self.assertEqual(data, [10, 99, 30])

    def test_out_of_range_access_raises_range_error(self) -> None:
        from vecview import RangeError, get, set

        data = [1, 2, 3]
        for index in (0, -1, 4):
            with self.subTest(index=index):
                with self.assertRaises(RangeError):
                    get(data, index)
                with self.assertRaises(RangeError):
                    set(data, index, 0)
        # set never grows
        self.assertEqual(data, [1, 2, 3])

    def test_range_error_is_an_index_error(self) -> None:
        from vecview import RangeError, get

        with self.assertRaises(IndexError):
            get([], 1)
        self.assertTrue(issubclass(RangeError, IndexError))

    def test_is_sequence_excludes_scalars_and_text(self) -> None:
        from vecview import is_sequence, slice

        cases = [
            ([1, 2], True),
            ((1, 2), True),
            (array.array("d", [1.0]), True),
            (slice([1, 2, 3], 1, 2), True),
            (3, False),
            (2.5, False),
            ("abc", False),
            (b"abc", False),
            ({"a": 1}, False),
            (None, False),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(is_sequence(value), expected)

    def test_get_values_and_set_values(self) -> None:
        from vecview import get_into, get_values, set_values

        data = [1, 2, 3, 4, 5]
        self.assertEqual(get_values(data, 2, 3), (2, 3, 4))
        set_values(data, 4, 9, 9)
        self.assertEqual(data, [1, 2, 3, 9, 9])
        out = [None, None]
        get_into(data, 3, out)
        self.assertEqual(out, [3, 9])


class BackingStoreTests(unittest.TestCase):
    def test_is_array_requires_growable_writable_storage(self) -> None:
        from vecview import is_array, slice

        self.assertTrue(is_array([1, 2]))
        self.assertTrue(is_array(array.array("i", [1])))
        self.assertFalse(is_array((1, 2)))
        self.assertFalse(is_array(slice([1, 2], 1, 2)))

    def test_new_array_rejects_negative_length(self) -> None:
        from vecview import DEFAULT_STORE, AllocationError, BufferStore, InvalidArgument

        for store in (DEFAULT_STORE, BufferStore()):
            with self.subTest(store=store):
                with self.assertRaises(AllocationError):
                    store.new_array(None, -1)
        self.assertTrue(issubclass(AllocationError, InvalidArgument))

    def test_new_array_zero_matches_hint(self) -> None:
        from vecview import DEFAULT_STORE

        self.assertEqual(DEFAULT_STORE.new_array(1.5, 2), [0.0, 0.0])
        self.assertIsInstance(DEFAULT_STORE.new_array(1.5, 1)[0], float)
        self.assertEqual(DEFAULT_STORE.new_array(True, 2), [False, False])
        self.assertEqual(DEFAULT_STORE.new_array(None, 0), [])

    def test_grow_array_pads_and_is_idempotent(self) -> None:
        from vecview import DEFAULT_STORE, BufferStore

        cases = [(DEFAULT_STORE, [1]), (BufferStore("d"), array.array("d", [1.0]))]
        for store, dest in cases:
            with self.subTest(store=store):
                store.grow_array(dest, 2, 3)
                self.assertEqual(len(dest), 4)
                self.assertEqual(list(dest), [1, 0, 0, 0])
                store.grow_array(dest, 2, 3)
                self.assertEqual(len(dest), 4)
                store.grow_array(dest, 1, 1)
                self.assertEqual(len(dest), 4)

    def test_grow_array_rejects_short_fixed_destinations(self) -> None:
        from vecview import DEFAULT_STORE, RangeError, WindowRangeError, slice

        with self.assertRaises(WindowRangeError) as ctx:
            DEFAULT_STORE.grow_array((1, 2), 2, 2)
        self.assertEqual(ctx.exception.limit, 2)
        self.assertIn("window [2, 3]", str(ctx.exception))

        with self.assertRaises(RangeError):
            DEFAULT_STORE.grow_array(slice([1, 2, 3], 1, 2), 1, 3)
        with self.assertRaises(RangeError):
            DEFAULT_STORE.grow_array([1, 2], 0, 1)

        # long enough is fine
        DEFAULT_STORE.grow_array(slice([1, 2, 3], 1, 2), 1, 2)

    def test_copy_array_into_same_buffer_shifting_right(self) -> None:
        from vecview import DEFAULT_STORE

        data = [1, 2, 3, 4, 5]
        DEFAULT_STORE.copy_array_into(data, 1, 4, data, 2)
        self.assertEqual(data, [1, 1, 2, 3, 4])

        data = [1, 2, 3, 4, 5]
        DEFAULT_STORE.copy_array_into(data, 2, 4, data, 1)
        self.assertEqual(data, [2, 3, 4, 5, 5])

    def test_copy_array_checks_source_window(self) -> None:
        from vecview import DEFAULT_STORE, RangeError

        with self.assertRaises(RangeError):
            DEFAULT_STORE.copy_array([1, 2, 3], 2, 5)
        self.assertEqual(DEFAULT_STORE.copy_array([1, 2, 3], 2, 2), [2, 3])

    def test_buffer_store_allocates_typed_buffers(self) -> None:
        from vecview import BufferStore

        store = BufferStore("d")
        buf = store.new_array(1, 3)
        self.assertIsInstance(buf, array.array)
        self.assertEqual(buf.typecode, "d")
        self.assertEqual(list(buf), [0.0, 0.0, 0.0])

        # non-numeric element hints fall back to lists
        self.assertEqual(store.new_array(bool, 2), [False, False])
        self.assertEqual(store.new_array("x", 1), [0])

    def test_buffer_store_copies_with_slices(self) -> None:
        from vecview import BufferStore

        store = BufferStore("i")
        src = array.array("i", [1, 2, 3, 4, 5])
        part = store.copy_array(src, 2, 3)
        self.assertEqual(part, array.array("i", [2, 3, 4]))

        dest = array.array("i", [9])
        store.copy_array_into(src, 1, 5, dest, 2)
        self.assertEqual(list(dest), [9, 1, 2, 3, 4, 5])

        store.copy_array_into(src, 1, 4, src, 2)
        self.assertEqual(list(src), [1, 1, 2, 3, 4])


class ConfigTests(unittest.TestCase):
    def test_env_flags_and_epsilon(self) -> None:
        from vecview import config

        with mock.patch.dict(os.environ, {"VECVIEW_X": "0", "VECVIEW_EPS": "1e-3", "VECVIEW_BAD": "abc"}):
            self.assertFalse(config._env_flag("VECVIEW_X", "1"))
            self.assertTrue(config._env_flag("VECVIEW_MISSING", "1"))
            self.assertEqual(config._env_float("VECVIEW_EPS", 1.0), 1e-3)
            self.assertEqual(config._env_float("VECVIEW_BAD", 1.0), 1.0)
            self.assertEqual(config._env_float("VECVIEW_MISSING", 2.0), 2.0)


if __name__ == "__main__":
    unittest.main()
