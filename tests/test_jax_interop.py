from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for interop tests")
class JaxInteropTests(unittest.TestCase):
    def test_as_jax_array_reads_through_views(self) -> None:
        from vecview import as_jax_array, reverse, stride

        data = [1, 2, 3, 4, 5, 6]
        self.assertEqual(as_jax_array(stride(data, 1, 2, 3)).tolist(), [1, 3, 5])
        self.assertEqual(as_jax_array(reverse(data), 2, 2).tolist(), [5, 4])
        self.assertEqual(as_jax_array(data, 5).tolist(), [5, 6])

    def test_from_jax(self) -> None:
        import jax.numpy as jnp

        from vecview import from_jax

        self.assertEqual(from_jax(jnp.arange(3)), [0, 1, 2])
        dest = [9]
        self.assertIsNone(from_jax(jnp.arange(2), dest, 2))
        self.assertEqual(dest, [9, 0, 1])
        self.assertEqual(from_jax(jnp.zeros((0,))), [])

    def test_matmul_matches_jax(self) -> None:
        from vecview import as_jax_matrix, from_jax, linalg

        a = [1, 2, 3, 4]
        self.assertEqual(
            from_jax(as_jax_matrix(a, 1, 2, 2) @ as_jax_matrix(a, 1, 2, 2), column_major=True),
            linalg.matmul(a, a),
        )

        a = [1, 5, 9, 13, 2, 6, 10, 14, 3, 7, 11, 15]  # 3x4
        b = [16, 12, 8, 15, 11, 7, 14, 10, 6, 13, 9, 5]  # 4x3
        expected = linalg.matmul_ex(a, 1, 3, 4, b, 1, 4)
        product = as_jax_matrix(a, 1, 3, 4) @ as_jax_matrix(b, 1, 4, 3)
        self.assertEqual(product.shape, (4, 4))
        self.assertEqual(from_jax(product, column_major=True), expected)

    def test_transpose_matches_jax(self) -> None:
        from vecview import as_jax_matrix, from_jax, linalg

        src = [1, 2, 3, 4, 5, 6]
        self.assertEqual(
            from_jax(as_jax_matrix(src, 1, 3, 2).T, column_major=True),
            linalg.transpose_ex(src, 1, 3, 2),
        )


@unittest.skipIf(JAX_AVAILABLE, "only meaningful without jax installed")
class MissingJaxTests(unittest.TestCase):
    def test_interop_entry_points_explain_missing_dependency(self) -> None:
        import vecview

        with self.assertRaisesRegex(ModuleNotFoundError, "jax is required"):
            vecview.as_jax_array([1, 2, 3])


if __name__ == "__main__":
    unittest.main()
