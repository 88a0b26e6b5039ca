import unittest
from unittest.mock import MagicMock
from variantbuilder.deferred import Deferred
from variantbuilder.errors import MissingValueError


class TestDeferred(unittest.TestCase):

    def test_supplier_runs_on_each_read(self):
        supplier = MagicMock(side_effect=["a", "b"])
        value = Deferred(supplier)
        supplier.assert_not_called()
        self.assertEqual(value.get(), "a")
        self.assertEqual(value.get(), "b")

    def test_memoized_runs_once(self):
        supplier = MagicMock(return_value=[1, 2])
        value = Deferred.memoized(supplier)
        self.assertFalse(value.is_evaluated())
        self.assertIs(value.get(), value.get())
        supplier.assert_called_once()
        self.assertTrue(value.is_evaluated())

    def test_memoized_failure_is_not_cached(self):
        """A failed evaluation leaves nothing behind."""
        supplier = MagicMock(side_effect=[RuntimeError("boom"), "ok"])
        value = Deferred.memoized(supplier)
        with self.assertRaises(RuntimeError):
            value.get()
        self.assertFalse(value.is_evaluated())
        self.assertEqual(value.get(), "ok")

    def test_not_defined(self):
        value = Deferred.not_defined("base name")
        self.assertFalse(value.is_present())
        self.assertEqual(value.get_or_else("fallback"), "fallback")
        with self.assertRaises(MissingValueError) as context:
            value.get()
        self.assertIn("base name", str(context.exception))

    def test_of_and_map(self):
        value = Deferred.of("greeter").map(str.upper)
        self.assertTrue(value.is_present())
        self.assertEqual(value.get(), "GREETER")
        self.assertFalse(Deferred.not_defined().map(str.upper).is_present())


if __name__ == "__main__":
    unittest.main()
