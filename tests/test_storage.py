import unittest
import random
from BitVector import BitVector
from zmod.errors import StorageError
from zmod.storage import (Storage, widening_op, INT8, INT16, INT32, INT64, INT128,
                          UINT8, UINT16, UINT32, UINT64, UINT128, BIGINT)


FIXED = [INT8, INT16, INT32, INT64, INT128, UINT8, UINT16, UINT32, UINT64, UINT128]


class StorageBaseTest(unittest.TestCase):
    """Base class for Storage test cases."""

    def random_raw(self, s):
        return s.wrap(random.getrandbits(s.bits()))

    def assertBinOpExpected(self, op_fn, expected_fn):
        """Assert `op_fn` agrees with `expected_fn` on random raw values of every fixed storage."""
        for s in FIXED:
            for i in range(0, 100):
                x = self.random_raw(s)
                y = self.random_raw(s)
                # Put `s`, `x` and `y` in the assertion so we can
                # see them on failed test cases.
                self.assertEqual((s,x,y,op_fn(s, x, y)), (s,x,y,expected_fn(s, x, y)))


class StorageBasicTests(StorageBaseTest):
    def test_constructor(self):
        self.assertEqual(Storage(8), INT8)
        self.assertEqual(Storage(64, signed=False), UINT64)
        self.assertEqual(Storage(None), BIGINT)

    def test_constructor_fails(self):
        with self.assertRaises(StorageError):
            Storage(0)
        with self.assertRaises(StorageError):
            Storage(-8)
        with self.assertRaises(StorageError):
            Storage(None, signed=False)

    def test_names(self):
        self.assertEqual(INT64.name(), 'int64')
        self.assertEqual(UINT8.name(), 'uint8')
        self.assertEqual(BIGINT.name(), 'bigint')
        self.assertEqual(Storage.named('uint32'), UINT32)
        self.assertEqual(Storage.named(' Int16 '), INT16)
        self.assertEqual(Storage.named('bigint'), BIGINT)
        self.assertEqual(Storage.named('int24'), Storage(24))
        for s in FIXED + [BIGINT]:
            self.assertEqual(Storage.named(s.name()), s)

    def test_bad_names(self):
        for name in ['', 'int', 'int0', 'float64', 'uint-8']:
            with self.assertRaises(StorageError):
                Storage.named(name)

    def test_bounds(self):
        self.assertEqual((INT8.min_value(), INT8.max_value()), (-128, 127))
        self.assertEqual((UINT8.min_value(), UINT8.max_value()), (0, 255))
        self.assertEqual((INT64.min_value(), INT64.max_value()), (-2 ** 63, 2 ** 63 - 1))
        self.assertEqual((BIGINT.min_value(), BIGINT.max_value()), (None, None))
        self.assertTrue(INT8.contains(-128))
        self.assertFalse(INT8.contains(128))
        self.assertFalse(UINT8.contains(-1))
        self.assertTrue(BIGINT.contains(-2 ** 300))

    def test_check(self):
        self.assertEqual(UINT16.check(65535), 65535)
        with self.assertRaises(StorageError):
            UINT16.check(65536)

    def test_hash(self):
        self.assertEqual(hash(Storage(32)), hash(INT32))
        self.assertEqual(len({INT8, Storage(8), UINT8}), 2)

    def test_wrap(self):
        self.assertEqual(INT8.wrap(127), 127)
        self.assertEqual(INT8.wrap(128), -128)
        self.assertEqual(INT8.wrap(-129), 127)
        self.assertEqual(UINT8.wrap(-1), 255)
        self.assertEqual(UINT8.wrap(256), 0)
        self.assertEqual(BIGINT.wrap(2 ** 200), 2 ** 200)

    def test_widen(self):
        self.assertEqual(INT8.widen(), INT16)
        self.assertEqual(INT32.widen(), INT64)
        self.assertEqual(UINT64.widen(), UINT128)
        self.assertEqual(INT128.widen(), BIGINT)
        self.assertEqual(UINT128.widen(), BIGINT)
        self.assertEqual(BIGINT.widen(), BIGINT)

    def test_promote(self):
        self.assertEqual(Storage.promote(INT8, INT16), INT16)
        self.assertEqual(Storage.promote(INT16, INT8), INT16)
        self.assertEqual(Storage.promote(INT32, UINT32), UINT32)
        self.assertEqual(Storage.promote(UINT32, INT32), UINT32)
        self.assertEqual(Storage.promote(UINT8, INT16), INT16)
        self.assertEqual(Storage.promote(INT64, BIGINT), BIGINT)
        self.assertEqual(Storage.promote(BIGINT, UINT8), BIGINT)


class StorageOverflowTests(StorageBaseTest):
    def test_add_with_overflow(self):
        self.assertEqual(INT8.add_with_overflow(100, 27), (127, False))
        self.assertEqual(INT8.add_with_overflow(100, 28), (-128, True))
        self.assertEqual(INT8.add_with_overflow(-128, -1), (127, True))
        self.assertEqual(UINT8.add_with_overflow(255, 1), (0, True))
        self.assertEqual(BIGINT.add_with_overflow(2 ** 64, 2 ** 64), (2 ** 65, False))
        self.assertBinOpExpected(
            lambda s, x, y: s.add_with_overflow(x, y),
            lambda s, x, y: (s.wrap(x + y), not (s.min_value() <= x + y <= s.max_value())))

    def test_mul_with_overflow(self):
        self.assertEqual(INT16.mul_with_overflow(128, 255), (32640, False))
        self.assertEqual(INT16.mul_with_overflow(256, 128), (-32768, True))
        self.assertEqual(UINT64.mul_with_overflow(2 ** 32, 2 ** 32), (0, True))
        self.assertEqual(INT8.mul_with_overflow(-128, 1), (-128, False))
        self.assertEqual(INT8.mul_with_overflow(-128, -1), (-128, True))
        self.assertBinOpExpected(
            lambda s, x, y: s.mul_with_overflow(x, y),
            lambda s, x, y: (s.wrap(x * y), not (s.min_value() <= x * y <= s.max_value())))

    def test_widening_op(self):
        # no overflow: the sum is kept unreduced
        self.assertEqual(widening_op(INT8, '+', 3, 4, 5), 7)
        self.assertEqual(widening_op(INT8, '+', 100, 100, 101), 200 % 101)
        self.assertEqual(widening_op(INT8, '*', 100, 100, 7), 10000 % 7)
        self.assertEqual(widening_op(UINT64, '*', 2 ** 64 - 1, 2 ** 64 - 1, 2 ** 61 - 1),
                         ((2 ** 64 - 1) ** 2) % (2 ** 61 - 1))
        with self.assertRaises(ValueError):
            widening_op(INT8, '-', 1, 1, 5)

    def test_widening_op_exact(self):
        for s in FIXED:
            for i in range(0, 100):
                m = random.randint(2, s.max_value() + 1)
                x = self.random_raw(s)
                y = self.random_raw(s)
                for op, ref in [('+', x + y), ('*', x * y)]:
                    r = widening_op(s, op, x, y, m)
                    self.assertTrue(s.contains(r), (s, op, x, y, m, r))
                    self.assertEqual(r % m, ref % m)


class StorageBitVectorTests(StorageBaseTest):
    def test_to_bitvector(self):
        bv = INT8.to_bitvector(-1)
        self.assertEqual(len(bv), 8)
        self.assertEqual(int(bv), 255)
        bv = UINT16.to_bitvector(5)
        self.assertEqual(len(bv), 16)
        self.assertEqual(int(bv), 5)
        bv = BIGINT.to_bitvector(-2)
        self.assertEqual(len(bv), 3)
        self.assertEqual(int(bv), 6)
        with self.assertRaises(StorageError):
            UINT8.to_bitvector(-1)

    def test_from_bitvector(self):
        self.assertEqual(INT8.from_bitvector(BitVector(intVal=255, size=8)), -1)
        self.assertEqual(UINT8.from_bitvector(BitVector(intVal=255, size=8)), 255)
        self.assertEqual(BIGINT.from_bitvector(BitVector(intVal=255, size=8)), 255)
        with self.assertRaises(StorageError):
            INT16.from_bitvector(BitVector(intVal=255, size=8))
        with self.assertRaises(StorageError):
            INT16.from_bitvector(255)

    def test_bitvector_roundtrip(self):
        for s in FIXED:
            for i in range(0, 20):
                x = self.random_raw(s)
                self.assertEqual(s.from_bitvector(s.to_bitvector(x)), x)

    def test_random_raw(self):
        rng = random.Random(1234)
        for s in FIXED:
            for i in range(0, 20):
                self.assertTrue(s.contains(s.random_raw(rng)))
        with self.assertRaises(StorageError):
            BIGINT.random_raw(rng)


if __name__ == "__main__":
    unittest.main()
