import operator
import re
from typing import Any, Callable, Dict, Optional, Tuple, Union
from typing_extensions import Literal
from BitVector import BitVector #type: ignore

from . import trace
from .errors import StorageError

Op = Union[Literal['+'], Literal['*']]

# Fixed widths are widened by doubling up to this many bits, after which the
# unbounded ``BIGINT`` storage takes over.
MAX_FIXED_BITS = 128


class Storage:
    """A class representing the type used to hold the raw value of an ``IntMod``.

    ``Storage(bits : int, signed : bool)`` is a fixed-width two's complement (when
    ``signed``) or unsigned integer type of ``bits`` bits. ``Storage(None)`` is the
    unbounded integer type (exported as ``BIGINT``), which never overflows.

    Python integers are unbounded, so a ``Storage`` does not change how values are
    held; it records which values are representable and whether an addition or
    multiplication would have wrapped around had it been carried out in the fixed
    width.
    """
    __bits   : Optional[int]
    __signed : bool

    def __init__(self, bits : Optional[int], signed : bool = True) -> None:
        if bits is not None and (not isinstance(bits, int) or bits <= 0):
            raise StorageError(f'`Storage` expects `bits` to be a positive integer or None, but was given {bits!r}.')
        if bits is None and not signed:
            raise StorageError('The unbounded storage type is always signed.')
        self.__bits = bits
        self.__signed = signed

    def __repr__(self) -> str:
        return f"Storage({self.__bits!r}, signed={self.__signed!r})"

    def __eq__(self, other : Any) -> bool:
        if isinstance(other, Storage):
            return self.__bits == other.__bits and self.__signed == other.__signed
        else:
            return False

    def __hash__(self) -> int:
        return hash((self.__bits, self.__signed))

    def name(self) -> str:
        """Lower case name of the storage type, e.g. ``'int64'``, ``'uint8'`` or ``'bigint'``."""
        if self.__bits is None:
            return 'bigint'
        return f"{'' if self.__signed else 'u'}int{self.__bits}"

    @staticmethod
    def named(name : str) -> 'Storage':
        """Parse a storage type from its name (see ``Storage.name``), ignoring case."""
        if not isinstance(name, str):
            raise StorageError(f'Expected a storage type name, but got {name!r}.')
        key = name.strip().lower()
        if key == 'bigint':
            return BIGINT
        match = re.fullmatch(r'(u?)int([0-9]+)', key)
        if match is None or int(match.group(2)) == 0:
            raise StorageError(f'{name!r} is not a storage type name (expected e.g. int64, uint32 or bigint).')
        return Storage(int(match.group(2)), signed=(match.group(1) == ''))

    def bits(self) -> Optional[int]:
        """Bit width of the storage type, ``None`` when unbounded."""
        return self.__bits

    def is_signed(self) -> bool:
        return self.__signed

    def is_bounded(self) -> bool:
        return self.__bits is not None

    def min_value(self) -> Optional[int]:
        """Smallest representable value, ``None`` when unbounded."""
        if self.__bits is None:
            return None
        elif self.__signed:
            return -(2 ** (self.__bits - 1))
        else:
            return 0

    def max_value(self) -> Optional[int]:
        """Largest representable value, ``None`` when unbounded."""
        if self.__bits is None:
            return None
        elif self.__signed:
            return 2 ** (self.__bits - 1) - 1
        else:
            return 2 ** self.__bits - 1

    def contains(self, value : int) -> bool:
        """Returns ``True`` if ``value`` is representable in this storage type."""
        if self.__bits is None:
            return True
        lo = self.min_value()
        hi = self.max_value()
        assert lo is not None and hi is not None
        return lo <= value <= hi

    def check(self, value : int) -> int:
        """Returns ``value`` unchanged if it is representable, else raises ``StorageError``."""
        if not self.contains(value):
            raise StorageError(f'{value!r} is not representable as {self.name()}.')
        return value

    def wrap(self, value : int) -> int:
        """Returns what a fixed-width computation producing ``value`` would hold, i.e.
        ``value`` modulo ``2 ** bits`` read back as two's complement when signed."""
        if self.__bits is None:
            return value
        excl_max = 2 ** self.__bits
        n = value % excl_max
        if self.__signed and n >= excl_max // 2:
            n -= excl_max
        return n

    def widen(self) -> 'Storage':
        """Returns a storage type of twice the width and the same signedness, or
        ``BIGINT`` once the doubled width would exceed ``MAX_FIXED_BITS``."""
        if self.__bits is None or 2 * self.__bits > MAX_FIXED_BITS:
            return BIGINT
        return Storage(2 * self.__bits, self.__signed)

    @staticmethod
    def promote(a : 'Storage', b : 'Storage') -> 'Storage':
        """Returns the common storage type of ``a`` and ``b``: the wider of the two, the
        unsigned one when both have the same width, and ``BIGINT`` when either is."""
        if a.__bits is None or b.__bits is None:
            return BIGINT
        if a.__bits != b.__bits:
            return a if a.__bits > b.__bits else b
        return a if not a.__signed else b

    def add_with_overflow(self, x : int, y : int) -> Tuple[int, bool]:
        """Returns the fixed-width sum of ``x`` and ``y`` together with ``True`` if
        the sum wrapped around."""
        s = x + y
        return (self.wrap(s), not self.contains(s))

    def mul_with_overflow(self, x : int, y : int) -> Tuple[int, bool]:
        """Returns the fixed-width product of ``x`` and ``y`` together with ``True``
        if the product wrapped around."""
        p = x * y
        return (self.wrap(p), not self.contains(p))

    def to_bitvector(self, value : int) -> BitVector:
        """The bit pattern of ``value`` in this storage type.

        For ``BIGINT`` the pattern is two's complement with one bit more than ``value.bit_length()``."""
        self.check(value)
        if self.__bits is None:
            size = value.bit_length() + 1
        else:
            size = self.__bits
        return BitVector(intVal=value % (2 ** size), size=size)

    def from_bitvector(self, bv : BitVector) -> int:
        """The value whose bit pattern in this storage type is ``bv``.

        For ``BIGINT`` the bits are read as an unsigned integer."""
        if not isinstance(bv, BitVector):
            raise StorageError(f'Expected a BitVector, but got {bv!r}.')
        if self.__bits is None:
            return int(bv)
        if len(bv) != self.__bits:
            raise StorageError(f'Expected {self.__bits!r} bits to read a {self.name()} value, but got {len(bv)!r}.')
        return self.wrap(int(bv))

    def random_raw(self, rng : Any) -> int:
        """A raw value drawn uniformly from the full range of this (bounded) storage type."""
        if self.__bits is None:
            raise StorageError('Cannot draw uniformly from the unbounded storage type.')
        return self.wrap(rng.getrandbits(self.__bits))


INT8    = Storage(8)
INT16   = Storage(16)
INT32   = Storage(32)
INT64   = Storage(64)
INT128  = Storage(128)
UINT8   = Storage(8, signed=False)
UINT16  = Storage(16, signed=False)
UINT32  = Storage(32, signed=False)
UINT64  = Storage(64, signed=False)
UINT128 = Storage(128, signed=False)
BIGINT  = Storage(None)

_OPS : Dict[str, Callable[[int, int], int]] = {
    '+': operator.add,
    '*': operator.mul,
}


def widening_op(storage : Storage, op : Op, x : int, y : int, modulus : int) -> int:
    """Computes ``x op y`` for raw values of ``storage`` without ever wrapping around.

    The operation is first attempted in ``storage``'s own width. When it does not
    overflow, the (unreduced) result is returned as-is. When it does, the operation
    is redone in ``storage.widen()`` and reduced modulo ``modulus``, which always
    brings it back into ``storage`` since ``modulus - 1`` is representable there.

    :param op: ``'+'`` or ``'*'``.
    """
    if op == '+':
        r, overflowed = storage.add_with_overflow(x, y)
    elif op == '*':
        r, overflowed = storage.mul_with_overflow(x, y)
    else:
        raise ValueError(f'`widening_op` expects an operator of + or *, but got {op!r}.')
    if not overflowed:
        return r
    wide = storage.widen()
    t = wide.check(_OPS[op](x, y))
    if trace.is_logging():
        trace.log(f'{x!r} {op} {y!r} overflows {storage.name()}, widened to {wide.name()} and reduced mod {modulus!r}')
    return t % modulus
