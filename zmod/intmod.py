from __future__ import annotations
from fractions import Fraction
from math import gcd
from typing import Any, Callable, Optional, Tuple, TypeVar, Union
from BitVector import BitVector #type: ignore

from . import options
from .errors import IncompatibleModuli, InvalidModulus, NotInvertible, StorageError
from .storage import BIGINT, Storage, widening_op

A = TypeVar('A')


def gcdx(a : int, b : int) -> Tuple[int, int, int]:
    """Extended Euclidean algorithm.

    Returns ``(g, u, v)`` with ``g = gcd(a, b) >= 0`` and ``a * u + b * v == g``.
    Either argument may be negative."""
    u0, u1 = 1, 0
    v0, v1 = 0, 1
    while b != 0:
        q = a // b
        a, b = b, a - q * b
        u0, u1 = u1, u0 - q * u1
        v0, v1 = v1, v0 - q * v1
    if a < 0:
        return (-a, -u0, -v0)
    return (a, u0, v0)


def invmod(a : int, m : int) -> int:
    """The inverse of ``a`` modulo ``m``, in ``[0, m)``.

    Raises ``NotInvertible`` if ``a`` and ``m`` are not coprime."""
    g, u, _ = gcdx(a, m)
    if g != 1:
        raise NotInvertible(f'{a!r} (mod {m!r}) is not invertible.')
    return u % m


def _storage_for(value : int, n : int) -> Storage:
    default = options.get_default_storage()
    if default.contains(value) and default.contains(n - 1):
        return default
    return BIGINT


class IntMod:
    """A class representing a modular integer (i.e. an integer ``value`` considered
    modulo ``n``).

    ``IntMod(value : int, n : int)`` will create a modular integer with modulus ``n``
    (``n >= 2`` must evaluate to ``True`` or an ``InvalidModulus`` error will be raised)
    holding ``value`` unreduced. ``value()`` always returns the canonical
    representative ``value % n``.

    N.B., the ``n`` and ``value`` arguments can be passed positionally or by name:

    ``IntMod(-1,12) == IntMod(value=-1, n=12) == IntMod(n=12, value=-1)``

    Each ``IntMod`` also carries a ``Storage`` type its raw value must fit in. When
    none is given the default storage (see ``zmod.set_default_storage``) is used if
    it can hold both ``value`` and ``n - 1``, and ``BIGINT`` otherwise. Additions and
    multiplications that would overflow the storage are redone in a wider type and
    reduced, so results are always exact.

    ``value`` may also be a ``fractions.Fraction`` ``p/q``, giving
    ``IntMod(p, n) / IntMod(q, n)``, or a ``BitVector`` holding the raw bit pattern
    in the storage type's width.
    """
    __modulus : int
    __storage : Storage
    __raw     : int

    def __init__(self, value : Union[int, Fraction, BitVector], n : int, storage : Optional[Storage] = None) -> None:
        """Initialize a modular integer from a value, a modulus and an optional storage type."""
        if not isinstance(n, int) or isinstance(n, bool) or n < 2:
            raise InvalidModulus(f'`IntMod` expects `n` to be an integer of at least 2, but was given {n!r}.')
        if storage is not None and not isinstance(storage, Storage):
            raise StorageError(f'`IntMod` expects `storage` to be a Storage, but got {storage!r}.')
        if isinstance(value, Fraction):
            q = IntMod.from_fraction(value, n, storage)
            value, storage = q.raw(), q.storage()
        elif isinstance(value, BitVector):
            if storage is None:
                default = options.get_default_storage()
                storage = default if default.contains(n - 1) else BIGINT
            value = storage.from_bitvector(value)
        if not isinstance(value, int):
            raise ValueError(f'`IntMod` expects `value` to be an integer, but got {value!r}')
        if storage is None:
            storage = _storage_for(value, n)
        elif not storage.contains(n - 1):
            raise InvalidModulus(f'`IntMod` expects `n - 1` to be representable as {storage.name()}, but got n = {n!r}.')
        self.__modulus = n
        self.__storage = storage
        self.__raw = storage.check(value)

    @staticmethod
    def from_fraction(q : Fraction, n : int, storage : Optional[Storage] = None) -> IntMod:
        """The modular integer ``p / q`` for the rational ``q = p/q`` modulo ``n``.

        Raises ``NotInvertible`` if the denominator is not invertible modulo ``n``."""
        if storage is None:
            storage = _storage_for(0, n)
        num = IntMod.__fitted(q.numerator, n, storage)
        den = IntMod.__fitted(q.denominator, n, storage)
        return num / den

    @staticmethod
    def zero(n : int, storage : Optional[Storage] = None) -> IntMod:
        """The additive identity modulo ``n``."""
        return IntMod(0, n, storage)

    @staticmethod
    def one(n : int, storage : Optional[Storage] = None) -> IntMod:
        """The multiplicative identity modulo ``n``."""
        return IntMod(1, n, storage)

    def zero_like(self) -> IntMod:
        """``IntMod(0, self.modulus(), self.storage())``."""
        return IntMod(0, self.__modulus, self.__storage)

    def one_like(self) -> IntMod:
        """``IntMod(1, self.modulus(), self.storage())``."""
        return IntMod(1, self.__modulus, self.__storage)

    def __repr__(self) -> str:
        return f"IntMod({self.value()!r}, {self.__modulus!r})"

    def modulus(self) -> int:
        """Modulus of the modular integer."""
        return self.__modulus

    def value(self) -> int:
        """Canonical value of the modular integer, in ``[0, self.modulus())``."""
        return self.__raw % self.__modulus

    def raw(self) -> int:
        """The stored, possibly unreduced, value."""
        return self.__raw

    def storage(self) -> Storage:
        return self.__storage

    def raw_bits(self) -> BitVector:
        """The stored value's bit pattern in the width of ``self.storage()``."""
        return self.__storage.to_bitvector(self.__raw)

    def cast(self, storage : Storage) -> IntMod:
        """The same modular integer held in another storage type.

        The raw value is kept when the new storage can hold it, otherwise the
        canonical value is used."""
        if not isinstance(storage, Storage):
            raise StorageError(f'`cast` expects a Storage, but got {storage!r}.')
        if storage == self.__storage:
            return self
        raw = self.__raw if storage.contains(self.__raw) else self.value()
        return IntMod(raw, self.__modulus, storage)

    def is_zero(self) -> bool:
        return self.value() == 0

    def is_invertible(self) -> bool:
        """Returns ``True`` if ``self`` has a multiplicative inverse."""
        return gcd(self.__raw, self.__modulus) == 1

    def inverse(self) -> IntMod:
        """The multiplicative inverse of ``self``.

        Raises ``NotInvertible`` if ``self`` shares a factor with its modulus."""
        if self.__storage.is_signed():
            v = invmod(self.__raw, self.__modulus)
        else:
            mi = BitVector(intVal=self.__raw, size=self.__storage.bits()) \
                    .multiplicative_inverse(BitVector(intVal=self.__modulus))
            if mi is None:
                raise NotInvertible(f'{self!r} is not invertible.')
            v = int(mi)
        return IntMod(v, self.__modulus, self.__storage)

    def __eq__(self, other : Any) -> bool:
        """Returns ``True`` if ``other`` is also an ``IntMod`` with the same modulus
        and the same canonical value, else returns ``False``."""
        if isinstance(other, IntMod):
            if self.__modulus != other.__modulus:
                return False
            return bool(self.__binop(lambda s,o: (s - o).value() == 0, "==", other))
        else:
            return False

    def __hash__(self) -> int:
        return hash((self.__modulus, self.value()))

    def __int__(self) -> int:
        """Equivalent to ``self.value()``."""
        return self.value()

    def __bool__(self) -> bool:
        return not self.is_zero()

    # some private functions useful when defining operators

    @staticmethod
    def __fitted(value : int, n : int, storage : Storage) -> IntMod:
        if not storage.contains(value):
            value = value % n
        return IntMod(value, n, storage)

    def __coerce(self, other : Any, op : str) -> Optional[Tuple[IntMod, IntMod]]:
        if isinstance(other, IntMod):
            if self.__modulus != other.__modulus:
                raise IncompatibleModuli(self.__unequal_modulus_op_error_msg(op, other))
            if self.__storage == other.__storage:
                return (self, other)
            common = Storage.promote(self.__storage, other.__storage)
            return (self.cast(common), other.cast(common))
        elif isinstance(other, int):
            return (self, IntMod.__fitted(other, self.__modulus, self.__storage))
        elif isinstance(other, Fraction):
            return (self, IntMod.from_fraction(other, self.__modulus, self.__storage))
        else:
            return None

    def __binop(self, op : Callable[[IntMod, IntMod], A], opname : str, other : Any) -> A:
        pair = self.__coerce(other, opname)
        if pair is None:
            return NotImplemented
        return op(*pair)
    def __rbinop(self, op : Callable[[IntMod, IntMod], A], opname : str, other : Any) -> A:
        return self.__binop(lambda s,o: op(o,s), opname, other)

    def __canonical(self) -> IntMod:
        return IntMod(self.value(), self.__modulus, self.__storage)

    def __add_same(self, other : IntMod) -> IntMod:
        raw = widening_op(self.__storage, '+', self.__raw, other.__raw, self.__modulus)
        return IntMod(raw, self.__modulus, self.__storage)

    def __mul_same(self, other : IntMod) -> IntMod:
        raw = widening_op(self.__storage, '*', self.__raw, other.__raw, self.__modulus)
        return IntMod(raw, self.__modulus, self.__storage)

    # arithmetic

    def __pos__(self) -> IntMod:
        return IntMod(self.__raw, self.__modulus, self.__storage)

    def __neg__(self) -> IntMod:
        storage = self.__storage
        if not storage.is_signed():
            v = self.value()
            return IntMod(0 if v == 0 else self.__modulus - v, self.__modulus, storage)
        elif storage.is_bounded() and self.__raw == storage.min_value():
            return IntMod(-self.value(), self.__modulus, storage)
        else:
            return IntMod(-self.__raw, self.__modulus, storage)

    def __add__(self, other : Union[int, Fraction, IntMod]) -> IntMod:
        """Addition bewteen ``IntMod``s of the same modulus or bewteen an ``IntMod``
           and an integer or ``Fraction``"""
        return self.__binop(lambda s,o: s.__add_same(o), "+", other)

    def __radd__(self, other : Union[int, Fraction]) -> IntMod:
        return self.__rbinop(lambda o,s: o.__add_same(s), "+", other)

    def __sub__(self, other : Union[int, Fraction, IntMod]) -> IntMod:
        """Subtraction bewteen ``IntMod``s of the same modulus or bewteen an ``IntMod``
           and an integer or ``Fraction``, i.e. ``self + (-other)``"""
        return self.__binop(lambda s,o: s.__add_same(-o), "-", other)

    def __rsub__(self, other : Union[int, Fraction]) -> IntMod:
        return self.__rbinop(lambda o,s: o.__add_same(-s), "-", other)

    def __mul__(self, other : Union[int, Fraction, IntMod]) -> IntMod:
        """Multiplication bewteen ``IntMod``s of the same modulus or bewteen an ``IntMod``
           and an integer or ``Fraction``"""
        return self.__binop(lambda s,o: s.__mul_same(o), "*", other)

    def __rmul__(self, other : Union[int, Fraction]) -> IntMod:
        return self.__rbinop(lambda o,s: o.__mul_same(s), "*", other)

    def __truediv__(self, other : Union[int, Fraction, IntMod]) -> IntMod:
        """Division bewteen ``IntMod``s of the same modulus or bewteen an ``IntMod``
           and an integer or ``Fraction``, i.e. ``self * other.inverse()``"""
        return self.__binop(lambda s,o: s.__mul_same(o.inverse()), "/", other)

    def __rtruediv__(self, other : Union[int, Fraction]) -> IntMod:
        return self.__rbinop(lambda o,s: o.__mul_same(s.inverse()), "/", other)

    def __pow__(self, other : int) -> IntMod:
        """Raising a modular integer to an integer power. Negative powers require
           ``self`` to be invertible, and ``x ** 0`` is one even when ``x`` is zero."""
        if not isinstance(other, int):
            raise ValueError(f'Cannot raise {self!r} to the power of {other!r}.')
        if other == 0:
            return self.one_like()
        if other < 0:
            if not self.is_invertible():
                raise NotInvertible(f'Cannot raise {self!r} to the negative power {other!r}, it is not invertible.')
            return self.inverse() ** (-other)
        # intermediate results are kept canonical
        result = self.one_like()
        base = self.__canonical()
        k = other
        while True:
            if k & 1:
                result = result.__mul_same(base).__canonical()
            k >>= 1
            if k == 0:
                return result
            base = base.__mul_same(base).__canonical()

    def __unequal_modulus_op_error_msg(self, op : str, other : IntMod) -> str:
        return f'Operator `{op}` cannot be called on modular integers of unequal moduli {self!r} and {other!r}.'
