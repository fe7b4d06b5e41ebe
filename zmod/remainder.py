from functools import reduce
import operator
from typing import Sequence, Union

from . import trace
from .errors import EmptyInput, InvalidModulus, SizeMismatch
from .intmod import IntMod, invmod


def crt(remainders : Sequence[int], moduli : Sequence[int]) -> int:
    """Chinese Remainder Theorem.

    Returns the unique ``r`` in ``[0, prod(moduli))`` with ``r % m == x % m`` for
    every pair ``(x, m)`` of ``remainders`` and ``moduli``.

    ``crt([4, 8], [11, 14]) == 92``

    The moduli must be pairwise coprime. This is not checked up front; when it does
    not hold the inversion step fails with ``NotInvertible``.

    :param remainders: Integer remainders, any value (they are reduced by the algorithm).
    :param moduli: Positive integer moduli, one per remainder.
    """
    if len(remainders) != len(moduli):
        raise SizeMismatch(f'`crt` expects as many remainders as moduli, but got {len(remainders)!r} and {len(moduli)!r}.')
    if len(remainders) == 0:
        raise EmptyInput('`crt` expects at least one remainder and modulus.')
    for r in remainders:
        if not isinstance(r, int):
            raise ValueError(f'`crt` expects integer remainders, but was given {r!r}.')
    for m in moduli:
        if not isinstance(m, int) or m < 1:
            raise InvalidModulus(f'`crt` expects positive integer moduli, but was given {m!r}.')
    M = reduce(operator.mul, moduli, 1)
    Ms = [M // m for m in moduli]
    ts = [invmod(Mi, m) for Mi, m in zip(Ms, moduli)]
    result = sum(r * t * Mi for r, t, Mi in zip(remainders, ts, Ms)) % M
    if trace.is_logging():
        trace.log(f'crt of {len(moduli)!r} residues modulo {M!r} = {result!r}')
    return result


def crt_mods(*residues : IntMod, as_mod : bool = False) -> Union[int, IntMod]:
    """Chinese Remainder Theorem on modular integers of (pairwise coprime) moduli.

    ``crt_mods(IntMod(4, 11), IntMod(8, 14)) == 92``

    :param as_mod: When ``True`` the result is returned as an ``IntMod`` modulo the
        product of the moduli instead of as an integer.
    """
    if not residues:
        raise EmptyInput('`crt_mods` expects at least one modular integer.')
    for x in residues:
        if not isinstance(x, IntMod):
            raise ValueError(f'`crt_mods` expects modular integers, but got {x!r}')
    moduli = [x.modulus() for x in residues]
    result = crt([x.value() for x in residues], moduli)
    if as_mod:
        return IntMod(result, reduce(operator.mul, moduli, 1))
    return result
