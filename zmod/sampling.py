from typing import Any, List, Optional, Sequence, Union

from . import options
from .errors import InvalidModulus, StorageError
from .intmod import IntMod
from .storage import BIGINT, Storage


def rand(n : int, *dims : int, storage : Optional[Storage] = None, rng : Optional[Any] = None) -> Union[IntMod, List[Any]]:
    """Random modular integers modulo ``n``.

    With no ``dims`` a single ``IntMod`` is returned, otherwise nested lists of shape
    ``dims`` (e.g. ``rand(7, 2, 3)`` is a list of two lists of three).

    Each raw value is drawn uniformly from the whole range of the storage type and
    reduced lazily like any other ``IntMod``. When that range is not a multiple of
    ``n`` the lower residues are very slightly more likely. ``BIGINT`` has no finite
    range, so its values are drawn uniformly from ``[0, n)``.

    :param storage: Storage type of the results, chosen like ``IntMod``'s when omitted.
    :param rng: Object with ``getrandbits`` and ``randrange`` methods (e.g. a
        ``random.Random``), defaults to ``zmod.get_random_source()``.
    """
    if not isinstance(n, int) or n < 2:
        raise InvalidModulus(f'`rand` expects `n` to be an integer of at least 2, but was given {n!r}.')
    for d in dims:
        if not isinstance(d, int) or d < 0:
            raise ValueError(f'`rand` expects nonnegative integer dimensions, but got {d!r}.')
    if storage is not None and not isinstance(storage, Storage):
        raise StorageError(f'`rand` expects `storage` to be a Storage, but got {storage!r}.')
    if storage is None:
        default = options.get_default_storage()
        storage = default if default.contains(n - 1) else BIGINT
    if rng is None:
        rng = options.get_random_source()
    if not dims:
        return _draw(n, storage, rng)
    return _fill(n, storage, rng, dims)


def _draw(n : int, storage : Storage, rng : Any) -> IntMod:
    if storage.is_bounded():
        return IntMod(storage.random_raw(rng), n, storage)
    return IntMod(rng.randrange(n), n, storage)


def _fill(n : int, storage : Storage, rng : Any, dims : Sequence[int]) -> List[Any]:
    if len(dims) == 1:
        return [_draw(n, storage, rng) for _ in range(dims[0])]
    return [_fill(n, storage, rng, dims[1:]) for _ in range(dims[0])]
