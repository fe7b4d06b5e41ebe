"""Process-wide settings for ``zmod``.

The default storage type used when an ``IntMod`` is created without one is read
from the ``ZMOD_DEFAULT_STORAGE`` environment variable (e.g. ``int64``, ``uint32``
or ``bigint``) and falls back to ``int64``.
"""

import os
import random
from typing import Any, Optional, Union

from .storage import Storage

_default_storage : Storage = Storage.named(os.getenv('ZMOD_DEFAULT_STORAGE', 'int64'))
_random_source : Optional[random.Random] = None


def get_default_storage() -> Storage:
    """Get the storage type used when an ``IntMod`` is created without one."""
    return _default_storage


def set_default_storage(storage : Union[Storage, str]) -> None:
    """Set the storage type used when an ``IntMod`` is created without one.

    :param storage: A ``Storage`` or the name of one (see ``Storage.named``).
    """
    global _default_storage
    if isinstance(storage, str):
        storage = Storage.named(storage)
    elif not isinstance(storage, Storage):
        raise ValueError(f'`set_default_storage` expects a Storage or a storage name, but got {storage!r}.')
    _default_storage = storage


def get_random_source() -> Any:
    """Get the source of randomness used for sampling when none is given explicitly.

    This is the ``random`` module itself (and so shares its global state) unless
    ``set_random_source`` installed another one."""
    if _random_source is None:
        return random
    return _random_source


def set_random_source(rng : Optional[random.Random]) -> None:
    """Set the source of randomness used for sampling; ``None`` restores the ``random`` module."""
    global _random_source
    _random_source = rng
