"""Modular integers with overflow-safe fixed-width storage. Use :py:class:`zmod.IntMod`
to create one and :py:func:`zmod.crt` to combine residues of coprime moduli."""

from .errors import ZmodError, InvalidModulus, IncompatibleModuli, NotInvertible, SizeMismatch, EmptyInput, StorageError
from .storage import Storage, INT8, INT16, INT32, INT64, INT128, UINT8, UINT16, UINT32, UINT64, UINT128, BIGINT
from .intmod import IntMod, gcdx, invmod
from .remainder import crt, crt_mods
from .sampling import rand
from .options import get_default_storage, set_default_storage, get_random_source, set_random_source
from .trace import logging

__all__ = ['errors', 'intmod', 'options', 'remainder', 'sampling', 'storage', 'trace',
           'ZmodError', 'InvalidModulus', 'IncompatibleModuli', 'NotInvertible', 'SizeMismatch', 'EmptyInput', 'StorageError',
           'Storage', 'INT8', 'INT16', 'INT32', 'INT64', 'INT128', 'UINT8', 'UINT16', 'UINT32', 'UINT64', 'UINT128', 'BIGINT',
           'IntMod', 'gcdx', 'invmod', 'crt', 'crt_mods', 'rand',
           'get_default_storage', 'set_default_storage', 'get_random_source', 'set_random_source', 'logging']
