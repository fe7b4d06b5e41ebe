"""Exceptions raised by ``zmod``.

Every error is a ``ValueError`` so callers that only care about bad input can
catch that, while callers that care about the reason can catch the specific
class."""


class ZmodError(ValueError):
    pass


class InvalidModulus(ZmodError):
    """A modulus was smaller than 2, not an integer, or not representable in
    the requested storage type."""
    pass


class IncompatibleModuli(ZmodError):
    """Binary arithmetic was attempted between residues of different moduli."""
    pass


class NotInvertible(ZmodError):
    """A residue that shares a factor with its modulus was inverted."""
    pass


class SizeMismatch(ZmodError):
    pass


class EmptyInput(ZmodError):
    pass


class StorageError(ZmodError):
    """A raw value does not fit the requested storage type."""
    pass
