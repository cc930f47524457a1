"""Exceptions raised by the pedy package."""


class PedyError(Exception):
    """Base error for domain misuse."""


class CartError(PedyError):
    """Raised when a cart operation cannot be applied."""


class SnapshotError(PedyError):
    """Raised when a menu snapshot or cart file references unknown records."""
