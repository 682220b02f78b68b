from __future__ import annotations

"""
Namespace Error Taxonomy.

Every failure raised by the namespace is a local, immediate domain error.
Creation and removal operations raise before touching the tree, so a caught
error always leaves children and cached sizes exactly as they were.
"""


class NamespaceError(Exception):
    """Base class for all namespace domain failures."""


class InvalidNameError(NamespaceError):
    """Raised when a node is created with an empty name."""

    def __init__(self, message: str = "invalid name.") -> None:
        super().__init__(message)


class InvalidSizeError(NamespaceError):
    """Raised when a file is declared with a negative or non-integer size."""

    def __init__(self, size: object) -> None:
        super().__init__(f"invalid size: {size!r}.")
        self.size = size


class DuplicateNameError(NamespaceError):
    """Raised when a sibling with the same case-insensitive name exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} already exists.")
        self.name = name


class NotFoundError(NamespaceError):
    """Raised when a direct child lookup or removal targets a missing name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} does not exist.")
        self.name = name


class CapacityExceededError(NamespaceError):
    """
    Raised when a file creation would push the partition past its capacity.

    Attributes:
        desired: Size in bytes that was requested.
        remaining: Headroom left in the partition at the time of the check.
    """

    def __init__(self, desired: int, remaining: int) -> None:
        super().__init__("capacity overflow.")
        self.desired = desired
        self.remaining = remaining


class NodeRemovedError(NamespaceError):
    """Raised when a folder that was already removed from its tree is mutated."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} was removed from its partition.")
        self.name = name
