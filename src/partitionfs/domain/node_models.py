from __future__ import annotations

"""
Partition Tree Data Models.

Defines the node variants of a virtual hierarchical namespace: fixed-size
files, folders that own their children and cache their aggregate size, the
capacity-bounded partition at the top of every tree, and shortcuts holding a
non-owning reference to another node.

Ownership only flows parent -> child. Shortcut edges are never followed when
sizing, invalidating or removing nodes.
"""

import logging
import threading
import weakref
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import ClassVar, Dict, Iterator, Optional, Tuple, cast

from partitionfs.core.analysis.tree_renderer import display_tree
from partitionfs.core.services.diagnostics import instance_counter
from partitionfs.domain.constants import INDENT_WIDTH, PATH_SEPARATOR, NodeKind
from partitionfs.domain.errors import (
    CapacityExceededError,
    DuplicateNameError,
    InvalidNameError,
    InvalidSizeError,
    NodeRemovedError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# VALIDATION HELPERS
# -----------------------------------------------------------------------------

def _check_name(name: object) -> None:
    if not isinstance(name, str) or not name:
        raise InvalidNameError()


def _check_parent(node: Node, parent: object) -> None:
    if parent is None and not isinstance(node, Partition):
        raise TypeError(
            f"{type(node).__name__} needs a parent folder; only a Partition has none."
        )


def _is_byte_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0

# -----------------------------------------------------------------------------
# BASE NODE
# -----------------------------------------------------------------------------

class Node(ABC):
    """
    Common contract of every entry in a partition tree.

    A node's parent is fixed at construction. Nodes are created through a
    Folder factory method; only a Partition is constructed directly.
    """

    kind: ClassVar[NodeKind]

    def __init__(self, name: str, parent: Optional[Folder]) -> None:
        _check_name(name)
        _check_parent(self, parent)
        self._name = name
        self._parent = parent
        self._partition: Partition = parent.partition if parent is not None else cast("Partition", self)
        self._removed = False
        instance_counter.increment(self.kind)

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> Optional[Folder]:
        return self._parent

    @property
    def partition(self) -> Partition:
        """The partition at the top of the tree this node was created in."""
        return self._partition

    @property
    def is_removed(self) -> bool:
        """True once the node (or one of its ancestors) was removed from the tree."""
        return self._removed

    @abstractmethod
    def size(self) -> int:
        """Return the current size of the node in bytes."""

    def absolute_name(self) -> str:
        """
        Build the slash-joined name path from the partition down to this node.

        The partition contributes its bare name, without a leading separator.
        """
        if self._parent is None:
            return self._name
        return f"{self._parent.absolute_name()}{PATH_SEPARATOR}{self._name}"

    def display_tree(self, indent_width: int = INDENT_WIDTH) -> str:
        return display_tree(self, indent_width=indent_width)

    def _destroy(self) -> None:
        self._removed = True
        instance_counter.decrement(self.kind)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.absolute_name()!r}>"

# -----------------------------------------------------------------------------
# LEAF FILE
# -----------------------------------------------------------------------------

class LeafFile(Node):
    """
    A node with an immutable declared size and no children.

    Construction consults the owning partition's remaining capacity, so a
    LeafFile that exists has always been accounted for.
    """

    kind = NodeKind.FILE

    def __init__(self, name: str, declared_size: int, parent: Folder) -> None:
        _check_name(name)
        _check_parent(self, parent)
        if not _is_byte_count(declared_size):
            raise InvalidSizeError(declared_size)
        parent.partition.check_remaining_size(declared_size)
        super().__init__(name, parent)
        self._declared_size = declared_size

    @property
    def declared_size(self) -> int:
        return self._declared_size

    def size(self) -> int:
        return self._declared_size

# -----------------------------------------------------------------------------
# FOLDER (CONTAINER)
# -----------------------------------------------------------------------------

class Folder(Node):
    """
    A node owning a case-insensitively keyed collection of children.

    The aggregate size is computed lazily and cached. Any change that can
    alter it clears the cache on this folder and on every ancestor up to the
    partition.
    """

    kind = NodeKind.FOLDER

    def __init__(self, name: str, parent: Optional[Folder]) -> None:
        # parent is None only for a Partition
        super().__init__(name, parent)
        self._children: Dict[str, Node] = {}
        self._cached_size: Optional[int] = None

    # --- Factories ---

    def create_folder(self, name: str) -> Folder:
        """
        Create an empty child folder.

        Raises:
            InvalidNameError: If the name is empty.
            DuplicateNameError: If a sibling with the same case-folded name exists.
        """
        with self._mutation():
            key = self._claim_key(name)
            folder = Folder(name, self)
            self._children[key] = folder
        logger.debug(f"Folder created: {folder.absolute_name()}")
        return folder

    def create_file(self, name: str, size: int) -> LeafFile:
        """
        Create a child file of a fixed size.

        The partition capacity check and the linking happen under the
        partition lock, so concurrent creations cannot jointly overcommit.

        Raises:
            InvalidNameError: If the name is empty.
            DuplicateNameError: If a sibling with the same case-folded name exists.
            InvalidSizeError: If the size is negative or not an integer.
            CapacityExceededError: If the partition lacks headroom for the file.
        """
        with self._mutation():
            key = self._claim_key(name)
            leaf = LeafFile(name, size, self)
            self._children[key] = leaf
            if size:
                self._invalidate_size()
        logger.debug(f"File created: {leaf.absolute_name()} ({size} bytes)")
        return leaf

    def create_alias(self, name: str, target: Node) -> Shortcut:
        """
        Create a shortcut pointing at any node, including the partition itself.

        Raises:
            InvalidNameError: If the name is empty.
            DuplicateNameError: If a sibling with the same case-folded name exists.
            NodeRemovedError: If the target was already removed.
            TypeError: If the target is not a node.
        """
        with self._mutation():
            key = self._claim_key(name)
            shortcut = Shortcut(name, target, self)
            self._children[key] = shortcut
        logger.debug(f"Shortcut created: {shortcut.absolute_name()} -> {target.absolute_name()}")
        return shortcut

    # --- Removal ---

    def remove_element(self, name: str) -> None:
        """
        Unlink and destroy a direct child, recursively for folders.

        Shortcuts anywhere that point into the removed subtree stop resolving.

        Raises:
            NotFoundError: If no child carries that name.
        """
        with self._mutation():
            key = self._lookup_key(name)
            self._invalidate_size()
            child = self._children.pop(key)
            child._destroy()
        logger.debug(f"Element removed: {child.absolute_name()}")

    # --- Queries ---

    def get_element(self, name: str) -> Node:
        """
        Return the direct child with that name, compared case-insensitively.

        Raises:
            NotFoundError: If no child carries that name.
        """
        with self._partition.lock:
            return self._children[self._lookup_key(name)]

    def children(self) -> Tuple[Node, ...]:
        """Return direct children in insertion order."""
        with self._partition.lock:
            return tuple(self._children.values())

    def size(self) -> int:
        with self._partition.lock:
            cached = self._cached_size
            if cached is None:
                cached = sum(child.size() for child in self._children.values())
                self._cached_size = cached
            return cached

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        with self._partition.lock:
            return self.key_from_name(name) in self._children

    def __len__(self) -> int:
        with self._partition.lock:
            return len(self._children)

    # --- Internals ---

    @staticmethod
    def key_from_name(name: str) -> str:
        """Normalize a name into its case-insensitive lookup key."""
        return name.casefold()

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        with self._partition.lock:
            if self._removed:
                raise NodeRemovedError(self._name)
            yield

    def _claim_key(self, name: str) -> str:
        _check_name(name)
        key = self.key_from_name(name)
        if key in self._children:
            raise DuplicateNameError(name)
        return key

    def _lookup_key(self, name: str) -> str:
        key = self.key_from_name(name) if isinstance(name, str) else None
        if key is None or key not in self._children:
            raise NotFoundError(str(name))
        return key

    def _invalidate_size(self) -> None:
        folder: Optional[Folder] = self
        while folder is not None:
            folder._cached_size = None
            folder = folder.parent

    def _destroy(self) -> None:
        for child in self._children.values():
            child._destroy()
        self._children.clear()
        self._cached_size = None
        super()._destroy()

# -----------------------------------------------------------------------------
# PARTITION (ROOT)
# -----------------------------------------------------------------------------

class Partition(Folder):
    """
    Parentless folder with a fixed capacity.

    Every file created anywhere beneath it is checked against that capacity.
    One re-entrant lock guards the whole subtree, so child maps, cached sizes
    and capacity checks stay consistent with each other.
    """

    kind = NodeKind.PARTITION

    def __init__(self, name: str, capacity: int) -> None:
        if not _is_byte_count(capacity):
            raise InvalidSizeError(capacity)
        self._lock = threading.RLock()
        super().__init__(name, None)
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def remaining_size(self) -> int:
        """Return the free bytes left, never negative."""
        with self._lock:
            used = self.size()
            return self._capacity - used if used <= self._capacity else 0

    def check_remaining_size(self, desired_size: int) -> None:
        """
        Ensure the partition can absorb a new file of the given size.

        Filling the partition exactly to capacity is allowed.

        Raises:
            CapacityExceededError: If the desired size exceeds the headroom.
        """
        with self._lock:
            remaining = self.remaining_size()
            if desired_size > remaining:
                logger.warning(
                    f"Partition '{self._name}': rejected {desired_size} bytes "
                    f"({remaining} of {self._capacity} remaining)."
                )
                raise CapacityExceededError(desired_size, remaining)

# -----------------------------------------------------------------------------
# SHORTCUT (ALIAS)
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ShortcutResolution:
    """
    Outcome of resolving a shortcut.

    Attributes:
        target: The referenced node, or None when it no longer exists.
    """
    target: Optional[Node] = None

    @property
    def is_present(self) -> bool:
        return self.target is not None

    @property
    def absolute_name(self) -> Optional[str]:
        return self.target.absolute_name() if self.target is not None else None


class Shortcut(Node):
    """
    A zero-size node referring to another node without owning it.

    The target is re-resolved on every query. A target that was removed or
    garbage collected resolves as absent; that is an expected state, not an
    error.
    """

    kind = NodeKind.SHORTCUT

    def __init__(self, name: str, target: Node, parent: Folder) -> None:
        if not isinstance(target, Node):
            raise TypeError(f"Shortcut target must be a Node, received {type(target).__name__}.")
        if target.is_removed:
            raise NodeRemovedError(target.name)
        super().__init__(name, parent)
        self._target_ref: weakref.ReferenceType[Node] = weakref.ref(target)

    def resolve(self) -> ShortcutResolution:
        target = self._target_ref()
        if target is None or target.is_removed:
            return ShortcutResolution()
        return ShortcutResolution(target)

    def size(self) -> int:
        return 0
