from __future__ import annotations

"""
Public facade of the partition namespace.

Function-style entry points over the node model, for callers that prefer not
to call methods on nodes directly. Every operation addresses a direct child
of the given folder; there is no path parsing.
"""

from partitionfs.core.session import root_instance
from partitionfs.domain.node_models import Folder, LeafFile, Node, Shortcut

__all__ = [
    "absolute_name",
    "create_alias",
    "create_file",
    "create_folder",
    "display_tree",
    "remove_element",
    "root_instance",
    "size",
]


def create_folder(parent: Folder, name: str) -> Folder:
    return parent.create_folder(name)


def create_file(parent: Folder, name: str, size: int) -> LeafFile:
    return parent.create_file(name, size)


def create_alias(parent: Folder, name: str, target: Node) -> Shortcut:
    return parent.create_alias(name, target)


def remove_element(parent: Folder, name: str) -> None:
    parent.remove_element(name)


def size(node: Node) -> int:
    return node.size()


def absolute_name(node: Node) -> str:
    return node.absolute_name()


def display_tree(node: Node) -> str:
    return node.display_tree()
