from __future__ import annotations

"""
Tree Renderer.

Converts a partition subtree into its textual dump. Each node contributes one
"<Kind>: <name>" line followed by a kind-specific suffix, and containers
recurse into their children with a fixed indent per depth level.
"""

from typing import TYPE_CHECKING, Callable, Dict, List

from partitionfs.domain.constants import (
    ALIAS_ARROW,
    CONTAINER_KINDS,
    DANGLING_TARGET_TEXT,
    INDENT_WIDTH,
    KIND_LABELS,
    NodeKind,
)

if TYPE_CHECKING:
    from partitionfs.domain.node_models import Node

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_structure(
        node: Node,
        lines: List[str],
        depth: int = 0,
        indent_width: int = INDENT_WIDTH,
) -> None:
    """
    Recursively append the dump lines of a node and its descendants.

    Children are emitted in insertion order. Shortcut targets are resolved at
    render time, so a removed target shows up as a dangling marker.

    Args:
        node: Subtree root to render.
        lines: Accumulator list for output strings.
        depth: Nesting level of the current node.
        indent_width: Spaces added per depth level.
    """
    prefix = " " * (depth * indent_width)
    lines.append(f"{prefix}{KIND_LABELS[node.kind]}: {node.name}{render_suffix(node)}")

    if node.kind in CONTAINER_KINDS:
        for child in node.children():  # type: ignore[attr-defined]
            render_tree_structure(child, lines, depth=depth + 1, indent_width=indent_width)


def display_tree(node: Node, indent_width: int = INDENT_WIDTH) -> str:
    """
    Render a subtree as a single newline-joined string.

    Args:
        node: Subtree root to render.
        indent_width: Spaces added per depth level.

    Returns:
        str: The tree dump, without a trailing newline.
    """
    lines: List[str] = []
    render_tree_structure(node, lines, indent_width=indent_width)
    return "\n".join(lines)


def render_suffix(node: Node) -> str:
    """Return the kind-specific text appended after '<Kind>: <name>'."""
    return _SUFFIX_RENDERERS[node.kind](node)

# -----------------------------------------------------------------------------
# SUFFIX DISPATCH
# -----------------------------------------------------------------------------

def _no_suffix(node: Node) -> str:
    return ""


def _shortcut_suffix(node: Node) -> str:
    resolution = node.resolve()  # type: ignore[attr-defined]
    target_text = resolution.absolute_name if resolution.is_present else DANGLING_TARGET_TEXT
    return f"{ALIAS_ARROW}{target_text}"


_SUFFIX_RENDERERS: Dict[NodeKind, Callable[[Node], str]] = {
    NodeKind.FILE: _no_suffix,
    NodeKind.FOLDER: _no_suffix,
    NodeKind.PARTITION: _no_suffix,
    NodeKind.SHORTCUT: _shortcut_suffix,
}
