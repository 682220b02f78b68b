from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to namespace-wide defaults: the identity and
capacity of the default partition, the closed set of node kinds, tree-dump
formatting tokens, and the configuration file lookup.
"""

from enum import Enum
from typing import Dict

# Environment variable naming an optional JSON configuration file
CONFIG_ENV_VAR = "PARTITIONFS_CONFIG"

# -----------------------------------------------------------------------------
# PARTITION DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_ROOT_NAME = "root"
DEFAULT_CAPACITY = 10_000  # bytes
DEFAULT_LOG_LEVEL = "WARNING"

# -----------------------------------------------------------------------------
# NODE KINDS
# -----------------------------------------------------------------------------


class NodeKind(str, Enum):
    """Closed set of node variants living in a partition tree."""
    FILE = "file"
    FOLDER = "folder"
    PARTITION = "partition"
    SHORTCUT = "shortcut"


# Kinds that own children
CONTAINER_KINDS = frozenset({NodeKind.FOLDER, NodeKind.PARTITION})

# -----------------------------------------------------------------------------
# TREE DUMP FORMAT
# -----------------------------------------------------------------------------

PATH_SEPARATOR = "/"
INDENT_WIDTH = 2
ALIAS_ARROW = " --> "
DANGLING_TARGET_TEXT = "inexisting element"

KIND_LABELS: Dict[NodeKind, str] = {
    NodeKind.FILE: "File",
    NodeKind.FOLDER: "Folder",
    NodeKind.PARTITION: "Partition",
    NodeKind.SHORTCUT: "Shortcut",
}
