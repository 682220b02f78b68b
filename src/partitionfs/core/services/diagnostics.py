from __future__ import annotations

"""
Node Instance Diagnostics.

Tracks how many nodes of each kind are currently alive in any partition.
Counts move on construction and on removal only; they are a diagnostic
side channel and take no part in sizing or capacity decisions.
"""

import logging
import threading
from typing import Dict

from partitionfs.domain.constants import NodeKind

logger = logging.getLogger(__name__)


class InstanceCounter:
    """
    Thread-safe registry of live node counts keyed by node kind.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: Dict[NodeKind, int] = {kind: 0 for kind in NodeKind}

    def increment(self, kind: NodeKind) -> None:
        with self._lock:
            self._counts[kind] += 1

    def decrement(self, kind: NodeKind) -> None:
        with self._lock:
            if self._counts[kind] <= 0:
                logger.warning(f"InstanceCounter: Unbalanced release for kind '{kind.value}'.")
                return
            self._counts[kind] -= 1

    def count(self, kind: NodeKind) -> int:
        """Return the current live count for a single kind."""
        with self._lock:
            return self._counts[kind]

    def snapshot(self) -> Dict[NodeKind, int]:
        """
        Return a point-in-time copy of every counter.

        Returns:
            Dict[NodeKind, int]: Live count per node kind.
        """
        with self._lock:
            return dict(self._counts)

    def reset(self) -> None:
        """Zero every counter."""
        with self._lock:
            for kind in self._counts:
                self._counts[kind] = 0


# Process-wide registry used by the domain model
instance_counter = InstanceCounter()
