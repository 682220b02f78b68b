from __future__ import annotations

"""
Namespace Session.

A session owns exactly one Partition built from a validated configuration.
Independent sessions give independent trees; the process-wide default
session is created on first use and kept for the rest of the process.
"""

import logging
import threading
from typing import Any, Dict, Optional

from partitionfs.core.analysis.tree_renderer import display_tree
from partitionfs.core.services.validator import validate_config
from partitionfs.domain.config import get_default_config, load_config
from partitionfs.domain.node_models import Node, Partition
from partitionfs.infra.logging import LoggingConfig, configure_logging

logger = logging.getLogger(__name__)

_DEFAULT_SESSION: Optional[NamespaceSession] = None
_DEFAULT_SESSION_LOCK = threading.Lock()


class NamespaceSession:
    """
    Holds the partition of one running namespace together with its settings.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Validate the configuration and build the session's partition.

        Args:
            config: Raw configuration; defaults are used when omitted.
        """
        raw = config if config is not None else get_default_config()
        clean, warnings = validate_config(raw, strict=False)
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")

        self._config = clean
        self._root = Partition(clean["root_name"], clean["capacity"])
        logger.debug(
            f"Session started: partition '{self._root.name}' "
            f"with {self._root.capacity} bytes"
        )

    @property
    def root(self) -> Partition:
        return self._root

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    def display(self, node: Optional[Node] = None) -> str:
        """Render a subtree (the whole partition by default) with the configured indent."""
        target = node if node is not None else self._root
        return display_tree(target, indent_width=self._config["indent_width"])

    def enable_logging(self, *, console: bool = True, force: bool = False) -> logging.Logger:
        """
        Route package diagnostics to stderr and/or the configured log file.

        The namespace never installs handlers on its own; hosts opt in here.
        """
        cfg = LoggingConfig(
            level=self._config["log_level"],
            console=console,
            log_file=self._config["log_file"],
        )
        return configure_logging(cfg, force=force)


def get_default_session() -> NamespaceSession:
    """
    Return the process-wide session, creating it on first use.

    The configuration comes from load_config(), which honours the
    PARTITIONFS_CONFIG environment variable.
    """
    global _DEFAULT_SESSION
    if _DEFAULT_SESSION is None:
        with _DEFAULT_SESSION_LOCK:
            if _DEFAULT_SESSION is None:
                _DEFAULT_SESSION = NamespaceSession(load_config())
    return _DEFAULT_SESSION


def root_instance() -> Partition:
    """Return the partition of the process-wide session."""
    return get_default_session().root
