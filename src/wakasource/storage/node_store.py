"""Record stores that accept emitted nodes.

A store receives fully-formed nodes (flat dicts with ``id`` and
``internal.content_digest``) and deduplicates by ``id``: the last write
for an identifier wins.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "JsonlNodeStore",
    "MemoryNodeStore",
    "NodeStore",
]


@runtime_checkable
class NodeStore(Protocol):
    """Anything that accepts emitted nodes."""

    def create_node(self, node: dict[str, Any]) -> None: ...


class MemoryNodeStore:
    """In-memory store keyed by node id.

    Tracks how many writes replaced an existing node and how many of those
    carried identical content.
    """

    def __init__(self) -> None:
        self.nodes: dict[str, dict[str, Any]] = {}
        self.overwrites = 0
        self.unchanged = 0

    def create_node(self, node: dict[str, Any]) -> None:
        node_id = node["id"]
        previous = self.nodes.get(node_id)
        if previous is not None:
            self.overwrites += 1
            if previous["internal"]["content_digest"] == node["internal"]["content_digest"]:
                self.unchanged += 1
        self.nodes[node_id] = node

    def get(self, node_id: str) -> dict[str, Any] | None:
        return self.nodes.get(node_id)

    def by_type(self, type_name: str) -> list[dict[str, Any]]:
        return [node for node in self.nodes.values() if node["internal"]["type"] == type_name]

    def __len__(self) -> int:
        return len(self.nodes)

    def __bool__(self) -> bool:
        # An empty store is still a store
        return True

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes


class JsonlNodeStore(MemoryNodeStore):
    """Collects nodes in memory and writes them as JSON lines on ``flush()``.

    The file is replaced atomically, one node per line.
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path)

    def flush(self) -> Path:
        """Write all nodes to ``path``.

        Returns
        -------
        Path
            The written file
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = "".join(json.dumps(node, ensure_ascii=False, sort_keys=True) + "\n" for node in self.nodes.values())

        # Temporary file on the same filesystem, then rename over the target
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f".{self.path.name}.tmp",
            delete=False,
        ) as tmp_file:
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            tmp_path = Path(tmp_file.name)

        tmp_path.replace(self.path)
        return self.path
