"""Stores for emitted records."""

from .node_store import JsonlNodeStore, MemoryNodeStore, NodeStore

__all__ = ["JsonlNodeStore", "MemoryNodeStore", "NodeStore"]
