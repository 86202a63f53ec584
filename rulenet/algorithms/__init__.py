"""
Read-only graph algorithms over a GraphStore.
"""

from rulenet.algorithms.bfs import BFSOptions, bfs, bfs_depths

__all__ = [
    "BFSOptions",
    "bfs",
    "bfs_depths",
]
