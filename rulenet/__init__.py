"""
rulenet
=======

Directed graphs whose edges are derived from per-node rules, plus a
breadth-first traversal over the result.

Example
-------
>>> from rulenet import NetworkManager, Rule, Direction, bfs
>>> mgr = NetworkManager()
>>> out = Rule(match=lambda me, other: True, direction=Direction.OUTGOING)
>>> inc = Rule(match=lambda me, other: True, direction=Direction.INCOMING)
>>> a = mgr.create_node("a", {}, [out])
>>> b = mgr.create_node("b", {}, [inc])
>>> [n.id for n in bfs(mgr.network, "a")]
['a', 'b']
"""

from rulenet.core import (
    Direction,
    DuplicateIdError,
    EmptyIdError,
    ErrorKind,
    GraphStore,
    HandshakeReport,
    NetworkError,
    NetworkManager,
    NetworkStore,
    Node,
    NodeNotFoundError,
    Rule,
    explain_handshake,
    handshake,
)
from rulenet.algorithms import BFSOptions, bfs, bfs_depths
from rulenet.platform import Settings, configure_logging, load_settings

__version__ = "0.1.0"

__all__ = [
    "BFSOptions",
    "Direction",
    "DuplicateIdError",
    "EmptyIdError",
    "ErrorKind",
    "GraphStore",
    "HandshakeReport",
    "NetworkError",
    "NetworkManager",
    "NetworkStore",
    "Node",
    "NodeNotFoundError",
    "Rule",
    "Settings",
    "bfs",
    "bfs_depths",
    "configure_logging",
    "explain_handshake",
    "handshake",
    "load_settings",
]
