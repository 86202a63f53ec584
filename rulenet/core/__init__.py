"""
rulenet core: rule-derived directed graph engine
================================================

Nodes carry a payload and an immutable rule tuple; edges between nodes are
derived by a two-sided handshake and only change when a node is created,
removed or explicitly recalculated.

Public API:
- NetworkManager: node lifecycle and edge materialization
- Rule / Direction / Node: data model
- handshake / explain_handshake: edge decision for one ordered pair
- GraphStore / NetworkStore: storage protocol and networkx implementation
"""

from rulenet.core.errors import (
    DuplicateIdError,
    EmptyIdError,
    ErrorKind,
    NetworkError,
    NodeNotFoundError,
)
from rulenet.core.schema import Direction, Node, Rule
from rulenet.core.store import GraphStore, NetworkStore
from rulenet.core.handshake import HandshakeReport, explain_handshake, handshake
from rulenet.core.manager import NetworkManager

__all__ = [
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
    "explain_handshake",
    "handshake",
]
