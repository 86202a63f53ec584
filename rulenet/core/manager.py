"""
Network Manager
===============

Orchestrates node lifecycle and keeps the derived edge set in sync.

Key Design Principles:
1. Edges are only touched by create_node, remove_node, update_node_data and
   recalculate. Nothing else ever re-evaluates rules.
2. Assigning ``node.data`` directly is a supported O(1) path that performs
   no edge work.
3. Every input check happens before the first mutation of a call.
"""

from typing import Any, Iterable, NoReturn, Optional

import structlog

from rulenet.core.errors import (
    DuplicateIdError,
    EmptyIdError,
    NetworkError,
    NodeNotFoundError,
)
from rulenet.core.handshake import handshake
from rulenet.core.schema import Node, Rule
from rulenet.core.store import GraphStore, NetworkStore

logger = structlog.get_logger(__name__)


class NetworkManager:
    """
    Creates, removes and re-materializes nodes of a rule-derived network.

    Between operations, the edge set equals ``handshake`` applied to every
    ordered pair of present nodes as of each node's most recent
    materialization (creation or recalculation). A node whose data was
    assigned directly keeps its old edges until it is recalculated; a node
    inserted later is still evaluated against that node's current data.

    The manager exclusively owns its store. It is not thread-safe: callers
    that mutate from several threads must provide their own locking, and
    traversals must not interleave with mutations without it.

    Example
    -------
    >>> mgr = NetworkManager()
    >>> lower = Rule(match=lambda me, other: me > other, direction="outgoing")
    >>> anyone = Rule(match=lambda me, other: True, direction="incoming")
    >>> small = mgr.create_node("small", 1, [anyone])
    >>> big = mgr.create_node("big", 10, [lower])
    >>> mgr.has_edge("big", "small")
    True
    """

    def __init__(self, store: Optional[GraphStore] = None):
        """
        Initialize the manager.

        Parameters
        ----------
        store : GraphStore, optional
            Store to mutate. If None, a fresh NetworkStore is used.
        """
        self._store: GraphStore = store if store is not None else NetworkStore()

    @property
    def network(self) -> GraphStore:
        """The underlying store (read it, don't mutate it)."""
        return self._store

    @property
    def node_count(self) -> int:
        return len(self.nodes())

    @property
    def edge_count(self) -> int:
        return len(self.edges())

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, str) and self._find_node(node_id) is not None

    def __len__(self) -> int:
        return self.node_count

    # ---------- Lifecycle ----------

    def create_node(
        self,
        node_id: str,
        data: Any,
        rules: Optional[Iterable[Rule]] = None,
    ) -> Node:
        """
        Create a node and materialize its edges.

        Edges produced:
        - new -> other for every existing node the handshake justifies
        - other -> new for every existing node the handshake justifies

        Parameters
        ----------
        node_id : str
            Unique, non-empty identifier.
        data : Any
            Domain payload. Stored by reference.
        rules : iterable of Rule, optional
            Captured as an immutable tuple; the Rule objects are shared. None
            means no rules.

        Returns
        -------
        Node
            The stored node. Assigning ``node.data`` later does not touch edges.

        Raises
        ------
        EmptyIdError
            If ``node_id`` is empty or None.
        DuplicateIdError
            If a node with ``node_id`` already exists.
        """
        if not node_id:
            self._reject("node_create_rejected", EmptyIdError())
        if self._find_node(node_id) is not None:
            self._reject("node_create_rejected", DuplicateIdError(node_id))

        node = Node(id=node_id, data=data, rules=tuple(rules or ()))
        self._store.add_node(node)
        edges_out, edges_in, candidates = self._materialize(node)

        logger.debug(
            "node_created",
            node_id=node_id,
            rules=len(node.rules),
            candidates=candidates,
            edges_out=edges_out,
            edges_in=edges_in,
        )
        return node

    def remove_node(self, node_id: str) -> None:
        """
        Remove a node and every edge touching it.

        Removing an absent id is a no-op. No other pair's edges change.
        """
        node = self._find_node(node_id)
        if node is None:
            return

        dropped = self._detach(node)
        self._store.remove_node(node)
        logger.debug("node_removed", node_id=node_id, edges_dropped=dropped)

    def update_node_data(self, node_id: str, data: Any) -> None:
        """
        Replace a node's data and recompute its edges.

        Every edge incident to the node is dropped, ``data`` is replaced, and
        the node is handshaken again against every other current node with its
        unchanged rule set. Repeating the call with the same data yields the
        same edge set.

        To replace data without any edge work, assign ``node.data`` directly.

        Raises
        ------
        NodeNotFoundError
            If no node has ``node_id``. Raised before anything is modified.
        """
        node = self._find_node(node_id)
        if node is None:
            self._reject("node_recalculate_rejected", NodeNotFoundError(node_id))

        dropped = self._detach(node)
        node.data = data
        edges_out, edges_in, candidates = self._materialize(node)

        logger.debug(
            "node_recalculated",
            node_id=node_id,
            candidates=candidates,
            edges_dropped=dropped,
            edges_out=edges_out,
            edges_in=edges_in,
        )

    def recalculate(self, node_id: str) -> None:
        """
        Re-materialize a node against its current data.

        Makes a previous direct ``node.data`` assignment visible in the edge
        set.

        Raises
        ------
        NodeNotFoundError
            If no node has ``node_id``.
        """
        node = self._find_node(node_id)
        if node is None:
            self._reject("node_recalculate_rejected", NodeNotFoundError(node_id))
        self.update_node_data(node_id, node.data)

    # ---------- Queries ----------

    def get_node(self, node_id: str) -> Optional[Node]:
        """Get a node by id, or None if absent."""
        return self._find_node(node_id)

    def nodes(self) -> list[Node]:
        """All nodes, in store order."""
        return list(self._store.nodes)

    def edges(self) -> list[tuple[str, str]]:
        """All edges as (source_id, target_id) pairs."""
        result: list[tuple[str, str]] = []
        for node in self._store.nodes:
            for target in self._store.adjacent(node) or ():
                result.append((node.id, target.id))
        return result

    def has_edge(self, source_id: str, target_id: str) -> bool:
        source = self._find_node(source_id)
        if source is None:
            return False
        return any(n.id == target_id for n in self._store.adjacent(source) or ())

    def successors(self, node_id: str) -> list[str]:
        """Ids of nodes this node links to."""
        node = self._require(node_id)
        return [n.id for n in self._store.adjacent(node) or ()]

    def predecessors(self, node_id: str) -> list[str]:
        """Ids of nodes linking to this node."""
        self._require(node_id)
        return [
            other.id
            for other in self._store.nodes
            if any(n.id == node_id for n in self._store.adjacent(other) or ())
        ]

    # ---------- Internals ----------

    def _find_node(self, node_id: str) -> Optional[Node]:
        for node in self._store.nodes:
            if node.id == node_id:
                return node
        return None

    def _require(self, node_id: str) -> Node:
        node = self._find_node(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def _reject(self, event: str, error: NetworkError) -> NoReturn:
        logger.warning(event, kind=error.kind.value, node_id=error.node_id)
        raise error

    def _materialize(self, node: Node) -> tuple[int, int, int]:
        """
        Handshake ``node`` against every other node in both directions.

        Returns
        -------
        tuple[int, int, int]
            (edges_out, edges_in, candidates)
        """
        edges_out = edges_in = candidates = 0

        for other in list(self._store.nodes):
            if other.id == node.id:
                continue
            candidates += 1

            if handshake(node, other):
                self._store.add_edge(node, other)
                edges_out += 1

            if handshake(other, node):
                self._store.add_edge(other, node)
                edges_in += 1

        return edges_out, edges_in, candidates

    def _detach(self, node: Node) -> int:
        """
        Drop every edge touching ``node``; returns how many existed.

        Outgoing edges come from one adjacency snapshot. Incoming edges are
        checked with the store's ``has_edge`` when it offers one, otherwise
        against each other node's adjacency.
        """
        targets = {n.id for n in self._store.adjacent(node) or ()}
        has_edge = getattr(self._store, "has_edge", None)
        dropped = 0

        for other in list(self._store.nodes):
            if other.id == node.id:
                continue

            if other.id in targets:
                dropped += 1
            if has_edge is not None:
                incoming = has_edge(other, node)
            else:
                incoming = any(n.id == node.id for n in self._store.adjacent(other) or ())
            if incoming:
                dropped += 1

            self._store.remove_edge(node, other)
            self._store.remove_edge(other, node)
        return dropped
