"""
Graph Store
===========

The storage primitive the network manager mutates.

Any object exposing node insertion/removal, directed edge insertion/removal,
adjacency lookup by node and the full node set satisfies ``GraphStore``.
``NetworkStore`` is the default implementation, backed by a
``networkx.DiGraph`` keyed by node id.
"""

from typing import Iterable, Iterator, Optional, Protocol, runtime_checkable

import networkx as nx

from rulenet.core.schema import Node


@runtime_checkable
class GraphStore(Protocol):
    """Capabilities the manager and the traversal engine rely on."""

    @property
    def nodes(self) -> Iterable[Node]: ...

    def add_node(self, node: Node) -> None: ...

    def remove_node(self, node: Node) -> None: ...

    def add_edge(self, source: Node, target: Node) -> None: ...

    def remove_edge(self, source: Node, target: Node) -> None: ...

    def adjacent(self, node: Node) -> Optional[Iterable[Node]]: ...


class NetworkStore:
    """
    Directed graph store with set semantics.

    Nodes are keyed by id in the underlying ``DiGraph``; the ``Node`` object
    lives in the ``"node"`` attribute. Adding an edge that already exists is a
    no-op, and removing an absent edge is a no-op. Adjacency is enumerated in
    edge insertion order.

    Example
    -------
    >>> store = NetworkStore()
    >>> a, b = Node(id="a"), Node(id="b")
    >>> store.add_node(a); store.add_node(b)
    >>> store.add_edge(a, b)
    >>> [n.id for n in store.adjacent(a)]
    ['b']
    """

    def __init__(self, graph: Optional[nx.DiGraph] = None):
        self._graph = graph if graph is not None else nx.DiGraph()

    @property
    def nodes(self) -> list[Node]:
        """All nodes, in insertion order."""
        return [attrs["node"] for _, attrs in self._graph.nodes(data=True)]

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._graph

    def get(self, node_id: str) -> Optional[Node]:
        """Get a node by id in O(1)."""
        if node_id not in self._graph:
            return None
        return self._graph.nodes[node_id]["node"]

    def add_node(self, node: Node) -> None:
        self._graph.add_node(node.id, node=node)

    def remove_node(self, node: Node) -> None:
        if node.id in self._graph:
            self._graph.remove_node(node.id)

    def add_edge(self, source: Node, target: Node) -> None:
        self._graph.add_edge(source.id, target.id)

    def remove_edge(self, source: Node, target: Node) -> None:
        if self._graph.has_edge(source.id, target.id):
            self._graph.remove_edge(source.id, target.id)

    def has_edge(self, source: Node, target: Node) -> bool:
        return self._graph.has_edge(source.id, target.id)

    def adjacent(self, node: Node) -> Optional[list[Node]]:
        """Successors of ``node``, or None when the node is not stored."""
        if node.id not in self._graph:
            return None
        return [self._graph.nodes[v]["node"] for v in self._graph.successors(node.id)]

    def predecessors(self, node: Node) -> Optional[list[Node]]:
        """Nodes with an edge into ``node``, or None when it is not stored."""
        if node.id not in self._graph:
            return None
        return [self._graph.nodes[u]["node"] for u in self._graph.predecessors(node.id)]

    def edges(self) -> list[tuple[str, str]]:
        """All edges as (source_id, target_id) pairs."""
        return list(self._graph.edges())

    def number_of_nodes(self) -> int:
        return self._graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self._graph.number_of_edges()

    def to_networkx(self) -> nx.DiGraph:
        """
        Read-only view of the derived graph, keyed by node id.

        Use it to run networkx algorithms over the materialized edges; the
        view reflects later mutations and cannot be modified.
        """
        return nx.restricted_view(self._graph, [], [])
