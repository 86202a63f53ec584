"""
Breadth-First Traversal
=======================

Read-only traversal over a graph store, with caller hooks for early stop
(``visit``), barriers (``expand``) and depth limits (``max_depth``).
"""

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

import structlog

from rulenet.core.errors import NodeNotFoundError
from rulenet.core.schema import Node
from rulenet.core.store import GraphStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BFSOptions:
    """Traversal hooks; all optional."""

    visit: Optional[Callable[[Node, int], Any]] = None
    """Called once per node when dequeued. Return False to stop early."""

    expand: Optional[Callable[[Node, int], bool]] = None
    """Return False to treat the node as a barrier (neighbours not enqueued)."""

    max_depth: Optional[int] = None
    """Neighbours of nodes at depth >= max_depth are not enqueued (root = 0)."""

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "BFSOptions":
        """Build options from a dict, accepting ``maxDepth`` as an alias."""
        max_depth = options.get("max_depth", options.get("maxDepth"))
        return cls(
            visit=options.get("visit"),
            expand=options.get("expand"),
            max_depth=max_depth,
        )


def bfs(
    store: GraphStore,
    start: Union[Node, str],
    options: Union[BFSOptions, Mapping[str, Any], None] = None,
) -> list[Node]:
    """
    Breadth-first traversal starting at a node (object or id).

    Characteristics:
    - Visits each reachable node at most once.
    - Output is in discovery (level) order; within a level, neighbours follow
      the store's adjacency order.
    - The start node has depth 0 and is always first.

    ``visit`` runs after a node is appended to the output and before its
    neighbours are considered. Returning exactly False stops the traversal and
    returns the output so far, including that node.

    Parameters
    ----------
    store : GraphStore
        Store to traverse.
    start : Node or str
        Start node, or its id (resolved by scanning ``store.nodes``).
    options : BFSOptions or dict, optional
        Traversal hooks.

    Returns
    -------
    list[Node]
        Nodes in visit order.

    Raises
    ------
    NodeNotFoundError
        If the start node cannot be found in the store.
    """
    opts = _coerce_options(options)
    start_node = _resolve_start(store, start)

    visited: set[str] = {start_node.id}
    order: list[Node] = []
    queue: deque[tuple[Node, int]] = deque([(start_node, 0)])
    stopped = False

    while queue:
        node, depth = queue.popleft()
        order.append(node)

        if opts.visit is not None and opts.visit(node, depth) is False:
            stopped = True
            break

        if opts.max_depth is not None and depth >= opts.max_depth:
            continue

        if opts.expand is not None and not opts.expand(node, depth):
            continue

        for neighbor in store.adjacent(node) or ():
            if neighbor.id in visited:
                continue
            visited.add(neighbor.id)
            queue.append((neighbor, depth + 1))

    logger.debug(
        "traversal_complete",
        start=start_node.id,
        visited=len(order),
        stopped=stopped,
    )
    return order


def bfs_depths(
    store: GraphStore,
    start: Union[Node, str],
    options: Union[BFSOptions, Mapping[str, Any], None] = None,
) -> dict[str, int]:
    """
    Run ``bfs`` and return ``{node_id: depth}`` in discovery order.

    A caller-supplied ``visit`` hook is still invoked and may stop early.
    """
    opts = _coerce_options(options)
    depths: dict[str, int] = {}

    def record(node: Node, depth: int) -> Any:
        depths[node.id] = depth
        if opts.visit is not None:
            return opts.visit(node, depth)
        return None

    bfs(store, start, BFSOptions(visit=record, expand=opts.expand, max_depth=opts.max_depth))
    return depths


def _coerce_options(options: Union[BFSOptions, Mapping[str, Any], None]) -> BFSOptions:
    if options is None:
        return BFSOptions()
    if isinstance(options, BFSOptions):
        return options
    return BFSOptions.from_mapping(options)


def _resolve_start(store: GraphStore, start: Union[Node, str]) -> Node:
    start_id = start if isinstance(start, str) else start.id
    for node in store.nodes:
        if node.id == start_id:
            return node
    raise NodeNotFoundError(start_id, f"Start node not found: {start_id}")
