"""
Rule Schema
===========

Data models for rule-derived networks.

A node carries a domain payload plus an immutable, ordered tuple of rules.
Edges are never authored by hand: they are derived by evaluating the rules of
both endpoints (see ``rulenet.core.handshake``).

Directions:
- OUTGOING: the rule may only initiate edges (self -> other)
- INCOMING: the rule may only accept edges (other -> self)
- BOTH: the rule may play either role
"""

from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Which handshake role(s) a rule may play."""

    OUTGOING = "outgoing"
    """Initiate edges from the owning node."""

    INCOMING = "incoming"
    """Accept edges into the owning node."""

    BOTH = "both"
    """Initiate and accept."""


class Rule(BaseModel):
    """
    Pure, reusable edge-generation rule.

    ``match(self_data, other_data)`` is always called with the owning node's
    payload first. When the rule initiates an edge, ``other_data`` is the
    candidate target; when it accepts one, ``other_data`` is the source.

    ``target_filter(other_data)`` is an optional cheap pre-filter. It is only
    consulted in the initiating role, before ``match``.

    Both callables may run O(N) times per insertion or recalculation, so they
    must be pure and must not capture mutable per-node state. Rules are shared
    by reference between nodes; changing a rule's behaviour after a node has
    been created with it is undefined.

    Examples
    --------
    Link to every node with a smaller value:
        Rule(match=lambda me, other: me["value"] > other["value"],
             direction=Direction.OUTGOING)

    Accept links from anyone of the same kind:
        Rule(match=lambda me, other: me["kind"] == other["kind"],
             direction=Direction.INCOMING)
    """

    model_config = ConfigDict(frozen=True)

    match: Callable[[Any, Any], bool]
    """Decide whether the owning node links with the other payload."""

    direction: Direction = Direction.BOTH
    """Role(s) this rule may play in a handshake."""

    target_filter: Optional[Callable[[Any], bool]] = None
    """Optional pre-filter on the candidate target (initiating role only)."""

    name: Optional[str] = None
    """Label used in logs and handshake reports."""

    def can_initiate(self) -> bool:
        return self.direction in (Direction.OUTGOING, Direction.BOTH)

    def can_accept(self) -> bool:
        return self.direction in (Direction.INCOMING, Direction.BOTH)

    def initiates(self, source_data: Any, target_data: Any) -> bool:
        """Check this rule as the initiator of source -> target."""
        if not self.can_initiate():
            return False
        if self.target_filter is not None and not self.target_filter(target_data):
            return False
        return bool(self.match(source_data, target_data))

    def accepts(self, target_data: Any, source_data: Any) -> bool:
        """Check this rule as the acceptor of source -> target."""
        if not self.can_accept():
            return False
        return bool(self.match(target_data, source_data))

    def __repr__(self) -> str:
        label = self.name or getattr(self.match, "__name__", "match")
        return f"Rule({label}, direction={self.direction.value})"


class Node(BaseModel):
    """
    A node stored in the network.

    Fields:
    - id: caller-supplied stable identifier, unique within one network
    - data: domain payload, not copied; assigning it never touches edges
    - rules: rule tuple captured at creation time

    ``id`` and ``rules`` are frozen: to change a node's rule set, remove it and
    create a new node. ``data`` may be replaced at any time; edges only follow
    when the node is re-materialized via ``NetworkManager.update_node_data``
    or ``NetworkManager.recalculate``.

    Nodes compare and hash by identity, so a store may key its adjacency by
    the Node objects themselves.
    """

    id: str = Field(min_length=1, frozen=True)
    data: Any = None
    rules: tuple[Rule, ...] = Field(default=(), frozen=True)

    def __eq__(self, other: object) -> bool:
        return self is other

    __hash__ = object.__hash__

    def initiating_rules(self) -> tuple[Rule, ...]:
        return tuple(r for r in self.rules if r.can_initiate())

    def accepting_rules(self) -> tuple[Rule, ...]:
        return tuple(r for r in self.rules if r.can_accept())

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, rules={len(self.rules)})"
