"""
Handshake Evaluator
===================

Decides whether a directed edge source -> target is justified.

An edge needs both sides to agree:
1. source has a rule that may initiate (OUTGOING/BOTH) whose target_filter,
   if any, passes for target.data and whose match(source.data, target.data)
   holds;
2. target has a rule that may accept (INCOMING/BOTH) whose
   match(target.data, source.data) holds. target_filter is never applied on
   the accepting side.

The first satisfying rule on each side wins. The handshakes for a -> b and
b -> a are evaluated independently.
"""

from dataclasses import dataclass
from typing import Any, Optional

from rulenet.core.schema import Node, Rule


@dataclass
class HandshakeReport:
    """Outcome of one handshake, with the rules that decided it."""

    source_id: str
    target_id: str
    linked: bool
    reason: str
    initiating_rule: Optional[int] = None
    accepting_rule: Optional[int] = None
    initiating_rule_name: Optional[str] = None
    accepting_rule_name: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the report to a JSON-serializable dictionary."""
        return {
            "source_id": self.source_id,
            "target_id": self.target_id,
            "linked": self.linked,
            "reason": self.reason,
            "initiating_rule": self.initiating_rule,
            "accepting_rule": self.accepting_rule,
            "initiating_rule_name": self.initiating_rule_name,
            "accepting_rule_name": self.accepting_rule_name,
        }


def handshake(source: Node, target: Node) -> bool:
    """Return True when the edge source -> target should exist."""
    if not any(rule.initiates(source.data, target.data) for rule in source.rules):
        return False
    return any(rule.accepts(target.data, source.data) for rule in target.rules)


def explain_handshake(source: Node, target: Node) -> HandshakeReport:
    """
    Evaluate source -> target and report which rules decided it.

    Makes the same decision as ``handshake`` with the same short-circuiting;
    the accepting side is not evaluated when no initiating rule matched.
    """
    report = HandshakeReport(
        source_id=source.id,
        target_id=target.id,
        linked=False,
        reason="no_initiating_rule",
    )

    initiator = _first_match(source.rules, lambda r: r.initiates(source.data, target.data))
    if initiator is None:
        return report
    report.initiating_rule = initiator
    report.initiating_rule_name = source.rules[initiator].name

    acceptor = _first_match(target.rules, lambda r: r.accepts(target.data, source.data))
    if acceptor is None:
        report.reason = "no_accepting_rule"
        return report
    report.accepting_rule = acceptor
    report.accepting_rule_name = target.rules[acceptor].name

    report.linked = True
    report.reason = "linked"
    return report


def _first_match(rules: tuple[Rule, ...], predicate) -> Optional[int]:
    """Index of the first rule satisfying ``predicate``, or None."""
    for index, rule in enumerate(rules):
        if predicate(rule):
            return index
    return None
