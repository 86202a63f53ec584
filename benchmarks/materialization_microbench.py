#!/usr/bin/env python3
"""
Edge Materialization Micro-benchmark Harness.

Benchmarks `NetworkManager.create_node()` sweeps, `update_node_data()`
recalculation and `bfs()` under deterministic synthetic workloads.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from datetime import datetime, timezone
import json
import math
from pathlib import Path
import random
import statistics
import sys
import time
from typing import Any, Optional

# Ensure repository root is importable when executing this file directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from rulenet import BFSOptions, Direction, NetworkManager, Rule, bfs, configure_logging


KINDS = ("sensor", "gateway", "relay", "sink")


@dataclass(frozen=True)
class ScenarioConfig:
    """Benchmark scenario configuration."""

    node_count: int
    rules_per_node: int
    recalculations: int
    measured_runs: int
    max_depth: Optional[int]
    seed: int


def build_rule_pool(seed: int) -> list[Rule]:
    """
    Build a deterministic pool of shared rules.

    Mix:
    - outgoing threshold rules with a kind pre-filter
    - incoming same-kind acceptors
    - bidirectional proximity rules
    """
    rng = random.Random(seed)
    pool: list[Rule] = []

    for kind in KINDS:
        threshold = rng.randint(10, 90)
        pool.append(Rule(
            match=lambda me, other, t=threshold: me["load"] > t and me["load"] > other["load"],
            target_filter=lambda other, k=kind: other["kind"] == k,
            direction=Direction.OUTGOING,
            name=f"feeds_{kind}",
        ))
        pool.append(Rule(
            match=lambda me, other: me["kind"] == other["kind"],
            direction=Direction.INCOMING,
            name=f"accepts_{kind}",
        ))

    for radius in (3, 5, 8):
        pool.append(Rule(
            match=lambda me, other, r=radius: abs(me["zone"] - other["zone"]) <= r,
            name=f"near_{radius}",
        ))

    return pool


def generate_payload(rng: random.Random, index: int) -> dict[str, Any]:
    return {
        "kind": KINDS[rng.randrange(len(KINDS))],
        "load": rng.randint(0, 100),
        "zone": rng.randint(0, 100),
        "serial": index,
    }


def percentile(values: list[float], percentile_rank: float) -> float:
    """Compute percentile with linear interpolation."""
    if not values:
        return 0.0
    ordered = sorted(values)
    if len(ordered) == 1:
        return ordered[0]

    position = (len(ordered) - 1) * percentile_rank
    lower = math.floor(position)
    upper = math.ceil(position)
    if lower == upper:
        return ordered[lower]

    fraction = position - lower
    return ordered[lower] + (ordered[upper] - ordered[lower]) * fraction


def summarize(values: list[float]) -> dict[str, float]:
    return {
        "min": min(values),
        "max": max(values),
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "p95": percentile(values, 0.95),
    }


def run_once(config: ScenarioConfig, run_index: int) -> dict[str, Any]:
    """Build one network from scratch and time each phase."""
    rng = random.Random(config.seed + run_index)
    pool = build_rule_pool(config.seed)
    manager = NetworkManager()

    create_ms: list[float] = []
    for index in range(config.node_count):
        rules = rng.sample(pool, k=min(config.rules_per_node, len(pool)))
        payload = generate_payload(rng, index)
        started = time.perf_counter()
        manager.create_node(f"n{index}", payload, rules)
        create_ms.append((time.perf_counter() - started) * 1000.0)

    recalc_ms: list[float] = []
    for _ in range(config.recalculations):
        node_id = f"n{rng.randrange(config.node_count)}"
        payload = generate_payload(rng, -1)
        started = time.perf_counter()
        manager.update_node_data(node_id, payload)
        recalc_ms.append((time.perf_counter() - started) * 1000.0)

    started = time.perf_counter()
    reached = bfs(manager.network, "n0", BFSOptions(max_depth=config.max_depth))
    bfs_ms = (time.perf_counter() - started) * 1000.0

    return {
        "create_ms": create_ms,
        "recalc_ms": recalc_ms,
        "bfs_ms": bfs_ms,
        "reached": len(reached),
        "edges": manager.edge_count,
    }


def run_scenario(config: ScenarioConfig) -> dict[str, Any]:
    """Run one benchmark scenario and return structured metrics."""
    create_ms: list[float] = []
    recalc_ms: list[float] = []
    bfs_ms: list[float] = []
    last: dict[str, Any] = {}

    for run_index in range(config.measured_runs):
        last = run_once(config, run_index)
        create_ms.extend(last["create_ms"])
        recalc_ms.extend(last["recalc_ms"])
        bfs_ms.append(last["bfs_ms"])

    return {
        "scenario": {
            "nodes": config.node_count,
            "rules_per_node": config.rules_per_node,
            "recalculations": config.recalculations,
            "max_depth": config.max_depth,
            "seed": config.seed,
            "measured_runs": config.measured_runs,
        },
        "graph": {
            "nodes": config.node_count,
            "edges": last.get("edges", 0),
            "bfs_reached": last.get("reached", 0),
        },
        "create_latency_ms": summarize(create_ms),
        "recalc_latency_ms": summarize(recalc_ms) if recalc_ms else None,
        "bfs_latency_ms": summarize(bfs_ms),
    }


def print_human_summary(result: dict[str, Any]) -> None:
    """Print compact human-readable summary to stderr; stdout carries the JSON."""
    scenario = result["scenario"]
    graph = result["graph"]
    create = result["create_latency_ms"]
    recalc = result["recalc_latency_ms"]
    traversal = result["bfs_latency_ms"]

    print(
        f"[Scenario] nodes={scenario['nodes']}, rules/node={scenario['rules_per_node']}, "
        f"runs={scenario['measured_runs']}",
        file=sys.stderr,
    )
    print(
        f"  Graph: nodes={graph['nodes']}, edges={graph['edges']}, "
        f"bfs_reached={graph['bfs_reached']}",
        file=sys.stderr,
    )
    print(
        "  create_node(ms): "
        f"mean={create['mean']:.3f}, median={create['median']:.3f}, p95={create['p95']:.3f}",
        file=sys.stderr,
    )
    if recalc:
        print(
            "  update_node_data(ms): "
            f"mean={recalc['mean']:.3f}, median={recalc['median']:.3f}, p95={recalc['p95']:.3f}",
            file=sys.stderr,
        )
    print(f"  bfs(ms): mean={traversal['mean']:.3f}, max={traversal['max']:.3f}", file=sys.stderr)


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def main() -> None:
    configure_logging(stream=sys.stderr)

    parser = argparse.ArgumentParser(description="Benchmark rule-derived edge materialization.")
    parser.add_argument(
        "--nodes",
        nargs="+",
        type=positive_int,
        default=[200, 800],
        help="Node counts to benchmark.",
    )
    parser.add_argument(
        "--rules-per-node",
        type=int,
        default=3,
        help="Rules sampled from the shared pool for each node.",
    )
    parser.add_argument(
        "--recalculations",
        type=int,
        default=50,
        help="update_node_data calls per run.",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Optional BFS depth limit.",
    )
    parser.add_argument(
        "--runs",
        type=positive_int,
        default=3,
        help="Measured iterations per scenario.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=7,
        help="Random seed for deterministic workload generation.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="",
        help="Optional path to write JSON results.",
    )
    args = parser.parse_args()

    started_at = datetime.now(timezone.utc).isoformat()
    results: list[dict[str, Any]] = []

    for node_count in args.nodes:
        scenario = ScenarioConfig(
            node_count=node_count,
            rules_per_node=args.rules_per_node,
            recalculations=args.recalculations,
            measured_runs=args.runs,
            max_depth=args.max_depth,
            seed=args.seed,
        )
        result = run_scenario(scenario)
        results.append(result)
        print_human_summary(result)

    payload = {
        "benchmark": "materialization_microbench",
        "started_at": started_at,
        "python": {
            "version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        },
        "results": results,
    }

    if args.output:
        with open(args.output, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
        print(f"[Output] wrote JSON results to {args.output}", file=sys.stderr)
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
