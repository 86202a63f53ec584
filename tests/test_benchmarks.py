"""
Tests for the Benchmark Harness
===============================

Runs the materialization micro-benchmark as a script and checks its
command-line contract.
"""

import json
import os
from pathlib import Path
import subprocess
import sys

import pytest


SCRIPT = Path(__file__).resolve().parents[1] / "benchmarks" / "materialization_microbench.py"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def run_bench(tmp_path):
    """Run the benchmark in an isolated directory with default settings."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("RULENET_")}

    def run(*args: str, **overrides: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, str(SCRIPT), *args],
            capture_output=True,
            text=True,
            cwd=tmp_path,
            env={**env, **overrides},
            timeout=120,
        )

    return run


# =============================================================================
# Output Tests
# =============================================================================

class TestBenchmarkOutput:
    """stdout carries only the JSON payload."""

    def test_stdout_is_json(self, run_bench):
        result = run_bench("--nodes", "5", "--runs", "1", "--recalculations", "1")

        assert result.returncode == 0, result.stderr
        payload = json.loads(result.stdout)
        assert payload["benchmark"] == "materialization_microbench"
        assert payload["results"][0]["graph"]["nodes"] == 5
        assert "[Scenario]" in result.stderr

    def test_debug_logs_stay_off_stdout(self, run_bench):
        result = run_bench(
            "--nodes", "4", "--runs", "1", "--recalculations", "1",
            RULENET_LOG_LEVEL="DEBUG",
        )

        assert result.returncode == 0, result.stderr
        assert "node_created" not in result.stdout
        assert "node_created" in result.stderr
        json.loads(result.stdout)

    def test_output_file(self, run_bench, tmp_path):
        target = tmp_path / "results.json"
        result = run_bench("--nodes", "3", "--runs", "1", "--output", str(target))

        assert result.returncode == 0, result.stderr
        assert result.stdout == ""
        assert json.loads(target.read_text())["results"][0]["scenario"]["nodes"] == 3


# =============================================================================
# Argument Tests
# =============================================================================

class TestBenchmarkArguments:
    """Counts below one are rejected by the parser."""

    @pytest.mark.parametrize("flag", ["--nodes", "--runs"])
    def test_rejects_zero(self, run_bench, flag):
        result = run_bench(flag, "0")

        assert result.returncode == 2
        assert "must be >= 1" in result.stderr
        assert "Traceback" not in result.stderr
