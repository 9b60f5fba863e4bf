"""Acceptance tests for generate command."""
import pytest
import sys
from pathlib import Path

# Add project root to path so we can import expectations
sys.path.insert(0, str(Path(__file__).parent.parent.parent))
from acceptance.expectations import (
    CMD_SOURCE,
    MODEL_PATH,
    assert_generate_json,
    assert_successful_exit,
    parse_json_output,
    run_cli_cmd,
)


@pytest.mark.acceptance
def test_acceptance_generate_all_pairs():
    args = ["generate", "--model", str(MODEL_PATH), "--strategy", "all-pairs", "--format", "json"]
    rc, stdout, stderr = run_cli_cmd(CMD_SOURCE, args, timeout=15)
    assert_successful_exit(rc, stderr)

    data = parse_json_output(stdout)
    assert_generate_json(data)

    meta = data["metadata"]
    assert meta["lb"] == 16, f"Expected LB=16, got {meta['lb']}"
    assert meta["n"] >= 16, f"Expected N>=16, got {meta['n']}"
    assert meta["exhaustive"] == 432
    assert meta["verified"] is True, "Expected verified=True"


@pytest.mark.acceptance
def test_acceptance_generate_is_deterministic():
    args = ["generate", "--model", str(MODEL_PATH), "--format", "csv"]
    first = run_cli_cmd(CMD_SOURCE, args, timeout=15)
    second = run_cli_cmd(CMD_SOURCE, args, timeout=15)
    assert_successful_exit(first[0], first[2])
    assert first[1] == second[1]


@pytest.mark.acceptance
@pytest.mark.parametrize("strategy, expected_n", [("all-values", 4), ("all-combinations", 432)])
def test_acceptance_generate_other_strategies(strategy, expected_n):
    args = ["generate", "--model", str(MODEL_PATH), "--strategy", strategy, "--format", "json"]
    rc, stdout, stderr = run_cli_cmd(CMD_SOURCE, args, timeout=15)
    assert_successful_exit(rc, stderr)

    data = parse_json_output(stdout)
    assert_generate_json(data)
    assert data["metadata"]["n"] == expected_n
    assert data["metadata"]["verified"] is True
