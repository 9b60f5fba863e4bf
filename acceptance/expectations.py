"""Shared assertions and helpers for acceptance tests."""
import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).parent.parent
MODEL_PATH = REPO_ROOT / "examples" / "sample.model"
CMD_SOURCE = [sys.executable, "-m", "casegen"]

def run_cli_cmd(cmd_target, args, timeout=15):
    """Runs a CLI command and returns (returncode, stdout, stderr)."""
    full_cmd = cmd_target + args
    try:
        result = subprocess.run(
            full_cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=REPO_ROOT,
        )
        return result.returncode, result.stdout, result.stderr
    except subprocess.TimeoutExpired as e:
        return -1, e.stdout or "", e.stderr or f"Timeout after {timeout}s"

def assert_successful_exit(returncode, stderr):
    assert returncode == 0, f"Expected 0 exit code, got {returncode}. Stderr: {stderr}"

def assert_failed_exit(returncode):
    assert returncode != 0, "Expected non-zero exit code"

def assert_no_traceback(stdout, stderr):
    assert "Traceback (most recent call last)" not in stdout
    assert "Traceback (most recent call last)" not in stderr

def parse_json_output(stdout):
    try:
        data = json.loads(stdout.strip())
        return data
    except json.JSONDecodeError as e:
        raise AssertionError(f"Failed to parse JSON output: {e}\nStdout: {stdout}")

def assert_generate_json(data):
    assert "metadata" in data, "JSON output missing metadata block"
    assert "test_cases" in data, "JSON output missing test_cases array"

    meta = data["metadata"]
    for key in ("strategy", "lb", "n", "exhaustive", "verified"):
        assert key in meta, f"metadata missing '{key}'"
    assert meta["n"] == len(data["test_cases"]), "metadata 'n' does not match test_cases length"
