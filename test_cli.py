#!/usr/bin/env python3
"""
Command-line front-end tests.
Run: python test_cli.py
"""
import io
import json
from contextlib import redirect_stdout
from unittest.mock import patch

from cli import main


def _run(argv, inputs=None):
    out = io.StringIO()
    with redirect_stdout(out), patch("builtins.input", side_effect=inputs or []):
        code = main(argv)
    return code, out.getvalue()


def test_exchange_command():
    code, out = _run(["exchange", "--n", "23", "--g", "5", "--a", "6", "--b", "15", "--steps"])
    assert code == 0
    assert "Alice Sends: 8" in out and "Bob Sends: 19" in out
    assert "Alice's Secret Key: 2" in out and "Bob's Secret Key: 2" in out
    assert "5^6 mod 23 = 8" in out
    print("[PASS] exchange command")


def test_exchange_rejected():
    code, out = _run(["exchange", "--n", "23", "--g", "2", "--a", "6", "--b", "15"])
    assert code == 1
    assert "Calculations:" in out and "2^11 mod 23 = 1" in out

    code, out = _run(["exchange", "--n", "4", "--g", "2", "--a", "1", "--b", "1", "--json"])
    assert code == 1
    assert json.loads(out)["error"] == "n and g must be prime numbers."
    print("[PASS] exchange command rejects bad input")


def test_primitive_root_command():
    code, out = _run(["primitive-root", "--n", "7", "--g", "3"])
    assert code == 0
    assert "3 is a primitive root of 7" in out
    assert "3^6 mod 7 = 1" in out

    code, out = _run(["primitive-root", "--n", "7", "--g", "2", "--json"])
    result = json.loads(out)
    assert code == 0 and result["is_primitive_root"] is False
    assert len(result["steps"]) == 6
    print("[PASS] primitive-root command")


def test_interactive_command():
    code, out = _run(["interactive", "--n", "23", "--g", "5"], inputs=["6", "15"])
    assert code == 0
    assert "Alice sends public key: 8" in out
    assert "Bob sends public key: 19" in out
    assert "Alice's Secret Key: 2" in out and "Bob's Secret Key: 2" in out
    print("[PASS] interactive command")


def test_interactive_retries_bad_key():
    code, out = _run(["interactive", "--n", "23", "--g", "5", "--json"],
                     inputs=["", "abc", "6", "0", "15"])
    assert code == 0
    result = json.loads(out)
    assert result["secrets"] == {"Alice": 2, "Bob": 2}
    print("[PASS] interactive command asks again after a bad key")


def test_interactive_bad_parameters():
    code, _ = _run(["interactive", "--n", "4", "--g", "2"], inputs=["6"])
    assert code == 1
    code, _ = _run(["interactive"], inputs=["", "5", "6"])
    assert code == 1
    print("[PASS] interactive command stops on bad parameters")


if __name__ == "__main__":
    test_exchange_command()
    test_exchange_rejected()
    test_primitive_root_command()
    test_interactive_command()
    test_interactive_retries_bad_key()
    test_interactive_bad_parameters()
    print("\nAll tests passed!")
