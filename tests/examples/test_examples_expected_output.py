"""Run every example script and compare stdout with its ``# =>`` comments."""

from __future__ import annotations

import ast
import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
EXAMPLES_ROOT = REPO_ROOT / "examples"
SRC_ROOT = REPO_ROOT / "src"

_EXPECTATION_MARKER = "# =>"


def _example_paths() -> list[Path]:
    return sorted(EXAMPLES_ROOT.glob("ex_*/01_*.py"))


def _expected_lines(path: Path) -> list[str]:
    source = path.read_text(encoding="utf-8")
    lines = source.splitlines()
    print_calls = sorted(
        (
            node
            for node in ast.walk(ast.parse(source, filename=str(path)))
            if isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id == "print"
        ),
        key=lambda node: (node.lineno, node.col_offset),
    )

    expected: list[str] = []
    for call in print_calls:
        closing_line = lines[(call.end_lineno or call.lineno) - 1]
        if _EXPECTATION_MARKER not in closing_line:
            msg = f"{path}:{call.lineno}: print() must end with '{_EXPECTATION_MARKER} <output>'."
            raise AssertionError(msg)
        expected.append(closing_line.split(_EXPECTATION_MARKER, maxsplit=1)[1].strip())
    return expected


def test_examples_are_present() -> None:
    assert _example_paths()


@pytest.mark.parametrize(
    "path",
    _example_paths(),
    ids=lambda path: str(path.relative_to(REPO_ROOT)),
)
def test_example_stdout_matches_inline_expectations(path: Path) -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(
        part for part in (str(SRC_ROOT), env.get("PYTHONPATH")) if part
    )

    completed = subprocess.run(  # noqa: S603
        [sys.executable, str(path)],
        cwd=path.parent,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0, completed.stderr
    assert completed.stderr == ""
    assert completed.stdout.splitlines() == _expected_lines(path)
