"""Shared fixtures for sol-details tests.

Compilation is faked through ``FakeCompiler`` so unit tests never need a
native solc or network access.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List

import pytest

from sol_details.compilers import Compiler

SIMPLE_SOURCE = "pragma solidity ^0.5.0; contract Foo {} library Bar {}"

FAKE_AST = {"nodeType": "SourceUnit", "absolutePath": "", "nodes": []}


class FakeCompiler(Compiler):
    """Compiler stand-in recording every source it is asked to compile."""

    def __init__(self, version: str = "0.5.0+commit.1d4f565a"):
        self._version = version
        self.compiled: List[str] = []

    def version(self) -> str:
        return self._version

    def solc_version(self) -> str:
        return self._version.split("+")[0]

    def compile(self, source: str) -> dict:
        self.compiled.append(source)
        return {"sources": {"": {"id": 0, "ast": FAKE_AST}}}


@pytest.fixture
def write_sol(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write Solidity source to a file under tmp_path and return its path."""

    def _write(source: str, name: str = "Contract.sol") -> Path:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()
