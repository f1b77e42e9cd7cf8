# Copyright (c) 2023-2026 Cryft Labs. All rights reserved.
# Licensed under the Apache License, Version 2.0.
# This software is part of a patented system. See LICENSE and PATENT NOTICE.

"""
Source Loading and Metadata Extraction
======================================
Reads a Solidity file, parses it with solidity_parser and pulls the
declared compiler version and the contract names out of the top-level
declarations. Only the ``children`` of the SourceUnit are inspected;
nested nodes are never walked.
"""

import re
from pathlib import Path
from typing import List, Optional

from antlr4 import CommonTokenStream, InputStream
from antlr4.error.ErrorListener import ErrorListener
from solidity_parser.parser import AstVisitor
from solidity_parser.solidity_antlr4.SolidityLexer import SolidityLexer
from solidity_parser.solidity_antlr4.SolidityParser import SolidityParser

from sol_details.config import get_logger
from sol_details.errors import ParseFailure, SourceReadError

logger = get_logger(__name__)

_NOT_VERSION_CHAR = re.compile(r"[^0-9.]")


class _RaisingErrorListener(ErrorListener):
    """Turns the first lexer or parser error into an exception."""

    def syntaxError(self, recognizer, offendingSymbol, line, column, msg, e):
        raise ValueError(f"line {line}:{column} {msg}")


# ────────────────────────────────────────────
# Loading and parsing
# ────────────────────────────────────────────

def load_source(path) -> str:
    """Read a .sol file as UTF-8 text."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.info("Reading %s failed: %s", path, e)
        raise SourceReadError(path) from e


def parse_source(source: str) -> List[dict]:
    """
    Parse Solidity source and return its top-level declarations.

    ANTLR's default listeners print errors and recover; ours raise on the
    first one, so malformed input never yields a partial tree.
    """
    listener = _RaisingErrorListener()
    try:
        lexer = SolidityLexer(InputStream(source))
        lexer.removeErrorListeners()
        lexer.addErrorListener(listener)
        parser = SolidityParser(CommonTokenStream(lexer))
        parser.removeErrorListeners()
        parser.addErrorListener(listener)
        unit = AstVisitor().visit(parser.sourceUnit())
    except Exception as e:
        logger.info("Parser rejected source: %s", e)
        raise ParseFailure() from e
    return list(unit.get("children") or [])


# ────────────────────────────────────────────
# Metadata
# ────────────────────────────────────────────

def extract_pragma_version(children: List[dict]) -> Optional[str]:
    """
    Version from the first pragma directive, reduced to digits and dots.

    ``^0.4.24`` becomes ``0.4.24``. Returns None when the file has no
    pragma at all. Later pragmas are ignored.
    """
    pragmas = [node for node in children if node.get("type") == "PragmaDirective"]
    if not pragmas:
        return None
    raw_version = pragmas[0].get("value") or ""
    return _NOT_VERSION_CHAR.sub("", raw_version)


def extract_contract_names(children: List[dict]) -> List[str]:
    """Names of ``contract`` definitions in source order (libraries and interfaces excluded)."""
    return [
        node.get("name")
        for node in children
        if node.get("type") == "ContractDefinition" and node.get("kind") == "contract"
    ]
