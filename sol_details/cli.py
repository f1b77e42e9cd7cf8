# Copyright (c) 2023-2026 Cryft Labs. All rights reserved.
# Licensed under the Apache License, Version 2.0.
# This software is part of a patented system. See LICENSE and PATENT NOTICE.

"""
Solidity Details Extractor
==========================
Reads a Solidity file and prints a JSON summary of it:

    {
      "compilerVersion": "0.5.0",       <-- from the first pragma, or null
      "contracts": ["Foo"],             <-- contract-kind definitions only
      "AST": {...}                      <-- solc's AST for the file
    }

The file is compiled with the local solc when its version starts with
the pragma version; otherwise the matching release is downloaded.

Usage:
    sol-details -f file.sol                    # JSON to stdout
    sol-details -f file.sol -o output.json     # JSON to a file
    sol-details -f file.sol -v                 # log progress to stderr

Every failure prints a message to stdout and exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path

from sol_details.compilers import compile_source
from sol_details.config import get_logger, setup_logging
from sol_details.errors import CompilerLoadError, OutputWriteError, SolDetailsError
from sol_details.extract import extract_contract_names, extract_pragma_version, load_source, parse_source

logger = get_logger(__name__)


# ────────────────────────────────────────────
# Output
# ────────────────────────────────────────────

def build_result(compiler_version, contracts, ast) -> str:
    return json.dumps(
        {
            "compilerVersion": compiler_version,
            "contracts": contracts,
            "AST": ast,
        },
        indent=2,
    )


def emit_result(result: str, output_file: str = None):
    """Write the JSON to ``output_file``, or to stdout when none is given."""
    if not output_file:
        sys.stdout.write(result)
        sys.stdout.flush()
        return
    try:
        Path(output_file).write_text(result, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(output_file) from e
    print(f"Output has been saved in {output_file}")


# ────────────────────────────────────────────
# Pipeline
# ────────────────────────────────────────────

def extract_details(input_file: str) -> str:
    """Load, parse, compile and summarize one file. Returns the JSON text."""
    source = load_source(input_file)
    children = parse_source(source)

    compiler_version = extract_pragma_version(children)
    contracts = extract_contract_names(children)
    logger.info("Pragma version: %s, contracts: %s", compiler_version, contracts)

    ast = compile_source(compiler_version, source)
    return build_result(compiler_version, contracts, ast)


def run(input_file: str, output_file: str = None):
    try:
        emit_result(extract_details(input_file), output_file)
    except CompilerLoadError as e:
        print(e.raw_message())
        sys.exit(1)
    except SolDetailsError as e:
        print(str(e))
        sys.exit(1)


# ────────────────────────────────────────────
# Main
# ────────────────────────────────────────────

class _ArgumentParser(argparse.ArgumentParser):
    """Argument errors exit 1 with a pointer to --help instead of the full usage."""

    def error(self, message):
        sys.stderr.write(f"{message}\n\nSpecify --help for available options\n")
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="sol-details",
        usage="%(prog)s -f input_file [options]",
        description="Extract the compiler version, contract names and AST of a Solidity file",
        epilog="Examples:\n  sol-details -f file.sol -o output.json  extract sol details",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-f", "--file", required=True, help="Load a file")
    parser.add_argument("-o", "--output", default=None, help="Output json file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    run(args.file, args.output)


if __name__ == "__main__":
    main()
