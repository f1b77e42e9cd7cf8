# Copyright (c) 2023-2026 Cryft Labs. All rights reserved.
# Licensed under the Apache License, Version 2.0.
# This software is part of a patented system. See LICENSE and PATENT NOTICE.

"""Failures that end a sol-details run with exit code 1."""


class SolDetailsError(Exception):
    """Base class. ``str(exc)`` is the message printed to stdout."""


class SourceReadError(SolDetailsError):
    def __init__(self, path):
        self.path = path
        super().__init__(f'Solidity file "{path}" not found or could not be read.')


class ParseFailure(SolDetailsError):
    def __init__(self):
        super().__init__("Unable to parse solidity file.")


class CatalogFetchError(SolDetailsError):
    def __init__(self):
        super().__init__("Could not fetch compiler list.")


class CompilerLoadError(SolDetailsError):
    """Raised with the underlying error chained as ``__cause__``."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Could not load solc {version}.")

    def raw_message(self) -> str:
        # The load path reports the underlying error as-is
        return str(self.__cause__) if self.__cause__ is not None else str(self)


class CompileFailure(SolDetailsError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Unable to compile solidity file.\n{detail}")


class OutputWriteError(SolDetailsError):
    def __init__(self, path):
        self.path = path
        super().__init__(f'Could not write output to "{path}".')
