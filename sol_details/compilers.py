# Copyright (c) 2023-2026 Cryft Labs. All rights reserved.
# Licensed under the Apache License, Version 2.0.
# This software is part of a patented system. See LICENSE and PATENT NOTICE.

"""
Compiler Selection and Invocation
=================================
Picks a solc build for a pragma version and compiles a single source
unit through py-solc-x's standard-JSON interface.

Selection rule:
    - no pragma, or the local solc version string starts with the
      pragma version  -> compile with the local ("bundled") solc
    - otherwise       -> fetch the release list, pick the release for
                         the pragma version (or the latest release),
                         install that exact build and compile with it

The match is a plain string prefix test, not a semver range check:
``^0.5.0`` is reduced to ``0.5.0`` and only selects a local solc whose
version starts with ``0.5.0``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

import certifi
import requests
import solcx
from solcx.exceptions import SolcError, SolcNotInstalled

from sol_details import config
from sol_details.config import get_logger
from sol_details.errors import CatalogFetchError, CompileFailure, CompilerLoadError

logger = get_logger(__name__)


# ────────────────────────────────────────────
# Release catalog
# ────────────────────────────────────────────

@dataclass
class ReleaseCatalog:
    """The solc-bin ``list.json`` document, reduced to what we read."""

    releases: Dict[str, str] = field(default_factory=dict)
    latest_release: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict) -> "ReleaseCatalog":
        return cls(
            releases=dict(data.get("releases") or {}),
            latest_release=data.get("latestRelease"),
        )

    def release_for(self, version: str) -> Optional[str]:
        """
        Release file name for ``version``, else the latest release.

        ``latestRelease`` is a version key in the published list; a value
        that is already a release file name is returned unchanged.
        """
        if version in self.releases:
            return self.releases[version]
        if self.latest_release is None:
            return None
        return self.releases.get(self.latest_release, self.latest_release)


def fetch_release_catalog(url: str = None, timeout: Optional[float] = None) -> ReleaseCatalog:
    """GET the release list. Anything but a 200 with a JSON body is fatal."""
    url = url or config.RELEASE_LIST_URL
    if timeout is None:
        timeout = config.REQUEST_TIMEOUT
    logger.info("Fetching compiler list: %s", url)
    try:
        response = requests.get(url, timeout=timeout, verify=certifi.where())
    except requests.RequestException as e:
        logger.info("Compiler list request failed: %s", e)
        raise CatalogFetchError() from e

    if response.status_code != 200:
        logger.info("Compiler list returned HTTP %s", response.status_code)
        raise CatalogFetchError()

    try:
        return ReleaseCatalog.from_json(response.json())
    except ValueError as e:
        raise CatalogFetchError() from e


def clean_release_name(release_file: str) -> str:
    """'soljson-v0.5.0+commit.1d4f565a.js' -> 'v0.5.0+commit.1d4f565a'"""
    token = release_file
    if token.startswith(config.SOLJSON_PREFIX):
        token = token[len(config.SOLJSON_PREFIX):]
    if token.endswith(config.SOLJSON_SUFFIX):
        token = token[:-len(config.SOLJSON_SUFFIX)]
    return token


def is_same_compiler(pragma_version: str, solc_version: str) -> bool:
    return solc_version.startswith(pragma_version)


# ────────────────────────────────────────────
# Compilers
# ────────────────────────────────────────────

def _base_version(version: str) -> str:
    """Drop the leading 'v' and any '+commit...' build suffix."""
    return version.lstrip("v").split("+")[0]


def install_solc(version: str, activate: bool = False):
    """Install the specified solc version if not already installed."""
    installed = [str(v) for v in solcx.get_installed_solc_versions()]
    if version not in installed:
        logger.info("Installing solc %s...", version)
        solcx.install_solc(version)
    if activate:
        solcx.set_solc_version(version, silent=True)


def standard_input(source: str) -> dict:
    """Standard-JSON input for one source unit, asking only for its AST."""
    return {
        "language": "Solidity",
        "sources": {config.SOURCE_UNIT_NAME: {"content": source}},
        "settings": {
            "outputSelection": {
                "*": {"": ["ast"]},
            },
        },
    }


def extract_ast(compiled: dict):
    """AST of the single compiled source unit."""
    unit = compiled.get("sources", {}).get(config.SOURCE_UNIT_NAME, {})
    # pre-0.8 compilers may also emit the legacy tree
    return unit.get("ast") or unit.get("legacyAST")


class Compiler(ABC):
    """Something that reports a solc version and compiles a source string."""

    @abstractmethod
    def version(self) -> str:
        ...

    @abstractmethod
    def solc_version(self) -> str:
        """Installed solc version to hand to py-solc-x, e.g. '0.8.19'."""

    def compile(self, source: str) -> dict:
        solc_version = self.solc_version()
        logger.info("Compiling with solc %s", solc_version)
        try:
            return solcx.compile_standard(standard_input(source), solc_version=solc_version)
        except SolcError as e:
            raise CompileFailure(e.message) from e


class BundledCompiler(Compiler):
    """
    The solc py-solc-x treats as active on this machine.

    With no active solc the newest installed one is activated; with
    nothing installed ``default_version`` is installed first.
    """

    def __init__(self, default_version: str = None):
        self.default_version = default_version or config.DEFAULT_SOLC_VERSION
        self._version = None

    def _resolve(self) -> str:
        if self._version is not None:
            return self._version
        try:
            active = solcx.get_solc_version(with_commit_hash=True)
        except SolcNotInstalled:
            installed = solcx.get_installed_solc_versions()
            try:
                if installed:
                    solcx.set_solc_version(max(installed), silent=True)
                else:
                    install_solc(self.default_version, activate=True)
            except Exception as e:
                raise CompilerLoadError(self.default_version) from e
            active = solcx.get_solc_version(with_commit_hash=True)
        self._version = str(active)
        return self._version

    def version(self) -> str:
        return self._resolve()

    def solc_version(self) -> str:
        return _base_version(self._resolve())


class FetchedCompiler(Compiler):
    """A specific solc release, e.g. ``v0.5.0+commit.1d4f565a``."""

    def __init__(self, release: str):
        self.release = release
        self._loaded = False

    def load(self) -> "FetchedCompiler":
        """Install the release if needed. Network I/O happens here."""
        version = _base_version(self.release)
        try:
            install_solc(version)
        except Exception as e:
            raise CompilerLoadError(self.release) from e
        self._loaded = True
        return self

    def version(self) -> str:
        return self.release.lstrip("v")

    def solc_version(self) -> str:
        if not self._loaded:
            self.load()
        return _base_version(self.release)


# ────────────────────────────────────────────
# Selection
# ────────────────────────────────────────────

def resolve_compiler(
    pragma_version: Optional[str],
    bundled: Compiler = None,
    catalog_url: str = None,
) -> Compiler:
    """Return the compiler to use for a file declaring ``pragma_version``."""
    bundled = bundled or BundledCompiler()
    if not pragma_version or is_same_compiler(pragma_version, bundled.version()):
        logger.info("Using local solc %s", bundled.version())
        return bundled

    catalog = fetch_release_catalog(catalog_url)
    release_file = catalog.release_for(pragma_version)
    if not release_file:
        raise CompilerLoadError(pragma_version)

    release = clean_release_name(release_file)
    logger.info("Pragma %s selects release %s", pragma_version, release)
    return FetchedCompiler(release).load()


def compile_source(pragma_version: Optional[str], source: str, bundled: Compiler = None, catalog_url: str = None):
    """Compile ``source`` with the compiler its pragma selects and return the AST."""
    compiler = resolve_compiler(pragma_version, bundled=bundled, catalog_url=catalog_url)
    return extract_ast(compiler.compile(source))
