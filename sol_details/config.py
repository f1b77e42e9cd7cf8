# Copyright (c) 2023-2026 Cryft Labs. All rights reserved.
# Licensed under the Apache License, Version 2.0.
# This software is part of a patented system. See LICENSE and PATENT NOTICE.

# global configuration settings
import logging
import os
import sys
from typing import Optional

# Compiler settings
DEFAULT_SOLC_VERSION = os.environ.get("SOL_DETAILS_DEFAULT_SOLC", "0.8.19")
# solc-js compiled a lone source under the empty unit name
SOURCE_UNIT_NAME = ""

# Remote release catalog
RELEASE_LIST_URL = os.environ.get(
    "SOL_DETAILS_RELEASE_LIST_URL",
    "https://binaries.soliditylang.org/bin/list.json",
)
SOLJSON_PREFIX = "soljson-"
SOLJSON_SUFFIX = ".js"


def _read_timeout(raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    return float(raw)


# None means wait forever, like the original fetch
REQUEST_TIMEOUT = _read_timeout(os.environ.get("SOL_DETAILS_REQUEST_TIMEOUT"))

# logs
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(verbose: bool = False):
    """Send log records to stderr; stdout carries the JSON result."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


# logger
def get_logger(name=None):
    return logging.getLogger(name)
