# Copyright (c) 2023-2026 Cryft Labs. All rights reserved.
# Licensed under the Apache License, Version 2.0.
# This software is part of a patented system. See LICENSE and PATENT NOTICE.

"""Extract compiler version, contract names and AST from Solidity files."""

__version__ = "0.1.0"
