#!/usr/bin/env python3
"""Thin wrapper to run ENS commands from a source checkout.

Parsing and execution live in the ``ens_runner`` package; installed copies
expose the same entry point as the ``ens-runner`` console script.
"""

from __future__ import annotations

from ens_runner.cli import main


if __name__ == "__main__":
    main()
