"""Convenience shim to run the staging promotion check."""

from __future__ import annotations

import sys

from src.pipeline.runner import main as promotion_main


if __name__ == "__main__":
    sys.exit(promotion_main(sys.argv[1:]))
