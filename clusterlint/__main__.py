"""Entry point for `python -m clusterlint`.

Usage:
    python -m clusterlint analyze manifests.yaml
"""

from __future__ import annotations

from clusterlint.cli import cli

cli()
