"""clusterlint command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``clusterlint`` script).
"""

from clusterlint.cli.main import cli

__all__ = ["cli"]
