"""clusterlint: resource relationship graph and marker-based diagnostics."""

__version__ = "0.1.0"
