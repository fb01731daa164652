"""erclint: token-contract custom error naming linter."""

__version__ = "0.3.0"
