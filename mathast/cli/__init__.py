"""CLI package for mathast tools."""

__all__ = [
    "parse",
    "render",
    "tokens",
]
