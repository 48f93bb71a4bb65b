"""Gap buffer sequence container for editor-style workloads."""

__all__ = [
    "buffer",
    "runtime",
]

__version__ = "0.1.0"
