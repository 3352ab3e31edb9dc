"""Pure analysis package for benchart.

This package turns benchstat CSV text into chart DTOs. It is deterministic,
operates on in-memory inputs, and must not import Django or perform file I/O
beyond loading option files.
"""

from .aggregation import parse_benchmark_results

__all__ = ["parse_benchmark_results"]
