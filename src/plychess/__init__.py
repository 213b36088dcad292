"""plychess — single-ply chess rules core with an in-memory game session."""

__version__ = "0.1.0"
