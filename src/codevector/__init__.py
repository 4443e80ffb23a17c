"""codevector - semantic code search over a Qdrant vector index."""

__version__ = "0.1.0"
