"""Player rating normalization and meta-scoring for card catalogs."""

__version__ = "0.1.0"
