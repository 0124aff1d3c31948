"""
Classification Submodule

Exports the built-in filter classifiers.
"""

from .smart_default import CROSS_TABLE_KEYS, DEFAULT, SMART, smart_default_indexer

__all__ = ["CROSS_TABLE_KEYS", "DEFAULT", "SMART", "smart_default_indexer"]
