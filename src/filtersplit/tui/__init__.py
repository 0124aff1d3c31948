"""
Terminal rendering helpers.
"""

from .partition_renderer import PartitionRenderer

__all__ = ["PartitionRenderer"]
