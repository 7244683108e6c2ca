"""Utility libraries for methodkit."""

from methodkit.lib.fences import fenced_lines
from methodkit.lib.markers import MergeResult, Region, find_regions, merge_regions

__all__ = ["MergeResult", "Region", "fenced_lines", "find_regions", "merge_regions"]
