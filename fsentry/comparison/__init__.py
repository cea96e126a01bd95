"""Folder comparison package for fsentry.

This package contains:
- FolderDiff: Shallow comparison of the files in two folders.
"""

from fsentry.comparison.folder_diff import FolderDiff

__all__ = ["FolderDiff"]
