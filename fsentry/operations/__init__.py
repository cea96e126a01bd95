"""File operations package for fsentry.

This package contains:
- ConflictResolver: Decides what happens to an existing destination file.
- SafeTransfer: Copies or moves files and folder trees under a conflict strategy.
"""

from fsentry.operations.conflict_resolver import ConflictResolver
from fsentry.operations.safe_transfer import SafeTransfer

__all__ = ["ConflictResolver", "SafeTransfer"]
