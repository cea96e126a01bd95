"""EntryKind enum for deferred filesystem entry identity.

A path starts out UNKNOWN and acquires one of the concrete kinds either from a
directory-listing hint or from an explicit stat probe:
1. FILE - A regular file
2. FOLDER - A directory
3. SYMLINK - A symbolic link (never followed)
4. MISSING - Nothing exists at the path (a valid, non-error outcome)
"""

from enum import Enum


class EntryKind(Enum):
    """Encodes what a path refers to, as far as it has been probed."""
    UNKNOWN = "unknown"    # Not probed and no hint attached
    FILE = "file"          # Regular file
    FOLDER = "folder"      # Directory
    SYMLINK = "symlink"    # Symbolic link, not followed
    MISSING = "missing"    # Probe completed, nothing at the path
