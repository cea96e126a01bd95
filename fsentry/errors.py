"""Error hierarchy for fsentry.

Every error carries the offending path and the operation that was attempted,
so that a partially completed transfer can be reconciled by hand.
"""

import errno
from typing import Optional


class FsEntryError(Exception):
    """Base error for all filesystem entry operations."""

    def __init__(
        self,
        path: str,
        operation: str,
        message: str,
        errno_code: Optional[int] = None,
    ) -> None:
        self.path = path
        self.operation = operation
        self.message = message
        self.errno = errno_code
        super().__init__(f"{operation} failed for {path}: {message}")


class NotFoundError(FsEntryError):
    """The path does not exist where existence was required."""


class InvalidSourceError(FsEntryError):
    """The transfer source is a symlink or missing."""


class InvalidDestinationError(FsEntryError):
    """The transfer destination is a symlink or of an incompatible kind."""


class AccessDeniedError(FsEntryError):
    """The platform refused access to the path."""


class AlreadyExistsError(FsEntryError):
    """A destination already exists and the conflict strategy forbids replacing it."""


class InvalidOperationError(FsEntryError):
    """The operation does not apply to this kind of entry."""


_ERRNO_MAP = {
    errno.ENOENT: NotFoundError,
    errno.EACCES: AccessDeniedError,
    errno.EPERM: AccessDeniedError,
    errno.EEXIST: AlreadyExistsError,
    errno.ENOTDIR: InvalidOperationError,
    errno.EISDIR: InvalidOperationError,
}


def translate_os_error(err: OSError, path: str, operation: str) -> FsEntryError:
    """Map a platform OSError onto the fsentry error hierarchy.

    Args:
        err: The error raised by the platform call.
        path: Path the operation was acting on.
        operation: Short name of the attempted operation (e.g. "copy").

    Returns:
        An FsEntryError subclass chosen by errno. Unclassified errors become
        the base FsEntryError with the errno preserved.
    """
    error_cls = _ERRNO_MAP.get(err.errno, FsEntryError)
    message = err.strerror or str(err)
    return error_cls(path, operation, message, errno_code=err.errno)
