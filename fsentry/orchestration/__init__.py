"""Transfer orchestration package for fsentry.

This package contains:
- TransferLogger: Structured logging of safe transfers to log files.
"""

from fsentry.orchestration.transfer_logger import TransferLogger

__all__ = ["TransferLogger"]
