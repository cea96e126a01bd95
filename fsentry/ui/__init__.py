"""Console output package for fsentry."""

from fsentry.ui.transfer_console import TransferConsole

__all__ = ["TransferConsole"]
