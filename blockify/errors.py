# blockify/errors.py
from __future__ import annotations

"""
Run-level faults. Every one of these stops the run; nothing is retried.
"""

from pathlib import Path
from typing import Union


class BlockifyError(Exception):
    """Base class for faults that abort a run."""


class ConfigError(BlockifyError):
    """Bad invocation: missing directories, no usable blocks."""


class _PathError(BlockifyError):
    action = "process"

    def __init__(self, path: Union[str, Path], reason: str = "") -> None:
        self.path = str(path)
        self.reason = reason
        msg = f"failed to {self.action} {self.path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class DecodeError(_PathError):
    """A file exists but could not be read or decoded."""

    action = "load"


class EncodeError(_PathError):
    """A composited image could not be written."""

    action = "save"


__all__ = ["BlockifyError", "ConfigError", "DecodeError", "EncodeError"]
