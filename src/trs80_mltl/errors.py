"""
TRS-80 Tape Error Hierarchy
===========================

This module defines the exception hierarchy for the tape packer.
All exceptions inherit from TapeError, allowing callers to catch every
packer-related failure with a single except clause.

Exception Hierarchy
-------------------
TapeError (base)
├── ArgumentParseError - malformed hex address on the command line
├── PathConflictError - input and output name the same file
├── EmptyEntryNameError - no letters left after name sanitization
├── PackError (encoding preconditions)
│   ├── CapacityExceededError - image does not fit above the base address
│   └── EmptyInputError - nothing to write onto the tape
└── TapeIOError (filesystem)
    ├── InputReadError - source file could not be read
    └── OutputWriteError - tape image could not be written

None of these errors is retried. The command-line tool reports the message
and exits.
"""

from pathlib import Path
from typing import Optional, Union


# =============================================================================
# Base Exception Class
# =============================================================================

class TapeError(Exception):
    """
    Base exception for all tape packer errors.

        try:
            pack_file(config)
        except TapeError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Argument and Setup Errors
# =============================================================================

class ArgumentParseError(TapeError):
    """
    A command-line value could not be parsed.

    Raised for hexadecimal addresses that contain characters other than
    0-9, a-f, A-F (after an optional 0x prefix), or whose value does not
    fit in the Z80's 16-bit address space.
    """

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"'{value}': {reason}")


class PathConflictError(TapeError):
    """
    Input and output paths refer to the same file.

    Writing the tape image would overwrite the binary being packed, so
    the run is refused.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(
            f"The input and output files are the same ('{self.path}'), "
            f"aborting to prevent data loss"
        )


class EmptyEntryNameError(TapeError):
    """
    The tape entry name has no letters.

    The name comes either from the --name option or from the input
    filename. Only plain ASCII letters survive sanitization, so a name
    made of digits, punctuation or non-ASCII characters ends up empty.
    """

    def __init__(self, template: str):
        self.template = template
        super().__init__(
            f"The tape entry name derived from '{template}' is empty: it "
            f"contains no plain ASCII letters. Provide one with --name"
        )


# =============================================================================
# Packing Errors
# =============================================================================

class PackError(TapeError):
    """Base exception for errors raised while encoding a tape image."""
    pass


class CapacityExceededError(PackError):
    """
    Input does not fit into the address space above the base address.

    The Z80 addresses 64KB, so a binary loaded at base address B can be
    at most 0x10000 - B bytes long.

    Attributes:
        base_address: The requested load address
        length: Size of the input in bytes
        max_size: Largest input that fits at base_address
    """

    def __init__(self, base_address: int, length: int):
        self.base_address = base_address
        self.length = length
        self.max_size = 0x10000 - base_address
        super().__init__(
            f"The input ({length} bytes) would not fit into the Z80's "
            f"address space. With a base address of 0x{base_address:04X}, "
            f"you can only fit at most {self.max_size} bytes"
        )


class EmptyInputError(PackError):
    """The input is empty, there is nothing to write onto the tape."""

    def __init__(self, message: str = ""):
        if not message:
            message = "The input is empty, there's nothing to write onto the tape"
        super().__init__(message)


# =============================================================================
# Filesystem Errors
# =============================================================================

class TapeIOError(TapeError):
    """
    Base exception for filesystem failures.

    The originating OSError is chained as __cause__ and kept in `error`.
    """

    action = "access"

    def __init__(self, path: Union[str, Path], error: Optional[OSError] = None):
        self.path = Path(path)
        self.error = error
        detail = f": {error.strerror or error}" if error is not None else ""
        super().__init__(f"Failed to {self.action} '{self.path}'{detail}")


class InputReadError(TapeIOError):
    """Reading the input binary failed."""

    action = "read"


class OutputWriteError(TapeIOError):
    """
    Writing the tape image failed.

    The destination may be left truncated; it is not staged through a
    temporary file.
    """

    action = "write"
