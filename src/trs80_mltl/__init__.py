"""
trs80-mltl - Machine Language Tape Packer for the TRS-80 Model I
================================================================

This package turns a raw Z80 binary into a cassette image (.cas) in the
"system" tape format, ready to be loaded with the SYSTEM command on a real
Model I (through an audio converter) or in an emulator.

Main Components
---------------
- **cas**: Tape image records, checksum, entry name sanitization and the
  packer itself

- **cli**: The trs80m1-mltl command-line tool

Quick Start
-----------
Pack a binary from Python:
    >>> from trs80_mltl import TapeConfig, pack_file
    >>> pack_file(TapeConfig(Path("message.bin"), Path("message.cas"),
    ...                      b"MESSAG", 0x4A00, 0x4A00))

Or use the command-line tool:
    $ trs80m1-mltl -i message.bin -b 4A00 -s 0x4A00
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from trs80_mltl.errors import (
    TapeError,
    ArgumentParseError,
    PathConflictError,
    EmptyEntryNameError,
    PackError,
    CapacityExceededError,
    EmptyInputError,
    TapeIOError,
    InputReadError,
    OutputWriteError,
)

from trs80_mltl.cas import (
    TapeHeader,
    ChunkRecord,
    TapeTrailer,
    TapeConfig,
    TapeImage,
    SanitizedName,
    calculate_chunk_checksum,
    sanitize_entry_name,
    derive_entry_name,
    pack,
    pack_file,
)

__all__ = [
    "__version__",
    # Errors
    "TapeError",
    "ArgumentParseError",
    "PathConflictError",
    "EmptyEntryNameError",
    "PackError",
    "CapacityExceededError",
    "EmptyInputError",
    "TapeIOError",
    "InputReadError",
    "OutputWriteError",
    # Tape images
    "TapeHeader",
    "ChunkRecord",
    "TapeTrailer",
    "TapeConfig",
    "TapeImage",
    "SanitizedName",
    "calculate_chunk_checksum",
    "sanitize_entry_name",
    "derive_entry_name",
    "pack",
    "pack_file",
]
