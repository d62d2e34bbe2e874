"""
CAS Tape Image Handling for the TRS-80 Model I
==============================================

This module produces cassette images (.cas) in the "system" format, the
format the Model I ROM loads with the SYSTEM command. A system tape holds
one machine language program: a named header, the program split into
checksummed chunks with their load addresses, and the entry point.

This module provides:
- **pack / pack_file**: Build a tape image from bytes or from a file
- **TapeConfig / TapeImage**: Run configuration and the packing result
- **Record types**: Header, chunk and trailer records
- **Checksum utilities**: The per-chunk 8-bit checksum
- **Name sanitization**: Turn arbitrary text into a 6-letter entry name

Quick Start
-----------
    >>> from trs80_mltl.cas import pack, sanitize_entry_name
    >>> name = sanitize_entry_name("message")
    >>> image = pack(Path("message.bin").read_bytes(), name.name, 0x4A00, 0x4A00)
    >>> Path("message.cas").write_bytes(image.data)

Reference
---------
- TRS-80 Model I cassette formats: http://www.trs-80.com/
"""

# =============================================================================
# Public API Exports
# =============================================================================

from trs80_mltl.cas.records import (
    # Format constants
    LEADER_LENGTH,
    SYNC_BYTE,
    SYSTEM_FORMAT_BYTE,
    ENTRY_NAME_LENGTH,
    CHUNK_MARKER,
    MAX_CHUNK_SIZE,
    EOF_MARKER,
    HEADER_LENGTH,
    # Records
    TapeHeader,
    ChunkRecord,
    TapeTrailer,
)

from trs80_mltl.cas.checksum import (
    calculate_chunk_checksum,
    verify_chunk_checksum,
)

from trs80_mltl.cas.names import (
    SanitizedName,
    sanitize_entry_name,
    derive_entry_name,
)

from trs80_mltl.cas.builder import (
    TapeConfig,
    TapeImage,
    check_input_size,
    segment,
    pack,
    pack_file,
)

__all__ = [
    # Format constants
    "LEADER_LENGTH",
    "SYNC_BYTE",
    "SYSTEM_FORMAT_BYTE",
    "ENTRY_NAME_LENGTH",
    "CHUNK_MARKER",
    "MAX_CHUNK_SIZE",
    "EOF_MARKER",
    "HEADER_LENGTH",
    # Records
    "TapeHeader",
    "ChunkRecord",
    "TapeTrailer",
    # Checksum
    "calculate_chunk_checksum",
    "verify_chunk_checksum",
    # Names
    "SanitizedName",
    "sanitize_entry_name",
    "derive_entry_name",
    # Builder
    "TapeConfig",
    "TapeImage",
    "check_input_size",
    "segment",
    "pack",
    "pack_file",
]
