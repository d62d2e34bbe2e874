"""
CAS System Tape Record Definitions
==================================

This module defines the constants and record types that make up a TRS-80
Model I "system" (machine language) cassette image, the format read by
the ROM's SYSTEM command.

Tape Structure Overview
-----------------------
A system tape contains:
1. Header:
   - Leader (256 bytes): all zero, lets the loader lock onto the signal
   - Sync byte (1 byte): 0xA5
   - Format byte (1 byte): 0x55, marks a system (machine code) entry
   - Entry name (6 bytes): upper-case ASCII letters and spaces
2. Data chunks (variable), each:
   - Marker (1 byte): 0x3C
   - Length (1 byte): payload size, 0 meaning 256
   - Load address (2 bytes): little-endian
   - Payload (1-256 bytes)
   - Checksum (1 byte): see checksum.py
3. Trailer:
   - End-of-file marker (1 byte): 0x78
   - Entry point (2 bytes): little-endian

All multi-byte values are little-endian, as on the Z80.
"""

from dataclasses import dataclass
import struct

from trs80_mltl.cas.checksum import calculate_chunk_checksum


# =============================================================================
# Format Constants
# =============================================================================

LEADER_LENGTH = 256
LEADER_BYTE = 0x00
SYNC_BYTE = 0xA5
SYSTEM_FORMAT_BYTE = 0x55

ENTRY_NAME_LENGTH = 6

CHUNK_MARKER = 0x3C
MAX_CHUNK_SIZE = 256

EOF_MARKER = 0x78

# Size of the Z80 address space
ADDRESS_SPACE_SIZE = 0x10000

# Offset of the first chunk record in a complete image
HEADER_LENGTH = LEADER_LENGTH + 2 + ENTRY_NAME_LENGTH

# Marker, length byte, two address bytes, checksum
CHUNK_OVERHEAD = 5


def _check_address(value: int, what: str) -> None:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"{what} 0x{value:X} is outside the Z80 address space")


# =============================================================================
# Records
# =============================================================================

@dataclass(frozen=True)
class TapeHeader:
    """
    Leader, sync byte, format byte and entry name.

    Attributes:
        name: The 6-byte sanitized entry name
    """
    name: bytes

    def __post_init__(self) -> None:
        if len(self.name) != ENTRY_NAME_LENGTH:
            raise ValueError(
                f"Entry name must be exactly {ENTRY_NAME_LENGTH} bytes, "
                f"got {len(self.name)}"
            )

    def to_bytes(self) -> bytes:
        """Serialize the header (264 bytes)."""
        result = bytearray([LEADER_BYTE] * LEADER_LENGTH)
        result.append(SYNC_BYTE)
        result.append(SYSTEM_FORMAT_BYTE)
        result.extend(self.name)
        return bytes(result)

    def get_display_name(self) -> str:
        """Get the entry name as text, trailing padding removed."""
        return self.name.decode("ascii").rstrip()


@dataclass(frozen=True)
class ChunkRecord:
    """
    One address-tagged block of program data.

    Attributes:
        load_address: Where the loader places the first payload byte
        data: The payload (1 to 256 bytes)
    """
    load_address: int
    data: bytes

    def __post_init__(self) -> None:
        _check_address(self.load_address, "Load address")
        if not 1 <= len(self.data) <= MAX_CHUNK_SIZE:
            raise ValueError(
                f"Chunk payload must be 1-{MAX_CHUNK_SIZE} bytes, "
                f"got {len(self.data)}"
            )
        if self.load_address + len(self.data) > ADDRESS_SPACE_SIZE:
            raise ValueError(
                f"Chunk at 0x{self.load_address:04X} ({len(self.data)} bytes) "
                f"runs past the end of the address space"
            )

    @property
    def encoded_length(self) -> int:
        """The length byte as stored on tape (256 is stored as 0)."""
        return len(self.data) & 0xFF

    @property
    def end_address(self) -> int:
        """Address of the last payload byte."""
        return self.load_address + len(self.data) - 1

    @property
    def checksum(self) -> int:
        return calculate_chunk_checksum(self.load_address, self.data)

    def get_size(self) -> int:
        """Total size of the record on tape, including overhead."""
        return CHUNK_OVERHEAD + len(self.data)

    def to_bytes(self) -> bytes:
        """
        Serialize the chunk record.

        Format: [0x3C] [length] [addr lo] [addr hi] [data...] [checksum]
        """
        result = bytearray()
        result.append(CHUNK_MARKER)
        result.append(self.encoded_length)
        result.extend(struct.pack("<H", self.load_address))
        result.extend(self.data)
        result.append(self.checksum)
        return bytes(result)


@dataclass(frozen=True)
class TapeTrailer:
    """
    End-of-file marker followed by the program entry point.

    Attributes:
        entry_point: Address the loader jumps to after loading
    """
    entry_point: int

    def __post_init__(self) -> None:
        _check_address(self.entry_point, "Entry point")

    def to_bytes(self) -> bytes:
        return bytes([EOF_MARKER]) + struct.pack("<H", self.entry_point)
