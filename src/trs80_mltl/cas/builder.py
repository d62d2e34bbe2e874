"""
CAS Tape Image Builder
======================

This module packs a raw binary into a TRS-80 system tape image.

Usage
-----
Packing bytes in memory:

    >>> from trs80_mltl.cas import pack, sanitize_entry_name
    >>> name = sanitize_entry_name("hello").name
    >>> image = pack(bytes([0xC3, 0x00, 0x40]), name, 0x4A00, 0x4A00)
    >>> Path("hello.cas").write_bytes(image.data)

Packing a file, as the command-line tool does:

    >>> config = TapeConfig(
    ...     input_path=Path("message.bin"),
    ...     output_path=Path("message.cas"),
    ...     entry_name=b"MESSAG",
    ...     base_address=0x4A00,
    ...     entry_point=0x4A00,
    ... )
    >>> image = pack_file(config)

Chunking
--------
The input is cut left to right into chunks of 256 bytes; whatever is left
(1-255 bytes) becomes the final chunk. Chunk i is loaded at
base_address + 256 * i.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

from trs80_mltl.errors import (
    CapacityExceededError,
    EmptyInputError,
    InputReadError,
    OutputWriteError,
)
from trs80_mltl.cas.records import (
    ADDRESS_SPACE_SIZE,
    MAX_CHUNK_SIZE,
    ChunkRecord,
    TapeHeader,
    TapeTrailer,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Configuration and Result Types
# =============================================================================

@dataclass(frozen=True)
class TapeConfig:
    """
    Everything needed to pack one file.

    Built once by the command-line tool from its options and passed to
    pack_file(); nothing else is consulted during packing.

    Attributes:
        input_path: Binary to pack
        output_path: Where the tape image is written
        entry_name: 6-byte sanitized entry name
        base_address: Load address of the first byte
        entry_point: Execution address written in the trailer
    """
    input_path: Path
    output_path: Path
    entry_name: bytes
    base_address: int
    entry_point: int


@dataclass
class TapeImage:
    """
    A fully assembled tape image.

    Attributes:
        data: The complete image, ready to be written verbatim
        chunks: The chunk records in tape order
    """
    data: bytes
    chunks: list[ChunkRecord] = field(default_factory=list)

    @property
    def full_chunk_count(self) -> int:
        """Number of chunks carrying exactly 256 bytes."""
        return sum(1 for chunk in self.chunks if len(chunk.data) == MAX_CHUNK_SIZE)

    @property
    def last_chunk_size(self) -> Optional[int]:
        """Size of the trailing partial chunk, or None if every chunk is full."""
        if self.chunks and len(self.chunks[-1].data) < MAX_CHUNK_SIZE:
            return len(self.chunks[-1].data)
        return None

    @property
    def payload_size(self) -> int:
        return sum(len(chunk.data) for chunk in self.chunks)

    def describe_chunks(self) -> str:
        """Summary line of how the input was split."""
        if self.last_chunk_size is not None:
            return (
                f"Packed {self.full_chunk_count} chunks of 256 bytes "
                f"and 1 chunk of {self.last_chunk_size} bytes."
            )
        return f"Packed {self.full_chunk_count} chunks of 256 bytes."

    def __len__(self) -> int:
        return len(self.data)


# =============================================================================
# Packing
# =============================================================================

def check_input_size(length: int, base_address: int) -> None:
    """
    Check that an input of the given size can be packed.

    Args:
        length: Input size in bytes
        base_address: Load address of the first byte

    Raises:
        CapacityExceededError: If the input runs past 0xFFFF
        EmptyInputError: If the input is empty
    """
    if length > ADDRESS_SPACE_SIZE - base_address:
        raise CapacityExceededError(base_address, length)
    if length == 0:
        raise EmptyInputError()


def segment(data: bytes, base_address: int) -> list[ChunkRecord]:
    """
    Split the input into address-tagged chunks.

    Args:
        data: The binary to split
        base_address: Load address of data[0]

    Returns:
        Chunk records in load order
    """
    chunks = []
    offset = 0

    while offset < len(data):
        # More than 255 bytes left: take a full chunk, otherwise the rest
        if len(data) - offset > MAX_CHUNK_SIZE - 1:
            size = MAX_CHUNK_SIZE
        else:
            size = len(data) - offset

        chunk = ChunkRecord(
            load_address=base_address + offset,
            data=bytes(data[offset:offset + size]),
        )
        logger.debug(
            f"Chunk {len(chunks)}: {size} bytes at 0x{chunk.load_address:04X}, "
            f"checksum 0x{chunk.checksum:02X}"
        )
        chunks.append(chunk)
        offset += size

    return chunks


def pack(
    data: bytes,
    entry_name: bytes,
    base_address: int,
    entry_point: int,
) -> TapeImage:
    """
    Build a complete system tape image.

    Args:
        data: The binary to pack
        entry_name: 6-byte sanitized entry name
        base_address: Load address of data[0]
        entry_point: Execution address after loading

    Returns:
        The assembled TapeImage

    Raises:
        CapacityExceededError: If the input doesn't fit above base_address
        EmptyInputError: If the input is empty
        ValueError: If the name isn't 6 bytes or an address isn't 16-bit

    Example:
        >>> image = pack(bytes(300), b"TEST  ", 0x4000, 0x4000)
        >>> [chunk.load_address for chunk in image.chunks]
        [16384, 16640]
    """
    header = TapeHeader(name=bytes(entry_name))
    trailer = TapeTrailer(entry_point=entry_point)
    if not 0 <= base_address <= 0xFFFF:
        raise ValueError(f"Base address 0x{base_address:X} is outside the Z80 address space")

    check_input_size(len(data), base_address)

    chunks = segment(data, base_address)

    output = bytearray()
    output.extend(header.to_bytes())
    for chunk in chunks:
        output.extend(chunk.to_bytes())
    output.extend(trailer.to_bytes())

    image = TapeImage(data=bytes(output), chunks=chunks)
    logger.info(
        f"Built tape '{header.get_display_name()}': {len(data)} bytes in "
        f"{len(chunks)} chunks at 0x{base_address:04X}, entry 0x{entry_point:04X}"
    )
    return image


def pack_file(config: TapeConfig) -> TapeImage:
    """
    Read a binary, pack it, and write the tape image.

    Args:
        config: Paths, name and addresses for this run

    Returns:
        The TapeImage that was written

    Raises:
        InputReadError: If the input can't be read
        OutputWriteError: If the image can't be written
        CapacityExceededError, EmptyInputError: See pack()
    """
    try:
        data = config.input_path.read_bytes()
    except OSError as e:
        raise InputReadError(config.input_path, e) from e

    logger.info(f"{config.input_path}: {len(data)} bytes loaded")

    image = pack(data, config.entry_name, config.base_address, config.entry_point)

    try:
        config.output_path.write_bytes(image.data)
    except OSError as e:
        raise OutputWriteError(config.output_path, e) from e

    logger.info(f"Wrote {len(image)} bytes into {config.output_path}")
    return image
