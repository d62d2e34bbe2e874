"""
CAS Chunk Checksum
==================

Each data chunk of a system tape carries a one-byte checksum. The loader
computes it as it reads the chunk and refuses the chunk on mismatch.

Algorithm
---------
- Sum the low byte of the load address, the high byte of the load
  address, then every data byte of the chunk.
- Keep only the low 8 bits (wrapping addition, no carry out).
- The marker byte (0x3C) and the length byte are not included.

This is the checksum the ROM uses; it is deliberately weak and must not
be replaced by anything stronger.
"""


def calculate_chunk_checksum(load_address: int, data: bytes) -> int:
    """
    Calculate the checksum of a data chunk.

    Args:
        load_address: 16-bit address the chunk is loaded at
        data: The chunk payload

    Returns:
        8-bit checksum value (0x00 - 0xFF)

    Example:
        >>> calculate_chunk_checksum(0x4000, bytes([0x01, 0x02]))
        67
    """
    if not 0 <= load_address <= 0xFFFF:
        raise ValueError(f"Load address out of range: 0x{load_address:X}")

    checksum = load_address & 0xFF
    checksum += (load_address >> 8) & 0xFF
    checksum += sum(data)
    return checksum & 0xFF


def verify_chunk_checksum(load_address: int, data: bytes, checksum: int) -> bool:
    """
    Check a stored chunk checksum against the chunk contents.

    Args:
        load_address: 16-bit address the chunk is loaded at
        data: The chunk payload
        checksum: The checksum byte stored after the payload

    Returns:
        True if the stored checksum matches
    """
    return calculate_chunk_checksum(load_address, data) == checksum
