"""
Tape Entry Name Sanitization
============================

The system tape header carries a 6-character entry name that the user
types after SYSTEM to load the program. The ROM expects upper-case ASCII
letters, padded with spaces.

Names are derived either from the --name option or from the input
filename, so arbitrary text has to be reduced to that alphabet.
"""

from pathlib import Path
from typing import NamedTuple, Union
import logging

from trs80_mltl.cas.records import ENTRY_NAME_LENGTH

logger = logging.getLogger(__name__)


class SanitizedName(NamedTuple):
    """
    Result of sanitizing an entry name.

    Attributes:
        name: Exactly 6 bytes of upper-case letters and spaces
        has_letters: False when nothing but padding is left; such a name
            must not be written to tape
    """
    name: bytes
    has_letters: bool


def _is_ascii_letter(char: str) -> bool:
    return ("A" <= char <= "Z") or ("a" <= char <= "z")


def sanitize_entry_name(template: str) -> SanitizedName:
    """
    Reduce arbitrary text to a 6-byte tape entry name.

    Rules:
    - ASCII letters are kept and upper-cased
    - A space is kept only once a letter has been kept
    - Everything else (digits, punctuation, non-ASCII) is dropped
    - At most 6 characters are kept, the rest is padded with spaces

    Args:
        template: The raw name

    Returns:
        SanitizedName with the 6-byte name and whether any letter was kept

    Examples:
        "message"  → b"MESSAG", True
        "ab cd"    → b"AB CD ", True
        " x1y"     → b"XY    ", True
        "123"      → b"      ", False
    """
    kept = []
    has_letters = False

    for char in template:
        if len(kept) == ENTRY_NAME_LENGTH:
            break
        if _is_ascii_letter(char):
            has_letters = True
            kept.append(char.upper())
        elif char == " " and has_letters:
            kept.append(char)

    name = "".join(kept).ljust(ENTRY_NAME_LENGTH).encode("ascii")
    logger.debug(f"Sanitized entry name {template!r} -> {name!r}")
    return SanitizedName(name, has_letters)


def derive_entry_name(filepath: Union[str, Path]) -> SanitizedName:
    """
    Derive the default entry name from an input filename.

    The filename without its last extension is sanitized:
        "message.bin"   → b"MESSAG"
        "game.v2.bin"   → b"GAMEV "
    """
    return sanitize_entry_name(Path(filepath).stem)
