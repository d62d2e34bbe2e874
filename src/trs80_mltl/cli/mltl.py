"""
trs80m1-mltl - Machine Language Tape Packer Command-Line Interface
===================================================================

This module implements the command-line interface for the tape packer.
It wraps a raw Z80 binary into a TRS-80 Model I system tape image.

Usage Examples
--------------
Basic packing (writes message.cas, entry name MESSAG):
    $ trs80m1-mltl -i message.bin -b 4A00 -s 4A00

With output file and entry name:
    $ trs80m1-mltl -i message.bin -o msg.cas -n hello -b 0x4A00 -s 0x4A10

Addresses are hexadecimal, with or without a 0x prefix. The base and
entry point addresses can be read from the global symbols section of the
assembler listing.
"""

import logging
import re
from pathlib import Path
from typing import Optional

import click

from trs80_mltl import __version__
from trs80_mltl.cas import (
    TapeConfig,
    derive_entry_name,
    pack_file,
    sanitize_entry_name,
)
from trs80_mltl.cli.errors import handle_cli_exception
from trs80_mltl.errors import (
    ArgumentParseError,
    EmptyEntryNameError,
    PathConflictError,
)

# Extension of generated tape images
TAPE_SUFFIX = ".cas"

HEX_PATTERN = re.compile(r"(?:0[xX])?([0-9A-Fa-f]+)")


# =============================================================================
# Argument Helpers
# =============================================================================

def parse_hex_address(text: str) -> int:
    """
    Parse a 16-bit hexadecimal address.

    Accepts hex digits with an optional 0x/0X prefix. Signs, whitespace
    and underscores are rejected even though int() would take them.

    Args:
        text: The argument text

    Returns:
        The address (0x0000 - 0xFFFF)

    Raises:
        ArgumentParseError: If the text isn't hex or the value exceeds 0xFFFF

    Examples:
        "4A00"   → 0x4A00
        "0x4a00" → 0x4A00
        "10000"  → Error (doesn't fit the Z80's address space)
    """
    match = HEX_PATTERN.fullmatch(text)
    if match is None:
        raise ArgumentParseError(text, "not a hexadecimal number")

    value = int(match.group(1), 16)
    if value > 0xFFFF:
        raise ArgumentParseError(
            text, f"0x{value:04X} doesn't fit into the Z80's address space"
        )
    return value


class HexAddress(click.ParamType):
    """
    Click parameter type for 16-bit hexadecimal addresses.

    Accepts: 4A00, 4a00, 0x4A00, 0X4a00
    """
    name = "addr"

    def convert(self, value: str, param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> int:
        """Convert string to an address."""
        if isinstance(value, int):
            return value

        try:
            return parse_hex_address(value)
        except ArgumentParseError as e:
            self.fail(f"Invalid address {e}", param, ctx)


HEX_ADDRESS = HexAddress()


def resolve_output_path(output: Optional[Path], input_file: Path) -> Path:
    """
    Determine the output tape image path.

    If no output is given, the input filename (without its directory) gets
    its extension replaced by .cas, so the image lands in the current
    working directory.

    Examples:
        build/message.bin → message.cas
        prog              → prog.cas
    """
    if output is not None:
        return output
    return Path(input_file.name).with_suffix(TAPE_SUFFIX)


def check_path_conflict(input_file: Path, output: Path) -> None:
    """
    Refuse to overwrite the input with the tape image.

    Raises:
        PathConflictError: If both paths resolve to the same file
    """
    if input_file.resolve() == output.resolve():
        raise PathConflictError(input_file)


def _setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-i", "--input", "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="The file to pack into a machine language tape file.",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Destination file (default: input filename with the extension "
         "changed to .cas).",
)
@click.option(
    "-b", "--base",
    type=HEX_ADDRESS,
    required=True,
    help="Address the data is loaded at (in hex).",
)
@click.option(
    "-s", "--start",
    type=HEX_ADDRESS,
    required=True,
    help="Address of the execution entry point (in hex).",
)
@click.option(
    "-n", "--name",
    help="Name of the entry on the tape (default: input filename without "
         "extension). The first 6 ASCII letters are converted to upper-case; "
         "everything else except for spaces is stripped.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(__version__, "--version", "-V", prog_name="trs80m1-mltl")
def main(
    input_file: Path,
    output: Optional[Path],
    base: int,
    start: int,
    name: Optional[str],
    verbose: bool,
) -> None:
    """
    Pack a Z80 binary into a TRS-80 Model I system tape image.

    The image can be loaded with the SYSTEM command; type the entry name
    at the *? prompt, then / to jump to the entry point.

    \b
    Examples:
        trs80m1-mltl -i message.bin -b 4A00 -s 4A00
        trs80m1-mltl -i game.bin -o game.cas -n invade -b 0x5200 -s 0x5200
    """
    _setup_logging(verbose)

    try:
        output_file = resolve_output_path(output, input_file)

        if name is not None:
            template = name
            entry_name = sanitize_entry_name(name)
        else:
            template = input_file.stem
            entry_name = derive_entry_name(input_file)

        click.echo(f"Input filename:       '{input_file}'")
        click.echo(f"Output filename:      '{output_file}'")
        click.echo(f"Tape data entry name: '{entry_name.name.decode('ascii')}'")
        click.echo(f"Base address:          0x{base:04X}")
        click.echo(f"Entry point address:   0x{start:04X}")
        click.echo()

        check_path_conflict(input_file, output_file)
        if not entry_name.has_letters:
            raise EmptyEntryNameError(template)

        config = TapeConfig(
            input_path=input_file,
            output_path=output_file,
            entry_name=entry_name.name,
            base_address=base,
            entry_point=start,
        )
        image = pack_file(config)

        click.echo(f"{input_file}: {image.payload_size} bytes loaded.")
        click.echo(image.describe_chunks())
        click.echo()
        click.echo(f"Successfully wrote {len(image)} bytes into '{output_file}'.")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
