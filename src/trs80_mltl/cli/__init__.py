"""
TRS-80 Tape Packer Command-Line Interface
=========================================

This package provides the command-line tool of the tape packer:

- **trs80m1-mltl**: wrap a Z80 binary into a system tape image (.cas)

The tool is a Click-based CLI application with help and uniform error
reporting.
"""

__all__ = ["mltl"]
