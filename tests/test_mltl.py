"""
Tests for trs80m1-mltl - Tape Packer CLI
========================================

These tests verify argument handling of the command-line tool and that
it writes the same image as the library packer.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from trs80_mltl import __version__
from trs80_mltl.cas import pack
from trs80_mltl.cli.mltl import (
    check_path_conflict,
    main,
    parse_hex_address,
    resolve_output_path,
)
from trs80_mltl.errors import ArgumentParseError, PathConflictError


# =============================================================================
# Test Hex Address Parsing
# =============================================================================

class TestParseHexAddress:
    """Tests for parse_hex_address()."""

    def test_plain_hex(self):
        assert parse_hex_address("4A00") == 0x4A00
        assert parse_hex_address("4a00") == 0x4A00
        assert parse_hex_address("0") == 0
        assert parse_hex_address("ffff") == 0xFFFF

    def test_prefixed_hex(self):
        assert parse_hex_address("0x4A00") == 0x4A00
        assert parse_hex_address("0X4a00") == 0x4A00
        assert parse_hex_address("0x0") == 0

    def test_leading_zeros(self):
        assert parse_hex_address("00004A00") == 0x4A00

    def test_out_of_range(self):
        with pytest.raises(ArgumentParseError, match="address space"):
            parse_hex_address("10000")
        with pytest.raises(ArgumentParseError):
            parse_hex_address("0xFFFFFFFFF")

    @pytest.mark.parametrize("text", ["", "0x", "4G00", "-1", "+1", " 4A", "4_000", "$4A00"])
    def test_invalid(self, text):
        with pytest.raises(ArgumentParseError, match="not a hexadecimal number"):
            parse_hex_address(text)


# =============================================================================
# Test Output Path Resolution
# =============================================================================

class TestResolveOutputPath:
    """Tests for resolve_output_path()."""

    def test_explicit_output_returned(self):
        output = Path("/tmp/out.cas")
        assert resolve_output_path(output, Path("prog.bin")) == output

    def test_replaces_extension(self):
        assert resolve_output_path(None, Path("message.bin")) == Path("message.cas")

    def test_adds_extension(self):
        assert resolve_output_path(None, Path("prog")) == Path("prog.cas")

    def test_drops_directory(self):
        """Default output goes to the current directory."""
        assert resolve_output_path(None, Path("build/out/message.bin")) == Path("message.cas")


class TestCheckPathConflict:
    """Tests for check_path_conflict()."""

    def test_same_path(self, tmp_path):
        path = tmp_path / "prog.cas"
        with pytest.raises(PathConflictError):
            check_path_conflict(path, path)

    def test_same_file_different_spelling(self, tmp_path):
        path = tmp_path / "prog.cas"
        other = tmp_path / "sub" / ".." / "prog.cas"
        with pytest.raises(PathConflictError):
            check_path_conflict(path, other)

    def test_different_paths(self, tmp_path):
        check_path_conflict(tmp_path / "prog.bin", tmp_path / "prog.cas")


# =============================================================================
# Test Command
# =============================================================================

class TestMltlCommand:
    """Tests that run the full command."""

    @pytest.fixture
    def program(self) -> bytes:
        return bytes((i * 13) & 0xFF for i in range(300))

    def test_pack_with_defaults(self, program):
        """Should write <stem>.cas with the name taken from the stem."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("message.bin").write_bytes(program)

            result = runner.invoke(main, ["-i", "message.bin", "-b", "4000", "-s", "0x4000"])

            assert result.exit_code == 0, f"Pack failed: {result.output}"
            expected = pack(program, b"MESSAG", 0x4000, 0x4000).data
            assert Path("message.cas").read_bytes() == expected
            assert "Packed 1 chunks of 256 bytes and 1 chunk of 44 bytes." in result.output
            assert f"Successfully wrote {len(expected)} bytes" in result.output
            assert "0x4000" in result.output

    def test_explicit_output_and_name(self, program):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.bin").write_bytes(program)

            result = runner.invoke(main, [
                "--input", "prog.bin",
                "--output", "tape.cas",
                "--name", "ab cd",
                "--base", "0x5200",
                "--start", "5210",
            ])

            assert result.exit_code == 0, f"Pack failed: {result.output}"
            data = Path("tape.cas").read_bytes()
            assert data[258:264] == b"AB CD "
            assert data[-3:] == bytes([0x78, 0x10, 0x52])
            assert not Path("prog.cas").exists()

    def test_exact_multiple_summary(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.bin").write_bytes(bytes(512))

            result = runner.invoke(main, ["-i", "prog.bin", "-b", "4000", "-s", "4000"])

            assert result.exit_code == 0, f"Pack failed: {result.output}"
            assert "Packed 2 chunks of 256 bytes." in result.output

    def test_empty_entry_name(self, program):
        """A filename without letters needs --name."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("1234.bin").write_bytes(program)

            result = runner.invoke(main, ["-i", "1234.bin", "-b", "4000", "-s", "4000"])

            assert result.exit_code == 1
            assert "--name" in result.output
            assert not Path("1234.cas").exists()

            result = runner.invoke(main, ["-i", "1234.bin", "-n", "demo", "-b", "4000", "-s", "4000"])
            assert result.exit_code == 0, f"Pack failed: {result.output}"

    def test_path_conflict(self, program):
        """Packing prog.cas without -o would overwrite the input."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.cas").write_bytes(program)

            result = runner.invoke(main, ["-i", "prog.cas", "-b", "4000", "-s", "4000"])

            assert result.exit_code == 1
            assert "same" in result.output
            assert Path("prog.cas").read_bytes() == program

    def test_capacity_exceeded(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("big.bin").write_bytes(bytes(257))

            result = runner.invoke(main, ["-i", "big.bin", "-b", "FF00", "-s", "FF00"])

            assert result.exit_code == 1
            assert "at most 256 bytes" in result.output
            assert not Path("big.cas").exists()

    def test_empty_input(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("empty.bin").write_bytes(b"")

            result = runner.invoke(main, ["-i", "empty.bin", "-b", "4000", "-s", "4000"])

            assert result.exit_code == 1
            assert "empty" in result.output

    def test_unwritable_output(self, program):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.bin").write_bytes(program)

            result = runner.invoke(main, [
                "-i", "prog.bin", "-o", "missing/prog.cas", "-b", "4000", "-s", "4000",
            ])

            assert result.exit_code == 1
            assert "Failed to write" in result.output

    def test_invalid_hex(self, program):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.bin").write_bytes(program)

            result = runner.invoke(main, ["-i", "prog.bin", "-b", "zz", "-s", "4000"])

            assert result.exit_code == 2
            assert "Invalid address" in result.output

    def test_address_too_large(self, program):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.bin").write_bytes(program)

            result = runner.invoke(main, ["-i", "prog.bin", "-b", "4000", "-s", "10000"])

            assert result.exit_code == 2

    def test_missing_mandatory_option(self, program):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.bin").write_bytes(program)

            result = runner.invoke(main, ["-i", "prog.bin", "-s", "4000"])

            assert result.exit_code == 2
            assert "--base" in result.output

    def test_missing_input_file(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["-i", "nothing.bin", "-b", "4000", "-s", "4000"])

            assert result.exit_code == 2

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self):
        result = CliRunner().invoke(main, ["-h"])
        assert result.exit_code == 0
        assert "--base" in result.output
