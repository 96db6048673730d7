"""Tests for the dx7dump command line."""

import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from typer.testing import CliRunner

from dx7dump import __version__
from cli.app import app

from conftest import distinct_bank_payload, frame_bank, init_voice_packed

runner = CliRunner()


def write_bank(path: Path, payload: bytes) -> Path:
    path.write_bytes(frame_bank(payload))
    return path


class TestShow:
    """Test the show command."""

    def test_listing(self, bank_file):
        result = runner.invoke(app, ["show", str(bank_file)])

        assert result.exit_code == 0
        lines = [line for line in result.output.splitlines() if "| INIT VOICE |" in line]
        assert len(lines) == 32
        assert lines[0] == " 1 | INIT VOICE |"
        assert lines[31] == "32 | INIT VOICE |"
        assert "WARNING" not in result.output

    def test_compact_listing(self, bank_file):
        result = runner.invoke(app, ["show", str(bank_file), "-c"])

        assert result.exit_code == 0
        rows = [line for line in result.output.splitlines() if "INIT VOICE" in line]
        assert len(rows) == 8
        assert rows[0].startswith(" 1 | INIT VOICE |")
        assert "| INIT VOICE |     9 | INIT VOICE |" in rows[0]

    def test_hex_listing(self, bank_file):
        result = runner.invoke(app, ["show", str(bank_file), "-x"])

        assert result.exit_code == 0
        assert " 1 | INIT VOICE | 49 4E 49 54 20 56 4F 49 43 45" in result.output

    def test_patch_detail(self, bank_file):
        result = runner.invoke(app, ["show", str(bank_file), "-p", "1"])

        assert result.exit_code == 0
        assert "Voice-#: 1" in result.output
        assert 'Name: "INIT VOICE"' in result.output
        assert "Algorithm: 1" in result.output
        assert "Transpose: +0 (C3)" in result.output
        assert "Voice-#: 2" not in result.output

    def test_patch_out_of_range(self, bank_file):
        result = runner.invoke(app, ["show", str(bank_file), "-p", "33"])
        assert result.exit_code == 2

    def test_algorithm_32(self, tmp_path):
        payload = bytearray(init_voice_packed() * 32)
        payload[110] = 31
        path = write_bank(tmp_path / "alg.syx", bytes(payload))

        result = runner.invoke(app, ["show", str(path), "-p", "1"])

        assert result.exit_code == 0
        assert "Algorithm: 32" in result.output

    def test_algorithm_noise_bits_ignored(self, tmp_path):
        payload = bytearray(init_voice_packed() * 32)
        payload[110] = 31 | 0x60
        path = write_bank(tmp_path / "noise.syx", bytes(payload))

        result = runner.invoke(app, ["show", str(path), "-p", "1"])

        assert result.exit_code == 0
        assert "Algorithm: 32" in result.output
        assert "out of range" not in result.output

    def test_checksum_warning(self, bad_checksum_file):
        result = runner.invoke(app, ["show", str(bad_checksum_file)])

        assert result.exit_code == 0
        assert "WARNING: CHECKSUM FAILED" in result.output
        # Voices are listed anyway
        assert "32 | INIT VOICE |" in result.output
        assert not bad_checksum_file.with_name("broken.syx.ORIG").exists()

    def test_fix(self, bad_checksum_file):
        result = runner.invoke(app, ["show", str(bad_checksum_file), "--fix", "-y"])

        assert result.exit_code == 0
        assert "Fixed:" in result.output
        assert bad_checksum_file.with_name("broken.syx.ORIG").exists()

        again = runner.invoke(app, ["show", str(bad_checksum_file)])
        assert again.exit_code == 0
        assert "WARNING" not in again.output

    def test_fix_raw_bank(self, raw_bank_file):
        result = runner.invoke(app, ["show", str(raw_bank_file), "--fix", "-y"])

        assert result.exit_code == 0
        assert "headerless" in result.output
        assert raw_bank_file.stat().st_size == 4104

    def test_wrong_size(self, tmp_path):
        path = tmp_path / "short.syx"
        path.write_bytes(bytes(10))

        result = runner.invoke(app, ["show", str(path)])

        assert result.exit_code == 1
        assert "File too small (10 Bytes)" in result.output

    def test_missing_start(self, tmp_path, bank_sysex):
        path = tmp_path / "nostart.syx"
        path.write_bytes(b"\x00" + bank_sysex[1:])

        result = runner.invoke(app, ["show", str(path)])

        assert result.exit_code == 1
        assert "Did not find sysex start F0" in result.output

    def test_single_voice(self, single_voice_file):
        result = runner.invoke(app, ["show", str(single_voice_file)])

        assert result.exit_code == 0
        assert 'File is a Single Voice Dump: "INIT VOICE"' in result.output

    def test_single_voice_fix_leaves_file(self, tmp_path, single_sysex):
        data = bytearray(single_sysex)
        data[-2] = (data[-2] + 1) & 0x7F
        path = tmp_path / "voice.syx"
        path.write_bytes(bytes(data))

        result = runner.invoke(app, ["show", str(path), "--fix", "-y"])

        assert result.exit_code == 0
        assert "WARNING: CHECKSUM FAILED" in result.output
        assert "file left unchanged" in result.output
        assert "Fixed:" not in result.output
        assert path.read_bytes() == bytes(data)
        assert not path.with_name("voice.syx.ORIG").exists()

        result = runner.invoke(app, ["fix", str(path), "-y"])

        assert result.exit_code == 0
        assert "file left unchanged" in result.output
        assert path.read_bytes() == bytes(data)

    def test_errors_only_clean_file(self, bank_file):
        result = runner.invoke(app, ["show", str(bank_file), "-e"])

        assert result.exit_code == 0
        assert "INIT VOICE" not in result.output

    def test_find_dupes(self, tmp_path):
        payload = bytearray(distinct_bank_payload())
        payload[9 * 128 + 110] = 2
        path = write_bank(tmp_path / "dupes.syx", bytes(payload))

        result = runner.invoke(app, ["show", str(path), "-d"])

        assert result.exit_code == 0
        assert "Found duplicate: 3 = 10" in result.output

    def test_charset_from_environment(self, tmp_path):
        path = write_bank(tmp_path / "yen.syx", init_voice_packed(b"A\\B") * 32)

        result = runner.invoke(app, ["show", str(path)], env={"DX7DUMP_CHARSET": "ascii"})
        assert result.exit_code == 0
        assert " 1 | AYB        |" in result.output

        result = runner.invoke(app, ["show", str(path), "-u"], env={"DX7DUMP_CHARSET": "ascii"})
        assert result.exit_code == 0
        assert " 1 | A¥B        |" in result.output


class TestOtherCommands:
    """Test validate, fix, dupes, diff, dump and scan."""

    def test_validate_valid(self, bank_file):
        result = runner.invoke(app, ["validate", str(bank_file)])

        assert result.exit_code == 0
        assert "VALID" in result.output
        assert "INVALID" not in result.output

    def test_validate_strict(self, bad_checksum_file):
        assert runner.invoke(app, ["validate", str(bad_checksum_file)]).exit_code == 0
        assert runner.invoke(app, ["validate", str(bad_checksum_file), "--strict"]).exit_code == 1

    def test_validate_wrong_size(self, tmp_path):
        path = tmp_path / "short.syx"
        path.write_bytes(bytes(10))

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "INVALID" in result.output

    def test_fix_command(self, bad_checksum_file):
        result = runner.invoke(app, ["fix", str(bad_checksum_file), "-y", "--no-backup"])

        assert result.exit_code == 0
        assert not bad_checksum_file.with_name("broken.syx.ORIG").exists()

        again = runner.invoke(app, ["fix", str(bad_checksum_file)])
        assert again.exit_code == 0
        assert "Nothing to fix" in again.output

    def test_dupes(self, bank_file):
        result = runner.invoke(app, ["dupes", str(bank_file)])

        assert result.exit_code == 0
        assert "Found 496 duplicate pair(s)" in result.output

    def test_no_dupes(self, tmp_path):
        path = write_bank(tmp_path / "distinct.syx", distinct_bank_payload())

        result = runner.invoke(app, ["dupes", str(path)])

        assert result.exit_code == 0
        assert "No duplicates found" in result.output

    def test_diff(self, bank_file, tmp_path):
        other = write_bank(tmp_path / "distinct.syx", distinct_bank_payload())

        assert runner.invoke(app, ["diff", str(bank_file), str(bank_file)]).exit_code == 0

        result = runner.invoke(app, ["diff", str(bank_file), str(other)])
        assert result.exit_code == 1
        assert "Differences Found" in result.output

    def test_dump(self, bank_file):
        result = runner.invoke(app, ["dump", str(bank_file)])

        assert result.exit_code == 0
        assert "HEADER" in result.output
        assert "VOICE 32" in result.output
        assert "CHECKSUM" in result.output

    def test_dump_voice(self, bank_file):
        result = runner.invoke(app, ["dump", str(bank_file), "--voice", "2"])

        assert result.exit_code == 0
        assert "VOICE 02" in result.output
        assert "VOICE 01" not in result.output

    def test_scan(self, bank_file, bad_checksum_file):
        result = runner.invoke(app, ["scan", str(bank_file.parent)])

        assert result.exit_code == 0
        assert "2 file(s) scanned, 0 failed" in result.output

    def test_scan_errors_only(self, bank_file, bad_checksum_file):
        result = runner.invoke(app, ["scan", str(bank_file.parent), "-e"])

        assert result.exit_code == 0
        assert "broken.syx" in result.output
        assert "init.syx" not in result.output

    def test_scan_failure(self, bank_file):
        (bank_file.parent / "short.SYX").write_bytes(bytes(10))

        result = runner.invoke(app, ["scan", str(bank_file.parent)])

        assert result.exit_code == 1
        assert "2 file(s) scanned, 1 failed" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
