"""Tests for canonical framing and file repair."""

import sys
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dx7dump.formats.reader import DX7Reader, decode_dump
from dx7dump.formats.sysex import classify, verify
from dx7dump.formats.writer import DX7Writer, canonical_frame
from dx7dump.utils.validation import RepairError

from conftest import checksum


class TestCanonicalFrame:
    """Test building canonical dumps."""

    def test_bank(self, bank_payload, bank_sysex):
        assert canonical_frame(bank_payload) == bank_sysex

    def test_verifies_clean(self, bank_payload):
        data = canonical_frame(bank_payload)
        assert verify(data, classify(data)).issues == ()

    def test_checksum(self, bank_payload):
        assert canonical_frame(bank_payload)[-2] == checksum(bank_payload)

    def test_wrong_payload_size(self, bank_payload):
        with pytest.raises(ValueError):
            canonical_frame(bank_payload[:100])
        with pytest.raises(ValueError):
            canonical_frame(bank_payload + bytes(1))


class TestRepair:
    """Test writing repaired files."""

    def test_repair_with_backup(self, bad_checksum_file):
        original = bad_checksum_file.read_bytes()
        dump = DX7Reader.read(bad_checksum_file)

        result = DX7Writer.repair(dump, bad_checksum_file)

        backup = bad_checksum_file.with_name("broken.syx.ORIG")
        assert result.backup_path == backup
        assert backup.read_bytes() == original
        assert result.size == 4104

        repaired = DX7Reader.read(bad_checksum_file)
        assert repaired.issues == ()
        assert repaired.payload == dump.payload

    def test_repair_without_backup(self, bad_checksum_file):
        dump = DX7Reader.read(bad_checksum_file)

        result = DX7Writer.repair(dump, bad_checksum_file, backup=False)

        assert result.backup_path is None
        assert not bad_checksum_file.with_name("broken.syx.ORIG").exists()
        assert not DX7Reader.read(bad_checksum_file).fix_needed

    def test_repair_raw_bank(self, raw_bank_file, bank_sysex):
        dump = DX7Reader.read(raw_bank_file)

        result = DX7Writer.repair(dump, raw_bank_file)

        assert result.size == 4104
        assert raw_bank_file.read_bytes() == bank_sysex
        assert raw_bank_file.with_name("raw.syx.ORIG").stat().st_size == 4096

    def test_single_voice_not_rewritten(self, tmp_path, single_sysex):
        data = bytearray(single_sysex)
        data[-2] = (data[-2] + 1) & 0x7F
        path = tmp_path / "voice.syx"
        path.write_bytes(bytes(data))
        dump = DX7Reader.read(path)

        assert not dump.fix_needed
        with pytest.raises(RepairError):
            DX7Writer.repair(dump, path)

        assert path.read_bytes() == bytes(data)
        assert not path.with_name("voice.syx.ORIG").exists()

    def test_backup_rename_fails(self, bad_checksum_file, monkeypatch):
        original = bad_checksum_file.read_bytes()
        dump = DX7Reader.read(bad_checksum_file)

        def fail_rename(self, target):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(Path, "rename", fail_rename)

        with pytest.raises(RepairError) as exc_info:
            DX7Writer.repair(dump, bad_checksum_file)

        assert "File-fix aborted" in exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, OSError)
        # Nothing was written
        assert bad_checksum_file.read_bytes() == original

    def test_open_fails(self, tmp_path, bank_payload):
        target = tmp_path / "missing-dir" / "bank.syx"

        with pytest.raises(RepairError) as exc_info:
            DX7Writer.repair(decode_dump(bank_payload), target, backup=False)

        assert exc_info.value.reason.startswith("Can't open the file for writing")
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_backup_path_for(self):
        assert DX7Writer.backup_path_for("a/rom1a.syx") == Path("a/rom1a.syx.ORIG")
