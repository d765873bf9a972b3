"""Tests for FileContext — load, queries, mutation, atomic write."""

import os
import stat
from pathlib import Path

import pytest

from gli_editor.buffer import FileContext, LineEnding
from gli_editor.errors import (
    InvalidArgumentsError,
    InvalidEncodingError,
    LineOutOfBoundsError,
    MissingFileError,
    PermissionDeniedError,
    WriteFailureError,
)
from gli_editor.patterns import BlankLine, Comment, Fingerprint, Invalid


class TestLoad:
    def test_classifies_every_line(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        assert ctx.total_lines == 6
        kinds = [type(line.pattern_type) for line in ctx.lines]
        assert kinds == [Comment, Fingerprint, BlankLine, Fingerprint, Invalid, Fingerprint]

    def test_path_is_absolute(self, sample_ignore_file: Path, monkeypatch):
        monkeypatch.chdir(sample_ignore_file.parent)
        ctx = FileContext.load(".gitleaksignore")
        assert ctx.file_path.is_absolute()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(MissingFileError):
            FileContext.load(tmp_path / "nope")

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / ".gitleaksignore"
        path.write_bytes(b"ok:rule:1\n\xff\xfe bad\n")
        with pytest.raises(InvalidEncodingError):
            FileContext.load(path)

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    def test_permission_denied(self, sample_ignore_file: Path):
        sample_ignore_file.chmod(0)
        try:
            with pytest.raises(PermissionDeniedError):
                FileContext.load(sample_ignore_file)
        finally:
            sample_ignore_file.chmod(stat.S_IRUSR | stat.S_IWUSR)

    def test_empty_file(self, write_ignore_file):
        ctx = FileContext.load(write_ignore_file(""))
        assert ctx.total_lines == 0
        assert ctx.line_ending is LineEnding.LF

    def test_no_trailing_newline(self, write_ignore_file):
        ctx = FileContext.load(write_ignore_file("a:r:1\nb:r:2"))
        assert [line.content for line in ctx.lines] == ["a:r:1", "b:r:2"]


class TestLineEndingDetection:
    def test_lf(self, write_ignore_file):
        assert FileContext.load(write_ignore_file("a\nb\n")).line_ending is LineEnding.LF

    def test_crlf(self, write_ignore_file):
        ctx = FileContext.load(write_ignore_file("a\r\nb\r\n"))
        assert ctx.line_ending is LineEnding.CRLF
        assert [line.content for line in ctx.lines] == ["a", "b"]

    def test_crlf_wins_over_lf(self, write_ignore_file):
        assert FileContext.load(write_ignore_file("a\nb\r\n")).line_ending is LineEnding.CRLF

    def test_cr(self, write_ignore_file):
        ctx = FileContext.load(write_ignore_file("a\rb\r"))
        assert ctx.line_ending is LineEnding.CR
        assert [line.content for line in ctx.lines] == ["a", "b"]

    def test_single_line_defaults_to_lf(self, write_ignore_file):
        assert FileContext.load(write_ignore_file("only")).line_ending is LineEnding.LF


class TestQueries:
    def test_get_line_numbers_match(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        for n in range(1, ctx.total_lines + 1):
            line = ctx.get_line(n)
            assert line is not None
            assert line.line_number == n

    def test_get_line_out_of_range(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        assert ctx.get_line(0) is None
        assert ctx.get_line(7) is None

    def test_get_range(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        lines = ctx.get_range(2, 4)
        assert [line.line_number for line in lines] == [2, 3, 4]

    def test_get_range_empty_sentinel(self, write_ignore_file):
        ctx = FileContext.load(write_ignore_file(""))
        assert ctx.get_range(0, 0) == []

    def test_get_range_zero_bound(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        with pytest.raises(InvalidArgumentsError):
            ctx.get_range(0, 3)
        with pytest.raises(InvalidArgumentsError):
            ctx.get_range(2, 0)

    def test_get_range_overrun(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        with pytest.raises(LineOutOfBoundsError) as info:
            ctx.get_range(2, 9)
        assert info.value.requested == 9
        assert info.value.total == 6
        with pytest.raises(LineOutOfBoundsError):
            ctx.get_range(7, 8)

    def test_get_range_inverted(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        with pytest.raises(InvalidArgumentsError):
            ctx.get_range(4, 2)

    def test_window(self, sample_ignore_file: Path):
        window = FileContext.load(sample_ignore_file).window(2, 3)
        assert window.start_line == 2
        assert window.size == 2
        assert window.get_line(3).content == ""
        assert window.get_line(4) is None


class TestMutation:
    def test_update_reclassifies(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        ctx.update_line(5, "fixed.py:rule:9")
        line = ctx.get_line(5)
        assert line.line_number == 5
        assert line.content == "fixed.py:rule:9"
        assert isinstance(line.pattern_type, Fingerprint)

    def test_update_out_of_bounds(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        with pytest.raises(LineOutOfBoundsError):
            ctx.update_line(0, "x")
        with pytest.raises(LineOutOfBoundsError):
            ctx.update_line(7, "x")
        assert ctx.total_lines == 6

    def test_delete_renumbers(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        removed = ctx.delete_line(2)
        assert isinstance(removed.pattern_type, Fingerprint)
        assert ctx.total_lines == 5
        assert [line.line_number for line in ctx.lines] == [1, 2, 3, 4, 5]
        assert ctx.get_line(2).content == ""

    def test_delete_every_line(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        while ctx.total_lines:
            ctx.delete_line(1)
            assert all(line.line_number == i for i, line in enumerate(ctx.lines, 1))
        assert ctx.get_range(0, 0) == []

    def test_delete_out_of_bounds(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        with pytest.raises(LineOutOfBoundsError):
            ctx.delete_line(10)
        assert ctx.total_lines == 6


class TestWriteAtomic:
    @pytest.mark.parametrize("ending", ["\n", "\r\n", "\r"])
    def test_round_trip(self, write_ignore_file, ending):
        original = ending.join(["# c", "a.py:rule:1", "", "b.py:rule:2"]) + ending
        path = write_ignore_file(original)
        ctx = FileContext.load(path)
        ctx.update_line(3, "c.py:rule:3")
        ctx.write_atomic()

        reloaded = FileContext.load(path)
        assert [line.content for line in reloaded.lines] == [line.content for line in ctx.lines]
        assert reloaded.line_ending is ctx.line_ending
        assert path.read_bytes() == ending.join(["# c", "a.py:rule:1", "c.py:rule:3", "b.py:rule:2"]).encode() + ending.encode()

    def test_stray_lf_in_crlf_file_preserved(self, write_ignore_file):
        path = write_ignore_file("a\r\nb\nc\r\n")
        ctx = FileContext.load(path)
        ctx.write_atomic()
        assert path.read_bytes() == b"a\r\nb\nc\r\n"

    def test_refreshes_mtime(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        os.utime(sample_ignore_file, ns=(1_000_000_000, 1_000_000_000))
        ctx.refresh_metadata()
        ctx.update_line(1, "# changed")
        ctx.write_atomic()
        assert ctx.last_modified_ns == sample_ignore_file.stat().st_mtime_ns
        assert ctx.check_for_external_modifications() is False

    def test_no_temp_files_left(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        ctx.write_atomic()
        assert sorted(p.name for p in sample_ignore_file.parent.iterdir()) == [".gitleaksignore"]

    @pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
    def test_preserves_mode(self, sample_ignore_file: Path):
        sample_ignore_file.chmod(0o640)
        ctx = FileContext.load(sample_ignore_file)
        ctx.write_atomic()
        assert stat.S_IMODE(sample_ignore_file.stat().st_mode) == 0o640

    def test_missing_parent_directory(self, sample_ignore_file: Path, tmp_path: Path):
        ctx = FileContext.load(sample_ignore_file)
        ctx.file_path = tmp_path / "gone" / ".gitleaksignore"
        with pytest.raises(WriteFailureError):
            ctx.write_atomic()

    def test_failed_rename_leaves_original(self, sample_ignore_file: Path, monkeypatch):
        before = sample_ignore_file.read_bytes()
        ctx = FileContext.load(sample_ignore_file)
        ctx.update_line(1, "# new")

        def boom(src, dst):
            raise OSError("disk on fire")

        monkeypatch.setattr("gli_editor.buffer.file_context.os.replace", boom)
        with pytest.raises(WriteFailureError) as info:
            ctx.write_atomic()
        assert "disk on fire" in info.value.cause
        assert sample_ignore_file.read_bytes() == before
        assert sorted(p.name for p in sample_ignore_file.parent.iterdir()) == [".gitleaksignore"]


class TestExternalModification:
    def test_unchanged(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        assert ctx.check_for_external_modifications() is False

    def test_changed(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        st = sample_ignore_file.stat()
        os.utime(sample_ignore_file, ns=(st.st_atime_ns, st.st_mtime_ns + 5_000_000_000))
        assert ctx.check_for_external_modifications() is True

    def test_deleted(self, sample_ignore_file: Path):
        ctx = FileContext.load(sample_ignore_file)
        sample_ignore_file.unlink()
        assert ctx.check_for_external_modifications() is True
