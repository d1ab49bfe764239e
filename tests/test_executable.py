"""Tests for executable file creation."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator
from pathlib import Path

import pytest

from pyhusky.executable import (
    EXECUTABLE_MODE,
    DefaultExecutableFileFactory,
    PosixExecutableFileFactory,
    default_file_factory,
)
from tests.helpers.repo import write_script

posix_only = pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")


def _mode(path: Path) -> int:
    return stat.S_IMODE(path.stat().st_mode)


@pytest.fixture
def strict_umask() -> Iterator[None]:
    previous = os.umask(0o077)
    try:
        yield
    finally:
        os.umask(previous)


@posix_only
class TestPosixCreate:
    """Tests for PosixExecutableFileFactory.create."""

    def test_new_file_is_executable(self, tmp_path: Path) -> None:
        path = tmp_path / "pre-commit"
        with PosixExecutableFileFactory().create(path) as f:
            f.write("#!/bin/sh\n")

        assert path.read_text(encoding="utf-8") == "#!/bin/sh\n"
        assert _mode(path) == EXECUTABLE_MODE

    def test_existing_file_is_truncated_and_made_executable(
        self, tmp_path: Path
    ) -> None:
        path = write_script(tmp_path / "pre-push", "old content\n" * 10, mode=0o644)

        with PosixExecutableFileFactory().create(path) as f:
            f.write("new\n")

        assert path.read_text(encoding="utf-8") == "new\n"
        assert _mode(path) == EXECUTABLE_MODE

    def test_mode_ignores_umask(self, tmp_path: Path, strict_umask: None) -> None:
        path = tmp_path / "post-merge"
        with PosixExecutableFileFactory().create(path) as f:
            f.write("")

        assert _mode(path) == EXECUTABLE_MODE

    def test_writes_unix_newlines(self, tmp_path: Path) -> None:
        path = tmp_path / "pre-commit"
        with PosixExecutableFileFactory().create(path) as f:
            f.write("a\nb\n")

        assert path.read_bytes() == b"a\nb\n"

    def test_escaped_bytes_are_written_back(self, tmp_path: Path) -> None:
        path = tmp_path / "pre-commit"
        with PosixExecutableFileFactory().create(path) as f:
            f.write("echo '\udce9'\n")

        assert path.read_bytes() == b"echo '\xe9'\n"

    def test_missing_parent_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            PosixExecutableFileFactory().create(tmp_path / "missing" / "pre-commit")


@posix_only
class TestPosixIsExecutable:
    """Tests for PosixExecutableFileFactory.is_executable."""

    @pytest.mark.parametrize(
        "mode,expected",
        [
            (0o755, True),
            (0o555, True),
            (0o777, True),
            (0o744, False),
            (0o754, False),
            (0o644, False),
            (0o311, False),
        ],
    )
    def test_requires_read_execute_for_everyone(
        self, tmp_path: Path, mode: int, expected: bool
    ) -> None:
        path = write_script(tmp_path / "hook", "echo hi\n", mode=mode)
        assert PosixExecutableFileFactory().is_executable(path) is expected

    def test_directory_is_not_executable(self, tmp_path: Path) -> None:
        directory = tmp_path / "dir"
        directory.mkdir()
        os.chmod(directory, 0o755)
        assert PosixExecutableFileFactory().is_executable(directory) is False

    def test_symlink_is_not_a_regular_file(self, tmp_path: Path) -> None:
        target = write_script(tmp_path / "target", "echo hi\n")
        link = tmp_path / "link"
        link.symlink_to(target)
        assert PosixExecutableFileFactory().is_executable(link) is False

    def test_missing_path(self, tmp_path: Path) -> None:
        assert PosixExecutableFileFactory().is_executable(tmp_path / "nope") is False


class TestDefaultFactory:
    """Tests for DefaultExecutableFileFactory."""

    def test_create_writes_file(self, tmp_path: Path) -> None:
        path = tmp_path / "pre-commit"
        with DefaultExecutableFileFactory().create(path) as f:
            f.write("#!/bin/sh\necho hi\n")

        assert path.read_bytes() == b"#!/bin/sh\necho hi\n"

    def test_create_truncates(self, tmp_path: Path) -> None:
        path = tmp_path / "pre-commit"
        path.write_text("x" * 100, encoding="utf-8")
        with DefaultExecutableFileFactory().create(path) as f:
            f.write("y")

        assert path.read_text(encoding="utf-8") == "y"

    def test_create_writes_escaped_bytes_back(self, tmp_path: Path) -> None:
        path = tmp_path / "pre-commit"
        with DefaultExecutableFileFactory().create(path) as f:
            f.write("echo '\udce9'\n")

        assert path.read_bytes() == b"echo '\xe9'\n"

    def test_any_regular_file_is_executable(self, tmp_path: Path) -> None:
        path = tmp_path / "hook"
        path.write_text("echo hi\n", encoding="utf-8")
        assert DefaultExecutableFileFactory().is_executable(path) is True

    def test_directory_is_not_executable(self, tmp_path: Path) -> None:
        assert DefaultExecutableFileFactory().is_executable(tmp_path) is False


class TestDefaultFileFactory:
    """Tests for default_file_factory selection."""

    def test_posix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(os, "name", "posix")
        assert isinstance(default_file_factory(), PosixExecutableFileFactory)

    def test_other_platforms(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(os, "name", "nt")
        assert isinstance(default_file_factory(), DefaultExecutableFileFactory)
