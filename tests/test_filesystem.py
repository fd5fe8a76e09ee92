"""Tests for the local file handler."""

import pytest

from mockhttp import BodyFileNotFoundError, BodyFileReadError, LocalFileSystemHandler
from mockhttp.handlers.filesystem import FileSystemHandler


class TestLocalFileSystemHandler:
    """Test resolving body files from disk."""

    def test_relative_to_root(self, tmp_path):
        """Test relative paths resolve against the root."""
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "a.json").write_bytes(b"{}")
        handler = LocalFileSystemHandler(tmp_path)
        assert handler.read_response_body_as_file("data/a.json") == b"{}"

    def test_absolute_path(self, tmp_path):
        """Test absolute paths ignore the root."""
        target = tmp_path / "abs.bin"
        target.write_bytes(b"\x01\x02")
        handler = LocalFileSystemHandler(tmp_path / "elsewhere")
        assert handler.read_response_body_as_file(str(target)) == b"\x01\x02"

    def test_default_root_is_cwd(self, tmp_path, monkeypatch):
        """Test the working directory is the default root."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "here.txt").write_bytes(b"here")
        assert LocalFileSystemHandler().read_response_body_as_file("here.txt") == b"here"

    @pytest.mark.parametrize("path", ["nope.txt", ""])
    def test_missing(self, tmp_path, path):
        """Test a missing file raises BodyFileNotFoundError."""
        handler = LocalFileSystemHandler(tmp_path)
        with pytest.raises(BodyFileNotFoundError):
            handler.read_response_body_as_file(path)

    def test_unreadable(self, tmp_path):
        """Test a path that cannot be read raises BodyFileReadError."""
        (tmp_path / "dir").mkdir()
        handler = LocalFileSystemHandler(tmp_path)
        with pytest.raises(BodyFileReadError) as exc_info:
            handler.read_response_body_as_file("dir")
        assert exc_info.value.path.endswith("dir")
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_abstract(self):
        """Test the base handler cannot be instantiated."""
        with pytest.raises(TypeError):
            FileSystemHandler()  # type: ignore[abstract]
