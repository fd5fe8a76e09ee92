"""File access used to resolve file-backed response bodies."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path

from typing_extensions import override

from ..exceptions import BodyFileNotFoundError, BodyFileReadError


class FileSystemHandler(ABC):
    """Resolves a :class:`~mockhttp.body.data.FileBody` path to bytes."""

    @abstractmethod
    def read_response_body_as_file(self, path: str) -> bytes:
        """
        Read the file behind a response body.

        Raises a :class:`~mockhttp.exceptions.BodyFileError` subclass when the
        file cannot be read. Callers do not retry.
        """
        raise NotImplementedError(f"{self.__class__.__name__}.read_response_body_as_file not implemented")


class LocalFileSystemHandler(FileSystemHandler):
    """
    Reads body files from the local disk.

    Relative paths are resolved against ``root`` (the working directory when
    no root is given); absolute paths are used as-is.
    """

    def __init__(self, root: str | os.PathLike[str] | None = None):
        self._root = Path(root) if root is not None else None

    @property
    def root(self) -> Path:
        return self._root if self._root is not None else Path.cwd()

    def resolve(self, path: str) -> Path:
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.root / candidate

    @override
    def read_response_body_as_file(self, path: str) -> bytes:
        if not path:
            raise BodyFileNotFoundError(path)
        resolved = self.resolve(path)
        try:
            return resolved.read_bytes()
        except FileNotFoundError as e:
            raise BodyFileNotFoundError(str(resolved)) from e
        except OSError as e:
            raise BodyFileReadError(str(resolved)) from e
