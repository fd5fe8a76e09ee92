"""Collaborators the response mapper delegates to."""

from .filesystem import FileSystemHandler, LocalFileSystemHandler

__all__ = [
    "FileSystemHandler",
    "LocalFileSystemHandler",
]
