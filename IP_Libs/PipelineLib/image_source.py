"""
Source handles for the image pipeline.

The pipeline never interprets URIs itself. A source is any object with an
open() method returning a fresh readable binary stream; each stage that needs
bytes (bounds pass, pixel pass, metadata pass) opens its own stream.

Classes:
    ImageSource: Protocol implemented by every source handle
    FileSource: Source backed by a file on disk
    BytesSource: Source backed by in-memory encoded bytes

Functions:
    as_source: Coerce a path, bytes, or existing source into an ImageSource
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Protocol, Union, runtime_checkable


@runtime_checkable
class ImageSource(Protocol):
    def open(self) -> BinaryIO:
        """Return a new readable binary stream positioned at the start."""
        ...

    def describe(self) -> str:
        """Return a short description used in log and error messages."""
        ...


@dataclass(frozen=True)
class FileSource:
    path: Path

    def open(self) -> BinaryIO:
        return open(self.path, "rb")

    def describe(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class BytesSource:
    data: bytes
    name: str = "<bytes>"

    def open(self) -> BinaryIO:
        return io.BytesIO(self.data)

    def describe(self) -> str:
        return f"{self.name} ({len(self.data)} bytes)"


SourceLike = Union[ImageSource, str, Path, bytes, bytearray]


def as_source(source: Any) -> ImageSource:
    """
    Coerce a source-like value into an ImageSource.

    Args:
        source: An ImageSource, a filesystem path (str or Path),
                or encoded image bytes

    Returns:
        An ImageSource

    Raises:
        TypeError: If the value cannot be used as a source
    """
    if isinstance(source, (str, Path)):
        return FileSource(Path(source))

    if isinstance(source, (bytes, bytearray)):
        return BytesSource(bytes(source))

    if isinstance(source, ImageSource):
        return source

    raise TypeError(f"Expected path, bytes or ImageSource, got {type(source)}")
