"""Sector-level access to a disk image file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

SECTOR_SIZE = 512


class DiskImage:
    """A disk image file read and written in whole sectors."""

    def __init__(self, path: str | os.PathLike[str], read_only: bool = True) -> None:
        self.path = Path(path)
        self.read_only = read_only
        self._file: BinaryIO = open(self.path, "rb" if read_only else "r+b")

    def size(self) -> int:
        """Return the size of the image in bytes."""
        return self._file.seek(0, os.SEEK_END)

    def _seek(self, sector: int) -> None:
        if sector < 0:
            raise ValueError(f"negative sector number {sector}")
        self._file.seek(sector * SECTOR_SIZE)

    def read_sector(self, sector: int) -> bytes:
        """Read one sector; the result is shorter than a sector near the end."""
        self._seek(sector)
        return self._file.read(SECTOR_SIZE)

    def write_sector(self, sector: int, data: bytes) -> int:
        """Write exactly one sector and return the number of bytes written."""
        if len(data) != SECTOR_SIZE:
            raise ValueError(f"sector data must be {SECTOR_SIZE} bytes, got {len(data)}")
        self._seek(sector)
        written = self._file.write(bytes(data))
        self._file.flush()
        return written

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> DiskImage:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()