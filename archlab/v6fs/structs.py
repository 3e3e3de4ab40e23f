"""On-disk structures of the Version 6 Unix file system."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass

_SUPERBLOCK = struct.Struct("<3H100HH100H4B2H96x")
_INODE = struct.Struct("<H4BH8H2H2H")
_DIRENT = struct.Struct("<H14s")

SUPERBLOCK_SIZE = _SUPERBLOCK.size
INODE_SIZE = _INODE.size
DIRENT_SIZE = _DIRENT.size
DIRENT_NAME_SIZE = 14


class Mode(enum.IntFlag):
    """Bits of an inode's mode word."""

    IALLOC = 0o100000
    IFMT = 0o60000
    IFDIR = 0o40000
    IFCHR = 0o20000
    IFBLK = 0o60000
    ILARG = 0o10000
    ISUID = 0o4000
    ISGID = 0o2000
    ISVTX = 0o1000
    IREAD = 0o400
    IWRITE = 0o200
    IEXEC = 0o100


def _require(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"{what} needs {size} bytes, got {len(data)}")


@dataclass(frozen=True)
class Superblock:
    """The file system superblock."""

    isize: int
    fsize: int
    nfree: int
    free: tuple[int, ...]
    ninode: int
    inode: tuple[int, ...]
    flock: int
    ilock: int
    fmod: int
    ronly: int
    time: tuple[int, int]

    @classmethod
    def from_bytes(cls, data: bytes) -> Superblock:
        _require(data, SUPERBLOCK_SIZE, "superblock")
        f = _SUPERBLOCK.unpack_from(data)
        return cls(
            isize=f[0],
            fsize=f[1],
            nfree=f[2],
            free=tuple(f[3:103]),
            ninode=f[103],
            inode=tuple(f[104:204]),
            flock=f[204],
            ilock=f[205],
            fmod=f[206],
            ronly=f[207],
            time=(f[208], f[209]),
        )


@dataclass(frozen=True)
class Inode:
    """An on-disk inode."""

    mode: int
    nlink: int
    uid: int
    gid: int
    size0: int
    size1: int
    addr: tuple[int, ...]
    atime: tuple[int, int]
    mtime: tuple[int, int]

    @classmethod
    def from_bytes(cls, data: bytes) -> Inode:
        _require(data, INODE_SIZE, "inode")
        f = _INODE.unpack_from(data)
        return cls(
            mode=f[0],
            nlink=f[1],
            uid=f[2],
            gid=f[3],
            size0=f[4],
            size1=f[5],
            addr=tuple(f[6:14]),
            atime=(f[14], f[15]),
            mtime=(f[16], f[17]),
        )

    def size(self) -> int:
        """File size in bytes, stored as a 24-bit number."""
        return (self.size0 << 16) | self.size1

    def is_allocated(self) -> bool:
        return bool(self.mode & int(Mode.IALLOC))

    def is_directory(self) -> bool:
        return (self.mode & int(Mode.IFMT)) == int(Mode.IFDIR)

    def is_large(self) -> bool:
        return bool(self.mode & int(Mode.ILARG))


@dataclass(frozen=True)
class DirEntry:
    """A directory entry: an inode number and a name of up to 14 bytes."""

    inumber: int
    name: str

    @classmethod
    def from_bytes(cls, data: bytes) -> DirEntry:
        _require(data, DIRENT_SIZE, "directory entry")
        inumber, raw = _DIRENT.unpack_from(data)
        return cls(inumber, raw.split(b"\0", 1)[0].decode("latin-1"))

    def to_bytes(self) -> bytes:
        encoded = self.name.encode("latin-1")
        if len(encoded) > DIRENT_NAME_SIZE:
            raise ValueError(f"name {self.name!r} is longer than {DIRENT_NAME_SIZE} bytes")
        return _DIRENT.pack(self.inumber, encoded)