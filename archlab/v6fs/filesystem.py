"""Read access to a Version 6 Unix file system on a disk image."""

from __future__ import annotations

import struct
from typing import Protocol

from .disk import SECTOR_SIZE
from .structs import DIRENT_NAME_SIZE, DIRENT_SIZE, INODE_SIZE, DirEntry, Inode, Superblock

BOOTBLOCK_SECTOR = 0
SUPERBLOCK_SECTOR = 1
INODE_START_SECTOR = 2
ROOT_INUMBER = 1
BOOTBLOCK_MAGIC_NUM = 0o407

INODES_PER_SECTOR = SECTOR_SIZE // INODE_SIZE
PTRS_PER_BLOCK = SECTOR_SIZE // 2
_DIRECT_ADDRS = 8
_INDIRECT_ADDRS = 7
_MAX_PATH = 1024

_POINTERS = struct.Struct(f"<{PTRS_PER_BLOCK}H")


class FileSystemError(Exception):
    """Raised when the file system cannot satisfy a request."""


class SectorReader(Protocol):
    def read_sector(self, sector: int) -> bytes: ...


class UnixFileSystem:
    """A mounted Version 6 file system read through a disk image."""

    def __init__(self, disk: SectorReader) -> None:
        boot = disk.read_sector(BOOTBLOCK_SECTOR)
        if len(boot) != SECTOR_SIZE:
            raise FileSystemError("Error reading bootblock")
        (magic,) = struct.unpack_from("<H", boot)
        if magic != BOOTBLOCK_MAGIC_NUM:
            raise FileSystemError(f"Bad magic number on disk(0x{magic:x})")
        raw = disk.read_sector(SUPERBLOCK_SECTOR)
        if len(raw) != SECTOR_SIZE:
            raise FileSystemError("Error reading superblock")
        self.disk = disk
        self.superblock = Superblock.from_bytes(raw)

    def _read_sector(self, sector: int) -> bytes:
        try:
            data = self.disk.read_sector(sector)
        except (OSError, ValueError) as exc:
            raise FileSystemError(f"cannot read sector {sector}: {exc}") from exc
        if len(data) != SECTOR_SIZE:
            raise FileSystemError(f"short read of sector {sector}")
        return data

    def _pointers(self, sector: int) -> tuple[int, ...]:
        return _POINTERS.unpack(self._read_sector(sector))

    def iget(self, inumber: int) -> Inode:
        """Fetch inode number ``inumber`` (numbered from 1)."""
        if inumber < 1:
            raise FileSystemError(f"invalid inode number {inumber}")
        index = inumber - 1
        data = self._read_sector(INODE_START_SECTOR + index // INODES_PER_SECTOR)
        offset = (index % INODES_PER_SECTOR) * INODE_SIZE
        return Inode.from_bytes(data[offset : offset + INODE_SIZE])

    def index_lookup(self, inode: Inode, block_num: int) -> int:
        """Map a file block index to the disk sector holding it."""
        if block_num < 0:
            raise FileSystemError(f"invalid block index {block_num}")

        if not inode.is_large():
            if block_num >= _DIRECT_ADDRS:
                raise FileSystemError(f"block {block_num} beyond a small file")
            return inode.addr[block_num]

        if block_num < _INDIRECT_ADDRS * PTRS_PER_BLOCK:
            indirect = inode.addr[block_num // PTRS_PER_BLOCK]
            if indirect == 0:
                raise FileSystemError(f"no indirect block for block {block_num}")
            return self._pointers(indirect)[block_num % PTRS_PER_BLOCK]

        outer, inner = divmod(block_num - _INDIRECT_ADDRS * PTRS_PER_BLOCK, PTRS_PER_BLOCK)
        if outer >= PTRS_PER_BLOCK:
            raise FileSystemError(f"block {block_num} beyond the largest file")
        double_indirect = inode.addr[_INDIRECT_ADDRS]
        if double_indirect == 0:
            raise FileSystemError(f"no double indirect block for block {block_num}")
        indirect = self._pointers(double_indirect)[outer]
        if indirect == 0:
            raise FileSystemError(f"no indirect block for block {block_num}")
        return self._pointers(indirect)[inner]

    def get_block(self, inumber: int, block_num: int) -> bytes:
        """Return the valid bytes of one block of a file; empty past its end."""
        inode = self.iget(inumber)
        data = self._read_sector(self.index_lookup(inode, block_num))
        remaining = inode.size() - block_num * SECTOR_SIZE
        if remaining <= 0:
            return b""
        return data[: min(remaining, SECTOR_SIZE)]

    def find_name(self, name: str, dir_inumber: int) -> DirEntry:
        """Find ``name`` in the directory ``dir_inumber``."""
        self.iget(dir_inumber)
        wanted = name[:DIRENT_NAME_SIZE]
        block_num = 0
        while True:
            try:
                data = self.get_block(dir_inumber, block_num)
            except FileSystemError:
                break
            if not data:
                break
            for offset in range(0, len(data) - DIRENT_SIZE + 1, DIRENT_SIZE):
                entry = DirEntry.from_bytes(data[offset : offset + DIRENT_SIZE])
                if entry.name == wanted:
                    return entry
            block_num += 1
        raise FileSystemError(f"{name!r} not found in directory {dir_inumber}")

    def lookup(self, pathname: str) -> int:
        """Resolve an absolute path to its inode number."""
        if not pathname or not pathname.startswith("/"):
            raise FileSystemError(f"not an absolute path: {pathname!r}")
        inumber = ROOT_INUMBER
        for component in pathname[: _MAX_PATH - 1].split("/"):
            if component:
                inumber = self.find_name(component, inumber).inumber
        return inumber