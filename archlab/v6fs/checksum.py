"""SHA-1 checksums of files stored on a Version 6 file system."""

from __future__ import annotations

import hashlib

from .disk import SECTOR_SIZE
from .filesystem import FileSystemError, UnixFileSystem

CHECKSUM_SIZE = 20


def checksum_inode(fs: UnixFileSystem, inumber: int) -> bytes:
    """Return the SHA-1 digest of the contents of inode ``inumber``."""
    inode = fs.iget(inumber)
    if not inode.is_allocated():
        raise FileSystemError(f"inode {inumber} is not allocated")
    sha = hashlib.sha1()
    for offset in range(0, inode.size(), SECTOR_SIZE):
        sha.update(fs.get_block(inumber, offset // SECTOR_SIZE))
    return sha.digest()


def checksum_path(fs: UnixFileSystem, pathname: str) -> bytes:
    """Return the SHA-1 digest of the file at an absolute path."""
    return checksum_inode(fs, fs.lookup(pathname))


def checksum_hex(digest: bytes) -> str:
    """Render a checksum as lower-case hexadecimal."""
    return bytes(digest[:CHECKSUM_SIZE]).hex()


def checksums_match(first: bytes, second: bytes) -> bool:
    """Tell whether two checksums are the same."""
    return bytes(first[:CHECKSUM_SIZE]) == bytes(second[:CHECKSUM_SIZE])