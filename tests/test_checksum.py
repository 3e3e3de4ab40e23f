import hashlib
import struct

import pytest

from archlab.v6fs.checksum import (
    checksum_hex,
    checksum_inode,
    checksum_path,
    checksums_match,
)
from archlab.v6fs.filesystem import FileSystemError, UnixFileSystem

SECTOR = 512
DIR_MODE = 0o100000 | 0o40000
FILE_MODE = 0o100000


def _inode(mode, size, addr0):
    addr = [addr0] + [0] * 7
    return struct.pack("<H4BH8H2H2H", mode, 1, 0, 0, size >> 16, size & 0xFFFF, *addr, 0, 0, 0, 0)


def _dirent(inumber, name):
    return struct.pack("<H14s", inumber, name.encode())


ROOT_ENTRIES = b"".join(
    [_dirent(1, "."), _dirent(1, ".."), _dirent(2, "hello.txt"), _dirent(3, "sub")]
)
SUB_ENTRIES = b"".join([_dirent(3, "."), _dirent(1, ".."), _dirent(4, "a")])


def _build_image():
    sectors = [bytearray(SECTOR) for _ in range(7)]
    struct.pack_into("<H", sectors[0], 0, 0o407)
    struct.pack_into("<HH", sectors[1], 0, 1, 7)
    inodes = b"".join(
        [
            _inode(DIR_MODE, len(ROOT_ENTRIES), 3),
            _inode(FILE_MODE, 11, 4),
            _inode(DIR_MODE, len(SUB_ENTRIES), 5),
            _inode(FILE_MODE, 3, 6),
        ]
    )
    sectors[2][: len(inodes)] = inodes
    sectors[3][: len(ROOT_ENTRIES)] = ROOT_ENTRIES
    sectors[4][:11] = b"hello world"
    sectors[5][: len(SUB_ENTRIES)] = SUB_ENTRIES
    sectors[6][:3] = b"abc"
    return b"".join(sectors)


class _MemDisk:
    def __init__(self, data):
        self.data = data

    def read_sector(self, sector):
        return self.data[sector * SECTOR : (sector + 1) * SECTOR]


@pytest.fixture
def fs():
    return UnixFileSystem(_MemDisk(_build_image()))


def test_checksum_of_regular_file(fs):
    assert checksum_inode(fs, 2) == hashlib.sha1(b"hello world").digest()


def test_checksum_of_directory_covers_entries(fs):
    assert checksum_inode(fs, 1) == hashlib.sha1(ROOT_ENTRIES).digest()


def test_checksum_by_path_matches_inode(fs):
    assert checksum_path(fs, "/sub/a") == checksum_inode(fs, 4)
    assert checksum_path(fs, "/") == checksum_inode(fs, 1)


def test_unallocated_inode_raises(fs):
    with pytest.raises(FileSystemError):
        checksum_inode(fs, 5)


def test_invalid_inumber_raises(fs):
    with pytest.raises(FileSystemError):
        checksum_inode(fs, 0)


def test_missing_path_raises(fs):
    with pytest.raises(FileSystemError):
        checksum_path(fs, "/nothing")


def test_hex_round_trip(fs):
    digest = checksum_inode(fs, 2)
    text = checksum_hex(digest)
    assert len(text) == 40
    assert bytes.fromhex(text) == digest


def test_checksums_match(fs):
    assert checksums_match(checksum_inode(fs, 2), checksum_path(fs, "/hello.txt"))
    assert not checksums_match(checksum_inode(fs, 2), checksum_inode(fs, 4))