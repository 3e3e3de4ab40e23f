import struct

import pytest

from archlab.v6fs.structs import (
    DIRENT_SIZE,
    INODE_SIZE,
    SUPERBLOCK_SIZE,
    DirEntry,
    Inode,
    Mode,
    Superblock,
)


def _inode(mode=0, size0=0, size1=0, addr=(0,) * 8):
    return struct.pack("<H4BH8H2H2H", mode, 2, 3, 4, size0, size1, *addr, 5, 6, 7, 8)


def test_structure_sizes_match_sector_layout():
    assert DIRENT_SIZE == 16
    assert len(DirEntry(1, "a").to_bytes()) == DIRENT_SIZE

    raw_inode = _inode(Mode.IALLOC, 0, 32)
    assert INODE_SIZE == 32
    assert len(raw_inode) == INODE_SIZE
    assert Inode.from_bytes(raw_inode).size() == 32

    assert SUPERBLOCK_SIZE == 512
    sector = struct.pack("<3H", 5, 6, 7) + b"\0" * (SUPERBLOCK_SIZE - 6)
    sb = Superblock.from_bytes(sector)
    assert (sb.isize, sb.fsize, sb.nfree) == (5, 6, 7)


def test_superblock_from_bytes():
    free = list(range(100, 200))
    inodes = list(range(300, 400))
    data = struct.pack(
        "<3H100HH100H4B2H96x", 7, 900, 42, *free, 11, *inodes, 1, 0, 1, 0, 1234, 5678
    )
    sb = Superblock.from_bytes(data)
    assert (sb.isize, sb.fsize, sb.nfree, sb.ninode) == (7, 900, 42, 11)
    assert sb.free == tuple(free)
    assert sb.inode == tuple(inodes)
    assert (sb.flock, sb.ilock, sb.fmod, sb.ronly) == (1, 0, 1, 0)
    assert sb.time == (1234, 5678)


def test_superblock_too_short():
    with pytest.raises(ValueError):
        Superblock.from_bytes(b"\0" * 100)


def test_inode_fields():
    addr = (10, 11, 12, 13, 14, 15, 16, 17)
    ino = Inode.from_bytes(_inode(Mode.IALLOC | Mode.IFDIR, 0, 600, addr))
    assert ino.addr == addr
    assert (ino.nlink, ino.uid, ino.gid) == (2, 3, 4)
    assert ino.atime == (5, 6)
    assert ino.mtime == (7, 8)
    assert ino.size() == 600
    assert ino.is_allocated()
    assert ino.is_directory()
    assert not ino.is_large()


def test_inode_size_uses_high_byte():
    ino = Inode.from_bytes(_inode(size0=1, size1=0))
    assert ino.size() == 65536


def test_inode_block_special_is_not_directory():
    ino = Inode.from_bytes(_inode(Mode.IALLOC | Mode.IFBLK | Mode.ILARG))
    assert not ino.is_directory()
    assert ino.is_large()


def test_inode_unallocated():
    ino = Inode.from_bytes(_inode(Mode.IFDIR))
    assert not ino.is_allocated()


def test_inode_too_short():
    with pytest.raises(ValueError):
        Inode.from_bytes(b"\0" * 10)


def test_direntry_round_trip():
    entry = DirEntry(17, "hello.txt")
    data = entry.to_bytes()
    assert len(data) == DIRENT_SIZE
    assert DirEntry.from_bytes(data) == entry


def test_direntry_full_length_name():
    entry = DirEntry(3, "abcdefghijklmn")
    assert DirEntry.from_bytes(entry.to_bytes()).name == "abcdefghijklmn"


def test_direntry_wire_format():
    data = struct.pack("<H14s", 9, b"dir")
    assert DirEntry.from_bytes(data) == DirEntry(9, "dir")
    assert DirEntry(9, "dir").to_bytes() == data


def test_direntry_name_too_long():
    with pytest.raises(ValueError):
        DirEntry(1, "abcdefghijklmno").to_bytes()