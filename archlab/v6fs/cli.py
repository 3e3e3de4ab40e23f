"""Command that inspects a Version 6 disk image and dumps checksums."""

from __future__ import annotations

import getopt
import sys
from typing import TextIO

from .checksum import checksum_hex, checksum_inode, checksum_path, checksums_match
from .disk import SECTOR_SIZE, DiskImage
from .filesystem import INODES_PER_SECTOR, ROOT_INUMBER, FileSystemError, UnixFileSystem
from .structs import DIRENT_SIZE, DirEntry

MAX_ENTRIES = 10000
_MAX_PATH = 1024
_PROG = "diskimageaccess"


def get_dir_entries(
    fs: UnixFileSystem, inumber: int, max_entries: int = MAX_ENTRIES
) -> list[DirEntry]:
    """Return up to ``max_entries`` entries of the directory ``inumber``."""
    inode = fs.iget(inumber)
    if not inode.is_allocated() or not inode.is_directory():
        raise FileSystemError(f"inode {inumber} is not an allocated directory")
    if max_entries < 1:
        raise FileSystemError("max_entries must be at least 1")
    size = inode.size()
    if size % DIRENT_SIZE:
        raise FileSystemError(f"directory {inumber} has a size of {size} bytes")

    entries: list[DirEntry] = []
    num_blocks = (size + SECTOR_SIZE - 1) // SECTOR_SIZE
    for bno in range(num_blocks):
        data = fs.get_block(inumber, bno)
        usable = len(data) - len(data) % DIRENT_SIZE
        for offset in range(0, usable, DIRENT_SIZE):
            entries.append(DirEntry.from_bytes(data[offset : offset + DIRENT_SIZE]))
            if len(entries) >= max_entries:
                return entries
    return entries


def print_directory(fs: UnixFileSystem, pathname: str, out: TextIO, err: TextIO) -> None:
    """Write every entry of the directory at ``pathname``."""
    try:
        inumber = fs.lookup(pathname)
    except FileSystemError:
        err.write(f"Can't find {pathname}\n")
        return
    try:
        entries = get_dir_entries(fs, inumber)
    except FileSystemError:
        err.write(f"Can't read entries from {pathname}\n")
        return
    for entry in entries:
        out.write(f"Direntry {pathname} Name {entry.name} Inumber {entry.inumber}\n")


def dump_inode_checksums(fs: UnixFileSystem, out: TextIO, err: TextIO) -> None:
    """Write the checksum of every allocated inode."""
    for inumber in range(1, fs.superblock.isize * INODES_PER_SECTOR):
        try:
            inode = fs.iget(inumber)
        except FileSystemError:
            err.write(f"Can't read inode {inumber} \n")
            return
        if not inode.is_allocated():
            continue
        try:
            digest = checksum_inode(fs, inumber)
        except FileSystemError:
            err.write(f"Inode {inumber} can't compute chksum\n")
            continue
        out.write(
            f"Inode {inumber} mode 0x{inode.mode:x} size {inode.size()} "
            f"checksum {checksum_hex(digest)}\n"
        )


def _dump_path_and_children(
    fs: UnixFileSystem, pathname: str, inumber: int, out: TextIO, err: TextIO
) -> None:
    try:
        inode = fs.iget(inumber)
    except FileSystemError:
        err.write(f"Can't read inode {inumber} \n")
        return
    try:
        by_inode = checksum_inode(fs, inumber)
        by_path = checksum_path(fs, pathname)
    except FileSystemError:
        err.write(f"Can't checksum inode {inumber} path {pathname}\n")
        return
    if not checksums_match(by_inode, by_path):
        err.write(f"Pathname checksum of {pathname} differs from inode {inumber}\n")
        return
    out.write(
        f"Path {pathname} {inumber} mode 0x{inode.mode:x} size {inode.size()} "
        f"checksum {checksum_hex(by_path)}\n"
    )

    prefix = "" if pathname == "/" else pathname
    if not inode.is_directory():
        return
    if len(prefix) > _MAX_PATH - 16:
        err.write(f"Too deep of directories {prefix}\n")
    try:
        entries = get_dir_entries(fs, inumber)
    except FileSystemError:
        err.write("Error reading directory\n")
        return
    for entry in entries:
        if entry.name in (".", ".."):
            continue
        _dump_path_and_children(fs, f"{prefix}/{entry.name}", entry.inumber, out, err)


def dump_pathname_checksums(fs: UnixFileSystem, out: TextIO, err: TextIO) -> None:
    """Write the checksum of every file reachable from the root directory."""
    _dump_path_and_children(fs, "/", ROOT_INUMBER, out, err)


def _usage(err: TextIO) -> int:
    err.write(f"Usage: {_PROG} <options> diskimagePath\n")
    err.write("where <options> can be:\n")
    err.write("-q     don't print extra info\n")
    err.write("-i     print all inode checksums\n")
    err.write("-p     print all pathname checksums\n")
    return 1


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    out, err = sys.stdout, sys.stderr
    try:
        opts, rest = getopt.gnu_getopt(args, "iqp")
    except getopt.GetoptError:
        return _usage(err)
    if len(rest) != 1:
        return _usage(err)
    flags = {opt for opt, _ in opts}
    diskpath = rest[0]

    try:
        disk = DiskImage(diskpath, True)
    except OSError:
        err.write(f"Can't open diskimagePath {diskpath}\n")
        return 1

    with disk:
        try:
            fs = UnixFileSystem(disk)
        except FileSystemError as exc:
            err.write(f"{exc}\n")
            err.write("Failed to initialize unix filesystem\n")
            return 1

        if "-q" not in flags:
            size = disk.size()
            sb = fs.superblock
            out.write(f"Disk {diskpath} is {size} bytes ({size // 1024} KB)\n")
            out.write(f"Superblock s_isize {sb.isize}\n")
            out.write(f"Superblock s_fsize {sb.fsize}\n")
            out.write(f"Superblock s_nfree {sb.nfree}\n")
            out.write(f"Superblock s_ninode {sb.ninode}\n")

        if "-i" in flags:
            dump_inode_checksums(fs, out, err)
        if "-p" in flags:
            dump_pathname_checksums(fs, out, err)
    return 0