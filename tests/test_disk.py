import pytest

from archlab.v6fs.disk import SECTOR_SIZE, DiskImage


@pytest.fixture
def image_path(tmp_path):
    path = tmp_path / "disk.img"
    path.write_bytes(b"a" * SECTOR_SIZE + b"b" * SECTOR_SIZE + b"c" * 100)
    return path


def test_size_matches_file(image_path):
    with DiskImage(image_path) as disk:
        assert disk.size() == image_path.stat().st_size


def test_read_sector_contents(image_path):
    with DiskImage(image_path) as disk:
        assert disk.read_sector(0) == b"a" * SECTOR_SIZE
        assert disk.read_sector(1) == b"b" * SECTOR_SIZE


def test_read_partial_and_past_end(image_path):
    with DiskImage(image_path) as disk:
        assert disk.read_sector(2) == b"c" * 100
        assert disk.read_sector(10) == b""


def test_negative_sector_rejected(image_path):
    with DiskImage(image_path) as disk:
        with pytest.raises(ValueError):
            disk.read_sector(-1)


def test_write_then_read_round_trip(image_path):
    data = bytes(range(256)) * 2
    with DiskImage(image_path, read_only=False) as disk:
        assert disk.write_sector(1, data) == SECTOR_SIZE
        assert disk.read_sector(1) == data
    with DiskImage(image_path) as disk:
        assert disk.read_sector(1) == data
        assert disk.read_sector(0) == b"a" * SECTOR_SIZE


def test_write_wrong_size_rejected(image_path):
    with DiskImage(image_path, read_only=False) as disk:
        with pytest.raises(ValueError):
            disk.write_sector(0, b"short")


def test_write_read_only_fails(image_path):
    with DiskImage(image_path) as disk:
        with pytest.raises(OSError):
            disk.write_sector(0, b"z" * SECTOR_SIZE)
    assert image_path.read_bytes()[:SECTOR_SIZE] == b"a" * SECTOR_SIZE


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        DiskImage(tmp_path / "nope.img")


def test_closed_after_context(image_path):
    with DiskImage(image_path) as disk:
        pass
    with pytest.raises(ValueError):
        disk.read_sector(0)