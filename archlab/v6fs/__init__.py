"""Reader for Unix Version 6 disk images and file checksums."""

__all__ = ["checksum", "cli", "disk", "filesystem", "structs"]