"""The simulated machine's memory: three little-endian regions."""

from __future__ import annotations

from dataclasses import dataclass, field

MEM_DATA_START = 0x10000000
MEM_DATA_SIZE = 0x00100000
MEM_TEXT_START = 0x00400000
MEM_TEXT_SIZE = 0x00100000
MEM_STACK_START = 0xFFFFFFFC
MEM_STACK_SIZE = 0x00100000

_WORD_MASK = 0xFFFFFFFF


@dataclass
class MemoryRegion:
    """A zero-filled block of memory mapped at ``start``."""

    start: int
    size: int
    # Three spare bytes let a word access starting in the last bytes succeed.
    data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.data = bytearray(self.size + 3)

    def contains(self, address: int) -> bool:
        """Tell whether ``address`` falls inside this region."""
        return self.start <= address < self.start + self.size


class Memory:
    """Text, data and stack regions; other addresses read as zero."""

    def __init__(self) -> None:
        self.regions = (
            MemoryRegion(MEM_TEXT_START, MEM_TEXT_SIZE),
            MemoryRegion(MEM_DATA_START, MEM_DATA_SIZE),
            MemoryRegion(MEM_STACK_START, MEM_STACK_SIZE),
        )

    def _locate(self, address: int) -> tuple[MemoryRegion, int] | None:
        for region in self.regions:
            if region.contains(address):
                return region, address - region.start
        return None

    def read_32(self, address: int) -> int:
        """Read a little-endian 32-bit word; unmapped addresses give 0."""
        found = self._locate(address)
        if found is None:
            return 0
        region, offset = found
        return int.from_bytes(region.data[offset : offset + 4], "little")

    def write_32(self, address: int, value: int) -> None:
        """Write a little-endian 32-bit word; unmapped addresses are ignored."""
        found = self._locate(address)
        if found is None:
            return
        region, offset = found
        region.data[offset : offset + 4] = (value & _WORD_MASK).to_bytes(4, "little")