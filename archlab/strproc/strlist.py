"""A list of typed string nodes that can be joined by type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, TextIO

_MAX_TYPE_VALUE = 0xFF


def str_concat(a: str, b: str) -> str:
    """Return a new string made of ``a`` followed by ``b``."""
    return a + b


@dataclass
class StringProcNode:
    """One node: a small unsigned type tag and a hash string."""

    type: int
    hash: str

    def __post_init__(self) -> None:
        if not 0 <= self.type <= _MAX_TYPE_VALUE:
            raise ValueError(f"node type must be between 0 and {_MAX_TYPE_VALUE}, got {self.type}")


class StringProcList:
    """An ordered list of nodes; new nodes go at the end."""

    def __init__(self) -> None:
        self._nodes: list[StringProcNode] = []

    @property
    def first(self) -> StringProcNode | None:
        return self._nodes[0] if self._nodes else None

    @property
    def last(self) -> StringProcNode | None:
        return self._nodes[-1] if self._nodes else None

    def add_node(self, type: int, hash: str) -> StringProcNode:
        """Append a node with the given type and hash and return it."""
        node = StringProcNode(type, hash)
        self._nodes.append(node)
        return node

    def concat(self, type: int, hash: str) -> str:
        """Return ``hash`` followed by the hashes of every node of ``type``, in order."""
        matching = "".join(node.hash for node in self._nodes if node.type == type)
        return str_concat(hash, matching)

    def __iter__(self) -> Iterator[StringProcNode]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def write_to(self, file: TextIO) -> None:
        """Write the length of the list and then one line per node."""
        file.write(f"List length: {len(self)}\n")
        for node in self._nodes:
            file.write(f"\tnode hash: {node.hash} | type: {node.type}\n")